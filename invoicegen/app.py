import io
from typing import Tuple

from flask import Flask, jsonify, render_template, request, send_file
from pydantic import ValidationError
from werkzeug.exceptions import HTTPException

from . import config
from .catalog import DEFAULT_TEMPLATE, get_template, list_templates
from .errors import InvoiceError, UnknownTemplateError
from .exporter import export_markup, export_paginated, save_artifact
from .formatting import invoice_context
from .logging_setup import configure_logging, get_logger
from .models import InvoiceRecord, add_line_item, default_invoice, remove_line_item
from .preview import PREVIEW_STYLE, render_preview

logger = get_logger("invoicegen.app")

app = Flask(__name__)
app.json.sort_keys = False

# ----------------------------
# Data schema expected from UI
# ----------------------------
REQUIRED_TOP_KEYS = ["invoice", "template"]


class PayloadError(InvoiceError):
    pass


def _read_payload() -> Tuple[InvoiceRecord, str]:
    payload = request.get_json(force=True, silent=True)
    if not isinstance(payload, dict):
        raise PayloadError("Invalid JSON body")
    for k in REQUIRED_TOP_KEYS:
        if k not in payload:
            raise PayloadError("Missing key: " + k)
    if not isinstance(payload["invoice"], dict):
        raise PayloadError("invoice must be an object")

    template_id = payload["template"]
    get_template(template_id)
    return InvoiceRecord.model_validate(payload["invoice"]), template_id


def _error(message: str, status: int):
    return jsonify(ok=False, error=message), status


@app.errorhandler(PayloadError)
def _bad_payload(e: PayloadError):
    return _error(str(e), 400)


@app.errorhandler(UnknownTemplateError)
def _unknown_template(e: UnknownTemplateError):
    return _error(str(e), 400)


@app.errorhandler(ValidationError)
def _invalid_invoice(e: ValidationError):
    return _error("Invalid invoice: " + "; ".join(
        ".".join(str(p) for p in err["loc"]) + ": " + err["msg"] for err in e.errors()
    ), 400)


@app.errorhandler(Exception)
def _unexpected(e: Exception):
    if isinstance(e, HTTPException):
        return _error(e.description or e.name, e.code or 500)
    logger.exception("request failed: %s %s", request.method, request.path)
    return _error(str(e), 500)


# ----------------------------
# Routes
# ----------------------------
@app.get("/")
def index():
    return render_template(
        "index.html",
        templates=list_templates(),
        default_template=DEFAULT_TEMPLATE,
        invoice=default_invoice().to_json_dict(),
        preview_style=PREVIEW_STYLE,
        preview_html=render_preview(default_invoice(), DEFAULT_TEMPLATE),
    )


@app.get("/health")
def health():
    return jsonify({"ok": True})


@app.get("/api/templates")
def api_templates():
    return jsonify(ok=True, templates=list_templates())


@app.get("/api/invoice/default")
def api_default_invoice():
    return jsonify(ok=True, invoice=default_invoice().to_json_dict())


@app.post("/api/preview")
def api_preview():
    record, template_id = _read_payload()
    return jsonify(
        ok=True,
        template=template_id,
        preview_html=str(render_preview(record, template_id)),
        totals=invoice_context(record)["totals"],
    )


@app.post("/api/line-items/add")
def api_add_line_item():
    record, _ = _read_payload()
    return jsonify(ok=True, invoice=add_line_item(record).to_json_dict())


@app.post("/api/line-items/remove")
def api_remove_line_item():
    record, _ = _read_payload()
    item_id = str(request.get_json(force=True, silent=True).get("id") or "")
    if not item_id:
        raise PayloadError("Missing key: id")
    return jsonify(ok=True, invoice=remove_line_item(record, item_id).to_json_dict())


def _send(artifact):
    if request.args.get("save") in {"1", "true", "yes"}:
        save_artifact(artifact)
    return send_file(
        io.BytesIO(artifact.content),
        mimetype=artifact.mimetype,
        as_attachment=True,
        download_name=artifact.filename,
    )


@app.post("/api/export/html")
def api_export_html():
    record, template_id = _read_payload()
    return _send(export_markup(record, template_id))


@app.post("/api/export/pdf")
def api_export_pdf():
    record, template_id = _read_payload()
    return _send(export_paginated(record, template_id))


def main() -> None:
    configure_logging(config.LOG_LEVEL)
    logger.info("serving on http://%s:%d", config.HOST, config.PORT)
    app.run(host=config.HOST, port=config.PORT)


if __name__ == "__main__":
    main()
