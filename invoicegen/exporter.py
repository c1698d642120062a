import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from . import config
from .catalog import get_template
from .errors import TemplateValidationError
from .logging_setup import get_logger
from .markup import check_self_contained, render_markup
from .models import InvoiceRecord, snapshot
from .pdf import render_pdf

logger = get_logger("invoicegen.exporter")


@dataclass(frozen=True)
class ExportArtifact:
    filename: str
    content: bytes
    mimetype: str


def export_filename(record: InvoiceRecord, template_id: str, ext: str) -> str:
    return f"Invoice_{record.invoice_number}_{template_id}.{ext}"


def export_markup(record: InvoiceRecord, template_id: str) -> ExportArtifact:
    get_template(template_id)
    snap = snapshot(record)
    html = render_markup(snap, template_id)
    errs = check_self_contained(html)
    if errs:
        raise TemplateValidationError(template_id, errs)
    artifact = ExportArtifact(export_filename(snap, template_id, "html"), html.encode("utf-8"), "text/html")
    logger.info("exported %s (%d bytes)", artifact.filename, len(artifact.content))
    return artifact


def export_paginated(record: InvoiceRecord, template_id: str, compress: Optional[bool] = None) -> ExportArtifact:
    get_template(template_id)
    snap = snapshot(record)
    data = render_pdf(snap, template_id, compress=compress)
    artifact = ExportArtifact(export_filename(snap, template_id, "pdf"), data, "application/pdf")
    logger.info("exported %s (%d bytes)", artifact.filename, len(artifact.content))
    return artifact


def disk_filename(name: str) -> str:
    """The artifact name with path separators made harmless."""
    name = name.replace("/", "_").replace("\\", "_").replace("\x00", "")
    return name.lstrip(".") or "invoice"


def save_artifact(artifact: ExportArtifact, directory: Optional[Path] = None) -> Path:
    """Write ``artifact`` into ``directory``; the final file appears only once complete."""
    out_dir = Path(directory) if directory is not None else config.EXPORT_DIR
    out_dir.mkdir(parents=True, exist_ok=True)
    target = out_dir / disk_filename(artifact.filename)

    fd, tmp = tempfile.mkstemp(dir=out_dir, prefix=".partial-", suffix=target.suffix)
    try:
        with os.fdopen(fd, "wb") as fh:
            fh.write(artifact.content)
        os.replace(tmp, target)
    except BaseException:
        if os.path.exists(tmp):
            os.unlink(tmp)
        raise
    logger.info("saved %s", target)
    return target
