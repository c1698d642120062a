"""Tests for the Flask host.

Tests cover:
- health and catalog endpoints
- live preview payloads and error envelopes
- line item edits
- HTML/PDF downloads
"""

import pytest

from invoicegen.app import app
from invoicegen.models import default_invoice


@pytest.fixture
def client():
    app.config.update(TESTING=True)
    return app.test_client()


@pytest.fixture
def payload():
    return {"invoice": default_invoice().to_json_dict(), "template": "classic"}


def test_health(client):
    res = client.get("/health")
    assert res.status_code == 200
    assert res.get_json() == {"ok": True}


def test_index_page(client):
    res = client.get("/")
    assert res.status_code == 200
    body = res.get_data(as_text=True)
    assert "invoice-preview preview-classic" in body
    assert "Premium" in body


def test_templates(client):
    data = client.get("/api/templates").get_json()
    assert data["ok"] is True
    assert [t["id"] for t in data["templates"]][:3] == ["classic", "modern", "minimal"]
    assert len(data["templates"]) == 10


def test_default_invoice(client):
    data = client.get("/api/invoice/default").get_json()
    assert data["invoice"]["invoiceNumber"] == "INV-2526-035"


def test_preview(client, payload):
    payload["template"] = "premium"
    res = client.post("/api/preview", json=payload)
    assert res.status_code == 200
    data = res.get_json()
    assert data["ok"] is True
    assert "preview-premium" in data["preview_html"]
    assert data["totals"]["total_line"] == "26650.30 INR"


def test_preview_unknown_template(client, payload):
    payload["template"] = "fancy"
    res = client.post("/api/preview", json=payload)
    assert res.status_code == 400
    data = res.get_json()
    assert data["ok"] is False
    assert "fancy" in data["error"]


@pytest.mark.parametrize("missing", ["invoice", "template"])
def test_preview_missing_key(client, payload, missing):
    del payload[missing]
    res = client.post("/api/preview", json=payload)
    assert res.status_code == 400
    assert res.get_json()["error"] == "Missing key: " + missing


def test_preview_bad_json(client):
    res = client.post("/api/preview", data="not json", content_type="application/json")
    assert res.status_code == 400
    assert res.get_json()["ok"] is False


def test_preview_invalid_invoice(client, payload):
    payload["invoice"]["lineItems"] = [{"description": "no id"}]
    res = client.post("/api/preview", json=payload)
    assert res.status_code == 400
    assert res.get_json()["error"].startswith("Invalid invoice")


def test_garbage_numbers_still_preview(client, payload):
    payload["invoice"]["taxRate"] = "abc"
    data = client.post("/api/preview", json=payload).get_json()
    assert data["totals"]["total_line"] == "22585.00 INR"


def test_add_and_remove_line_item(client, payload):
    added = client.post("/api/line-items/add", json=payload).get_json()["invoice"]
    assert len(added["lineItems"]) == 3
    new_id = added["lineItems"][-1]["id"]

    res = client.post("/api/line-items/remove", json={"invoice": added, "template": "classic", "id": new_id})
    assert [it["id"] for it in res.get_json()["invoice"]["lineItems"]] == ["1", "2"]


def test_remove_requires_id(client, payload):
    res = client.post("/api/line-items/remove", json=payload)
    assert res.status_code == 400


def test_export_html(client, payload):
    res = client.post("/api/export/html", json=payload)
    assert res.status_code == 200
    assert res.mimetype == "text/html"
    assert "Invoice_INV-2526-035_classic.html" in res.headers["Content-Disposition"]
    assert "attachment" in res.headers["Content-Disposition"]
    assert res.data.startswith(b"<!DOCTYPE html>")


def test_export_pdf(client, payload):
    payload["template"] = "modern"
    res = client.post("/api/export/pdf", json=payload)
    assert res.status_code == 200
    assert res.mimetype == "application/pdf"
    assert "Invoice_INV-2526-035_modern.pdf" in res.headers["Content-Disposition"]
    assert res.data.startswith(b"%PDF")


def test_export_unknown_template(client, payload):
    payload["template"] = "fancy"
    res = client.post("/api/export/pdf", json=payload)
    assert res.status_code == 400


def test_export_can_save_copy(client, payload, _isolate_export_dir):
    client.post("/api/export/html?save=1", json=payload)
    assert (_isolate_export_dir / "Invoice_INV-2526-035_classic.html").exists()


def test_unexpected_error_is_500(client, payload, monkeypatch):
    import invoicegen.app as host

    def boom(record, template_id):
        raise RuntimeError("renderer exploded")

    monkeypatch.setattr(host, "export_markup", boom)
    res = client.post("/api/export/html", json=payload)
    assert res.status_code == 500
    assert res.get_json() == {"ok": False, "error": "renderer exploded"}


def test_unknown_route_is_json_404(client):
    res = client.get("/nope")
    assert res.status_code == 404
    assert res.get_json()["ok"] is False


def test_huge_numbers_still_preview(client, payload):
    payload["invoice"]["lineItems"][0]["qty"] = 10 ** 400
    res = client.post("/api/preview", json=payload)
    assert res.status_code == 200
    assert res.get_json()["totals"]["subtotal_line"] == "22085.00 INR"
