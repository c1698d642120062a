"""Shared fixtures.

Exports saved during a test land in that test's own temporary directory.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from invoicegen import config
from invoicegen.models import BankDetails, BillTo, InvoiceRecord, LineItem, default_invoice


@pytest.fixture(autouse=True)
def _isolate_export_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    export_dir = tmp_path / "exports"
    monkeypatch.setattr(config, "EXPORT_DIR", export_dir)
    return export_dir


@pytest.fixture
def record() -> InvoiceRecord:
    return default_invoice()


@pytest.fixture
def nasty_record() -> InvoiceRecord:
    """Markup-significant characters in every free-text field."""
    return InvoiceRecord(
        vendor_name="<b>Acme & Sons</b>",
        invoice_number="INV-<1>",
        invoice_date="2026-03-05",
        bill_to=BillTo(company_name="O'Reilly \"Media\"", address="Line 1\n<script>alert(1)</script>"),
        ref_po="PO&1",
        currency="EUR",
        line_items=[LineItem(id="a", material_no="<x>", description="a < b", qty=2, unit="KG", price=1.25)],
        tax_rate=10,
        bank_details=BankDetails(bank_name="B&B", account="<acct>", swift="S<1>"),
    )

