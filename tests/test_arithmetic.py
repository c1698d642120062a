import pytest

from invoicegen.arithmetic import Totals, compute_totals, line_total, subtotal, tax_amount
from invoicegen.models import InvoiceRecord, LineItem


def test_default_invoice_totals(record):
    totals = compute_totals(record)
    assert totals.subtotal == pytest.approx(22585.00)
    assert totals.tax == pytest.approx(4065.30)
    assert totals.total == pytest.approx(26650.30)


def test_line_total():
    assert line_total(LineItem(id="1", qty=3, price=2.5)) == 7.5


def test_subtotal_of_no_items_is_zero():
    assert subtotal([]) == 0.0
    assert compute_totals(InvoiceRecord()) == Totals(0.0, 0.0, 0.0)


def test_tax_amount():
    assert tax_amount(200, 18) == pytest.approx(36)
    assert tax_amount(200, 0) == 0


def test_total_is_subtotal_plus_tax():
    rec = InvoiceRecord(
        line_items=[LineItem(id="1", qty=3, price=0.1), LineItem(id="2", qty=1, price=0.2)],
        tax_rate=7.5,
    )
    totals = compute_totals(rec)
    assert totals.total == totals.subtotal + totals.tax


def test_negative_values_flow_through():
    rec = InvoiceRecord(line_items=[LineItem(id="1", qty=-1, price=100)], tax_rate=10)
    assert compute_totals(rec) == Totals(-100.0, -10.0, -110.0)


def test_garbage_numbers_count_as_zero():
    rec = InvoiceRecord.model_validate({"lineItems": [{"id": "1", "qty": "abc", "price": 5}], "taxRate": "x"})
    assert compute_totals(rec) == Totals(0.0, 0.0, 0.0)
