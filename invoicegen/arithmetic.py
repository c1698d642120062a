"""Derived money values of an invoice.

Every renderer calls these; nothing here rounds. Rounding happens only when a
value is formatted for display.
"""

from typing import Iterable, NamedTuple

from .models import InvoiceRecord, LineItem


class Totals(NamedTuple):
    subtotal: float
    tax: float
    total: float


def line_total(item: LineItem) -> float:
    return item.qty * item.price


def subtotal(items: Iterable[LineItem]) -> float:
    return sum((line_total(it) for it in items), 0.0)


def tax_amount(sub: float, tax_rate: float) -> float:
    return sub * tax_rate / 100


def compute_totals(record: InvoiceRecord) -> Totals:
    sub = subtotal(record.line_items)
    tax = tax_amount(sub, record.tax_rate)
    return Totals(subtotal=sub, tax=tax, total=sub + tax)
