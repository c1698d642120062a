"""Display formatting and the view-model shared by the HTML, PDF and preview renderers."""

from datetime import date
from typing import Any, Dict

from .arithmetic import compute_totals, line_total
from .models import InvoiceRecord

MONTH_ABBR = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def fmt_money(value: float) -> str:
    s = f"{value:.2f}"
    # never show a signed zero
    return "0.00" if s == "-0.00" else s


def fmt_number(value: float) -> str:
    """Quantities and percentages: ``10`` rather than ``10.0``, ``2.5`` stays ``2.5``."""
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return repr(value)


def format_invoice_date(value: str) -> str:
    """``2026-01-29`` -> ``29, Jan 2026``; anything else is shown as typed."""
    try:
        d = date.fromisoformat((value or "").strip())
    except ValueError:
        return value or ""
    return f"{d.day}, {MONTH_ABBR[d.month - 1]} {d.year}"


def money_line(value: float, currency: str) -> str:
    return f"{fmt_money(value)} {currency}".rstrip()


def invoice_context(record: InvoiceRecord) -> Dict[str, Any]:
    """Everything a renderer prints, already formatted.

    The three renderers take their numbers from here and from nowhere else.
    """
    totals = compute_totals(record)
    currency = record.currency
    rate = fmt_number(record.tax_rate)

    items = [
        {
            "material_no": it.material_no,
            "description": it.description,
            "qty": fmt_number(it.qty),
            "unit": it.unit,
            "price": fmt_money(it.price),
            "amount": fmt_money(line_total(it)),
        }
        for it in record.line_items
    ]

    return {
        "vendor_name": record.vendor_name,
        "invoice_number": record.invoice_number,
        "invoice_date": format_invoice_date(record.invoice_date),
        "ref_po": record.ref_po,
        "currency": currency,
        "tax_rate": rate,
        "bill_to": {
            "company_name": record.bill_to.company_name,
            "address": record.bill_to.address,
        },
        "bank": {
            "bank_name": record.bank_details.bank_name,
            "account": record.bank_details.account,
            "swift": record.bank_details.swift,
        },
        "items": items,
        "totals": {
            "subtotal": fmt_money(totals.subtotal),
            "tax": fmt_money(totals.tax),
            "total": fmt_money(totals.total),
            "subtotal_line": money_line(totals.subtotal, currency),
            "tax_line": money_line(totals.tax, currency),
            "total_line": money_line(totals.total, currency),
            "tax_label": f"Tax ({rate}%)",
        },
    }
