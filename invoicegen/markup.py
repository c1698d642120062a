import re
from functools import lru_cache
from typing import List

from jinja2 import Environment, StrictUndefined, Template, select_autoescape

from .catalog import get_template
from .formatting import invoice_context
from .logging_setup import get_logger
from .models import InvoiceRecord, snapshot

logger = get_logger("invoicegen.markup")

# ----------------------------
# Jinja environment for rendering templates from strings
# ----------------------------
jinja_env = Environment(
    undefined=StrictUndefined,
    autoescape=select_autoescape(["html", "xml"], default_for_string=True),
)

COMMON_STYLE = (
    "<style>"
    "@page{size:A4;margin:14mm;}"
    "@media print{body{background:#fff!important;padding:0!important;min-height:0!important;}"
    ".invoice-container,.invoice{box-shadow:none!important;border-radius:0!important;}}"
    "*{margin:0;padding:0;box-sizing:border-box;}"
    ".pre{white-space:pre-line;}"
    ".text-right,.num{text-align:right;}"
    "table{width:100%;}"
    "</style>"
)

# ----------------------------
# Items table variants
# ----------------------------
# "split": unit in its own column; "folded": "<qty> <unit>" in one cell
ITEM_HEADINGS = {
    "standard": ("Material No.", "Description", "Qty", "Unit", "Price", "Total"),
    "short": ("Material", "Description", "Qty", "Unit", "Price", "Total"),
    "item": ("Item", "Description", "Qty", "Unit", "Price", "Total"),
    "amount": ("Material", "Description", "Quantity", "Unit", "Price", "Amount"),
}


def _items_table(layout: str = "split", headings: str = "standard", css_class: str = "items-table") -> str:
    mat, desc, qty, unit, price, total = ITEM_HEADINGS[headings]
    if layout == "folded":
        head = f"<th>{mat}</th><th>{desc}</th><th>{qty}</th>"
        qty_cells = "<td>{{ it.qty }} {{ it.unit|e }}</td>"
    else:
        head = f"<th>{mat}</th><th>{desc}</th><th>{qty}</th><th>{unit}</th>"
        qty_cells = "<td>{{ it.qty }}</td><td>{{ it.unit|e }}</td>"
    return (
        f"<table class='{css_class}'>"
        f"<thead><tr>{head}<th class='num'>{price}</th><th class='num'>{total}</th></tr></thead>"
        "<tbody>"
        "{% for it in items %}"
        "<tr><td>{{ it.material_no|e }}</td><td class='pre'>{{ it.description|e }}</td>" + qty_cells +
        "<td class='num'>{{ it.price }}</td><td class='num'>{{ it.amount }}</td></tr>"
        "{% endfor %}"
        "</tbody></table>"
    )


# ----------------------------
# Totals + bank blocks
# ----------------------------
TOTAL_LABELS = {
    "title": ("Subtotal", "Total"),
    "caps": ("SUBTOTAL", "TOTAL"),
    "mixed": ("Subtotal", "TOTAL"),
    "colon": ("Subtotal:", "Total:"),
    "due": ("Subtotal", "Amount Due"),
}


def _totals_block(wrapper: str = "totals", labels: str = "mixed", row_class: str = "total-row") -> str:
    sub_label, total_label = TOTAL_LABELS[labels]
    tax_label = "{{ totals.tax_label|e }}"
    if labels == "caps":
        tax_label = "{{ totals.tax_label|upper|e }}"
    elif labels == "colon":
        tax_label = "{{ totals.tax_label|e }}:"
    return (
        f"<div class='{wrapper}'>"
        f"<div class='{row_class}'><span>{sub_label}</span><span>{{{{ totals.subtotal_line|e }}}}</span></div>"
        f"<div class='{row_class}'><span>{tax_label}</span><span>{{{{ totals.tax_line|e }}}}</span></div>"
        f"<div class='{row_class} final'><span>{total_label}</span><span>{{{{ totals.total_line|e }}}}</span></div>"
        "</div>"
    )


BANK_LABELS = {
    "short": ("Bank", "Account", "SWIFT"),
    "long": ("Bank Name", "Account Number", "SWIFT Code"),
    "classic": ("Bank Name", "Account", "SWIFT"),
    "caps": ("BANK", "ACCOUNT", "SWIFT"),
}


def _bank_block(style: str = "inline", labels: str = "short", heading: str = "", css_class: str = "bank-details") -> str:
    bank, account, swift = BANK_LABELS[labels]
    title = f"<h3>{heading}</h3>" if heading else ""
    if style == "lines":
        body = (
            f"<p><strong>{bank}:</strong> {{{{ bank.bank_name|e }}}}<br>"
            f"<strong>{account}:</strong> {{{{ bank.account|e }}}}<br>"
            f"<strong>{swift}:</strong> {{{{ bank.swift|e }}}}</p>"
        )
    elif style == "plain":
        body = (
            f"<p>{bank}: {{{{ bank.bank_name|e }}}} | {account}: {{{{ bank.account|e }}}} | "
            f"{swift}: {{{{ bank.swift|e }}}}</p>"
        )
    else:
        body = (
            f"<p><strong>{bank}:</strong> {{{{ bank.bank_name|e }}}} | "
            f"<strong>{account}:</strong> {{{{ bank.account|e }}}} | "
            f"<strong>{swift}:</strong> {{{{ bank.swift|e }}}}</p>"
        )
    return f"<div class='{css_class}'>{title}{body}</div>"


BILL_TO = "<p><strong>{{ bill_to.company_name|e }}</strong><br><span class='pre'>{{ bill_to.address|e }}</span></p>"


def _document(style: str, body: str) -> str:
    return (
        "<!DOCTYPE html>\n<html lang='en'><head><meta charset='UTF-8'>"
        "<meta name='viewport' content='width=device-width, initial-scale=1.0'>"
        "<title>Invoice {{ invoice_number|e }}</title>"
        + COMMON_STYLE +
        "<style>" + style + "</style></head><body>" + body + "</body></html>\n"
    )


# ----------------------------
# Skins
# ----------------------------
def _classic() -> str:
    style = (
        "body{font-family:'Segoe UI',Tahoma,Geneva,Verdana,sans-serif;background:#f5f5f5;padding:20px;}"
        ".invoice-container{max-width:800px;margin:0 auto;background:#fff;padding:40px;box-shadow:0 2px 10px rgba(0,0,0,0.1);}"
        ".header{display:flex;justify-content:space-between;margin-bottom:30px;border-bottom:2px solid #333;padding-bottom:20px;}"
        ".company-info h1{font-size:14px;color:#666;margin-bottom:5px;}"
        ".invoice-title h2{font-size:28px;color:#333;text-align:right;}"
        ".invoice-meta{display:grid;grid-template-columns:1fr 1fr;gap:20px;margin-bottom:30px;}"
        ".meta-box{padding:15px;background:#f9f9f9;border-radius:4px;}"
        ".meta-box h3{font-size:12px;color:#666;text-transform:uppercase;margin-bottom:8px;}"
        ".meta-box p{font-size:14px;color:#333;line-height:1.5;}"
        ".meta-row{display:flex;justify-content:space-between;margin-top:10px;padding-top:10px;border-top:1px solid #ddd;}"
        ".items-table{border-collapse:collapse;margin-bottom:30px;}"
        ".items-table th{background:#333;color:#fff;padding:12px;text-align:left;font-size:12px;text-transform:uppercase;}"
        ".items-table th.num{text-align:right;}"
        ".items-table td{padding:12px;border-bottom:1px solid #ddd;font-size:14px;}"
        ".items-table tr:nth-child(even){background:#f9f9f9;}"
        ".totals-section{display:flex;justify-content:flex-end;margin-bottom:30px;}"
        ".totals{width:300px;}"
        ".total-row{display:flex;justify-content:space-between;padding:10px 0;border-bottom:1px solid #ddd;}"
        ".total-row.final{border-top:2px solid #333;border-bottom:2px solid #333;font-weight:bold;font-size:16px;}"
        ".bank-details{margin-top:40px;padding-top:20px;border-top:1px solid #ddd;}"
        ".bank-details h3{font-size:14px;color:#666;margin-bottom:10px;}"
        ".bank-details p{font-size:13px;color:#333;line-height:1.8;}"
    )
    body = (
        "<div class='invoice-container'>"
        "<div class='header'>"
        "<div class='company-info'><h1>{{ vendor_name|e }}</h1></div>"
        "<div class='invoice-title'><h2>INVOICE</h2></div>"
        "</div>"
        "<div class='invoice-meta'>"
        "<div class='meta-box'><h3>Bill To:</h3>" + BILL_TO + "</div>"
        "<div class='meta-box'>"
        "<div class='meta-row'><span>Invoice #</span><span><strong>{{ invoice_number|e }}</strong></span></div>"
        "<div class='meta-row'><span>Invoice Date</span><span>{{ invoice_date|e }}</span></div>"
        "<div class='meta-row'><span>Ref. PO</span><span>{{ ref_po|e }}</span></div>"
        "<div class='meta-row'><span>Currency</span><span>{{ currency|e }}</span></div>"
        "</div></div>"
        + _items_table("split", "standard") +
        "<div class='totals-section'>" + _totals_block("totals", "mixed") + "</div>"
        + _bank_block("lines", "classic", "Bank Details:") +
        "</div>"
    )
    return _document(style, body)


def _modern() -> str:
    style = (
        "body{font-family:'Helvetica Neue',Arial,sans-serif;background:linear-gradient(135deg,#667eea 0%,#764ba2 100%);padding:40px 20px;min-height:100vh;}"
        ".invoice-container{max-width:800px;margin:0 auto;background:#fff;border-radius:16px;padding:50px;box-shadow:0 20px 60px rgba(0,0,0,0.3);}"
        ".header{display:flex;justify-content:space-between;align-items:center;margin-bottom:40px;padding-bottom:30px;border-bottom:3px solid #667eea;}"
        ".vendor-name{font-size:18px;color:#667eea;font-weight:600;}"
        ".invoice-title{font-size:42px;color:#333;font-weight:300;letter-spacing:2px;}"
        ".invoice-meta{display:grid;grid-template-columns:1fr 1fr;gap:30px;margin-bottom:40px;}"
        ".bill-to-box{background:linear-gradient(135deg,#f5f7fa 0%,#c3cfe2 100%);padding:25px;border-radius:12px;}"
        ".bill-to-box h3{color:#667eea;font-size:12px;text-transform:uppercase;margin-bottom:10px;letter-spacing:1px;}"
        ".bill-to-box p{color:#666;}.bill-to-box strong{font-size:18px;color:#333;}"
        ".info-box{display:grid;grid-template-columns:1fr 1fr;gap:15px;}"
        ".info-item{background:#f8f9fa;padding:15px;border-radius:8px;border-left:4px solid #667eea;}"
        ".info-item label{display:block;font-size:11px;color:#888;text-transform:uppercase;margin-bottom:5px;}"
        ".info-item span{font-size:14px;color:#333;font-weight:500;}"
        ".items-table{border-collapse:separate;border-spacing:0;margin-bottom:30px;}"
        ".items-table th{background:#667eea;color:#fff;padding:15px;text-align:left;font-size:12px;text-transform:uppercase;letter-spacing:1px;}"
        ".items-table th.num{text-align:right;}"
        ".items-table th:first-child{border-radius:8px 0 0 0;}.items-table th:last-child{border-radius:0 8px 0 0;}"
        ".items-table td{padding:15px;border-bottom:1px solid #e0e0e0;font-size:14px;}"
        ".totals{background:linear-gradient(135deg,#667eea 0%,#764ba2 100%);color:#fff;padding:25px;border-radius:12px;margin-left:auto;width:350px;}"
        ".total-row{display:flex;justify-content:space-between;padding:10px 0;border-bottom:1px solid rgba(255,255,255,0.2);}"
        ".total-row.final{border-top:2px solid #fff;border-bottom:none;font-size:20px;font-weight:bold;margin-top:10px;padding-top:15px;}"
        ".bank-details{margin-top:40px;padding:25px;background:#f8f9fa;border-radius:12px;}"
        ".bank-details h3{color:#667eea;font-size:14px;margin-bottom:15px;}"
        ".bank-details p{line-height:2;color:#555;}"
    )
    body = (
        "<div class='invoice-container'>"
        "<div class='header'>"
        "<div class='vendor-name'>{{ vendor_name|e }}</div>"
        "<div class='invoice-title'>INVOICE</div>"
        "</div>"
        "<div class='invoice-meta'>"
        "<div class='bill-to-box'><h3>Bill To</h3>" + BILL_TO + "</div>"
        "<div class='info-box'>"
        "<div class='info-item'><label>Invoice #</label><span>{{ invoice_number|e }}</span></div>"
        "<div class='info-item'><label>Date</label><span>{{ invoice_date|e }}</span></div>"
        "<div class='info-item'><label>Ref. PO</label><span>{{ ref_po|e }}</span></div>"
        "<div class='info-item'><label>Currency</label><span>{{ currency|e }}</span></div>"
        "</div></div>"
        + _items_table("split", "standard") +
        _totals_block("totals", "mixed") +
        _bank_block("inline", "short", "Bank Details") +
        "</div>"
    )
    return _document(style, body)


def _minimal() -> str:
    style = (
        "body{font-family:-apple-system,BlinkMacSystemFont,'Segoe UI',Roboto,sans-serif;background:#fff;padding:60px;}"
        ".invoice-container{max-width:700px;margin:0 auto;}"
        ".header{margin-bottom:60px;}"
        ".vendor{font-size:12px;color:#999;text-transform:uppercase;letter-spacing:2px;margin-bottom:10px;}"
        ".invoice-num{font-size:48px;font-weight:200;color:#000;}"
        ".meta{display:flex;justify-content:space-between;margin-bottom:50px;}"
        ".bill-to{max-width:250px;}"
        ".bill-to h4{font-size:10px;color:#999;text-transform:uppercase;letter-spacing:2px;margin-bottom:10px;}"
        ".bill-to p{font-size:14px;line-height:1.6;color:#333;}"
        ".details{text-align:right;}"
        ".details p{font-size:13px;color:#666;margin-bottom:5px;}"
        ".details p strong{color:#000;margin-right:15px;}"
        ".items{border-collapse:collapse;margin-bottom:40px;}"
        ".items th{text-align:left;padding:15px 0;border-bottom:2px solid #000;font-size:11px;text-transform:uppercase;letter-spacing:1px;color:#999;font-weight:400;}"
        ".items th.num{text-align:right;}"
        ".items td{padding:20px 0;border-bottom:1px solid #eee;font-size:14px;}"
        ".totals{text-align:right;margin-bottom:50px;}"
        ".total-row{font-size:14px;color:#666;margin-bottom:10px;}"
        ".total-row span+span{margin-left:8px;}"
        ".total-row.final{font-size:24px;color:#000;font-weight:300;margin-top:20px;padding-top:20px;border-top:2px solid #000;}"
        ".bank{font-size:12px;color:#999;line-height:1.8;}.bank strong{color:#333;}"
    )
    body = (
        "<div class='invoice-container'>"
        "<div class='header'>"
        "<div class='vendor'>{{ vendor_name|e }}</div>"
        "<div class='invoice-num'>Invoice</div>"
        "</div>"
        "<div class='meta'>"
        "<div class='bill-to'><h4>Bill To</h4>" + BILL_TO + "</div>"
        "<div class='details'>"
        "<p><strong>#</strong>{{ invoice_number|e }}</p>"
        "<p><strong>Date</strong>{{ invoice_date|e }}</p>"
        "<p><strong>PO</strong>{{ ref_po|e }}</p>"
        "<p><strong>Currency</strong>{{ currency|e }}</p>"
        "</div></div>"
        + _items_table("folded", "item", "items") +
        _totals_block("totals", "title") +
        _bank_block("inline", "short", css_class="bank") +
        "</div>"
    )
    return _document(style, body)


def _professional() -> str:
    style = (
        "body{font-family:Georgia,serif;background:#f0f2f5;padding:30px;}"
        ".invoice-container{max-width:850px;margin:0 auto;background:#fff;padding:50px;box-shadow:0 4px 20px rgba(0,0,0,0.1);}"
        ".top-bar{background:#1a365d;color:#fff;padding:20px 50px;margin:-50px -50px 40px -50px;display:flex;justify-content:space-between;align-items:center;}"
        ".top-bar .vendor{font-size:16px;font-weight:600;}"
        ".top-bar .doc-type{font-size:24px;text-transform:uppercase;letter-spacing:3px;}"
        ".content-grid{display:grid;grid-template-columns:1fr 1fr;gap:40px;margin-bottom:40px;}"
        ".section{padding:25px;background:#f8fafc;border-left:4px solid #1a365d;}"
        ".section h3{font-size:12px;color:#1a365d;text-transform:uppercase;letter-spacing:1px;margin-bottom:15px;}"
        ".section p{font-size:15px;line-height:1.6;color:#333;}"
        ".info-grid{display:grid;grid-template-columns:repeat(4,1fr);gap:15px;margin-bottom:40px;}"
        ".info-card{background:#1a365d;color:#fff;padding:20px;text-align:center;}"
        ".info-card label{display:block;font-size:10px;text-transform:uppercase;opacity:0.7;margin-bottom:8px;}"
        ".info-card span{font-size:14px;font-weight:600;}"
        ".items-table{border-collapse:collapse;margin-bottom:30px;}"
        ".items-table th{background:#2d4a6f;color:#fff;padding:15px;text-align:left;font-size:12px;text-transform:uppercase;letter-spacing:1px;}"
        ".items-table th.num{text-align:right;}"
        ".items-table td{padding:15px;border-bottom:1px solid #e2e8f0;font-size:14px;}"
        ".items-table tr:nth-child(even){background:#f8fafc;}"
        ".totals-section{display:flex;justify-content:flex-end;}"
        ".totals{width:320px;background:#1a365d;color:#fff;padding:25px;}"
        ".total-row{display:flex;justify-content:space-between;padding:12px 0;border-bottom:1px solid rgba(255,255,255,0.2);font-size:14px;}"
        ".total-row.final{border-top:2px solid #fff;border-bottom:none;font-size:20px;font-weight:bold;margin-top:10px;}"
        ".bank-details{margin-top:40px;padding:25px;background:#f8fafc;border:1px solid #e2e8f0;}"
        ".bank-details h3{color:#1a365d;font-size:14px;margin-bottom:15px;}"
        ".bank-details p{font-size:13px;color:#555;line-height:2;}"
    )
    body = (
        "<div class='invoice-container'>"
        "<div class='top-bar'>"
        "<div class='vendor'>{{ vendor_name|e }}</div>"
        "<div class='doc-type'>Tax Invoice</div>"
        "</div>"
        "<div class='content-grid'>"
        "<div class='section'><h3>Bill To</h3>" + BILL_TO + "</div>"
        "<div class='section'><h3>Ship To</h3>" + BILL_TO + "</div>"
        "</div>"
        "<div class='info-grid'>"
        "<div class='info-card'><label>Invoice #</label><span>{{ invoice_number|e }}</span></div>"
        "<div class='info-card'><label>Date</label><span>{{ invoice_date|e }}</span></div>"
        "<div class='info-card'><label>Ref. PO</label><span>{{ ref_po|e }}</span></div>"
        "<div class='info-card'><label>Currency</label><span>{{ currency|e }}</span></div>"
        "</div>"
        + _items_table("split", "standard") +
        "<div class='totals-section'>" + _totals_block("totals", "mixed") + "</div>"
        + _bank_block("inline", "long", "Payment Information") +
        "</div>"
    )
    return _document(style, body)


def _elegant() -> str:
    style = (
        "body{font-family:'Playfair Display','Times New Roman',serif;background:linear-gradient(45deg,#f3e7e9 0%,#e3eeff 99%,#e3eeff 100%);padding:40px;min-height:100vh;}"
        ".invoice-container{max-width:800px;margin:0 auto;background:#fff;padding:60px;box-shadow:0 10px 40px rgba(0,0,0,0.1);position:relative;}"
        ".invoice-container::before{content:'';position:absolute;top:0;left:0;right:0;height:6px;background:linear-gradient(90deg,#d4af37,#f4e5c2,#d4af37);}"
        ".header{text-align:center;margin-bottom:50px;padding-bottom:30px;border-bottom:1px solid #e0d5c5;}"
        ".vendor-name{font-size:14px;color:#8b7355;text-transform:uppercase;letter-spacing:4px;margin-bottom:15px;}"
        ".invoice-title{font-size:52px;color:#2c2416;font-weight:400;font-style:italic;}"
        ".meta-section{display:flex;justify-content:space-between;margin-bottom:50px;}"
        ".bill-to h4{font-size:11px;color:#8b7355;text-transform:uppercase;letter-spacing:2px;margin-bottom:15px;font-family:sans-serif;}"
        ".bill-to p{font-size:16px;color:#2c2416;line-height:1.8;}.bill-to strong{font-size:18px;}"
        ".invoice-details{text-align:right;}"
        ".detail-item{margin-bottom:12px;}"
        ".detail-item label{font-size:10px;color:#8b7355;text-transform:uppercase;letter-spacing:1px;font-family:sans-serif;display:block;margin-bottom:3px;}"
        ".detail-item span{font-size:14px;color:#2c2416;}"
        ".items-table{border-collapse:collapse;margin-bottom:40px;}"
        ".items-table th{padding:20px 15px;text-align:left;font-size:11px;color:#8b7355;text-transform:uppercase;letter-spacing:2px;font-family:sans-serif;font-weight:400;border-bottom:2px solid #d4af37;}"
        ".items-table th.num{text-align:right;}"
        ".items-table td{padding:20px 15px;border-bottom:1px solid #f0e6d8;font-size:15px;color:#2c2416;}"
        ".totals-wrap{text-align:right;margin-bottom:40px;}"
        ".totals{display:inline-block;text-align:left;min-width:280px;}"
        ".total-row{display:flex;justify-content:space-between;padding:12px 0;font-size:15px;color:#5a4a3a;border-bottom:1px solid #f0e6d8;}"
        ".total-row.final{border-top:3px double #d4af37;border-bottom:3px double #d4af37;font-size:22px;color:#2c2416;font-weight:600;margin-top:10px;padding:15px 0;}"
        ".bank-details{text-align:center;padding-top:30px;border-top:1px solid #e0d5c5;}"
        ".bank-details h3{font-size:11px;color:#8b7355;text-transform:uppercase;letter-spacing:2px;margin-bottom:15px;font-family:sans-serif;font-weight:400;}"
        ".bank-details p{font-size:13px;color:#5a4a3a;line-height:2;}"
    )
    body = (
        "<div class='invoice-container'>"
        "<div class='header'>"
        "<div class='vendor-name'>{{ vendor_name|e }}</div>"
        "<div class='invoice-title'>Invoice</div>"
        "</div>"
        "<div class='meta-section'>"
        "<div class='bill-to'><h4>Bill To</h4>" + BILL_TO + "</div>"
        "<div class='invoice-details'>"
        "<div class='detail-item'><label>Invoice Number</label><span>{{ invoice_number|e }}</span></div>"
        "<div class='detail-item'><label>Date</label><span>{{ invoice_date|e }}</span></div>"
        "<div class='detail-item'><label>Reference PO</label><span>{{ ref_po|e }}</span></div>"
        "<div class='detail-item'><label>Currency</label><span>{{ currency|e }}</span></div>"
        "</div></div>"
        + _items_table("folded", "amount") +
        "<div class='totals-wrap'>" + _totals_block("totals", "title") + "</div>"
        + _bank_block("inline", "short", "Payment Details") +
        "</div>"
    )
    return _document(style, body)


def _corporate() -> str:
    style = (
        "body{font-family:'Segoe UI',Tahoma,Geneva,Verdana,sans-serif;background:#e8ecf1;padding:30px;}"
        ".invoice-container{max-width:900px;margin:0 auto;background:#fff;}"
        ".header{background:#0d1b2a;color:#fff;padding:40px;display:flex;justify-content:space-between;align-items:center;}"
        ".header-left .vendor{font-size:20px;font-weight:600;margin-bottom:5px;}"
        ".header-left .tagline{font-size:12px;opacity:0.7;}"
        ".header-right .doc-type{font-size:36px;font-weight:300;letter-spacing:5px;}"
        ".sub-header{background:#1b263b;color:#fff;padding:20px 40px;display:flex;justify-content:space-between;}"
        ".sub-header-item label{font-size:10px;text-transform:uppercase;opacity:0.6;display:block;margin-bottom:3px;}"
        ".sub-header-item span{font-size:14px;font-weight:500;}"
        ".content{padding:40px;}"
        ".address-section{display:grid;grid-template-columns:1fr 1fr;gap:40px;margin-bottom:40px;}"
        ".address-box h4{font-size:12px;color:#415a77;text-transform:uppercase;letter-spacing:1px;margin-bottom:15px;padding-bottom:10px;border-bottom:2px solid #415a77;}"
        ".address-box p{font-size:14px;line-height:1.8;color:#333;}"
        ".items-table{border-collapse:collapse;margin-bottom:30px;}"
        ".items-table th{background:#415a77;color:#fff;padding:15px;text-align:left;font-size:11px;text-transform:uppercase;letter-spacing:1px;}"
        ".items-table th.num{text-align:right;}"
        ".items-table td{padding:15px;border-bottom:1px solid #e0e6ed;font-size:14px;}"
        ".items-table tr:nth-child(even){background:#f5f7fa;}"
        ".totals-wrapper{display:flex;justify-content:flex-end;background:#f5f7fa;padding:30px;margin:0 -40px -40px -40px;}"
        ".totals{width:350px;}"
        ".total-row{display:flex;justify-content:space-between;padding:12px 0;border-bottom:1px solid #d0d8e0;font-size:14px;color:#555;}"
        ".total-row.final{border-top:3px solid #0d1b2a;border-bottom:none;font-size:22px;color:#0d1b2a;font-weight:700;margin-top:10px;padding-top:15px;}"
        ".bank-footer{background:#0d1b2a;color:#fff;padding:25px 40px;}"
        ".bank-footer h3{font-size:11px;text-transform:uppercase;opacity:0.6;margin-bottom:10px;}"
        ".bank-footer p{font-size:13px;opacity:0.9;}"
    )
    body = (
        "<div class='invoice-container'>"
        "<div class='header'>"
        "<div class='header-left'><div class='vendor'>{{ vendor_name|e }}</div>"
        "<div class='tagline'>Trusted Business Partner</div></div>"
        "<div class='header-right'><div class='doc-type'>INVOICE</div></div>"
        "</div>"
        "<div class='sub-header'>"
        "<div class='sub-header-item'><label>Invoice #</label><span>{{ invoice_number|e }}</span></div>"
        "<div class='sub-header-item'><label>Date</label><span>{{ invoice_date|e }}</span></div>"
        "<div class='sub-header-item'><label>Ref. PO</label><span>{{ ref_po|e }}</span></div>"
        "<div class='sub-header-item'><label>Currency</label><span>{{ currency|e }}</span></div>"
        "</div>"
        "<div class='content'>"
        "<div class='address-section'>"
        "<div class='address-box'><h4>Bill To</h4>" + BILL_TO + "</div>"
        "<div class='address-box'><h4>Payment Terms</h4><p>Net 30 Days<br>Please include invoice number on payment</p></div>"
        "</div>"
        + _items_table("split", "standard") +
        "<div class='totals-wrapper'>" + _totals_block("totals", "due") + "</div>"
        "</div>"
        + _bank_block("inline", "short", "Bank Transfer Details", "bank-footer") +
        "</div>"
    )
    return _document(style, body)


def _simple() -> str:
    style = (
        "body{font-family:Arial,sans-serif;background:#fff;padding:50px;}"
        ".invoice{max-width:700px;margin:0 auto;}"
        "h1{font-size:36px;margin-bottom:10px;}"
        ".vendor{color:#666;margin-bottom:30px;}"
        ".info{margin-bottom:30px;}"
        ".info-row{display:flex;margin-bottom:8px;}"
        ".info-row label{width:120px;color:#666;}"
        ".bill-to{margin-bottom:30px;padding:20px;background:#f5f5f5;}"
        ".bill-to h3{font-size:14px;color:#666;margin-bottom:10px;}"
        ".items{border-collapse:collapse;margin-bottom:30px;}"
        ".items th,.items td{padding:12px;text-align:left;border-bottom:1px solid #ddd;}"
        ".items th{background:#333;color:#fff;}"
        ".items .num{text-align:right;}"
        ".totals{width:300px;margin-left:auto;}"
        ".total-row{display:flex;justify-content:space-between;padding:10px 0;border-bottom:1px solid #ddd;}"
        ".total-row.final{font-weight:bold;font-size:18px;border-top:2px solid #333;border-bottom:2px solid #333;margin-top:5px;}"
        ".bank{margin-top:40px;font-size:12px;color:#666;}"
    )
    body = (
        "<div class='invoice'>"
        "<h1>Invoice</h1>"
        "<p class='vendor'>{{ vendor_name|e }}</p>"
        "<div class='info'>"
        "<div class='info-row'><label>Invoice #:</label><span>{{ invoice_number|e }}</span></div>"
        "<div class='info-row'><label>Date:</label><span>{{ invoice_date|e }}</span></div>"
        "<div class='info-row'><label>Ref. PO:</label><span>{{ ref_po|e }}</span></div>"
        "<div class='info-row'><label>Currency:</label><span>{{ currency|e }}</span></div>"
        "</div>"
        "<div class='bill-to'><h3>Bill To:</h3>" + BILL_TO + "</div>"
        + _items_table("folded", "item", "items") +
        _totals_block("totals", "colon") +
        _bank_block("inline", "short", css_class="bank") +
        "</div>"
    )
    return _document(style, body)


def _bold() -> str:
    style = (
        "body{font-family:Impact,'Arial Black',sans-serif;background:#ff6b6b;padding:30px;}"
        ".invoice-container{max-width:800px;margin:0 auto;background:#fff;padding:50px;}"
        ".header{text-align:center;margin-bottom:40px;}"
        ".vendor{font-size:16px;color:#ff6b6b;letter-spacing:3px;margin-bottom:10px;}"
        ".title{font-size:72px;color:#333;letter-spacing:8px;}"
        ".meta-bar{background:#333;color:#fff;padding:20px;display:flex;justify-content:space-around;margin-bottom:40px;}"
        ".meta-item{text-align:center;}"
        ".meta-item label{display:block;font-size:10px;text-transform:uppercase;opacity:0.6;margin-bottom:5px;}"
        ".meta-item span{font-size:18px;font-weight:bold;}"
        ".bill-to{text-align:center;margin-bottom:40px;padding:30px;background:#f8f8f8;}"
        ".bill-to h3{font-size:14px;color:#ff6b6b;margin-bottom:15px;}"
        ".bill-to p{font-size:20px;}"
        ".items-table{border-collapse:collapse;margin-bottom:30px;}"
        ".items-table th{background:#ff6b6b;color:#fff;padding:18px;text-align:left;font-size:14px;text-transform:uppercase;letter-spacing:2px;}"
        ".items-table th.num{text-align:right;}"
        ".items-table td{padding:18px;border-bottom:3px solid #eee;font-size:16px;}"
        ".totals{background:#333;color:#fff;padding:30px;}"
        ".total-row{display:flex;justify-content:space-between;padding:15px 0;font-size:18px;border-bottom:1px solid #555;}"
        ".total-row.final{font-size:32px;border-top:4px solid #ff6b6b;border-bottom:none;margin-top:10px;padding-top:20px;}"
        ".bank{text-align:center;margin-top:30px;padding-top:30px;border-top:4px solid #ff6b6b;}"
        ".bank p{font-size:14px;color:#666;}"
    )
    body = (
        "<div class='invoice-container'>"
        "<div class='header'>"
        "<div class='vendor'>{{ vendor_name|e }}</div>"
        "<div class='title'>INVOICE</div>"
        "</div>"
        "<div class='meta-bar'>"
        "<div class='meta-item'><label>Invoice #</label><span>{{ invoice_number|e }}</span></div>"
        "<div class='meta-item'><label>Date</label><span>{{ invoice_date|e }}</span></div>"
        "<div class='meta-item'><label>Ref. PO</label><span>{{ ref_po|e }}</span></div>"
        "<div class='meta-item'><label>Currency</label><span>{{ currency|e }}</span></div>"
        "</div>"
        "<div class='bill-to'><h3>BILL TO</h3>" + BILL_TO + "</div>"
        + _items_table("folded", "short") +
        _totals_block("totals", "caps") +
        _bank_block("inline", "caps", css_class="bank") +
        "</div>"
    )
    return _document(style, body)


def _compact() -> str:
    style = (
        "body{font-family:'Segoe UI',sans-serif;background:#fff;padding:20px;font-size:12px;}"
        ".invoice{max-width:800px;margin:0 auto;}"
        ".header{display:flex;justify-content:space-between;border-bottom:2px solid #333;padding-bottom:15px;margin-bottom:20px;}"
        ".header-left .vendor{font-size:11px;color:#666;}"
        ".header-left .title{font-size:28px;font-weight:bold;}"
        ".header-right{text-align:right;font-size:11px;}"
        ".header-right div{margin-bottom:3px;}"
        ".bill-to{margin-bottom:20px;}"
        ".bill-to h4{font-size:9px;text-transform:uppercase;color:#666;margin-bottom:5px;}"
        ".bill-to p{font-size:12px;line-height:1.4;}"
        ".items{border-collapse:collapse;font-size:11px;margin-bottom:20px;}"
        ".items th,.items td{padding:8px;text-align:left;border-bottom:1px solid #ddd;}"
        ".items th{background:#f5f5f5;font-weight:600;}"
        ".items .num{text-align:right;}"
        ".totals{width:250px;margin-left:auto;font-size:11px;}"
        ".total-row{display:flex;justify-content:space-between;padding:5px 0;}"
        ".total-row.final{font-weight:bold;font-size:14px;border-top:2px solid #333;margin-top:5px;padding-top:8px;}"
        ".bank{margin-top:30px;padding-top:15px;border-top:1px solid #ddd;font-size:10px;color:#666;}"
    )
    body = (
        "<div class='invoice'>"
        "<div class='header'>"
        "<div class='header-left'><div class='vendor'>{{ vendor_name|e }}</div><div class='title'>INVOICE</div></div>"
        "<div class='header-right'>"
        "<div><strong>#</strong> {{ invoice_number|e }}</div>"
        "<div><strong>Date:</strong> {{ invoice_date|e }}</div>"
        "<div><strong>PO:</strong> {{ ref_po|e }}</div>"
        "<div><strong>Currency:</strong> {{ currency|e }}</div>"
        "</div></div>"
        "<div class='bill-to'><h4>Bill To</h4>" + BILL_TO + "</div>"
        + _items_table("split", "short", "items") +
        _totals_block("totals", "colon") +
        _bank_block("plain", "short", css_class="bank") +
        "</div>"
    )
    return _document(style, body)


def _premium() -> str:
    style = (
        "body{font-family:Montserrat,'Segoe UI',sans-serif;background:linear-gradient(135deg,#1a1a2e 0%,#16213e 100%);padding:40px;min-height:100vh;}"
        ".invoice-container{max-width:850px;margin:0 auto;background:#fff;border-radius:20px;overflow:hidden;box-shadow:0 25px 80px rgba(0,0,0,0.4);}"
        ".top-section{background:linear-gradient(135deg,#667eea 0%,#764ba2 100%);color:#fff;padding:50px;}"
        ".header-content{display:flex;justify-content:space-between;align-items:flex-start;}"
        ".vendor-info .vendor{font-size:14px;opacity:0.8;letter-spacing:2px;margin-bottom:10px;}"
        ".vendor-info .title{font-size:48px;font-weight:300;letter-spacing:4px;}"
        ".invoice-badge{background:rgba(255,255,255,0.2);padding:20px 30px;border-radius:15px;text-align:center;}"
        ".invoice-badge .number{font-size:24px;font-weight:600;}"
        ".invoice-badge .label{font-size:10px;opacity:0.7;text-transform:uppercase;letter-spacing:2px;}"
        ".content{padding:50px;}"
        ".meta-cards{display:grid;grid-template-columns:repeat(4,1fr);gap:20px;margin-bottom:40px;}"
        ".meta-card{background:#f8f9fa;padding:20px;border-radius:12px;text-align:center;border:1px solid #e9ecef;}"
        ".meta-card label{display:block;font-size:10px;color:#6c757d;text-transform:uppercase;letter-spacing:1px;margin-bottom:8px;}"
        ".meta-card span{font-size:14px;color:#333;font-weight:600;}"
        ".bill-to-section{background:linear-gradient(135deg,#f8f9fa 0%,#e9ecef 100%);padding:30px;border-radius:15px;margin-bottom:40px;}"
        ".bill-to-section h4{font-size:11px;color:#6c757d;text-transform:uppercase;letter-spacing:2px;margin-bottom:15px;}"
        ".bill-to-section p{font-size:18px;color:#333;line-height:1.6;}"
        ".items-table{border-collapse:separate;border-spacing:0;margin-bottom:30px;}"
        ".items-table th{background:#495057;color:#fff;padding:18px;text-align:left;font-size:11px;text-transform:uppercase;letter-spacing:1px;}"
        ".items-table th.num{text-align:right;}"
        ".items-table th:first-child{border-radius:12px 0 0 0;}.items-table th:last-child{border-radius:0 12px 0 0;}"
        ".items-table td{padding:18px;border-bottom:1px solid #e9ecef;font-size:14px;}"
        ".totals-section{display:flex;justify-content:flex-end;}"
        ".totals{background:linear-gradient(135deg,#667eea 0%,#764ba2 100%);color:#fff;padding:30px;border-radius:15px;width:350px;}"
        ".total-row{display:flex;justify-content:space-between;padding:12px 0;border-bottom:1px solid rgba(255,255,255,0.2);font-size:14px;}"
        ".total-row.final{border-top:2px solid #fff;border-bottom:none;font-size:24px;font-weight:600;margin-top:10px;padding-top:15px;}"
        ".bank-section{margin-top:40px;padding:25px;background:#f8f9fa;border-radius:12px;text-align:center;}"
        ".bank-section h3{font-size:11px;color:#6c757d;text-transform:uppercase;letter-spacing:2px;margin-bottom:15px;}"
        ".bank-section p{font-size:13px;color:#495057;}"
    )
    body = (
        "<div class='invoice-container'>"
        "<div class='top-section'><div class='header-content'>"
        "<div class='vendor-info'><div class='vendor'>{{ vendor_name|e }}</div><div class='title'>Invoice</div></div>"
        "<div class='invoice-badge'><div class='number'>{{ invoice_number|e }}</div><div class='label'>Invoice Number</div></div>"
        "</div></div>"
        "<div class='content'>"
        "<div class='meta-cards'>"
        "<div class='meta-card'><label>Invoice Date</label><span>{{ invoice_date|e }}</span></div>"
        "<div class='meta-card'><label>Reference PO</label><span>{{ ref_po|e }}</span></div>"
        "<div class='meta-card'><label>Currency</label><span>{{ currency|e }}</span></div>"
        "<div class='meta-card'><label>Tax Rate</label><span>{{ tax_rate|e }}%</span></div>"
        "</div>"
        "<div class='bill-to-section'><h4>Bill To</h4>" + BILL_TO + "</div>"
        + _items_table("split", "standard") +
        "<div class='totals-section'>" + _totals_block("totals", "title") + "</div>"
        + _bank_block("inline", "short", "Payment Information", "bank-section") +
        "</div></div>"
    )
    return _document(style, body)


SKINS = {
    "classic": _classic,
    "modern": _modern,
    "minimal": _minimal,
    "professional": _professional,
    "elegant": _elegant,
    "corporate": _corporate,
    "simple": _simple,
    "bold": _bold,
    "compact": _compact,
    "premium": _premium,
}


def template_source(template_id: str) -> str:
    get_template(template_id)
    return SKINS[template_id]()


@lru_cache(maxsize=None)
def _compiled(template_id: str) -> Template:
    return jinja_env.from_string(template_source(template_id))


# ----------------------------
# Self-contained check
# ----------------------------
def check_self_contained(html: str) -> List[str]:
    errors = []
    if not re.search(r"<style[^>]*>.*?</style>", html, flags=re.DOTALL | re.IGNORECASE):
        errors.append("Document must include a <style>...</style> block (inline CSS only).")
    if "@media print" not in html:
        errors.append("Document must include @media print rules.")
    if "@page" not in html:
        errors.append("Document must include @page rules.")
    if re.search(r"<link[^>]+rel=['\"]?stylesheet", html, flags=re.IGNORECASE):
        errors.append("External stylesheets (<link rel='stylesheet'>) are not allowed.")
    if re.search(r"<script[^>]+src=", html, flags=re.IGNORECASE):
        errors.append("External scripts are not allowed.")
    if re.search(r"<img[^>]+src=['\"]?\s*https?://", html, flags=re.IGNORECASE):
        errors.append("Remote images are not allowed.")

    css = "\n".join(m.group(1) for m in re.finditer(r"<style[^>]*>(.*?)</style>", html, flags=re.DOTALL | re.IGNORECASE))
    if re.search(r"@import\s+", css, flags=re.IGNORECASE):
        errors.append("CSS @import is not allowed.")
    if re.search(r"url\(\s*['\"]?\s*(https?:)?//", css, flags=re.IGNORECASE):
        errors.append("External URLs in CSS are not allowed.")
    return errors


def render_markup(record: InvoiceRecord, template_id: str) -> str:
    """Render ``record`` as a complete standalone HTML document in the given skin."""
    tpl = _compiled(get_template(template_id)["id"])
    ctx = invoice_context(snapshot(record))
    html = tpl.render(**ctx)
    logger.debug("rendered markup template=%s items=%d bytes=%d", template_id, len(ctx["items"]), len(html))
    return html
