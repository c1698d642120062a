from typing import Dict

from markupsafe import Markup

from .catalog import TEMPLATE_IDS, get_template
from .formatting import invoice_context
from .markup import jinja_env
from .models import InvoiceRecord, snapshot

# Base look is "classic"; every other id layers a few overrides on top.
PREVIEW_BASE_STYLE = (
    ".invoice-preview{font-family:'Segoe UI',Tahoma,sans-serif;color:#222;background:#fff;padding:24px;border:1px solid #e5e5e5;border-radius:8px;}"
    ".invoice-preview .preview-header{display:flex;justify-content:space-between;align-items:flex-end;border-bottom:2px solid #333;padding-bottom:12px;margin-bottom:16px;}"
    ".invoice-preview .vendor{font-size:12px;color:#777;}"
    ".invoice-preview .doc-title{font-size:24px;font-weight:700;}"
    ".invoice-preview .preview-meta{display:grid;grid-template-columns:1fr 1fr;gap:16px;margin-bottom:16px;}"
    ".invoice-preview .label{font-size:11px;color:#777;text-transform:uppercase;}"
    ".invoice-preview .info-row{display:flex;justify-content:space-between;font-size:13px;padding:2px 0;}"
    ".invoice-preview table{width:100%;border-collapse:collapse;font-size:13px;margin-bottom:16px;}"
    ".invoice-preview th{background:#333;color:#fff;text-align:left;padding:8px;font-size:11px;text-transform:uppercase;}"
    ".invoice-preview td{padding:8px;border-bottom:1px solid #eee;}"
    ".invoice-preview .text-right{text-align:right;}"
    ".invoice-preview .preview-totals{margin-left:auto;width:280px;font-size:13px;}"
    ".invoice-preview .total-row{display:flex;justify-content:space-between;padding:6px 0;border-bottom:1px solid #eee;}"
    ".invoice-preview .total-row.final{font-weight:700;font-size:15px;border-top:2px solid #333;border-bottom:2px solid #333;}"
    ".invoice-preview .preview-bank{margin-top:20px;padding-top:12px;border-top:1px solid #eee;font-size:13px;}"
)

PREVIEW_VARIANTS: Dict[str, str] = {
    "classic": "",
    "modern": (
        ".preview-modern .preview-header{border-bottom:3px solid #667eea;}"
        ".preview-modern .vendor{color:#667eea;font-weight:600;}"
        ".preview-modern .doc-title{font-weight:300;letter-spacing:2px;}"
        ".preview-modern th{background:#667eea;}"
        ".preview-modern .preview-totals{background:linear-gradient(135deg,#667eea,#764ba2);color:#fff;padding:12px;border-radius:10px;}"
    ),
    "minimal": (
        ".preview-minimal{border-color:#fff;}"
        ".preview-minimal .preview-header{border-bottom:none;}"
        ".preview-minimal .doc-title{font-weight:200;font-size:32px;}"
        ".preview-minimal th{background:#fff;color:#999;border-bottom:2px solid #000;font-weight:400;}"
    ),
    "professional": (
        ".preview-professional{font-family:Georgia,serif;}"
        ".preview-professional .preview-header{background:#1a365d;color:#fff;padding:12px;border-bottom:none;}"
        ".preview-professional .vendor{color:#fff;}"
        ".preview-professional th{background:#2d4a6f;}"
        ".preview-professional .preview-totals{background:#1a365d;color:#fff;padding:12px;}"
    ),
    "elegant": (
        ".preview-elegant{font-family:'Playfair Display','Times New Roman',serif;border-top:6px solid #d4af37;}"
        ".preview-elegant .preview-header{border-bottom:1px solid #e0d5c5;}"
        ".preview-elegant .vendor{color:#8b7355;letter-spacing:3px;text-transform:uppercase;}"
        ".preview-elegant .doc-title{font-style:italic;font-weight:400;}"
        ".preview-elegant th{background:#fff;color:#8b7355;border-bottom:2px solid #d4af37;}"
        ".preview-elegant .total-row.final{border-top:3px double #d4af37;border-bottom:3px double #d4af37;}"
    ),
    "corporate": (
        ".preview-corporate .preview-header{background:#0d1b2a;color:#fff;padding:14px;border-bottom:none;}"
        ".preview-corporate .vendor{color:#fff;}"
        ".preview-corporate th{background:#415a77;}"
        ".preview-corporate .preview-bank{background:#0d1b2a;color:#fff;padding:12px;}"
    ),
    "simple": (
        ".preview-simple{font-family:Arial,sans-serif;border-radius:0;}"
        ".preview-simple .preview-header{border-bottom:1px solid #ddd;}"
    ),
    "bold": (
        ".preview-bold{font-family:Impact,'Arial Black',sans-serif;border:6px solid #ff6b6b;}"
        ".preview-bold .vendor{color:#ff6b6b;letter-spacing:3px;}"
        ".preview-bold .doc-title{font-size:36px;letter-spacing:6px;}"
        ".preview-bold th{background:#ff6b6b;}"
        ".preview-bold .preview-totals{background:#333;color:#fff;padding:12px;}"
    ),
    "compact": (
        ".preview-compact{padding:12px;font-size:11px;}"
        ".preview-compact table,.preview-compact .preview-totals,.preview-compact .preview-bank{font-size:11px;}"
        ".preview-compact th{background:#f5f5f5;color:#222;}"
        ".preview-compact td,.preview-compact th{padding:4px;}"
    ),
    "premium": (
        ".preview-premium{border-radius:16px;overflow:hidden;}"
        ".preview-premium .preview-header{background:linear-gradient(135deg,#667eea,#764ba2);color:#fff;padding:16px;border-bottom:none;}"
        ".preview-premium .vendor{color:#fff;opacity:.8;}"
        ".preview-premium th{background:#495057;}"
        ".preview-premium .preview-totals{background:linear-gradient(135deg,#667eea,#764ba2);color:#fff;padding:12px;border-radius:12px;}"
    ),
}

PREVIEW_STYLE = PREVIEW_BASE_STYLE + "".join(PREVIEW_VARIANTS[tid] for tid in TEMPLATE_IDS)

PREVIEW_FRAGMENT = jinja_env.from_string(
    "<div class='invoice-preview {{ css_class }}' data-template='{{ template_id }}'>"
    "<div class='preview-header'>"
    "<div class='company-info'><p class='vendor'>{{ vendor_name|e }}</p></div>"
    "<div class='text-right'><h2 class='doc-title'>INVOICE</h2></div>"
    "</div>"
    "<div class='preview-meta'>"
    "<div class='bill-to'><p class='label'>Bill To:</p>"
    "<p><strong>{{ bill_to.company_name|e }}</strong></p><p>{{ bill_to.address|e }}</p></div>"
    "<div class='invoice-info'>"
    "<div class='info-row'><span>Invoice #</span><strong>{{ invoice_number|e }}</strong></div>"
    "<div class='info-row'><span>Invoice Date</span><span>{{ invoice_date|e }}</span></div>"
    "<div class='info-row'><span>Ref. PO</span><span>{{ ref_po|e }}</span></div>"
    "<div class='info-row'><span>Currency</span><span>{{ currency|e }}</span></div>"
    "</div></div>"
    "<table class='preview-table'>"
    "<thead><tr><th>Material No.</th><th>Description</th><th>Qty</th><th>Unit</th>"
    "<th class='text-right'>Price</th><th class='text-right'>Total</th></tr></thead>"
    "<tbody>{% for it in items %}"
    "<tr><td>{{ it.material_no|e }}</td><td>{{ it.description|e }}</td><td>{{ it.qty }}</td><td>{{ it.unit|e }}</td>"
    "<td class='text-right'>{{ it.price }}</td><td class='text-right'>{{ it.amount }}</td></tr>"
    "{% endfor %}</tbody></table>"
    "<div class='preview-totals'>"
    "<div class='total-row'><span>Subtotal</span><span>{{ totals.subtotal_line|e }}</span></div>"
    "<div class='total-row'><span>{{ totals.tax_label|e }}</span><span>{{ totals.tax_line|e }}</span></div>"
    "<div class='total-row final'><span>TOTAL</span><span>{{ totals.total_line|e }}</span></div>"
    "</div>"
    "<div class='preview-bank'><p class='label'>Bank Details:</p>"
    "<p><strong>Bank Name:</strong> {{ bank.bank_name|e }}</p>"
    "<p><strong>Account:</strong> {{ bank.account|e }}</p>"
    "<p><strong>SWIFT:</strong> {{ bank.swift|e }}</p>"
    "</div></div>"
)


def preview_class(template_id: str) -> str:
    return "preview-" + get_template(template_id)["id"]


def render_preview(record: InvoiceRecord, template_id: str) -> Markup:
    """HTML fragment for the live preview pane; styles come from ``PREVIEW_STYLE``."""
    css_class = preview_class(template_id)
    ctx = invoice_context(snapshot(record))
    return Markup(PREVIEW_FRAGMENT.render(css_class=css_class, template_id=template_id, **ctx))
