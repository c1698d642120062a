"""Paginated (PDF) rendering of an invoice.

Headers are drawn directly on a reportlab canvas with coordinates measured in
millimetres from the top edge of an A4 page. The item table is a platypus
``Table`` that may run over several pages; ``draw_items_table`` returns the y
where it ended so the totals and bank block are always placed below it.
"""

import io
from typing import Any, Callable, Dict, List, Optional
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle
from reportlab.lib.units import mm
from reportlab.pdfbase.pdfmetrics import stringWidth
from reportlab.pdfgen import canvas
from reportlab.platypus import Paragraph, Table, TableStyle

from . import config
from .catalog import get_template
from .formatting import invoice_context
from .logging_setup import get_logger
from .models import InvoiceRecord, snapshot

logger = get_logger("invoicegen.pdf")

PAGE_W, PAGE_H = A4
MARGIN = 15 * mm
CONTENT_W = PAGE_W - 2 * MARGIN
PAGE_TOP = PAGE_H - MARGIN

ITEM_HEADINGS = ["Material No.", "Description", "Qty", "Unit", "Price", "Total"]
COL_WIDTHS = [30 * mm, 62 * mm, 18 * mm, 18 * mm, 26 * mm, 26 * mm]

# totals + bank block, measured down from the end of the table
TOTALS_GAP = 10 * mm
BANK_LINE_DROP = 42 * mm
LINE_DESCENT = 3 * mm
FOOTER_HEIGHT = TOTALS_GAP + BANK_LINE_DROP + LINE_DESCENT

BLUE = colors.HexColor("#667EEA")
CORAL = colors.HexColor("#FF6B6B")
CHARCOAL = colors.HexColor("#323232")
GRAY = colors.HexColor("#646464")
MID_GRAY = colors.HexColor("#505050")
LIGHT_GRAY = colors.HexColor("#969696")
RULE = colors.HexColor("#C8C8C8")
STRIPE = colors.HexColor("#F5F5F5")

CELL_STYLE = ParagraphStyle("cell", fontName="Helvetica", fontSize=10, leading=12)


def _top(v_mm: float) -> float:
    """Distance from the top edge (mm) to a reportlab y coordinate."""
    return PAGE_H - v_mm * mm


def _text(c: canvas.Canvas, x: float, top_mm: float, s: str, size: float = 10,
          color=colors.black, font: str = "Helvetica", align: str = "left") -> None:
    c.setFont(font, size)
    c.setFillColor(color)
    y = _top(top_mm)
    if align == "right":
        c.drawRightString(x, y, s)
    elif align == "center":
        c.drawCentredString(x, y, s)
    else:
        c.drawString(x, y, s)


def _one_line(s: str) -> str:
    return ", ".join(part.strip() for part in (s or "").splitlines() if part.strip())


def _bill_to(c: canvas.Canvas, ctx: dict, top_mm: float, label: str = "Bill To:",
             label_color=GRAY, label_size: float = 10) -> None:
    _text(c, MARGIN, top_mm, label, label_size, label_color)
    _text(c, MARGIN, top_mm + 7, ctx["bill_to"]["company_name"], 12)
    _text(c, MARGIN, top_mm + 13, _one_line(ctx["bill_to"]["address"]), 10)


# ----------------------------
# Header variants
# ----------------------------
def _header_classic(c: canvas.Canvas, ctx: dict) -> None:
    right = PAGE_W - MARGIN
    _text(c, MARGIN, 25, ctx["vendor_name"], 10, GRAY)
    _text(c, right, 30, "INVOICE", 28, align="right")

    c.setStrokeColor(RULE)
    c.line(MARGIN, _top(40), right, _top(40))

    _bill_to(c, ctx, 55)

    _text(c, right, 55, f"Invoice #: {ctx['invoice_number']}", 10, MID_GRAY, align="right")
    _text(c, right, 61, f"Date: {ctx['invoice_date']}", 10, MID_GRAY, align="right")
    _text(c, right, 67, f"Ref. PO: {ctx['ref_po']}", 10, MID_GRAY, align="right")
    _text(c, right, 73, f"Currency: {ctx['currency']}", 10, MID_GRAY, align="right")


def _header_modern(c: canvas.Canvas, ctx: dict) -> None:
    c.setFillColor(BLUE)
    c.rect(0, _top(50), PAGE_W, 50 * mm, stroke=0, fill=1)
    _text(c, MARGIN, 20, ctx["vendor_name"], 10, colors.white)
    _text(c, PAGE_W - MARGIN, 32, "INVOICE", 30, colors.white, align="right")

    _bill_to(c, ctx, 65, label_color=MID_GRAY)

    meta_x = PAGE_W - MARGIN - 50 * mm
    _text(c, meta_x, 65, f"Invoice #: {ctx['invoice_number']}", 10, MID_GRAY)
    _text(c, meta_x, 71, f"Date: {ctx['invoice_date']}", 10, MID_GRAY)
    _text(c, meta_x, 77, f"Ref. PO: {ctx['ref_po']}", 10, MID_GRAY)
    _text(c, meta_x, 83, f"Currency: {ctx['currency']}", 10, MID_GRAY)


def _header_minimal(c: canvas.Canvas, ctx: dict) -> None:
    right = PAGE_W - MARGIN
    _text(c, MARGIN, 25, ctx["vendor_name"], 8, LIGHT_GRAY)
    _text(c, MARGIN, 40, "Invoice", 36)

    _bill_to(c, ctx, 60, label="BILL TO", label_color=LIGHT_GRAY, label_size=9)

    _text(c, right, 60, f"# {ctx['invoice_number']}", 11, GRAY, align="right")
    _text(c, right, 66, f"Date {ctx['invoice_date']}", 11, GRAY, align="right")
    _text(c, right, 72, f"PO {ctx['ref_po']}", 11, GRAY, align="right")
    _text(c, right, 78, f"Currency {ctx['currency']}", 11, GRAY, align="right")


def _header_bold(c: canvas.Canvas, ctx: dict) -> None:
    c.setFillColor(CORAL)
    c.rect(0, _top(15), PAGE_W, 15 * mm, stroke=0, fill=1)

    _text(c, MARGIN, 35, ctx["vendor_name"], 12, CORAL)
    _text(c, MARGIN, 60, "INVOICE", 48, CHARCOAL, font="Helvetica-Bold")

    c.setFillColor(CHARCOAL)
    c.rect(MARGIN, _top(95), CONTENT_W, 20 * mm, stroke=0, fill=1)
    col = CONTENT_W / 4
    _text(c, MARGIN + 5 * mm, 87, f"Inv: {ctx['invoice_number']}", 10, colors.white)
    _text(c, MARGIN + col + 5 * mm, 87, f"Date: {ctx['invoice_date']}", 10, colors.white)
    _text(c, MARGIN + col * 2 + 5 * mm, 87, f"PO: {ctx['ref_po']}", 10, colors.white)
    _text(c, MARGIN + col * 3 + 5 * mm, 87, f"Curr: {ctx['currency']}", 10, colors.white)

    _bill_to(c, ctx, 105, label="BILL TO", label_color=CORAL, label_size=9)


def _header_premium(c: canvas.Canvas, ctx: dict) -> None:
    right = PAGE_W - MARGIN
    c.setFillColor(BLUE)
    c.rect(0, _top(60), PAGE_W, 60 * mm, stroke=0, fill=1)
    _text(c, MARGIN, 25, ctx["vendor_name"], 10, colors.white)
    _text(c, MARGIN, 45, "Invoice", 32, colors.white)

    badge_w, badge_h = 45 * mm, 25 * mm
    badge_x = right - 50 * mm
    c.setFillColor(colors.white)
    c.setStrokeColor(RULE)
    c.roundRect(badge_x, _top(45), badge_w, badge_h, 5 * mm, stroke=1, fill=1)

    number = ctx["invoice_number"]
    size = 14
    while size > 7 and stringWidth(number, "Helvetica", size) > badge_w - 4 * mm:
        size -= 1
    _text(c, badge_x + badge_w / 2, 35, number, size, BLUE, align="center")
    _text(c, badge_x + badge_w / 2, 41, "INVOICE NUMBER", 6, LIGHT_GRAY, align="center")

    _bill_to(c, ctx, 72, label_color=MID_GRAY)

    _text(c, right, 72, f"Date: {ctx['invoice_date']}", 10, MID_GRAY, align="right")
    _text(c, right, 78, f"Ref. PO: {ctx['ref_po']}", 10, MID_GRAY, align="right")
    _text(c, right, 84, f"Currency: {ctx['currency']}", 10, MID_GRAY, align="right")
    _text(c, right, 90, f"Tax Rate: {ctx['tax_rate']}%", 10, MID_GRAY, align="right")


PDF_STYLES: Dict[str, Dict[str, Any]] = {
    "modern": {"header": _header_modern, "table_top": 92, "head_fill": BLUE, "theme": "grid"},
    "minimal": {"header": _header_minimal, "table_top": 88, "head_fill": CHARCOAL, "theme": "striped"},
    "bold": {"header": _header_bold, "table_top": 126, "head_fill": CORAL, "theme": "striped"},
    "premium": {"header": _header_premium, "table_top": 100, "head_fill": CHARCOAL, "theme": "striped"},
}

# every other catalog entry
DEFAULT_PDF_STYLE: Dict[str, Any] = {"header": _header_classic, "table_top": 85, "head_fill": CHARCOAL, "theme": "striped"}


def pdf_style(template_id: str) -> Dict[str, Any]:
    get_template(template_id)
    return PDF_STYLES.get(template_id, DEFAULT_PDF_STYLE)


# ----------------------------
# Item table
# ----------------------------
def build_items_table(ctx: dict, style: Dict[str, Any]) -> Table:
    rows: List[list] = [list(ITEM_HEADINGS)]
    for it in ctx["items"]:
        rows.append([
            Paragraph(escape(it["material_no"]), CELL_STYLE),
            Paragraph(escape(it["description"]), CELL_STYLE),
            it["qty"],
            it["unit"],
            it["price"],
            it["amount"],
        ])

    commands = [
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("FONTNAME", (0, 1), (-1, -1), "Helvetica"),
        ("FONTSIZE", (0, 0), (-1, -1), 10),
        ("BACKGROUND", (0, 0), (-1, 0), style["head_fill"]),
        ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
        ("ALIGN", (4, 0), (5, -1), "RIGHT"),
        ("VALIGN", (0, 0), (-1, -1), "TOP"),
        ("TOPPADDING", (0, 0), (-1, -1), 6),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 6),
        ("LEFTPADDING", (0, 0), (-1, -1), 6),
        ("RIGHTPADDING", (0, 0), (-1, -1), 6),
    ]
    if style["theme"] == "grid":
        commands.append(("GRID", (0, 0), (-1, -1), 0.5, RULE))
    elif len(rows) > 1:
        commands.append(("ROWBACKGROUNDS", (0, 1), (-1, -1), [colors.white, STRIPE]))

    table = Table(rows, colWidths=COL_WIDTHS, repeatRows=1)
    table.setStyle(TableStyle(commands))
    return table


def draw_items_table(c: canvas.Canvas, table: Table, top_y: float) -> float:
    """Draw ``table`` from ``top_y`` down, starting new pages as needed.

    Returns the y just below the last row on the page the table ended on.
    """
    pending = [table]
    y = top_y
    while pending:
        part = pending.pop(0)
        avail = y - MARGIN
        _, h = part.wrapOn(c, CONTENT_W, avail)
        if h <= avail:
            part.drawOn(c, MARGIN, y - h)
            y -= h
            continue

        pieces = part.split(CONTENT_W, avail)
        if len(pieces) < 2:
            if y >= PAGE_TOP:
                # a single row taller than a whole page
                part.drawOn(c, MARGIN, y - h)
                y -= h
                continue
            c.showPage()
            y = PAGE_TOP
            pending.insert(0, part)
            continue

        first = pieces[0]
        _, h = first.wrapOn(c, CONTENT_W, avail)
        first.drawOn(c, MARGIN, y - h)
        c.showPage()
        y = PAGE_TOP
        pending[:0] = pieces[1:]
    return y


# ----------------------------
# Totals + bank
# ----------------------------
def draw_totals(c: canvas.Canvas, ctx: dict, y: float) -> float:
    """Totals and bank details below ``y``; returns the y under the bank line."""
    if y - FOOTER_HEIGHT < MARGIN:
        c.showPage()
        y = PAGE_TOP

    totals = ctx["totals"]
    right = PAGE_W - MARGIN
    label_x = right - 70 * mm
    y -= TOTALS_GAP

    c.setFont("Helvetica", 10)
    c.setFillColor(MID_GRAY)
    c.drawString(label_x, y, "Subtotal:")
    c.drawRightString(right, y, totals["subtotal_line"])
    c.drawString(label_x, y - 7 * mm, totals["tax_label"] + ":")
    c.drawRightString(right, y - 7 * mm, totals["tax_line"])

    c.setStrokeColor(LIGHT_GRAY)
    c.line(label_x, y - 12 * mm, right, y - 12 * mm)

    c.setFont("Helvetica-Bold", 14)
    c.setFillColor(colors.black)
    c.drawString(label_x, y - 20 * mm, "TOTAL:")
    c.drawRightString(right, y - 20 * mm, totals["total_line"])

    bank = ctx["bank"]
    c.setFont("Helvetica", 9)
    c.setFillColor(GRAY)
    c.drawString(MARGIN, y - 35 * mm, "Bank Details:")
    c.drawString(
        MARGIN,
        y - BANK_LINE_DROP,
        f"Bank: {bank['bank_name']} | Account: {bank['account']} | SWIFT: {bank['swift']}",
    )
    return y - BANK_LINE_DROP - LINE_DESCENT


def render_pdf(record: InvoiceRecord, template_id: str, compress: Optional[bool] = None) -> bytes:
    """Render ``record`` as an A4 PDF in the given template; returns the file bytes."""
    style = pdf_style(template_id)
    ctx = invoice_context(snapshot(record))
    if compress is None:
        compress = config.PDF_COMPRESS

    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=A4, pageCompression=1 if compress else 0, invariant=1)
    c.setTitle(f"Invoice {ctx['invoice_number']}")
    c.setAuthor(ctx["vendor_name"])
    c.setSubject(f"Invoice {ctx['invoice_number']} ({template_id})")

    header: Callable[[canvas.Canvas, dict], None] = style["header"]
    header(c, ctx)

    table = build_items_table(ctx, style)
    end_y = draw_items_table(c, table, _top(style["table_top"]))
    draw_totals(c, ctx, end_y)

    pages = c.getPageNumber()
    c.showPage()
    c.save()
    logger.debug("rendered pdf template=%s items=%d pages=%d", template_id, len(ctx["items"]), pages)
    return buf.getvalue()
