import re

import pytest

from invoicegen.catalog import TEMPLATE_IDS
from invoicegen.errors import UnknownTemplateError
from invoicegen.formatting import invoice_context
from invoicegen.markup import check_self_contained, render_markup, template_source
from invoicegen.models import LineItem, update_line_item

EXPECTED_VALUES = [
    "New_Domestic Customer US 6 (Returns)",
    "INV-2526-035",
    "29, Jan 2026",
    "Nestle Limited",
    "Noida City, sector 15, 700052",
    "4500000344",
    "CH-9003_1",
    "Polyethylene Glycols",
    "Copper Oxide_New",
    "2208.50",
    "22085.00",
    "22585.00 INR",
    "4065.30 INR",
    "26650.30 INR",
    "18%",
    "Sample Bank",
    "9988776655",
    "SAMPLE01",
]


@pytest.mark.parametrize("template_id", TEMPLATE_IDS)
def test_every_template_shows_every_field(record, template_id):
    html = render_markup(record, template_id)
    missing = [v for v in EXPECTED_VALUES if v not in html]
    assert missing == []


def item_rows(html: str) -> list:
    """Cell texts of each row in the item table body."""
    bodies = re.findall(r"<tbody>(.*?)</tbody>", html, flags=re.DOTALL)
    assert len(bodies) == 1
    rows = re.findall(r"<tr>(.*?)</tr>", bodies[0], flags=re.DOTALL)
    return [[cell.strip() for cell in re.findall(r"<td[^>]*>(.*?)</td>", row, flags=re.DOTALL)] for row in rows]


@pytest.mark.parametrize("template_id", TEMPLATE_IDS)
def test_every_item_row_holds_its_own_fields(record, template_id):
    rows = item_rows(render_markup(record, template_id))
    items = invoice_context(record)["items"]
    assert len(rows) == len(items)
    for cells, it in zip(rows, items):
        assert cells[0] == it["material_no"]
        assert cells[1] == it["description"]
        # qty and unit share a cell in some skins
        assert " ".join(cells[2:-2]) == f"{it['qty']} {it['unit']}"
        assert cells[-2] == it["price"]
        assert cells[-1] == it["amount"]


@pytest.mark.parametrize("template_id", TEMPLATE_IDS)
def test_every_template_is_self_contained(record, template_id):
    html = render_markup(record, template_id)
    assert html.startswith("<!DOCTYPE html>")
    assert check_self_contained(html) == []


@pytest.mark.parametrize("template_id", TEMPLATE_IDS)
def test_rendering_is_deterministic(record, template_id):
    assert render_markup(record, template_id) == render_markup(record, template_id)


def test_templates_look_different(record):
    pages = {tid: render_markup(record, tid) for tid in TEMPLATE_IDS}
    assert len(set(pages.values())) == len(TEMPLATE_IDS)


@pytest.mark.parametrize("template_id", TEMPLATE_IDS)
def test_user_text_is_escaped(nasty_record, template_id):
    html = render_markup(nasty_record, template_id)
    assert "<script>alert(1)</script>" not in html
    assert "&lt;script&gt;" in html
    assert "<b>Acme" not in html
    assert "&lt;b&gt;Acme &amp; Sons&lt;/b&gt;" in html
    assert "<x>" not in html
    assert check_self_contained(html) == []


def test_item_rows_follow_record(record):
    rec = update_line_item(record, "1", qty=3, price=0.5)
    html = render_markup(rec, "classic")
    assert "1.50" in html
    assert "22086.50 INR" in html


def test_empty_item_list_renders(record):
    rec = record.model_copy(update={"line_items": []})
    html = render_markup(rec, "compact")
    assert "0.00 INR" in html


def test_heading_variants(record):
    assert "Tax Invoice" in render_markup(record, "professional")
    assert "Ship To" in render_markup(record, "professional")
    assert "Payment Terms" in render_markup(record, "corporate")
    assert "Amount Due" in render_markup(record, "corporate")
    assert "TAX (18%)" in render_markup(record, "bold")


def test_unknown_template_raises(record):
    with pytest.raises(UnknownTemplateError):
        render_markup(record, "fancy")
    with pytest.raises(UnknownTemplateError):
        template_source("fancy")


def test_render_does_not_touch_record(record):
    before = record.model_dump()
    render_markup(record, "premium")
    assert record.model_dump() == before


def test_long_description_is_kept_whole(record):
    text = "very long description " * 40
    rec = record.model_copy(update={"line_items": [LineItem(id="1", description=text, qty=1, price=1)]})
    assert text.strip() in render_markup(rec, "elegant")


@pytest.mark.parametrize(
    "html, fragment",
    [
        ("<html><body>no style</body></html>", "<style>"),
        ("<style>@page{}</style>", "@media print"),
        ("<style>@media print{}</style>", "@page"),
        ("<style>@page{} @media print{}</style><link rel='stylesheet' href='x.css'>", "External stylesheets"),
        ("<style>@page{} @media print{}</style><script src='x.js'></script>", "External scripts"),
        ("<style>@page{} @media print{}</style><img src='https://x/y.png'>", "Remote images"),
        ("<style>@import url(x.css); @page{} @media print{}</style>", "@import"),
        ("<style>@page{} @media print{} body{background:url(https://x/y.png)}</style>", "External URLs"),
    ],
)
def test_check_self_contained_flags(html, fragment):
    errors = check_self_contained(html)
    assert any(fragment in e for e in errors)
