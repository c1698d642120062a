import pytest
from markupsafe import Markup

from invoicegen.catalog import TEMPLATE_IDS
from invoicegen.errors import UnknownTemplateError
from invoicegen.preview import PREVIEW_STYLE, PREVIEW_VARIANTS, preview_class, render_preview


@pytest.mark.parametrize("template_id", TEMPLATE_IDS)
def test_preview_carries_template_class(record, template_id):
    html = render_preview(record, template_id)
    assert isinstance(html, Markup)
    assert f"invoice-preview preview-{template_id}" in html
    assert f"data-template='{template_id}'" in html


def test_preview_shows_same_numbers_as_exports(record):
    html = render_preview(record, "modern")
    for value in ("22585.00 INR", "4065.30 INR", "26650.30 INR", "Tax (18%)", "29, Jan 2026", "2208.50"):
        assert value in html


def test_preview_escapes_user_text(nasty_record):
    html = render_preview(nasty_record, "classic")
    assert "<script>" not in html
    assert "&lt;b&gt;Acme" in html


def test_every_template_has_preview_styles():
    assert set(PREVIEW_VARIANTS) == set(TEMPLATE_IDS)
    for tid in TEMPLATE_IDS:
        if tid != "classic":
            assert f".preview-{tid}" in PREVIEW_STYLE


def test_unknown_template_raises(record):
    with pytest.raises(UnknownTemplateError):
        preview_class("nope")
    with pytest.raises(UnknownTemplateError):
        render_preview(record, "nope")
