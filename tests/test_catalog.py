import pytest

from invoicegen.catalog import DEFAULT_TEMPLATE, TEMPLATE_IDS, TEMPLATES, get_template, list_templates
from invoicegen.errors import InvoiceError, UnknownTemplateError


def test_ten_templates_in_selector_order():
    assert TEMPLATE_IDS == (
        "classic", "modern", "minimal", "professional", "elegant",
        "corporate", "simple", "bold", "compact", "premium",
    )
    assert DEFAULT_TEMPLATE == "classic"


def test_every_template_has_name_and_description():
    for t in TEMPLATES:
        assert t["name"]
        assert t["description"]


def test_get_template():
    assert get_template("bold")["name"] == "Bold"


@pytest.mark.parametrize("bad", ["", "Classic", "nope", None, 3])
def test_unknown_template_raises(bad):
    with pytest.raises(UnknownTemplateError) as exc:
        get_template(bad)
    assert isinstance(exc.value, InvoiceError)
    assert isinstance(exc.value, ValueError)


def test_list_templates_returns_copies():
    listed = list_templates()
    listed[0]["name"] = "Changed"
    assert get_template("classic")["name"] == "Classic"
