import pytest
from lxml import etree, html

from pageform.logic.form import Form


def make_node(tag, text="", attributes=None):
    element = html.Element(tag)
    element.text = text or None
    for name, value in (attributes or {}).items():
        element.set(name, value)
    return element


def make_select(options, attributes=None, selected_text="selected", values=True):
    """Build a ``<select name="name">`` with one option per key of
    ``options``, selected where the value is true."""
    select = make_node("select", attributes=attributes)
    select.set("name", "name")
    for value, selected in options.items():
        option = etree.SubElement(select, "option")
        option.text = value
        if values:
            option.set("value", value)
        if selected:
            option.set("selected", selected_text)
    return select


def make_form(markup, method=None, current_uri=None):
    doc = html.document_fromstring(f"<html>{markup}</html>")
    forms = doc.xpath("//form")
    if current_uri is None:
        current_uri = "http://example.com/"
    return Form(forms[-1], current_uri, method)


@pytest.fixture(scope="session")
def node():
    return make_node


@pytest.fixture(scope="session")
def select():
    return make_select


@pytest.fixture(scope="session")
def form():
    return make_form
