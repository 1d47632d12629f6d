"""Element access helpers.

Everything that reads lxml element internals goes through these functions,
so the rest of the package only deals with tag names, attributes and text.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from lxml import etree

if TYPE_CHECKING:
    from lxml.etree import _Element


def tag_name(element: _Element) -> str:
    """Lower-cased local tag name, without any namespace."""
    tag = element.tag
    if not isinstance(tag, str):
        # comments and processing instructions
        return ""
    return etree.QName(tag).localname.lower()


def has_attribute(element: _Element, name: str) -> bool:
    return name in element.attrib


def get_attribute(
    element: _Element, name: str, default: str | None = None
) -> str | None:
    value = element.get(name)
    if value is None:
        return default
    return value


def input_type(element: _Element) -> str:
    return (get_attribute(element, "type") or "").strip().lower()


def text_content(element: _Element) -> str:
    return "".join(element.itertext())


def to_string(value: Any) -> str:
    """Cast a submitted value to a string the way a browser would send it."""
    if value is None or value is False:
        return ""
    if value is True:
        return "1"
    return str(value)
