"""Links found on a page."""

from __future__ import annotations

from typing import TYPE_CHECKING

from normality import collapse_spaces

from pageform.exc import LogicalTagMismatch
from pageform.helpers.uri import check_current_uri, resolve_uri
from pageform.util import get_attribute, has_attribute, tag_name, text_content

if TYPE_CHECKING:
    from lxml.etree import _Element


class Link:
    """An ``<a>``, ``<area>`` or ``<link>`` element and the page it is on."""

    TAGS = ("a", "area", "link")

    def __init__(self, element: _Element, current_uri: str | None) -> None:
        self._set_element(element)
        self.current_uri = check_current_uri(current_uri)

    def _set_element(self, element: _Element) -> None:
        tag = tag_name(element)
        if tag not in self.TAGS:
            raise LogicalTagMismatch(f'Unable to navigate from a "{tag}" tag.')
        self.element = element
        self.tag = tag

    def get_attribute(self, name: str, default: str | None = None) -> str | None:
        return get_attribute(self.element, name, default)

    def has_attribute(self, name: str) -> bool:
        return has_attribute(self.element, name)

    def get_raw_uri(self) -> str | None:
        return self.get_attribute("href")

    def get_uri(self) -> str:
        """The absolute URI this element points to."""
        return resolve_uri(self.get_raw_uri(), self.current_uri)

    @property
    def text(self) -> str | None:
        return collapse_spaces(text_content(self.element))

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}({self.tag}, {self.get_uri()!r})>"
