"""Parsed pages and the links and forms on them."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from anystore.logging import get_logger
from lxml import html

from pageform.exc import ElementNotFound
from pageform.helpers.uri import SCHEME_RE, check_current_uri, resolve_uri
from pageform.logic.form import Form
from pageform.logic.link import Link
from pageform.util import tag_name

if TYPE_CHECKING:
    from lxml.etree import _Element

log = get_logger(__name__)


class Page:
    """An HTML document fetched from ``uri``.

    Links resolve against the document's ``<base href>`` when it has one.
    Forms with an empty action still submit to ``uri`` itself.

    Example:
        >>> page = Page(text, "https://example.com/search")
        >>> form = page.form('//form[@id="search"]')
        >>> form.fill({"q": "pliers"}).get_uri()
        'https://example.com/search?q=pliers'
    """

    def __init__(
        self,
        source: str | bytes | _Element,
        uri: str | None = None,
        base_href: str | None = None,
    ) -> None:
        if isinstance(source, (str, bytes)):
            self.root = self._parse(source)
        else:
            self.root = source
        self.uri = check_current_uri(uri)
        base_href = base_href or self._find_base_href() or self.uri
        self.base_href = check_current_uri(base_href)

    @staticmethod
    def _parse(source: str | bytes) -> _Element:
        try:
            return html.document_fromstring(source)
        except ValueError as ve:
            if "encoding declaration" not in str(ve):
                raise
            # the text is already decoded, the declared encoding no longer applies
            parser = html.HTMLParser(encoding="utf-8")
            return html.document_fromstring(source.encode("utf-8"), parser=parser)

    def _find_base_href(self) -> str | None:
        for href in self.root.xpath("//base/@href"):
            if not href.strip():
                continue
            base = resolve_uri(href, self.uri)
            # a relative base is useless without the page URI
            if self.uri or SCHEME_RE.match(base):
                return base
        return None

    def find(self, xpath: str) -> list[Any]:
        return self.root.xpath(xpath)

    def _elements(self, xpath: str, tags: tuple[str, ...]) -> list[_Element]:
        return [el for el in self.find(xpath) if tag_name(el) in tags]

    def links(self, xpath: str | None = None) -> list[Link]:
        """Links for all anchors, or for the ``a``, ``area`` and ``link``
        elements matching ``xpath``."""
        if xpath is None:
            elements = self._elements("//a", ("a",))
        else:
            elements = self._elements(xpath, Link.TAGS)
        return [Link(el, self.base_href) for el in elements]

    def link(self, xpath: str | None = None) -> Link:
        links = self.links(xpath)
        if not links:
            raise ElementNotFound(f"No link matches: {xpath or '//a'}")
        return links[0]

    def forms(
        self, xpath: str | None = None, method: str | None = None
    ) -> list[Form]:
        elements = self._elements(xpath or "//form", ("form",))
        return [Form(el, self.uri, method, self.base_href) for el in elements]

    def form(self, xpath: str | None = None, method: str | None = None) -> Form:
        forms = self.forms(xpath, method)
        if not forms:
            raise ElementNotFound(f"No form matches: {xpath or '//form'}")
        log.debug("Form found", uri=self.uri, xpath=xpath)
        return forms[0]

    def __repr__(self) -> str:
        return f"<Page({self.uri!r})>"
