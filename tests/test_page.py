import pytest
from lxml import html

from pageform.exc import ElementNotFound, InvalidCurrentUri
from pageform.logic.form import Form
from pageform.logic.link import Link
from pageform.logic.page import Page

LINKS = """<html><head><link rel="next" href="/page/2"></head>
<body>
  <a href="/foo" class="foo">Foo</a>
  <a href="/bar">Bar</a>
  <a href="baz">Baz
    link</a>
  <div href="/div">not a link</div>
  <map><area href="/area" /></map>
</body></html>"""

FORMS = """<html><body>
  <form id="a" action="/search"><input name="q" value="x" /></form>
  <form id="b" method="post" action="upload"><input type="file" name="doc" /></form>
</body></html>"""


class TestLinks:
    def test_links(self):
        page = Page(LINKS, "http://www.example.com/dir/index.html")
        links = page.links()
        assert len(links) == 3
        assert all(isinstance(link, Link) for link in links)
        assert [link.get_uri() for link in links] == [
            "http://www.example.com/foo",
            "http://www.example.com/bar",
            "http://www.example.com/dir/baz",
        ]
        assert links[2].text == "Baz link"

    @pytest.mark.parametrize(
        "xpath,count",
        [
            ('//a[@class="foo"]', 1),
            ('//a[@href="/bar"]', 1),
            ("//*[@href]", 5),
            ("//div", 0),
            ("//area|//link", 2),
        ],
    )
    def test_links_by_xpath(self, xpath, count):
        page = Page(LINKS, "http://www.example.com")
        assert len(page.links(xpath)) == count

    def test_link(self):
        page = Page(LINKS, "http://www.example.com")
        assert page.link().get_uri() == "http://www.example.com/foo"
        assert page.link("//area").get_uri() == "http://www.example.com/area"

    def test_link_not_found(self):
        page = Page(LINKS, "http://www.example.com")
        with pytest.raises(ElementNotFound):
            page.link("//a[@id='missing']")


class TestBaseHref:
    def test_relative_base(self):
        page = Page(
            '<html><head><base href="/static/"></head><a href="x">x</a></html>',
            "http://example.com/a/b",
        )
        assert page.base_href == "http://example.com/static/"
        assert page.link().get_uri() == "http://example.com/static/x"

    def test_absolute_base_without_uri(self):
        page = Page('<html><head><base href="http://cdn.example.com/"></head></html>')
        assert page.uri == ""
        assert page.base_href == "http://cdn.example.com/"

    def test_relative_base_without_uri(self):
        page = Page('<html><head><base href="/static/"></head></html>')
        assert page.base_href == ""

    def test_explicit_base_href(self):
        page = Page(LINKS, "http://example.com/", base_href="http://other.com/x/")
        assert page.link().get_uri() == "http://other.com/foo"

    def test_form_uses_base_href(self):
        page = Page(
            '<html><head><base href="http://cdn.example.com/b/"></head>'
            '<form action="go"></form><form></form></html>',
            "http://example.com/page",
        )
        with_action, without_action = page.forms()
        assert with_action.get_uri() == "http://cdn.example.com/b/go"
        assert without_action.get_uri() == "http://example.com/page"


class TestForms:
    def test_forms(self):
        page = Page(FORMS, "http://www.example.com/")
        forms = page.forms()
        assert len(forms) == 2
        assert all(isinstance(form, Form) for form in forms)
        assert [form.method for form in forms] == ["GET", "POST"]

    def test_form(self):
        page = Page(FORMS, "http://www.example.com/")
        form = page.form()
        assert form.get_uri() == "http://www.example.com/search?q=x"
        form = page.form('//form[@id="b"]')
        assert form.get_uri() == "http://www.example.com/upload"
        assert list(form.get_files()) == ["doc"]

    def test_form_method(self):
        page = Page(FORMS, "http://www.example.com/")
        form = page.form('//form[@id="a"]', method="post")
        assert form.get_uri() == "http://www.example.com/search"

    def test_forms_ignore_other_elements(self):
        page = Page(FORMS, "http://www.example.com/")
        assert page.forms("//input") == []

    def test_form_not_found(self):
        page = Page(LINKS, "http://www.example.com/")
        with pytest.raises(ElementNotFound):
            page.form()


class TestPage:
    def test_find(self):
        page = Page(LINKS)
        assert len(page.find("//a")) == 3
        assert page.find("//a/@href") == ["/foo", "/bar", "baz"]

    def test_from_element(self):
        root = html.document_fromstring(FORMS)
        page = Page(root, "http://www.example.com/")
        assert page.root is root
        assert len(page.forms()) == 2

    def test_from_bytes(self):
        page = Page(FORMS.encode("utf-8"), "http://www.example.com/")
        assert len(page.forms()) == 2

    def test_from_str_with_encoding_declaration(self):
        source = (
            '<?xml version="1.0" encoding="iso-8859-1"?>'
            '<html><body><a href="/caf\u00e9">Caf\u00e9</a></body></html>'
        )
        page = Page(source, "http://www.example.com/")
        assert page.link().text == "Caf\u00e9"

    def test_invalid_uri(self):
        with pytest.raises(InvalidCurrentUri):
            Page(LINKS, "www.example.com")

    def test_repr(self):
        assert repr(Page(LINKS, "http://www.example.com/")) == (
            "<Page('http://www.example.com/')>"
        )
