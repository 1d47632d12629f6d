"""HTML forms and the values a browser would submit for them."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from anystore.logging import get_logger
from furl import furl

from pageform.core import settings
from pageform.exc import LogicalTagMismatch
from pageform.helpers.names import flatten, parse_name
from pageform.helpers.query import (
    build_query,
    expand_pair,
    listify,
    merge_recursive,
    nest,
    parse_query,
)
from pageform.helpers.uri import check_current_uri
from pageform.logic.link import Link
from pageform.logic.registry import FieldRegistry
from pageform.model.fields import (
    AnyField,
    CheckBoxField,
    ChoiceField,
    FileField,
    InputField,
    RadioGroup,
    SelectField,
    TextareaField,
)
from pageform.util import get_attribute, input_type, tag_name

if TYPE_CHECKING:
    from lxml.etree import _Element

log = get_logger(__name__)

# methods that send their values in the request body
BODY_METHODS = ("POST", "PUT", "DELETE", "PATCH")
FIELD_XPATH = ".//input|.//button|.//textarea|.//select"
NON_DATA_INPUTS = ("submit", "button", "image")


class Form(Link):
    """A ``<form>`` element with the fields it would submit.

    Fields are read once from the descendants of the form element. Values
    can then be changed by fully qualified name, either through the methods
    below or with item access::

        form["user[name]"] = "alice"
        form.get_uri()  # for GET forms, the values end up in the query
    """

    def __init__(
        self,
        element: _Element,
        current_uri: str | None,
        method: str | None = None,
        base_href: str | None = None,
    ) -> None:
        super().__init__(element, current_uri)
        method = method or self.get_attribute("method") or settings.default_method
        self.method = method.upper()
        self.base_href = check_current_uri(base_href) if base_href else None
        self._initialize()

    def _set_element(self, element: _Element) -> None:
        tag = tag_name(element)
        if tag != "form":
            raise LogicalTagMismatch(
                f"A Form can only be created from a form tag ({tag} given)."
            )
        self.element = element
        self.tag = tag

    def _initialize(self) -> None:
        self.fields = FieldRegistry()
        for node in self.element.xpath(FIELD_XPATH):
            self._create_field(node)

        # an empty action still targets the page itself
        if self.base_href and self.get_raw_uri():
            self.current_uri = self.base_href

        if not settings.validate_choices:
            self.disable_validation()
        log.debug(
            "Form assembled", method=self.method, fields=len(self.all_fields())
        )

    def _create_field(self, node: _Element) -> None:
        name = get_attribute(node, "name")
        if not name:
            return

        tag = tag_name(node)
        type_ = input_type(node)
        if tag == "select":
            self.add_field(SelectField.from_element(node))
        elif tag == "input" and type_ == "checkbox":
            self.add_field(CheckBoxField.from_element(node))
        elif tag == "input" and type_ == "radio":
            # other fields may share the name of a radio group
            if self.has_field(name) and isinstance(self.get_field(name), RadioGroup):
                self.get_field(name).add_choice(node)
            else:
                group = RadioGroup(name=name)
                group.add_choice(node)
                self.add_field(group)
        elif tag == "input" and type_ == "file":
            self.add_field(FileField.from_element(node))
        elif tag == "input" and type_ not in NON_DATA_INPUTS:
            self.add_field(InputField.from_element(node))
        elif tag == "textarea":
            self.add_field(TextareaField.from_element(node))
        else:
            log.debug("Skipping element", tag=tag, type=type_, name=name)

    def get_raw_uri(self) -> str | None:
        return self.get_attribute("action")

    def get_uri(self) -> str:
        """The URI the form submits to.

        For methods without a request body, the form values are merged into
        the query string of the action, as a browser does.
        """
        uri = super().get_uri()
        if self.method in BODY_METHODS:
            return uri

        f = furl(uri)
        # field values replace query pairs of the same bracketed name
        params = flatten(parse_query(str(f.query)))
        params.update(flatten(self.get_values()))
        f.query = build_query(params)
        return f.url

    def get_values(self) -> dict[str, Any]:
        """Values of all enabled fields, by fully qualified name.

        File fields are not included, see ``get_files``.
        """
        values = {}
        for name, field in self.fields.all().items():
            if field.is_disabled() or isinstance(field, FileField):
                continue
            if field.has_value():
                values[name] = field.value
        return values

    def get_files(self) -> dict[str, dict[str, Any]]:
        """Upload descriptors of all enabled file fields.

        Only forms sending a request body upload files.
        """
        if self.method not in BODY_METHODS:
            return {}

        files = {}
        for name, field in self.fields.all().items():
            if field.is_disabled():
                continue
            if isinstance(field, FileField):
                files[name] = field.value.model_dump()
        return files

    def get_php_values(self) -> dict[str, Any]:
        """Values nested by their bracketed names, like a server decodes
        them (``foo[bar]`` becomes ``{"foo": {"bar": ...}}``).

        Values that would not be encoded at all, such as an empty multiple
        select, are left out.
        """
        values: dict[str, Any] = {}
        for name, value in self.get_values().items():
            values = merge_recursive(values, expand_pair(name, value))
        return {key: listify(value) for key, value in values.items()}

    def get_php_files(self) -> dict[str, Any]:
        """Upload descriptors nested by their bracketed names."""
        files: dict[str, Any] = {}
        for name, upload in self.get_files().items():
            files = merge_recursive(files, nest(parse_name(name), upload))
        return {key: listify(value) for key, value in files.items()}

    def set_values(self, values: dict[str, Any]) -> Form:
        for name, value in values.items():
            self.fields.set(name, value)
        return self

    def fill(self, values: dict[str, Any]) -> Form:
        return self.set_values(values)

    def disable_validation(self) -> Form:
        """Let all select and radio fields accept values outside their
        options."""
        for field in self.fields.all().values():
            if isinstance(field, ChoiceField):
                field.disable_validation()
        return self

    def add_field(self, field: AnyField) -> Form:
        self.fields.add(field)
        return self

    def has_field(self, name: str) -> bool:
        return self.fields.has(name)

    def get_field(self, name: str) -> AnyField | dict[str, Any]:
        return self.fields.get(name)

    def remove_field(self, name: str) -> None:
        self.fields.remove(name)

    def all_fields(self) -> dict[str, AnyField]:
        return self.fields.all()

    def __contains__(self, name: str) -> bool:
        return self.has_field(name)

    def __getitem__(self, name: str) -> AnyField | dict[str, Any]:
        return self.get_field(name)

    def __setitem__(self, name: str, value: Any) -> None:
        self.fields.set(name, value)

    def __delitem__(self, name: str) -> None:
        self.remove_field(name)

    def __repr__(self) -> str:
        return f"<Form({self.method}, {self.get_uri()!r})>"
