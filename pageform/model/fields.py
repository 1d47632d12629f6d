"""Form fields as pydantic models.

Each variant is built once from the element it was found in (see
``from_element``) and keeps its own state afterwards; changing the element
tree later does not update the field. All variants share the same surface:
``name``, ``value``, ``has_value()``, ``is_disabled()`` and ``set_value()``.
"""

from __future__ import annotations

import mimetypes
import os
from typing import TYPE_CHECKING, Annotated, Any, Literal, Union

from banal import ensure_list, is_listish
from pydantic import BaseModel, Field

from pageform.exc import (
    InvalidOption,
    LogicalTagMismatch,
    NotARadioInput,
    ValueTypeMismatch,
)
from pageform.util import (
    get_attribute,
    has_attribute,
    input_type,
    tag_name,
    text_content,
    to_string,
)

if TYPE_CHECKING:
    from lxml.etree import _Element

UPLOAD_ERR_OK = 0
UPLOAD_ERR_NO_FILE = 4
UPLOAD_ERRORS = (1, 2, 3, 4, 6, 7, 8)


def _check_tag(element: _Element, kind: str, *tags: str) -> str:
    tag = tag_name(element)
    if tag not in tags:
        raise LogicalTagMismatch(
            f"A {kind} can only be created from a {' or '.join(tags)} tag "
            f"({tag} given)."
        )
    return tag


class FormField(BaseModel):
    """Base class for all field types."""

    kind: str
    name: str
    value: Any = None
    disabled: bool = False

    def has_value(self) -> bool:
        """True if the field is part of the submitted values."""
        return self.value is not None

    def is_disabled(self) -> bool:
        return self.disabled

    def set_value(self, value: Any) -> None:
        self.value = to_string(value)


class InputField(FormField):
    """A text-like ``<input>`` (text, hidden, password, email, ...) or a
    ``<button>``."""

    kind: Literal["input"] = "input"
    value: str | None = None

    @classmethod
    def from_element(cls, element: _Element) -> InputField:
        _check_tag(element, "InputField", "input", "button")
        type_ = input_type(element)
        if type_ == "checkbox":
            raise LogicalTagMismatch(
                "Checkboxes should be instances of CheckBoxField."
            )
        if type_ == "file":
            raise LogicalTagMismatch("File inputs should be instances of FileField.")
        return cls(
            name=get_attribute(element, "name", ""),
            value=get_attribute(element, "value"),
            disabled=has_attribute(element, "disabled"),
        )


class TextareaField(FormField):
    kind: Literal["textarea"] = "textarea"
    value: str = ""

    def has_value(self) -> bool:
        return True

    @classmethod
    def from_element(cls, element: _Element) -> TextareaField:
        _check_tag(element, "TextareaField", "textarea")
        return cls(
            name=get_attribute(element, "name", ""),
            value=text_content(element),
            disabled=has_attribute(element, "disabled"),
        )


class CheckBoxField(FormField):
    """A checkbox submits its ``value`` attribute (or ``on``) while checked
    and nothing otherwise."""

    kind: Literal["checkbox"] = "checkbox"
    value: str | None = None
    checked_value: str = "on"

    def tick(self) -> None:
        self.set_value(True)

    def untick(self) -> None:
        self.set_value(False)

    def is_checked(self) -> bool:
        return self.has_value()

    def set_value(self, value: Any) -> None:
        # a submitted "0" unticks, like any other falsy value
        checked = bool(value) and value != "0"
        self.value = self.checked_value if checked else None

    @classmethod
    def from_element(cls, element: _Element) -> CheckBoxField:
        _check_tag(element, "CheckBoxField", "input")
        if input_type(element) != "checkbox":
            raise LogicalTagMismatch(
                "A CheckBoxField can only be created from an input tag with a "
                f"type of checkbox (given type is {input_type(element)})."
            )
        field = cls(
            name=get_attribute(element, "name", ""),
            checked_value=get_attribute(element, "value", "on"),
            disabled=has_attribute(element, "disabled"),
        )
        field.set_value(has_attribute(element, "checked"))
        return field


class ChoiceOption(BaseModel):
    """One ``<option>`` of a select or one radio button of a group."""

    value: str
    disabled: bool = False

    @classmethod
    def from_element(cls, element: _Element) -> ChoiceOption:
        default = text_content(element) or "on"
        return cls(
            value=get_attribute(element, "value", default),
            disabled=has_attribute(element, "disabled"),
        )


class ChoiceField(FormField):
    """Shared behaviour of fields restricted to a list of options."""

    options: list[ChoiceOption] = []
    validation_disabled: bool = False

    def has_value(self) -> bool:
        return len(self.options) > 0

    def is_disabled(self) -> bool:
        for option in self.options:
            if option.value == self.value and option.disabled:
                return True
        return False

    def disable_validation(self) -> ChoiceField:
        """Accept any value, not just the known options."""
        self.validation_disabled = True
        return self

    def available_option_values(self) -> list[str]:
        return [option.value for option in self.options]

    def contains_option(self, value: Any) -> bool:
        if self.validation_disabled:
            return True
        return value in self.available_option_values()

    def _check_option(self, value: Any) -> str:
        if value is not None:
            value = to_string(value)
        if not self.contains_option(value):
            raise InvalidOption(self.name, value, self.available_option_values())
        return value

    def set_value(self, value: Any) -> None:
        self.value = self._check_option(value)

    def select(self, value: Any) -> None:
        self.set_value(value)


class RadioGroup(ChoiceField):
    """All radio buttons sharing one name.

    A checked button wins; when none is checked the first enabled button
    is selected.
    """

    kind: Literal["radio"] = "radio"
    value: str | None = None

    def add_choice(self, element: _Element) -> None:
        if (
            tag_name(element) != "input"
            or input_type(element) != "radio"
            or get_attribute(element, "name") != self.name
        ):
            raise NotARadioInput(self.name)

        option = ChoiceOption.from_element(element)
        self.options.append(option)

        if has_attribute(element, "checked") or (
            self.value is None and not option.disabled
        ):
            self.value = option.value


class SelectField(ChoiceField):
    """A ``<select>``, holding a list of values when it is ``multiple``."""

    kind: Literal["select"] = "select"
    value: str | list[str] | None = None
    multiple: bool = False

    def is_multiple(self) -> bool:
        return self.multiple

    def is_disabled(self) -> bool:
        if self.disabled:
            return True
        return super().is_disabled()

    def add_choice(self, element: _Element) -> None:
        option = ChoiceOption.from_element(element)
        self.options.append(option)

        if has_attribute(element, "selected"):
            if self.multiple:
                self.value.append(option.value)
            else:
                self.value = option.value

    def set_value(self, value: Any) -> None:
        if is_listish(value):
            if not self.multiple:
                raise ValueTypeMismatch(self.name)
            value = [self._check_option(v) for v in value]
        else:
            value = self._check_option(value)

        if self.multiple:
            value = ensure_list(value)
        self.value = value

    @classmethod
    def from_element(cls, element: _Element) -> SelectField:
        _check_tag(element, "SelectField", "select")
        name = get_attribute(element, "name", "")
        multiple = has_attribute(element, "multiple")
        if multiple and name.endswith("[]"):
            # array-style names are handled by the registry
            name = name[:-2]

        field = cls(
            name=name,
            multiple=multiple,
            value=[] if multiple else None,
            disabled=has_attribute(element, "disabled"),
        )
        for option in element.xpath("descendant::option"):
            field.add_choice(option)

        # browsers select the first option of a single select by default
        if field.value is None and field.options:
            field.value = field.options[0].value
        return field


class FileUpload(BaseModel):
    """Upload descriptor, keyed the way server-side decoders expose files."""

    name: str = ""
    type: str = ""
    tmp_name: str = ""
    error: int = UPLOAD_ERR_NO_FILE
    size: int = 0


class FileField(FormField):
    kind: Literal["file"] = "file"
    value: FileUpload = Field(default_factory=FileUpload)

    def has_value(self) -> bool:
        return bool(self.value.name)

    def upload(self, path: str | os.PathLike | None) -> None:
        """Attach a local file, or clear the upload when it is not readable."""
        if path is not None and os.path.isfile(path) and os.access(path, os.R_OK):
            path = os.fspath(path)
            mime_type, _ = mimetypes.guess_type(path)
            self.value = FileUpload(
                name=os.path.basename(path),
                type=mime_type or "",
                tmp_name=path,
                error=UPLOAD_ERR_OK,
                size=os.path.getsize(path),
            )
        else:
            self.value = FileUpload()

    def set_value(self, value: Any) -> None:
        self.upload(value)

    def set_error_code(self, error: int) -> None:
        """Simulate a failed upload with one of the standard error codes."""
        if error not in UPLOAD_ERRORS:
            raise InvalidOption(self.name, error, [str(e) for e in UPLOAD_ERRORS])
        self.value = self.value.model_copy(update={"error": error})

    @classmethod
    def from_element(cls, element: _Element) -> FileField:
        _check_tag(element, "FileField", "input")
        if input_type(element) != "file":
            raise LogicalTagMismatch(
                "A FileField can only be created from an input tag with a type "
                f"of file (given type is {input_type(element)})."
            )
        return cls(
            name=get_attribute(element, "name", ""),
            disabled=has_attribute(element, "disabled"),
        )


AnyField = Annotated[
    Union[
        InputField,
        TextareaField,
        CheckBoxField,
        RadioGroup,
        SelectField,
        FileField,
    ],
    Field(discriminator="kind"),
]
