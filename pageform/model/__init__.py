from pageform.model.fields import (
    AnyField,
    CheckBoxField,
    ChoiceField,
    ChoiceOption,
    FileField,
    FileUpload,
    FormField,
    InputField,
    RadioGroup,
    SelectField,
    TextareaField,
)

__all__ = [
    "AnyField",
    "CheckBoxField",
    "ChoiceField",
    "ChoiceOption",
    "FileField",
    "FileUpload",
    "FormField",
    "InputField",
    "RadioGroup",
    "SelectField",
    "TextareaField",
]
