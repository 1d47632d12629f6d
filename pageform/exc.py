class PageformException(Exception):
    """Base exception class."""

    pass


class MalformedFieldName(PageformException, ValueError):
    """A field name does not follow the ``base[key][key2]`` notation."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f'Malformed field path "{name}"')


class UnreachableField(PageformException, LookupError):
    """A field path goes through a segment that does not exist."""

    def __init__(self, segment: str):
        self.segment = segment
        super().__init__(f'Unreachable field "{segment}"')


class CompoundFieldMutation(PageformException, ValueError):
    """A scalar operation was attempted on a path holding a group of fields."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f'Cannot set value on a compound field "{name}".')


class InvalidCurrentUri(PageformException, ValueError):
    """The URI of the current page is not absolute."""

    def __init__(self, uri: str):
        self.uri = uri
        super().__init__(f'Current URI must be an absolute URL ("{uri}").')


class LogicalTagMismatch(PageformException, TypeError):
    """An element of the wrong tag or type was given."""

    pass


class NotARadioInput(LogicalTagMismatch):
    """A choice added to a radio group is not a radio button of that group."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(
            f'Unable to add a choice for "{name}" as it is not a radio button.'
        )


class InvalidOption(PageformException, ValueError):
    """A choice field was given a value outside its options."""

    def __init__(self, name: str, value, options: list[str] | None = None):
        self.name = name
        self.value = value
        self.options = options or []
        msg = 'Input "%s" cannot take "%s" as a value (possible values: %s).'
        super().__init__(msg % (name, value, ", ".join(self.options)))


class ValueTypeMismatch(PageformException, TypeError):
    """A list of values was given to a field that takes a single value."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f'The value for "{name}" cannot be an array.')


class ElementNotFound(PageformException, LookupError):
    """No element in the document matches the query."""

    pass
