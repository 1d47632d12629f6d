"""Field registry keyed by bracketed names."""

from __future__ import annotations

from typing import Any

from banal import is_listish, is_mapping

from pageform.exc import CompoundFieldMutation, UnreachableField
from pageform.helpers.names import flatten, next_index, parse_name
from pageform.model.fields import AnyField, SelectField

Node = dict[str, Any]


class FieldRegistry:
    """Tree of fields indexed by their bracketed name.

    Inner nodes are insertion ordered dicts keyed by path segment, leaves
    are field models. ``tags[]`` gets the next free index at insertion time,
    so two fields named ``tags[]`` end up as ``tags[0]`` and ``tags[1]``.
    A path holds either a field or a group of fields, never both.
    """

    def __init__(self) -> None:
        self._fields: Node = {}

    def _child(self, node: Node, segment: str, name: str) -> Node:
        key = segment or next_index(node)
        child = node.get(key)
        if child is None:
            child = node[key] = {}
        elif not isinstance(child, dict):
            # a field already sits where a group is needed
            raise CompoundFieldMutation(name)
        return child

    def add(self, field: AnyField) -> None:
        segments = parse_name(field.name)
        node = self._fields
        for segment in segments[:-1]:
            node = self._child(node, segment, field.name)

        key = segments[-1] or next_index(node)
        if isinstance(node.get(key), dict):
            raise CompoundFieldMutation(field.name)
        node[key] = field

    def remove(self, name: str) -> None:
        """Remove a field, or a group with all its children."""
        segments = parse_name(name)
        node: Any = self._fields
        for segment in segments[:-1]:
            if not isinstance(node, dict) or segment not in node:
                return
            node = node[segment]
        if isinstance(node, dict):
            node.pop(segments[-1], None)

    def get(self, name: str) -> AnyField | Node:
        """Return the field, or the dict of fields, at a given name.

        Raises:
            UnreachableField: If a segment of the path does not exist.
        """
        node: Any = self._fields
        for segment in parse_name(name):
            if not isinstance(node, dict) or segment not in node:
                raise UnreachableField(segment)
            node = node[segment]
        return node

    def has(self, name: str) -> bool:
        try:
            self.get(name)
        except UnreachableField:
            return False
        return True

    def set(self, name: str, value: Any) -> None:
        """Set the value of a field, or of a group of fields from a mapping.

        Raises:
            UnreachableField: If the field does not exist.
            CompoundFieldMutation: If a scalar is set on a group of fields.
        """
        target = self.get(name)
        structured = is_mapping(value) or is_listish(value)
        if isinstance(target, SelectField) or (
            not structured and not isinstance(target, dict)
        ):
            target.set_value(value)
        elif structured:
            for key, leaf in flatten(value, name).items():
                self.set(key, leaf)
        else:
            raise CompoundFieldMutation(name)

    def all(self) -> dict[str, AnyField]:
        """All fields by fully qualified name, depth first in insertion
        order."""
        return flatten(self._fields)

    def __repr__(self) -> str:
        return f"<FieldRegistry({list(self.all())!r})>"
