"""Bracketed field name utilities.

Form field names like ``user[address][street]`` or ``tags[]`` describe a
path into a nested structure. This module splits such names into path
segments, builds them back and flattens nested data into bracketed names.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

from banal import is_listish, is_mapping

from pageform.exc import MalformedFieldName

NAME_RE = re.compile(r"^(?P<base>[^\[]+)(?P<extra>\[.*)?$", re.S)
SEGMENT_RE = re.compile(r"^\[(?P<segment>.*?)\](?P<extra>.*)$", re.S)
INDEX_RE = re.compile(r"0|-?[1-9][0-9]*")


def parse_name(name: str) -> list[str]:
    """Split a field name into segments as a web browser would do.

    An empty segment (``[]``) stands for the next free index and is kept
    empty here; indexes are assigned when the field is stored.

    Raises:
        MalformedFieldName: If the name has no base or a broken bracket.

    Example:
        >>> parse_name("base[foo][3][]")
        ['base', 'foo', '3', '']
    """
    match = NAME_RE.match(name or "")
    if match is None:
        raise MalformedFieldName(name)
    segments = [match.group("base")]
    extra = match.group("extra") or ""
    while extra:
        match = SEGMENT_RE.match(extra)
        if match is None:
            raise MalformedFieldName(name)
        segments.append(match.group("segment"))
        extra = match.group("extra")
    return segments


def join_name(base: str, key: Any) -> str:
    """Append a key to a field name.

    Example:
        >>> join_name("foo", "bar")
        'foo[bar]'
        >>> join_name("", "bar")
        'bar'
    """
    if not base:
        return str(key)
    return f"{base}[{key}]"


def is_index(key: str) -> bool:
    return INDEX_RE.fullmatch(key) is not None


def next_index(node: Mapping[str, Any]) -> str:
    """The key an empty ``[]`` segment gets at this level of a tree."""
    indexes = [int(key) for key in node if is_index(key)]
    if not indexes:
        return "0"
    return str(max(max(indexes) + 1, 0))


def _items(data: Any):
    if is_mapping(data):
        return data.items()
    return enumerate(data)


def flatten(data: Mapping[str, Any] | list[Any], base: str = "") -> dict[str, Any]:
    """Flatten nested mappings and lists into fully qualified names.

    Example:
        >>> flatten({"bar": {"foo": ["x", "y"]}})
        {'bar[foo][0]': 'x', 'bar[foo][1]': 'y'}
    """
    output: dict[str, Any] = {}
    for key, value in _items(data):
        path = join_name(base, key)
        if is_mapping(value) or is_listish(value):
            output.update(flatten(value, path))
        else:
            output[path] = value
    return output
