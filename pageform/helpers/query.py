"""Nested query string encoding.

Implements the bracket convention most server-side form decoders use:
``a[b]=1&a[c][]=2`` decodes to ``{"a": {"b": "1", "c": {"0": "2"}}}`` and
the encoder walks nested mappings and lists the other way around.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any
from urllib.parse import quote_plus, unquote_plus

from banal import is_listish, is_mapping

from pageform.helpers.names import next_index


def _items(data: Any):
    if is_mapping(data):
        return data.items()
    return enumerate(data)


def _encode(value: Any) -> str:
    if value is True:
        return "1"
    if value is False:
        return "0"
    return quote_plus(str(value), safe="")


def build_query(
    params: Mapping[str, Any] | list[Any], prefix: str | None = None
) -> str:
    """Encode nested parameters as a query string.

    ``None`` values and empty containers produce nothing.

    Example:
        >>> build_query({"a": {"b": "1"}, "c": ["x", "y"]})
        'a%5Bb%5D=1&c%5B0%5D=x&c%5B1%5D=y'
    """
    parts = []
    for key, value in _items(params):
        name = str(key) if prefix is None else f"{prefix}[{key}]"
        if value is None:
            continue
        if is_mapping(value) or is_listish(value):
            nested = build_query(value, name)
            if nested:
                parts.append(nested)
        else:
            parts.append(f"{_encode(name)}={_encode(value)}")
    return "&".join(parts)


def _query_segments(key: str) -> list[str] | None:
    base, bracket, rest = key.partition("[")
    if not base:
        return None
    segments = [base]
    rest = bracket + rest
    while rest.startswith("["):
        end = rest.find("]")
        if end < 0:
            if len(segments) == 1:
                # no closing bracket at all, the whole key is a plain name
                return [key]
            break
        segments.append(rest[1:end])
        rest = rest[end + 1 :]
    return segments


def _insert(tree: dict[str, Any], segments: list[str], value: Any) -> None:
    node = tree
    for segment in segments[:-1]:
        key = segment or next_index(node)
        child = node.get(key)
        if not isinstance(child, dict):
            child = node[key] = {}
        node = child
    key = segments[-1] or next_index(node)
    node[key] = value


def parse_query(query: str) -> dict[str, Any]:
    """Decode a query string into nested dicts.

    Later pairs override earlier ones, ``[]`` appends the next index and
    anything after the last closing bracket of a key is ignored.

    Example:
        >>> parse_query("a[b]=1&a[]=2&c=3")
        {'a': {'b': '1', '0': '2'}, 'c': '3'}
    """
    result: dict[str, Any] = {}
    for pair in (query or "").split("&"):
        if not pair:
            continue
        key, _, value = pair.partition("=")
        segments = _query_segments(unquote_plus(key))
        if segments is None:
            continue
        _insert(result, segments, unquote_plus(value))
    return result


def merge_recursive(
    base: dict[str, Any], update: Mapping[str, Any]
) -> dict[str, Any]:
    """Merge ``update`` into a copy of ``base``, descending into dicts."""
    result = dict(base)
    for key, value in update.items():
        current = result.get(key)
        if is_mapping(value) and is_mapping(current):
            result[key] = merge_recursive(current, value)
        else:
            result[key] = value
    return result


def expand_pair(name: str, value: Any) -> dict[str, Any]:
    """Decode a single bracketed name/value pair into a nested dict.

    The pair goes through the encoder and back, so values that would not be
    submitted (``None``, empty lists) yield an empty dict.
    """
    query = build_query({name: value})
    if not query:
        return {}
    return parse_query(query)


def nest(segments: list[str], value: Any) -> dict[str, Any]:
    """Wrap ``value`` into one dict level per path segment."""
    for segment in reversed(segments[1:]):
        value = {segment: value}
    return {segments[0]: value}


def listify(data: Any) -> Any:
    """Turn dict levels keyed exactly ``"0"`` to ``"n-1"`` into lists."""
    if not is_mapping(data):
        return data
    converted = {key: listify(value) for key, value in data.items()}
    keys = list(converted.keys())
    if keys and keys == [str(i) for i in range(len(keys))]:
        return list(converted.values())
    return converted
