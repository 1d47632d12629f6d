"""Link target resolution.

Resolves the raw ``href`` or ``action`` of an element against the URI of
the page it was found on, with plain string operations so that the output
matches what a browser puts in its address bar.
"""

from __future__ import annotations

import re

from pageform.exc import InvalidCurrentUri

SCHEME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*:")
CURRENT_URI_RE = re.compile(r"^(https?|file):", re.I)
SCHEME_PREFIX_RE = re.compile(r"^([^/]*)//.*$", re.S)
AUTHORITY_RE = re.compile(r"^(.*?//[^/]*)(?:/.*)?$", re.S)


def check_current_uri(uri: str | None) -> str:
    """Make sure the URI of the current page is absolute (or empty).

    Raises:
        InvalidCurrentUri: If the URI is not an http, https or file URL.
    """
    uri = uri or ""
    if uri and CURRENT_URI_RE.match(uri) is None:
        raise InvalidCurrentUri(uri)
    return uri


def strip_fragment(uri: str) -> str:
    return uri.split("#", 1)[0]


def strip_query(uri: str) -> str:
    return uri.split("?", 1)[0]


def canonicalize_path(path: str) -> str:
    """Remove ``.`` and ``..`` segments from a path (RFC 3986, 5.2.4).

    Going above the root is not an error, there is just nothing left to
    remove.

    Example:
        >>> canonicalize_path("/foo/bar/../baz/./")
        '/foo/baz/'
    """
    if path in ("", "/"):
        return path
    if path.endswith("."):
        path = f"{path}/"
    output: list[str] = []
    for segment in path.split("/"):
        if segment == "..":
            if output:
                output.pop()
        elif segment != ".":
            output.append(segment)
    return "/".join(output)


def resolve_uri(href: str | None, current_uri: str) -> str:
    """Resolve a raw link target against the URI of the current page.

    Example:
        >>> resolve_uri("../foo", "http://localhost/bar/baz/")
        'http://localhost/bar/foo'
        >>> resolve_uri("?page=2", "http://localhost/list?page=1#top")
        'http://localhost/list?page=2'
    """
    uri = (href or "").strip()

    # already absolute
    if SCHEME_RE.match(uri):
        return uri

    if not uri:
        return current_uri

    if uri.startswith("#"):
        return strip_fragment(current_uri) + uri

    base_uri = strip_query(strip_fragment(current_uri))

    if uri.startswith("?"):
        return base_uri + uri

    # scheme relative
    if uri.startswith("//"):
        return SCHEME_PREFIX_RE.sub(r"\1", base_uri) + uri

    base_uri = AUTHORITY_RE.sub(r"\1", base_uri)

    if uri.startswith("/"):
        return base_uri + uri

    path = strip_query(strip_fragment(current_uri[len(base_uri) :]))
    path = path[: path.rfind("/")] if "/" in path else ""
    path = canonicalize_path(f"{path}/{uri}")
    if path.startswith("/"):
        path = path[1:]
    return f"{base_uri}/{path}"
