"""Derive client method names from HTTP method + path.

Pattern: {method}{Segment}{Segment}...
  - split the path on '/', drop empty segments
  - strip placeholder braces, replace non-identifier characters with '_'
  - upper-case the first character of each segment

Examples:
  GET  /users               -> getUsers
  GET  /users/{id}          -> getUsersId
  POST /users/{id}/tags     -> postUsersIdTags
  GET  /api//v1.0/items     -> getApiV1_0Items

The scheme is not injective: GET /a/{x}y and GET /a/x{y} both give getAXy.
find_name_collisions() reports such cases.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

_BRACES = re.compile(r"[{}]")
_NON_IDENTIFIER = re.compile(r"\W")


def ref_name(ref: str) -> str:
    """Return the final path segment of a $ref pointer."""
    return ref.rsplit("/", 1)[-1]


def type_name(name: str) -> str:
    """Make a schema or $ref name usable as an interface/type identifier."""
    name = _NON_IDENTIFIER.sub("_", name)
    if not name or name[0].isdigit():
        name = "_" + name
    return name


def property_key(name: str) -> str:
    """Return a property name as an interface key, quoted unless it is an identifier."""
    if name.isidentifier():
        return name
    escaped = name.replace("\\", "\\\\").replace("'", "\\'")
    return f"'{escaped}'"


def _capitalize_segment(segment: str) -> str:
    name = _NON_IDENTIFIER.sub("_", _BRACES.sub("", segment))
    return name[:1].upper() + name[1:]


def path_to_identifier(path: str) -> str:
    """Convert a path template to a capitalized-segment identifier."""
    return "".join(_capitalize_segment(s) for s in path.split("/") if s)


def build_method_name(method: str, path: str) -> str:
    """Build a client method name like 'getUsersId'."""
    return method.lower() + path_to_identifier(path)


def find_name_collisions(
    pairs: Iterable[tuple[str, str]],
) -> dict[str, list[tuple[str, str]]]:
    """Return every method name produced by more than one (method, path) pair."""
    by_name: dict[str, list[tuple[str, str]]] = {}
    for method, path in pairs:
        by_name.setdefault(build_method_name(method, path), []).append((method, path))
    return {name: found for name, found in by_name.items() if len(found) > 1}
