"""Header tables and the two merge policies that combine them.

A header table maps a deploy path to an ordered list of header lines
(``"Name: value"``). Merges never mutate their inputs.

Merge Policies:
    default_merge(*tables)
        Union of values per path. Independent sources coexist; exact
        duplicate lines collapse, distinct lines with the same name stay.

    headers_merge(user, defaults)
        Named-header override. One line per header name survives and the
        user's line wins over the default's.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable, Mapping, Sequence

# Type aliases
HeaderLines = list[str]
HeaderTable = dict[str, HeaderLines]
HeaderTableLike = Mapping[str, Sequence[str]]

_HEADER_NAME_RE = re.compile(r"^([^:]+):")


def header_name(header: str) -> str | None:
    """Extract the header name (text before the first colon).

    The name keeps its spelling. Override merging compares names
    case-insensitively, so ``x-frame-options`` replaces ``X-Frame-Options``.

    Args:
        header: Header line such as ``"X-Frame-Options: DENY"``

    Returns:
        Stripped name, or None when the line has no name
    """
    match = _HEADER_NAME_RE.match(header)
    if not match:
        return None
    name = match.group(1).strip()
    return name or None


def _name_key(header: str) -> str:
    name = header_name(header)
    # Lines without a name are rejected at validation time; key them by value so they never collide
    return name.lower() if name is not None else header


def _union(*sequences: Iterable[str]) -> HeaderLines:
    return list(dict.fromkeys(line for lines in sequences for line in lines))


def copy_table(table: HeaderTableLike) -> HeaderTable:
    """Return a mutable deep copy of a header table."""
    return {path: list(lines) for path, lines in table.items()}


def default_merge(*tables: HeaderTableLike) -> HeaderTable:
    """Union-merge header tables.

    Paths keep first-seen order across the arguments. For each path the
    lines of every table are concatenated in argument order and exact
    duplicates are dropped, keeping the first occurrence.

    Args:
        *tables: Header tables, earliest first

    Returns:
        New merged header table
    """
    merged: HeaderTable = {}
    for table in tables:
        for path, lines in table.items():
            merged[path] = _union(merged.get(path, ()), lines)
    return merged


def headers_merge(user_headers: HeaderTableLike, default_headers: HeaderTableLike) -> HeaderTable:
    """Override-merge user headers onto default headers by header name.

    For each default path, the default lines are overlaid with the user's
    lines for the same path. Names are compared case-insensitively; a user
    line replaces the default line in place, user-only names are appended.
    Paths only present in ``user_headers`` are passed through afterwards.

    Args:
        user_headers: Headers declared by the user (these win)
        default_headers: Default policy headers

    Returns:
        New merged header table
    """
    merged: HeaderTable = {}

    for path, defaults in default_headers.items():
        if path not in user_headers:
            merged[path] = list(defaults)
            continue

        by_name: dict[str, str] = {}
        for header in defaults:
            by_name[_name_key(header)] = header
        for header in user_headers[path]:
            by_name[_name_key(header)] = header  # override if exists
        merged[path] = list(by_name.values())

    for path, lines in user_headers.items():
        if path not in merged:
            merged[path] = list(lines)

    return merged


def map_lines(table: HeaderTableLike, fn: Callable[[str], str]) -> HeaderTable:
    """Apply ``fn`` to every header line of every path."""
    return {path: [fn(line) for line in lines] for path, lines in table.items()}
