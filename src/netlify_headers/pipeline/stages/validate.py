"""Header table shape check.

Runs first so every later stage can rely on path → list of named header lines.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from netlify_headers.errors import OptionsShapeError
from netlify_headers.headers import HeaderTable, header_name
from netlify_headers.pipeline.stage import stage

if TYPE_CHECKING:
    from netlify_headers.pipeline.context import Context


def check_header_table(table: Any) -> list[str]:
    """Collect every shape problem in a header table.

    Args:
        table: Candidate header table

    Returns:
        Problem descriptions (empty if the table is valid)
    """
    if not isinstance(table, Mapping):
        return [f"headers must be a mapping, got {type(table).__name__}"]

    problems: list[str] = []
    for path, lines in table.items():
        if not isinstance(path, str):
            problems.append(f"path {path!r} is not a string")
            continue
        if not isinstance(lines, list):
            problems.append(f"headers for '{path}' must be a list, got {type(lines).__name__}")
            continue
        for header in lines:
            if not isinstance(header, str) or header_name(header) is None:
                problems.append(f"header {header!r} for '{path}' is not a 'Name: value' string")
    return problems


@stage()
def validate_headers(table: HeaderTable, ctx: Context) -> HeaderTable:
    """Check the declared headers are a mapping of path to named header lines.

    Raises:
        OptionsShapeError: If the table is in the wrong shape
    """
    problems = check_header_table(table)
    if problems:
        raise OptionsShapeError(
            "The \"headers\" option is in the wrong shape. Pass a mapping with string keys "
            "(the paths) and lists of 'Name: value' strings as values (the headers).\n"
            + "\n".join(f"  - {p}" for p in problems)
        )
    return {path: list(lines) for path, lines in table.items()}
