"""Render a header table in the Netlify ``_headers`` format.

Format::

    <comment>

    /path
      Header-A: value
      Header-B: value
    /other-path
      ...

See https://docs.netlify.com/routing/headers/
"""

from __future__ import annotations

import logging
from pathlib import Path

from netlify_headers.constants import HEADER_COMMENT, NETLIFY_HEADERS_FILENAME
from netlify_headers.headers import HeaderTableLike
from netlify_headers.links import PublicFolder

logger = logging.getLogger(__name__)

INDENT = "  "


def stringify_headers(headers: HeaderTableLike) -> str:
    """Each path on its own line, then its headers indented by two spaces."""
    parts: list[str] = []
    for path, header_list in headers.items():
        parts.append(f"{path}\n")
        parts.extend(f"{INDENT}{header}\n" for header in header_list)
    return "".join(parts)


def transform_to_string(headers: HeaderTableLike, comment: str = HEADER_COMMENT) -> str:
    """Full file contents: comment block, blank line, path blocks."""
    return f"{comment}\n\n{stringify_headers(headers)}"


def write_headers_file(public_folder: PublicFolder, contents: str) -> Path:
    """Write the headers file into the public folder.

    Returns:
        Path of the written file

    Raises:
        OSError: If the file cannot be written
    """
    target = public_folder.path(NETLIFY_HEADERS_FILENAME)
    target.write_text(contents, encoding="utf-8")
    logger.info(
        "Wrote %s (%d bytes)",
        target,
        len(contents.encode("utf-8")),
        extra={"event": "headers_file_written", "path": str(target)},
    )
    return target
