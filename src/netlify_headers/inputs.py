"""Loaders for the build outputs the headers program consumes.

The manifest and the page list are produced by the site build. They are
read once and never modified.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from netlify_headers.errors import InputShapeError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Page:
    """A site route and the chunk holding its page component."""

    path: str
    component_chunk_name: str

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Page:
        """Create a Page from a pages.json entry.

        Accepts both ``componentChunkName`` and ``component_chunk_name``.

        Raises:
            InputShapeError: If path or chunk name is missing or not a string
        """
        path = data.get("path")
        chunk = data.get("componentChunkName", data.get("component_chunk_name"))
        if not isinstance(path, str) or not isinstance(chunk, str):
            raise InputShapeError(f"Page entries need string 'path' and 'componentChunkName', got {dict(data)!r}")
        return cls(path=path, component_chunk_name=chunk)


def _read_json(path: Path) -> Any:
    try:
        with path.open(encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise InputShapeError(f"{path} is not valid JSON: {e}") from e


def parse_manifest(data: Any) -> dict[str, str | list[str]]:
    """Validate a manifest mapping.

    Args:
        data: Decoded JSON

    Returns:
        Manifest with list values copied

    Raises:
        InputShapeError: If the manifest is not a mapping of string to file name(s)
    """
    if not isinstance(data, dict):
        raise InputShapeError("Manifest must be an object mapping asset names to file names")

    manifest: dict[str, str | list[str]] = {}
    for key, value in data.items():
        if isinstance(value, str):
            manifest[key] = value
        elif isinstance(value, list) and all(isinstance(v, str) for v in value):
            manifest[key] = list(value)
        else:
            raise InputShapeError(f"Manifest entry '{key}' must be a file name or a list of file names")
    return manifest


def parse_pages(data: Any) -> list[Page]:
    """Validate a page list.

    Raises:
        InputShapeError: If the data is not a list of page objects
    """
    if not isinstance(data, list):
        raise InputShapeError("Pages must be a list of page objects")
    pages = []
    for entry in data:
        if not isinstance(entry, dict):
            raise InputShapeError(f"Page entry must be an object, got {type(entry).__name__}")
        pages.append(Page.from_dict(entry))
    return pages


def load_manifest(path: Path | str) -> dict[str, str | list[str]]:
    """Load a build manifest JSON file."""
    path = Path(path)
    manifest = parse_manifest(_read_json(path))
    logger.debug("Loaded %d manifest entries from %s", len(manifest), path)
    return manifest


def load_pages(path: Path | str) -> list[Page]:
    """Load a pages JSON file."""
    path = Path(path)
    pages = parse_pages(_read_json(path))
    logger.debug("Loaded %d pages from %s", len(pages), path)
    return pages


def coerce_pages(pages: Iterable[Page | Mapping[str, Any]]) -> tuple[Page, ...]:
    """Accept Page instances or raw mappings."""
    return tuple(page if isinstance(page, Page) else Page.from_dict(page) for page in pages)
