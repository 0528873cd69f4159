"""Per-page `Link: rel=preload` hints derived from the page/chunk graph."""

from __future__ import annotations

import hashlib
import logging
import re
from collections.abc import Iterable
from pathlib import PurePosixPath

from netlify_headers.constants import COMMON_BUNDLES, PATH_CHUNK_PREFIX, SCRIPT_EXTENSIONS
from netlify_headers.headers import HeaderLines, HeaderTable
from netlify_headers.inputs import Page
from netlify_headers.links import Manifest, manifest_files

logger = logging.getLogger(__name__)

# Lower-case runs take any non-ASCII letter as well
_WORD_RE = re.compile(r"[A-Z]{2,}(?=[A-Z][a-z]|[^A-Za-z]|$)|[A-Z]?[^\W\dA-Z_]+|[A-Z]+|[0-9]+")
PATH_HASH_LENGTH = 3


def kebab_case(value: str) -> str:
    """Lower-case words of ``value`` joined by dashes."""
    return "-".join(word.lower() for word in _WORD_RE.findall(value))


def kebab_hash(value: str, length: int = PATH_HASH_LENGTH) -> str:
    """Kebab-cased value followed by a short md5 digest of the raw value."""
    digest = hashlib.md5(value.encode("utf-8")).hexdigest()[:length]  # noqa: S324
    kebab = kebab_case(value)
    return f"{kebab}-{digest}" if kebab else digest


def path_chunk_name(path: str) -> str:
    """Synthetic chunk name holding a route's data.

    ``/`` maps to ``path---index``; every other route maps to a stable
    short hash of the path so the name is unique and repeatable.
    """
    name = "index" if path == "/" else kebab_hash(path)
    return f"{PATH_CHUNK_PREFIX}{name}"


def link_template(asset_path: str, as_type: str = "script") -> str:
    """Render a preload Link header line."""
    return f"Link: <{asset_path}>; rel=preload; as={as_type}"


def is_script(file_name: str) -> bool:
    return PurePosixPath(file_name).suffix in SCRIPT_EXTENSIONS


def normalize_path_prefix(path_prefix: str | None) -> str:
    """Deploy prefix with a leading slash and no trailing slash ("" for the domain root)."""
    value = (path_prefix or "").strip().rstrip("/")
    if value and not value.startswith("/"):
        value = "/" + value
    return value


def headers_path(path_prefix: str, path: str) -> str:
    """Deploy path of a page route."""
    return f"{path_prefix}{path}"


def link_headers(chunks: Iterable[str], manifest: Manifest, path_prefix: str) -> HeaderLines:
    """Preload lines for every script output of the given chunks.

    Chunks missing from the manifest contribute nothing. Stylesheets and
    data files are inlined elsewhere and are never preloaded.

    Args:
        chunks: Chunk names in preload order
        manifest: Build manifest
        path_prefix: Deploy path prefix

    Returns:
        Ordered, de-duplicated Link header lines
    """
    lines: HeaderLines = []
    for chunk in chunks:
        files = manifest_files(manifest, chunk)
        if not files:
            logger.debug("Chunk '%s' not in manifest, no preload", chunk)
            continue
        for file_name in files:
            if not is_script(file_name):
                continue
            line = link_template(f"{path_prefix}/{file_name}")
            if line not in lines:
                lines.append(line)
    return lines


def page_chunks(page: Page) -> list[str]:
    """Chunks a page needs: common bundles, its route chunk, its component chunk."""
    return [*COMMON_BUNDLES, path_chunk_name(page.path), page.component_chunk_name]


def preload_headers_by_page(pages: Iterable[Page], manifest: Manifest, path_prefix: str) -> HeaderTable:
    """Build the preload header table, one entry per page.

    Args:
        pages: Site pages
        manifest: Build manifest
        path_prefix: Deploy path prefix

    Returns:
        Header table keyed by the page's deploy path
    """
    links_by_page: HeaderTable = {}
    for page in pages:
        path_key = headers_path(path_prefix, page.path)
        links_by_page[path_key] = link_headers(page_chunks(page), manifest, path_prefix)
    return links_by_page
