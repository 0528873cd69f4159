"""Security and caching header providers.

Default tables come in as arguments (see ``constants``) so each provider
is a pure function of what it is given.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from netlify_headers.constants import CACHING_HEADERS, IMMUTABLE_CACHING_HEADER, SECURITY_HEADERS, SYSTEM_CHUNKS
from netlify_headers.headers import HeaderTable, HeaderTableLike, copy_table, default_merge
from netlify_headers.inputs import Page
from netlify_headers.links import Manifest, manifest_files
from netlify_headers.preload import headers_path

logger = logging.getLogger(__name__)


def security_headers(defaults: HeaderTableLike = SECURITY_HEADERS) -> HeaderTable:
    """Recommended security headers for every path."""
    return copy_table(defaults)


def cached_chunks(pages: Iterable[Page], system_chunks: Iterable[str] = SYSTEM_CHUNKS) -> list[str]:
    """Chunk names whose output files are content-hashed and never change."""
    chunks = [page.component_chunk_name for page in pages]
    chunks.extend(system_chunks)
    return list(dict.fromkeys(chunks))


def immutable_file_headers(
    pages: Iterable[Page],
    manifest: Manifest,
    path_prefix: str = "",
    system_chunks: Iterable[str] = SYSTEM_CHUNKS,
) -> HeaderTable:
    """Map every hashed output file of the page and system chunks to an immutable cache header.

    Chunks that are not in the manifest are skipped.

    Args:
        pages: Site pages
        manifest: Build manifest
        path_prefix: Deploy path prefix
        system_chunks: Chunks cached regardless of page

    Returns:
        Header table with one immutable caching line per file
    """
    table: HeaderTable = {}
    for chunk in cached_chunks(pages, system_chunks):
        files = manifest_files(manifest, chunk)
        if not files:
            logger.debug("Chunk '%s' not in manifest, no caching header", chunk)
        for file_name in files:
            table[f"{path_prefix}/{file_name}"] = [IMMUTABLE_CACHING_HEADER]
    return table


def caching_headers(
    pages: Iterable[Page],
    manifest: Manifest,
    path_prefix: str = "",
    static: HeaderTableLike = CACHING_HEADERS,
) -> HeaderTable:
    """Derived immutable file headers union-merged with the static caching rules.

    Static rule paths are moved under the deploy prefix along with everything else.
    """
    prefixed_static = {headers_path(path_prefix, path): list(lines) for path, lines in static.items()}
    return default_merge(immutable_file_headers(pages, manifest, path_prefix), prefixed_static)
