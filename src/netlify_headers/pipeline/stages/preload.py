"""Merge per-page preload Link headers."""

from __future__ import annotations

from typing import TYPE_CHECKING

from netlify_headers.headers import HeaderTable, default_merge
from netlify_headers.pipeline.stage import stage
from netlify_headers.preload import preload_headers_by_page

if TYPE_CHECKING:
    from netlify_headers.pipeline.context import Context


def apply_link_headers_guard(ctx: Context) -> bool:
    """Guard: Run if mergeLinkHeaders is enabled."""
    return ctx.options.merge_link_headers


@stage()
def apply_link_headers(table: HeaderTable, ctx: Context) -> HeaderTable:
    """Add preload hints for every page's script chunks."""
    per_page_headers = preload_headers_by_page(ctx.pages, ctx.manifest, ctx.path_prefix)
    return default_merge(table, per_page_headers)
