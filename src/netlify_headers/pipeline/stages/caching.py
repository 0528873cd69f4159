"""Merge immutable caching headers for hashed files and the static caching rules."""

from __future__ import annotations

from typing import TYPE_CHECKING

from netlify_headers.headers import HeaderTable, default_merge
from netlify_headers.pipeline.stage import stage
from netlify_headers.rules import caching_headers

if TYPE_CHECKING:
    from netlify_headers.pipeline.context import Context


def apply_caching_headers_guard(ctx: Context) -> bool:
    """Guard: Run if mergeCachingHeaders is enabled."""
    return ctx.options.merge_caching_headers


@stage()
def apply_caching_headers(table: HeaderTable, ctx: Context) -> HeaderTable:
    """Add long-lived cache headers for hashed chunk files plus default caching rules."""
    return default_merge(table, caching_headers(ctx.pages, ctx.manifest, ctx.path_prefix))
