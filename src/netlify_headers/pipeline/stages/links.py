"""Stages that resolve <...> asset references in user-declared headers."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from netlify_headers.headers import HeaderTable, default_merge
from netlify_headers.pipeline.stage import stage
from netlify_headers.preload import headers_path

if TYPE_CHECKING:
    from netlify_headers.pipeline.context import Context

logger = logging.getLogger(__name__)


@stage()
def resolve_user_links(table: HeaderTable, ctx: Context) -> HeaderTable:
    """Rewrite asset references in user headers to deployed file names.

    Raises:
        UnresolvableLinkError: If a reference matches no manifest entry and no public file
    """
    return ctx.resolver.resolve_table(table)


def apply_all_page_headers_guard(ctx: Context) -> bool:
    """Guard: Run if the site declared headers for every page."""
    return bool(ctx.options.all_page_headers)


@stage()
def apply_all_page_headers(table: HeaderTable, ctx: Context) -> HeaderTable:
    """Copy the allPageHeaders lines onto every page path (union merge).

    Raises:
        UnresolvableLinkError: If a reference in allPageHeaders cannot be resolved
    """
    resolver = ctx.resolver
    header_list = [resolver.resolve(header) for header in ctx.options.all_page_headers or []]

    duplicate_headers_by_page: HeaderTable = {}
    for page in ctx.pages:
        duplicate_headers_by_page[headers_path(ctx.path_prefix, page.path)] = list(header_list)

    logger.debug("Applied %d header(s) to %d page(s)", len(header_list), len(duplicate_headers_by_page))
    return default_merge(table, duplicate_headers_by_page)
