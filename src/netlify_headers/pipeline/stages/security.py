"""Merge the recommended security headers."""

from __future__ import annotations

from typing import TYPE_CHECKING

from netlify_headers.headers import HeaderTable, headers_merge
from netlify_headers.pipeline.stage import stage
from netlify_headers.rules import security_headers

if TYPE_CHECKING:
    from netlify_headers.pipeline.context import Context


def apply_security_headers_guard(ctx: Context) -> bool:
    """Guard: Run if mergeSecurityHeaders is enabled."""
    return ctx.options.merge_security_headers


@stage()
def apply_security_headers(table: HeaderTable, ctx: Context) -> HeaderTable:
    """Add security defaults; a user header with the same name replaces the default."""
    return headers_merge(table, security_headers())
