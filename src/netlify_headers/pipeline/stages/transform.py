"""Final per-path customization hook."""

from __future__ import annotations

from typing import TYPE_CHECKING

from netlify_headers.errors import HeaderTransformError
from netlify_headers.headers import HeaderTable
from netlify_headers.pipeline.stage import stage

if TYPE_CHECKING:
    from netlify_headers.pipeline.context import Context


@stage()
def apply_transform_headers(table: HeaderTable, ctx: Context) -> HeaderTable:
    """Run transformHeaders(lines, path) over every path.

    Raises:
        HeaderTransformError: If the hook returns anything but a list of strings
    """
    transform = ctx.options.transform_headers
    transformed: HeaderTable = {}
    for path, header_list in table.items():
        result = transform(list(header_list), path)
        if not isinstance(result, list) or not all(isinstance(h, str) for h in result):
            raise HeaderTransformError(path, result)
        transformed[path] = result
    return transformed
