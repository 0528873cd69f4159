"""Build the ``_headers`` file for a site.

    build_headers          Context → HeaderTable
    build_headers_program  Context → written file path
"""

from __future__ import annotations

import logging
from pathlib import Path

from netlify_headers.headers import HeaderTable
from netlify_headers.pipeline.context import Context
from netlify_headers.pipeline.executor import PipelineExecutor
from netlify_headers.serializer import transform_to_string, write_headers_file

logger = logging.getLogger(__name__)


def build_headers(ctx: Context, executor: PipelineExecutor | None = None) -> HeaderTable:
    """Run the header pipeline on the user's declared headers.

    Args:
        ctx: Pipeline context
        executor: Pipeline to run (defaults to the standard stages)

    Returns:
        Final header table
    """
    executor = executor or PipelineExecutor()
    table = executor.execute(ctx.options.user_headers(), ctx)
    logger.info(
        "Built headers for %d path(s) from %d page(s)",
        len(table),
        len(ctx.pages),
        extra={"event": "headers_built"},
    )
    return table


def render_headers(ctx: Context, executor: PipelineExecutor | None = None) -> str:
    """Run the pipeline and serialize the result."""
    return transform_to_string(build_headers(ctx, executor))


def build_headers_program(ctx: Context, executor: PipelineExecutor | None = None) -> Path:
    """Run the pipeline, serialize it and write ``_headers`` to the public folder.

    Returns:
        Path of the written file

    Raises:
        OptionsShapeError: If the declared headers are in the wrong shape
        UnresolvableLinkError: If a <...> reference cannot be placed
        HeaderTransformError: If transformHeaders returns a bad value
        OSError: If the file cannot be written
    """
    return write_headers_file(ctx.public_folder, render_headers(ctx, executor))
