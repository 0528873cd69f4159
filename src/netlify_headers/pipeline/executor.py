"""Pipeline executor with fixed-order execution.

Runs stages strictly in the order given. Stage errors are fatal: they are
logged and re-raised so the build fails.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from netlify_headers.headers import HeaderTable
    from netlify_headers.pipeline.context import Context
    from netlify_headers.pipeline.stage import StageSpec

logger = logging.getLogger(__name__)


class PipelineExecutor:
    """Executes stages in sequence, each receiving the previous stage's table.

    Attributes:
        stages: Stage specifications in execution order
    """

    def __init__(self, stages: Sequence[StageSpec] | None = None) -> None:
        """Initialize executor with stages.

        Args:
            stages: Stage specifications in execution order
                    (defaults to the standard headers pipeline)

        Raises:
            ValueError: If two stages share a name
        """
        if stages is None:
            from netlify_headers.pipeline.stages import DEFAULT_STAGES

            stages = DEFAULT_STAGES

        names = [spec.name for spec in stages]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise ValueError(f"Duplicate stage names: {', '.join(duplicates)}")

        self.stages: tuple[StageSpec, ...] = tuple(stages)
        logger.debug("Pipeline execution order: %s", " → ".join(names))

    def execute(self, table: HeaderTable, ctx: Context) -> HeaderTable:
        """Execute the pipeline.

        Args:
            table: Initial header table (the user's declared headers)
            ctx: Pipeline context

        Returns:
            Final header table
        """
        for spec in self.stages:
            table = self._execute_stage(table, spec, ctx)
        return table

    def _execute_stage(self, table: HeaderTable, spec: StageSpec, ctx: Context) -> HeaderTable:
        """Execute a single stage.

        Raises:
            Exception: Whatever the stage raised, after logging it
        """
        if not spec.should_run(ctx):
            logger.debug("Stage '%s' skipped (guard)", spec.name)
            return table

        logger.debug("Executing stage '%s'", spec.name)
        try:
            result = spec.execute(table, ctx)
        except Exception as e:
            logger.error(
                "Stage '%s' failed: %s: %s",
                spec.name,
                type(e).__name__,
                str(e),
            )
            raise

        logger.debug("Stage '%s' produced %d paths", spec.name, len(result))
        return result

    def get_execution_order(self) -> list[str]:
        """Get stage names in execution order."""
        return [spec.name for spec in self.stages]

    def describe(self, ctx: Context) -> list[tuple[StageSpec, bool]]:
        """Pair every stage with whether its guard passes for the context."""
        return [(spec, spec.should_run(ctx)) for spec in self.stages]
