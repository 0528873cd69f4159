"""Stage specification and decorator.

Defines the StageSpec class and @stage decorator. Every stage has the same
contract: it receives the header table built so far plus the context and
returns a new header table.
"""

from __future__ import annotations

import sys
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from netlify_headers.headers import HeaderTable
    from netlify_headers.pipeline.context import Context


# Type aliases
GuardFn = Callable[["Context"], bool]
HandlerFn = Callable[["HeaderTable", "Context"], "HeaderTable"]


def always_true(ctx: Context) -> bool:
    """Default guard that always returns True."""
    return True


@dataclass(frozen=True)
class StageSpec:
    """Specification for a pipeline stage.

    Attributes:
        name: Unique stage identifier
        handler: Function producing the next header table
        guard: Predicate that determines if the handler should run
        description: One-line summary shown by the CLI
    """

    name: str
    handler: HandlerFn
    guard: GuardFn = always_true
    description: str = ""

    def should_run(self, ctx: Context) -> bool:
        """Check if this stage is enabled for the given context."""
        return self.guard(ctx)

    def execute(self, table: HeaderTable, ctx: Context) -> HeaderTable:
        """Execute the stage handler.

        Args:
            table: Header table produced by the previous stage
            ctx: Pipeline context

        Returns:
            New header table
        """
        return self.handler(table, ctx)


def _first_doc_line(fn: Callable[..., object]) -> str:
    doc = (fn.__doc__ or "").strip()
    return doc.splitlines()[0] if doc else ""


def stage(*, guard: GuardFn | None = None, name: str | None = None) -> Callable[[HandlerFn], HandlerFn]:
    """Decorator to declare a function as a pipeline stage.

    Args:
        guard: Predicate that determines if the stage runs
        name: Stage name (defaults to the function name)

    Returns:
        Decorator function

    Example:
        # Define guard separately (naming convention: {stage_name}_guard)
        def apply_security_headers_guard(ctx: Context) -> bool:
            return ctx.options.merge_security_headers

        @stage()
        def apply_security_headers(table: HeaderTable, ctx: Context) -> HeaderTable:
            ...
    """

    def decorator(fn: HandlerFn) -> HandlerFn:
        resolved_guard = guard
        if resolved_guard is None:
            # Look for {fn_name}_guard in the same module
            module = sys.modules.get(fn.__module__)
            if module:
                resolved_guard = getattr(module, f"{fn.__name__}_guard", None)

        spec = StageSpec(
            name=name or fn.__name__,
            handler=fn,
            guard=resolved_guard or always_true,
            description=_first_doc_line(fn),
        )

        # Attach spec to function for introspection
        fn._stage_spec = spec  # type: ignore[attr-defined]
        return fn

    return decorator


def get_stage_spec(fn: HandlerFn) -> StageSpec:
    """Get the StageSpec attached by @stage.

    Raises:
        TypeError: If the function was not decorated with @stage
    """
    spec = getattr(fn, "_stage_spec", None)
    if not isinstance(spec, StageSpec):
        raise TypeError(f"{getattr(fn, '__name__', fn)!r} is not a pipeline stage")
    return spec


def create_stage_spec(
    name: str,
    handler: HandlerFn,
    *,
    guard: GuardFn | None = None,
    description: str = "",
) -> StageSpec:
    """Create a StageSpec programmatically (without decorator).

    Args:
        name: Unique stage identifier
        handler: Function producing the next header table
        guard: Predicate that determines if the handler should run
        description: One-line summary

    Returns:
        StageSpec instance
    """
    return StageSpec(
        name=name,
        handler=handler,
        guard=guard or always_true,
        description=description or _first_doc_line(handler),
    )
