"""Fixed-order header pipeline.

Every stage has the same shape:

    Stage sᵢ = (gᵢ, fᵢ) where:
        gᵢ: Context → Bool                       (guard)
        fᵢ: (HeaderTable, Context) → HeaderTable (handler)

    apply(s, t) = if guard(ctx) then handler(t, ctx) else t

Stages run strictly in order; no stage mutates a table it was given.
"""

from netlify_headers.pipeline.context import Context
from netlify_headers.pipeline.executor import PipelineExecutor
from netlify_headers.pipeline.stage import StageSpec, create_stage_spec, stage

__all__ = [
    "Context",
    "StageSpec",
    "stage",
    "create_stage_spec",
    "PipelineExecutor",
]
