"""Pipeline stages in execution order.

Each stage module declares its handler with @stage and, where the stage is
optional, a ``{stage_name}_guard`` that reads the plugin options.
"""

from netlify_headers.pipeline.stage import StageSpec, get_stage_spec
from netlify_headers.pipeline.stages.caching import apply_caching_headers
from netlify_headers.pipeline.stages.links import apply_all_page_headers, resolve_user_links
from netlify_headers.pipeline.stages.preload import apply_link_headers
from netlify_headers.pipeline.stages.security import apply_security_headers
from netlify_headers.pipeline.stages.transform import apply_transform_headers
from netlify_headers.pipeline.stages.validate import validate_headers

DEFAULT_STAGES: tuple[StageSpec, ...] = tuple(
    get_stage_spec(fn)
    for fn in (
        validate_headers,
        resolve_user_links,
        apply_security_headers,
        apply_caching_headers,
        apply_all_page_headers,
        apply_link_headers,
        apply_transform_headers,
    )
)

__all__ = [
    "DEFAULT_STAGES",
    "validate_headers",
    "resolve_user_links",
    "apply_security_headers",
    "apply_caching_headers",
    "apply_all_page_headers",
    "apply_link_headers",
    "apply_transform_headers",
]
