"""netlify-headers - build-time generator for the Netlify ``_headers`` file."""

from netlify_headers.build import build_headers, build_headers_program, render_headers
from netlify_headers.config import BuildSettings, PluginOptions
from netlify_headers.errors import (
    HeaderTransformError,
    InputShapeError,
    NetlifyHeadersError,
    OptionsShapeError,
    UnresolvableLinkError,
)
from netlify_headers.headers import HeaderTable, default_merge, header_name, headers_merge
from netlify_headers.inputs import Page
from netlify_headers.links import LinkResolver, PublicFolder
from netlify_headers.pipeline import Context, PipelineExecutor

__all__ = [
    "BuildSettings",
    "Context",
    "HeaderTable",
    "HeaderTransformError",
    "InputShapeError",
    "LinkResolver",
    "NetlifyHeadersError",
    "OptionsShapeError",
    "Page",
    "PipelineExecutor",
    "PluginOptions",
    "PublicFolder",
    "UnresolvableLinkError",
    "build_headers",
    "build_headers_program",
    "default_merge",
    "header_name",
    "headers_merge",
    "render_headers",
]
