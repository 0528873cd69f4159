"""Static default data for the headers program.

Everything here is immutable. Providers receive these tables as explicit
arguments and copy them before merging.
"""

import re
from types import MappingProxyType

HEADER_COMMENT = """## Created with netlify-headers
##
## This file is generated at build time. Edit the "headers" plugin options
## instead of changing it by hand.
##
## https://docs.netlify.com/routing/headers/"""

NETLIFY_HEADERS_FILENAME = "_headers"

# Chunks every page loads
COMMON_BUNDLES: tuple[str, ...] = ("commons", "app")

# Chunks whose files are cached as immutable regardless of page
SYSTEM_CHUNKS: tuple[str, ...] = ("pages-manifest", "app")

# Marker for the synthetic per-route chunk name
PATH_CHUNK_PREFIX = "path---"

SCRIPT_EXTENSIONS: frozenset[str] = frozenset({".js"})

IMMUTABLE_CACHING_HEADER = "Cache-Control: public, max-age=31536000, immutable"
REVALIDATE_CACHING_HEADER = "Cache-Control: public, max-age=0, must-revalidate"

SECURITY_HEADERS: MappingProxyType[str, tuple[str, ...]] = MappingProxyType(
    {
        "/*": (
            "X-Frame-Options: DENY",
            "X-XSS-Protection: 1; mode=block",
            "X-Content-Type-Options: nosniff",
            "Referrer-Policy: same-origin",
        ),
    }
)

CACHING_HEADERS: MappingProxyType[str, tuple[str, ...]] = MappingProxyType(
    {
        "/static/*": (IMMUTABLE_CACHING_HEADER,),
        "/sw.js": (REVALIDATE_CACHING_HEADER,),
        "/*.html": (REVALIDATE_CACHING_HEADER,),
        "/": (REVALIDATE_CACHING_HEADER,),
    }
)

# <path/to/file> token inside a header value; <//host> and <https://...> never match
LINK_PATTERN = re.compile(r"<(?!//)(/[^>\s]+)>")
