"""Exception types raised while building the headers file.

Every error here aborts the build. Nothing is retried or skipped.
"""

from __future__ import annotations


class NetlifyHeadersError(Exception):
    """Base class for all netlify-headers errors."""


class OptionsShapeError(NetlifyHeadersError, ValueError):
    """Plugin options are in the wrong shape."""


class InputShapeError(NetlifyHeadersError, ValueError):
    """A manifest or pages file could not be understood."""


class UnresolvableLinkError(NetlifyHeadersError):
    """A <...> reference in a header matches neither the manifest nor a public file.

    Attributes:
        header: The full header line containing the reference
        reference: The file name that could not be placed
    """

    def __init__(self, header: str, reference: str) -> None:
        self.header = header
        self.reference = reference
        super().__init__(
            f"Could not find the file specified in the Link header `{header}`. "
            f"Looked for `{reference}` in the build manifest (hashed) and in the "
            "public folder (unhashed). Check the public folder and your headers "
            "options to ensure you are pointing to a public file."
        )


class HeaderTransformError(NetlifyHeadersError, TypeError):
    """The transform_headers hook returned something other than a list of strings."""

    def __init__(self, path: str, result: object) -> None:
        self.path = path
        self.result = result
        super().__init__(
            f"transform_headers must return a list of header strings, "
            f"got {type(result).__name__} for path '{path}'"
        )
