"""Resolve <...> asset references in header lines.

A reference such as ``Link: </app.js>; rel=preload; as=script`` names a
build asset. It is rewritten to the deployed file name: the hashed name
from the build manifest when there is one, otherwise the literal name when
the file exists in the public folder. Anything else is a build error.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Mapping, Sequence
from pathlib import Path, PurePosixPath

from netlify_headers.constants import LINK_PATTERN
from netlify_headers.errors import UnresolvableLinkError
from netlify_headers.headers import HeaderTable, HeaderTableLike, map_lines

logger = logging.getLogger(__name__)

Manifest = Mapping[str, str | Sequence[str]]
ExistsFn = Callable[[str], bool]


class PublicFolder:
    """The build output directory.

    Attributes:
        root: Directory that is deployed as the site root
    """

    def __init__(self, root: Path | str) -> None:
        self.root = Path(root)

    def path(self, name: str) -> Path:
        """Absolute path of a file inside the public folder."""
        return self.root / name.lstrip("/")

    def exists(self, name: str) -> bool:
        """Check whether a file exists in the public folder."""
        return self.path(name).is_file()

    def __repr__(self) -> str:
        return f"PublicFolder({str(self.root)!r})"


def manifest_files(manifest: Manifest, key: str) -> list[str]:
    """Look up a manifest entry and normalize it to a list of file names.

    Args:
        manifest: Build manifest
        key: Asset identifier (chunk name or source file name)

    Returns:
        Output file names, empty when the key is absent
    """
    entry = manifest.get(key)
    if not entry:
        return []
    if isinstance(entry, str):
        return [entry]
    return [name for name in entry if name]


def _pick_hashed(reference: str, files: list[str]) -> str:
    suffix = PurePosixPath(reference).suffix
    for name in files:
        if PurePosixPath(name).suffix == suffix:
            return name
    return files[0]


class LinkResolver:
    """Rewrites asset references in header lines to deployable paths.

    Attributes:
        manifest: Build manifest (asset identifier → hashed file name(s))
        exists: Existence check for unhashed files in the public folder
        path_prefix: Deploy path prefix prepended to every resolved path
        pattern: Regex whose first group captures the referenced path (leading "/" included)
    """

    def __init__(
        self,
        manifest: Manifest,
        exists: ExistsFn,
        path_prefix: str = "",
        pattern: re.Pattern[str] = LINK_PATTERN,
    ) -> None:
        self.manifest = manifest
        self.exists = exists
        self.path_prefix = path_prefix
        self.pattern = pattern

    def resolve_reference(self, reference: str, header: str) -> str:
        """Resolve a single referenced file name to a prefixed deploy path.

        Args:
            reference: File name found between the angle brackets
            header: Full header line (for the error message)

        Returns:
            Prefixed path of the deployed file

        Raises:
            UnresolvableLinkError: If the file is neither in the manifest nor on disk
        """
        hashed = manifest_files(self.manifest, reference)
        if hashed:
            resolved = _pick_hashed(reference, hashed)
            logger.debug("Resolved '%s' to hashed file '%s'", reference, resolved)
            return f"{self.path_prefix}/{resolved}"

        if self.exists(reference):
            logger.debug("Resolved '%s' to public file", reference)
            return f"{self.path_prefix}/{reference}"

        raise UnresolvableLinkError(header, reference)

    def resolve(self, header: str) -> str:
        """Rewrite every reference in a header line.

        Text outside the references is left untouched; a line without
        references is returned unchanged.
        """

        def replace(match: re.Match[str]) -> str:
            resolved = self.resolve_reference(match.group(1).lstrip("/"), header)
            # Swap only the captured path; the pattern's delimiters stay
            start, end = match.start(1) - match.start(), match.end(1) - match.start()
            text = match.group(0)
            return f"{text[:start]}{resolved}{text[end:]}"

        return self.pattern.sub(replace, header)

    def resolve_table(self, table: HeaderTableLike) -> HeaderTable:
        """Resolve references in every line of a header table."""
        return map_lines(table, self.resolve)
