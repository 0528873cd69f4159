"""Context dataclass for pipeline execution.

Holds the fixed external data every stage may read. Stages never modify
the context; the header table is the only thing passed from stage to stage.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from netlify_headers.config import PluginOptions
from netlify_headers.inputs import Page, coerce_pages, load_manifest, load_pages
from netlify_headers.links import ExistsFn, LinkResolver, PublicFolder
from netlify_headers.preload import normalize_path_prefix

if TYPE_CHECKING:
    from netlify_headers.config import BuildSettings


@dataclass(frozen=True)
class Context:
    """Typed context for pipeline execution.

    Attributes:
        pages: Site pages
        manifest: Build manifest (asset name → hashed file name(s))
        public_folder: Output directory of the build
        path_prefix: Deploy path prefix ("" for a site at the domain root)
        options: Validated plugin options
        exists: Existence check for public files (defaults to public_folder.exists)
    """

    pages: tuple[Page, ...]
    manifest: Mapping[str, str | Sequence[str]]
    public_folder: PublicFolder
    path_prefix: str = ""
    options: PluginOptions = field(default_factory=PluginOptions)
    exists: ExistsFn | None = field(default=None, repr=False)

    @classmethod
    def create(
        cls,
        *,
        pages: Iterable[Page | Mapping[str, Any]],
        manifest: Mapping[str, str | Sequence[str]],
        public_folder: PublicFolder | str,
        path_prefix: str = "",
        options: PluginOptions | Mapping[str, Any] | None = None,
        exists: ExistsFn | None = None,
    ) -> Context:
        """Create a Context from loosely typed inputs.

        Raw option mappings are validated here, once. The path prefix is
        normalized the same way as in BuildSettings.

        Raises:
            OptionsShapeError: If options are in the wrong shape
            InputShapeError: If a page entry is malformed
        """
        if not isinstance(options, PluginOptions):
            options = PluginOptions.from_mapping(options)
        if not isinstance(public_folder, PublicFolder):
            public_folder = PublicFolder(public_folder)
        return cls(
            pages=coerce_pages(pages),
            manifest=manifest,
            public_folder=public_folder,
            path_prefix=normalize_path_prefix(path_prefix),
            options=options,
            exists=exists,
        )

    @classmethod
    def from_settings(cls, settings: BuildSettings) -> Context:
        """Load manifest and pages from the locations named in the settings.

        Raises:
            InputShapeError: If the manifest or pages file is malformed
            OSError: If either file cannot be read
        """
        return cls(
            pages=tuple(load_pages(settings.resolved_pages_path)),
            manifest=load_manifest(settings.resolved_manifest_path),
            public_folder=PublicFolder(settings.public_dir),
            path_prefix=settings.path_prefix,
            options=settings.plugin,
        )

    def file_exists(self, name: str) -> bool:
        """Check whether an unhashed file exists in the public folder."""
        check = self.exists or self.public_folder.exists
        return check(name)

    @property
    def resolver(self) -> LinkResolver:
        """Link resolver bound to this build's manifest, public folder and prefix."""
        return LinkResolver(self.manifest, self.file_exists, self.path_prefix)
