"""Shared fixtures for netlify-headers tests."""

from pathlib import Path
from typing import Any

import pytest

from netlify_headers.inputs import Page
from netlify_headers.links import PublicFolder
from netlify_headers.pipeline import Context


@pytest.fixture
def manifest() -> dict[str, Any]:
    """Build manifest with hashed chunks, a split chunk and a source file entry."""
    return {
        "app": ["app-111aaa.js", "app-111aaa.css"],
        "commons": "commons-222bbb.js",
        "pages-manifest": "pages-manifest-333ccc.js",
        "path---index": "path---index-444ddd.js",
        "component---src-pages-index-js": "component---src-pages-index-js-555eee.js",
        "component---src-pages-about-js": [
            "component---src-pages-about-js-666fff.js",
            "component---src-pages-about-js-666fff.css",
        ],
        "styles.css": "styles-777aaa.css",
    }


@pytest.fixture
def pages() -> tuple[Page, ...]:
    return (
        Page(path="/", component_chunk_name="component---src-pages-index-js"),
        Page(path="/about/", component_chunk_name="component---src-pages-about-js"),
    )


@pytest.fixture
def public_dir(tmp_path: Path) -> Path:
    """Public folder with one unhashed asset."""
    public = tmp_path / "public"
    (public / "fonts").mkdir(parents=True)
    (public / "fonts" / "inter.woff2").write_bytes(b"font")
    return public


@pytest.fixture
def make_context(manifest, pages, public_dir):
    """Factory for contexts with overridable options."""

    def factory(**options: Any) -> Context:
        return Context.create(
            pages=pages,
            manifest=manifest,
            public_folder=PublicFolder(public_dir),
            path_prefix=options.pop("path_prefix", ""),
            options=options,
        )

    return factory
