"""End-to-end tests for building the _headers file."""

from pathlib import Path

import pytest

from netlify_headers.build import build_headers, build_headers_program, render_headers
from netlify_headers.constants import HEADER_COMMENT, IMMUTABLE_CACHING_HEADER, REVALIDATE_CACHING_HEADER
from netlify_headers.errors import UnresolvableLinkError
from netlify_headers.inputs import Page
from netlify_headers.links import PublicFolder
from netlify_headers.pipeline import Context


def link_lines(lines):
    return [line for line in lines if line.startswith("Link:")]


class TestPreloadScenario:
    """One root page with a component chunk and a route chunk."""

    @pytest.fixture
    def ctx(self, tmp_path: Path) -> Context:
        return Context.create(
            pages=[{"path": "/", "componentChunkName": "c1"}],
            manifest={"c1": "c1-abc123.js", "path---index": "idx-def456.js"},
            public_folder=PublicFolder(tmp_path),
            path_prefix="",
            options={
                "headers": {},
                "mergeLinkHeaders": True,
                "mergeSecurityHeaders": False,
                "mergeCachingHeaders": False,
            },
        )

    def test_two_preload_lines(self, ctx):
        table = build_headers(ctx)

        assert table == {
            "/": [
                "Link: </idx-def456.js>; rel=preload; as=script",
                "Link: </c1-abc123.js>; rel=preload; as=script",
            ]
        }

    def test_no_duplicates_with_other_stages_enabled(self, tmp_path: Path):
        ctx = Context.create(
            pages=[Page("/", "c1")],
            manifest={"c1": "c1-abc123.js", "path---index": "idx-def456.js"},
            public_folder=tmp_path,
            options={"headers": {"/": ["Link: </c1>; rel=preload; as=script"]}},
        )

        lines = build_headers(ctx)["/"]

        assert link_lines(lines) == [
            "Link: </c1-abc123.js>; rel=preload; as=script",
            "Link: </idx-def456.js>; rel=preload; as=script",
        ]
        assert len(lines) == len(set(lines))


class TestFullPipeline:
    def test_all_stages(self, make_context):
        ctx = make_context(
            headers={
                "/*": ["X-Frame-Options: SAMEORIGIN"],
                "/about/": ["Link: </styles.css>; rel=preload; as=style"],
            },
            allPageHeaders=["Link: </fonts/inter.woff2>; rel=preload; as=font"],
            transformHeaders=lambda headers, path: [h for h in headers if not h.startswith("X-XSS")],
        )

        table = build_headers(ctx)

        assert table["/*"] == [
            "X-Frame-Options: SAMEORIGIN",
            "X-Content-Type-Options: nosniff",
            "Referrer-Policy: same-origin",
        ]
        assert table["/about/"] == [
            "Link: </styles-777aaa.css>; rel=preload; as=style",
            "Link: </fonts/inter.woff2>; rel=preload; as=font",
            "Link: </commons-222bbb.js>; rel=preload; as=script",
            "Link: </app-111aaa.js>; rel=preload; as=script",
            "Link: </component---src-pages-about-js-666fff.js>; rel=preload; as=script",
        ]
        assert list(table)[:2] == ["/*", "/about/"]
        assert "/app-111aaa.js" in table

    def test_everything_disabled_keeps_user_headers(self, make_context):
        ctx = make_context(
            headers={"/x": ["A: 1"]},
            mergeSecurityHeaders=False,
            mergeLinkHeaders=False,
            mergeCachingHeaders=False,
        )

        assert build_headers(ctx) == {"/x": ["A: 1"]}

    def test_unresolvable_reference_aborts(self, make_context, public_dir: Path):
        ctx = make_context(headers={"/": ["Link: </missing.js>; rel=preload"]})

        with pytest.raises(UnresolvableLinkError):
            build_headers_program(ctx)

        assert not (public_dir / "_headers").exists()

    def test_path_prefix(self, make_context):
        table = build_headers(make_context(path_prefix="/blog", mergeSecurityHeaders=False))

        assert "/blog/" in table
        assert "/blog/about/" in table
        assert "/blog/app-111aaa.js" in table
        assert table["/blog/static/*"] == [IMMUTABLE_CACHING_HEADER]
        assert REVALIDATE_CACHING_HEADER in table["/blog/"]
        assert "/" not in table
        assert "/static/*" not in table


class TestBuildHeadersProgram:
    def test_writes_file(self, make_context, public_dir: Path):
        target = build_headers_program(make_context())

        assert target == public_dir / "_headers"
        text = target.read_text(encoding="utf-8")
        assert text.startswith(HEADER_COMMENT + "\n\n/*\n  X-Frame-Options: DENY\n")
        assert "\n\n/" not in text[len(HEADER_COMMENT) + 2 :]

    def test_idempotent(self, make_context):
        first = build_headers_program(make_context()).read_bytes()
        second = build_headers_program(make_context()).read_bytes()

        assert first == second

    def test_render_matches_written(self, make_context):
        ctx = make_context()

        assert render_headers(ctx) == build_headers_program(ctx).read_text(encoding="utf-8")
