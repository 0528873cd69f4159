"""Tests for the pipeline executor and its stages."""

import logging
from unittest.mock import Mock

import pytest

from netlify_headers.constants import IMMUTABLE_CACHING_HEADER
from netlify_headers.errors import HeaderTransformError, OptionsShapeError, UnresolvableLinkError
from netlify_headers.pipeline import PipelineExecutor, create_stage_spec, stage
from netlify_headers.pipeline.stage import always_true, get_stage_spec
from netlify_headers.pipeline.stages import (
    DEFAULT_STAGES,
    apply_all_page_headers,
    apply_caching_headers,
    apply_link_headers,
    apply_security_headers,
    apply_transform_headers,
    resolve_user_links,
    validate_headers,
)


class TestStageDecorator:
    def test_guard_found_by_convention(self):
        spec = get_stage_spec(apply_security_headers)

        assert spec.name == "apply_security_headers"
        assert spec.guard is not always_true

    def test_stage_without_guard_always_runs(self):
        assert get_stage_spec(validate_headers).guard is always_true

    def test_description_from_docstring(self):
        spec = get_stage_spec(apply_link_headers)

        assert spec.description == "Add preload hints for every page's script chunks."

    def test_explicit_guard_and_name(self):
        @stage(guard=lambda ctx: False, name="custom")
        def handler(table, ctx):
            return table

        spec = get_stage_spec(handler)

        assert spec.name == "custom"
        assert spec.should_run(Mock()) is False

    def test_undecorated_function_rejected(self):
        with pytest.raises(TypeError):
            get_stage_spec(lambda table, ctx: table)

    def test_create_stage_spec(self):
        spec = create_stage_spec("noop", lambda table, ctx: table)

        assert spec.guard is always_true
        assert spec.execute({"/": []}, Mock()) == {"/": []}


class TestPipelineExecutor:
    def test_default_order(self):
        executor = PipelineExecutor()

        assert executor.get_execution_order() == [
            "validate_headers",
            "resolve_user_links",
            "apply_security_headers",
            "apply_caching_headers",
            "apply_all_page_headers",
            "apply_link_headers",
            "apply_transform_headers",
        ]
        assert executor.stages == DEFAULT_STAGES

    def test_stages_run_in_order(self):
        calls = []

        def make(name):
            def handler(table, ctx):
                calls.append(name)
                return {**table, name: []}

            return create_stage_spec(name, handler)

        executor = PipelineExecutor([make("one"), make("two"), make("three")])
        result = executor.execute({}, Mock())

        assert calls == ["one", "two", "three"]
        assert list(result) == ["one", "two", "three"]

    def test_guard_false_skips_stage(self, caplog):
        handler = Mock()
        spec = create_stage_spec("skipped", handler, guard=lambda ctx: False)

        with caplog.at_level(logging.DEBUG):
            result = PipelineExecutor([spec]).execute({"/": ["A: 1"]}, Mock())

        handler.assert_not_called()
        assert result == {"/": ["A: 1"]}
        assert "Stage 'skipped' skipped (guard)" in caplog.text

    def test_errors_propagate(self, caplog):
        def boom(table, ctx):
            raise UnresolvableLinkError("Link: </x.js>", "x.js")

        executor = PipelineExecutor([create_stage_spec("boom", boom)])

        with caplog.at_level(logging.ERROR), pytest.raises(UnresolvableLinkError):
            executor.execute({}, Mock())

        assert "Stage 'boom' failed: UnresolvableLinkError" in caplog.text

    def test_duplicate_names_rejected(self):
        spec = create_stage_spec("same", lambda table, ctx: table)

        with pytest.raises(ValueError, match="same"):
            PipelineExecutor([spec, spec])

    def test_describe(self, make_context):
        ctx = make_context(mergeSecurityHeaders=False)

        enabled = {spec.name: on for spec, on in PipelineExecutor().describe(ctx)}

        assert enabled["apply_security_headers"] is False
        assert enabled["apply_link_headers"] is True
        assert enabled["apply_all_page_headers"] is False


class TestStages:
    """Each stage on its own."""

    def test_validate_rejects_bad_table(self, make_context):
        with pytest.raises(OptionsShapeError, match="wrong shape"):
            validate_headers({"/": ["nameless"]}, make_context())

    def test_validate_rejects_non_list(self, make_context):
        with pytest.raises(OptionsShapeError):
            validate_headers({"/": "A: 1"}, make_context())

    def test_validate_passes_copy(self, make_context):
        table = {"/": ["A: 1"]}

        result = validate_headers(table, make_context())

        assert result == table
        assert result["/"] is not table["/"]

    def test_resolve_user_links(self, make_context):
        result = resolve_user_links({"/": ["Link: </styles.css>; rel=preload; as=style"]}, make_context())

        assert result == {"/": ["Link: </styles-777aaa.css>; rel=preload; as=style"]}

    def test_resolve_user_links_fails_loudly(self, make_context):
        with pytest.raises(UnresolvableLinkError):
            resolve_user_links({"/": ["Link: </nope.js>; rel=preload"]}, make_context())

    def test_security_user_wins(self, make_context):
        result = apply_security_headers({"/*": ["X-Frame-Options: SAMEORIGIN"]}, make_context())

        assert "X-Frame-Options: SAMEORIGIN" in result["/*"]
        assert "X-Frame-Options: DENY" not in result["/*"]
        assert "X-Content-Type-Options: nosniff" in result["/*"]

    def test_caching(self, make_context):
        result = apply_caching_headers({"/": ["A: 1"]}, make_context())

        assert result["/app-111aaa.js"] == [IMMUTABLE_CACHING_HEADER]
        assert result["/"][0] == "A: 1"

    def test_all_page_headers(self, make_context):
        ctx = make_context(allPageHeaders=["Link: </fonts/inter.woff2>; rel=preload; as=font"])

        result = apply_all_page_headers({"/": ["A: 1"]}, ctx)

        assert result == {
            "/": ["A: 1", "Link: </fonts/inter.woff2>; rel=preload; as=font"],
            "/about/": ["Link: </fonts/inter.woff2>; rel=preload; as=font"],
        }

    def test_all_page_headers_with_prefix(self, make_context):
        ctx = make_context(allPageHeaders=["X-Page: 1"], path_prefix="/blog")

        result = apply_all_page_headers({}, ctx)

        assert list(result) == ["/blog/", "/blog/about/"]

    def test_all_page_headers_with_trailing_slash_prefix(self, make_context):
        ctx = make_context(allPageHeaders=["X-Page: 1"], path_prefix="/blog/")

        result = apply_all_page_headers({}, ctx)

        assert ctx.path_prefix == "/blog"
        assert list(result) == ["/blog/", "/blog/about/"]

    def test_link_headers(self, make_context):
        result = apply_link_headers({}, make_context())

        assert "Link: </path---index-444ddd.js>; rel=preload; as=script" in result["/"]

    def test_transform(self, make_context):
        ctx = make_context(transformHeaders=lambda headers, path: [*headers, f"X-Path: {path}"])

        result = apply_transform_headers({"/a": [], "/b": ["A: 1"]}, ctx)

        assert result == {"/a": ["X-Path: /a"], "/b": ["A: 1", "X-Path: /b"]}

    def test_transform_gets_a_copy(self, make_context):
        table = {"/": ["A: 1"]}

        def mutate(headers, path):
            headers.append("B: 2")
            return headers

        apply_transform_headers(table, make_context(transformHeaders=mutate))

        assert table == {"/": ["A: 1"]}

    @pytest.mark.parametrize("bad", [None, "A: 1", ["A: 1", 2]])
    def test_transform_bad_return(self, make_context, bad):
        ctx = make_context(transformHeaders=lambda headers, path: bad)

        with pytest.raises(HeaderTransformError):
            apply_transform_headers({"/": []}, ctx)
