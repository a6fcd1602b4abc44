"""Tests for courier.routing.pattern — template compilation and matching."""

import pytest

from courier.errors import ConfigurationError, PatternError
from courier.routing.pattern import PathSegment, compile_pattern, split_path


class TestSplitPath:
    def test_root_has_no_segments(self) -> None:
        assert split_path("/") == ([], False)

    def test_empty_segments_dropped(self) -> None:
        assert split_path("//orders///42") == (["orders", "42"], False)

    def test_trailing_flag(self) -> None:
        assert split_path("/orders/") == (["orders"], True)


class TestCompile:
    def test_static(self) -> None:
        pattern = compile_pattern("/orders")
        assert pattern.segments == (PathSegment("orders"),)
        assert pattern.param_names == ()
        assert pattern.is_static is True

    def test_colon_param(self) -> None:
        pattern = compile_pattern("/orders/:id")
        assert pattern.segments[1] == PathSegment(":id", is_param=True, param_name="id")
        assert pattern.param_names == ("id",)

    def test_brace_param(self) -> None:
        pattern = compile_pattern("/orders/{id}/items/{item_id}")
        assert pattern.param_names == ("id", "item_id")
        assert pattern.is_static is False

    def test_root(self) -> None:
        pattern = compile_pattern("/")
        assert pattern.segments == ()
        assert pattern.trailing_slash is False

    def test_trailing_slash_recorded(self) -> None:
        assert compile_pattern("/orders/").trailing_slash is True
        assert compile_pattern("/orders").trailing_slash is False

    def test_compiling_twice_gives_equal_patterns(self) -> None:
        first = compile_pattern("/customers/:id/orders")
        second = compile_pattern("/customers/:id/orders")
        assert first == second
        for path in ("/customers/7/orders", "/customers/7", "/customers/7/orders/"):
            assert first.match(path) == second.match(path)


class TestMalformedTemplates:
    @pytest.mark.parametrize(
        "template",
        [
            "/orders/{id",
            "/orders/id}",
            "/orders/{{id}}",
            "/orders/{}",
            "/orders/x{id}",
            "/orders/:",
            "/orders/:1abc",
            "/orders/{my-id}",
        ],
    )
    def test_rejected(self, template: str) -> None:
        with pytest.raises(PatternError) as exc_info:
            compile_pattern(template)
        assert template in str(exc_info.value)

    def test_flask_style_rejected(self) -> None:
        with pytest.raises(PatternError, match=r"<param>"):
            compile_pattern("/share/<slug>")

    def test_duplicate_names_rejected(self) -> None:
        with pytest.raises(PatternError, match="Duplicate parameter 'id'"):
            compile_pattern("/a/:id/b/{id}")

    def test_must_start_with_slash(self) -> None:
        with pytest.raises(PatternError, match="must start with '/'"):
            compile_pattern("orders")

    def test_is_configuration_error(self) -> None:
        with pytest.raises(ConfigurationError):
            compile_pattern("/{")


class TestMatch:
    def test_params_bound_by_name(self) -> None:
        pattern = compile_pattern("/customers/:customer_id/orders/{order_id}")
        assert pattern.match("/customers/7/orders/42") == {
            "customer_id": "7",
            "order_id": "42",
        }

    def test_static_match_binds_nothing(self) -> None:
        assert compile_pattern("/orders/new").match("/orders/new") == {}

    def test_segment_count_must_agree(self) -> None:
        pattern = compile_pattern("/orders/:id")
        assert pattern.match("/orders") is None
        assert pattern.match("/orders/42/items") is None

    def test_literals_are_case_sensitive(self) -> None:
        assert compile_pattern("/orders").match("/Orders") is None

    def test_values_are_url_decoded(self) -> None:
        pattern = compile_pattern("/search/:term")
        assert pattern.match("/search/caf%C3%A9%20au%20lait") == {"term": "café au lait"}

    def test_trailing_slash_is_significant(self) -> None:
        assert compile_pattern("/orders").match("/orders/") is None
        assert compile_pattern("/orders/").match("/orders") is None
        assert compile_pattern("/orders/").match("/orders/") == {}

    def test_root_matches_only_root(self) -> None:
        pattern = compile_pattern("/")
        assert pattern.match("/") == {}
        assert pattern.match("/orders") is None

    def test_double_slashes_collapse(self) -> None:
        assert compile_pattern("/orders/:id").match("//orders//42") == {"id": "42"}


class TestBuild:
    def test_substitutes_and_quotes(self) -> None:
        pattern = compile_pattern("/search/{term}/page/:n")
        assert pattern.build({"term": "a b/c", "n": 2}) == "/search/a%20b%2Fc/page/2"

    def test_build_then_match_recovers_params(self) -> None:
        pattern = compile_pattern("/search/:term")
        assert pattern.match(pattern.build({"term": "a b/c"})) == {"term": "a b/c"}

    def test_keeps_trailing_slash(self) -> None:
        assert compile_pattern("/orders/:id/").build({"id": 1}) == "/orders/1/"

    def test_missing_param_raises(self) -> None:
        with pytest.raises(KeyError):
            compile_pattern("/orders/:id").build({})
