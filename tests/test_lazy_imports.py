"""Tests for courier's lazy top-level exports."""

import pytest

import courier


class TestLazyImports:
    @pytest.mark.parametrize("name", courier.__all__)
    def test_every_export_resolves(self, name: str) -> None:
        assert getattr(courier, name) is not None

    def test_unknown_attribute(self) -> None:
        with pytest.raises(AttributeError, match="has no attribute 'Router'"):
            courier.Router  # noqa: B018

    def test_same_objects_as_submodules(self) -> None:
        from courier.dispatch.dispatcher import Dispatcher
        from courier.errors import NotFound

        assert courier.Dispatcher is Dispatcher
        assert courier.NotFound is NotFound
