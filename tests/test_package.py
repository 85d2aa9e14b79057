"""Tests for the lazy top-level quire API."""

import pytest

import quire


class TestLazyImports:
    @pytest.mark.parametrize("name", quire.__all__)
    def test_public_names_resolve(self, name: str) -> None:
        assert getattr(quire, name) is not None

    def test_unknown_name(self) -> None:
        with pytest.raises(AttributeError, match="no attribute"):
            quire.NotAThing  # noqa: B018

    def test_end_to_end(self, site) -> None:
        index = quire.PageIndex(site, quire.PagesConfig(order_by="title"))
        tree = index.init()

        blog = index.dispatch("/blog")
        assert [p.title for p in tree.children(blog.path)] == ["Alpha", "Beta"]
        assert index.dispatch("/").title == "Home"
