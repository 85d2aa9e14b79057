"""Tests for quire.pages.sorting: strategies, manual override, memo."""

import pytest

from quire.errors import ConsistencyError
from quire.pages.sorting import OrderBy, SortEngine, SortStrategy, fingerprint_keys
from quire.pages.types import ChildInfo, Page


def _nodes(*pages: Page) -> dict[str, Page]:
    return {page.path: page for page in pages}


def _children(nodes: dict[str, Page]) -> dict[str, ChildInfo]:
    return {path: ChildInfo(page.slug) for path, page in nodes.items()}


def _blog() -> dict[str, Page]:
    return _nodes(
        Page(path="/c/blog/a", slug="a", title="Zulu", date=1580515200, modified=10),
        Page(path="/c/blog/b", slug="b", title="Alpha", date=1577836800, modified=30),
    )


class TestOrderByParse:
    @pytest.mark.parametrize(
        ("name", "strategy"),
        [
            ("title", SortStrategy.TITLE),
            ("date", SortStrategy.DATE),
            ("modified", SortStrategy.MODIFIED),
            ("slug", SortStrategy.SLUG),
            ("basename", SortStrategy.BASENAME),
            ("random", SortStrategy.RANDOM),
            ("manual", SortStrategy.DEFAULT),
            ("default", SortStrategy.DEFAULT),
            ("nonsense", SortStrategy.DEFAULT),
            ("Title", SortStrategy.DEFAULT),
            ("header", SortStrategy.DEFAULT),
        ],
    )
    def test_strategy_names(self, name: str, strategy: SortStrategy) -> None:
        assert OrderBy.parse(name).strategy is strategy

    def test_header_field(self) -> None:
        order = OrderBy.parse("header.author")
        assert order == OrderBy(SortStrategy.HEADER, field="author", default=None)

    def test_header_field_with_default(self) -> None:
        order = OrderBy.parse("header.meta.rank|5")
        assert order == OrderBy(SortStrategy.HEADER, field="meta.rank", default="5")


class TestStrategies:
    def test_date_ascending_and_descending(self) -> None:
        nodes = _blog()
        engine = SortEngine(nodes)

        asc = engine.sort("/c/blog", _children(nodes), "date")
        desc = engine.sort("/c/blog", _children(nodes), "date", direction="desc")

        assert list(asc) == ["/c/blog/b", "/c/blog/a"]
        assert list(desc) == ["/c/blog/a", "/c/blog/b"]

    def test_title(self) -> None:
        nodes = _blog()
        ordered = SortEngine(nodes).sort("/c/blog", _children(nodes), "title")
        assert list(ordered) == ["/c/blog/b", "/c/blog/a"]

    def test_modified(self) -> None:
        nodes = _blog()
        ordered = SortEngine(nodes).sort("/c/blog", _children(nodes), "modified")
        assert list(ordered) == ["/c/blog/a", "/c/blog/b"]

    def test_basename(self) -> None:
        nodes = _nodes(
            Page(path="/c/02.z", slug="z"),
            Page(path="/c/01.y", slug="y"),
        )
        ordered = SortEngine(nodes).sort("/c", _children(nodes), "basename")
        assert list(ordered) == ["/c/01.y", "/c/02.z"]

    def test_default_sorts_by_path(self) -> None:
        nodes = _nodes(Page(path="/c/b", slug="b"), Page(path="/c/a", slug="a"))
        ordered = SortEngine(nodes).sort("/c", _children(nodes), "manual")
        assert list(ordered) == ["/c/a", "/c/b"]

    def test_header_value_then_default_then_path(self) -> None:
        nodes = _nodes(
            Page(path="/c/x", slug="x", header={"rank": "b"}),
            Page(path="/c/y", slug="y", header={"rank": ""}),
            Page(path="/c/z", slug="z", header={"rank": "a"}),
        )
        engine = SortEngine(nodes)

        with_default = engine.sort("/c", _children(nodes), "header.rank|aa")
        without_default = engine.sort("/c", _children(nodes), "header.rank")

        assert list(with_default) == ["/c/z", "/c/y", "/c/x"]
        # Missing value falls back to the path "/c/y", which sorts first
        assert list(without_default) == ["/c/y", "/c/z", "/c/x"]

    def test_nested_header_field(self) -> None:
        nodes = _nodes(
            Page(path="/c/x", slug="x", header={"meta": {"rank": 2}}),
            Page(path="/c/y", slug="y", header={"meta": {"rank": 1}}),
        )
        ordered = SortEngine(nodes).sort("/c", _children(nodes), "header.meta.rank")
        assert list(ordered) == ["/c/y", "/c/x"]

    def test_mixed_key_types_do_not_fail(self) -> None:
        nodes = _nodes(
            Page(path="/c/x", slug="x", header={"rank": "high"}),
            Page(path="/c/y", slug="y", header={"rank": 3}),
        )
        ordered = SortEngine(nodes).sort("/c", _children(nodes), "header.rank")
        assert list(ordered) == ["/c/y", "/c/x"]

    def test_random_is_a_permutation_and_not_memoized(self) -> None:
        nodes = _nodes(*(Page(path=f"/c/{i:02d}", slug=str(i)) for i in range(20)))
        engine = SortEngine(nodes)

        ordered = engine.sort("/c", _children(nodes), "random")

        assert sorted(ordered) == sorted(nodes)
        assert ("/c", "random") not in engine.memo

    def test_empty_children(self) -> None:
        assert SortEngine({}).sort("/c", {}, "date") == {}


class TestStability:
    def test_equal_keys_keep_input_order(self) -> None:
        nodes = _nodes(
            Page(path="/c/q", slug="q", title="Same"),
            Page(path="/c/p", slug="p", title="Same"),
            Page(path="/c/r", slug="r", title="Same"),
        )
        ordered = SortEngine(nodes).sort("/c", _children(nodes), "title")
        assert list(ordered) == ["/c/q", "/c/p", "/c/r"]


class TestManualOrder:
    def test_manual_overrides_computed_order(self) -> None:
        nodes = _blog()
        ordered = SortEngine(nodes).sort("/c/blog", _children(nodes), "title", ["a", "b"])
        assert list(ordered) == ["/c/blog/a", "/c/blog/b"]

    def test_manual_reverses_path_order(self) -> None:
        nodes = _blog()
        ordered = SortEngine(nodes).sort("/c/blog", _children(nodes), "default", ["b", "a"])
        assert list(ordered) == ["/c/blog/b", "/c/blog/a"]

    def test_unlisted_follow_in_prior_order(self) -> None:
        nodes = _nodes(
            Page(path="/c/a", slug="a", title="4"),
            Page(path="/c/b", slug="b", title="3"),
            Page(path="/c/c", slug="c", title="2"),
            Page(path="/c/d", slug="d", title="1"),
        )
        ordered = SortEngine(nodes).sort("/c", _children(nodes), "title", ["c", "missing", "a"])
        assert list(ordered) == ["/c/c", "/c/a", "/c/d", "/c/b"]

    def test_manual_with_descending_reverses_everything(self) -> None:
        nodes = _blog()
        ordered = SortEngine(nodes).sort(
            "/c/blog", _children(nodes), "default", ["b", "a"], direction="desc"
        )
        assert list(ordered) == ["/c/blog/a", "/c/blog/b"]


class TestMemo:
    def test_entry_computed_once(self) -> None:
        nodes = _blog()
        engine = SortEngine(nodes)
        engine.sort("/c/blog", _children(nodes), "title")

        nodes["/c/blog/a"].title = "Aardvark"
        ordered = engine.sort("/c/blog", _children(nodes), "title")

        assert list(ordered) == ["/c/blog/b", "/c/blog/a"]

    def test_descending_does_not_mutate_memo(self) -> None:
        nodes = _blog()
        engine = SortEngine(nodes)
        engine.sort("/c/blog", _children(nodes), "date", direction="desc")

        assert list(engine.memo[("/c/blog", "date")]) == ["/c/blog/b", "/c/blog/a"]

    def test_hydrated_memo_is_used(self) -> None:
        nodes = _blog()
        memo = {("/c/blog", "title"): {"/c/blog/a": ChildInfo("a"), "/c/blog/b": ChildInfo("b")}}
        ordered = SortEngine(nodes, memo).sort("/c/blog", _children(nodes), "title")
        assert list(ordered) == ["/c/blog/a", "/c/blog/b"]

    def test_missing_page_is_consistency_error(self) -> None:
        nodes = _blog()
        children = _children(nodes)
        children["/c/blog/ghost"] = ChildInfo("ghost")

        with pytest.raises(ConsistencyError, match="Page does not exist: /c/blog/ghost"):
            SortEngine(nodes).sort("/c/blog", children, "date")


class TestFingerprintKeys:
    def test_same_keys_same_fingerprint(self) -> None:
        assert fingerprint_keys(["/a", "/b"]) == fingerprint_keys(["/a", "/b"])

    def test_order_and_manual_matter(self) -> None:
        assert fingerprint_keys(["/a", "/b"]) != fingerprint_keys(["/b", "/a"])
        assert fingerprint_keys(["/a"]) != fingerprint_keys(["/a"], ["a"])
