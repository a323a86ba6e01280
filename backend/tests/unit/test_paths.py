"""Unit tests for key-path tree helpers."""

import pytest

from studio_cms.domain.paths import (
    get_in,
    join_path,
    paths_overlap,
    prune,
    record_children,
    set_in,
    sorted_tree,
    split_path,
)


def test_split_and_join_tolerate_stray_slashes():
    assert split_path("/pricing//monthly/") == ["pricing", "monthly"]
    assert join_path("pricing/", "/monthly", "k1") == "pricing/monthly/k1"


def test_paths_overlap_for_ancestors_and_descendants():
    assert paths_overlap("pricing", "pricing/monthly/k1/order")
    assert paths_overlap("pricing/monthly/k1", "pricing")
    assert paths_overlap("", "features")
    assert not paths_overlap("pricing/monthly", "pricing/individual")
    assert not paths_overlap("features", "footer")


def test_get_in_returns_copy_and_none_for_absent():
    tree = {"features": {"a": {"name": "A"}}}
    node = get_in(tree, ["features", "a"])
    node["name"] = "changed"
    assert tree["features"]["a"]["name"] == "A"
    assert get_in(tree, ["services"]) is None
    assert get_in(tree, ["features", "a", "name", "deeper"]) is None


def test_set_in_creates_intermediate_nodes():
    tree: dict = {}
    set_in(tree, ["pricing", "monthly", "k1", "order"], 2)
    assert tree == {"pricing": {"monthly": {"k1": {"order": 2}}}}


def test_set_in_none_deletes_and_prunes_empty_ancestors():
    tree = {"features": {"a": {"name": "A"}}, "footer": {"text": "x"}}
    set_in(tree, ["features", "a"], None)
    assert tree == {"footer": {"text": "x"}}


def test_set_in_requires_a_segment():
    with pytest.raises(ValueError):
        set_in({}, [], 1)


def test_prune_drops_none_and_empty_mappings():
    assert prune({"a": None, "b": {}, "c": {"d": 1}}) == {"c": {"d": 1}}
    assert prune({"a": {"b": None}}) is None


def test_sorted_tree_orders_children_by_key():
    assert list(sorted_tree({"b": 1, "a": {"z": 1, "y": 2}})) == ["a", "b"]


def test_record_children_skips_scalars_and_non_mappings():
    assert record_children(None) == []
    assert record_children("text") == []
    assert record_children({"a": {"label": "A"}, "text": "x", "b": {}}) == [("a", {"label": "A"}), ("b", {})]
