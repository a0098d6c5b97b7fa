import pytest

from metrictree.core.node import SPAN_FACTOR, CoverTreeNode, cover_distance, covering_level


def test_cover_distance_uses_span_factor():
    assert SPAN_FACTOR == pytest.approx(1.3)
    assert cover_distance(0) == pytest.approx(1.0)
    assert cover_distance(2) == pytest.approx(1.69)
    assert cover_distance(-1) == pytest.approx(1 / 1.3)


def test_covering_level_is_smallest_sufficient_level():
    assert covering_level(2.0, minimum=1) == 3
    assert covering_level(1.2, minimum=1) == 1
    assert covering_level(0.0, minimum=-4) == -4
    assert covering_level(10.0, minimum=8) == 9


def test_node_defaults_and_helpers():
    node = CoverTreeNode("root", 2)

    assert node.children == []
    assert node.is_leaf()
    assert node.max_distance == 0.0
    assert node.cover_distance == pytest.approx(1.69)
    assert str(node) == "root"
    assert "level=2" in repr(node)

    node.add_child(CoverTreeNode("leaf", 1))
    assert not node.is_leaf()


def test_nodes_do_not_share_child_lists():
    first = CoverTreeNode("a", 0)
    second = CoverTreeNode("b", 0)
    first.add_child(CoverTreeNode("c", -1))

    assert second.children == []


def test_iter_preorder_visits_parents_before_children():
    root = CoverTreeNode("a", 2)
    left = CoverTreeNode("b", 1)
    right = CoverTreeNode("c", 1)
    left.add_child(CoverTreeNode("d", 0))
    root.add_child(left)
    root.add_child(right)

    assert [node.data for node in root.iter_preorder()] == ["a", "b", "d", "c"]
