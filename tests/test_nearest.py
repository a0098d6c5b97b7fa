import math

import numpy as np
import pytest

from metrictree import CoverTree, EmptyTreeError, build
from metrictree.core.metrics import get_metric
from metrictree.queries import nearest
from tests.utils.datasets import bruteforce_nearest, gaussian_tuples

COLINEAR = [0.0, 1.0, 2.0, 5.0, 20.0]
PRUNING_MODES = ["root", "subtree"]


def _child_order(tree: CoverTree):
    return [[id(child) for child in node.children] for node in tree.root.iter_preorder()]


@pytest.mark.parametrize("pruning", PRUNING_MODES)
def test_empty_tree_query_is_rejected(pruning: str):
    tree = build([], "absolute", pruning=pruning)

    assert tree.root is None
    assert tree.max_distance == 0.0
    with pytest.raises(EmptyTreeError):
        tree.find_nearest(1.0)
    with pytest.raises(ValueError):
        tree.find_nearest_with_distance(1.0)


def test_empty_tree_accepts_later_insertions():
    tree = build([], "absolute")
    tree.insert(3.0)

    assert tree.find_nearest(100.0) == 3.0


@pytest.mark.parametrize("pruning", PRUNING_MODES)
def test_single_point_is_always_nearest(pruning: str):
    tree = build([7.5], "absolute", pruning=pruning)

    assert tree.find_nearest(7.5) == 7.5
    assert tree.find_nearest(-3.0) == 7.5
    assert tree.find_nearest_with_distance(10.0) == (7.5, pytest.approx(2.5))


@pytest.mark.parametrize("pruning", PRUNING_MODES)
def test_colinear_points_match_bruteforce(pruning: str):
    metric = get_metric("absolute")
    tree = build(COLINEAR, metric, pruning=pruning)

    assert tree.find_nearest(3.0) == 2.0
    assert tree.find_nearest(12.0) == 5.0
    for query in (3.0, 12.0):
        expected, _ = bruteforce_nearest(COLINEAR, query, metric)
        assert tree.find_nearest(query) == expected
    assert tree.find_nearest_with_distance(12.0) == (5.0, pytest.approx(7.0))


@pytest.mark.parametrize("pruning", PRUNING_MODES)
def test_incumbent_wins_ties(pruning: str):
    # After inserting 2.0 the root holds 2.0 with 0.0 as its child, so the
    # root is reached first and keeps the tie.
    tree = build([0.0, 2.0], "absolute", pruning=pruning)

    assert tree.root.data == 2.0
    assert tree.find_nearest(1.0) == 2.0


def test_subtree_pruning_matches_bruteforce_on_gaussian_points():
    metric = get_metric("euclidean")
    rng = np.random.default_rng(2024)
    points = gaussian_tuples(rng, 200, 3)
    queries = gaussian_tuples(rng, 50, 3)
    tree = build(points, metric, pruning="subtree")

    for query in queries:
        found, distance = tree.find_nearest_with_distance(query)
        _, expected_distance = bruteforce_nearest(points, query, metric)
        assert distance == pytest.approx(expected_distance, rel=1e-12, abs=1e-12)
        assert metric(found, query) == pytest.approx(distance)


def test_subtree_pruning_finds_every_inserted_point():
    metric = get_metric("euclidean")
    points = gaussian_tuples(np.random.default_rng(11), 200, 2)
    tree = build(points, metric, pruning="subtree")

    for point in points:
        found, distance = tree.find_nearest_with_distance(point)
        assert distance == 0.0
        assert found == point


def test_root_pruning_matches_bruteforce_on_gaussian_points():
    metric = get_metric("euclidean")
    rng = np.random.default_rng(2024)
    points = gaussian_tuples(rng, 200, 3)
    queries = gaussian_tuples(rng, 50, 3)
    tree = build(points, metric, pruning="root")

    for query in queries:
        found, distance = tree.find_nearest_with_distance(query)
        _, expected_distance = bruteforce_nearest(points, query, metric)
        assert distance == pytest.approx(expected_distance, rel=1e-12, abs=1e-12)
        assert metric(found, query) == pytest.approx(distance)


def test_root_pruning_finds_every_inserted_point():
    metric = get_metric("euclidean")
    points = gaussian_tuples(np.random.default_rng(11), 200, 3)
    tree = build(points, metric, pruning="root")

    for point in points:
        found, distance = tree.find_nearest_with_distance(point)
        assert distance == 0.0
        assert found == point


ROOT_PRUNING_MISS = [
    -29.594805008570063,
    -91.87555069581903,
    96.59341411576975,
    -84.96054230272696,
    -94.90678203455845,
    -56.93941639878879,
]


def test_root_pruning_is_approximate_and_can_miss_a_stored_point():
    # The exact match sits below 96.59, and d(96.59, incumbent) - max_distance
    # already reaches the incumbent's distance, so the tree-wide bound skips
    # that branch and a neighbour of the query is returned instead.
    query = ROOT_PRUNING_MISS[1]
    tree = build(ROOT_PRUNING_MISS, "absolute", pruning="root")

    found, distance = tree.find_nearest_with_distance(query)

    assert found == -94.90678203455845
    assert distance > 0.0
    assert distance == pytest.approx(abs(found - query))

    exact = build(ROOT_PRUNING_MISS, "absolute", pruning="subtree")
    assert exact.find_nearest_with_distance(query) == (query, 0.0)


def test_repeated_queries_are_idempotent_and_leave_children_in_place():
    points = gaussian_tuples(np.random.default_rng(8), 120, 2)
    tree = build(points, "euclidean")
    before = _child_order(tree)

    for query in gaussian_tuples(np.random.default_rng(9), 20, 2):
        assert tree.find_nearest(query) == tree.find_nearest(query)
    assert _child_order(tree) == before


@pytest.mark.parametrize("pruning", PRUNING_MODES)
def test_identical_builds_give_identical_answers(pruning: str):
    points = gaussian_tuples(np.random.default_rng(21), 150, 4)
    queries = gaussian_tuples(np.random.default_rng(22), 40, 4)
    first = build(points, "euclidean", pruning=pruning)
    second = build(points, "euclidean", pruning=pruning)

    assert [first.find_nearest(q) for q in queries] == [second.find_nearest(q) for q in queries]


def test_custom_metric_over_colour_tuples():
    def rgb_distance(a, b):
        return math.sqrt(sum((x - y) ** 2 for x, y in zip(a, b)))

    palette = [(255, 0, 0), (0, 255, 0), (0, 0, 255), (255, 255, 255), (0, 0, 0)]
    tree = build(palette, rgb_distance)

    assert tree.metric.name == "custom"
    assert tree.find_nearest((250, 10, 10)) == (255, 0, 0)
    assert tree.find_nearest((20, 20, 20)) == (0, 0, 0)
    assert tree.find_nearest((240, 240, 250)) == (255, 255, 255)


def test_nearest_function_reports_visit_counts():
    tree = build(COLINEAR, "absolute", pruning="subtree")
    result = nearest(
        tree.root,
        3.0,
        tree.metric,
        pruning="subtree",
    )

    assert result.point == 2.0
    assert result.distance == pytest.approx(1.0)
    assert 1 <= result.visited <= len(tree)
    assert result.visited + result.pruned >= 1


def test_nearest_function_validates_arguments():
    metric = get_metric("absolute")
    with pytest.raises(EmptyTreeError):
        nearest(None, 1.0, metric, pruning="root")

    tree = build([1.0], metric)
    with pytest.raises(ValueError, match="pruning"):
        nearest(tree.root, 1.0, metric, pruning="closest")
