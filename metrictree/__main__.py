#!/usr/bin/env python
"""Quick-start guide for metrictree library usage.

Run with: python -m metrictree

This module intentionally avoids importing metrictree internals to provide
a fast, clean startup for displaying help text.
"""

from __future__ import annotations

QUICKSTART = """\
================================================================================
                                 METRICTREE
          Cover tree nearest-neighbour search under any distance function
================================================================================

INSTALLATION
------------
    pip install metrictree

BASIC USAGE
-----------
    from metrictree import build

    # Points on a number line, absolute difference as the metric
    tree = build([0.0, 1.0, 2.0, 5.0, 20.0], metric="absolute")
    tree.find_nearest(3.0)                  # -> 2.0
    tree.find_nearest_with_distance(12.0)   # -> (5.0, 7.0)

    # Grow the tree incrementally
    tree.insert(11.0)

CUSTOM METRICS
--------------
Points can be any type; pass a callable returning a non-negative float:

    def rgb_distance(a, b):
        return sum((x - y) ** 2 for x, y in zip(a, b)) ** 0.5

    palette = build([(255, 0, 0), (0, 255, 0), (0, 0, 255)], metric=rgb_distance)
    palette.find_nearest((250, 10, 10))     # -> (255, 0, 0)

Registered names: euclidean, manhattan, chebyshev, absolute.

PRUNING MODES
-------------
    build(points, metric, pruning="root")     # default: global distance bound
    build(points, metric, pruning="subtree")  # per-node bound, exact results

"root" prunes with one tree-wide bound and may return an approximate answer;
"subtree" tracks a bound per node and returns the true nearest neighbour for
any metric that satisfies the triangle inequality.

DIAGNOSTICS
-----------
    print(tree.debug_string(max_depth=3))
    tree.validate()        # raises CoverTreeInvariantError on a broken cover
    tree.stats()           # height, level range, max_distance, raise count

ENVIRONMENT
-----------
    METRICTREE_LOG_LEVEL            INFO
    METRICTREE_ENABLE_DIAGNOSTICS   1
    METRICTREE_METRIC               euclidean
    METRICTREE_PRUNING              root
    METRICTREE_MAX_RAISE_STEPS      100000 (0 disables the cap)

================================================================================
"""


def main() -> None:
    """Print quick-start guide."""
    print(QUICKSTART)


if __name__ == "__main__":
    main()
