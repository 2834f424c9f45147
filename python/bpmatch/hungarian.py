"""
Maximum-weight perfect matching in complete bipartite graphs
(the Kuhn-Munkres or Hungarian algorithm).
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from ._check import check_weight_buffer, flatten_matrix
from .errors import MatchingError
from .index import Index
from .maxmatch import UNMATCHED, MaxMatch

_logger = logging.getLogger(__name__)


def maximum_weight_assignment(
        weights: Sequence[Sequence[int]]
        ) -> tuple[int, list[tuple[int, int]]]:
    """Compute a maximum-weight perfect matching in the complete bipartite
    graph given by the square weight matrix "weights".

    Entry "weights[x][y]" is the weight of the edge between vertex "x"
    in X and vertex "y" in Y. Weights must be non-negative integers.

    Rectangular problems, or problems with missing edges, must be padded
    with zero-weight entries first (see "pad_weights()").
    To find a minimum-cost assignment, convert costs to weights first
    (see "adjust_weights_for_minimum_cost()").

    Parameters:
        weights: Nested list of rows of non-negative integer weights.

    Returns:
        Tuple "(total_weight, pairs)" where "pairs" is a list of matched
        pairs "(x, y)" ordered by increasing "x".

    Raises:
        ValueError: If the input does not satisfy the constraints.
        TypeError: If the input contains invalid data types.
        MatchingError: If the matching algorithm fails.
            This can only happen if there is a bug in the algorithm.
    """

    (buf, rows, cols) = flatten_matrix(weights)
    if rows != cols:
        raise ValueError(f"Weight matrix must be square, got {rows} x {cols}")

    solver = Hungarian(buf, rows)
    solver.run()

    # Verify that the matching is optimal.
    # Verification is a redundant step; if the matching algorithm is correct,
    # verification will always pass.
    verify_optimum(solver)

    return (solver.total_weight(), solver.pairs())


class Hungarian:
    """Finds a maximum-weight perfect matching in a complete bipartite
    graph with "length" vertices on each side.

    Every vertex carries a label. The labels are kept feasible:
    "label_x(x) + label_y(y) >= weight(x, y)" for every edge. Edges where
    equality holds form the equality subgraph. A perfect matching inside
    the equality subgraph has maximum weight.

    The solver keeps a maximum-cardinality matching of the equality
    subgraph. While it is not perfect, it grows an alternating tree from
    an unmatched X-vertex, relabels the tree vertices to bring at least
    one new edge into the equality subgraph, and recomputes the matching.
    """

    def __init__(self, weights: Sequence[int], length: int) -> None:
        """Initialize labels and the equality subgraph, and find a first
        maximum-cardinality matching in the equality subgraph.

        Parameters:
            weights: Row-major buffer of "length * length" non-negative
                integer weights. The buffer is copied.
            length: Number of vertices in X, which equals the number of
                vertices in Y.

        Raises:
            ValueError: If the input does not satisfy the constraints.
            TypeError: If the input contains invalid data types.
        """

        check_weight_buffer(weights, length)

        self._len = length
        self._index = Index(length, length)

        # These data remain unchanged while the algorithm runs.
        self._weights: list[int] = list(weights)

        # Initial feasible labeling: the maximum weight in each row for
        # X-vertices, zero for Y-vertices.
        self._labels_x: list[int] = []
        for x in range(length):
            row_start = self._index.index(x, 0)
            self._labels_x.append(
                max(self._weights[row_start:row_start + length]))
        self._labels_y: list[int] = length * [0]

        # Set by "run()". The total weight is reported only after that.
        self._has_run = False

        self._matcher = MaxMatch(self._equality_graph(), length, length)
        self._matcher.run()

    def _equality_graph(self) -> list[int]:
        """Return the row-major 0/1 buffer of tight edges under the
        current labels."""
        index = self._index
        labels_x = self._labels_x
        labels_y = self._labels_y
        weights = self._weights
        return [
            int(labels_x[x] + labels_y[y] == weights[index.index(x, y)])
            for x in range(self._len)
            for y in range(self._len)]

    def _slack(self, x: int, y: int) -> int:
        return (self._labels_x[x] + self._labels_y[y]
                - self._weights[self._index.index(x, y)])

    def run(self) -> None:
        """Improve the labels and the matching until the matching is perfect.

        Each improvement step strictly decreases the sum of all labels,
        which is bounded below by the weight of any perfect matching.
        Since weights are integers, the loop terminates.
        Running again after the matching is perfect does nothing.
        """

        num_relabel = 0
        while self._matcher.match_count() < self._len:
            self._improve()
            num_relabel += 1

        self._has_run = True

        _logger.debug("Assignment of size %d: %d relabel steps,"
                      " total weight %d",
                      self._len, num_relabel, self.total_weight())

    def _improve(self) -> None:
        """Grow an alternating tree from an unmatched X-vertex, relabel,
        and recompute the matching on the new equality subgraph."""

        length = self._len
        matcher = self._matcher

        # Start the tree at the first unmatched X-vertex.
        root = matcher.match_by_x.index(UNMATCHED)

        # "in_s[x]" is True if X-vertex "x" is in the tree.
        # "in_t[y]" is True if Y-vertex "y" is in the tree.
        # "in_ns[y]" is True if Y-vertex "y" is a neighbour of the tree's
        # X-vertices in the equality subgraph.
        in_s = length * [False]
        in_t = length * [False]
        in_ns = length * [False]

        in_s[root] = True
        self._add_neighbours(root, in_ns)

        # Extend the tree through matched edges while N(S) \ T is not empty.
        while True:
            y = next((j for j in range(length) if in_ns[j] and not in_t[j]),
                     UNMATCHED)
            if y == UNMATCHED:
                break

            x = matcher.match_by_y[y]
            if x == UNMATCHED:
                # The matching would have an augmenting path through "y".
                raise MatchingError(
                    f"Unmatched Y-vertex {y} reached by alternating tree;"
                    " equality subgraph matching is not maximum")

            in_t[y] = True
            in_s[x] = True
            self._add_neighbours(x, in_ns)

        # Now N(S) == T. Every edge from S to a Y-vertex outside T has
        # positive slack. Relabel by the least such slack.
        alpha = min(self._slack(x, y)
                    for x in range(length) if in_s[x]
                    for y in range(length) if not in_t[y])
        assert alpha > 0

        for x in range(length):
            if in_s[x]:
                self._labels_x[x] -= alpha
        for y in range(length):
            if in_t[y]:
                self._labels_y[y] += alpha

        _logger.debug("Relabel by %d: |S| = %d, |T| = %d",
                      alpha, sum(in_s), sum(in_t))

        # Recompute the matching from scratch on the new equality subgraph.
        matcher.set(self._equality_graph())
        matcher.run()

    def _add_neighbours(self, x: int, in_ns: list[bool]) -> None:
        """Mark the equality-subgraph neighbours of X-vertex "x"."""
        for y in range(self._len):
            if self._matcher.has_edge(x, y):
                in_ns[y] = True

    def length(self) -> int:
        """Return the number of vertices on each side."""
        return self._len

    def weight(self, x: int, y: int) -> int:
        """Return the weight of edge (x, y)."""
        return self._weights[self._index.index(x, y)]

    def label_x(self, x: int) -> int:
        """Return the current label of X-vertex "x"."""
        if not 0 <= x < self._len:
            raise IndexError(f"X-vertex {x} out of range")
        return self._labels_x[x]

    def label_y(self, y: int) -> int:
        """Return the current label of Y-vertex "y"."""
        if not 0 <= y < self._len:
            raise IndexError(f"Y-vertex {y} out of range")
        return self._labels_y[y]

    def match_x(self, x: int) -> int:
        """Return the Y-vertex matched to X-vertex "x", or UNMATCHED."""
        return self._matcher.match_x(x)

    def match_y(self, y: int) -> int:
        """Return the X-vertex matched to Y-vertex "y", or UNMATCHED."""
        return self._matcher.match_y(y)

    def match_count(self) -> int:
        """Return the number of matched pairs."""
        return self._matcher.match_count()

    def pairs(self) -> list[tuple[int, int]]:
        """Return the matched pairs "(x, y)" ordered by increasing "x"."""
        return self._matcher.pairs()

    def total_weight(self) -> int:
        """Return the total weight of the matching.

        The total is 0 until "run()" has been called.
        """
        if not self._has_run:
            return 0
        return sum(self.weight(x, y) for (x, y) in self._matcher.pairs())


def verify_optimum(solver: Hungarian) -> None:
    """Verify that the solver holds a maximum-weight perfect matching.

    Checks that the matching is perfect and consistent, that the labels
    are feasible, and that every matched edge is tight. Together these
    imply that the total weight equals the sum of all labels, which bounds
    the weight of every perfect matching.

    This function takes time O(length**2).

    Raises:
        MatchingError: If the solution is not optimal.
    """

    length = solver.length()

    # Check that the matching is perfect and symmetric.
    for x in range(length):
        y = solver.match_x(x)
        if y == UNMATCHED:
            raise MatchingError(
                f"Verification failed: X-vertex {x} is unmatched")
        if solver.match_y(y) != x:
            raise MatchingError(
                "Verification failed:"
                f" asymmetric match of X-vertex {x} and Y-vertex {y}")

    # Check that all edges have non-negative slack.
    for x in range(length):
        for y in range(length):
            slack = solver.label_x(x) + solver.label_y(y) - solver.weight(x, y)
            if slack < 0:
                raise MatchingError(
                    f"Verification failed: edge ({x}, {y})"
                    f" has negative slack {slack}")

    # Check that all matched edges have zero slack.
    for x in range(length):
        y = solver.match_x(x)
        slack = solver.label_x(x) + solver.label_y(y) - solver.weight(x, y)
        if slack != 0:
            raise MatchingError(
                "Verification failed:"
                f" matched edge ({x}, {y}) has slack {slack}")

    matched_weight = sum(solver.weight(x, solver.match_x(x))
                         for x in range(length))
    label_sum = (sum(solver.label_x(x) for x in range(length))
                 + sum(solver.label_y(y) for y in range(length)))
    if matched_weight != label_sum:
        raise MatchingError(
            f"Verification failed: matched weight {matched_weight}"
            f" differs from label sum {label_sum}")

    # Optimum solution confirmed.
