"""
Maximum-cardinality matching in bipartite graphs by augmenting paths.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Optional

from ._check import check_adjacency_buffer, flatten_matrix
from .errors import MatchingError
from .index import Index

_logger = logging.getLogger(__name__)

# Value of "match_by_x[x]" or "match_by_y[y]" for an unmatched vertex.
UNMATCHED = -1


def maximum_cardinality_matching(
        adjacency: Sequence[Sequence[int]]
        ) -> list[tuple[int, int]]:
    """Compute a maximum-cardinality matching in the bipartite graph
    given by "adjacency".

    The graph is specified as a nested 0/1 matrix with one row per vertex
    in X and one column per vertex in Y. Entry "adjacency[x][y]" is 1 if
    there is an edge between vertex "x" in X and vertex "y" in Y.
    X and Y need not have the same size.

    This function takes time O(V * E).

    Parameters:
        adjacency: Nested list of rows of 0/1 values (or booleans).

    Returns:
        List of matched pairs "(x, y)", ordered by increasing "x".

    Raises:
        ValueError: If the input does not satisfy the constraints.
        TypeError: If the input contains invalid data types.
        MatchingError: If the matching algorithm fails.
            This can only happen if there is a bug in the algorithm.
    """

    (graph, rows, cols) = flatten_matrix(adjacency)

    matcher = MaxMatch(graph, rows, cols)
    matcher.run()

    verify_maximum_matching(matcher)

    return matcher.pairs()


class MaxMatch:
    """Finds a maximum-cardinality matching in a bipartite graph.

    The graph has vertex set X with "rows" vertices and vertex set Y with
    "cols" vertices. It is stored as a dense row-major matrix of edge
    flags, with one row per X-vertex.

    The matching is found with Kuhn's algorithm: repeatedly search for an
    augmenting path from an unmatched X-vertex and flip it, until no
    unmatched X-vertex has an augmenting path. This takes time O(V * E).

    Changing single edges does not touch the current matching.
    Call "reset()" and "run()" to recompute the matching afterwards.
    """

    def __init__(self, graph: Sequence[int], rows: int, cols: int) -> None:
        """Initialize the graph from a row-major 0/1 buffer.

        The buffer is copied. Initially all vertices are unmatched.

        Raises:
            ValueError: If the input does not satisfy the constraints.
            TypeError: If the input contains invalid data types.
        """

        check_adjacency_buffer(graph, rows, cols)

        self.rows = rows
        self.cols = cols
        self.index = Index(rows, cols)

        # "graph[index.index(x, y)]" is True if there is an edge between
        # X-vertex "x" and Y-vertex "y".
        self.graph: list[bool] = [bool(v) for v in graph]

        # If X-vertex "x" is matched to Y-vertex "y",
        # "match_by_x[x] == y" and "match_by_y[y] == x".
        # Unmatched vertices have value UNMATCHED.
        self.match_by_x: list[int] = rows * [UNMATCHED]
        self.match_by_y: list[int] = cols * [UNMATCHED]

        # Vertices visited during the current augmenting path search.
        self.visited_x: list[bool] = rows * [False]
        self.visited_y: list[bool] = cols * [False]

    def run(self) -> None:
        """Augment the current matching until it has maximum cardinality.

        The search starts from the current matching, which is empty after
        construction, "set()" or "reset()". Running again without changing
        the graph leaves the matching unchanged.
        """

        num_augment = 0

        # Each pass tries every unmatched X-vertex once.
        # Stop after a pass that finds no augmenting path.
        improved = True
        while improved:
            improved = False
            for x in range(self.rows):
                if self.match_by_x[x] != UNMATCHED:
                    continue
                path = self._find_augmenting_path(x)
                if path is not None:
                    self._augment(path)
                    num_augment += 1
                    improved = True

        _logger.debug("Matching of %d x %d graph: %d augmentations,"
                      " %d matched pairs",
                      self.rows, self.cols, num_augment, self.match_count())

    def _find_augmenting_path(
            self,
            root: int
            ) -> Optional[list[tuple[int, int]]]:
        """Search an augmenting path starting at unmatched X-vertex "root".

        This is a depth-first search that examines Y-vertices in index
        order. Each vertex is visited at most once per search.

        Returns:
            List of edges "(x, y)" from "root" to an unmatched Y-vertex,
            or None if no augmenting path starts at "root".
        """

        self._reset_visited()
        self.visited_x[root] = True

        # Use an explicit stack to avoid deep recursion.
        # Each entry is "[x, y]" where "y" is the next column to examine
        # for X-vertex "x".
        stack: list[list[int]] = [[root, 0]]

        # "path[k]" is the edge from "stack[k]" to the X-vertex in
        # "stack[k+1]", or to the unmatched Y-vertex at the end.
        path: list[tuple[int, int]] = []

        while stack:
            frame = stack[-1]
            x = frame[0]
            row_start = self.index.index(x, 0) if self.cols else 0

            # Find the next unvisited neighbour of "x".
            y = frame[1]
            while y < self.cols and (self.visited_y[y]
                                     or not self.graph[row_start + y]):
                y += 1
            frame[1] = y + 1

            if y == self.cols:
                # Dead end; step back to the parent of "x".
                stack.pop()
                if path:
                    path.pop()
                continue

            self.visited_y[y] = True
            path.append((x, y))

            mate = self.match_by_y[y]
            if mate == UNMATCHED:
                return path

            # Continue through the matched edge (mate, y).
            # The mate of an unvisited Y-vertex is itself unvisited.
            assert not self.visited_x[mate]
            self.visited_x[mate] = True
            stack.append([mate, 0])

        return None

    def _augment(self, path: list[tuple[int, int]]) -> None:
        """Flip the edges along an augmenting path.

        Every edge on the path becomes matched. The matched edges between
        them are overwritten, so the matching grows by exactly one edge.
        """
        for (x, y) in path:
            self.match_by_x[x] = y
            self.match_by_y[y] = x

    def match_x(self, x: int) -> int:
        """Return the Y-vertex matched to X-vertex "x", or UNMATCHED."""
        if not 0 <= x < self.rows:
            raise IndexError(f"X-vertex {x} out of range")
        return self.match_by_x[x]

    def match_y(self, y: int) -> int:
        """Return the X-vertex matched to Y-vertex "y", or UNMATCHED."""
        if not 0 <= y < self.cols:
            raise IndexError(f"Y-vertex {y} out of range")
        return self.match_by_y[y]

    def match_count(self) -> int:
        """Return the number of matched pairs."""
        return sum(1 for y in self.match_by_x if y != UNMATCHED)

    def pairs(self) -> list[tuple[int, int]]:
        """Return the matched pairs "(x, y)" ordered by increasing "x"."""
        return [(x, y) for (x, y) in enumerate(self.match_by_x)
                if y != UNMATCHED]

    def set(self, graph: Sequence[int]) -> None:
        """Replace the graph by a new row-major 0/1 buffer of the same
        dimensions, and clear the matching.

        Raises:
            ValueError: If the input does not satisfy the constraints.
            TypeError: If the input contains invalid data types.
        """
        check_adjacency_buffer(graph, self.rows, self.cols)
        self.graph = [bool(v) for v in graph]
        self.reset()

    def add_edge(self, x: int, y: int) -> None:
        """Add edge (x, y). The matching is not changed."""
        self.graph[self.index.index(x, y)] = True

    def delete_edge(self, x: int, y: int) -> None:
        """Delete edge (x, y). The matching is not changed."""
        self.graph[self.index.index(x, y)] = False

    def has_edge(self, x: int, y: int) -> bool:
        """Return True if there is an edge between "x" and "y"."""
        return self.graph[self.index.index(x, y)]

    def reset(self) -> None:
        """Clear the matching and the search state. Keep the graph."""
        self._reset_matches()
        self._reset_visited()

    def _reset_matches(self) -> None:
        self.match_by_x = self.rows * [UNMATCHED]
        self.match_by_y = self.cols * [UNMATCHED]

    def _reset_visited(self) -> None:
        self.visited_x = self.rows * [False]
        self.visited_y = self.cols * [False]


def verify_maximum_matching(matcher: MaxMatch) -> None:
    """Verify that the matcher holds a maximum-cardinality matching.

    The check is independent of the search in "MaxMatch": it grows
    alternating trees from all unmatched X-vertices at once, breadth-first,
    and fails if any tree reaches an unmatched Y-vertex.

    This function takes time O(rows * cols).

    Raises:
        MatchingError: If the matching is inconsistent or not maximum.
    """

    rows = matcher.rows
    cols = matcher.cols
    match_by_x = matcher.match_by_x
    match_by_y = matcher.match_by_y

    # Check that the matching is symmetric and uses only existing edges.
    for x in range(rows):
        y = match_by_x[x]
        if y == UNMATCHED:
            continue
        if not 0 <= y < cols or match_by_y[y] != x:
            raise MatchingError(
                f"Verification failed: asymmetric match of X-vertex {x}")
        if not matcher.has_edge(x, y):
            raise MatchingError(
                f"Verification failed: matched pair ({x}, {y}) is not an edge")

    for y in range(cols):
        x = match_by_y[y]
        if x != UNMATCHED and (not 0 <= x < rows or match_by_x[x] != y):
            raise MatchingError(
                f"Verification failed: asymmetric match of Y-vertex {y}")

    # Search for an augmenting path from every unmatched X-vertex.
    seen_x = [match_by_x[x] == UNMATCHED for x in range(rows)]
    seen_y = cols * [False]
    frontier = [x for x in range(rows) if seen_x[x]]

    while frontier:
        next_frontier: list[int] = []
        for x in frontier:
            for y in range(cols):
                if seen_y[y] or not matcher.has_edge(x, y):
                    continue
                seen_y[y] = True
                mate = match_by_y[y]
                if mate == UNMATCHED:
                    raise MatchingError(
                        "Verification failed: augmenting path"
                        f" reaches unmatched Y-vertex {y}")
                if not seen_x[mate]:
                    seen_x[mate] = True
                    next_frontier.append(mate)
        frontier = next_frontier

    # Maximum matching confirmed.
