"""
Helpers that prepare weight matrices for the assignment solver.
"""

from __future__ import annotations

from collections.abc import Sequence

from ._check import flatten_matrix


def pad_weights(
        weights: Sequence[Sequence[int]],
        fill: int = 0
        ) -> list[list[int]]:
    """Pad a rectangular weight matrix to a square matrix.

    Extra rows or columns are filled with weight "fill". A vertex matched
    to a padding vertex is effectively left unmatched in the original
    problem. Missing edges in the original problem should also be given
    weight 0 before solving.

    This function takes time O(n**2), where "n" is the larger dimension.

    Parameters:
        weights: Nested list of rows of weights.
        fill: Weight of padding entries.

    Returns:
        New square matrix. The input is not modified.

    Raises:
        ValueError: If the rows have different lengths.
        TypeError: If the input is not a nested sequence.
    """

    (_buf, rows, cols) = flatten_matrix(weights)
    n = max(rows, cols)

    padded = [list(row) + (n - cols) * [fill] for row in weights]
    padded.extend([n * [fill] for _i in range(n - rows)])
    return padded


def adjust_weights_for_minimum_cost(
        costs: Sequence[Sequence[int]]
        ) -> list[list[int]]:
    """Convert a cost matrix into a weight matrix, such that a
    maximum-weight assignment of the weights is a minimum-cost
    assignment of the costs.

    Each cost "c" becomes weight "max_cost - c". Every perfect matching
    of an "n x n" matrix contains exactly "n" edges, so subtracting every
    cost from the same constant reverses the order of all perfect
    matchings. All resulting weights are non-negative, even if some costs
    are negative.

    This function takes time O(n**2).

    Parameters:
        costs: Nested list of rows of integer costs.

    Returns:
        New matrix of non-negative integer weights.

    Raises:
        ValueError: If the rows have different lengths.
        TypeError: If the input contains invalid data types.
    """

    (buf, _rows, _cols) = flatten_matrix(costs)

    for c in buf:
        if isinstance(c, bool) or not isinstance(c, int):
            raise TypeError("Costs must be integers")

    # Don't worry about empty matrices:
    if not buf:
        return [[] for _row in costs]

    max_cost = max(buf)
    return [[max_cost - c for c in row] for row in costs]
