"""
Input validation shared by the matching classes.
"""

from __future__ import annotations

from collections.abc import Sequence


def check_dimension(name: str, value: int) -> None:
    """Check that a matrix dimension is a non-negative integer.

    Raises:
        TypeError: If the dimension is not an integer.
        ValueError: If the dimension is negative.
    """

    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f'"{name}" must be an integer')

    if value < 0:
        raise ValueError(f'"{name}" must be non-negative, got {value}')


def check_adjacency_buffer(
        graph: Sequence[int],
        rows: int,
        cols: int
        ) -> None:
    """Check that "graph" is a row-major adjacency matrix of "rows * cols"
    entries.

    Entries may be integers or booleans. Any non-zero entry is an edge.

    Raises:
        TypeError: If the input contains invalid data types.
        ValueError: If the input does not satisfy the constraints.
    """

    check_dimension("rows", rows)
    check_dimension("cols", cols)

    if isinstance(graph, (str, bytes)) or not isinstance(graph, Sequence):
        raise TypeError('"graph" must be a sequence of integers')

    if len(graph) != rows * cols:
        raise ValueError(
            f"Adjacency buffer has {len(graph)} entries,"
            f" expected {rows} * {cols} = {rows * cols}")

    for (pos, v) in enumerate(graph):
        if not isinstance(v, int):
            raise TypeError(
                f"Adjacency entry {pos} must be an integer or boolean")


def check_weight_buffer(weights: Sequence[int], length: int) -> None:
    """Check that "weights" is a row-major square matrix of non-negative
    integers with "length * length" entries.

    Raises:
        TypeError: If the input contains invalid data types.
        ValueError: If the input does not satisfy the constraints.
    """

    check_dimension("length", length)

    if isinstance(weights, (str, bytes)) or not isinstance(weights, Sequence):
        raise TypeError('"weights" must be a sequence of integers')

    if len(weights) != length * length:
        raise ValueError(
            f"Weight buffer has {len(weights)} entries,"
            f" expected {length} * {length} = {length * length}")

    for (pos, w) in enumerate(weights):
        if isinstance(w, bool) or not isinstance(w, int):
            raise TypeError(f"Weight {pos} must be an integer")
        if w < 0:
            raise ValueError(f"Weight {pos} must be non-negative, got {w}")


def flatten_matrix(
        matrix: Sequence[Sequence[int]]
        ) -> tuple[list[int], int, int]:
    """Convert a nested matrix to a flat row-major buffer.

    Returns:
        Tuple "(buffer, rows, cols)".

    Raises:
        TypeError: If the matrix is not a sequence of sequences.
        ValueError: If the rows have different lengths.
    """

    if isinstance(matrix, (str, bytes)) or not isinstance(matrix, Sequence):
        raise TypeError("Matrix must be a sequence of rows")

    rows = len(matrix)
    cols = 0
    buf: list[int] = []

    for (i, row) in enumerate(matrix):
        if isinstance(row, (str, bytes)) or not isinstance(row, Sequence):
            raise TypeError(f"Matrix row {i} must be a sequence")
        if i == 0:
            cols = len(row)
        elif len(row) != cols:
            raise ValueError(
                f"Matrix row {i} has {len(row)} entries, expected {cols}")
        buf.extend(row)

    return (buf, rows, cols)
