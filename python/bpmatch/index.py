"""
Mapping between (row, column) pairs and positions in a row-major matrix.
"""

from __future__ import annotations

from ._check import check_dimension


class Index:
    """Maps (row, column) pairs to positions in a flat row-major matrix
    with "rows" rows and "cols" columns, and back.

    All conversions are bounds-checked. Negative indices are rejected
    rather than counted from the end.
    """

    def __init__(self, rows: int, cols: int) -> None:
        check_dimension("rows", rows)
        check_dimension("cols", cols)
        self.rows = rows
        self.cols = cols

    @property
    def size(self) -> int:
        """Number of entries in the matrix."""
        return self.rows * self.cols

    def index(self, row: int, col: int) -> int:
        """Return the flat position of entry (row, col).

        Raises:
            IndexError: If the row or column is out of range.
        """
        if not 0 <= row < self.rows:
            raise IndexError(f"Row {row} out of range 0 .. {self.rows - 1}")
        if not 0 <= col < self.cols:
            raise IndexError(
                f"Column {col} out of range 0 .. {self.cols - 1}")
        return self.cols * row + col

    def row(self, pos: int) -> int:
        """Return the row of flat position "pos"."""
        self._check_pos(pos)
        return pos // self.cols

    def col(self, pos: int) -> int:
        """Return the column of flat position "pos"."""
        self._check_pos(pos)
        return pos % self.cols

    def _check_pos(self, pos: int) -> None:
        if not 0 <= pos < self.size:
            raise IndexError(
                f"Position {pos} out of range 0 .. {self.size - 1}")

    def __repr__(self) -> str:
        return f"Index(rows={self.rows}, cols={self.cols})"
