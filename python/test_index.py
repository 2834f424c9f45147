"""Unit tests for row-major index mapping."""

import unittest

from bpmatch import Index


class TestIndex(unittest.TestCase):
    """Test Index class."""

    def test_roundtrip(self):
        index = Index(5, 4)
        self.assertEqual(index.size, 20)
        for pos in range(index.size):
            self.assertEqual(index.index(index.row(pos), index.col(pos)), pos)

    def test_row_major(self):
        index = Index(2, 3)
        self.assertEqual(index.index(0, 0), 0)
        self.assertEqual(index.index(0, 2), 2)
        self.assertEqual(index.index(1, 0), 3)
        self.assertEqual(index.index(1, 2), 5)
        self.assertEqual(index.row(4), 1)
        self.assertEqual(index.col(4), 1)

    def test_empty(self):
        index = Index(0, 0)
        self.assertEqual(index.size, 0)
        with self.assertRaises(IndexError):
            index.index(0, 0)
        with self.assertRaises(IndexError):
            index.row(0)

    def test_fail_out_of_range(self):
        index = Index(2, 3)
        with self.assertRaises(IndexError):
            index.index(2, 0)
        with self.assertRaises(IndexError):
            index.index(0, 3)
        with self.assertRaises(IndexError):
            index.index(-1, 0)
        with self.assertRaises(IndexError):
            index.index(0, -1)
        with self.assertRaises(IndexError):
            index.row(6)
        with self.assertRaises(IndexError):
            index.col(-1)

    def test_fail_bad_dimension(self):
        with self.assertRaises(ValueError):
            Index(-1, 2)
        with self.assertRaises(TypeError):
            Index(2, 2.0)
        with self.assertRaises(TypeError):
            Index(True, 2)


if __name__ == "__main__":
    unittest.main()
