"""Unit tests for weight preparation helpers."""

import unittest

from bpmatch import (
    adjust_weights_for_minimum_cost as adj,
    maximum_weight_assignment as mwa,
    pad_weights)


class TestPadWeights(unittest.TestCase):
    """Test pad_weights() function."""

    def test_empty(self):
        self.assertEqual(pad_weights([]), [])

    def test_square(self):
        self.assertEqual(pad_weights([[1,2], [3,4]]), [[1,2], [3,4]])

    def test_wide(self):
        self.assertEqual(
            pad_weights([[1,2,3], [4,5,6]]),
            [[1,2,3], [4,5,6], [0,0,0]])

    def test_tall(self):
        self.assertEqual(
            pad_weights([[1], [2], [3]], fill=9),
            [[1,9,9], [2,9,9], [3,9,9]])

    def test_input_unchanged(self):
        weights = [[1,2,3]]
        pad_weights(weights)
        self.assertEqual(weights, [[1,2,3]])

    def test_solve_padded(self):
        """padding vertices absorb the unmatched rows"""
        (total, pairs) = mwa(pad_weights([[5,1], [4,2], [6,3]]))
        self.assertEqual(total, 8)
        self.assertEqual(len(pairs), 3)

    def test_fail_ragged(self):
        with self.assertRaises(ValueError):
            pad_weights([[1,2], [3]])


class TestAdjustWeightsForMinimumCost(unittest.TestCase):
    """Test adjust_weights_for_minimum_cost() function."""

    def test_empty(self):
        self.assertEqual(adj([]), [])

    def test_flat(self):
        self.assertEqual(adj([[3,3], [3,3]]), [[0,0], [0,0]])

    def test_negative_costs(self):
        self.assertEqual(adj([[-2,4], [1,0]]), [[6,0], [3,4]])

    def test_minimum_cost(self):
        costs = [[4,1,3], [2,0,5], [3,2,2]]
        (total, pairs) = mwa(adj(costs))
        self.assertEqual(sum(costs[x][y] for (x, y) in pairs), 5)
        self.assertEqual(total, 3 * 5 - 5)

    def test_fail_bad_input(self):
        with self.assertRaises(TypeError):
            adj([[1.5, 2]])
        with self.assertRaises(ValueError):
            adj([[1,2], [3]])


if __name__ == "__main__":
    unittest.main()
