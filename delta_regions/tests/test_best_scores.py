import unittest

import numpy as np

from delta_regions.evaluation.best_scores import ScoreAccumulator


def _matrix(*rows):
    return np.array(rows, dtype=float)


class TestScoreAccumulator(unittest.TestCase):

    def setUp(self):
        self.low = _matrix([1, 1, 1, 1, 1, 1])
        self.high = _matrix([2, 0, 2, 0, 2, 0], [2, 0, 2, 0, 2, 0])

    def test_first_update_sets_every_slot(self):
        acc = ScoreAccumulator()
        self.assertEqual(acc.update("bfs", self.low, 0.0), [0, 1, 2, 3, 4, 5])
        self.assertEqual(acc.best("bfs").sums, [1.0] * 6)

    def test_per_slot_improvement(self):
        acc = ScoreAccumulator()
        acc.update("bfs", self.low, 0.0)
        improved = acc.update("bfs", self.high, 0.3)
        self.assertEqual(improved, [0, 2, 4])
        record = acc.best("bfs")
        self.assertEqual(record.thresholds, [0.3, 0.0, 0.3, 0.0, 0.3, 0.0])
        np.testing.assert_array_equal(record.columns[0], [2.0, 2.0])
        np.testing.assert_array_equal(record.columns[1], [1.0])

    def test_non_strict_keeps_later_tie(self):
        acc = ScoreAccumulator()
        acc.update("bfs", self.low, 0.1)
        acc.update("bfs", self.low, 0.2)
        self.assertEqual(acc.best("bfs").thresholds[0], 0.2)

    def test_strict_keeps_earlier_tie(self):
        acc = ScoreAccumulator(strict=True)
        acc.update("bfs", self.low, 0.1)
        self.assertEqual(acc.update("bfs", self.low, 0.2), [])
        self.assertEqual(acc.best("bfs").thresholds[0], 0.1)

    def test_strict_override_per_update(self):
        acc = ScoreAccumulator()
        acc.update("bfs", self.low, 0.1)
        self.assertEqual(acc.update("bfs", self.low, 0.2, strict=True), [])

    def test_methods_are_independent(self):
        acc = ScoreAccumulator()
        acc.update("bfs", self.high, 0.5)
        acc.update("priority", self.low, 0.1)
        self.assertEqual(acc.best("bfs").sums[0], 4.0)
        self.assertEqual(acc.best("priority").sums[0], 1.0)
        self.assertEqual(acc.method_ids(), ["bfs", "priority"])
        self.assertNotIn("radius", acc)
        with self.assertRaises(KeyError):
            acc.best("radius")

    def test_zero_sums_count_as_improvement_when_non_strict(self):
        acc = ScoreAccumulator()
        self.assertEqual(acc.update("bfs", np.zeros((0, 6)), 0.0), [0, 1, 2, 3, 4, 5])
        strict = ScoreAccumulator(strict=True)
        self.assertEqual(strict.update("bfs", np.zeros((1, 6)), 0.0), [])


def test_frame_and_report():
    acc = ScoreAccumulator()
    acc.update("bfs", _matrix([8, 8, 8, 8 / 3, 8 / 3, 8 / 3]), 0.5, parameter=12)
    frame = acc.to_frame()
    assert len(frame) == 6
    assert set(frame["method"]) == {"bfs"}
    assert frame.loc[frame["metric"] == "edges_graph1", "best_sum"].iloc[0] == 8.0

    lines = acc.report("bfs")
    assert lines[0] == "bfs"
    assert "R1=8" in lines
    assert "R1=2.666" in lines
    assert "threshold=0.5" in lines
    assert "parameter=12" in lines
