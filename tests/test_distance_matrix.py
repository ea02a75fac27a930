"""
Unit tests for the waypoint set and waypoint distance matrix.
"""

import unittest
import sys
from pathlib import Path

import numpy as np

sys.path.insert(0, str(Path(__file__).parent.parent))

from roadtrip_core.distance_matrix import MatrixStats, WaypointMatrix, build_waypoint_set
from roadtrip_core.graph import RoadGraph
from roadtrip_core.shortest_path import DistanceOracle
from roadtrip_core.types import CityId

A = CityId("Alpha", "AA")
B = CityId("Beta", "BB")
C = CityId("Gamma", "CC")
D = CityId("Delta", "DD")


class TestWaypointSet(unittest.TestCase):
    """Test waypoint set assembly."""

    def test_start_first_end_last(self):
        self.assertEqual(build_waypoint_set(A, D, [C, B]), [A, C, B, D])

    def test_duplicates_removed(self):
        self.assertEqual(build_waypoint_set(A, D, [C, A, B, C, D]), [A, C, B, D])

    def test_round_trip_has_start_once(self):
        self.assertEqual(build_waypoint_set(A, A, [B, A, C]), [A, B, C])

    def test_no_waypoints(self):
        self.assertEqual(build_waypoint_set(A, D, []), [A, D])
        self.assertEqual(build_waypoint_set(A, A, []), [A])


class TestWaypointMatrix(unittest.TestCase):
    """Test matrix construction from the oracle."""

    def setUp(self):
        graph = RoadGraph.from_edges(
            [(A, B, 10), (B, C, 5), (C, D, 5), (A, D, 30)]
        )
        self.oracle = DistanceOracle(graph)

    def test_build(self):
        matrix = WaypointMatrix.build(self.oracle, [A, B, C, D])
        self.assertEqual(len(matrix), 4)
        self.assertEqual(matrix.index[C], 2)
        self.assertEqual(matrix.get(0, 3), 20.0)
        self.assertEqual(matrix.get(3, 0), 20.0)
        self.assertEqual(matrix.get(1, 1), 0.0)
        self.assertEqual(matrix.distances.dtype, np.float64)
        self.assertTrue(matrix.is_connected())

    def test_unreachable_is_inf(self):
        graph = RoadGraph.from_edges([(A, B, 10)], cities=[D])
        matrix = WaypointMatrix.build(DistanceOracle(graph), [A, B, D])
        self.assertEqual(matrix.get(0, 2), float('inf'))
        self.assertFalse(matrix.has_path(0, 2))
        self.assertTrue(matrix.has_path(0, 1))
        self.assertFalse(matrix.is_connected())

    def test_stats(self):
        graph = RoadGraph.from_edges([(A, B, 10)], cities=[D])
        matrix = WaypointMatrix.build(DistanceOracle(graph), [A, B, D])
        stats = matrix.get_stats()
        self.assertIsInstance(stats, MatrixStats)
        self.assertEqual(stats.num_waypoints, 3)
        self.assertEqual(stats.num_paths, 2)
        self.assertEqual(stats.memory_bytes, 3 * 3 * 8)

    def test_shape_mismatch(self):
        with self.assertRaises(ValueError):
            WaypointMatrix([A, B], np.zeros((3, 3)))


if __name__ == '__main__':
    unittest.main()
