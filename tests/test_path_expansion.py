"""
Unit tests for waypoint path expansion.
"""

import unittest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from roadtrip_core.exceptions import NoPathError
from roadtrip_core.graph import RoadGraph
from roadtrip_core.path_expansion import PathExpander
from roadtrip_core.shortest_path import DistanceOracle
from roadtrip_core.types import NO_PATH_DISTANCE, CityId

A = CityId("Alpha", "AA")
B = CityId("Beta", "BB")
C = CityId("Gamma", "CC")
D = CityId("Delta", "DD")
E = CityId("Epsilon", "EE")


class TestPathExpander(unittest.TestCase):

    def setUp(self):
        graph = RoadGraph.from_edges(
            [(A, B, 10), (B, C, 5), (C, D, 5), (A, D, 30)],
            cities=[E],
        )
        self.expander = PathExpander(DistanceOracle(graph))

    def test_expand_joins_segments(self):
        self.assertEqual(self.expander.expand([A, D]), [A, B, C, D])
        self.assertEqual(self.expander.expand([A, C, A]), [A, B, C, B, A])

    def test_expand_empty(self):
        self.assertEqual(self.expander.expand([]), [])

    def test_expand_single(self):
        self.assertEqual(self.expander.expand([B]), [B])

    def test_expand_is_idempotent_on_expanded_paths(self):
        expanded = self.expander.expand([A, D])
        self.assertEqual(self.expander.expand(expanded), expanded)

    def test_expand_unreachable(self):
        with self.assertRaises(NoPathError):
            self.expander.expand([A, E])

    def test_path_distance(self):
        self.assertEqual(self.expander.path_distance([A, B, C, D]), 20)
        self.assertEqual(self.expander.path_distance([A]), 0)

    def test_path_distance_not_a_road(self):
        self.assertEqual(self.expander.path_distance([A, C]), NO_PATH_DISTANCE)


if __name__ == '__main__':
    unittest.main()
