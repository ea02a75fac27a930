"""
Unit tests for the road graph.
"""

import unittest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from roadtrip_core.exceptions import GraphBuildError
from roadtrip_core.graph import RoadGraph
from roadtrip_core.types import CityId

A = CityId("Alpha", "AA")
B = CityId("Beta", "BB")
C = CityId("Gamma", "CC")
D = CityId("Delta", "DD")


class TestRoadGraph(unittest.TestCase):
    """Test graph construction and lookups."""

    def setUp(self):
        self.graph = RoadGraph.from_edges([
            (A, B, 10),
            (B, C, 5),
            (C, D, 5),
            (A, D, 30),
        ])

    def test_roads_are_undirected(self):
        self.assertEqual(self.graph[A][B], 10)
        self.assertEqual(self.graph[B][A], 10)
        self.assertEqual(self.graph.road_distance(D, A), 30)

    def test_counts(self):
        self.assertEqual(len(self.graph), 4)
        self.assertEqual(self.graph.num_roads, 4)

    def test_contains(self):
        self.assertIn(A, self.graph)
        self.assertNotIn(CityId("Nowhere", "ZZ"), self.graph)

    def test_neighbours_of_unknown_city_is_empty(self):
        self.assertEqual(len(self.graph.neighbours(CityId("Nowhere", "ZZ"))), 0)

    def test_road_distance_missing_road(self):
        self.assertIsNone(self.graph.road_distance(A, C))

    def test_adjacency_is_read_only(self):
        with self.assertRaises(TypeError):
            self.graph[A][C] = 1

    def test_isolated_city(self):
        graph = RoadGraph.from_edges([(A, B, 1)], cities=[D])
        self.assertIn(D, graph)
        self.assertEqual(len(graph[D]), 0)

    def test_duplicate_road_keeps_shorter(self):
        graph = RoadGraph.from_edges([(A, B, 10), (B, A, 7)])
        self.assertEqual(graph[A][B], 7)
        self.assertEqual(graph[B][A], 7)
        self.assertEqual(graph.num_roads, 1)

    def test_negative_distance_rejected(self):
        with self.assertRaises(GraphBuildError):
            RoadGraph.from_edges([(A, B, -1)])

    def test_non_integer_distance_rejected(self):
        with self.assertRaises(GraphBuildError):
            RoadGraph.from_edges([(A, B, 2.5)])
        with self.assertRaises(GraphBuildError):
            RoadGraph.from_edges([(A, B, True)])

    def test_missing_preserves_order_without_repeats(self):
        x = CityId("X", "XX")
        y = CityId("Y", "YY")
        self.assertEqual(self.graph.missing([y, A, x, y]), [y, x])


class TestCityId(unittest.TestCase):
    """Test parsing of "Name ST" identifiers."""

    def test_parse_multi_word_name(self):
        city = CityId.parse("San Antonio TX")
        self.assertEqual(city, CityId("San Antonio", "TX"))
        self.assertEqual(str(city), "San Antonio TX")

    def test_parse_collapses_whitespace(self):
        self.assertEqual(CityId.parse("  New   York  NY "), CityId("New York", "NY"))

    def test_parse_without_state(self):
        with self.assertRaises(ValueError):
            CityId.parse("Houston")


if __name__ == '__main__':
    unittest.main()
