"""
Unit tests for the route planner.
"""

import unittest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from roadtrip_core.config import PlannerSettings
from roadtrip_core.exceptions import ConfigurationError, InvalidQueryError
from roadtrip_core.graph import RoadGraph
from roadtrip_core.greedy_router import GreedyNearestNeighbor
from roadtrip_core.planner import RoutePlanner
from roadtrip_core.shortest_path import DistanceOracle
from roadtrip_core.types import CityId

A = CityId("Alpha", "AA")
B = CityId("Beta", "BB")
C = CityId("Gamma", "CC")
D = CityId("Delta", "DD")

ROADS = [(A, B, 10), (B, C, 5), (C, D, 5), (A, D, 30)]

ATTRACTIONS = {
    "Beta Tower": B,
    "Gamma Falls": C,
}


class TestRoutePlanner(unittest.TestCase):

    def setUp(self):
        self.planner = RoutePlanner(RoadGraph.from_edges(ROADS), ATTRACTIONS)

    def test_registered_strategies(self):
        self.assertEqual(list(self.planner.strategies), ["greedy", "held-karp", "a-star"])

    def test_resolve_attractions(self):
        cities, unresolved = self.planner.resolve_attractions(
            ["Gamma Falls", "beta tower", "Nowhere Park"]
        )
        self.assertEqual(cities, [C, B])
        self.assertEqual(unresolved, ["Nowhere Park"])

    def test_build_waypoints(self):
        self.assertEqual(self.planner.build_waypoints(A, D, [C, B, C]), [A, C, B, D])

    def test_route_uses_default_strategy(self):
        result = self.planner.route(A, D, ["Beta Tower", "Gamma Falls"])
        self.assertEqual(result.strategy_name, "greedy")
        self.assertEqual(result.distance, 20)
        self.assertEqual(result.path, [A, B, C, D])

    def test_route_with_named_strategy(self):
        result = self.planner.route(A, A, ["Beta Tower", "Gamma Falls"], strategy="held-karp")
        self.assertEqual(result.strategy_name, "held-karp")
        self.assertEqual(result.distance, 30)

    def test_route_ignores_unknown_attractions(self):
        result = self.planner.route(A, D, ["Nowhere Park"])
        self.assertEqual(result.distance, 20)

    def test_default_strategy_from_settings(self):
        planner = RoutePlanner(
            RoadGraph.from_edges(ROADS), ATTRACTIONS, PlannerSettings(default_strategy="a-star")
        )
        self.assertEqual(planner.route(A, D, ["Gamma Falls"]).strategy_name, "a-star")

    def test_unknown_strategy(self):
        with self.assertRaises(ConfigurationError):
            self.planner.strategy("simulated-annealing")
        with self.assertRaises(ConfigurationError):
            self.planner.route(A, D, [], strategy="simulated-annealing")

    def test_invalid_query(self):
        with self.assertRaises(InvalidQueryError):
            self.planner.route(A, CityId("Nowhere", "ZZ"))
        with self.assertRaises(InvalidQueryError):
            self.planner.compare(CityId("Nowhere", "ZZ"), A)

    def test_compare(self):
        report = self.planner.compare(A, D, ["Beta Tower", "Gamma Falls"])
        self.assertEqual(len(report.results), 3)
        self.assertEqual(report.cheapest().distance, 20)

    def test_oracle_shared_by_strategies(self):
        for strategy in self.planner.strategies.values():
            self.assertIs(strategy.oracle, self.planner.oracle)

    def test_cache_setting(self):
        planner = RoutePlanner(
            RoadGraph.from_edges(ROADS), settings=PlannerSettings(cache_shortest_paths=False)
        )
        self.assertFalse(planner.oracle.cache_enabled)

    def test_duplicate_strategy_names_rejected(self):
        oracle = DistanceOracle(RoadGraph.from_edges(ROADS))
        with self.assertRaises(ConfigurationError):
            RoutePlanner(
                oracle.graph,
                strategies=[GreedyNearestNeighbor(oracle), GreedyNearestNeighbor(oracle)],
            )


if __name__ == '__main__':
    unittest.main()
