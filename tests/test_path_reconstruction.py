"""
Unit tests for path reconstruction module.

Tests unreachable targets, cycles, iteration limits and path validation.
"""

import logging
import unittest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from roadtrip_core.graph import RoadGraph
from roadtrip_core.path_reconstruction import reconstruct_path, validate_path
from roadtrip_core.types import CityId

A = CityId("Alpha", "AA")
B = CityId("Beta", "BB")
C = CityId("Gamma", "CC")
D = CityId("Delta", "DD")
E = CityId("Epsilon", "EE")


class TestPathReconstruction(unittest.TestCase):
    """Test cases for robust path reconstruction."""

    def test_simple_path(self):
        """Test basic path reconstruction."""
        predecessors = {B: A, C: B}
        self.assertEqual(reconstruct_path(predecessors, A, C), [A, B, C])

    def test_source_equals_target(self):
        self.assertEqual(reconstruct_path({}, A, A), [A])

    def test_source_with_none_entry(self):
        predecessors = {A: None, B: A, C: B}
        self.assertEqual(reconstruct_path(predecessors, A, C), [A, B, C])

    def test_unreachable_target(self):
        """Target never reached: walk stops before the source."""
        predecessors = {B: A}
        self.assertEqual(reconstruct_path(predecessors, A, D), [])

    def test_walk_ending_elsewhere(self):
        """Chain that ends at a city other than the source."""
        predecessors = {C: B, B: E}
        self.assertEqual(reconstruct_path(predecessors, A, C), [])

    def test_cycle_detection(self):
        """Invalid cycle: B -> C -> B."""
        predecessors = {B: C, C: B, D: C}
        self.assertEqual(reconstruct_path(predecessors, A, D), [])

    def test_source_without_roads(self):
        """Empty predecessor map is an ordinary miss, not an iteration overflow."""
        with self.assertLogs("roadtrip_core.path_reconstruction", level="DEBUG") as logs:
            self.assertEqual(reconstruct_path({}, A, B), [])
        self.assertFalse([r for r in logs.records if r.levelno >= logging.WARNING])

    def test_max_iterations(self):
        predecessors = {B: A, C: B, D: C}
        self.assertEqual(reconstruct_path(predecessors, A, D, max_iterations=2), [])
        self.assertEqual(reconstruct_path(predecessors, A, D, max_iterations=4), [A, B, C, D])


class TestPathValidation(unittest.TestCase):
    """Test path validation against the road graph."""

    def setUp(self):
        self.graph = RoadGraph.from_edges([(A, B, 1), (B, C, 1)])

    def test_valid_path(self):
        self.assertTrue(validate_path(self.graph, [A, B, C], source=A, target=C))

    def test_empty_path(self):
        self.assertFalse(validate_path(self.graph, []))

    def test_wrong_source(self):
        self.assertFalse(validate_path(self.graph, [A, B, C], source=B))

    def test_wrong_target(self):
        self.assertFalse(validate_path(self.graph, [A, B, C], target=B))

    def test_missing_road(self):
        self.assertFalse(validate_path(self.graph, [A, C]))

    def test_repeated_city_allowed(self):
        self.assertTrue(validate_path(self.graph, [A, A, B]))


if __name__ == '__main__':
    unittest.main()
