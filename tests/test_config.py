"""
Unit tests for planner settings.
"""

import unittest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from roadtrip_core.config import (
    DEFAULT_STRATEGY,
    HEURISTIC_DAMPING,
    MAX_EXACT_WAYPOINTS,
    PlannerSettings,
)
from roadtrip_core.exceptions import ConfigurationError


class TestPlannerSettings(unittest.TestCase):

    def test_defaults(self):
        settings = PlannerSettings()
        self.assertEqual(settings.default_strategy, DEFAULT_STRATEGY)
        self.assertEqual(settings.default_strategy, "greedy")
        self.assertEqual(settings.heuristic_damping, HEURISTIC_DAMPING)
        self.assertEqual(settings.max_exact_waypoints, MAX_EXACT_WAYPOINTS)
        self.assertTrue(settings.cache_shortest_paths)
        self.assertIsNone(settings.max_workers)

    def test_invalid_values(self):
        with self.assertRaises(ConfigurationError):
            PlannerSettings(default_strategy="dfs")
        with self.assertRaises(ConfigurationError):
            PlannerSettings(max_exact_waypoints=0)
        with self.assertRaises(ConfigurationError):
            PlannerSettings(heuristic_damping=0.0)
        with self.assertRaises(ConfigurationError):
            PlannerSettings(heuristic_damping=1.5)
        with self.assertRaises(ConfigurationError):
            PlannerSettings(max_workers=0)
        with self.assertRaises(ConfigurationError):
            PlannerSettings(memory_safety_fraction=2.0)


class TestSettingsFromEnv(unittest.TestCase):

    def test_empty_environment_uses_defaults(self):
        self.assertEqual(PlannerSettings.from_env({}), PlannerSettings())

    def test_reads_variables(self):
        settings = PlannerSettings.from_env({
            "ROADTRIP_DEFAULT_STRATEGY": "Held-Karp",
            "ROADTRIP_MAX_EXACT_WAYPOINTS": "12",
            "ROADTRIP_HEURISTIC_DAMPING": "0.9",
            "ROADTRIP_MAX_WORKERS": "3",
            "ROADTRIP_MEMORY_SAFETY_FRACTION": "0.25",
            "ROADTRIP_CACHE_SHORTEST_PATHS": "off",
        })
        self.assertEqual(settings.default_strategy, "held-karp")
        self.assertEqual(settings.max_exact_waypoints, 12)
        self.assertEqual(settings.heuristic_damping, 0.9)
        self.assertEqual(settings.max_workers, 3)
        self.assertEqual(settings.memory_safety_fraction, 0.25)
        self.assertFalse(settings.cache_shortest_paths)

    def test_blank_variable_ignored(self):
        settings = PlannerSettings.from_env({"ROADTRIP_MAX_WORKERS": "  "})
        self.assertIsNone(settings.max_workers)

    def test_unparseable_number(self):
        with self.assertRaises(ConfigurationError):
            PlannerSettings.from_env({"ROADTRIP_MAX_EXACT_WAYPOINTS": "many"})

    def test_unparseable_flag(self):
        with self.assertRaises(ConfigurationError):
            PlannerSettings.from_env({"ROADTRIP_CACHE_SHORTEST_PATHS": "maybe"})

    def test_out_of_range_value(self):
        with self.assertRaises(ConfigurationError):
            PlannerSettings.from_env({"ROADTRIP_HEURISTIC_DAMPING": "3"})


if __name__ == '__main__':
    unittest.main()
