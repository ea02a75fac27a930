"""
Centralised configuration for the route optimizer.

Keeps every tuneable parameter in one place. Settings can be built directly,
or read from ``ROADTRIP_*`` environment variables with ``PlannerSettings.from_env``.
"""

import os
from dataclasses import dataclass, field
from typing import Mapping, Optional

from .exceptions import ConfigurationError

# -- strategies ----------------------------------------------------------
STRATEGY_GREEDY = "greedy"
STRATEGY_HELD_KARP = "held-karp"
STRATEGY_ASTAR = "a-star"
KNOWN_STRATEGIES = (STRATEGY_GREEDY, STRATEGY_HELD_KARP, STRATEGY_ASTAR)

DEFAULT_STRATEGY: str = STRATEGY_GREEDY

# -- exact solver --------------------------------------------------------
MAX_EXACT_WAYPOINTS: int = 20  # O(N^2 * 2^N): practical ceiling
MEMORY_SAFETY_FRACTION: float = 0.5  # share of available RAM the DP may claim

# -- best-first search ---------------------------------------------------
HEURISTIC_DAMPING: float = 0.95  # scales h() down to reduce overestimation

# -- oracle --------------------------------------------------------------
CACHE_SHORTEST_PATHS: bool = True

ENV_PREFIX = "ROADTRIP_"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass
class PlannerSettings:
    """Tunable parameters for planning and comparison.

    Attributes:
        default_strategy: Strategy used by RoutePlanner.route()
        max_exact_waypoints: Largest waypoint count the Held-Karp solver accepts
        heuristic_damping: Multiplier applied to the A* heuristic (0 < x <= 1)
        cache_shortest_paths: Memoise oracle queries per planner
        max_workers: Threads for the comparison harness (None = sequential)
        memory_safety_fraction: Fraction of available memory the DP tables may use
    """

    default_strategy: str = DEFAULT_STRATEGY
    max_exact_waypoints: int = MAX_EXACT_WAYPOINTS
    heuristic_damping: float = HEURISTIC_DAMPING
    cache_shortest_paths: bool = CACHE_SHORTEST_PATHS
    max_workers: Optional[int] = None
    memory_safety_fraction: float = field(default=MEMORY_SAFETY_FRACTION)

    def __post_init__(self):
        self.validate()

    def validate(self) -> None:
        """Check every field.

        Raises:
            ConfigurationError: If any value is out of range
        """
        if self.default_strategy not in KNOWN_STRATEGIES:
            raise ConfigurationError(
                f"Unknown default strategy '{self.default_strategy}' "
                f"(expected one of: {', '.join(KNOWN_STRATEGIES)})"
            )
        if self.max_exact_waypoints < 1:
            raise ConfigurationError("max_exact_waypoints must be at least 1")
        if not 0.0 < self.heuristic_damping <= 1.0:
            raise ConfigurationError("heuristic_damping must be in (0, 1]")
        if self.max_workers is not None and self.max_workers < 1:
            raise ConfigurationError("max_workers must be positive when set")
        if not 0.0 < self.memory_safety_fraction <= 1.0:
            raise ConfigurationError("memory_safety_fraction must be in (0, 1]")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "PlannerSettings":
        """Build settings from ``ROADTRIP_*`` environment variables.

        Recognised variables: ROADTRIP_DEFAULT_STRATEGY, ROADTRIP_MAX_EXACT_WAYPOINTS,
        ROADTRIP_HEURISTIC_DAMPING, ROADTRIP_CACHE_SHORTEST_PATHS, ROADTRIP_MAX_WORKERS,
        ROADTRIP_MEMORY_SAFETY_FRACTION. Unset variables keep their defaults.

        Raises:
            ConfigurationError: If a variable cannot be parsed or is out of range
        """
        env = os.environ if environ is None else environ
        kwargs = {}

        def raw(key: str) -> Optional[str]:
            value = env.get(ENV_PREFIX + key)
            if value is None or not value.strip():
                return None
            return value.strip()

        try:
            if raw("DEFAULT_STRATEGY") is not None:
                kwargs["default_strategy"] = raw("DEFAULT_STRATEGY").lower()
            if raw("MAX_EXACT_WAYPOINTS") is not None:
                kwargs["max_exact_waypoints"] = int(raw("MAX_EXACT_WAYPOINTS"))
            if raw("HEURISTIC_DAMPING") is not None:
                kwargs["heuristic_damping"] = float(raw("HEURISTIC_DAMPING"))
            if raw("MAX_WORKERS") is not None:
                kwargs["max_workers"] = int(raw("MAX_WORKERS"))
            if raw("MEMORY_SAFETY_FRACTION") is not None:
                kwargs["memory_safety_fraction"] = float(raw("MEMORY_SAFETY_FRACTION"))
        except ValueError as e:
            raise ConfigurationError(f"Invalid {ENV_PREFIX}* setting: {e}") from e

        flag = raw("CACHE_SHORTEST_PATHS")
        if flag is not None:
            if flag.lower() in _TRUE_VALUES:
                kwargs["cache_shortest_paths"] = True
            elif flag.lower() in _FALSE_VALUES:
                kwargs["cache_shortest_paths"] = False
            else:
                raise ConfigurationError(
                    f"Invalid {ENV_PREFIX}CACHE_SHORTEST_PATHS value: {flag!r}"
                )

        return cls(**kwargs)
