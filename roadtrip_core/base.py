"""
Abstract routing strategy interface.

Every strategy (greedy, Held-Karp, A*) inherits from ``RoutingStrategy`` so the
planner and the comparison harness can swap strategies without changing
calling code.
"""

from abc import ABC, abstractmethod
from typing import Iterable, List, Optional, Sequence

from .config import PlannerSettings
from .distance_matrix import build_waypoint_set
from .exceptions import NoPathError, ResourceError, RoutingError
from .logging_config import get_logger
from .path_expansion import PathExpander
from .profiling import PerformanceTimer
from .shortest_path import DistanceOracle
from .types import CityId, RouteResult

logger = get_logger(__name__)


class RoutingStrategy(ABC):
    """Contract that every waypoint-ordering strategy must satisfy.

    Subclasses implement ``_solve`` for the general case. ``solve`` takes care
    of the waypoint set, the trivial one- and two-city queries, timing, and
    converting routing failures into the no-path sentinel.

    All per-query state lives in locals of ``_solve``, so one instance may be
    used from several threads at once.
    """

    name: str = "base"

    def __init__(self, oracle: DistanceOracle, settings: Optional[PlannerSettings] = None):
        self.oracle = oracle
        self.expander = PathExpander(oracle)
        self.settings = settings or PlannerSettings()

    def solve(self, start: CityId, end: CityId, waypoints: Iterable[CityId]) -> RouteResult:
        """Find a route from start to end through every waypoint.

        Args:
            start: First city of the route
            end: Last city of the route (equal to start for a round trip)
            waypoints: Cities to visit; start/end are added if absent

        Returns:
            RouteResult tagged with this strategy's name and the wall-clock
            time of the call. Failures come back as the no-path sentinel with
            ``error`` set, never as exceptions.
        """
        with PerformanceTimer(f"{self.name} solve") as timer:
            result = self._solve_safely(start, end, waypoints)

        return result._replace(strategy_name=self.name, computation_time=timer.elapsed)

    def _solve_safely(
        self, start: CityId, end: CityId, waypoints: Iterable[CityId]
    ) -> RouteResult:
        cities = build_waypoint_set(start, end, waypoints)
        logger.debug(
            f"{self.name}: {start} -> {end} via {len(cities)} waypoints "
            f"({'round trip' if start == end else 'fixed endpoints'})"
        )

        try:
            if len(cities) == 1:
                # Round trip with nothing to visit
                if start not in self.oracle.graph:
                    raise NoPathError(start, end)
                return RouteResult([start], 0)

            if start != end and len(cities) == 2:
                return self._direct(start, end)

            return self._solve(start, end, cities)

        except (RoutingError, ResourceError) as e:
            logger.warning(f"{self.name}: no route from {start} to {end}: {e}")
            return RouteResult.no_path(error=str(e))

    def _direct(self, start: CityId, end: CityId) -> RouteResult:
        """Two-point query: the oracle's answer is the route."""
        leg = self.oracle.shortest_path(start, end)
        if not leg.found:
            raise NoPathError(start, end)
        return RouteResult(leg.path, leg.distance)

    def _expanded(self, ordered: Sequence[CityId], distance: float) -> RouteResult:
        """Build the final result from a waypoint visiting order."""
        path: List[CityId] = self.expander.expand(ordered)
        return RouteResult(path, int(distance))

    @abstractmethod
    def _solve(self, start: CityId, end: CityId, cities: List[CityId]) -> RouteResult:
        """Solve a query with at least one waypoint besides start and end.

        Args:
            start: First city
            end: Last city
            cities: Waypoint set, start first and (if different) end last

        Raises:
            RoutingError: If no route exists
        """
        ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"
