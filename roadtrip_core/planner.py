"""
Route planner: the composition root of the optimizer.

Resolves attraction names to cities, assembles the waypoint set and hands the
query to the default strategy or to the comparison harness.
"""

from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from .astar_search import HeuristicBestFirstSearch
from .base import RoutingStrategy
from .comparison import ComparisonHarness, ComparisonReport, validate_query
from .config import PlannerSettings
from .distance_matrix import build_waypoint_set
from .exceptions import ConfigurationError
from .graph import RoadGraph
from .greedy_router import GreedyNearestNeighbor
from .held_karp import ExactDynamicProgramming
from .logging_config import get_logger
from .shortest_path import DistanceOracle
from .types import CityId, RouteResult

logger = get_logger(__name__)


def default_strategies(
    oracle: DistanceOracle, settings: PlannerSettings
) -> List[RoutingStrategy]:
    """The three registered strategies, in comparison order."""
    return [
        GreedyNearestNeighbor(oracle, settings),
        ExactDynamicProgramming(oracle, settings),
        HeuristicBestFirstSearch(oracle, settings),
    ]


class RoutePlanner:
    """Plan road trips through named attractions.

    Attributes:
        graph: Shared road network
        attractions: Mapping from attraction name to its city
        settings: Planner settings
        oracle: Shortest path oracle shared by every strategy
        strategies: Registered strategies, keyed by name

    Example:
        >>> planner = RoutePlanner(graph, attractions)
        >>> result = planner.route(CityId.parse("Houston TX"),
        ...                        CityId.parse("Philadelphia PA"),
        ...                        ["Liberty Bell"])
        >>> result.distance
    """

    def __init__(
        self,
        graph: RoadGraph,
        attractions: Optional[Mapping[str, CityId]] = None,
        settings: Optional[PlannerSettings] = None,
        strategies: Optional[Sequence[RoutingStrategy]] = None,
    ):
        self.graph = graph
        self.attractions: Dict[str, CityId] = dict(attractions or {})
        self.settings = settings or PlannerSettings()
        self.oracle = DistanceOracle(graph, cache=self.settings.cache_shortest_paths)

        registered = list(strategies) if strategies is not None else default_strategies(
            self.oracle, self.settings
        )
        self.strategies: Dict[str, RoutingStrategy] = {}
        for strategy in registered:
            if strategy.name in self.strategies:
                raise ConfigurationError(f"Duplicate strategy name '{strategy.name}'")
            self.strategies[strategy.name] = strategy

        self.harness = ComparisonHarness(
            graph, list(self.strategies.values()), max_workers=self.settings.max_workers
        )

        logger.debug(
            f"Planner ready: {len(graph)} cities, {len(self.attractions)} attractions, "
            f"strategies={list(self.strategies)}"
        )

    def strategy(self, name: str) -> RoutingStrategy:
        """Look up a registered strategy.

        Raises:
            ConfigurationError: If no strategy has that name
        """
        try:
            return self.strategies[name]
        except KeyError:
            raise ConfigurationError(
                f"Unknown strategy '{name}' (registered: {', '.join(self.strategies)})"
            ) from None

    def resolve_attractions(self, names: Iterable[str]) -> Tuple[List[CityId], List[str]]:
        """Map attraction names to cities.

        Names are matched exactly first, then case-insensitively. Unknown
        names are logged and skipped.

        Returns:
            Tuple of (cities in input order, unresolved names)
        """
        folded = {name.casefold(): city for name, city in self.attractions.items()}
        cities: List[CityId] = []
        unresolved: List[str] = []

        for name in names:
            key = name.strip()
            city = self.attractions.get(key) or folded.get(key.casefold())
            if city is None:
                logger.warning(f"Attraction '{name}' not found")
                unresolved.append(name)
                continue
            cities.append(city)

        return cities, unresolved

    def build_waypoints(
        self, start: CityId, end: CityId, cities: Iterable[CityId]
    ) -> List[CityId]:
        """Waypoint set for a query: start first, end last, no duplicates."""
        return build_waypoint_set(start, end, cities)

    def validate_query(self, start: CityId, end: CityId) -> None:
        """Raise InvalidQueryError if start or end is not in the graph."""
        validate_query(self.graph, start, end)

    def route(
        self,
        start: CityId,
        end: CityId,
        attractions: Iterable[str] = (),
        strategy: Optional[str] = None,
    ) -> RouteResult:
        """Plan a route with one strategy (the configured default if not given).

        Raises:
            InvalidQueryError: If start or end is not in the graph
            ConfigurationError: If the strategy name is unknown
        """
        self.validate_query(start, end)
        solver = self.strategy(strategy or self.settings.default_strategy)

        cities, _ = self.resolve_attractions(attractions)
        waypoints = self.build_waypoints(start, end, cities)

        result = solver.solve(start, end, waypoints)
        logger.info(result.describe())
        return result

    def compare(
        self, start: CityId, end: CityId, attractions: Iterable[str] = ()
    ) -> ComparisonReport:
        """Run every registered strategy on the same query.

        Raises:
            InvalidQueryError: If start or end is not in the graph
        """
        self.validate_query(start, end)
        cities, _ = self.resolve_attractions(attractions)
        waypoints = self.build_waypoints(start, end, cities)
        return self.harness.compare(start, end, waypoints)
