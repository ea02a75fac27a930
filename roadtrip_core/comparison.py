"""
Comparison harness: run every strategy on the same query.

Each strategy is timed around its own solve call. A strategy that fails comes
back as a no-path result and never stops the others from running. Strategies
can optionally run on a thread pool, since they only read the shared graph.
"""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence

from .base import RoutingStrategy
from .exceptions import InvalidQueryError, RoadTripError
from .graph import RoadGraph
from .logging_config import get_logger
from .profiling import PerformanceTimer
from .types import CityId, RouteResult

logger = get_logger(__name__)


def validate_query(graph: RoadGraph, start: CityId, end: CityId) -> None:
    """Reject queries whose start or end city is not in the road graph.

    Raises:
        InvalidQueryError: Listing the missing cities
    """
    missing = graph.missing([start, end])
    if missing:
        raise InvalidQueryError(missing)


@dataclass
class ComparisonReport:
    """Results of one comparison, in strategy registration order.

    Attributes:
        start: Query start city
        end: Query end city
        waypoints: Waypoints as supplied by the caller
        results: One RouteResult per strategy
    """

    start: CityId
    end: CityId
    waypoints: List[CityId]
    results: List[RouteResult] = field(default_factory=list)

    @property
    def successful(self) -> List[RouteResult]:
        return [r for r in self.results if r.found]

    def cheapest(self) -> Optional[RouteResult]:
        """Result with the shortest distance, ignoring failed strategies."""
        found = self.successful
        if not found:
            return None
        return min(found, key=lambda r: r.distance)

    def fastest(self) -> Optional[RouteResult]:
        """Result with the shortest computation time, ignoring failed strategies."""
        found = self.successful
        if not found:
            return None
        return min(found, key=lambda r: r.computation_time)

    def get(self, strategy_name: str) -> Optional[RouteResult]:
        for result in self.results:
            if result.strategy_name == strategy_name:
                return result
        return None

    def summary_rows(self) -> List[Dict]:
        """One dict per strategy for presentation layers."""
        return [
            {
                "strategy": r.strategy_name,
                "distance": r.distance if r.found else None,
                "computation_time_ms": r.computation_time * 1000,
                "stops": len(r.path),
                "error": r.error,
            }
            for r in self.results
        ]

    def log_summary(self) -> None:
        """Write a results table to the log."""
        logger.info("=" * 60)
        logger.info(f"Route comparison: {self.start} -> {self.end} ({len(self.waypoints)} waypoints)")
        logger.info(f"{'Strategy':<12} | {'Distance':>12} | {'Time (ms)':>12}")
        logger.info("-" * 60)
        for r in self.results:
            distance = str(r.distance) if r.found else "No valid path"
            logger.info(f"{r.strategy_name:<12} | {distance:>12} | {r.computation_time * 1000:>12.3f}")

        logger.info("-" * 60)
        cheapest = self.cheapest()
        fastest = self.fastest()
        if cheapest is not None:
            logger.info(f"Best distance: {cheapest.strategy_name} ({cheapest.distance})")
        if fastest is not None:
            logger.info(
                f"Fastest: {fastest.strategy_name} ({fastest.computation_time * 1000:.3f} ms)"
            )
        if cheapest is None:
            logger.warning("No strategy found a valid route")
        logger.info("=" * 60)


class ComparisonHarness:
    """Runs a fixed list of strategies on one query and collects their results.

    Example:
        >>> harness = ComparisonHarness(graph, [greedy, held_karp, astar])
        >>> report = harness.compare(start, end, waypoints)
        >>> report.cheapest().strategy_name
        'held-karp'
    """

    def __init__(
        self,
        graph: RoadGraph,
        strategies: Sequence[RoutingStrategy],
        max_workers: Optional[int] = None,
    ):
        if not strategies:
            raise ValueError("ComparisonHarness needs at least one strategy")
        self.graph = graph
        self.strategies = list(strategies)
        self.max_workers = max_workers

    def compare(
        self, start: CityId, end: CityId, waypoints: Iterable[CityId]
    ) -> ComparisonReport:
        """Run every registered strategy on the same query.

        Raises:
            InvalidQueryError: If start or end is not in the graph
        """
        validate_query(self.graph, start, end)
        waypoint_list = list(waypoints)

        logger.info(
            f"Comparing {len(self.strategies)} strategies: {start} -> {end}, "
            f"{len(waypoint_list)} waypoints"
        )

        if self.max_workers and self.max_workers > 1 and len(self.strategies) > 1:
            results = self._run_threaded(start, end, waypoint_list)
        else:
            results = [self._run_one(s, start, end, waypoint_list) for s in self.strategies]

        failed = sum(1 for r in results if not r.found)
        if failed:
            logger.warning(f"{failed}/{len(results)} strategies found no route")

        return ComparisonReport(start, end, waypoint_list, results)

    def _run_threaded(
        self, start: CityId, end: CityId, waypoints: List[CityId]
    ) -> List[RouteResult]:
        workers = min(self.max_workers, len(self.strategies))
        logger.debug(f"Running strategies on {workers} threads")

        with ThreadPoolExecutor(max_workers=workers) as executor:
            futures = [
                executor.submit(self._run_one, strategy, start, end, waypoints)
                for strategy in self.strategies
            ]
            # Collected in submission order to keep registration order
            return [future.result() for future in futures]

    @staticmethod
    def _run_one(
        strategy: RoutingStrategy, start: CityId, end: CityId, waypoints: List[CityId]
    ) -> RouteResult:
        timer = PerformanceTimer(f"{strategy.name} run")
        try:
            with timer:
                result = strategy.solve(start, end, waypoints)
        except RoadTripError as e:
            logger.error(f"Strategy {strategy.name} failed: {e}", exc_info=True)
            return RouteResult.no_path(strategy.name, error=str(e))._replace(
                computation_time=timer.elapsed or 0.0
            )

        logger.debug(result.describe())
        return result
