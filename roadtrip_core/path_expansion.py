"""
Expansion of waypoint-level routes into city-by-city routes.

Strategies decide the order in which waypoints are visited; PathExpander turns
that order into a continuous route by joining oracle shortest paths.
"""

from typing import List, Sequence

from .exceptions import NoPathError
from .logging_config import get_logger
from .shortest_path import DistanceOracle
from .types import NO_PATH_DISTANCE, CityId, Distance

logger = get_logger(__name__)


class PathExpander:
    """Join shortest paths between consecutive waypoints.

    Example:
        >>> expander = PathExpander(oracle)
        >>> expander.expand([austin, houston, austin])
        [austin, ..., houston, ..., austin]
    """

    def __init__(self, oracle: DistanceOracle):
        self.oracle = oracle

    def expand(self, ordered_waypoints: Sequence[CityId]) -> List[CityId]:
        """Expand an ordered waypoint sequence into a full route.

        The first city of every segment after the first is skipped, since it
        is the last city of the previous segment. Repeated consecutive
        waypoints therefore collapse: ``expand([a, a, b])`` is ``[a, b]``.

        Args:
            ordered_waypoints: Waypoints in visiting order

        Returns:
            Route in which every consecutive pair is a direct road

        Raises:
            NoPathError: If two consecutive waypoints are not connected
        """
        if not ordered_waypoints:
            return []

        expanded: List[CityId] = [ordered_waypoints[0]]

        for current, following in zip(ordered_waypoints, ordered_waypoints[1:]):
            segment = self.oracle.shortest_path(current, following)
            if not segment.found:
                raise NoPathError(current, following)
            expanded.extend(segment.path[1:])

        logger.debug(
            f"Expanded {len(ordered_waypoints)} waypoints into {len(expanded)} cities"
        )
        return expanded

    def path_distance(self, path: Sequence[CityId]) -> Distance:
        """Sum of direct road lengths along a route, or -1 if a pair is not a road."""
        total = 0
        for current, following in zip(path, path[1:]):
            if current == following:
                continue
            road = self.oracle.graph.road_distance(current, following)
            if road is None:
                return NO_PATH_DISTANCE
            total += road
        return total
