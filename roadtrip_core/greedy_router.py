"""
Greedy nearest-neighbor routing.

Fast polynomial baseline: from the current city, always drive to the closest
waypoint not yet visited. Distances are queried from the oracle on demand, so
no waypoint matrix is built. Not guaranteed optimal.
"""

import math
from typing import List, Optional, Set, Tuple

from .base import RoutingStrategy
from .config import STRATEGY_GREEDY
from .exceptions import NoPathError
from .logging_config import get_logger
from .types import CityId, Distance, RouteResult

logger = get_logger(__name__)


class GreedyNearestNeighbor(RoutingStrategy):
    """Nearest-neighbor heuristic with fixed or equal endpoints.

    Round trip: visit every waypoint, then return to the start.
    Fixed endpoints: the end city is never a candidate; it is appended as
    the final leg once all other waypoints are visited.

    Ties are broken by waypoint order, so results depend on the order the
    waypoints were supplied in.
    """

    name = STRATEGY_GREEDY

    def _solve(self, start: CityId, end: CityId, cities: List[CityId]) -> RouteResult:
        candidates = [city for city in cities if city != start and city != end]

        ordered: List[CityId] = [start]
        visited: Set[CityId] = {start}
        total: Distance = 0
        current = start

        while len(visited) - 1 < len(candidates):
            nearest, nearest_distance = self._nearest_unvisited(current, candidates, visited)

            # No reachable candidate: the waypoints are not all connected
            if nearest is None:
                unvisited = [city for city in candidates if city not in visited]
                raise NoPathError(current, unvisited[0])

            logger.debug(f"Greedy step: {current} -> {nearest} ({nearest_distance})")
            ordered.append(nearest)
            visited.add(nearest)
            total += nearest_distance
            current = nearest

        # Final leg: back to start (round trip) or on to the fixed end
        final_leg = self.oracle.distance(current, end)
        if final_leg < 0:
            raise NoPathError(current, end)
        ordered.append(end)
        total += final_leg

        return self._expanded(ordered, total)

    def _nearest_unvisited(
        self, current: CityId, candidates: List[CityId], visited: Set[CityId]
    ) -> Tuple[Optional[CityId], Distance]:
        nearest: Optional[CityId] = None
        best = math.inf

        for city in candidates:
            if city in visited:
                continue
            dist = self.oracle.distance(current, city)
            if dist >= 0 and dist < best:
                best = dist
                nearest = city

        return nearest, (int(best) if nearest is not None else -1)
