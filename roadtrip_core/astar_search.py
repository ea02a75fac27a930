"""
A*-style best-first search over waypoint orderings.

A search state is (visited mask, current waypoint). States are expanded in
order of f = g + h, where g is the distance driven so far and h a damped
lower-bound style estimate of the remaining distance. The damping keeps h
from overestimating in common cases but is not a proof of admissibility, so
results are heuristic, not certified optimal.
"""

import heapq
import itertools
import math
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from .base import RoutingStrategy
from .config import STRATEGY_ASTAR
from .distance_matrix import WaypointMatrix
from .exceptions import NoPathError
from .logging_config import get_logger
from .types import CityId, RouteResult, WaypointIndex

logger = get_logger(__name__)

State = Tuple[int, WaypointIndex]


@dataclass(eq=False)
class SearchNode:
    """A node in the search tree.

    Attributes:
        mask: Bitmask of visited waypoints
        city: Current waypoint index
        g: Distance travelled so far
        h: Heuristic estimate of the remaining distance
        parent: Node this one was reached from
    """

    mask: int
    city: WaypointIndex
    g: float
    h: float
    parent: Optional["SearchNode"] = None

    @property
    def f(self) -> float:
        return self.g + self.h

    @property
    def state(self) -> State:
        return (self.mask, self.city)


def estimate_remaining(
    distances: List[List[float]],
    mask: int,
    current: WaypointIndex,
    end_index: WaypointIndex,
    damping: float,
) -> float:
    """Heuristic cost to finish the route from a search state.

    - Everything visited: the distance from current to the end.
    - One waypoint left: current -> it (-> end, unless it is the end).
    - Otherwise: nearest unvisited from current, plus the cheapest pair among
      unvisited times (unvisited - 1), plus the cheapest unvisited -> end leg
      when the end is already visited.

    The sum is scaled by ``damping`` and truncated to an integer. Returns
    ``inf`` when any part is unreachable, which marks a dead end.
    """
    n = len(distances)
    unvisited = [i for i in range(n) if not mask & (1 << i)]
    row = distances[current]

    if not unvisited:
        estimate = row[end_index]
    elif len(unvisited) == 1:
        only = unvisited[0]
        if only == end_index:
            estimate = row[end_index]
        else:
            estimate = row[only] + distances[only][end_index]
    else:
        estimate = min(row[u] for u in unvisited)

        # MST-like bound: every unvisited waypoint but one needs an edge
        cheapest_pair = min(distances[a][b] for a, b in itertools.combinations(unvisited, 2))
        estimate += cheapest_pair * (len(unvisited) - 1)

        if mask & (1 << end_index):
            estimate += min(distances[u][end_index] for u in unvisited)

    if math.isinf(estimate):
        return math.inf
    return int(estimate * damping)


class HeuristicBestFirstSearch(RoutingStrategy):
    """A* search for the fixed-endpoint / round-trip waypoint ordering.

    Goal: all waypoints visited and standing on the end city (any city for a
    round trip, whose closing leg back to the start is added afterwards).
    When only the end city is left unvisited the move onto it is always
    offered, with h = 0.
    """

    name = STRATEGY_ASTAR

    def _solve(self, start: CityId, end: CityId, cities: List[CityId]) -> RouteResult:
        matrix = WaypointMatrix.build(self.oracle, cities)
        distances: List[List[float]] = matrix.distances.tolist()
        damping = self.settings.heuristic_damping

        n = len(cities)
        start_index = matrix.index[start]
        end_index = matrix.index[end]
        round_trip = start == end
        full_mask = (1 << n) - 1
        end_bit = 1 << end_index

        initial_mask = 1 << start_index
        initial = SearchNode(
            initial_mask,
            start_index,
            0.0,
            estimate_remaining(distances, initial_mask, start_index, end_index, damping),
        )

        # (f, insertion order, node): ties pop in insertion order
        counter = itertools.count()
        frontier: List[Tuple[float, int, SearchNode]] = [(initial.f, next(counter), initial)]
        best: Dict[State, SearchNode] = {initial.state: initial}
        expanded = 0

        def offer(node: SearchNode, target: WaypointIndex, h: Optional[float] = None) -> None:
            move = distances[node.city][target]
            if math.isinf(move):
                return

            g = node.g + move
            mask = node.mask | (1 << target)
            existing = best.get((mask, target))
            if existing is not None and g >= existing.g:
                return

            if h is None:
                h = estimate_remaining(distances, mask, target, end_index, damping)
            if math.isinf(h):
                return

            child = SearchNode(mask, target, g, h, node)
            best[child.state] = child
            heapq.heappush(frontier, (child.f, next(counter), child))

        while frontier:
            _, _, node = heapq.heappop(frontier)

            # Superseded by a cheaper path to the same state
            if best.get(node.state) is not node:
                continue

            if node.mask == full_mask and (node.city == end_index or round_trip):
                logger.debug(f"A*: goal reached after expanding {expanded} states")
                return self._finish(node, matrix, start_index, distances, round_trip)

            expanded += 1

            for target in range(n):
                # The end city is only entered through the final move below
                if node.mask & (1 << target) or target == end_index:
                    continue
                offer(node, target)

            if not round_trip and node.mask == full_mask ^ end_bit:
                offer(node, end_index, h=0.0)

        logger.debug(f"A*: frontier exhausted after expanding {expanded} states")
        raise NoPathError(start, end)

    def _finish(
        self,
        goal: SearchNode,
        matrix: WaypointMatrix,
        start_index: WaypointIndex,
        distances: List[List[float]],
        round_trip: bool,
    ) -> RouteResult:
        order: List[WaypointIndex] = []
        node: Optional[SearchNode] = goal
        while node is not None:
            order.append(node.city)
            node = node.parent
        order.reverse()

        total = goal.g
        if round_trip and order[-1] != start_index:
            total += distances[order[-1]][start_index]
            order.append(start_index)

        ordered = [matrix.cities[i] for i in order]
        return self._expanded(ordered, total)
