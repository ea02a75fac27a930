"""
Exact waypoint ordering with Held-Karp dynamic programming.

``dp[mask][i]`` is the cheapest way to leave the start, visit exactly the
waypoints in ``mask`` and stop at waypoint ``i``. Tables are NumPy arrays of
shape (2^N, N), so time is O(N^2 * 2^N) and memory O(N * 2^N). The solver
refuses inputs above ``max_exact_waypoints`` and allocations that would not
fit in available memory.
"""

from typing import List, Sequence

import numpy as np

from .base import RoutingStrategy
from .config import STRATEGY_HELD_KARP
from .distance_matrix import WaypointMatrix
from .exceptions import NoPathError, WaypointLimitError
from .logging_config import LogTimer, get_logger
from .profiling import ensure_memory_available, track_memory
from .types import CityId, RouteResult, WaypointIndex

logger = get_logger(__name__)

COST_DTYPE = np.float64
PARENT_DTYPE = np.int16


def table_bytes(num_waypoints: int) -> int:
    """Memory needed by the cost and parent tables for N waypoints."""
    cells = (1 << num_waypoints) * num_waypoints
    return cells * (np.dtype(COST_DTYPE).itemsize + np.dtype(PARENT_DTYPE).itemsize)


def fill_tables(distances: np.ndarray, start_index: WaypointIndex):
    """Run the subset DP.

    Args:
        distances: N x N waypoint distances (``inf`` = unreachable)
        start_index: Index of the mandatory first waypoint

    Returns:
        Tuple of (dp, parent) arrays of shape (2^N, N). ``parent[mask][i]`` is
        the waypoint visited just before ``i``, or -1.
    """
    n = distances.shape[0]
    num_masks = 1 << n
    start_bit = 1 << start_index

    dp = np.full((num_masks, n), np.inf, dtype=COST_DTYPE)
    parent = np.full((num_masks, n), -1, dtype=PARENT_DTYPE)
    dp[start_bit, start_index] = 0.0

    bits = np.left_shift(1, np.arange(n, dtype=np.int64))

    for mask in range(num_masks):
        if not mask & start_bit or mask == start_bit:
            continue

        members = np.flatnonzero(mask & bits)
        previous = mask ^ bits[members]

        # candidates[r, j] = dp[mask - {i}][j] + d(j, i) for i = members[r].
        # dp rows are inf for any j outside the previous subset.
        candidates = dp[previous] + distances[:, members].T
        best_j = candidates.argmin(axis=1)
        best = candidates[np.arange(len(members)), best_j]

        dp[mask, members] = best
        parent[mask, members] = np.where(np.isfinite(best), best_j, -1)

    return dp, parent


def walk_parents(
    parent: np.ndarray,
    final_mask: int,
    last: WaypointIndex,
    start_index: WaypointIndex,
    cities: Sequence[CityId],
) -> List[WaypointIndex]:
    """Recover the visiting order ending at ``last`` from the parent table.

    ``cities`` maps indices back to cities for error reporting.

    Raises:
        NoPathError: If the parent chain is broken
    """
    order = [last]
    mask = final_mask
    current = last

    while current != start_index:
        previous = int(parent[mask, current])
        if previous < 0:
            raise NoPathError(cities[start_index], cities[current])
        mask ^= 1 << current
        current = previous
        order.append(current)

    order.reverse()
    return order


class ExactDynamicProgramming(RoutingStrategy):
    """Held-Karp solver: optimal, but only for small waypoint sets.

    Round trip: minimise ``dp[full][i] + d(i, start)`` over ``i != start``.
    Fixed endpoints: the answer is ``dp[full][end]``, with no closing edge.
    """

    name = STRATEGY_HELD_KARP

    def _solve(self, start: CityId, end: CityId, cities: List[CityId]) -> RouteResult:
        n = len(cities)
        limit = self.settings.max_exact_waypoints
        if n > limit:
            raise WaypointLimitError(n, limit)

        ensure_memory_available(table_bytes(n), self.settings.memory_safety_fraction)

        matrix = WaypointMatrix.build(self.oracle, cities)
        start_index = matrix.index[start]
        end_index = matrix.index[end]

        with track_memory("Held-Karp tables"), LogTimer(
            logger, f"Held-Karp DP ({n} waypoints)", level=10  # 10 = DEBUG
        ):
            dp, parent = fill_tables(matrix.distances, start_index)

        full_mask = (1 << n) - 1

        if start == end:
            closing = dp[full_mask] + matrix.distances[:, start_index]
            closing[start_index] = np.inf
            last = int(closing.argmin())
            best = float(closing[last])
        else:
            last = end_index
            best = float(dp[full_mask, end_index])

        if not np.isfinite(best):
            raise NoPathError(start, end)

        order = walk_parents(parent, full_mask, last, start_index, matrix.cities)
        ordered = [matrix.cities[i] for i in order]
        if start == end:
            ordered.append(start)

        logger.debug(f"Held-Karp optimum {int(best)} via {' -> '.join(map(str, ordered))}")
        return self._expanded(ordered, best)
