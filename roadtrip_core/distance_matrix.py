"""
Per-query distance matrix between waypoints.

Stores oracle distances between every pair of waypoints of one query in a
NumPy array. Unreachable pairs hold ``inf`` so strategies can add and compare
costs without special-casing the oracle's -1 sentinel.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, List, Sequence

import numpy as np

from .logging_config import LogTimer, get_logger
from .shortest_path import DistanceOracle
from .types import NO_PATH_DISTANCE, CityId, WaypointIndex

logger = get_logger(__name__)


@dataclass
class MatrixStats:
    """Statistics about a waypoint matrix.

    Attributes:
        num_waypoints: Number of rows/columns
        num_paths: Number of reachable ordered pairs (diagonal excluded)
        memory_bytes: Size of the distance array in bytes
    """

    num_waypoints: int
    num_paths: int
    memory_bytes: int


def build_waypoint_set(
    start: CityId, end: CityId, waypoints: Iterable[CityId]
) -> List[CityId]:
    """Assemble the distinct cities a route must visit.

    Start comes first, the remaining waypoints follow in caller order with
    duplicates removed, and the end city comes last when it differs from the
    start.

    Example:
        >>> build_waypoint_set(a, d, [c, a, b, c])
        [a, c, b, d]
    """
    ordered: Dict[CityId, None] = {start: None}
    for city in waypoints:
        if city != end:
            ordered.setdefault(city, None)
    ordered.setdefault(end, None)
    return list(ordered)


class WaypointMatrix:
    """N x N shortest distances between the waypoints of one query.

    Attributes:
        cities: Waypoints in index order
        index: Mapping from city to its row/column index
        distances: float64 array, ``inf`` where no path exists
    """

    def __init__(self, cities: Sequence[CityId], distances: np.ndarray):
        if distances.shape != (len(cities), len(cities)):
            raise ValueError(
                f"distance array shape {distances.shape} does not match {len(cities)} waypoints"
            )
        self.cities: List[CityId] = list(cities)
        self.index: Dict[CityId, WaypointIndex] = {city: i for i, city in enumerate(self.cities)}
        self.distances = distances

    @classmethod
    def build(cls, oracle: DistanceOracle, cities: Sequence[CityId]) -> "WaypointMatrix":
        """Query the oracle for every ordered pair of waypoints.

        Args:
            oracle: Shortest path oracle
            cities: Distinct waypoints (index order)

        Returns:
            WaypointMatrix with ``inf`` for unreachable pairs
        """
        n = len(cities)
        distances = np.full((n, n), np.inf, dtype=np.float64)

        with LogTimer(logger, f"Waypoint matrix ({n}x{n})", level=10):  # 10 = DEBUG
            for i, source in enumerate(cities):
                distances[i, i] = 0.0
                for j, target in enumerate(cities):
                    if i == j:
                        continue
                    dist = oracle.distance(source, target)
                    if dist != NO_PATH_DISTANCE:
                        distances[i, j] = dist

        matrix = cls(cities, distances)
        stats = matrix.get_stats()
        unreachable = n * (n - 1) - stats.num_paths
        if unreachable:
            logger.debug(f"Waypoint matrix has {unreachable} unreachable pairs")
        return matrix

    def __len__(self) -> int:
        return len(self.cities)

    def get(self, i: WaypointIndex, j: WaypointIndex) -> float:
        """Distance from waypoint i to waypoint j (``inf`` if unreachable)."""
        return float(self.distances[i, j])

    def has_path(self, i: WaypointIndex, j: WaypointIndex) -> bool:
        return bool(np.isfinite(self.distances[i, j]))

    def is_connected(self) -> bool:
        """Every waypoint can reach every other waypoint."""
        return bool(np.isfinite(self.distances).all())

    def get_stats(self) -> MatrixStats:
        n = len(self.cities)
        reachable = int(np.isfinite(self.distances).sum()) - n
        return MatrixStats(
            num_waypoints=n,
            num_paths=max(reachable, 0),
            memory_bytes=int(self.distances.nbytes),
        )
