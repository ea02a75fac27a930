"""
Shortest path oracle for the road network.

DistanceOracle answers single source/target queries with Dijkstra's algorithm,
stopping as soon as the target is settled. Every routing strategy and the path
expander use it as a black-box cost function.
"""

import heapq
import itertools
import math
import threading
from typing import Dict, List, Optional, Tuple

from .graph import RoadGraph
from .logging_config import get_logger
from .path_reconstruction import reconstruct_path
from .types import CityId, Distance, ShortestPathResult

logger = get_logger(__name__)


class DistanceOracle:
    """Point-to-point shortest paths over an immutable RoadGraph.

    Attributes:
        graph: Road network (never mutated)
        cache_enabled: Whether query results are memoised
        hits: Number of queries answered from the cache
        misses: Number of queries that ran Dijkstra

    Cache and counters are guarded by a lock, so one oracle can be shared by
    strategies running on the harness thread pool. Dijkstra itself runs
    outside the lock; two threads missing on the same pair both compute it
    and store the same value. The cache holds every pair queried until
    ``clear_cache`` is called.

    Example:
        >>> oracle = DistanceOracle(graph)
        >>> result = oracle.shortest_path(austin, dallas)
        >>> result.path, result.distance
    """

    def __init__(self, graph: RoadGraph, cache: bool = True):
        self.graph = graph
        self.cache_enabled = cache
        self._cache: Dict[Tuple[CityId, CityId], ShortestPathResult] = {}
        self.hits = 0
        self.misses = 0
        self._lock = threading.Lock()

    def shortest_path(self, source: CityId, target: CityId) -> ShortestPathResult:
        """Find the minimum-distance path between two cities.

        Args:
            source: Starting city
            target: Destination city

        Returns:
            ShortestPathResult with the city sequence and distance, or the
            unreachable sentinel (empty path, distance -1) if no path exists or
            either city is not in the graph.
        """
        key = (source, target)
        with self._lock:
            cached = self._cache.get(key) if self.cache_enabled else None
            if cached is not None:
                self.hits += 1
                return ShortestPathResult(list(cached.path), cached.distance)
            self.misses += 1

        result = self._dijkstra(source, target)
        if not self.cache_enabled:
            return result

        with self._lock:
            self._cache[key] = result
        return ShortestPathResult(list(result.path), result.distance)

    def distance(self, source: CityId, target: CityId) -> Distance:
        """Shortest distance between two cities, or -1 if unreachable."""
        return self.shortest_path(source, target).distance

    def clear_cache(self) -> None:
        """Drop memoised results and reset hit/miss counters."""
        with self._lock:
            self._cache.clear()
            self.hits = 0
            self.misses = 0

    def _dijkstra(self, source: CityId, target: CityId) -> ShortestPathResult:
        if source not in self.graph or target not in self.graph:
            logger.debug(f"Shortest path {source} -> {target}: city not in graph")
            return ShortestPathResult.unreachable()

        distances: Dict[CityId, float] = {city: math.inf for city in self.graph}
        predecessors: Dict[CityId, Optional[CityId]] = {}
        distances[source] = 0

        # (distance, insertion order, city): ties pop in insertion order
        counter = itertools.count()
        frontier: List[Tuple[float, int, CityId]] = [(0, next(counter), source)]

        while frontier:
            dist, _, city = heapq.heappop(frontier)

            # Early exit: only this target matters for the query
            if city == target:
                break

            if dist > distances[city]:
                continue

            for neighbour, weight in self.graph[city].items():
                candidate = dist + weight
                if candidate < distances[neighbour]:
                    distances[neighbour] = candidate
                    predecessors[neighbour] = city
                    heapq.heappush(frontier, (candidate, next(counter), neighbour))

        path = reconstruct_path(predecessors, source, target)
        if not path or path[0] != source:
            logger.debug(f"Shortest path {source} -> {target}: unreachable")
            return ShortestPathResult.unreachable()

        return ShortestPathResult(path, int(distances[target]))

    def stats(self) -> Dict[str, int]:
        """Cache statistics."""
        with self._lock:
            return {"hits": self.hits, "misses": self.misses, "cached_pairs": len(self._cache)}
