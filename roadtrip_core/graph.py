"""
Undirected road network.

RoadGraph stores every road in both directions and exposes read-only views of
the adjacency, so one instance can be shared by every strategy and thread.
"""

from collections import abc
from types import MappingProxyType
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Set, Tuple

from .exceptions import GraphBuildError
from .logging_config import get_logger
from .types import CityId, Distance

logger = get_logger(__name__)

Road = Tuple[CityId, CityId, Distance]


class RoadGraph(abc.Mapping):
    """Immutable adjacency mapping: city -> {neighbour: distance}.

    Build with ``RoadGraph.from_edges``. Distances are non-negative integers;
    an edge (A, B, d) is always visible as both A->B and B->A.

    Example:
        >>> a, b = CityId("Austin", "TX"), CityId("Dallas", "TX")
        >>> graph = RoadGraph.from_edges([(a, b, 195)])
        >>> graph[b][a]
        195
    """

    def __init__(self, adjacency: Dict[CityId, Dict[CityId, Distance]]):
        self._adjacency = {
            city: MappingProxyType(dict(neighbours))
            for city, neighbours in adjacency.items()
        }
        self._num_roads = sum(
            1 for city, neighbours in adjacency.items()
            for other in neighbours if city <= other
        )

    @classmethod
    def from_edges(
        cls,
        roads: Iterable[Road],
        cities: Optional[Iterable[CityId]] = None,
    ) -> "RoadGraph":
        """Build a graph from (city_a, city_b, distance) triples.

        Args:
            roads: Undirected roads
            cities: Extra cities to include even if they have no roads

        Returns:
            Frozen RoadGraph

        Raises:
            GraphBuildError: If a distance is negative or not an integer

        Note:
            When the same pair appears twice with different distances, the
            shorter distance is kept.
        """
        adjacency: Dict[CityId, Dict[CityId, Distance]] = {}

        for city in cities or ():
            adjacency.setdefault(city, {})

        for city_a, city_b, distance in roads:
            if isinstance(distance, bool) or not isinstance(distance, int):
                raise GraphBuildError(
                    f"distance between {city_a} and {city_b} must be an integer, got {distance!r}",
                    num_cities=len(adjacency),
                )
            if distance < 0:
                raise GraphBuildError(
                    f"negative distance {distance} between {city_a} and {city_b}",
                    num_cities=len(adjacency),
                )

            neighbours_a = adjacency.setdefault(city_a, {})
            neighbours_b = adjacency.setdefault(city_b, {})

            existing = neighbours_a.get(city_b)
            if existing is not None and existing != distance:
                logger.warning(
                    f"Duplicate road {city_a} <-> {city_b} ({existing} vs {distance}), "
                    f"keeping shorter"
                )
                distance = min(existing, distance)

            neighbours_a[city_b] = distance
            neighbours_b[city_a] = distance

        graph = cls(adjacency)
        logger.debug(f"Road graph built: {len(graph)} cities, {graph.num_roads} roads")
        return graph

    def __getitem__(self, city: CityId) -> Mapping[CityId, Distance]:
        return self._adjacency[city]

    def __iter__(self) -> Iterator[CityId]:
        return iter(self._adjacency)

    def __len__(self) -> int:
        return len(self._adjacency)

    def __contains__(self, city: object) -> bool:
        return city in self._adjacency

    @property
    def num_roads(self) -> int:
        """Number of undirected roads (self-loops included)."""
        return self._num_roads

    def neighbours(self, city: CityId) -> Mapping[CityId, Distance]:
        """Neighbours of a city, empty for unknown cities."""
        return self._adjacency.get(city, MappingProxyType({}))

    def road_distance(self, city_a: CityId, city_b: CityId) -> Optional[Distance]:
        """Length of the direct road between two cities, or None."""
        return self.neighbours(city_a).get(city_b)

    def missing(self, cities: Iterable[CityId]) -> List[CityId]:
        """Cities from ``cities`` that are not in the graph, in order, without repeats."""
        seen: Set[CityId] = set()
        result = []
        for city in cities:
            if city not in self._adjacency and city not in seen:
                seen.add(city)
                result.append(city)
        return result

    def __repr__(self) -> str:
        return f"RoadGraph(cities={len(self)}, roads={self.num_roads})"
