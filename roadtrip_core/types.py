"""
Type definitions for the road trip route optimizer.

This module provides type aliases and value objects shared by the distance
oracle, the routing strategies and the comparison harness.
"""

from typing import Dict, List, Mapping, NamedTuple, Optional

# Sentinel distance for "no valid route"
NO_PATH_DISTANCE = -1

Distance = int  # Road distance (miles in the bundled data)
WaypointIndex = int  # Index into the per-query waypoint list


class CityId(NamedTuple):
    """Identifier for a city in the road network.

    Attributes:
        name: City name (e.g. "New York")
        state: Region / state code (e.g. "NY")
    """

    name: str
    state: str

    @classmethod
    def parse(cls, text: str) -> "CityId":
        """Parse the "Name ST" form used in the road and attraction tables.

        The state code is the last whitespace-separated token.

        Example:
            >>> CityId.parse("San Antonio TX")
            CityId(name='San Antonio', state='TX')

        Raises:
            ValueError: If the text has no state code
        """
        cleaned = " ".join(text.split())
        name, sep, state = cleaned.rpartition(" ")
        if not sep or not name:
            raise ValueError(f"City identifier must look like 'Name ST', got {text!r}")
        return cls(name, state)

    def __str__(self) -> str:
        return f"{self.name} {self.state}"


Adjacency = Mapping[CityId, Mapping[CityId, Distance]]


class ShortestPathResult(NamedTuple):
    """Result of a single source/target shortest path query.

    Attributes:
        path: Cities from source to target (empty if unreachable)
        distance: Total distance, or NO_PATH_DISTANCE if unreachable
    """

    path: List[CityId]
    distance: Distance

    @property
    def found(self) -> bool:
        return self.distance != NO_PATH_DISTANCE

    @classmethod
    def unreachable(cls) -> "ShortestPathResult":
        return cls([], NO_PATH_DISTANCE)


class RouteResult(NamedTuple):
    """Result from running one routing strategy on one query.

    Attributes:
        path: Fully expanded city-by-city route (empty if no route)
        distance: Total route distance, or NO_PATH_DISTANCE
        strategy_name: Name of the strategy that produced the result
        computation_time: Wall-clock time of the solve call in seconds
        error: Reason the strategy failed, if it did
    """

    path: List[CityId]
    distance: Distance
    strategy_name: str = ""
    computation_time: float = 0.0
    error: Optional[str] = None

    @property
    def found(self) -> bool:
        """A usable route was produced."""
        return self.distance != NO_PATH_DISTANCE

    @classmethod
    def no_path(cls, strategy_name: str = "", error: Optional[str] = None) -> "RouteResult":
        """Sentinel result for a query with no valid route."""
        return cls([], NO_PATH_DISTANCE, strategy_name, 0.0, error)

    def describe(self) -> str:
        """Human-readable one-line representation."""
        if not self.found:
            msg = f"{self.strategy_name}: no valid path"
            if self.error:
                msg += f" ({self.error})"
            return msg
        route = " -> ".join(str(city) for city in self.path)
        return f"{self.strategy_name}: {self.distance} [{self.computation_time * 1000:.2f} ms] {route}"


AttractionIndex = Dict[str, CityId]
