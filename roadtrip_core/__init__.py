"""
Road Trip Core - Waypoint route optimizer over an undirected road network

This package provides:
- A Dijkstra shortest path oracle with early exit and memoisation
- Greedy, Held-Karp and A* strategies for ordering waypoints
- Expansion of waypoint orders into city-by-city routes
- A comparison harness that runs every strategy on one query
- CSV loaders for the road and attraction tables

Version: 1.0.0
"""

from .astar_search import HeuristicBestFirstSearch, estimate_remaining
from .base import RoutingStrategy
from .comparison import ComparisonHarness, ComparisonReport
from .config import PlannerSettings
from .distance_matrix import WaypointMatrix, build_waypoint_set
from .exceptions import (
    ConfigurationError,
    DataFileError,
    GraphBuildError,
    GraphError,
    InsufficientMemoryError,
    InvalidQueryError,
    NoPathError,
    ParseError,
    ResourceError,
    RoadTripError,
    RoutingError,
    ValidationError,
    WaypointLimitError,
)
from .graph import RoadGraph
from .greedy_router import GreedyNearestNeighbor
from .held_karp import ExactDynamicProgramming
from .loaders import load_attractions, load_road_graph
from .path_expansion import PathExpander
from .path_reconstruction import reconstruct_path, validate_path
from .planner import RoutePlanner, default_strategies
from .shortest_path import DistanceOracle
from .types import NO_PATH_DISTANCE, CityId, RouteResult, ShortestPathResult

# Strategy name -> class, in comparison order
STRATEGIES = {
    GreedyNearestNeighbor.name: GreedyNearestNeighbor,
    ExactDynamicProgramming.name: ExactDynamicProgramming,
    HeuristicBestFirstSearch.name: HeuristicBestFirstSearch,
}

__all__ = [
    # Types
    "CityId",
    "RouteResult",
    "ShortestPathResult",
    "NO_PATH_DISTANCE",
    # Graph and oracle
    "RoadGraph",
    "DistanceOracle",
    "reconstruct_path",
    "validate_path",
    "WaypointMatrix",
    "build_waypoint_set",
    "PathExpander",
    # Strategies
    "RoutingStrategy",
    "GreedyNearestNeighbor",
    "ExactDynamicProgramming",
    "HeuristicBestFirstSearch",
    "estimate_remaining",
    "STRATEGIES",
    # Comparison and planning
    "ComparisonHarness",
    "ComparisonReport",
    "RoutePlanner",
    "default_strategies",
    "PlannerSettings",
    # Data files
    "load_road_graph",
    "load_attractions",
    # Exceptions
    "RoadTripError",
    "ParseError",
    "DataFileError",
    "ValidationError",
    "InvalidQueryError",
    "GraphError",
    "GraphBuildError",
    "RoutingError",
    "NoPathError",
    "WaypointLimitError",
    "ResourceError",
    "InsufficientMemoryError",
    "ConfigurationError",
]

__version__ = "1.0.0"
