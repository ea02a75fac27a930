"""
Robust path reconstruction for the shortest path oracle.

Walks predecessor maps produced by Dijkstra and validates finished routes
against the road graph.
"""

from typing import List, Mapping, Optional, Set

from .logging_config import get_logger
from .types import CityId

logger = get_logger(__name__)


def reconstruct_path(
    predecessors: Mapping[CityId, Optional[CityId]],
    source: CityId,
    target: CityId,
    max_iterations: Optional[int] = None,
) -> List[CityId]:
    """Reconstruct a shortest path from a Dijkstra predecessor map.

    Walks backwards from ``target`` following predecessors, then reverses.
    A city missing from the map (or mapped to None) ends the walk.

    Args:
        predecessors: predecessors[city] is the previous city on the path to city
        source: Starting city
        target: Destination city
        max_iterations: Maximum number of steps before giving up.
            If None, uses len(predecessors) + 1 as the limit.

    Returns:
        List of cities from source to target. Returns empty list if:
        - The walk does not end at source (target unreachable)
        - A cycle is detected
        - Maximum iterations exceeded

    Example:
        >>> preds = {b: a, c: b}
        >>> reconstruct_path(preds, a, c)
        [a, b, c]
    """
    if source == target:
        return [source]

    if max_iterations is None:
        max_iterations = len(predecessors) + 1

    path: List[CityId] = []
    visited: Set[CityId] = set()
    current: Optional[CityId] = target

    for iteration in range(max_iterations):
        if current in visited:
            logger.warning(
                f"Cycle detected during path reconstruction from {source} to {target} "
                f"at {current} (iteration {iteration})"
            )
            return []

        visited.add(current)
        path.append(current)

        if current == source:
            break

        current = predecessors.get(current)

        # Chain ended without reaching the source
        if current is None:
            break
    else:
        logger.warning(
            f"Path reconstruction exceeded maximum iterations ({max_iterations}) "
            f"from {source} to {target}"
        )
        return []

    path.reverse()

    # The walk must end at the source, otherwise the target was never reached
    if not path or path[0] != source:
        logger.debug(f"No path exists from {source} to {target}")
        return []

    logger.debug(f"Path reconstructed: {len(path)} cities from {source} to {target}")
    return path


def validate_path(
    graph: Mapping[CityId, Mapping[CityId, int]],
    path: List[CityId],
    source: Optional[CityId] = None,
    target: Optional[CityId] = None,
) -> bool:
    """Validate that every consecutive pair of a path is a direct road.

    Args:
        graph: Road adjacency
        path: Sequence of cities
        source: Expected first city (not checked if None)
        target: Expected last city (not checked if None)

    Returns:
        True if path is valid, False otherwise
    """
    if not path:
        logger.debug("Path validation failed: empty path")
        return False

    if source is not None and path[0] != source:
        logger.debug(f"Path validation failed: starts at {path[0]}, expected {source}")
        return False

    if target is not None and path[-1] != target:
        logger.debug(f"Path validation failed: ends at {path[-1]}, expected {target}")
        return False

    for current, following in zip(path, path[1:]):
        if current == following:
            continue
        if following not in graph.get(current, {}):
            logger.debug(f"Path validation failed: no road {current} -> {following}")
            return False

    return True
