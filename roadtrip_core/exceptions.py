"""
Custom exceptions for the road trip route optimizer.

Provides a clear exception hierarchy for better error handling and debugging.
All exceptions inherit from RoadTripError for easy catching of all library errors.
"""


class RoadTripError(Exception):
    """Base exception for all route optimizer errors."""

    pass


# ==============================================================================
# Input/Parsing Errors
# ==============================================================================


class ParseError(RoadTripError):
    """Raised when parsing input data fails."""

    pass


class DataFileError(ParseError):
    """Raised specifically for road/attraction table failures."""

    def __init__(self, filepath: str, reason: str):
        self.filepath = filepath
        self.reason = reason
        super().__init__(f"Failed to load data file '{filepath}': {reason}")


class ValidationError(RoadTripError):
    """Raised when input validation fails."""

    pass


class InvalidQueryError(ValidationError):
    """Raised when a query references cities missing from the road graph."""

    def __init__(self, missing: list):
        self.missing = missing
        names = ", ".join(str(city) for city in missing)
        super().__init__(f"City not found in road network: {names}")


# ==============================================================================
# Graph Construction Errors
# ==============================================================================


class GraphError(RoadTripError):
    """Base class for graph-related errors."""

    pass


class GraphBuildError(GraphError):
    """Raised when graph construction fails."""

    def __init__(self, reason: str, num_cities: int = 0, num_roads: int = 0):
        self.reason = reason
        self.num_cities = num_cities
        self.num_roads = num_roads
        msg = f"Graph construction failed: {reason}"
        if num_cities or num_roads:
            msg += f" (cities: {num_cities}, roads: {num_roads})"
        super().__init__(msg)


# ==============================================================================
# Routing Errors
# ==============================================================================


class RoutingError(RoadTripError):
    """Base class for routing-related errors."""

    pass


class NoPathError(RoutingError):
    """Raised when no path exists between two required cities."""

    def __init__(self, from_city, to_city):
        self.from_city = from_city
        self.to_city = to_city
        super().__init__(f"No path exists from {from_city} to {to_city}")


class WaypointLimitError(RoutingError):
    """Raised when an exact solver is given more waypoints than it supports."""

    def __init__(self, num_waypoints: int, limit: int):
        self.num_waypoints = num_waypoints
        self.limit = limit
        super().__init__(
            f"{num_waypoints} waypoints exceeds the exact solver limit of {limit}"
        )


# ==============================================================================
# Resource Errors
# ==============================================================================


class ResourceError(RoadTripError):
    """Base class for resource-related errors."""

    pass


class InsufficientMemoryError(ResourceError):
    """Raised when memory limits would be exceeded."""

    def __init__(self, required_mb: float, available_mb: float):
        self.required_mb = required_mb
        self.available_mb = available_mb
        super().__init__(
            f"Insufficient memory: need {required_mb:.1f} MB, "
            f"have {available_mb:.1f} MB"
        )


# ==============================================================================
# Configuration Errors
# ==============================================================================


class ConfigurationError(RoadTripError):
    """Raised when configuration is invalid."""

    pass


# ==============================================================================
# Convenience Functions
# ==============================================================================


def handle_data_file_error(filepath: str, original_error: Exception) -> None:
    """
    Convert generic file/CSV errors to a DataFileError.

    Args:
        filepath: Path to the file being read
        original_error: The original exception that was raised

    Raises:
        DataFileError: Always raises with context from original error
    """
    import csv

    if isinstance(original_error, csv.Error):
        raise DataFileError(filepath, f"CSV syntax error: {original_error}") from original_error
    elif isinstance(original_error, (FileNotFoundError, PermissionError, IsADirectoryError)):
        raise DataFileError(filepath, str(original_error)) from original_error
    elif isinstance(original_error, UnicodeDecodeError):
        raise DataFileError(filepath, f"Encoding error: {original_error}") from original_error
    else:
        raise DataFileError(filepath, f"Unexpected error: {type(original_error).__name__}: {original_error}") from original_error
