"""
Profiling utilities for memory and timing diagnostics.

Provides the memory budget check used before allocating exact-solver tables,
and context managers for tracking memory and timing code blocks.
"""

import functools
import os
import time
from contextlib import contextmanager
from typing import Callable, Optional

import psutil

from .exceptions import InsufficientMemoryError
from .logging_config import get_logger

logger = get_logger(__name__)

BYTES_PER_MB = 1024 * 1024


def available_memory_mb() -> float:
    """Memory currently available to the process in MB."""
    return psutil.virtual_memory().available / BYTES_PER_MB


def process_memory_mb() -> float:
    """Resident set size of the current process in MB."""
    return psutil.Process(os.getpid()).memory_info().rss / BYTES_PER_MB


def ensure_memory_available(required_bytes: int, safety_fraction: float = 0.5) -> None:
    """Refuse an allocation that would not fit in available memory.

    Args:
        required_bytes: Estimated size of the allocation
        safety_fraction: Fraction of available memory the allocation may use

    Raises:
        InsufficientMemoryError: If the allocation exceeds the budget

    Example:
        >>> ensure_memory_available((1 << 20) * 20 * 9)
    """
    required_mb = required_bytes / BYTES_PER_MB
    budget_mb = available_memory_mb() * safety_fraction

    logger.debug(f"Memory check: need {required_mb:.1f} MB, budget {budget_mb:.1f} MB")

    if required_mb > budget_mb:
        raise InsufficientMemoryError(required_mb, budget_mb)


@contextmanager
def track_memory(operation_name: str):
    """Context manager to track memory usage.

    Args:
        operation_name: Name of operation being tracked

    Example:
        >>> with track_memory("held-karp tables"):
        ...     result = solver.solve(start, end, waypoints)
        DEBUG - held-karp tables: +12.5 MB (before: 80.1 MB, after: 92.6 MB)
    """
    mem_before = process_memory_mb()

    yield

    mem_after = process_memory_mb()
    logger.debug(
        f"{operation_name}: {mem_after - mem_before:+.1f} MB "
        f"(before: {mem_before:.1f} MB, after: {mem_after:.1f} MB)"
    )


class PerformanceTimer:
    """Context manager and decorator for timing code blocks.

    Example:
        >>> with PerformanceTimer("compare") as timer:
        ...     report = harness.compare(start, end, waypoints)
        >>> print(f"Took {timer.elapsed:.2f}s")
    """

    def __init__(self, operation_name: str, log_level: int = 10):  # 10 = DEBUG
        self.operation_name = operation_name
        self.log_level = log_level
        self.start_time: Optional[float] = None
        self.elapsed: Optional[float] = None

    def __enter__(self):
        self.start_time = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.start_time is not None:
            self.elapsed = time.perf_counter() - self.start_time
            logger.log(self.log_level, f"{self.operation_name}: {self.elapsed:.6f}s")
        return False

    def __call__(self, func: Callable) -> Callable:
        """Use as decorator."""
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            with self:
                return func(*args, **kwargs)
        return wrapper
