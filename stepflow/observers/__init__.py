"""Built-in observers."""

from .console import ConsoleObserver, ConsoleObserverOptions
from .performance import PerformanceObserver

__all__ = [
    "ConsoleObserver",
    "ConsoleObserverOptions",
    "PerformanceObserver",
]
