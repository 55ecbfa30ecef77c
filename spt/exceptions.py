"""Custom exception types used across :mod:`spt`."""

from __future__ import annotations


class SPTError(Exception):
    """Base class for all package-specific errors."""


class InputError(SPTError, ValueError):
    """Raised for invalid caller input such as malformed edges or roots."""


class InvalidOrderError(InputError):
    """Raised when a graph is created with a negative or non-integer order."""


class VertexOutOfRangeError(InputError, IndexError):
    """Raised when a vertex id falls outside ``[0, order)``."""

    def __init__(self, vertex: object, order: int) -> None:
        super().__init__(f"vertex {vertex!r} is not in [0, {order})")
        self.vertex = vertex
        self.order = order


class EmptyRootSetError(InputError):
    """Raised when a solve or hyper-root augmentation receives no roots."""


class GraphFormatError(InputError):
    """Raised when parsing a graph file fails or a weight is unusable."""


class ConfigError(SPTError, ValueError):
    """Raised for invalid configuration options."""


class AlgorithmError(SPTError, RuntimeError):
    """Raised when algorithm invariants are violated at runtime."""


class NoLowerBoundError(SPTError):
    """Raised on request when a negative cycle is reachable from the roots.

    The solvers never raise this themselves; they return a result flagged
    ``no_lower_bound`` and :meth:`spt.base.SPTResult.raise_for_status`
    converts it into this exception.
    """


__all__ = [
    "SPTError",
    "InputError",
    "InvalidOrderError",
    "VertexOutOfRangeError",
    "EmptyRootSetError",
    "GraphFormatError",
    "ConfigError",
    "AlgorithmError",
    "NoLowerBoundError",
]
