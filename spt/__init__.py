"""Public package exports for :mod:`spt`."""

from __future__ import annotations

from .base import SolverMetrics, SPTResult
from .exceptions import (
    AlgorithmError,
    ConfigError,
    EmptyRootSetError,
    GraphFormatError,
    InputError,
    InvalidOrderError,
    NoLowerBoundError,
    SPTError,
    VertexOutOfRangeError,
)
from .graph import Graph
from .io import parse_adjacency, parse_roots, read_graph, write_graph
from .label_correcting import LabelCorrectingSolver
from .label_setting import LabelSettingSolver
from .logger import Logger, NoopLogger, StdLogger
from .path import reconstruct_path, tree_depths, tree_edges
from .solver import Algorithm, SolverConfig, SPTSolver, default_max_path, solve

__version__ = "0.1.0"

__all__ = [
    "Graph",
    "Algorithm",
    "SPTSolver",
    "SPTResult",
    "SolverConfig",
    "SolverMetrics",
    "LabelCorrectingSolver",
    "LabelSettingSolver",
    "solve",
    "default_max_path",
    "reconstruct_path",
    "tree_edges",
    "tree_depths",
    "Logger",
    "NoopLogger",
    "StdLogger",
    "parse_adjacency",
    "parse_roots",
    "read_graph",
    "write_graph",
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
