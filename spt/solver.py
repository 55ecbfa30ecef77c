"""Solver facade: algorithm selection, configuration and one-call dispatch."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Type, Union

from .base import SPTResult, SolverMetrics, _SPTSolverBase
from .exceptions import AlgorithmError, ConfigError
from .graph import Graph, Vertex
from .label_correcting import LabelCorrectingSolver
from .label_setting import LabelSettingSolver
from .logger import Logger, NoopLogger
from .path import reconstruct_path


class Algorithm(enum.Enum):
    """Available SPT algorithms."""

    LABEL_CORRECTING = "spt.l"
    LABEL_SETTING = "spt.s"

    @classmethod
    def parse(cls, value: Union[str, int, "Algorithm"]) -> "Algorithm":
        """Resolve an algorithm from its value, name, alias or menu index.

        Accepted spellings include ``"spt.l"``, ``"label_correcting"``,
        ``"bellman-ford"``, ``"spt.s"``, ``"label-setting"``, ``"dijkstra"``
        and the menu indices ``0`` (SPT.S) and ``1`` (SPT.L).

        Raises:
            ConfigError: If ``value`` names no known algorithm.
        """
        if isinstance(value, Algorithm):
            return value
        key = str(value).strip().lower().replace("-", "_")
        try:
            return _ALIASES[key]
        except KeyError:
            raise ConfigError(f"unknown algorithm {value!r}") from None

    @property
    def solver_cls(self) -> Type[_SPTSolverBase]:
        """Solver class implementing this algorithm."""
        return _SOLVERS[self]


_ALIASES: Dict[str, Algorithm] = {
    "spt.l": Algorithm.LABEL_CORRECTING,
    "l": Algorithm.LABEL_CORRECTING,
    "1": Algorithm.LABEL_CORRECTING,
    "label_correcting": Algorithm.LABEL_CORRECTING,
    "bellman_ford": Algorithm.LABEL_CORRECTING,
    "spt.s": Algorithm.LABEL_SETTING,
    "s": Algorithm.LABEL_SETTING,
    "0": Algorithm.LABEL_SETTING,
    "label_setting": Algorithm.LABEL_SETTING,
    "dijkstra": Algorithm.LABEL_SETTING,
}

_SOLVERS: Dict[Algorithm, Type[_SPTSolverBase]] = {
    Algorithm.LABEL_CORRECTING: LabelCorrectingSolver,
    Algorithm.LABEL_SETTING: LabelSettingSolver,
}


def default_max_path(G: Graph) -> float:
    """Return ``order * max_weight + 1``, an upper bound on every tree label.

    Negative or missing maxima count as zero so the bound stays positive.
    """
    max_w = G.max_weight()
    return float(G.order) * max(max_w or 0.0, 0.0) + 1.0


@dataclass(frozen=True)
class SolverConfig:
    """Configuration knobs for :class:`SPTSolver`.

    Attributes:
        algorithm: Which solver to run.
        max_path: Seed label for non-root vertices. ``None`` derives it from
            the graph with :func:`default_max_path`.
        check_weights: If ``True``, refuse to run SPT.S on a graph holding a
            negative edge instead of relying on the solver's assertion.
    """

    algorithm: Algorithm = Algorithm.LABEL_CORRECTING
    max_path: Optional[float] = None
    check_weights: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "algorithm", Algorithm.parse(self.algorithm))
        if self.max_path is not None and not self.max_path > 0:
            raise ConfigError(f"max_path must be positive, got {self.max_path}")


class SPTSolver:
    """Shortest path tree solver over a graph and a root set.

    Args:
        G: Input graph. It is augmented with a hyper-root for the duration
            of a multi-root solve and restored afterwards.
        roots: Non-empty collection of root vertices; duplicates are ignored.
        config: Optional solver configuration.
        logger: Optional structured logger.

    Raises:
        EmptyRootSetError: If ``roots`` is empty.
        VertexOutOfRangeError: If a root is not a vertex of ``G``.
        ConfigError: If ``check_weights`` is set and SPT.S meets a negative edge.
    """

    def __init__(
        self,
        G: Graph,
        roots: Iterable[Vertex],
        config: Optional[SolverConfig] = None,
        logger: Logger | None = None,
    ) -> None:
        self.G = G
        self.cfg = config or SolverConfig()
        self.logger = logger or NoopLogger()
        self.max_path = self.cfg.max_path if self.cfg.max_path is not None else default_max_path(G)

        if self.cfg.check_weights and self.cfg.algorithm is Algorithm.LABEL_SETTING:
            min_w = G.min_weight()
            if min_w is not None and min_w < 0:
                raise ConfigError(
                    f"spt.s requires non-negative weights; minimum weight is {min_w}"
                )

        self._impl = self.cfg.algorithm.solver_cls(
            G, list(roots), self.max_path, logger=self.logger
        )
        self._result: Optional[SPTResult] = None

    @property
    def roots(self) -> List[Vertex]:
        """Distinct roots, in first-seen order."""
        return list(self._impl.roots)

    def solve(self) -> SPTResult:
        """Run the configured algorithm and return its result."""
        self._result = self._impl.solve()
        return self._result

    def path(self, target: Vertex) -> List[Vertex]:
        """Return the tree path from a root to ``target``.

        Returns:
            Vertex ids from root to target (inclusive), or an empty list if
            no root reaches ``target``.

        Raises:
            AlgorithmError: If :meth:`solve` has not run yet.
            NoLowerBoundError: If the last solve found a negative cycle.
        """
        if self._result is None:
            raise AlgorithmError("Call solve() before requesting paths.")
        res = self._result.raise_for_status()
        self.G.check_vertex(target)
        if not res.reached(target):
            return []
        return reconstruct_path(res.predecessors, target)

    def summary(self) -> Dict[str, int]:
        """Return a copy of the counters of the last solve."""
        return self._impl.summary()

    def metrics(self, wall_ms: float, peak_mib: float | None = None) -> SolverMetrics:
        """Return performance metrics for the most recent run."""
        return self._impl.metrics(wall_ms=wall_ms, peak_mib=peak_mib)


def solve(
    G: Graph,
    roots: Iterable[Vertex],
    algorithm: Union[str, int, Algorithm] = Algorithm.LABEL_CORRECTING,
    max_path: Optional[float] = None,
    logger: Logger | None = None,
) -> SPTResult:
    """Compute a shortest path tree of ``G`` rooted at ``roots``.

    Args:
        G: Input graph.
        roots: Non-empty collection of root vertices.
        algorithm: :class:`Algorithm` member or one of its aliases.
        max_path: Seed label; defaults to :func:`default_max_path`.
        logger: Optional structured logger.

    Returns:
        The solver result. Check ``no_lower_bound`` (or call
        ``raise_for_status()``) before trusting labels from SPT.L.
    """
    cfg = SolverConfig(algorithm=Algorithm.parse(algorithm), max_path=max_path)
    return SPTSolver(G, roots, config=cfg, logger=logger).solve()


__all__ = ["Algorithm", "SolverConfig", "SPTSolver", "default_max_path", "solve"]
