"""Independent L-BFGS runs from several starting points.

When :mod:`mpi4py` is importable the starting points are distributed evenly
across the ranks of ``MPI.COMM_WORLD`` (or of the communicator passed in) and
every rank receives the complete list of results.
"""

from __future__ import annotations

import importlib
import importlib.util
import logging
import math
from dataclasses import dataclass, field
from typing import Any, Iterable, Optional, Sequence

import numpy as np

from .linesearch import EvaluateFn
from .optimize import LBFGSResult, ProgressFn, StepBoundFn, lbfgs_optimize
from .parameters import LBFGSParameters

__all__ = ["MPI", "MultiStartResult", "get_world_comm", "optimize_multistart"]

LOGGER = logging.getLogger(__name__)

MPI: Any | None
if importlib.util.find_spec("mpi4py") is None:
    MPI = None
else:
    MPI = importlib.import_module("mpi4py.MPI")


def get_world_comm():
    """Return :data:`mpi4py.MPI.COMM_WORLD` when MPI is available."""

    if MPI is None:
        return None
    return MPI.COMM_WORLD


@dataclass(slots=True)
class MultiStartResult:
    """Results of all runs, ordered like the starting points."""

    results: list[LBFGSResult] = field(default_factory=list)
    best_index: int = -1

    @property
    def best(self) -> Optional[LBFGSResult]:
        if self.best_index < 0:
            return None
        return self.results[self.best_index]


def _rank_key(result: LBFGSResult) -> tuple[bool, float]:
    fx = result.fx if result.fx is not None and math.isfinite(result.fx) else math.inf
    return (not result.success, fx)


def optimize_multistart(
    starts: Sequence[Sequence[float]],
    evaluate: EvaluateFn,
    stepbound: Optional[StepBoundFn] = None,
    progress: Optional[ProgressFn] = None,
    instance: Any = None,
    param: Optional[LBFGSParameters] = None,
    *,
    comm=None,
) -> MultiStartResult:
    """Run :func:`~pylbfgs.lbfgs_optimize` from every row of *starts*.

    The best run is the successful one with the lowest objective value; when
    no run succeeded the failed run with the lowest objective is reported.
    The starting points themselves are never modified.
    """

    points = np.array(starts, dtype=float, copy=True)
    if points.ndim != 2:
        raise ValueError("Starting points must be given as a two dimensional array")
    nstarts = points.shape[0]

    if comm is None:
        comm = get_world_comm()
    if comm is not None:
        size = comm.Get_size()
        rank = comm.Get_rank()
    else:
        size = 1
        rank = 0

    if rank == 0:
        LOGGER.info("Running %d L-BFGS starts on %d rank(s)", nstarts, size)

    assigned: Iterable[int]
    if size > 1:
        assigned = range(rank, nstarts, size)
    else:
        assigned = range(nstarts)

    local: list[tuple[int, LBFGSResult]] = []
    for index in assigned:
        result = lbfgs_optimize(points[index], evaluate, stepbound, progress, instance, param)
        local.append((index, result))

    if comm is not None and size > 1:
        gathered = comm.allgather(local)
        pairs = [pair for chunk in gathered for pair in chunk]
    else:
        pairs = local
    pairs.sort(key=lambda pair: pair[0])

    results = [result for _, result in pairs]
    best_index = -1
    if results:
        best_index = min(range(len(results)), key=lambda i: _rank_key(results[i]))

    if rank == 0:
        successes = sum(1 for result in results if result.success)
        LOGGER.info("Completed %d of %d starts successfully", successes, nstarts)
    return MultiStartResult(results, best_index)
