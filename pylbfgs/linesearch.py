"""Backtracking line search enforcing the sufficient-decrease condition."""

from __future__ import annotations

from typing import Any, Callable, Tuple

import numpy as np

from .parameters import LBFGSParameters
from .status import LBFGSError, Status
from .vector import vec_add, vec_copy, vec_dot

__all__ = ["BACKTRACK_FACTOR", "EvaluateFn", "evaluate_point", "line_search_backtracking"]

BACKTRACK_FACTOR = 0.5

EvaluateFn = Callable[[Any, np.ndarray, np.ndarray], float]


def evaluate_point(evaluate: EvaluateFn, instance: Any, x: np.ndarray, g: np.ndarray) -> float:
    """Call the user evaluator and return the objective as a Python float."""

    fx = np.asarray(evaluate(instance, x, g), dtype=float)
    if fx.ndim != 0:
        raise ValueError("The evaluator must return a scalar objective value")
    return float(fx)


def line_search_backtracking(
    x: np.ndarray,
    fx: float,
    g: np.ndarray,
    step: float,
    d: np.ndarray,
    xp: np.ndarray,
    gp: np.ndarray,
    step_min: float,
    step_max: float,
    evaluate: EvaluateFn,
    instance: Any,
    param: LBFGSParameters,
) -> Tuple[int, float, float]:
    """Search along *d* from *xp* for a step satisfying the Armijo condition.

    Trial points ``xp + step * d`` are evaluated into *x* and *g* while the
    step is halved after every rejection.  On success *x* and *g* hold the
    accepted trial and ``(count, fx, step)`` is returned, ``count`` being the
    number of evaluator calls.  Every failure raises :class:`LBFGSError`; *x*
    and *g* may then hold a rejected trial and must be restored by the caller.
    """

    if step <= 0.0:
        raise LBFGSError(Status.INVALIDPARAMETERS)

    dginit = vec_dot(gp, d)
    if not dginit < 0.0:
        raise LBFGSError(Status.INCREASEGRADIENT)

    finit = fx
    dgtest = param.f_dec_coeff * dginit
    count = 0

    while True:
        vec_copy(x, xp)
        vec_add(x, d, step)
        fx = evaluate_point(evaluate, instance, x, g)
        count += 1

        if fx <= finit + step * dgtest:
            return count, fx, step

        if step < step_min:
            raise LBFGSError(Status.MINIMUMSTEP)
        if step > step_max:
            raise LBFGSError(Status.MAXIMUMSTEP)
        if param.max_linesearch <= count:
            raise LBFGSError(Status.MAXIMUMLINESEARCH)

        step *= BACKTRACK_FACTOR
