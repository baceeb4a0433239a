"""Limited-memory BFGS driver.

The driver validates the parameters, evaluates the starting point and then
alternates backtracking line searches with updates of the limited-memory
history until one of the termination tests fires.  All scratch storage lives
in a :class:`~pylbfgs.workspace.Workspace` released on every exit path.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional, Sequence, Union

import numpy as np

from .linesearch import EvaluateFn, evaluate_point, line_search_backtracking
from .parameters import LBFGSParameters, check_parameters, default_parameters
from .status import LBFGSError, Status, strerror
from .vector import ensure_vector, vec_copy, vec_ncopy, vec_norm, vec_norm_inv
from .workspace import Workspace

__all__ = ["LBFGSResult", "ProgressFn", "StepBoundFn", "lbfgs_optimize"]

LOGGER = logging.getLogger(__name__)

StepBoundFn = Callable[[Any, np.ndarray, np.ndarray], float]
ProgressFn = Callable[
    [Any, np.ndarray, np.ndarray, float, float, float, float, int, int], Union[int, bool, None]
]


@dataclass(slots=True)
class LBFGSResult:
    """Outcome of :func:`lbfgs_optimize`."""

    status: Status
    fx: Optional[float]
    x: np.ndarray
    iterations: int = 0
    n_evaluations: int = 0

    @property
    def success(self) -> bool:
        return self.status.is_success

    @property
    def message(self) -> str:
        return strerror(self.status)


def lbfgs_optimize(
    x: Sequence[float],
    evaluate: EvaluateFn,
    stepbound: Optional[StepBoundFn] = None,
    progress: Optional[ProgressFn] = None,
    instance: Any = None,
    param: Optional[LBFGSParameters] = None,
) -> LBFGSResult:
    """Minimise the objective provided by *evaluate* starting from *x*.

    Parameters
    ----------
    x:
        Starting point.  A one dimensional float :class:`numpy.ndarray` is
        updated in place and holds the final point on return; a float32 array
        receives the final point rounded to its precision.  Integer arrays
        are rejected with :class:`ValueError`.  Other sequences are converted
        and the final point is available as ``result.x``.
    evaluate:
        ``evaluate(instance, x, g) -> f``.  Must store the gradient at ``x``
        into ``g`` and return the objective value.
    stepbound:
        Optional ``stepbound(instance, xp, d) -> float`` giving an upper bound
        on the step along ``d`` from ``xp`` for the coming line search.  The
        bound is clipped to ``param.max_step``.
    progress:
        Optional ``progress(instance, x, g, fx, xnorm, gnorm, step, k, ls)``
        called after every completed iteration.  A truthy return value
        cancels the run.
    instance:
        Opaque user data handed to every callback.
    param:
        Parameters of the run, :func:`default_parameters` when omitted.

    Returns
    -------
    LBFGSResult
        The termination status, final objective value and final point.  On
        failure the point is the last accepted iterate.
    """

    if param is None:
        param = default_parameters()

    if isinstance(x, np.ndarray) and not np.issubdtype(x.dtype, np.floating):
        raise ValueError(f"Variables must be stored in a floating point array, got {x.dtype}")
    arr = ensure_vector(x)
    n = arr.size

    invalid = check_parameters(n, param)
    if invalid is not None:
        LOGGER.error("L-BFGS not started: %s", strerror(invalid))
        return LBFGSResult(invalid, None, arr)

    n_evaluations = 0

    def counted(inst: Any, xv: np.ndarray, gv: np.ndarray) -> float:
        nonlocal n_evaluations
        n_evaluations += 1
        return evaluate(inst, xv, gv)

    iterations = 0
    with Workspace(n, param) as work:
        g, gp, xp, d = work.g, work.gp, work.xp, work.d
        history, pf = work.history, work.pf

        fx = evaluate_point(counted, instance, arr, g)
        if pf is not None:
            pf[0] = fx

        # The initial inverse Hessian is the identity.
        vec_ncopy(d, g)

        xnorm = max(vec_norm(arr), 1.0)
        gnorm = vec_norm(g)
        if gnorm / xnorm <= param.g_epsilon:
            status = Status.ALREADY_MINIMIZED
        else:
            step = vec_norm_inv(d)
            k = 1
            while True:
                vec_copy(xp, arr)
                vec_copy(gp, g)

                step_min = param.min_step
                step_max = param.max_step
                if stepbound is not None:
                    step_max = min(float(stepbound(instance, xp, d)), param.max_step)
                    if step >= step_max:
                        step = step_max / 2.0

                try:
                    ls, fx, step = line_search_backtracking(
                        arr, fx, g, step, d, xp, gp, step_min, step_max, counted, instance, param
                    )
                except LBFGSError as err:
                    vec_copy(arr, xp)
                    vec_copy(g, gp)
                    status = err.status
                    break
                iterations = k

                xnorm = vec_norm(arr)
                gnorm = vec_norm(g)
                LOGGER.debug(
                    "Iteration %d: f=%.6e |x|=%.3e |g|=%.3e step=%.3e evaluations=%d",
                    k,
                    fx,
                    xnorm,
                    gnorm,
                    step,
                    ls,
                )

                if progress is not None and progress(instance, arr, g, fx, xnorm, gnorm, step, k, ls):
                    status = Status.CANCELED
                    break

                if gnorm / max(xnorm, 1.0) <= param.g_epsilon:
                    status = Status.CONVERGENCE
                    break

                if pf is not None:
                    # Relative decrease over the last ``past`` iterations.
                    if param.past <= k and fx != 0.0:
                        rate = (pf[k % param.past] - fx) / fx
                        if abs(rate) < param.delta:
                            status = Status.STOP
                            break
                    pf[k % param.past] = fx

                if param.max_iterations != 0 and param.max_iterations < k + 1:
                    status = Status.MAXIMUMITERATION
                    break

                history.update(arr, xp, g, gp)
                history.direction(g, d)
                k += 1
                step = 1.0

    if isinstance(x, np.ndarray) and x is not arr:
        x[...] = arr

    if status.is_success or status == Status.CANCELED:
        LOGGER.info(
            "L-BFGS finished after %d iterations (%d evaluations): %s",
            iterations,
            n_evaluations,
            strerror(status),
        )
    else:
        LOGGER.warning(
            "L-BFGS stopped after %d iterations (%d evaluations): %s",
            iterations,
            n_evaluations,
            strerror(status),
        )

    return LBFGSResult(status, fx, arr, iterations, n_evaluations)
