"""Tuning parameters of the L-BFGS driver."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .status import Status

__all__ = ["LBFGSParameters", "check_parameters", "default_parameters"]


@dataclass(frozen=True)
class LBFGSParameters:
    """Parameters controlling a single :func:`pylbfgs.lbfgs_optimize` call.

    Attributes
    ----------
    mem_size:
        Number of correction pairs kept to approximate the inverse Hessian.
        Values below 3 are not recommended; large values make every iteration
        more expensive.
    g_epsilon:
        Gradient tolerance.  The run converges when
        ``||g|| / max(1, ||x||) <= g_epsilon``.
    past:
        Distance, in iterations, used by the delta-based stopping test.  Zero
        disables the test.
    delta:
        Minimum relative decrease ``|f' - f| / f`` of the objective over
        ``past`` iterations below which the run stops.
    max_iterations:
        Iteration cap; zero keeps iterating until convergence or an error.
    max_linesearch:
        Maximum number of evaluator calls per line search.
    min_step, max_step:
        Bounds on the line-search step.
    f_dec_coeff:
        Sufficient-decrease coefficient of the Armijo condition.
    s_curv_coeff:
        Curvature coefficient, must satisfy ``f_dec_coeff < s_curv_coeff < 1``.
    xtol:
        Estimate of the machine precision.  Curvature pairs with
        ``y's <= xtol * y'y`` are treated as degenerate.
    """

    mem_size: int = 8
    g_epsilon: float = 1e-5
    past: int = 0
    delta: float = 1e-5
    max_iterations: int = 0
    max_linesearch: int = 40
    min_step: float = 1e-20
    max_step: float = 1e20
    f_dec_coeff: float = 1e-4
    s_curv_coeff: float = 0.9
    xtol: float = 1e-16


def default_parameters() -> LBFGSParameters:
    """Return a fresh parameter set holding the default values."""

    return LBFGSParameters()


def check_parameters(n: int, param: LBFGSParameters) -> Optional[Status]:
    """Return the status describing the first invalid setting, or ``None``."""

    if n <= 0:
        return Status.INVALID_N
    if param.mem_size <= 0:
        return Status.INVALID_MEMSIZE
    # Written so that NaN settings are rejected too.
    if not param.g_epsilon >= 0.0:
        return Status.INVALID_GEPSILON
    if param.past < 0:
        return Status.INVALID_TESTPERIOD
    if not param.delta >= 0.0:
        return Status.INVALID_DELTA
    if not param.min_step >= 0.0:
        return Status.INVALID_MINSTEP
    if not param.max_step >= param.min_step:
        return Status.INVALID_MAXSTEP
    if not param.f_dec_coeff > 0.0:
        return Status.INVALID_FDECCOEFF
    if not param.f_dec_coeff < param.s_curv_coeff < 1.0:
        return Status.INVALID_SCURVCOEFF
    if not param.xtol >= 0.0:
        return Status.INVALID_XTOL
    if param.max_linesearch <= 0:
        return Status.INVALID_MAXLINESEARCH
    return None
