"""Return codes of :func:`pylbfgs.lbfgs_optimize` and their descriptions.

Non-negative codes report a successful termination, negative codes an error.
"""

from __future__ import annotations

from enum import IntEnum

__all__ = ["LBFGSError", "Status", "strerror"]


class Status(IntEnum):
    """Termination status; codes below zero are errors."""

    CONVERGENCE = 0
    STOP = 1
    ALREADY_MINIMIZED = 2

    UNKNOWNERROR = -1024
    LOGICERROR = -1023
    CANCELED = -1022
    INVALID_N = -1021
    INVALID_MEMSIZE = -1020
    INVALID_GEPSILON = -1019
    INVALID_TESTPERIOD = -1018
    INVALID_DELTA = -1017
    INVALID_MINSTEP = -1016
    INVALID_MAXSTEP = -1015
    INVALID_FDECCOEFF = -1014
    INVALID_SCURVCOEFF = -1013
    INVALID_XTOL = -1012
    INVALID_MAXLINESEARCH = -1011
    OUTOFINTERVAL = -1010
    INCORRECT_TMINMAX = -1009
    ROUNDING_ERROR = -1008
    MINIMUMSTEP = -1007
    MAXIMUMSTEP = -1006
    MAXIMUMLINESEARCH = -1005
    MAXIMUMITERATION = -1004
    WIDTHTOOSMALL = -1003
    INVALIDPARAMETERS = -1002
    INCREASEGRADIENT = -1001

    @property
    def is_success(self) -> bool:
        return self >= 0

    @property
    def message(self) -> str:
        return strerror(self)


_MESSAGES = {
    Status.CONVERGENCE: "Success: reached convergence (g_epsilon).",
    Status.STOP: "Success: met stopping criteria (past f decrease less than delta).",
    Status.ALREADY_MINIMIZED: "The initial variables already minimize the objective function.",
    Status.UNKNOWNERROR: "Unknown error.",
    Status.LOGICERROR: "Logic error.",
    Status.CANCELED: "The minimization process has been canceled.",
    Status.INVALID_N: "Invalid number of variables specified.",
    Status.INVALID_MEMSIZE: "Invalid parameter LBFGSParameters.mem_size specified.",
    Status.INVALID_GEPSILON: "Invalid parameter LBFGSParameters.g_epsilon specified.",
    Status.INVALID_TESTPERIOD: "Invalid parameter LBFGSParameters.past specified.",
    Status.INVALID_DELTA: "Invalid parameter LBFGSParameters.delta specified.",
    Status.INVALID_MINSTEP: "Invalid parameter LBFGSParameters.min_step specified.",
    Status.INVALID_MAXSTEP: "Invalid parameter LBFGSParameters.max_step specified.",
    Status.INVALID_FDECCOEFF: "Invalid parameter LBFGSParameters.f_dec_coeff specified.",
    Status.INVALID_SCURVCOEFF: "Invalid parameter LBFGSParameters.s_curv_coeff specified.",
    Status.INVALID_XTOL: "Invalid parameter LBFGSParameters.xtol specified.",
    Status.INVALID_MAXLINESEARCH: "Invalid parameter LBFGSParameters.max_linesearch specified.",
    Status.OUTOFINTERVAL: "The line-search step went out of the interval of uncertainty.",
    Status.INCORRECT_TMINMAX: (
        "A logic error occurred; alternatively, the interval of uncertainty became too small."
    ),
    Status.ROUNDING_ERROR: (
        "A rounding error occurred; alternatively, no line-search step satisfies "
        "the sufficient decrease and curvature conditions."
    ),
    Status.MINIMUMSTEP: "The line-search step became smaller than LBFGSParameters.min_step.",
    Status.MAXIMUMSTEP: "The line-search step became larger than LBFGSParameters.max_step.",
    Status.MAXIMUMLINESEARCH: "The line-search routine reaches the maximum number of evaluations.",
    Status.MAXIMUMITERATION: "The algorithm routine reaches the maximum number of iterations.",
    Status.WIDTHTOOSMALL: (
        "Relative width of the interval of uncertainty is at most LBFGSParameters.xtol."
    ),
    Status.INVALIDPARAMETERS: "A logic error (negative line-search step) occurred.",
    Status.INCREASEGRADIENT: "The current search direction increases the objective function value.",
}


def strerror(err: int) -> str:
    """Return the description of the return code *err*.

    Integers that do not name a :class:`Status` map to ``"(unknown)"``.
    """

    try:
        return _MESSAGES[Status(int(err))]
    except ValueError:
        return "(unknown)"


class LBFGSError(RuntimeError):
    """Raised inside the optimiser when an iteration cannot be completed.

    The driver converts it back into the :class:`Status` held in ``status``.
    """

    def __init__(self, status: Status) -> None:
        super().__init__(strerror(status))
        self.status = Status(status)
