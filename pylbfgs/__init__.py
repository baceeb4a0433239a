"""Limited-memory BFGS minimisation with a backtracking line search."""

from .history import LimitedMemoryHistory
from .linesearch import line_search_backtracking
from .multistart import MultiStartResult, optimize_multistart
from .optimize import LBFGSResult, lbfgs_optimize
from .parameters import LBFGSParameters, check_parameters, default_parameters
from .status import LBFGSError, Status, strerror
from .trace import OptimizationTrace

__all__ = [
    "LBFGSError",
    "LBFGSParameters",
    "LBFGSResult",
    "LimitedMemoryHistory",
    "MultiStartResult",
    "OptimizationTrace",
    "Status",
    "check_parameters",
    "default_parameters",
    "lbfgs_optimize",
    "line_search_backtracking",
    "optimize_multistart",
    "strerror",
]
