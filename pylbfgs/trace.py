"""Recording of per-iteration diagnostics as :mod:`xarray` objects."""

from __future__ import annotations

import logging
from typing import Any, Optional

import numpy as np
import xarray as xr

from .optimize import LBFGSResult, ProgressFn

__all__ = ["OptimizationTrace"]

LOGGER = logging.getLogger(__name__)


class OptimizationTrace:
    """Progress callback collecting the history of a run.

    Pass an instance as the ``progress`` argument of
    :func:`pylbfgs.lbfgs_optimize`.  An optional *callback* receives every call
    afterwards and its return value decides whether the run is canceled.

    Parameters
    ----------
    keep_x:
        Also store a copy of the variables after every iteration.
    callback:
        Progress callback chained behind the recorder.
    """

    def __init__(self, keep_x: bool = False, callback: Optional[ProgressFn] = None) -> None:
        self.keep_x = keep_x
        self.callback = callback
        self.iterations: list[int] = []
        self.fx: list[float] = []
        self.xnorm: list[float] = []
        self.gnorm: list[float] = []
        self.step: list[float] = []
        self.evaluations: list[int] = []
        self.x: list[np.ndarray] = []

    def __len__(self) -> int:
        return len(self.iterations)

    def __call__(
        self,
        instance: Any,
        x: np.ndarray,
        g: np.ndarray,
        fx: float,
        xnorm: float,
        gnorm: float,
        step: float,
        k: int,
        ls: int,
    ) -> int:
        self.iterations.append(int(k))
        self.fx.append(float(fx))
        self.xnorm.append(float(xnorm))
        self.gnorm.append(float(gnorm))
        self.step.append(float(step))
        self.evaluations.append(int(ls))
        if self.keep_x:
            self.x.append(np.array(x, dtype=float, copy=True))

        if self.callback is None:
            return 0
        return int(bool(self.callback(instance, x, g, fx, xnorm, gnorm, step, k, ls)))

    def to_dataset(self, result: Optional[LBFGSResult] = None) -> xr.Dataset:
        """Return the recorded history indexed by ``iteration``.

        When *result* is given its status and final objective are stored in
        the dataset attributes.
        """

        coords = {"iteration": np.asarray(self.iterations, dtype=int)}
        data_vars = {
            "fx": ("iteration", np.asarray(self.fx, dtype=float)),
            "xnorm": ("iteration", np.asarray(self.xnorm, dtype=float)),
            "gnorm": ("iteration", np.asarray(self.gnorm, dtype=float)),
            "step": ("iteration", np.asarray(self.step, dtype=float)),
            "evaluations": ("iteration", np.asarray(self.evaluations, dtype=int)),
        }
        if self.keep_x and self.x:
            data_vars["x"] = (("iteration", "variable"), np.vstack(self.x))

        dataset = xr.Dataset(data_vars, coords=coords)
        dataset["fx"].attrs["long_name"] = "objective function value"
        dataset["gnorm"].attrs["long_name"] = "Euclidean norm of the gradient"
        dataset["evaluations"].attrs["long_name"] = "evaluator calls in the line search"

        if result is not None:
            dataset.attrs["status"] = int(result.status)
            dataset.attrs["message"] = result.message
            dataset.attrs["n_evaluations"] = int(result.n_evaluations)
            if result.fx is not None:
                dataset.attrs["final_fx"] = float(result.fx)
        elif not self.iterations:
            LOGGER.warning("Creating an empty optimisation trace")
        return dataset
