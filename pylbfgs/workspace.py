"""Scratch storage owned by a single optimisation run."""

from __future__ import annotations

import logging
from typing import Optional

import numpy as np

from .history import LimitedMemoryHistory
from .parameters import LBFGSParameters

__all__ = ["Workspace"]

LOGGER = logging.getLogger(__name__)


class Workspace:
    """Working vectors, correction history and past-objective buffer.

    Use as a context manager: the buffers are allocated on entry and released
    exactly once on exit, whatever the reason the run terminates.
    """

    def __init__(self, size: int, param: LBFGSParameters) -> None:
        self.size = int(size)
        self.param = param
        self.xp: Optional[np.ndarray] = None
        self.g: Optional[np.ndarray] = None
        self.gp: Optional[np.ndarray] = None
        self.d: Optional[np.ndarray] = None
        self.history: Optional[LimitedMemoryHistory] = None
        self.pf: Optional[np.ndarray] = None
        self.active = False

    def acquire(self) -> None:
        """Allocate the buffers for one run."""

        if self.active:
            raise RuntimeError("Workspace is already in use")
        n = self.size
        self.xp = np.zeros(n, dtype=float)
        self.g = np.zeros(n, dtype=float)
        self.gp = np.zeros(n, dtype=float)
        self.d = np.zeros(n, dtype=float)
        self.history = LimitedMemoryHistory(n, self.param.mem_size, self.param.xtol)
        if self.param.past > 0:
            self.pf = np.zeros(self.param.past, dtype=float)
        self.active = True

    def release(self) -> None:
        """Drop the buffers; further calls do nothing."""

        if not self.active:
            return
        self.history.release()
        self.xp = self.g = self.gp = self.d = None
        self.history = None
        self.pf = None
        self.active = False
        LOGGER.debug("Released workspace for %d variables", self.size)

    def __enter__(self) -> "Workspace":
        self.acquire()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()
