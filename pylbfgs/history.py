"""Limited-memory storage of curvature pairs and the two-loop recursion.

The recursion follows page 779 of

    J. Nocedal, "Updating Quasi-Newton Matrices with Limited Storage",
    Mathematics of Computation 35(151), pp. 773-782, 1980.
"""

from __future__ import annotations

import logging
import math

import numpy as np

from .vector import vec_add, vec_copy, vec_diff, vec_dot, vec_ncopy, vec_scale

__all__ = ["LimitedMemoryHistory"]

LOGGER = logging.getLogger(__name__)


class LimitedMemoryHistory:
    """Ring buffer holding the ``m`` most recent curvature pairs.

    Slot ``j`` stores ``s_j = x_{k+1} - x_k``, ``y_j = g_{k+1} - g_k``, the
    scalars ``ys_j = y_j's_j`` and ``yy_j = y_j'y_j`` and the scratch
    coefficient ``alpha_j`` of the current two-loop pass.  The storage is
    allocated once for ``m`` slots and written cyclically.
    """

    def __init__(self, size: int, memory: int, xtol: float = 0.0) -> None:
        if size <= 0:
            raise ValueError("The number of variables must be positive")
        if memory <= 0:
            raise ValueError("The memory size must be positive")

        self.size = int(size)
        self.memory = int(memory)
        self.xtol = float(xtol)

        self.s = np.zeros((self.memory, self.size), dtype=float)
        self.y = np.zeros((self.memory, self.size), dtype=float)
        self.ys = np.zeros(self.memory, dtype=float)
        self.yy = np.zeros(self.memory, dtype=float)
        self.alpha = np.zeros(self.memory, dtype=float)
        self._ds = np.zeros(self.size, dtype=float)
        self._dy = np.zeros(self.size, dtype=float)

        self.end = 0
        self.count = 0

    @property
    def bound(self) -> int:
        """Number of slots taking part in the recursion."""

        return min(self.count, self.memory)

    def update(self, x: np.ndarray, xp: np.ndarray, g: np.ndarray, gp: np.ndarray) -> bool:
        """Store the pair ``(x - xp, g - gp)`` in the next slot.

        Pairs with ``y's <= xtol * y'y`` or non-finite scalars are dropped and
        ``False`` is returned; the stored pairs are left untouched.
        """

        vec_diff(self._ds, x, xp)
        vec_diff(self._dy, g, gp)
        ys = vec_dot(self._dy, self._ds)
        yy = vec_dot(self._dy, self._dy)

        if not (math.isfinite(ys) and math.isfinite(yy)) or ys <= self.xtol * yy:
            LOGGER.debug("Skipping curvature pair with y's=%g, y'y=%g", ys, yy)
            return False

        # Slot ``end`` may still hold the oldest valid pair until here.
        j = self.end
        vec_copy(self.s[j], self._ds)
        vec_copy(self.y[j], self._dy)
        self.ys[j] = ys
        self.yy[j] = yy
        self.end = (j + 1) % self.memory
        self.count += 1
        return True

    def direction(self, g: np.ndarray, d: np.ndarray) -> None:
        """Write the quasi-Newton direction ``-H g`` into *d*."""

        m = self.memory
        bound = self.bound

        vec_ncopy(d, g)
        if bound == 0:
            return

        j = self.end
        for _ in range(bound):
            j = (j + m - 1) % m
            self.alpha[j] = vec_dot(self.s[j], d) / self.ys[j]
            vec_add(d, self.y[j], -self.alpha[j])

        newest = (self.end + m - 1) % m
        vec_scale(d, self.ys[newest] / self.yy[newest])

        for _ in range(bound):
            beta = vec_dot(self.y[j], d) / self.ys[j]
            vec_add(d, self.s[j], self.alpha[j] - beta)
            j = (j + 1) % m

    def release(self) -> None:
        """Drop the storage; the history cannot be used afterwards."""

        self.s = self.y = self.ys = self.yy = self.alpha = None
        self._ds = self._dy = None
        self.end = 0
        self.count = 0
