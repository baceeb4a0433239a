"""Level-1 vector kernels used by the optimiser.

All routines operate on one dimensional :class:`numpy.ndarray` objects of
``float`` dtype.  The in-place variants write into their first argument so
that the driver can work on preallocated buffers for the whole run.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np

__all__ = [
    "ensure_vector",
    "vec_add",
    "vec_copy",
    "vec_diff",
    "vec_dot",
    "vec_ncopy",
    "vec_norm",
    "vec_norm_inv",
    "vec_scale",
]


def ensure_vector(values: Sequence[float]) -> np.ndarray:
    """Return *values* as a one dimensional float array.

    Arrays that already have the right dtype are returned without a copy, which
    lets callers observe in-place updates.
    """

    data = np.asarray(values, dtype=float)
    if data.ndim != 1:
        raise ValueError("Expected a one dimensional array of variables")
    return data


def vec_copy(y: np.ndarray, x: np.ndarray) -> None:
    """Copy ``x`` into ``y``."""

    np.copyto(y, x)


def vec_ncopy(y: np.ndarray, x: np.ndarray) -> None:
    """Store ``-x`` into ``y``."""

    np.negative(x, out=y)


def vec_add(y: np.ndarray, x: np.ndarray, c: float) -> None:
    """Compute ``y += c * x``."""

    y += c * x


def vec_diff(z: np.ndarray, x: np.ndarray, y: np.ndarray) -> None:
    """Store ``x - y`` into ``z``."""

    np.subtract(x, y, out=z)


def vec_scale(y: np.ndarray, c: float) -> None:
    """Compute ``y *= c``."""

    y *= c


def vec_dot(x: np.ndarray, y: np.ndarray) -> float:
    """Dot product between two vectors."""

    return float(np.dot(x, y))


def vec_norm(x: np.ndarray) -> float:
    """Euclidean norm of *x*."""

    return float(np.sqrt(vec_dot(x, x)))


def vec_norm_inv(x: np.ndarray) -> float:
    """Reciprocal of the Euclidean norm of *x*."""

    return 1.0 / vec_norm(x)
