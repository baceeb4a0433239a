from __future__ import annotations

import numpy as np
import pytest


class CountingEvaluator:
    """Wrap an evaluator and count its calls."""

    def __init__(self, evaluate):
        self.evaluate = evaluate
        self.calls = 0

    def __call__(self, instance, x, g):
        self.calls += 1
        return self.evaluate(instance, x, g)


def _rosenbrock(instance, x, g):
    a = x[1] - x[0] ** 2
    g[0] = 2.0 * (x[0] - 1.0) - 400.0 * x[0] * a
    g[1] = 200.0 * a
    return (x[0] - 1.0) ** 2 + 100.0 * a**2


@pytest.fixture
def rosenbrock():
    return _rosenbrock


@pytest.fixture
def counting():
    return CountingEvaluator


@pytest.fixture
def make_quadratic():
    """Factory returning ``(A, evaluate)`` for ``f(x) = x'Ax`` with SPD ``A``."""

    def factory(n, seed=0, offset=0.0):
        rng = np.random.default_rng(seed)
        m = rng.standard_normal((n, n))
        a = m @ m.T / n + np.eye(n)

        def evaluate(instance, x, g):
            ax = a @ x
            g[:] = 2.0 * ax
            return float(x @ ax) + offset

        return a, evaluate

    return factory
