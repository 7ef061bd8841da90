"""Weight functions for weighted Kendall's tau.

Each takes the (rank in a, rank in b) positions of two elements and returns the
weight of that pair. Some of them break the optimality of the greedy bound
algorithm.
"""

from __future__ import annotations

import math

from .ranking import StrictOrder
from .tau import Position, tau_w


def _inverse(value: float) -> float:
    return math.inf if value == 0 else 1.0 / value


def _check(x: Position, y: Position) -> tuple[Position, Position]:
    """Make sure both arguments are (rank in a, rank in b) pairs."""
    for pos in (x, y):
        if len(pos) != 2:
            raise TypeError(f"position must be a pair of ranks, got {pos!r}")
    return x, y


def unweighted(x: Position, y: Position) -> float:
    """No weight: plain Kendall's tau."""
    _check(x, y)
    return 1.0


def hyperbolic_addtv_weight(x: Position, y: Position) -> float:
    """Asymmetric additive hyperbolic weight, using the left ranking as reference."""
    return 1.0 / (x[0] + 1.0) + 1.0 / (y[0] + 1.0)


def hyperbolic_mult_weight(x: Position, y: Position) -> float:
    """Asymmetric multiplicative hyperbolic weight, using the left ranking as reference."""
    return (1.0 / (x[0] + 1.0)) * (1.0 / (y[0] + 1.0))


def hyperbolic_sym_mult_weight(x: Position, y: Position) -> float:
    """Symmetric multiplicative hyperbolic weight over both rankings."""
    left = (1.0 / (x[0] + 1.0)) * (1.0 / (y[0] + 1.0))
    right = (1.0 / (x[1] + 1.0)) * (1.0 / (y[1] + 1.0))
    return (left + right) / 2.0


def ap_weight(x: Position, y: Position) -> float:
    """Weight giving tau_AP; asymmetric, uses the left ranking as reference."""
    return _inverse(float(max(x[0], y[0])))


def tau_unweighted(a: StrictOrder, b: StrictOrder) -> float:
    """Plain Kendall's tau between two strict orders."""
    return tau_w(a, b, unweighted)


def ap_high_weight(x: Position, y: Position) -> float:
    return _inverse(float(min(x[0], y[0])))


def const_weight_42(x: Position, y: Position) -> float:
    _check(x, y)
    return 42.0


def weight_inv_left(x: Position, y: Position) -> float:
    return _inverse(float(x[0]))


def hyper_left_weight(x: Position, y: Position) -> float:
    return 1.0 / (x[0] + 1.0)


def weight_inv_right(x: Position, y: Position) -> float:
    return _inverse(float(y[0]))


def weight_right(x: Position, y: Position) -> float:
    return float(y[0])


def weight_left(x: Position, y: Position) -> float:
    return float(x[0])


def weight_zero(x: Position, y: Position) -> float:
    _check(x, y)
    return 0.0


def weight_sum(x: Position, y: Position) -> float:
    return float(x[0] + y[0])


def weight_inv_log(x: Position, y: Position) -> float:
    return _inverse(math.log(x[0] + y[0] + 1))


def threshold_bin_weight(x: Position, y: Position) -> float:
    left, _ = _check(x, y)
    return float(left[0] < 5)


def threshold_weight(x: Position, y: Position) -> float:
    d = max(x[0], y[0])
    if d <= 5:
        return float(2 ** (5 - d))
    return 0.0


def rbo_weight(x: Position, y: Position) -> float:
    p = 0.9
    return p ** max(x[0], y[0]) / (1.0 - p)


def rbo_other_weight(x: Position, y: Position) -> float:
    p = 0.5
    return p ** max(x[0], y[0])


def expo_thresh_weight(x: Position, y: Position) -> float:
    """Exponential weight that only exists for positions up to 5."""
    d = max(x[0], y[0])
    if d > 5:
        raise OverflowError(f"position {d} is beyond the exponential threshold of 5")
    return float(2 ** (5 - d))