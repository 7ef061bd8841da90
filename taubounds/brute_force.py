"""Brute-force tau bounds: try every pair of linear extensions."""

from __future__ import annotations

import itertools
import math
from typing import Callable

from .ranking import Bound, PartialOrder, StrictOrder, TauBounds
from .weights import tau_unweighted

_MAX_EXTENSIONS = 50_000
_MAX_SOLUTIONS = 8000


class SkippedError(RuntimeError):
    """Raised when an input is too large to brute-force."""


def completions(rank: PartialOrder) -> list[StrictOrder]:
    """Every strict order obtained by ordering each tie group of ``rank``."""
    per_group = [list(itertools.permutations(group)) for group in rank]
    return [
        StrictOrder(e for part in combo for e in part)
        for combo in itertools.product(*per_group)
    ]


def tau_bounds_bf_unweighted(a: PartialOrder, b: PartialOrder) -> TauBounds:
    return tau_bounds_bf(a, b, tau_unweighted)


def tau_bounds_bf(
    a: PartialOrder,
    b: PartialOrder,
    tau: Callable[[StrictOrder, StrictOrder], float],
) -> TauBounds:
    """Minimum and maximum of ``tau`` over all pairs of completions, with every pair reaching them."""
    le_count = min(a.linear_ext_count() * b.linear_ext_count(), 2**128 - 1)
    if le_count > _MAX_EXTENSIONS:
        raise SkippedError(f"skipped: too many linear extensions ({le_count})")

    le_a = completions(a)
    le_b = completions(b)

    lb = math.inf
    ub = -math.inf
    min_pairs: list[tuple[StrictOrder, StrictOrder]] = []
    max_pairs: list[tuple[StrictOrder, StrictOrder]] = []

    for x, y in itertools.product(le_a, le_b):
        if len(min_pairs) + len(max_pairs) >= _MAX_SOLUTIONS:
            raise SkippedError("skipped: too many solutions")
        t = tau(x, y)
        if t < lb:
            lb = t
            min_pairs = [(StrictOrder(x), StrictOrder(y))]
        elif t == lb:
            min_pairs.append((StrictOrder(x), StrictOrder(y)))
        if t > ub:
            ub = t
            max_pairs = [(StrictOrder(x), StrictOrder(y))]
        elif t == ub:
            max_pairs.append((StrictOrder(x), StrictOrder(y)))

    return TauBounds(
        lb=Bound(t=lb, a=[p[0] for p in min_pairs], b=[p[1] for p in min_pairs]),
        ub=Bound(t=ub, a=[p[0] for p in max_pairs], b=[p[1] for p in max_pairs]),
    )