"""Kendall's tau between rankings, weighted and with ties."""

from __future__ import annotations

import enum
import math
from typing import Callable

from .ranking import Element, PartialOrder, StrictOrder

Position = tuple[int, int]
Weight = Callable[[Position, Position], float]
RankIndexMap = dict[Element, Position]

# Position recorded for an element absent from one of the rankings.
_MISSING = 2**64 - 1


class TauVariant(enum.Enum):
    A = "a"
    B = "b"
    W = "w"


def _divide(num: float, denom: float) -> float:
    """Floating-point division with IEEE results for a zero denominator."""
    if denom != 0:
        return num / denom
    if num == 0 or math.isnan(num) or math.isnan(denom):
        return math.nan
    return math.copysign(math.inf, num) * math.copysign(1.0, denom)


def sign(a: int, b: int) -> float:
    if a > b:
        return 1.0
    if a < b:
        return -1.0
    return 0.0


def tau_w(a: StrictOrder, b: StrictOrder, w: Weight) -> float:
    """Kendall's tau between two strict orders under weight function ``w``."""
    va = [e for group in a.ensure_defined() for e in group]
    vb = [e for group in b.ensure_defined() for e in group]
    _, item_set = a.ensure_conjoint(b)

    positions: dict[Element, list[int]] = {}
    for i, (x, y) in enumerate(zip(va, vb)):
        positions.setdefault(x, [_MISSING, _MISSING])[0] = i
        positions.setdefault(y, [_MISSING, _MISSING])[1] = i

    items = sorted(item_set)
    num = 0.0
    total_weight = 0.0
    for i, x in enumerate(items):
        xa, xb = positions[x]
        for y in items[i + 1:]:
            ya, yb = positions[y]
            weight = w((xa, xb), (ya, yb))
            num += weight * sign(xa, ya) * sign(xb, yb)
            total_weight += weight
    return _divide(num, total_weight)


def index_map(rank_a: PartialOrder, rank_b: PartialOrder) -> RankIndexMap:
    """Map each element to its (1-based, tie-averaged) position in both rankings."""
    positions: dict[Element, list[int]] = {}
    for side, rank in enumerate((rank_a, rank_b)):
        start = 0
        for group in rank:
            average = (start + start + len(group) - 1) // 2 + 1
            for e in group:
                positions.setdefault(e, [_MISSING, _MISSING])[side] = average
            start += len(group)
    return {e: (pa, pb) for e, (pa, pb) in positions.items()}


def tau_partial(
    a: PartialOrder, b: PartialOrder, w: Weight, variant: TauVariant
) -> float:
    """Kendall's tau-a or tau-b between two rankings with ties."""
    positions = index_map(a, b)
    items = sorted(positions)

    concordance = 0.0
    total_weight = 0.0
    ties_a = 0.0
    ties_b = 0.0
    ties_both = 0.0

    for i, x in enumerate(items):
        xa, xb = positions[x]
        for y in items[i + 1:]:
            ya, yb = positions[y]
            weight = w((xa, xb), (ya, yb))
            sa = sign(xa, ya)
            sb = sign(xb, yb)
            if sa == 0 and sb == 0:
                ties_both += weight
            elif sa == 0:
                ties_a += weight
            elif sb == 0:
                ties_b += weight
            else:
                concordance += weight * sa * sb
            total_weight += weight

    if variant is TauVariant.A:
        denom = total_weight
    elif variant is TauVariant.B:
        sum_cd = total_weight - (ties_a + ties_b + ties_both)
        product = (sum_cd + ties_a) * (sum_cd + ties_b)
        denom = math.sqrt(product) if product >= 0 else math.nan
    else:
        raise ValueError(f"tau variant {variant.name} is not supported")

    return _divide(concordance, denom)