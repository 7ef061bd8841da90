"""Greedy computation of the tau bounds between two rankings with ties.

Each ranking is viewed as a graph whose edges x -> y say "x may come before
y". Completions are built edge by edge in acyclic graphs, preferring edges
that agree (maximising) or disagree (minimising) with the other ranking.
"""

from __future__ import annotations

import itertools
import math
from functools import cmp_to_key
from typing import Iterable, Mapping, Sequence

from .ranking import Bound, Element, PartialOrder, RankingError, StrictOrder, TauBounds
from .tau import Position, RankIndexMap, Weight, _divide, index_map, tau_w

Edge = tuple[Element, Element]


def _cmp(x: object, y: object) -> int:
    return (x > y) - (x < y)  # type: ignore[operator]


class RankGraph:
    """Directed graph over elements; edges are kept in insertion order."""

    def __init__(self, nodes: Iterable[Element] = ()):
        self.nodes: set[Element] = set(nodes)
        self._edges: list[Edge] = []
        self._present: set[Edge] = set()

    def add_edge(self, source: Element, target: Element) -> None:
        self.nodes.update((source, target))
        self._edges.append((source, target))
        self._present.add((source, target))

    def contains_edge(self, source: Element, target: Element) -> bool:
        return (source, target) in self._present

    def edges(self) -> list[Edge]:
        return list(self._edges)


class AcyclicRankGraph:
    """Directed graph that refuses any edge which would close a cycle."""

    def __init__(self, nodes: Iterable[Element] = ()):
        self._successors: dict[Element, set[Element]] = {n: set() for n in nodes}

    def _reaches(self, start: Element, goal: Element) -> bool:
        stack = [start]
        seen = {start}
        while stack:
            node = stack.pop()
            if node == goal:
                return True
            for nxt in self._successors.get(node, ()):
                if nxt not in seen:
                    seen.add(nxt)
                    stack.append(nxt)
        return False

    def try_add_edge(self, source: Element, target: Element) -> bool:
        """Add the edge unless it is a self-loop or would create a cycle."""
        if source == target or self._reaches(target, source):
            return False
        self._successors.setdefault(source, set()).add(target)
        self._successors.setdefault(target, set())
        return True

    def contains_edge(self, source: Element, target: Element) -> bool:
        return target in self._successors.get(source, ())


def kendall_tau_b(a: Sequence, b: Sequence) -> float:
    """Kendall's tau-b between two paired sequences of observations."""
    if len(a) != len(b):
        raise ValueError(f"dimension mismatch: {len(a)} and {len(b)} observations")
    n = len(a)
    if n < 2:
        raise ValueError(f"insufficient length: {n} observations")

    def key(e: object) -> tuple:
        return (e is not None, "" if e is None else e)

    pairs = [(key(x), key(y)) for x, y in zip(a, b)]
    n0 = n * (n - 1) // 2
    ties_a = ties_b = 0
    score = 0
    for (xa, xb), (ya, yb) in itertools.combinations(pairs, 2):
        da = _cmp(xa, ya)
        db = _cmp(xb, yb)
        ties_a += da == 0
        ties_b += db == 0
        score += da * db
    return _divide(float(score), math.sqrt((n0 - ties_a) * (n0 - ties_b)))


def find_tau_bounds(rank_a: PartialOrder, rank_b: PartialOrder, w: Weight) -> TauBounds:
    """Lower and upper tau bound over the completions of two rankings."""
    lb = tau_bound(rank_a, rank_b, True, w)
    ub = tau_bound(rank_a, rank_b, False, w)
    return TauBounds(lb=lb, ub=ub)


def alloc_fixed(
    rank_a: PartialOrder, rank_b: PartialOrder, size: int
) -> tuple[StrictOrder, StrictOrder]:
    """Strict orders of ``size`` holding only the untied elements of each ranking."""
    final_a = StrictOrder.empty(size)
    final_b = StrictOrder.empty(size)
    for i in range(size):
        e = rank_a.get_at(i)
        if e is not None:
            final_a.insert_at(e, i)
        e = rank_b.get_at(i)
        if e is not None:
            final_b.insert_at(e, i)
    return final_a, final_b


def _flatten_into(rank: PartialOrder, length: int) -> StrictOrder:
    out = StrictOrder.empty(length)
    for idx, e in enumerate(e for group in rank for e in group):
        out[idx] = e
    return out


def trivial_alloc(
    rank_a: PartialOrder, rank_b: PartialOrder, length: int
) -> tuple[StrictOrder, StrictOrder]:
    """Strict orders of ``length`` keeping each tie group in its given order."""
    return _flatten_into(rank_a, length), _flatten_into(rank_b, length)


def partial_edges(rank: PartialOrder) -> RankGraph:
    """Graph with an edge x -> y whenever x may precede y in a completion."""
    graph = RankGraph(rank.item_set())
    for i, group in enumerate(rank):
        for later in rank[i:]:
            for x in group:
                for y in later:
                    if x != y:
                        graph.add_edge(x, y)
    return graph


def edge_cmp(
    e1: Edge, e2: Edge, w: Weight, index: RankIndexMap, is_minimising: bool
) -> int:
    """Order edges by weight, breaking ties lexically (reversed when minimising)."""
    a1, b1 = e1
    a2, b2 = e2
    w1 = w(index[a1], index[b1])
    w2 = w(index[a2], index[b2])
    if w1 < w2:
        return -1
    if w1 > w2:
        return 1
    if is_minimising:
        return _cmp((a2, b2), (a1, b1))
    return _cmp((a1, b1), (a2, b2))


def strict_from_tournament(
    rank: PartialOrder, tournament: AcyclicRankGraph, must_size: int
) -> StrictOrder:
    """Order each tie group of ``rank`` by the acyclic tournament."""

    def by_tournament(x: Element, y: Element) -> int:
        if x == y:
            return 0
        forward = tournament.contains_edge(x, y)
        backward = tournament.contains_edge(y, x)
        if forward and not backward:
            return -1
        if backward and not forward:
            return 1
        if forward:
            raise RankingError(f"graph has cycles between {x} and {y}")
        raise RankingError(f"not a tournament: no edge between {x} and {y}")

    out = StrictOrder.empty(must_size)
    elements = (
        e for group in rank for e in sorted(group, key=cmp_to_key(by_tournament))
    )
    for idx, e in enumerate(elements):
        out[idx] = e
    if not out.is_defined():
        raise RankingError("tournament did not define a full strict order")
    return out


def _complete(
    target: AcyclicRankGraph,
    own: RankGraph,
    other_edges: list[Edge],
    is_minimising: bool,
) -> None:
    for x, y in other_edges:
        src, dst = (y, x) if is_minimising else (x, y)
        if own.contains_edge(src, dst):
            target.try_add_edge(src, dst)
        elif own.contains_edge(dst, src):
            # x -> y is not allowed, yet the pair must be ordered: y -> x.
            target.try_add_edge(dst, src)
        else:
            raise RankingError(f"ranking orders neither {src}->{dst} nor {dst}->{src}")


def tau_bound(
    rank_a: PartialOrder, rank_b: PartialOrder, is_minimising: bool, w: Weight
) -> Bound:
    """One tau bound and a pair of completions that reaches it."""
    length, _ = rank_a.ensure_conjoint(rank_b)
    if length < 2:
        raise RankingError(f"ranks are too short ({length}): {rank_a!r}/{rank_b!r}")

    if len(rank_a) == length and len(rank_b) == length:
        final_a, final_b = trivial_alloc(rank_a, rank_b, length)
        return Bound(t=kendall_tau_b(final_a, final_b), a=[final_a], b=[final_b])

    items = rank_a.item_set()
    ga = partial_edges(rank_a)
    gb = partial_edges(rank_b)
    gfa = AcyclicRankGraph(items)
    gfb = AcyclicRankGraph(items)
    index = index_map(rank_a, rank_b)

    def ordered(graph: RankGraph, minimising_order: bool) -> list[Edge]:
        return sorted(
            graph.edges(),
            key=cmp_to_key(lambda e1, e2: edge_cmp(e1, e2, w, index, minimising_order)),
        )

    _complete(gfa, ga, ordered(gb, False), is_minimising)
    _complete(gfb, gb, ordered(ga, is_minimising), is_minimising)

    final_a = strict_from_tournament(rank_a, gfa, length)
    final_b = strict_from_tournament(rank_b, gfb, length)
    return Bound(t=tau_w(final_a, final_b, w), a=[final_a], b=[final_b])


__all__ = [
    "AcyclicRankGraph",
    "Position",
    "RankGraph",
    "alloc_fixed",
    "edge_cmp",
    "find_tau_bounds",
    "kendall_tau_b",
    "partial_edges",
    "strict_from_tournament",
    "tau_bound",
    "trivial_alloc",
]

_: Mapping = {}