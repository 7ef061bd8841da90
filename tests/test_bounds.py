import pytest

from taubounds.bounds import (
    AcyclicRankGraph,
    RankGraph,
    alloc_fixed,
    edge_cmp,
    find_tau_bounds,
    kendall_tau_b,
    partial_edges,
    strict_from_tournament,
    tau_bound,
    trivial_alloc,
)
from taubounds.brute_force import completions, tau_bounds_bf_unweighted
from taubounds.ranking import PartialOrder, RankingError, StrictOrder, partial_from_string
from taubounds.tau import index_map, tau_w
from taubounds.weights import unweighted

CASES = [
    ("(x y)", "(x y)"),
    ("x y z", "(x y) z"),
    ("(x y) z", "x (y z)"),
    ("x y z", "z y x"),
]


def _parse(a, b):
    inp_map = {}
    return partial_from_string(a, inp_map), partial_from_string(b, inp_map)


@pytest.mark.parametrize("a,b", CASES)
def test_bounds_match_brute_force(a, b):
    ra, rb = _parse(a, b)
    bounds = find_tau_bounds(ra, rb, unweighted)
    reference = tau_bounds_bf_unweighted(ra, rb)
    assert bounds.lb.t == pytest.approx(reference.lb.t)
    assert bounds.ub.t == pytest.approx(reference.ub.t)


@pytest.mark.parametrize("a,b", CASES)
def test_solutions_are_completions_reaching_bound(a, b):
    ra, rb = _parse(a, b)
    bounds = find_tau_bounds(ra, rb, unweighted)
    for bound in (bounds.lb, bounds.ub):
        assert len(bound.a) == 1 and len(bound.b) == 1
        assert bound.a[0] in completions(ra)
        assert bound.b[0] in completions(rb)
        assert tau_w(bound.a[0], bound.b[0], unweighted) == pytest.approx(bound.t)
    assert bounds.lb.t <= bounds.ub.t


def test_tied_pair_in_both_gives_opposite_orders_when_minimising():
    ra, rb = _parse("(x y)", "(x y)")
    lb = tau_bound(ra, rb, True, unweighted)
    ub = tau_bound(ra, rb, False, unweighted)
    assert list(lb.a[0]) == list(reversed(lb.b[0]))
    assert list(ub.a[0]) == list(ub.b[0])


def test_too_short_raises():
    ra, rb = _parse("x", "x")
    with pytest.raises(RankingError):
        tau_bound(ra, rb, True, unweighted)


def test_not_conjoint_raises():
    ra, rb = _parse("x y", "x q")
    with pytest.raises(RankingError):
        find_tau_bounds(ra, rb, unweighted)


def test_kendall_identical_and_reversed():
    assert kendall_tau_b(["a", "b", "c"], ["a", "b", "c"]) == pytest.approx(1.0)
    assert kendall_tau_b(["a", "b", "c"], ["c", "b", "a"]) == pytest.approx(-1.0)


def test_kendall_matches_tau_w_on_strict_orders():
    a = StrictOrder(["a", "b", "c", "d"])
    b = StrictOrder(["b", "d", "a", "c"])
    assert kendall_tau_b(a, b) == pytest.approx(tau_w(a, b, unweighted))


def test_kendall_errors():
    with pytest.raises(ValueError):
        kendall_tau_b(["a", "b"], ["a"])
    with pytest.raises(ValueError):
        kendall_tau_b(["a"], ["a"])


def test_partial_edges_order():
    graph = partial_edges(PartialOrder([["a", "b"], ["c"]]))
    assert graph.edges() == [("a", "b"), ("b", "a"), ("a", "c"), ("b", "c")]
    assert graph.contains_edge("a", "c")
    assert not graph.contains_edge("c", "a")


def test_rank_graph_keeps_insertion_order():
    graph = RankGraph()
    graph.add_edge("b", "a")
    graph.add_edge("a", "b")
    assert graph.edges() == [("b", "a"), ("a", "b")]


def test_acyclic_graph_rejects_cycles_and_loops():
    graph = AcyclicRankGraph(["a", "b", "c"])
    assert graph.try_add_edge("a", "b")
    assert graph.try_add_edge("b", "c")
    assert not graph.try_add_edge("c", "a")
    assert not graph.try_add_edge("b", "a")
    assert not graph.try_add_edge("a", "a")
    assert graph.contains_edge("a", "b")
    assert not graph.contains_edge("c", "a")


def test_strict_from_tournament_sorts_tie_groups():
    rank = PartialOrder([["a", "b"], ["c"]])
    graph = AcyclicRankGraph(["a", "b", "c"])
    graph.try_add_edge("b", "a")
    assert strict_from_tournament(rank, graph, 3) == ["b", "a", "c"]


def test_strict_from_tournament_missing_edge_raises():
    rank = PartialOrder([["a", "b"]])
    with pytest.raises(RankingError):
        strict_from_tournament(rank, AcyclicRankGraph(["a", "b"]), 2)


def test_edge_cmp_tiebreak_reverses_when_minimising():
    index = index_map(PartialOrder([["a", "b"]]), PartialOrder([["a", "b"]]))
    assert edge_cmp(("a", "b"), ("b", "a"), unweighted, index, False) < 0
    assert edge_cmp(("a", "b"), ("b", "a"), unweighted, index, True) > 0
    assert edge_cmp(("a", "b"), ("a", "b"), unweighted, index, True) == 0


def test_edge_cmp_orders_by_weight_first():
    rank = PartialOrder([["a"], ["b"], ["c"]])
    index = index_map(rank, rank)

    def by_left(x, y):
        return float(x[0])

    assert edge_cmp(("c", "a"), ("a", "c"), by_left, index, False) > 0


def test_alloc_fixed_places_only_untied():
    ra, rb = _parse("(x y) z", "x (y z)")
    final_a, final_b = alloc_fixed(ra, rb, 3)
    assert final_a == [None, None, "c"]
    assert final_b == ["a", None, None]


def test_trivial_alloc_flattens():
    ra, rb = _parse("(x y) z", "x (y z)")
    final_a, final_b = trivial_alloc(ra, rb, 3)
    assert final_a == ["a", "b", "c"]
    assert final_b == ["a", "b", "c"]
    with pytest.raises(IndexError):
        trivial_alloc(ra, rb, 2)