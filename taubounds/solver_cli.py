"""Command-line drivers printing the tau bounds of two rankings."""

from __future__ import annotations

import argparse
from typing import Callable, Optional, Sequence

from .bounds import find_tau_bounds
from .brute_force import tau_bounds_bf
from .ranking import PartialOrder, TauBounds, partial_from_string
from .tau import Weight, tau_w
from .weights import unweighted

Algorithm = Callable[[PartialOrder, PartialOrder, Weight], TauBounds]


def compute(algo: Algorithm, argv: Optional[Sequence[str]] = None) -> None:
    """Parse two rankings from ``argv``, run ``algo`` on them and print the bounds."""
    parser = argparse.ArgumentParser(description="Compute tau_min and tau_max.")
    parser.add_argument("a")
    parser.add_argument("b")
    args = parser.parse_args(argv)

    # Tokens may be arbitrary alphanumeric strings; they are mapped to letters.
    inp_map: dict[str, str] = {}
    rank_a = partial_from_string(args.a, inp_map)
    rank_b = partial_from_string(args.b, inp_map)

    try:
        bounds = algo(rank_a, rank_b, unweighted)
    except Exception as err:
        if "skipped" in str(err):
            print(f"skipped: {err}")
            return
        raise

    print(bounds.print_with_repl(inp_map))


def _run(algo: Algorithm, argv: Optional[Sequence[str]]) -> None:
    try:
        compute(algo, argv)
    except Exception as err:
        raise SystemExit(f"Error: {err}") from err


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Tau bounds by the greedy graph algorithm."""
    _run(find_tau_bounds, argv)


def bf_main(argv: Optional[Sequence[str]] = None) -> None:
    """Tau bounds by brute force over all completions."""
    _run(lambda a, b, w: tau_bounds_bf(a, b, lambda x, y: tau_w(x, y, w)), argv)


if __name__ == "__main__":
    main()