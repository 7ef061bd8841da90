"""Print the tau between two rankings given on the command line."""

from __future__ import annotations

import argparse
from typing import Optional, Sequence

from .common import _display_float
from .ranking import RankingError, partial_from_string, strict_from_partial
from .tau import TauVariant, tau_partial, tau_w
from .weights import ap_weight


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Compute tau between two rankings.")
    parser.add_argument("a")
    parser.add_argument("b")
    args = parser.parse_args(argv)

    inp_map: dict[str, str] = {}
    rank_a = partial_from_string(args.a, inp_map)
    rank_b = partial_from_string(args.b, inp_map)

    try:
        strict_a = strict_from_partial(rank_a)
        strict_b = strict_from_partial(rank_b)
    except RankingError:
        tau = tau_partial(rank_a, rank_b, ap_weight, TauVariant.B)
    else:
        tau = tau_w(strict_a, strict_b, ap_weight)

    print(_display_float(tau))


if __name__ == "__main__":
    main()