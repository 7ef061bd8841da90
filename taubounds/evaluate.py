"""Run a solver on pairs of rankings and record how its bounds relate to tau."""

from __future__ import annotations

import argparse
import csv
import dataclasses
import math
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional, Sequence

from .common import (
    CHUNK_SIZE,
    PRECISION,
    AlgoOut,
    RankingsCsvRow,
    parse_row,
    progress_bar,
    read_glob_csv,
    run_solver_on,
)
from .ranking import PartialOrder, _format_float, partial_from_string, strict_from_partial
from .tau import TauVariant, tau_partial, tau_w
from .verify import parse_algo_sol
from .weights import ap_weight

_U128_MAX = 2**128 - 1


@dataclass
class OutCsvRow:
    """One line of the evaluation log."""

    t_a: float
    t_b: float
    t_max: float
    t_min: float
    length: int
    frac_ties: float
    sum_of_tie_lengths: int
    tie_count: int
    longest_tie: int
    permutation_count: int
    compute_time: float


def _same_rankings(r1: RankingsCsvRow, r2: RankingsCsvRow) -> bool:
    map1: dict[str, str] = {}
    p1 = partial_from_string(r1.a, map1)
    p2 = partial_from_string(r1.b, map1)
    map2: dict[str, str] = {}
    p3 = partial_from_string(r2.a, map2)
    p4 = partial_from_string(r2.b, map2)
    return p1.rank_eq(p3) and p2.rank_eq(p4)


def dedup_cases(cases: Iterable[RankingsCsvRow]) -> list[RankingsCsvRow]:
    """Drop each case whose rankings have the same shape as the case before it."""
    out: list[RankingsCsvRow] = []
    for case in cases:
        if not out or not _same_rankings(case, out[-1]):
            out.append(case)
    return out


def _strict_pair(pair: tuple[str, str]):
    sol_map: dict[str, str] = {}
    first = partial_from_string(pair[0], sol_map)
    second = partial_from_string(pair[1], sol_map)
    return strict_from_partial(first), strict_from_partial(second)


def _group_sizes(*ranks: PartialOrder) -> list[int]:
    return [len(group) for rank in ranks for group in rank]


def map_to_out(
    algo_out: AlgoOut, case: RankingsCsvRow, elapsed: float
) -> Optional[OutCsvRow]:
    """Summarise a solver's answer for ``case``; None when tau-b is undefined."""
    inp_map: dict[str, str] = {}
    rank_a = partial_from_string(case.a, inp_map)
    rank_b = partial_from_string(case.b, inp_map)

    if not algo_out.maxp or not algo_out.minp:
        raise ValueError(f"solver gave no permutation pair for {case.a!r} / {case.b!r}")
    p_max_a, p_max_b = _strict_pair(algo_out.maxp[0])
    p_min_a, p_min_b = _strict_pair(algo_out.minp[0])

    t_a = tau_partial(rank_a, rank_b, ap_weight, TauVariant.A)
    t_b = tau_partial(rank_a, rank_b, ap_weight, TauVariant.B)
    if math.isnan(t_b):
        return None

    t_max = tau_w(p_max_a, p_max_b, ap_weight)
    t_min = tau_w(p_min_a, p_min_b, ap_weight)

    if not t_min - PRECISION < t_b:
        raise AssertionError(
            f'error in: "{case.a}" "{case.b}"\ntb:{t_b}\ntmin:{t_min}\n'
            f"pmin:{algo_out.minp[0][0]}/{algo_out.minp[0][1]}"
        )
    if not t_max + PRECISION > t_b:
        raise AssertionError(
            f'error in: "{case.a}" "{case.b}"\ntb:{t_b}\ntmax:{t_max}\n'
            f"pmax:{algo_out.minp[0][0]}/{algo_out.minp[0][1]}"
        )

    sizes = _group_sizes(rank_a, rank_b)
    tie_sizes = [size for size in sizes if size > 1]
    items_in_ties = sum(tie_sizes)
    length = rank_a.set_size()

    return OutCsvRow(
        t_a=t_a,
        t_b=t_b,
        t_max=t_max,
        t_min=t_min,
        length=length,
        frac_ties=items_in_ties / (2.0 * length),
        sum_of_tie_lengths=items_in_ties,
        tie_count=len(tie_sizes),
        longest_tie=max(sizes, default=0),
        permutation_count=min(
            rank_a.linear_ext_count() * rank_b.linear_ext_count(), _U128_MAX
        ),
        compute_time=elapsed,
    )


def _csv_field(value: object) -> str:
    return _format_float(value) if isinstance(value, float) else str(value)


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Evaluate a solver on every pair of rankings in the data CSVs."""
    parser = argparse.ArgumentParser(description="Evaluate a tau-bounds solver.")
    parser.add_argument("solver", help="solver executable")
    parser.add_argument("output", help="CSV file to write the evaluation to")
    parser.add_argument("data", help="glob pattern of CSV files with columns a,b")
    args = parser.parse_args(argv)

    start = time.perf_counter()
    solver = Path(args.solver)
    rows = read_glob_csv(args.data, ["a", "b"])

    cases = [parse_row(row) for row in rows]
    print(f"loading {len(cases)} test cases ({time.perf_counter() - start}s)")
    cases = dedup_cases(cases)
    cases.sort(key=lambda case: len(case.a))

    num_tests = len(cases)
    print(
        f"parsed {len(rows)} into {num_tests} lines of input in "
        f"{time.perf_counter() - start}s"
    )

    names = [f.name for f in dataclasses.fields(OutCsvRow)]
    written = 0
    with open(args.output, "w", newline="", encoding="utf-8") as handle, progress_bar(
        num_tests
    ) as bar, ThreadPoolExecutor() as pool:
        writer = csv.writer(handle)
        chunk = CHUNK_SIZE * 2
        for offset in range(0, num_tests, chunk):
            group = cases[offset : offset + chunk]
            try:
                runs = list(pool.map(lambda case: run_solver_on(solver, case), group))
            except Exception as err:
                raise RuntimeError(f"runner err: {err!r}") from err
            bar.update(len(group))

            outputs = []
            for case, (text, elapsed) in zip(group, runs):
                try:
                    sol = parse_algo_sol(text)
                except ValueError as err:
                    raise ValueError(f"parser err: {err!r}") from err
                if sol is None:
                    continue
                row = map_to_out(sol, case, elapsed)
                if row is not None:
                    outputs.append(row)

            for row in outputs:
                if written == 0:
                    writer.writerow(names)
                writer.writerow(_csv_field(getattr(row, name)) for name in names)
                written += 1

    print(f"{num_tests} done in {time.perf_counter() - start}s")


if __name__ == "__main__":
    main()