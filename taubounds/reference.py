"""Reference solutions by brute force, and the tool that turns rankings into cases."""

from __future__ import annotations

import argparse
import csv
import dataclasses
import time
from typing import Optional, Sequence

from .brute_force import SkippedError, tau_bounds_bf_unweighted
from .common import (
    CHUNK_SIZE,
    AlgoOutputRow,
    RankingsCsvRow,
    parse_row,
    progress_bar,
    read_glob_csv,
)
from .ranking import (
    RankingError,
    StrictOrder,
    _format_float,
    partial_from_string,
    total_to_repl_string,
)


def _join_solutions(
    firsts: Sequence[StrictOrder], seconds: Sequence[StrictOrder], rmap: dict[str, str]
) -> str:
    return "|".join(
        f"{total_to_repl_string(a, rmap)}/{total_to_repl_string(b, rmap)}"
        for a, b in zip(firsts, seconds)
    )


def run_solver(row: RankingsCsvRow) -> Optional[AlgoOutputRow]:
    """Brute-force the bounds of a pair of rankings; None if that is not possible."""
    inp_map: dict[str, str] = {}
    rank_a = partial_from_string(row.a, inp_map)
    rank_b = partial_from_string(row.b, inp_map)

    try:
        bounds = tau_bounds_bf_unweighted(rank_a, rank_b)
    except (SkippedError, RankingError):
        return None

    if bounds.lb is None or bounds.ub is None:
        raise RuntimeError("reference solution did not return full solution")

    rmap = {elem: name for name, elem in inp_map.items()}
    return AlgoOutputRow(
        a=row.a,
        b=row.b,
        tmin=bounds.lb.t,
        tmax=bounds.ub.t,
        pmin=_join_solutions(bounds.lb.a, bounds.lb.b, rmap),
        pmax=_join_solutions(bounds.ub.a, bounds.ub.b, rmap),
    )


def _csv_field(value: object) -> str:
    return _format_float(value) if isinstance(value, float) else str(value)


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Compute reference solutions for every pair of rankings in the input CSVs."""
    parser = argparse.ArgumentParser(description="Turn pairs of rankings into test cases.")
    parser.add_argument("input", help="glob pattern of CSV files with columns a,b")
    parser.add_argument("output", help="CSV file to write the cases to")
    args = parser.parse_args(argv)

    start = time.perf_counter()
    rows = read_glob_csv(args.input, ["a", "b"])
    num_cases = len(rows)

    cases: list[RankingsCsvRow] = []
    for case in map(parse_row, rows):
        if not cases or cases[-1] != case:
            cases.append(case)
    cases.sort(key=lambda case: len(case.a))

    names = [f.name for f in dataclasses.fields(AlgoOutputRow)]
    count = 0
    with open(args.output, "w", newline="", encoding="utf-8") as handle, progress_bar(
        num_cases
    ) as bar:
        writer = csv.writer(handle)
        for offset in range(0, len(cases), CHUNK_SIZE):
            group = cases[offset : offset + CHUNK_SIZE]
            outputs = []
            for case in group:
                outputs.append(run_solver(case))
                bar.update(1)
            for out in outputs:
                if out is None:
                    continue
                if count == 0:
                    writer.writerow(names)
                writer.writerow(_csv_field(getattr(out, name)) for name in names)
                count += 1

    print(f"evaluated {count} test cases in {time.perf_counter() - start}s")


if __name__ == "__main__":
    main()