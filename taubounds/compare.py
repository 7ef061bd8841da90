"""Compare the outputs of two solvers on the same pairs of rankings."""

from __future__ import annotations

import argparse
import csv
import dataclasses
import enum
import math
import time
from collections import Counter
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

from .common import (
    CHUNK_SIZE,
    AlgoOut,
    RankingsCsvRow,
    display_cases,
    parse_row,
    progress_bar,
    read_glob_csv,
    run_solver_on,
)
from .ranking import _format_float, partial_from_string
from .verify import parse_algo_sol

Pairs = Sequence[tuple[str, str]]


class CompKind(enum.Enum):
    EQUAL = "none"
    LEFT_MISSING = "left missing"
    RIGHT_MISSING = "right missing"
    BOTH_MISSING = "missing both"
    TAU_NOT_EQUAL = "bounds not equal"
    SOL_NOT_EQUAL = "rankings not equal"


@dataclass
class Comparison:
    """How two solver outputs for one case relate."""

    kind: CompKind
    case: RankingsCsvRow
    left: Optional[AlgoOut] = None
    right: Optional[AlgoOut] = None


@dataclass
class CompOutRow:
    """One line of the comparison log."""

    err_type: str
    a: str
    b: str
    dtmin: float
    ltmin: float
    rtmin: float
    dtmax: float
    ltmax: float
    rtmax: float
    lpmin: str
    rpmin: str
    lpmax: str
    rpmax: str


def superset_rel(left: Pairs, right: Pairs) -> bool:
    """Whether every pair of ``right`` is also in ``left``."""
    return all(pair in left for pair in right)


def either_set_rel(a: Pairs, b: Pairs) -> bool:
    return superset_rel(a, b) or superset_rel(b, a)


def compare_results(
    left: Optional[AlgoOut], right: Optional[AlgoOut], case: RankingsCsvRow
) -> Comparison:
    """Classify the two outputs for ``case``."""
    if left is None and right is None:
        return Comparison(CompKind.BOTH_MISSING, case)
    if right is None:
        return Comparison(CompKind.RIGHT_MISSING, case, left=left)
    if left is None:
        return Comparison(CompKind.LEFT_MISSING, case, right=right)
    if left == right:
        return Comparison(CompKind.EQUAL, case, left, right)
    if either_set_rel(left.minp, right.minp) and either_set_rel(left.maxp, right.maxp):
        # Same solutions: only the tau computation differs.
        return Comparison(CompKind.TAU_NOT_EQUAL, case, left, right)
    return Comparison(CompKind.SOL_NOT_EQUAL, case, left, right)


def _value(v: Optional[float]) -> float:
    return math.nan if v is None else v


def comparison_row(comparison: Comparison) -> CompOutRow:
    """The log line describing a comparison."""
    kind = comparison.kind
    case = comparison.case
    left = comparison.left
    right = comparison.right
    row = CompOutRow(
        err_type=kind.value,
        a=case.a,
        b=case.b,
        dtmin=0.0,
        ltmin=0.0,
        rtmin=0.0,
        dtmax=0.0,
        ltmax=0.0,
        rtmax=0.0,
        lpmin="none",
        rpmin="none",
        lpmax="none",
        rpmax="none",
    )
    if left is not None:
        row.ltmin = _value(left.tmin)
        row.ltmax = _value(left.tmax)
        row.lpmin = display_cases(left.minp)
        row.lpmax = display_cases(left.maxp)
    if right is not None:
        row.rtmin = _value(right.tmin)
        row.rtmax = _value(right.tmax)
        row.rpmin = display_cases(right.minp)
        row.rpmax = display_cases(right.maxp)
    if kind in (CompKind.TAU_NOT_EQUAL, CompKind.SOL_NOT_EQUAL):
        row.dtmin = abs(row.ltmin - row.rtmin)
        row.dtmax = abs(row.ltmax - row.rtmax)
    return row


def _same_rankings(r1: RankingsCsvRow, r2: RankingsCsvRow) -> bool:
    map1: dict[str, str] = {}
    p1 = partial_from_string(r1.a, map1)
    p2 = partial_from_string(r1.b, map1)
    map2: dict[str, str] = {}
    p3 = partial_from_string(r2.a, map2)
    p4 = partial_from_string(r2.b, map2)
    return p1.rank_eq(p3) and p2.rank_eq(p4)


def _log_path(output: Path) -> Path:
    if not output.is_dir():
        return output
    name = f"{(int(time.time()) // 30) & 0xFFF}_comp_log.csv"
    path = output / name
    try:
        with open(path, "x"):
            pass
    except OSError as err:
        raise OSError(f"error creating file {path}: {err}") from err
    print(f"creating {path}")
    return path


def _csv_field(value: object) -> str:
    return _format_float(value) if isinstance(value, float) else str(value)


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Run two solvers on every case and log how their outputs compare."""
    parser = argparse.ArgumentParser(description="Compare the outputs of two solvers.")
    parser.add_argument("algo_one")
    parser.add_argument("algo_two")
    parser.add_argument("output", help="CSV file, or directory to create a log in")
    parser.add_argument("data", help="glob pattern of CSV files of rankings")
    args = parser.parse_args(argv)

    start = time.perf_counter()
    algo_one = Path(args.algo_one)
    algo_two = Path(args.algo_two)
    if not algo_one.is_file():
        raise FileNotFoundError(f"algo one not found: {algo_one}")
    if not algo_two.is_file():
        raise FileNotFoundError(f"algo two not found: {algo_two}")

    rows = read_glob_csv(args.data, [])
    inputs: list[RankingsCsvRow] = []
    for case in map(parse_row, rows):
        if not inputs or not _same_rankings(case, inputs[-1]):
            inputs.append(case)
    inputs.sort(key=lambda case: len(case.a) + len(case.b))

    num_tests = len(inputs)
    print(
        f"parsed {len(rows)} into {num_tests} lines of input in "
        f"{time.perf_counter() - start}s"
    )

    log_file = _log_path(Path(args.output))
    try:
        handle = open(log_file, "w", newline="", encoding="utf-8")
    except OSError as err:
        raise OSError(f"couldn't open output file ({log_file}): {err}") from err

    counts: Counter = Counter()
    names = [f.name for f in dataclasses.fields(CompOutRow)]
    print(f"running {num_tests} tests...")

    def run_both(case: RankingsCsvRow) -> tuple[str, str]:
        left, _ = run_solver_on(algo_one, case)
        right, _ = run_solver_on(algo_two, case)
        return left, right

    with handle, progress_bar(num_tests) as bar, ThreadPoolExecutor() as pool:
        writer = csv.writer(handle)
        written = 0
        for offset in range(0, num_tests, CHUNK_SIZE):
            group = inputs[offset : offset + CHUNK_SIZE]
            outputs = list(pool.map(run_both, group))
            bar.update(len(group))
            for case, (left_text, right_text) in zip(group, outputs):
                comparison = compare_results(
                    parse_algo_sol(left_text), parse_algo_sol(right_text), case
                )
                counts[comparison.kind] += 1
                row = comparison_row(comparison)
                if written == 0:
                    writer.writerow(names)
                writer.writerow(_csv_field(getattr(row, name)) for name in names)
                written += 1
            handle.flush()

    equals = counts[CompKind.EQUAL]
    tau_not_eq = counts[CompKind.TAU_NOT_EQUAL]
    sol_not_eq = counts[CompKind.SOL_NOT_EQUAL]
    not_eqs = tau_not_eq + sol_not_eq

    print(f"{num_tests} done in {time.perf_counter() - start}s")
    if equals > 0:
        print(f"success: {equals}")
    if not_eqs > 0:
        print(f"failures: {not_eqs}")
        print(f"| sol ≠: {sol_not_eq}")
        print(f"| tau ≠: {tau_not_eq}")
    if counts[CompKind.LEFT_MISSING] > 0:
        print(f"left empty: {counts[CompKind.LEFT_MISSING]}")
    if counts[CompKind.RIGHT_MISSING] > 0:
        print(f"right empty: {counts[CompKind.RIGHT_MISSING]}")
    if counts[CompKind.BOTH_MISSING] > 0:
        print(f"both empty: {counts[CompKind.BOTH_MISSING]}")


if __name__ == "__main__":
    main()