"""Records and helpers shared by the solver drivers, verifier and evaluator."""

from __future__ import annotations

import csv
import glob
import itertools
import math
import subprocess
import time
from dataclasses import dataclass, field
from decimal import Decimal
from os import PathLike
from typing import Optional, Protocol, Sequence, Union

from tqdm import tqdm

PRECISION = 1e-6
CHUNK_SIZE = 512


class _Case(Protocol):
    def algo_args(self) -> list[str]: ...


def _display_float(value: float) -> str:
    """Plain decimal rendering: shortest round-trip digits, no exponent, no trailing '.0'."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    text = format(Decimal(repr(float(value))), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


@dataclass(frozen=True)
class RankingsCsvRow:
    """A pair of rankings, as read from an input CSV."""

    a: str
    b: str

    def algo_args(self) -> list[str]:
        return [self.a, self.b]


@dataclass
class AlgoOutputRow:
    """A reference solution, as written to a cases CSV."""

    a: str
    b: str
    tmin: float
    tmax: float
    pmin: str
    pmax: str


@dataclass(eq=False)
class AlgoOut:
    """What a solver printed: the tau bounds and the permutation pairs reaching them."""

    tmin: Optional[float] = None
    tmax: Optional[float] = None
    minp: list[tuple[str, str]] = field(default_factory=list)
    maxp: list[tuple[str, str]] = field(default_factory=list)

    def __eq__(self, other: object) -> bool:
        # Permutations are not compared: there may be many optimal solutions.
        if not isinstance(other, AlgoOut):
            return NotImplemented
        for mine, theirs in ((self.tmin, other.tmin), (self.tmax, other.tmax)):
            if mine is not None and theirs is not None and abs(mine - theirs) > PRECISION:
                return False
        return True

    __hash__ = None  # type: ignore[assignment]


def parse_row(row: Sequence[str]) -> RankingsCsvRow:
    """Read the first two fields of a CSV record as a pair of rankings."""
    if len(row) < 2:
        raise ValueError(f"expected at least 2 fields, got {len(row)}: {list(row)!r}")
    return RankingsCsvRow(row[0], row[1])


def read_glob_csv(pattern: str, header: Sequence[str]) -> list[list[str]]:
    """Read the records of every CSV file matching ``pattern``.

    Each file must start with ``header`` unless ``header`` is empty. Consecutive
    duplicate records are dropped.
    """
    expected = list(header)
    rows: list[list[str]] = []
    for path in sorted(glob.glob(pattern)):
        with open(path, newline="", encoding="utf-8") as handle:
            records = [record for record in csv.reader(handle) if record]
        found = records[0] if records else []
        if expected and found != expected:
            raise ValueError(
                f"Incompatible CSV data ({path}): expected header {expected!r}, got {found!r}"
            )
        for lineno, record in enumerate(records[1:], start=2):
            if len(record) != len(found):
                raise ValueError(
                    f"{path}: record on line {lineno} has {len(record)} fields, "
                    f"header has {len(found)}"
                )
            rows.append(record)
    return [row for row, _ in itertools.groupby(rows)]


def progress_bar(n: int) -> tqdm:
    """A progress bar over ``n`` items."""
    return tqdm(
        total=n,
        bar_format="[{elapsed}] [{bar:40}] {n_fmt}/{total_fmt} ({remaining})",
    )


def run_solver_on(
    algo: Union[str, PathLike], case: _Case
) -> tuple[str, float]:
    """Run the solver executable on a case; return its stdout and the seconds it took."""
    args = [str(algo), *case.algo_args()]
    start = time.perf_counter()
    result = subprocess.run(args, capture_output=True)
    elapsed = time.perf_counter() - start
    if result.returncode != 0:
        stderr = result.stderr.decode("utf-8", errors="replace")
        raise RuntimeError(
            f"process failed: exit status: {result.returncode}. stderr: {stderr}"
        )
    return result.stdout.decode("utf-8"), elapsed


def display_cases(cases: Sequence[tuple[str, str]]) -> str:
    """Join permutation pairs as ``a/b|c/d``."""
    return "|".join(f"{left}/{right}" for left, right in cases)