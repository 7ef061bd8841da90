"""Check a solver's printed output against reference solutions."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Optional, Sequence

from .common import PRECISION, AlgoOut, _display_float
from .ranking import _format_float


@dataclass
class TestCase:
    """A pair of rankings with its reference bounds and optimal permutation pairs."""

    __test__ = False

    a: str
    b: str
    tmin: float
    tmax: float
    min_sol_pairs: list[tuple[str, str]] = field(default_factory=list)
    max_sol_pairs: list[tuple[str, str]] = field(default_factory=list)

    def algo_args(self) -> list[str]:
        return [self.a, self.b]


class FailKind(enum.Enum):
    TMIN = "Tmin"
    TMAX = "Tmax"
    MINP = "MinP"
    MAXP = "MaxP"


@dataclass(frozen=True)
class FailType:
    """Why a case failed; bound failures carry (actual, expected)."""

    kind: FailKind
    actual: Optional[float] = None
    expected: Optional[float] = None

    def __str__(self) -> str:
        if self.kind in (FailKind.TMIN, FailKind.TMAX):
            return (
                f"{self.kind.value}({_format_float(self.actual)}, "
                f"{_format_float(self.expected)})"
            )
        return self.kind.value


class TestOutcome(enum.Enum):
    __test__ = False

    COMPLETE = enum.auto()
    PASS = enum.auto()
    SKIPPED = enum.auto()
    EMPTY = enum.auto()
    FAIL = enum.auto()


@dataclass
class TestResult:
    """The verdict on one case, with the data needed to report it."""

    __test__ = False

    outcome: TestOutcome
    case: Optional[TestCase] = None
    algo_out: Optional[AlgoOut] = None
    fail: Optional[FailType] = None


def _parse_f64(label: str, text: str) -> float:
    if text != text.strip() or "_" in text:
        raise ValueError(f"failed to parse {label}: {text!r}")
    try:
        return float(text)
    except ValueError as err:
        raise ValueError(f"failed to parse {label}: {text!r} ({err})") from None


def _parse_permutations(sols: str) -> list[tuple[str, str]]:
    pairs = []
    for part in sols.split("|"):
        pieces = part.split("/")
        if len(pieces) < 2:
            raise ValueError(f"malformed permutation data: {part!r}")
        pairs.append((pieces[0], pieces[1]))
    return pairs


def parse_entry(row: Sequence[str]) -> TestCase:
    """Read a case from a CSV record: a, b, tmin, tmax, pmin, pmax."""
    if len(row) != 6:
        raise ValueError(f"improper row length ({len(row)}): {list(row)!r}")
    a, b, tmin, tmax, min_sols, max_sols = row
    return TestCase(
        a=a,
        b=b,
        tmin=_parse_f64("tmin", tmin),
        tmax=_parse_f64("tmax", tmax),
        min_sol_pairs=_parse_permutations(min_sols),
        max_sol_pairs=_parse_permutations(max_sols),
    )


def _debug_pairs(pairs: Sequence[tuple[str, str]]) -> str:
    def quote(s: str) -> str:
        return '"' + s.replace("\\", "\\\\").replace('"', '\\"') + '"'

    return "[" + ", ".join(f"({quote(x)}, {quote(y)})" for x, y in pairs) + "]"


def pretty_print(tc: TestCase, ao: AlgoOut) -> str:
    """Side-by-side report of a case's reference and a solver's output."""

    def show(value: Optional[float]) -> str:
        return "none" if value is None else _display_float(value)

    return (
        "test case:\n"
        f"> a: {tc.a}\n"
        f"> b: {tc.b}\n"
        "tmin\n "
        f"| sol: {_display_float(tc.tmin)}\n "
        f"| alg: {show(ao.tmin)}\n"
        "tmax\n "
        f"| sol: {_display_float(tc.tmax)}\n "
        f"| alg: {show(ao.tmax)}\n"
        "pmin\n "
        f"| sol: {_debug_pairs(tc.min_sol_pairs)}\n "
        f"| alg minp: {_debug_pairs(ao.minp)}\n"
        "pmax\n "
        f"| sol: {_debug_pairs(tc.max_sol_pairs)}\n "
        f"| alg maxp: {_debug_pairs(ao.maxp)}\n "
    )


def _parse_pair(label: str, value: str) -> tuple[str, str]:
    parts = value.strip().split("/")
    if len(parts) != 2:
        raise ValueError(f"failed to parse {label}: {value!r}")
    return parts[0], parts[1]


def parse_algo_sol(output: str) -> Optional[AlgoOut]:
    """Parse a solver's output; None if the solver reported it skipped the case."""
    sol = AlgoOut()
    for line in output.split("\n"):
        if line.endswith("\r"):
            line = line[:-1]
        if not line:
            continue
        if line.strip().startswith("skipped"):
            return None
        parts = line.split(":")
        if len(parts) < 2:
            raise ValueError(f"No value on line {line!r}")
        label, value = parts[0], parts[1]
        if label == "tmin":
            sol.tmin = _parse_f64("tau min", value)
        elif label == "tmax":
            sol.tmax = _parse_f64("tau max", value)
        elif label == "minp":
            sol.minp.append(_parse_pair("min p", value))
        elif label == "maxp":
            sol.maxp.append(_parse_pair("max p", value))
        else:
            raise ValueError(f"unknown label: {value}")
    return sol


def verify_result(
    output: str, elapsed: float, case: TestCase
) -> tuple[TestResult, float]:
    """Judge a solver's output for ``case``; returns the verdict and the elapsed time."""
    sol = parse_algo_sol(output)
    if sol is None:
        return TestResult(TestOutcome.SKIPPED), elapsed

    min_exists = sol.tmin is not None and bool(sol.minp)
    max_exists = sol.tmax is not None and bool(sol.maxp)
    if not (min_exists or max_exists):
        return TestResult(TestOutcome.EMPTY, case=case), elapsed

    def fail(kind: FailType) -> tuple[TestResult, float]:
        return TestResult(TestOutcome.FAIL, case=case, algo_out=sol, fail=kind), elapsed

    if any(pair not in case.min_sol_pairs for pair in sol.minp):
        return fail(FailType(FailKind.MINP))
    if sol.tmin is not None and abs(sol.tmin - case.tmin) > PRECISION:
        return fail(FailType(FailKind.TMIN, sol.tmin, case.tmin))
    if any(pair not in case.max_sol_pairs for pair in sol.maxp):
        return fail(FailType(FailKind.MAXP))
    if sol.tmax is not None and abs(sol.tmax - case.tmax) > PRECISION:
        return fail(FailType(FailKind.TMAX, sol.tmax, case.tmax))

    outcome = TestOutcome.COMPLETE if min_exists and max_exists else TestOutcome.PASS
    return TestResult(outcome), elapsed