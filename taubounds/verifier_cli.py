"""Run a solver executable on reference cases and report how it did."""

from __future__ import annotations

import argparse
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Optional, Sequence

from .common import AlgoOut, progress_bar, read_glob_csv, run_solver_on
from .verify import TestOutcome, parse_entry, pretty_print, verify_result

_HEADER = ["a", "b", "tmin", "tmax", "pmin", "pmax"]
_SHOWN_FAILURES = 5


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Verify a solver against every case in the data CSVs."""
    parser = argparse.ArgumentParser(description="Verify a tau-bounds solver.")
    parser.add_argument("exec", help="solver executable")
    parser.add_argument("data", help="glob pattern of case CSV files")
    args = parser.parse_args(argv)

    start = time.perf_counter()
    rows = read_glob_csv(args.data, _HEADER)
    num_tests = len(rows)
    print(f"running {num_tests} tests...")

    cases = [parse_entry(row) for row in rows]
    print(f"parsed input in {time.perf_counter() - start}s")

    results = []
    with progress_bar(num_tests) as bar, ThreadPoolExecutor() as pool:
        runs = pool.map(lambda case: run_solver_on(args.exec, case), cases)
        for case, (output, elapsed) in zip(cases, runs):
            bar.update(1)
            results.append(verify_result(output, elapsed, case)[0])

    outcomes = [r.outcome for r in results]
    successes = sum(o in (TestOutcome.PASS, TestOutcome.COMPLETE) for o in outcomes)
    completes = outcomes.count(TestOutcome.COMPLETE)
    skips = outcomes.count(TestOutcome.SKIPPED)

    failures = []
    for result in results:
        if result.outcome is TestOutcome.FAIL:
            failures.append(result)
        elif result.outcome is TestOutcome.EMPTY:
            print(f"empty algo out on test case {pretty_print(result.case, AlgoOut())}")

    print(f"{successes}/{num_tests} test cases passed,")
    print(f"{completes}/{successes} solutions were complete.")
    print(f"total time: {time.perf_counter() - start}s")

    if skips > 0:
        print(f"{skips} run(s) skipped")

    if failures:
        if len(failures) <= _SHOWN_FAILURES:
            print(f"{len(failures)}/{num_tests} cases failed.")
        else:
            print(f"{len(failures)}/{num_tests} cases failed, showing first {_SHOWN_FAILURES}")
        for failure in failures[:_SHOWN_FAILURES]:
            print(f"reason: {failure.fail},\n{pretty_print(failure.case, failure.algo_out)}\n")


if __name__ == "__main__":
    main()