# taubounds

Given two rankings that may contain ties, every way of breaking those ties
gives a pair of strict rankings, and each pair has its own Kendall's tau.
`taubounds` finds the smallest and the largest of those values (`tmin` and
`tmax`) together with tie-breakings that reach them. The library functions
take a weight function, so plain Kendall's tau or a weighted variant such as
tau_AP can be used.

The package holds:

- a greedy graph-based solver that builds one tie-breaking for each bound
  (`taubounds.bounds`),
- a brute-force reference solver that tries every pair of linear extensions
  (`taubounds.brute_force`),
- command-line tools to compute tau, build reference data sets, check a
  solver executable against them, compare two solver executables and gather
  statistics.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Writing rankings

A ranking is a string of alphanumeric tokens separated by single spaces,
listed from first to last. Tokens that are tied go in parentheses, and a
group holds at least two tokens:

```
a (b c) d
```

Here `a` comes first, `b` and `c` share second place, and `d` is last. Tokens
can be longer than one character (`i1 (i2 i3) i4`); internally each distinct
token is mapped to a single letter in order of first appearance, and output is
written with the original tokens. Both rankings of a pair must hold the same
items; otherwise a `RankingError` is raised.

## Command-line tools

### Tau of two rankings

```
taubounds-tau "a b c d" "b a d c"
```

Prints tau_AP (weight `ap_weight`) of the two rankings. If either ranking has
ties, the tau-b variant for tied rankings is used.

### Bounds with the greedy solver

```
taubounds-solve "a (b c) d" "(a d) b c"
```

Uses plain (unweighted) Kendall's tau and prints, after a blank line:

```
tmin:<value>
minp:<ranking a>/<ranking b>
tmax:<value>
maxp:<ranking a>/<ranking b>
```

where each `minp`/`maxp` line is a tie-breaking of both inputs that reaches
the bound. When neither ranking has ties, the single pair is scored with
Kendall's tau-b.

### Bounds by brute force

```
taubounds-bf "a (b c) d" "(a d) b c"
```

Same output, but lists every optimal pair. Inputs with more than 50,000 pairs
of linear extensions, or that reach 8,000 optimal pairs, are skipped and the
tool prints a line starting with `skipped:`.

### Building reference data

```
taubounds-rtc "cases/*.csv" reference.csv
```

Reads every CSV file matching the pattern (header `a,b`), drops consecutive
duplicate cases, solves each case by brute force with plain Kendall's tau,
and writes `a,b,tmin,tmax,pmin,pmax`. The `pmin` and `pmax` columns hold all
optimal pairs as `a/b` joined by `|`. Cases that are skipped or whose
rankings do not fit together are left out.

### Verifying a solver

```
taubounds-verify ./my-solver "reference/*.csv"
```

Runs the solver executable once per case, passing the two rankings as its
two arguments, and checks its output (in the format shown above) against the
reference bounds and solutions. Bounds must agree within 1e-6 and every
returned pair must be one of the reference pairs. A solver may report only
one bound. A summary of passes, complete solutions, skips and up to five
failures is printed.

### Comparing two solvers

```
taubounds-compare ./solver-one ./solver-two out/ "cases/*.csv"
```

Runs both executables on every case (the first line of each data file is
taken as a header and not checked) and writes one CSV row per case saying
whether they agree, differ in their bounds, differ in their solutions, or
whether either gave no answer. If the output path is a directory, a new log
file with a time-based name is created in it. Counts of each outcome are
printed at the end.

### Statistics for a solver

```
taubounds-eval ./my-solver results.csv "cases/*.csv"
```

Runs the solver on every case (header `a,b`), checks that its first minimum
and maximum pairs give a tau_AP range enclosing the tau-b of the tied input,
and writes tau-a, tau-b, both bounds, the ranking length, tie statistics, the
number of linear extensions and the time taken. Cases the solver skips, or
whose tau-b is undefined, are left out.

## Using the library

```python
from taubounds.ranking import partial_from_string
from taubounds.bounds import find_tau_bounds
from taubounds.brute_force import tau_bounds_bf_unweighted
from taubounds.weights import unweighted

names = {}
rank_a = partial_from_string("a (b c) d", names)
rank_b = partial_from_string("(a d) b c", names)

bounds = find_tau_bounds(rank_a, rank_b, unweighted)
print(bounds.lb.t, bounds.ub.t)
print(bounds.print_with_repl(names))

exact = tau_bounds_bf_unweighted(rank_a, rank_b)
print(exact.lb.t, exact.ub.t, len(exact.lb.a))
```

- `taubounds.ranking` has `PartialOrder`, `StrictOrder`, `Bound`, `TauBounds`
  and the parsing and printing helpers.
- `taubounds.tau` has `tau_w` for strict rankings and `tau_partial` for
  rankings with ties (`TauVariant.A` or `TauVariant.B`).
- `taubounds.weights` holds the weight functions, such as `unweighted`,
  `ap_weight` and the hyperbolic weights. Each takes the (rank in a, rank in
  b) positions of two items and returns the weight of that pair.
- `taubounds.brute_force` has `tau_bounds_bf`, which raises `SkippedError`
  for inputs that are too large.
- `taubounds.verify` and `taubounds.compare` expose the parsing and
  classification used by the verifier and comparison tools.

## What it does not do

The package does not generate rankings: the data-set tools work only on CSV
files of ranking pairs that you supply.