"""Rankings with ties (partial orders) and rankings without ties (strict orders)."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field
from typing import Iterable, Mapping, MutableMapping, Optional

Element = str
TieGroup = list

_U128_MAX = 2**128 - 1

_WORD = r"[A-Za-z0-9]+"
_ITEM = rf"(?:{_WORD}|\({_WORD}(?: {_WORD})+\))"
_RANKING_RE = re.compile(rf"{_ITEM}(?: {_ITEM})*")


class RankingError(ValueError):
    """Raised when a ranking is malformed or rankings do not fit together."""


def _saturating_mul(a: int, b: int) -> int:
    return min(a * b, _U128_MAX)


class PartialOrder(list):
    """A ranking with ties: a list of tie groups, each a list of elements."""

    def __init__(self, groups: Iterable[Iterable[Element]] = ()):
        super().__init__(list(group) for group in groups)

    @classmethod
    def empty(cls, size: int) -> "PartialOrder":
        """A ranking of ``size`` empty tie groups."""
        return cls([] for _ in range(size))

    def rank_eq(self, other: "PartialOrder") -> bool:
        """Whether the tie groups hold the same elements, group by group."""
        return all(
            all(x == y for x, y in zip(sorted(ga), sorted(gb)))
            for ga, gb in zip(self, other)
        )

    def is_defined(self) -> bool:
        return all(group for group in self)

    def ensure_defined(self) -> list[list[Element]]:
        """Return the tie groups, raising if any of them is empty."""
        if not self.is_defined():
            raise RankingError(f"ranking is not fully defined: {partial_to_string(self)}")
        return [list(group) for group in self]

    def ensure_conjoint(self, other: "PartialOrder") -> tuple[int, set[Element]]:
        """Check every element of ``other`` occurs here; return the size and item set."""
        items = self.item_set()
        for group in other:
            for element in group:
                if element not in items:
                    raise RankingError(
                        "conjointness failed!\n"
                        f"a=[{partial_to_string(self)}]\n"
                        f"b=[{partial_to_string(other)}]"
                    )
        return len(items), items

    def set_size(self) -> int:
        return sum(len(group) for group in self)

    def set_eq(self, other: "PartialOrder") -> bool:
        items = self.item_set()
        return all(e in items for group in other for e in group)

    def item_set(self) -> set[Element]:
        return {e for group in self for e in group}

    def get_at(self, idx: int) -> Optional[Element]:
        """The element fixed at position ``idx``, or None if that position is tied."""
        position = 0
        for group in self:
            if len(group) == 1 and position == idx:
                return group[0]
            position += len(group)
            if position > idx:
                return None
        return None

    def all_possible_at(self, idx: int) -> list[Element]:
        """The first tie group starting at or after position ``idx``."""
        position = 0
        for group in self:
            if position >= idx:
                return list(group)
            position += len(group)
        return []

    def fixed_indices(self) -> list[int]:
        """Positions held by untied elements."""
        out = []
        position = 0
        for group in self:
            if len(group) == 1:
                out.append(position)
            position += len(group)
        return out

    def linear_ext_count(self) -> int:
        """Number of strict orders extending this one, saturating at 2**128 - 1."""
        total = 1
        for group in self:
            count = 1
            for k in range(1, len(group) + 1):
                count = _saturating_mul(count, k)
            total = _saturating_mul(total, count)
        return total


class StrictOrder(list):
    """A ranking without ties; a position may still be unassigned (None)."""

    def __init__(self, elements: Iterable[Optional[Element]] = ()):
        super().__init__(elements)

    @classmethod
    def empty(cls, size: int) -> "StrictOrder":
        """A ranking of ``size`` unassigned positions."""
        return cls([None] * size)

    def rank_eq(self, other: "StrictOrder") -> bool:
        return list(self) == list(other)

    def is_defined(self) -> bool:
        return all(e is not None for e in self)

    def ensure_defined(self) -> list[list[Element]]:
        """Return each element as a singleton group, raising if any position is unset."""
        if not self.is_defined():
            raise RankingError(f"ranking is not fully defined: {total_to_string(self)}")
        return [[e] for e in self]

    def ensure_conjoint(self, other: "StrictOrder") -> tuple[int, set[Element]]:
        """Check every position of ``other`` holds an element of this ranking."""
        items = self.item_set()
        for e in other:
            if e is None or e not in items:
                raise RankingError(
                    "conjointness failed!\n"
                    f"a=[{total_to_string(self)}]\n"
                    f"b=[{total_to_string(other)}]"
                )
        return len(items), items

    def set_size(self) -> int:
        return len(self)

    def set_eq(self, other: "StrictOrder") -> bool:
        items = self.item_set()
        return all(e in items for e in other if e is not None)

    def item_set(self) -> set[Element]:
        return {e for e in self if e is not None}

    def get_at(self, idx: int) -> Optional[Element]:
        return self[idx]

    def insert_at(self, e: Element, p: int) -> None:
        """Place ``e`` at position ``p``, which must still be free."""
        if self[p] is not None:
            raise RankingError(
                f"spot taken! tried to insert {e} in [{p}] of {total_to_string(self)}"
            )
        self[p] = e

    def fixed_indices(self) -> list[int]:
        return [i for i, e in enumerate(self) if e is not None]

    def linear_ext_count(self) -> int:
        return 1


def partial_from_string(
    s: str, inp_map: Optional[MutableMapping[str, Element]] = None
) -> PartialOrder:
    """Parse a ranking such as ``"x (y z) w"``.

    Each distinct name is mapped to a single letter, assigned in order of first
    appearance; ``inp_map`` records and reuses that assignment.
    """
    if inp_map is None:
        inp_map = {}
    if not _RANKING_RE.fullmatch(s):
        raise RankingError(
            f"{s} must be a string representation of a ranking using alphanumeric tokens"
        )

    out = PartialOrder()
    in_group = False
    for word in s.split():
        starts = word.startswith("(")
        ends = word.endswith(")")
        core = word.lstrip("(").rstrip(")")

        elem = inp_map.get(core)
        if elem is None:
            elem = chr(97 + len(inp_map))
            inp_map[core] = elem

        if starts and not ends:
            out.append([elem])
            in_group = True
        elif starts and ends:
            out.append([elem])
        elif ends and in_group:
            out[-1].append(elem)
            in_group = False
        elif in_group:
            out[-1].append(elem)
        elif not ends:
            out.append([elem])
        else:
            raise RankingError(f"unexpected closing name {word!r} in {s!r}")
    return out


def partial_to_string(r: PartialOrder) -> str:
    return " ".join(
        group[0] if len(group) == 1 else f"({' '.join(group)})" for group in r
    )


def partial_to_repl_string(r: PartialOrder, rmap: Mapping[Element, str]) -> str:
    """Render a ranking using the original names from ``rmap``."""

    def name(e: Element) -> str:
        return rmap.get(e, "<nf>")

    return " ".join(
        name(group[0]) if len(group) == 1 else f"({' '.join(name(e) for e in group)})"
        for group in r
    )


def strict_from_partial(p: PartialOrder) -> StrictOrder:
    """Convert a ranking with only singleton groups into a strict order."""
    if not all(len(group) == 1 for group in p):
        raise RankingError(f"{partial_to_string(p)} is not a strict order")
    return StrictOrder(group[0] for group in p)


def total_to_string(o: StrictOrder) -> str:
    return " ".join("<empty>" if e is None else e for e in o)


def total_to_repl_string(o: StrictOrder, rmap: Mapping[Element, str]) -> str:
    return " ".join("<empty>" if e is None else rmap.get(e, "<nf>") for e in o)


def _format_float(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    text = repr(value)
    if "e" in text:
        mantissa, exponent = text.split("e")
        sign = "-" if exponent.startswith("-") else ""
        text = f"{mantissa}e{sign}{int(exponent.lstrip('+-'))}"
    return text


@dataclass
class Bound:
    """An extreme tau value and the pairs of strict orders that reach it."""

    t: float
    a: list = field(default_factory=list)
    b: list = field(default_factory=list)


@dataclass
class TauBounds:
    """Lower and upper bound of tau over all completions of two rankings."""

    lb: Optional[Bound] = None
    ub: Optional[Bound] = None

    def __str__(self) -> str:
        lines = [""]
        if self.lb is not None:
            lines.append(f"tmin:{_format_float(self.lb.t)}")
            lines.append(f"mina:{total_to_string(self.lb.a[0])}")
            lines.append(f"minb:{total_to_string(self.lb.b[0])}")
        if self.ub is not None:
            lines.append(f"tmax:{_format_float(self.ub.t)}")
            lines.append(f"maxa:{total_to_string(self.ub.a[0])}")
            lines.append(f"maxb:{total_to_string(self.ub.b[0])}")
        return "\n".join(lines) + "\n"

    def print_with_repl(self, inp_map: Mapping[str, Element]) -> str:
        """Render every solution using the original names."""
        rmap = {elem: name for name, elem in inp_map.items()}
        out = ["\n"]
        if self.lb is not None:
            out.append(f"tmin:{_format_float(self.lb.t)}\n")
            for mina, minb in zip(self.lb.a, self.lb.b):
                out.append(
                    f"minp:{total_to_repl_string(mina, rmap)}/"
                    f"{total_to_repl_string(minb, rmap)}\n"
                )
        if self.ub is not None:
            out.append(f"tmax:{_format_float(self.ub.t)}\n")
            for maxa, maxb in zip(self.ub.a, self.ub.b):
                out.append(
                    f"maxp:{total_to_repl_string(maxa, rmap)}/"
                    f"{total_to_repl_string(maxb, rmap)}\n"
                )
        return "".join(out)