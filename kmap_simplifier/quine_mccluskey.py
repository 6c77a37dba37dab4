"""
Quine-McCluskey minimization over dash-encoded implicant strings.

An implicant is a string over ``0``, ``1`` and ``-`` with one symbol per
variable (most significant first). It remembers the minterm indices it was
merged from, and with k dashes it covers exactly 2**k minterms.

Ordering is deterministic throughout: groups are visited by ascending
population count, new implicants keep first-inserted order, and the greedy
cover breaks ties on the lowest prime index. The greedy phase is not an
exact minimum cover; when several covers of equal cost exist the first one
found wins.

POS results are produced from the *zeros* of a function. Callers pass the
complement of the on-set (excluding don't-cares) as ``minterms``; the
minimizer only changes how the chosen implicants are rendered.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Dict, FrozenSet, Iterable, List, NamedTuple, Sequence

from .logic import validate_minterm_range

logger = logging.getLogger(__name__)

DASH = "-"


class Mode(str, Enum):
    SOP = "SOP"
    POS = "POS"


class Implicant(str):
    """Dash pattern such as ``"1-0"`` that also carries its source minterms."""

    minterms: FrozenSet[int]

    def __new__(cls, pattern: str, minterms: Iterable[int] = ()):
        obj = super().__new__(cls, pattern)
        obj.minterms = frozenset(minterms)
        return obj

    @property
    def pattern(self) -> str:
        return str(self)

    @property
    def num_literals(self) -> int:
        return sum(1 for bit in self if bit != DASH)

    @property
    def size(self) -> int:
        """Number of minterms covered."""
        return 1 << self.count(DASH)

    def covers(self, bits: str) -> bool:
        return all(p == DASH or p == b for p, b in zip(self, bits))

    def covered_indices(self) -> List[int]:
        """All minterm indices matching the pattern, ascending."""
        width = len(self)
        return [m for m in range(1 << width) if self.covers(to_bits(m, width))]

    def to_product(self, variables: Sequence[str]) -> str:
        literals = []
        for bit, var in zip(self, variables):
            if bit == "1":
                literals.append(var)
            elif bit == "0":
                literals.append(f"{var}'")
        return "".join(literals) or "1"

    def to_sum(self, variables: Sequence[str]) -> str:
        literals = []
        for bit, var in zip(self, variables):
            if bit == "0":
                literals.append(var)
            elif bit == "1":
                literals.append(f"{var}'")
        # An empty sum covers every zero of the function
        return f"({' + '.join(literals)})" if literals else "0"

    def __repr__(self):
        return f"Implicant({str(self)!r}, {sorted(self.minterms)})"


class Minimization(NamedTuple):
    implicants: List[Implicant]
    text: str


def to_bits(value: int, width: int) -> str:
    return format(value, f"0{width}b") if width else ""


def count_ones(bits: str) -> int:
    return bits.count("1")


def try_combine(a: str, b: str):
    """Return the merged pattern when ``a`` and ``b`` differ in one position."""
    diff = -1
    for i, (x, y) in enumerate(zip(a, b)):
        if x != y:
            if diff >= 0:
                return None
            diff = i
    if diff < 0:
        return None
    return a[:diff] + DASH + a[diff + 1:]


def _group(implicants: Iterable[Implicant]) -> Dict[int, List[Implicant]]:
    groups: Dict[int, List[Implicant]] = {}
    for impl in implicants:
        groups.setdefault(count_ones(impl), []).append(impl)
    return groups


def prime_implicants(terms: Sequence[int], width: int) -> List[Implicant]:
    """Generate the prime implicants of ``terms`` (minterms plus don't-cares)."""
    groups = _group(Implicant(to_bits(m, width), (m,)) for m in terms)
    primes: List[Implicant] = []
    seen = set()
    level = 0

    while groups:
        merged: List[Implicant] = []
        merged_keys = set()
        used = set()
        for k in sorted(groups):
            for a in groups[k]:
                for b in groups.get(k + 1, ()):
                    pattern = try_combine(a, b)
                    if pattern is None:
                        continue
                    impl = Implicant(pattern, a.minterms | b.minterms)
                    key = (pattern, impl.minterms)
                    if key not in merged_keys:
                        merged_keys.add(key)
                        merged.append(impl)
                    used.add(id(a))
                    used.add(id(b))

        for k in sorted(groups):
            for impl in groups[k]:
                if id(impl) not in used and impl.pattern not in seen:
                    seen.add(impl.pattern)
                    primes.append(impl)

        logger.debug("level %d: %d merged, %d primes so far", level, len(merged), len(primes))
        groups = _group(merged)
        level += 1

    return primes


def prime_implicant_chart(
    primes: Sequence[Implicant], minterms: Sequence[int], width: int
) -> Dict[int, List[int]]:
    """Map each required minterm to the indices of the primes covering it."""
    chart: Dict[int, List[int]] = {}
    for m in minterms:
        bits = to_bits(m, width)
        chart[m] = [j for j, impl in enumerate(primes) if impl.covers(bits)]
    return chart


def essential_implicants(chart: Dict[int, List[int]]) -> List[int]:
    chosen: List[int] = []
    for coverers in chart.values():
        if len(coverers) == 1 and coverers[0] not in chosen:
            chosen.append(coverers[0])
    return chosen


def select_cover(chart: Dict[int, List[int]], n_primes: int) -> List[int]:
    """Essential primes first, then greedily the prime covering most leftovers."""
    chosen = essential_implicants(chart)
    uncovered = {m for m, coverers in chart.items() if not set(coverers) & set(chosen)}

    while uncovered:
        best, best_count = -1, 0
        for j in range(n_primes):
            if j in chosen:
                continue
            count = sum(1 for m in uncovered if j in chart[m])
            if count > best_count:
                best, best_count = j, count
        if best < 0:
            logger.warning("no prime covers minterms %s", sorted(uncovered))
            break
        chosen.append(best)
        uncovered = {m for m in uncovered if best not in chart[m]}

    return chosen


def render(implicants: Sequence[Implicant], variables: Sequence[str], mode: Mode) -> str:
    if Mode(mode) is Mode.SOP:
        if not implicants:
            return "0"
        return " + ".join(impl.to_product(variables) for impl in implicants)
    if not implicants:
        return "1"
    return "".join(impl.to_sum(variables) for impl in implicants)


def minimize(
    minterms: Iterable[int],
    dontcares: Iterable[int],
    variables: Sequence[str],
    mode: Mode = Mode.SOP,
) -> Minimization:
    """Minimize the function covering ``minterms`` with optional ``dontcares``.

    Returns the chosen implicants in selection order together with the
    rendered SOP or POS text.
    """
    mode = Mode(mode)
    width = len(variables)
    ones = sorted(set(minterms))
    dcs = sorted(set(dontcares) - set(ones))
    if not ones and not dcs:
        return Minimization([], "0" if mode is Mode.SOP else "1")

    validate_minterm_range(ones + dcs, width)
    primes = prime_implicants(ones + dcs, width)
    chart = prime_implicant_chart(primes, ones, width)
    chosen = [primes[j] for j in select_cover(chart, len(primes))]
    logger.debug(
        "%s over %d vars: %d primes, %d chosen", mode.value, width, len(primes), len(chosen)
    )
    return Minimization(chosen, render(chosen, variables, mode))


__all__ = [
    "Implicant",
    "Minimization",
    "Mode",
    "count_ones",
    "essential_implicants",
    "minimize",
    "prime_implicant_chart",
    "prime_implicants",
    "render",
    "select_cover",
    "to_bits",
    "try_combine",
]
