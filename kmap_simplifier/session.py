"""Explicit application state for the simplifier front end.

A ``Session`` replaces module-level globals: each transition takes a session
and returns a new one, so independent callers never share mutable state.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import List, Optional, Sequence, Tuple, Union

from .kmap_engine import KMapLayout, kmap_layout
from .lexer import extract_variables, tokenize
from .logic import (
    TruthTableRow,
    build_truth_table,
    complement_terms,
    format_term_list,
    parse_term_input,
)
from .parser import parse
from .quine_mccluskey import Minimization, Mode, minimize
from .settings import MAX_KMAP_VARS, MAX_TRUTH_TABLE_VARS

logger = logging.getLogger(__name__)

DONT_CARE = "d"
Cell = Union[int, str]
_NEXT_STATE = {0: 1, 1: DONT_CARE, DONT_CARE: 0}


@dataclass(frozen=True)
class Session:
    variables: Tuple[str, ...] = ()
    mode: Mode = Mode.SOP
    cells: Tuple[Cell, ...] = (0,)

    @classmethod
    def for_variables(cls, variables: Sequence[str], mode: Mode = Mode.SOP) -> "Session":
        """Fresh all-zero grid for the first ``MAX_KMAP_VARS`` variables."""
        kept = tuple(variables[:MAX_KMAP_VARS])
        return cls(kept, Mode(mode), (0,) * (1 << len(kept)))

    @property
    def nvars(self) -> int:
        return len(self.variables)

    @property
    def layout(self) -> Optional[KMapLayout]:
        return kmap_layout(self.nvars, self.variables)

    @property
    def total(self) -> int:
        return len(self.cells)


@dataclass(frozen=True)
class Evaluation:
    variables: Tuple[str, ...]
    rows: List[TruthTableRow]
    minterms: List[int]
    result: Optional[Minimization] = None
    token_count: int = field(default=0, compare=False)


def check_syntax(text: str) -> Tuple[int, List[str]]:
    """Tokenize and parse ``text``; return the token count and variables."""
    tokens = tokenize(text)
    parse(tokens)
    return len(tokens), extract_variables(text)


def evaluate_expression(session: Session, text: str) -> Tuple[Session, Evaluation]:
    """Build the truth table of ``text`` and, for small inputs, minimize it."""
    text = text.strip()
    if not text:
        raise ValueError("Enter a Boolean expression first.")
    variables = extract_variables(text)
    if not variables:
        raise ValueError("No variables found in the expression.")
    if len(variables) > MAX_TRUTH_TABLE_VARS:
        raise ValueError(f"Truth tables support at most {MAX_TRUTH_TABLE_VARS} variables.")

    tokens = tokenize(text)
    expression = parse(tokens)
    rows = build_truth_table(variables, expression)
    ones = [row.index for row in rows if row.output]

    new = Session.for_variables(variables, session.mode)
    result = None
    if len(variables) <= MAX_KMAP_VARS:
        new = paint(new, ones, ())
        result = simplify(new)
    logger.info("evaluated %r: %d vars, %d minterms", text, len(variables), len(ones))
    return new, Evaluation(tuple(variables), rows, ones, result, len(tokens))


def with_mode(session: Session, mode: Mode) -> Session:
    return replace(session, mode=Mode(mode))


def cycle_cell(session: Session, idx: int) -> Session:
    """Advance one cell through 0 -> 1 -> d -> 0."""
    cells = list(session.cells)
    cells[idx] = _NEXT_STATE[cells[idx]]
    return replace(session, cells=tuple(cells))


def paint(session: Session, minterms: Sequence[int], dontcares: Sequence[int]) -> Session:
    """Reset the grid, then mark ``minterms`` and ``dontcares``.

    Out-of-range indices are skipped; a don't-care wins over a minterm.
    """
    cells: List[Cell] = [0] * session.total
    for m in minterms:
        if 0 <= m < session.total:
            cells[m] = 1
    for d in dontcares:
        if 0 <= d < session.total:
            cells[d] = DONT_CARE
    return replace(session, cells=tuple(cells))


def reset(session: Session) -> Session:
    return paint(session, (), ())


def collect(session: Session) -> Tuple[List[int], List[int]]:
    """Return (minterms, dontcares) read back from the grid, ascending."""
    minterms = [i for i, v in enumerate(session.cells) if v == 1]
    dontcares = [i for i, v in enumerate(session.cells) if v == DONT_CARE]
    return minterms, dontcares


def simplify(session: Session) -> Minimization:
    """Minimize the grid contents in the session's mode."""
    if session.nvars == 0:
        on = session.cells[0] == 1
        return Minimization([], "1" if on else "0")

    minterms, dontcares = collect(session)
    if session.mode is Mode.POS:
        minterms = complement_terms(session.nvars, minterms, dontcares)
    result = minimize(minterms, dontcares, session.variables, session.mode)
    logger.debug("simplified %s -> %s", format_term_list(*collect(session)), result.text)
    return result


def import_terms(session: Session, text: str) -> Tuple[Session, Minimization]:
    """Paint the grid from a minterm list such as ``"0,1,5+d(2)"`` and simplify."""
    if not text.strip():
        raise ValueError("The minterm list is empty.")
    minterms, dontcares = parse_term_input(text)
    if not minterms and not dontcares:
        raise ValueError("No valid minterms found.")
    new = paint(session, minterms, dontcares)
    return new, simplify(new)


def export_terms(session: Session) -> str:
    return format_term_list(*collect(session))


__all__ = [
    "DONT_CARE",
    "Evaluation",
    "Session",
    "check_syntax",
    "collect",
    "cycle_cell",
    "evaluate_expression",
    "export_terms",
    "import_terms",
    "paint",
    "reset",
    "simplify",
    "with_mode",
]
