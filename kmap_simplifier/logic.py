"""Boolean logic utilities: evaluation, truth tables and minterm lists."""

from __future__ import annotations

import itertools
import re
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from sympy import And, Not, Or, Symbol, Xor, false, symbols, true

from .errors import EvalError, EvalErrorKind
from .lexer import OpKind, Token, TokenType
from .parser import compile_expression

_DONT_CARE_RE = re.compile(r"\+\s*d\s*\(([^)]+)\)", re.IGNORECASE)
_SEPARATOR_RE = re.compile(r"[,\s]+")


def _replay(
    expression: Sequence[Token],
    load: Callable[[Token], object],
    negate: Callable[[object], object],
    combine: Mapping[OpKind, Callable[[object, object], object]],
):
    stack: List[object] = []
    for tok in expression:
        if tok.type in (TokenType.NUMBER, TokenType.VARIABLE):
            stack.append(load(tok))
        elif tok.type is TokenType.OPERATOR and tok.op is OpKind.NOT:
            if not stack:
                raise EvalError(EvalErrorKind.INSUFFICIENT_OPERANDS, "NOT needs 1 operand")
            stack.append(negate(stack.pop()))
        elif tok.type is TokenType.OPERATOR and tok.op in combine:
            if len(stack) < 2:
                raise EvalError(
                    EvalErrorKind.INSUFFICIENT_OPERANDS, f"{tok.op.name} needs 2 operands"
                )
            b = stack.pop()
            a = stack.pop()
            stack.append(combine[tok.op](a, b))
        else:
            raise EvalError(EvalErrorKind.UNKNOWN_OPERATOR, str(tok))
    if len(stack) != 1:
        raise EvalError(
            EvalErrorKind.INVALID_EXPRESSION, f"{len(stack)} values left on the stack"
        )
    return stack[0]


def evaluate(expression: Sequence[Token], env: Mapping[str, int]) -> int:
    """Evaluate a postfix expression under ``env`` and return 0 or 1."""

    def load(tok: Token) -> bool:
        if tok.type is TokenType.NUMBER:
            return bool(tok.value)
        if tok.value not in env:
            raise EvalError(EvalErrorKind.UNDEFINED_VARIABLE, str(tok.value))
        return bool(env[tok.value])

    result = _replay(
        expression,
        load,
        lambda a: not a,
        {
            OpKind.AND: lambda a, b: a and b,
            OpKind.OR: lambda a, b: a or b,
            OpKind.XOR: lambda a, b: a != b,
        },
    )
    return 1 if result else 0


@dataclass(frozen=True)
class TruthTableRow:
    index: int
    env: Dict[str, int]
    output: int


def build_truth_table(
    variables: Sequence[str], expression: Optional[Sequence[Token]] = None
) -> List[TruthTableRow]:
    """Enumerate every assignment, most significant variable first.

    Without an expression every output is 0.
    """
    rows = []
    for idx, bits in enumerate(itertools.product([0, 1], repeat=len(variables))):
        env = dict(zip(variables, bits))
        output = evaluate(expression, env) if expression is not None else 0
        rows.append(TruthTableRow(idx, env, output))
    return rows


def truth_minterms(
    variables: Sequence[str], expression: Optional[Sequence[Token]] = None
) -> List[int]:
    """Return indices whose assignments make the expression evaluate to 1."""
    return [row.index for row in build_truth_table(variables, expression) if row.output]


def complement_terms(n: int, *excluded: Iterable[int]) -> List[int]:
    """Indices in ``[0, 2**n)`` missing from every ``excluded`` collection."""
    skip = set().union(*excluded) if excluded else set()
    return [m for m in range(1 << n) if m not in skip]


def _read_terms(text: str) -> List[int]:
    return [int(part) for part in _SEPARATOR_RE.split(text.strip()) if part.isdecimal()]


def parse_term_input(text: str) -> Tuple[List[int], List[int]]:
    """Read ``"0,1,5,7+d(2,3)"`` into (minterms, dontcares).

    Entries that are not non-negative integers are ignored.
    """
    main, dontcares = text, []
    match = _DONT_CARE_RE.search(text)
    if match:
        dontcares = _read_terms(match.group(1))
        main = text[: match.start()]
    return _read_terms(main), dontcares


def format_term_list(minterms: Iterable[int], dontcares: Iterable[int] = ()) -> str:
    text = ",".join(str(m) for m in sorted(minterms))
    dcs = sorted(dontcares)
    if dcs:
        text += " +d(" + ",".join(str(d) for d in dcs) + ")"
    return text


def validate_minterm_range(minterms: Iterable[int], n: int) -> None:
    """Ensure all minterms are within the range for the current variable count."""
    max_valid = (1 << n) - 1
    invalid = [m for m in minterms if m < 0 or m > max_valid]
    if invalid:
        raise ValueError(
            f"Minterms out of range for {n} variables (0-{max_valid}): {sorted(set(invalid))}"
        )


def get_variables(names: Sequence[str]) -> Tuple[Symbol, ...]:
    """Return SymPy symbols for the given variable names, in order."""
    if not names:
        return ()
    return tuple(symbols(" ".join(names), seq=True))


def to_sympy(expression: Sequence[Token], symbol_map: Mapping[str, Symbol]):
    """Rebuild a postfix expression as a SymPy Boolean expression."""

    def load(tok: Token):
        if tok.type is TokenType.NUMBER:
            return true if tok.value else false
        if tok.value not in symbol_map:
            raise EvalError(EvalErrorKind.UNDEFINED_VARIABLE, str(tok.value))
        return symbol_map[tok.value]

    return _replay(
        expression,
        load,
        Not,
        {OpKind.AND: And, OpKind.OR: Or, OpKind.XOR: Xor},
    )


def verify_minimization(
    text: str,
    minterms: Iterable[int],
    dontcares: Iterable[int],
    variables: Sequence[str],
) -> bool:
    """Check a rendered SOP/POS string against the on-set on every care index.

    ``minterms`` is the function's own on-set, even for POS output.
    """
    vars_tuple = get_variables(variables)
    expr = to_sympy(compile_expression(text), {str(v): v for v in vars_tuple})
    ones = set(minterms)
    skip = set(dontcares) - ones
    for idx, bits in enumerate(itertools.product([0, 1], repeat=len(vars_tuple))):
        if idx in skip:
            continue
        subs = {var: bool(bit) for var, bit in zip(vars_tuple, bits)}
        if bool(expr.xreplace(subs)) != (idx in ones):
            return False
    return True


__all__ = [
    "TruthTableRow",
    "build_truth_table",
    "complement_terms",
    "evaluate",
    "format_term_list",
    "get_variables",
    "parse_term_input",
    "to_sympy",
    "truth_minterms",
    "validate_minterm_range",
    "verify_minimization",
]
