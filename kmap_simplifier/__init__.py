"""Convenience exports for the Boolean expression and K-map core."""

from .errors import EvalError, EvalErrorKind, LexError, ParseError
from .lexer import Fixity, OpKind, Token, TokenType, extract_variables, tokenize
from .parser import compile_expression, parse
from .logic import (
    TruthTableRow,
    build_truth_table,
    evaluate,
    format_term_list,
    parse_term_input,
    truth_minterms,
    validate_minterm_range,
    verify_minimization,
)
from .quine_mccluskey import Implicant, Minimization, Mode, minimize
from .kmap_engine import GRAY2, GRAY4, GroupRect, KMapLayout, implicant_groups, kmap_layout
from .session import Evaluation, Session

__all__ = [
    "EvalError",
    "EvalErrorKind",
    "Evaluation",
    "Fixity",
    "GRAY2",
    "GRAY4",
    "GroupRect",
    "Implicant",
    "KMapLayout",
    "LexError",
    "Minimization",
    "Mode",
    "OpKind",
    "ParseError",
    "Session",
    "Token",
    "TokenType",
    "TruthTableRow",
    "build_truth_table",
    "compile_expression",
    "evaluate",
    "extract_variables",
    "format_term_list",
    "implicant_groups",
    "kmap_layout",
    "minimize",
    "parse",
    "parse_term_input",
    "tokenize",
    "truth_minterms",
    "validate_minterm_range",
    "verify_minimization",
]
