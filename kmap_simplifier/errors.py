"""Exceptions raised by the expression pipeline."""

from __future__ import annotations

from enum import Enum


class LexError(ValueError):
    """Unrecognised character in the source expression."""

    def __init__(self, char: str, position: int):
        self.char = char
        self.position = position
        super().__init__(f"Unrecognised character {char!r} at position {position}")


class ParseError(ValueError):
    """Unbalanced or mismatched parentheses."""


class EvalErrorKind(Enum):
    UNDEFINED_VARIABLE = "undefined variable"
    INSUFFICIENT_OPERANDS = "insufficient operands"
    INVALID_EXPRESSION = "invalid expression"
    UNKNOWN_OPERATOR = "unknown operator"


class EvalError(ValueError):
    """Failure while replaying a postfix expression on the stack machine."""

    def __init__(self, kind: EvalErrorKind, detail: str = ""):
        self.kind = kind
        self.detail = detail
        message = kind.value if not detail else f"{kind.value}: {detail}"
        super().__init__(message)


__all__ = ["LexError", "ParseError", "EvalError", "EvalErrorKind"]
