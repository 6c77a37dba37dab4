"""Tokenizer for infix Boolean expressions."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Union

from .errors import LexError


class TokenType(Enum):
    NUMBER = "NUM"
    VARIABLE = "VAR"
    OPERATOR = "OP"
    LPAREN = "LP"
    RPAREN = "RP"


class OpKind(Enum):
    AND = "AND"
    OR = "OR"
    XOR = "XOR"
    NOT = "NOT"


class Fixity(Enum):
    PREFIX = "prefix"
    POSTFIX = "postfix"
    INFIX = "infix"


# OR < XOR < AND < NOT
PRECEDENCE = {OpKind.OR: 1, OpKind.XOR: 2, OpKind.AND: 3, OpKind.NOT: 4}

BINARY_SYMBOLS = {
    "&": OpKind.AND,
    "*": OpKind.AND,
    "+": OpKind.OR,
    "|": OpKind.OR,
    "^": OpKind.XOR,
}
PREFIX_NOT_SYMBOLS = ("!", "~")


@dataclass(frozen=True)
class Token:
    """One lexical unit; operator tokens derive precedence from their kind."""

    type: TokenType
    value: Union[int, str, None] = None
    op: Optional[OpKind] = None
    fixity: Optional[Fixity] = None

    @classmethod
    def number(cls, bit: int) -> "Token":
        return cls(TokenType.NUMBER, value=bit)

    @classmethod
    def variable(cls, name: str) -> "Token":
        return cls(TokenType.VARIABLE, value=name.upper())

    @classmethod
    def operator(cls, op: OpKind, fixity: Fixity) -> "Token":
        if (op is OpKind.NOT) != (fixity is not Fixity.INFIX):
            raise ValueError(f"{op.name} cannot be {fixity.value}")
        return cls(TokenType.OPERATOR, op=op, fixity=fixity)

    @property
    def precedence(self) -> int:
        return PRECEDENCE[self.op] if self.op is not None else 0

    @property
    def right_associative(self) -> bool:
        return self.op is OpKind.NOT

    @property
    def is_postfix_not(self) -> bool:
        return self.type is TokenType.OPERATOR and self.fixity is Fixity.POSTFIX

    @property
    def is_prefix_not(self) -> bool:
        return self.type is TokenType.OPERATOR and self.fixity is Fixity.PREFIX

    def __str__(self) -> str:
        if self.type is TokenType.OPERATOR:
            return self.op.name
        if self.type is TokenType.LPAREN:
            return "("
        if self.type is TokenType.RPAREN:
            return ")"
        return str(self.value)


LPAREN = Token(TokenType.LPAREN)
RPAREN = Token(TokenType.RPAREN)
POSTFIX_NOT = Token.operator(OpKind.NOT, Fixity.POSTFIX)
PREFIX_NOT = Token.operator(OpKind.NOT, Fixity.PREFIX)


def tokenize(raw: str) -> List[Token]:
    """Split an expression into tokens.

    Whitespace is dropped before scanning, so reported positions index the
    compacted text. A run of apostrophes after a variable negates it when the
    run has odd length; ``A''`` is plain ``A``.
    """
    src = "".join(raw.split())
    tokens: List[Token] = []
    i = 0
    while i < len(src):
        ch = src[i]
        if ch in "01":
            tokens.append(Token.number(int(ch)))
            i += 1
        elif ch.isascii() and ch.isalpha():
            tokens.append(Token.variable(ch))
            i += 1
            primes = 0
            while i < len(src) and src[i] == "'":
                primes += 1
                i += 1
            if primes % 2:
                tokens.append(POSTFIX_NOT)
        elif ch == "(":
            tokens.append(LPAREN)
            i += 1
        elif ch == ")":
            tokens.append(RPAREN)
            i += 1
        elif ch in PREFIX_NOT_SYMBOLS:
            tokens.append(PREFIX_NOT)
            i += 1
        elif ch in BINARY_SYMBOLS:
            tokens.append(Token.operator(BINARY_SYMBOLS[ch], Fixity.INFIX))
            i += 1
        else:
            raise LexError(ch, i)
    return tokens


def extract_variables(raw: str) -> List[str]:
    """Return the distinct variable letters of ``raw``, uppercased and sorted."""
    return sorted({ch.upper() for ch in raw if ch.isascii() and ch.isalpha()})


__all__ = [
    "Fixity",
    "LPAREN",
    "OpKind",
    "POSTFIX_NOT",
    "PREFIX_NOT",
    "PRECEDENCE",
    "RPAREN",
    "Token",
    "TokenType",
    "extract_variables",
    "tokenize",
]
