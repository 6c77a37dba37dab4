"""Infix to postfix conversion with implicit conjunction."""

from __future__ import annotations

from typing import List, Sequence, Tuple

from .errors import ParseError
from .lexer import Fixity, OpKind, Token, TokenType, tokenize

Expression = Tuple[Token, ...]

IMPLICIT_AND = Token.operator(OpKind.AND, Fixity.INFIX)


def ends_operand(tok: Token) -> bool:
    return tok.type in (TokenType.NUMBER, TokenType.VARIABLE, TokenType.RPAREN) or tok.is_postfix_not


def begins_operand(tok: Token) -> bool:
    return tok.type in (TokenType.NUMBER, TokenType.VARIABLE, TokenType.LPAREN) or tok.is_prefix_not


def insert_implicit_and(tokens: Sequence[Token]) -> List[Token]:
    """Insert an AND between every operand-ending and operand-starting pair."""
    expanded: List[Token] = []
    for idx, tok in enumerate(tokens):
        expanded.append(tok)
        if idx + 1 < len(tokens) and ends_operand(tok) and begins_operand(tokens[idx + 1]):
            expanded.append(IMPLICIT_AND)
    return expanded


def parse(tokens: Sequence[Token]) -> Expression:
    """Run the shunting-yard algorithm and return the postfix token sequence.

    Operator arity is not checked here; a malformed operator sequence such
    as ``A + + B`` parses and only fails when evaluated.
    """
    output: List[Token] = []
    stack: List[Token] = []

    for tok in insert_implicit_and(tokens):
        if tok.type in (TokenType.NUMBER, TokenType.VARIABLE) or tok.is_postfix_not:
            output.append(tok)
        elif tok.is_prefix_not or tok.type is TokenType.LPAREN:
            stack.append(tok)
        elif tok.type is TokenType.OPERATOR:
            while stack:
                top = stack[-1]
                if top.type is not TokenType.OPERATOR:
                    break
                if top.precedence > tok.precedence or (
                    top.precedence == tok.precedence and not tok.right_associative
                ):
                    output.append(stack.pop())
                else:
                    break
            stack.append(tok)
        else:
            while stack and stack[-1].type is not TokenType.LPAREN:
                output.append(stack.pop())
            if not stack:
                raise ParseError("unbalanced parentheses: ')' without matching '('")
            stack.pop()

    while stack:
        tok = stack.pop()
        if tok.type in (TokenType.LPAREN, TokenType.RPAREN):
            raise ParseError("unbalanced parentheses: '(' is never closed")
        output.append(tok)

    return tuple(output)


def compile_expression(raw: str) -> Expression:
    """Tokenize and parse in one step."""
    return parse(tokenize(raw))


def to_postfix_text(expression: Sequence[Token]) -> str:
    return " ".join(str(tok) for tok in expression)


__all__ = [
    "Expression",
    "IMPLICIT_AND",
    "begins_operand",
    "compile_expression",
    "ends_operand",
    "insert_implicit_and",
    "parse",
    "to_postfix_text",
]
