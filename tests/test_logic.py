import pytest
from sympy import And, Not, Or, Symbol

from kmap_simplifier.errors import EvalError, EvalErrorKind
from kmap_simplifier.lexer import LPAREN, Token
from kmap_simplifier.logic import (
    build_truth_table,
    complement_terms,
    evaluate,
    format_term_list,
    get_variables,
    parse_term_input,
    to_sympy,
    truth_minterms,
    validate_minterm_range,
    verify_minimization,
)
from kmap_simplifier.parser import compile_expression


def test_implicit_and_with_postfix_not():
    assert evaluate(compile_expression("AB'+C"), {"A": 1, "B": 0, "C": 0}) == 1
    assert evaluate(compile_expression("AB'+C"), {"A": 1, "B": 1, "C": 0}) == 0


def test_prefix_not_precedence():
    assert evaluate(compile_expression("!A & B | C"), {"A": 0, "B": 1, "C": 0}) == 1


@pytest.mark.parametrize("a, b", [(0, 0), (0, 1), (1, 0), (1, 1)])
def test_xor(a, b):
    assert evaluate(compile_expression("A^B"), {"A": a, "B": b}) == a ^ b


def test_constants():
    assert evaluate(compile_expression("1"), {}) == 1
    assert evaluate(compile_expression("0+0"), {}) == 0


def test_undefined_variable():
    with pytest.raises(EvalError) as info:
        evaluate(compile_expression("A+B"), {"A": 1})
    assert info.value.kind is EvalErrorKind.UNDEFINED_VARIABLE


@pytest.mark.parametrize("text", ["A+", "!", "&B"])
def test_insufficient_operands(text):
    with pytest.raises(EvalError) as info:
        evaluate(compile_expression(text), {"A": 1, "B": 1})
    assert info.value.kind is EvalErrorKind.INSUFFICIENT_OPERANDS


def test_empty_expression_is_invalid():
    with pytest.raises(EvalError) as info:
        evaluate((), {})
    assert info.value.kind is EvalErrorKind.INVALID_EXPRESSION


def test_leftover_operands_are_invalid():
    expr = (Token.variable("A"), Token.variable("B"))
    with pytest.raises(EvalError) as info:
        evaluate(expr, {"A": 1, "B": 1})
    assert info.value.kind is EvalErrorKind.INVALID_EXPRESSION


def test_paren_in_postfix_is_unknown_operator():
    with pytest.raises(EvalError) as info:
        evaluate((Token.variable("A"), LPAREN), {"A": 1})
    assert info.value.kind is EvalErrorKind.UNKNOWN_OPERATOR


def test_truth_table_ordering_msb_first():
    rows = build_truth_table(["A", "B", "C"], compile_expression("A"))
    assert [r.index for r in rows] == list(range(8))
    assert rows[4].env == {"A": 1, "B": 0, "C": 0}
    assert rows[1].env == {"A": 0, "B": 0, "C": 1}
    assert [r.output for r in rows] == [0, 0, 0, 0, 1, 1, 1, 1]


def test_truth_table_without_expression_is_all_zero():
    rows = build_truth_table(["A", "B"])
    assert len(rows) == 4
    assert all(r.output == 0 for r in rows)


def test_truth_table_no_variables():
    rows = build_truth_table([], compile_expression("1"))
    assert len(rows) == 1
    assert rows[0].env == {}
    assert rows[0].output == 1


def test_truth_minterms():
    assert truth_minterms(["A", "B"], compile_expression("A^B")) == [1, 2]


def test_complement_terms():
    assert complement_terms(2, [0], [3]) == [1, 2]
    assert complement_terms(2) == [0, 1, 2, 3]


@pytest.mark.parametrize("text, minterms, dontcares", [
    ("0,1,5,7+d(2,3)", [0, 1, 5, 7], [2, 3]),
    ("0 1  5", [0, 1, 5], []),
    ("1, 2 + D( 4 6 )", [1, 2], [4, 6]),
    ("3,x,-1,4", [3, 4], []),
    ("", [], []),
])
def test_parse_term_input(text, minterms, dontcares):
    assert parse_term_input(text) == (minterms, dontcares)


def test_format_term_list():
    assert format_term_list([5, 0, 1]) == "0,1,5"
    assert format_term_list([0, 1], [3, 2]) == "0,1 +d(2,3)"
    assert parse_term_input(format_term_list([0, 1], [3, 2])) == ([0, 1], [2, 3])


def test_validate_minterm_range():
    validate_minterm_range([0, 7], 3)
    with pytest.raises(ValueError):
        validate_minterm_range([8], 3)


def test_get_variables():
    a, b = get_variables(["A", "B"])
    assert (a, b) == (Symbol("A"), Symbol("B"))
    assert get_variables(["Q"]) == (Symbol("Q"),)
    assert get_variables([]) == ()


def test_to_sympy_structure():
    a, b = get_variables(["A", "B"])
    expr = to_sympy(compile_expression("AB' + A'B"), {"A": a, "B": b})
    assert expr == Or(And(a, Not(b)), And(Not(a), b))


def test_verify_minimization():
    assert verify_minimization("AB' + A'B", [1, 2], [], ["A", "B"])
    assert not verify_minimization("A + B", [1, 2], [], ["A", "B"])
    # index 3 is a don't-care, so A + B is acceptable
    assert verify_minimization("A + B", [1, 2], [3], ["A", "B"])
    assert verify_minimization("(A + B)", [1, 2, 3], [], ["A", "B"])
    assert verify_minimization("0", [], [], ["A"])
