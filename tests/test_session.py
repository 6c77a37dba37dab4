import pytest

from kmap_simplifier.errors import LexError, ParseError
from kmap_simplifier.quine_mccluskey import Mode
from kmap_simplifier.session import (
    DONT_CARE,
    Session,
    check_syntax,
    collect,
    cycle_cell,
    evaluate_expression,
    export_terms,
    import_terms,
    paint,
    reset,
    simplify,
    with_mode,
)


def test_for_variables_truncates_grid():
    session = Session.for_variables(list("ABCDE"))
    assert session.variables == ("A", "B", "C", "D")
    assert session.total == 16
    assert session.layout is not None


def test_cycle_cell_is_pure():
    session = Session.for_variables(["A", "B"])
    once = cycle_cell(session, 2)
    twice = cycle_cell(once, 2)
    thrice = cycle_cell(twice, 2)
    assert session.cells[2] == 0
    assert once.cells[2] == 1
    assert twice.cells[2] == DONT_CARE
    assert thrice.cells[2] == 0


def test_paint_and_collect():
    session = paint(Session.for_variables(["A", "B", "C"]), [0, 5, 9], [1, 5])
    assert collect(session) == ([0], [1, 5])
    assert collect(reset(session)) == ([], [])


def test_evaluate_expression_sop():
    session, evaluation = evaluate_expression(Session(), "AB' + C")
    assert session.variables == ("A", "B", "C")
    assert evaluation.minterms == [1, 3, 4, 5, 7]
    assert len(evaluation.rows) == 8
    assert evaluation.result.text == "C + AB'"
    assert collect(session) == ([1, 3, 4, 5, 7], [])


def test_evaluate_expression_keeps_mode():
    start = with_mode(Session(), Mode.POS)
    session, evaluation = evaluate_expression(start, "a ^ b")
    assert session.mode is Mode.POS
    assert evaluation.result.text == "(A + B)(A' + B')"


def test_evaluate_expression_large_input_skips_minimization():
    session, evaluation = evaluate_expression(Session(), "ABCDE")
    assert evaluation.result is None
    assert evaluation.minterms == [31]
    assert session.nvars == 4
    assert collect(session) == ([], [])


@pytest.mark.parametrize("text", ["", "   ", "1 + 0", "ABCDEFGHI"])
def test_evaluate_expression_rejects(text):
    with pytest.raises(ValueError):
        evaluate_expression(Session(), text)


def test_evaluate_expression_propagates_core_errors():
    with pytest.raises(LexError):
        evaluate_expression(Session(), "A # B")
    with pytest.raises(ParseError):
        evaluate_expression(Session(), "(A + B")


def test_simplify_pos_uses_zeros_and_dontcares():
    session = with_mode(Session.for_variables(["A", "B"]), Mode.POS)
    session = paint(session, [1, 2], [3])
    result = simplify(session)
    assert result.implicants == ["00"]
    assert result.text == "(A + B)"


def test_simplify_without_variables():
    empty = Session()
    assert simplify(empty).text == "0"
    assert simplify(cycle_cell(empty, 0)).text == "1"


def test_import_and_export_terms():
    session, result = import_terms(Session.for_variables(["A", "B", "C"]), "0,1,5,7+d(2,3)")
    assert collect(session) == ([0, 1, 5, 7], [2, 3])
    assert result.text == "A' + C"
    assert export_terms(session) == "0,1,5,7 +d(2,3)"


@pytest.mark.parametrize("text", ["", "x, y"])
def test_import_terms_rejects_empty(text):
    with pytest.raises(ValueError):
        import_terms(Session.for_variables(["A"]), text)


def test_check_syntax():
    assert check_syntax("a(b + c')") == (7, ["A", "B", "C"])
    with pytest.raises(ParseError):
        check_syntax("a)")
