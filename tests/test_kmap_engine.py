import pytest

from kmap_simplifier.kmap_engine import (
    GRAY2,
    GRAY4,
    axis_label,
    gray_labels,
    implicant_groups,
    kmap_layout,
    map_minterms_to_cells,
    rect_cells,
)

SIZES = [1, 2, 3, 4]


def one_bit_apart(a, b):
    diff = a ^ b
    return diff != 0 and diff & (diff - 1) == 0


@pytest.mark.parametrize("seq", [GRAY2, GRAY4])
def test_gray_sequences_are_cyclic(seq):
    for i, value in enumerate(seq):
        assert one_bit_apart(value, seq[(i + 1) % len(seq)])


@pytest.mark.parametrize("n", SIZES)
def test_layout_is_a_bijection(n):
    layout = kmap_layout(n)
    indices = sorted(idx for _, _, idx in layout.cells())
    assert indices == list(range(1 << n))


@pytest.mark.parametrize("n", SIZES)
def test_adjacent_cells_differ_in_one_bit(n):
    layout = kmap_layout(n)
    for r, c, idx in layout.cells():
        for nr, nc in layout.neighbours(r, c):
            assert one_bit_apart(idx, layout.index(nr, nc))


@pytest.mark.parametrize("n", SIZES)
def test_position_inverts_index(n):
    layout = kmap_layout(n)
    for r, c, idx in layout.cells():
        assert layout.position(idx) == (r, c)


@pytest.mark.parametrize("n", [0, 5, 8])
def test_unsupported_sizes(n):
    assert kmap_layout(n) is None


def test_layout_shapes_and_variables():
    one = kmap_layout(1)
    assert one.cols == () and one.shape == (2, 1)
    assert one.row_vars == ("A",) and one.col_vars == ()
    three = kmap_layout(3, ["X", "Y", "Z"])
    assert three.shape == (2, 4)
    assert three.row_vars == ("X",) and three.col_vars == ("Y", "Z")
    four = kmap_layout(4)
    assert four.row_vars == ("A", "B") and four.col_vars == ("C", "D")


def test_four_variable_indices():
    layout = kmap_layout(4)
    assert [layout.index(2, c) for c in range(4)] == [12, 13, 15, 14]
    assert layout.index(3, 3) == 10


def test_three_variable_indices():
    layout = kmap_layout(3)
    assert [layout.index(1, c) for c in range(4)] == [4, 5, 7, 6]


def test_two_variable_index():
    assert kmap_layout(2).index(1, 0) == 2


def test_wrong_variable_count():
    with pytest.raises(ValueError):
        kmap_layout(2, ["A"])


def test_position_out_of_range():
    with pytest.raises(ValueError):
        kmap_layout(2).position(4)


def test_labels():
    assert axis_label(["A", "B"]) == "AB"
    assert axis_label([]) == "—"
    assert gray_labels(GRAY4, 2) == ["00", "01", "11", "10"]
    assert gray_labels((), 0) == []


def test_rect_cells_wraps():
    assert rect_cells(3, 2, 0, 1, 4, 4) == {(3, 0), (0, 0)}


def test_map_minterms_to_cells():
    layout = kmap_layout(4)
    assert map_minterms_to_cells(layout, [0, 10]) == {(0, 0), (3, 3)}


def test_implicant_groups_corners():
    layout = kmap_layout(4)
    (group,) = implicant_groups(layout, ["-0-0"])
    assert group.cells == {(0, 0), (0, 3), (3, 0), (3, 3)}
    assert (group.r0, group.rows, group.c0, group.cols) == (3, 2, 3, 2)


def test_implicant_groups_full_and_single():
    layout = kmap_layout(3)
    full, single = implicant_groups(layout, ["---", "110"])
    assert (full.rows, full.cols) == (2, 4)
    assert single.cells == {(1, 3)}


def test_implicant_groups_width_mismatch():
    with pytest.raises(ValueError):
        implicant_groups(kmap_layout(2), ["1-0"])
