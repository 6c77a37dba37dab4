"""Karnaugh map indexing and grouping helpers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import FrozenSet, Iterable, Iterator, List, Optional, Sequence, Set, Tuple

from .settings import MAX_KMAP_VARS

# Gray-code orderings; neighbours (cyclically) differ in exactly one bit
GRAY2: Tuple[int, ...] = (0, 1)
GRAY4: Tuple[int, ...] = (0, 1, 3, 2)

DEFAULT_NAMES = "ABCD"


@dataclass(frozen=True)
class GroupRect:
    """Descriptor for a grouped rectangle on the K-map."""

    r0: int
    rows: int
    c0: int
    cols: int
    cells: FrozenSet[Tuple[int, int]]


@dataclass(frozen=True)
class KMapLayout:
    """Grid geometry for 1-4 variables.

    ``rows`` and ``cols`` hold the Gray-code value of each grid line; a
    one-variable map has no column axis and is addressed with ``c=0``.
    """

    rows: Tuple[int, ...]
    cols: Tuple[int, ...]
    row_vars: Tuple[str, ...]
    col_vars: Tuple[str, ...]

    @property
    def nvars(self) -> int:
        return len(self.row_vars) + len(self.col_vars)

    @property
    def shape(self) -> Tuple[int, int]:
        return len(self.rows), max(len(self.cols), 1)

    @property
    def total(self) -> int:
        return 1 << self.nvars

    def index(self, r: int, c: int = 0) -> int:
        """Minterm index shown at grid cell (r, c)."""
        # Row bits are the high-order bits, column bits follow
        col_bits = self.cols[c] if self.cols else 0
        return (self.rows[r] << len(self.col_vars)) | col_bits

    def cells(self) -> Iterator[Tuple[int, int, int]]:
        nrows, ncols = self.shape
        for r in range(nrows):
            for c in range(ncols):
                yield r, c, self.index(r, c)

    def position(self, idx: int) -> Tuple[int, int]:
        """Translate a minterm index to (row, col) coordinates."""
        if not 0 <= idx < self.total:
            raise ValueError(f"Minterm {idx} is outside a {self.nvars}-variable map.")
        width = len(self.col_vars)
        row = self.rows.index(idx >> width)
        col = self.cols.index(idx & ((1 << width) - 1)) if self.cols else 0
        return row, col

    def neighbours(self, r: int, c: int) -> List[Tuple[int, int]]:
        """Distinct wrap-around neighbours of (r, c)."""
        nrows, ncols = self.shape
        found: List[Tuple[int, int]] = []
        for dr, dc in ((-1, 0), (1, 0), (0, -1), (0, 1)):
            cell = ((r + dr) % nrows, (c + dc) % ncols)
            if cell != (r, c) and cell not in found:
                found.append(cell)
        return found


def kmap_layout(nvars: int, variables: Optional[Sequence[str]] = None) -> Optional[KMapLayout]:
    """Return the layout for ``nvars`` variables, or None when unsupported."""
    if nvars < 1 or nvars > MAX_KMAP_VARS:
        return None
    names = tuple(variables) if variables is not None else tuple(DEFAULT_NAMES[:nvars])
    if len(names) != nvars:
        raise ValueError(f"Expected {nvars} variable names, got {len(names)}.")
    if nvars == 1:
        return KMapLayout(GRAY2, (), names[:1], ())
    if nvars == 2:
        return KMapLayout(GRAY2, GRAY2, names[:1], names[1:])
    if nvars == 3:
        return KMapLayout(GRAY2, GRAY4, names[:1], names[1:])
    return KMapLayout(GRAY4, GRAY4, names[:2], names[2:])


def axis_label(variables: Sequence[str]) -> str:
    return "".join(variables) if variables else "—"


def gray_labels(values: Sequence[int], width: int) -> List[str]:
    """Bit-string labels for one axis, e.g. ``['00', '01', '11', '10']``."""
    return [format(v, f"0{width}b") for v in values] if width else []


def rect_cells(
    r0: int, rows: int, c0: int, cols: int, nrows: int, ncols: int
) -> Set[Tuple[int, int]]:
    """Return the set of cells covered by a rectangle (with wrap-around)."""
    cells: Set[Tuple[int, int]] = set()
    for dr in range(rows):
        for dc in range(cols):
            r = (r0 + dr) % nrows
            c = (c0 + dc) % ncols
            cells.add((r, c))
    return cells


def map_minterms_to_cells(layout: KMapLayout, minterms: Iterable[int]) -> Set[Tuple[int, int]]:
    """Convert minterm indices to a set of (row, col) cells."""
    return {layout.position(m) for m in minterms}


def _contiguous_span(coords: Set[int], size: int) -> Tuple[int, int]:
    unique = set(coords)
    length = len(unique)
    for start in range(size):
        seq = {(start + offset) % size for offset in range(length)}
        if seq == unique:
            return start, length
    raise ValueError("Cells do not form a contiguous span on the map.")


def implicant_groups(layout: KMapLayout, implicants: Iterable[str]) -> List[GroupRect]:
    """Translate dash-pattern implicants into explicit K-map rectangles."""
    nrows, ncols = layout.shape
    groups: List[GroupRect] = []
    for pattern in implicants:
        if len(pattern) != layout.nvars:
            raise ValueError(f"Implicant {pattern!r} does not match a {layout.nvars}-variable map.")
        cells = {
            (r, c)
            for r, c, idx in layout.cells()
            if all(p == "-" or p == b for p, b in zip(pattern, format(idx, f"0{layout.nvars}b")))
        }
        r0, rows_len = _contiguous_span({r for r, _ in cells}, nrows)
        c0, cols_len = _contiguous_span({c for _, c in cells}, ncols)
        groups.append(
            GroupRect(
                r0=r0,
                rows=rows_len,
                c0=c0,
                cols=cols_len,
                cells=frozenset(cells),
            )
        )
    return groups


__all__ = [
    "GRAY2",
    "GRAY4",
    "GroupRect",
    "KMapLayout",
    "axis_label",
    "gray_labels",
    "implicant_groups",
    "kmap_layout",
    "map_minterms_to_cells",
    "rect_cells",
]
