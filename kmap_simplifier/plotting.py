"""Matplotlib rendering of a session's K-map."""

from __future__ import annotations

from typing import Sequence

import matplotlib.pyplot as plt
import numpy as np

from .kmap_engine import GroupRect, axis_label, gray_labels
from .session import DONT_CARE, Session
from .settings import COLOR_PALETTE

FIGURE_SIZES = {1: (2.4, 3.2), 2: (3.2, 3.2), 3: (5.2, 3.4), 4: (5.2, 5.2)}


def draw_kmap(session: Session, groups: Sequence[GroupRect] = (), labels: Sequence[str] = ()):
    """Draw the grid with cell values, minterm numbers and group outlines."""
    layout = session.layout
    if layout is None:
        raise ValueError("K-map available for 1-4 variables.")

    nrows, ncols = layout.shape
    fig, ax = plt.subplots(figsize=FIGURE_SIZES.get(layout.nvars, (4.2, 4.2)))
    # Leave room for the axis captions
    ax.set_xlim(-0.6, ncols)
    ax.set_ylim(-0.6, nrows)
    ax.set_xticks(np.arange(0, ncols + 1))
    ax.set_yticks(np.arange(0, nrows + 1))
    ax.set_xticklabels([])
    ax.set_yticklabels([])
    ax.grid(True, color="#888", linewidth=1)
    ax.invert_yaxis()
    ax.set_facecolor("#fafafa")

    row_name = axis_label(layout.row_vars)
    col_name = axis_label(layout.col_vars)
    for j, lab in enumerate(gray_labels(layout.cols, len(layout.col_vars))):
        ax.text(j + 0.5, -0.25, f"{col_name}={lab}", ha="center", va="center", fontsize=10, color="#333")
    for i, lab in enumerate(gray_labels(layout.rows, len(layout.row_vars))):
        ax.text(-0.25, i + 0.5, f"{row_name}={lab}", ha="right", va="center", fontsize=10, color="#333")

    for r, c, idx in layout.cells():
        state = session.cells[idx]
        if state == 1:
            val, color = "1", "#1f3c88"
        elif state == DONT_CARE:
            val, color = "X", "#ff8c32"
        else:
            val, color = "0", "#9aa7b7"
        ax.text(c + 0.5, r + 0.5, val, color=color,
                fontsize=13, ha="center", va="center", weight="bold")
        ax.text(c + 0.05, r + 0.9, str(idx), color="#777", fontsize=8, alpha=0.7)

    for i, g in enumerate(groups):
        color = COLOR_PALETTE[i % len(COLOR_PALETTE)]
        inset = 0.04 * (i % 4)
        # Wrapped groups are drawn as one patch per contiguous piece
        for r0, rows, c0, cols in _pieces(g, nrows, ncols):
            ax.add_patch(
                plt.Rectangle(
                    (c0 + inset, r0 + inset), cols - 2 * inset, rows - 2 * inset,
                    fill=False, color=color, lw=2.5, ls="-",
                )
            )
        if i < len(labels) and labels[i]:
            ax.text(
                (g.c0 + g.cols / 2) % ncols,
                (g.r0 + g.rows / 2) % nrows,
                labels[i],
                color=color,
                fontsize=11,
                ha="center",
                va="center",
                weight="bold",
            )
    return fig


def _split(start: int, length: int, size: int):
    if start + length <= size:
        return [(start, length)]
    head = size - start
    return [(start, head), (0, length - head)]


def _pieces(group: GroupRect, nrows: int, ncols: int):
    return [
        (r0, rows, c0, cols)
        for r0, rows in _split(group.r0, group.rows, nrows)
        for c0, cols in _split(group.c0, group.cols, ncols)
    ]


__all__ = ["draw_kmap"]
