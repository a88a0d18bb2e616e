"""Drawing helpers for a resolved K-map grid (matplotlib figure and plain text)."""

from __future__ import annotations

import logging
from typing import Optional, Sequence

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.patches import Patch, Rectangle

from .config import FIGURE_SIZES, HIGHLIGHT_PALETTE, VALUE_COLORS, VALUE_GLYPHS
from .kmap_engine import KMapGrid, highlight_color

logger = logging.getLogger(__name__)


def axis_title(grid: KMapGrid) -> str:
    """Corner caption naming the row and column variables, e.g. "AB\\CDE"."""
    rows = "".join(grid.split.row_names) or "-"
    cols = "".join(grid.split.col_names) or "-"
    return f"{rows}\\{cols}"


def legend_label(grid: KMapGrid, index: int) -> str:
    imp = grid.implicants[index]
    return f"{imp.pattern} ({', '.join(str(m) for m in imp.covered)})"


def draw_kmap(grid: KMapGrid, palette: Sequence[str] = HIGHLIGHT_PALETTE, ax=None):
    """Draw the grid onto ax (or a new figure) and return the figure.

    Each cell shows its value glyph and minterm index; cells covered by an
    implicant get a frame in the color of their primary implicant.
    """
    n = grid.num_inputs
    nrows, ncols = grid.split.rows, grid.split.cols
    if ax is None:
        fig, ax = plt.subplots(figsize=FIGURE_SIZES.get(n, (4.2, 4.2)))
    else:
        fig = ax.figure

    # room for the Gray-code headers
    ax.set_xlim(-0.6, ncols)
    ax.set_ylim(-0.6, nrows)
    ax.set_xticks(np.arange(0, ncols + 1))
    ax.set_yticks(np.arange(0, nrows + 1))
    ax.tick_params(labelbottom=False, labelleft=False, length=0)
    ax.grid(True, color="#888", linewidth=1)
    ax.invert_yaxis()
    ax.set_facecolor("#fafafa")

    ax.text(-0.3, -0.3, axis_title(grid), ha="center", va="center", fontsize=9, color="#555")
    for j, lab in enumerate(grid.col_labels):
        ax.text(j + 0.5, -0.25, lab, ha="center", va="center", fontsize=10, color="#333")
    for i, lab in enumerate(grid.row_labels):
        ax.text(-0.25, i + 0.5, lab, ha="right", va="center", fontsize=10, color="#333")

    for r, row in enumerate(grid.rows):
        for c, cell in enumerate(row.cells):
            color = grid.highlight_color(cell, palette)
            if color is not None:
                ax.add_patch(
                    Rectangle((c + 0.06, r + 0.06), 0.88, 0.88, fill=False, edgecolor=color, lw=2.5)
                )
            ax.text(c + 0.5, r + 0.5, VALUE_GLYPHS[cell.value.value],
                    color=VALUE_COLORS[cell.value.value],
                    fontsize=13, ha="center", va="center", weight="bold")
            ax.text(c + 0.08, r + 0.9, str(cell.minterm),
                    color="#777", fontsize=8, alpha=0.7)

    if grid.implicants:
        handles = [
            Patch(facecolor="none", edgecolor=highlight_color(i, palette), lw=2,
                  label=legend_label(grid, i))
            for i in range(len(grid.implicants))
        ]
        ax.legend(handles=handles, loc="upper left", bbox_to_anchor=(1.02, 1.0),
                  fontsize=8, frameon=False)

    logger.debug("Drew %d-input K-map with %d groups", n, len(grid.implicants))
    return fig


def format_grid_text(grid: KMapGrid, glyphs: Optional[dict] = None) -> str:
    """Plain-text table of the grid: Gray headers, then one glyph per cell."""
    glyphs = glyphs or VALUE_GLYPHS
    corner = axis_title(grid)
    label_width = max(len(corner), grid.row_vars)
    cell_width = max(grid.col_vars, 2)

    lines = [corner.ljust(label_width) + "".join(" " + lab.rjust(cell_width) for lab in grid.col_labels)]
    for label, row in zip(grid.row_labels, grid.rows):
        cells = "".join(" " + glyphs[cell.value.value].rjust(cell_width) for cell in row.cells)
        lines.append(label.rjust(label_width) + cells)
    return "\n".join(lines)


__all__ = ["axis_title", "draw_kmap", "format_grid_text", "legend_label"]
