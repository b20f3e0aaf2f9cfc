"""Render generated puzzles into a landscape PDF pack."""

from __future__ import annotations

import math
from pathlib import Path
from typing import Any, Dict, Optional, Sequence

from project_config import get_config

INCH_PER_CM = 0.3937007874


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


PDF_CONFIG = _as_dict(get_config().get("pdf"))
LAYOUT_CONFIG = _as_dict(PDF_CONFIG.get("layout"))
PAGE_CONFIG = _as_dict(PDF_CONFIG.get("page"))
RENDER_CONFIG = _as_dict(PDF_CONFIG.get("rendering"))

DEFAULT_PUZZLES = max(1, int(PDF_CONFIG.get("puzzles", 4)))
LAYOUT_ROWS = max(1, int(LAYOUT_CONFIG.get("rows", 2)))
LAYOUT_COLS = max(1, int(LAYOUT_CONFIG.get("cols", 2)))
PAGE_WIDTH_CM = float(PAGE_CONFIG.get("width_cm", 29.7))
PAGE_HEIGHT_CM = float(PAGE_CONFIG.get("height_cm", 21.0))
DEFAULT_MARGIN_CM = float(PAGE_CONFIG.get("margin_cm", 2.0))
DEFAULT_GAP_CM = float(PAGE_CONFIG.get("gap_cm", 1.5))
FOOTER_OFFSET_CM = float(PAGE_CONFIG.get("footer_offset_cm", 1.0))
FONT_SCALE = float(RENDER_CONFIG.get("font_scale_factor", 0.65))


def _draw_grid(ax, grid: Sequence[int], font_size: int) -> None:
    for idx in range(10):
        linewidth = 1.0 if idx % 3 else 2.5
        ax.axvline(idx / 9, color="k", linewidth=linewidth)
        ax.axhline(idx / 9, color="k", linewidth=linewidth)
    ax.set_xlim(0, 1)
    ax.set_ylim(0, 1)
    ax.axis("off")
    for idx, value in enumerate(grid):
        if value:
            x = (idx % 9 + 0.5) / 9
            y = 1 - (idx // 9 + 0.5) / 9
            ax.text(x, y, str(value), ha="center", va="center", fontsize=font_size)


def export_pdf(
    puzzles: Sequence[Sequence[int]],
    out_path: str | Path,
    *,
    labels: Optional[Sequence[str]] = None,
    rows: int = LAYOUT_ROWS,
    cols: int = LAYOUT_COLS,
    margin_cm: float = DEFAULT_MARGIN_CM,
    gap_cm: float = DEFAULT_GAP_CM,
) -> int:
    """Write ``puzzles`` to ``out_path``, ``rows x cols`` per page.

    ``labels`` (one per puzzle, e.g. the seed) are listed in each page footer.
    Returns the number of pages written.
    """

    if not puzzles:
        raise ValueError("at least one puzzle is required")
    if labels is not None and len(labels) != len(puzzles):
        raise ValueError("labels must match the number of puzzles")

    from matplotlib.backends.backend_pdf import PdfPages
    from matplotlib.figure import Figure

    per_page = rows * cols
    pages = math.ceil(len(puzzles) / per_page)

    page_w_in = PAGE_WIDTH_CM * INCH_PER_CM
    page_h_in = PAGE_HEIGHT_CM * INCH_PER_CM
    margin_in = margin_cm * INCH_PER_CM
    gap_in = gap_cm * INCH_PER_CM

    avail_w = page_w_in - 2 * margin_in - gap_in * (cols - 1)
    avail_h = page_h_in - 2 * margin_in - gap_in * (rows - 1)
    size_in = min(avail_w / cols, avail_h / rows)
    if size_in <= 0:
        raise ValueError("margins and gaps leave no room for the puzzles")
    font_size = max(1, int(FONT_SCALE * size_in * 72 / 9))
    footer_y = (FOOTER_OFFSET_CM * INCH_PER_CM) / page_h_in

    out_path = Path(out_path)
    with PdfPages(out_path) as pdf:
        for page in range(pages):
            fig = Figure(figsize=(page_w_in, page_h_in))
            start = page * per_page
            chunk = puzzles[start:start + per_page]
            for pos, grid in enumerate(chunk):
                r, c = divmod(pos, cols)
                left = margin_in + c * (size_in + gap_in)
                bottom = margin_in + (rows - 1 - r) * (size_in + gap_in)
                rect = [left / page_w_in, bottom / page_h_in, size_in / page_w_in, size_in / page_h_in]
                ax = fig.add_axes(rect, frameon=False)
                _draw_grid(ax, grid, font_size)

            footer = f"Page {page + 1}/{pages}"
            if labels is not None:
                footer += "    seeds: " + ", ".join(str(v) for v in labels[start:start + per_page])
            fig.text(0.5, footer_y, footer, ha="center", va="bottom", fontsize=8)

            pdf.savefig(fig)

    return pages


__all__ = ["DEFAULT_PUZZLES", "export_pdf"]
