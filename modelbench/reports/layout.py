"""Paginated A4 drawing surface on top of matplotlib's PDF backend.

Coordinates are millimetres with the origin at the top-left corner of the
page, and text is positioned by its baseline. Each page is one matplotlib
figure with a single axes spanning the whole sheet.
"""

import io
from typing import Dict, List, Optional, Sequence, Tuple

from matplotlib.backends.backend_pdf import PdfPages
from matplotlib.figure import Figure
from matplotlib.patches import Rectangle

PAGE_WIDTH_MM = 210.0
PAGE_HEIGHT_MM = 297.0
MM_PER_INCH = 25.4
PT_TO_MM = MM_PER_INCH / 72.0

MARGIN_MM = 20.0
CONTENT_BOTTOM_MM = 272.0
FOOTER_Y_MM = 285.0

RGB = Tuple[int, int, int]

BLACK: RGB = (0, 0, 0)
TABLE_HEAD_FILL: RGB = (41, 128, 185)
TABLE_ALT_FILL: RGB = (240, 240, 240)
TABLE_ROW_HEIGHT_MM = 8.0
TABLE_FONT_SIZE = 10


def _color(rgb: RGB) -> Tuple[float, float, float]:
    return tuple(c / 255.0 for c in rgb)


def fit_text(text: str, width_mm: float, font_size: float) -> str:
    """Truncate text with an ellipsis so it roughly fits a cell width."""
    # Average glyph width is about half an em
    max_chars = max(1, int(width_mm / (0.5 * font_size * PT_TO_MM)))
    if len(text) <= max_chars:
        return text
    return text[: max(1, max_chars - 1)] + "…"


class PdfCanvas:
    """Draws text, filled rectangles and simple tables onto PDF pages.

    Usage:
        with PdfCanvas(title="Report", footer="My footer") as canvas:
            canvas.text(105, 20, "Heading", size=22, align="center")
            y = canvas.table(40, ["A", "B"], [["1", "2"]])
            pdf_bytes = canvas.finish()
    """

    def __init__(self, title: str = "", footer: str = ""):
        self._buffer = io.BytesIO()
        metadata: Dict[str, str] = {"Creator": "modelbench"}
        if title:
            metadata["Title"] = title
        self._pdf = PdfPages(self._buffer, metadata=metadata)
        self._footer = footer
        self._figure: Optional[Figure] = None
        self._axes = None
        self.page_count = 0
        self.closed = False
        self.new_page()

    # -- pages -------------------------------------------------------------

    def new_page(self) -> float:
        """Flush the current page and start a blank one. Returns the top y."""
        if self._figure is not None:
            self._flush()
        self._figure = Figure(figsize=(PAGE_WIDTH_MM / MM_PER_INCH, PAGE_HEIGHT_MM / MM_PER_INCH))
        self._axes = self._figure.add_axes((0, 0, 1, 1))
        self._axes.set_xlim(0, PAGE_WIDTH_MM)
        self._axes.set_ylim(PAGE_HEIGHT_MM, 0)
        self._axes.axis("off")
        self.page_count += 1
        return MARGIN_MM

    def ensure_space(self, y: float, needed: float) -> float:
        """Return y, or the top of a new page when `needed` mm do not fit."""
        if y + needed > CONTENT_BOTTOM_MM:
            return self.new_page()
        return y

    def finish(self) -> bytes:
        """Close the document and return the PDF bytes."""
        self._flush()
        self.close()
        return self._buffer.getvalue()

    def close(self) -> None:
        """Release the PDF writer. Safe to call more than once."""
        self._figure = None
        self._axes = None
        if not self.closed:
            self.closed = True
            self._pdf.close()

    def __enter__(self) -> "PdfCanvas":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _flush(self) -> None:
        if self._footer:
            self.text(PAGE_WIDTH_MM / 2, FOOTER_Y_MM, self._footer,
                      size=10, color=(100, 100, 100), align="center")
        self.text(PAGE_WIDTH_MM - MARGIN_MM, FOOTER_Y_MM + 6, f"Page {self.page_count}",
                  size=8, color=(150, 150, 150), align="right")
        self._pdf.savefig(self._figure)

    # -- primitives --------------------------------------------------------

    def text(
        self,
        x: float,
        y: float,
        s: str,
        size: float = 12,
        color: RGB = BLACK,
        align: str = "left",
        bold: bool = False,
    ) -> None:
        self._axes.text(
            x, y, s,
            fontsize=size,
            color=_color(color),
            ha=align,
            va="baseline",
            fontweight="bold" if bold else "normal",
            parse_math=False,
        )

    def rect(self, x: float, y: float, width: float, height: float, fill: RGB) -> None:
        self._axes.add_patch(
            Rectangle((x, y), width, height, facecolor=_color(fill), edgecolor="none")
        )

    def table(
        self,
        y: float,
        head: Sequence[str],
        rows: Sequence[Sequence[str]],
        col_widths: Optional[Sequence[float]] = None,
    ) -> float:
        """Draw a striped table starting at y. Returns the y below the last row.

        Rows that would cross the bottom margin continue on a new page with
        the header repeated.
        """
        width = PAGE_WIDTH_MM - 2 * MARGIN_MM
        if col_widths is None:
            col_widths = [width / len(head)] * len(head)
        elif len(col_widths) != len(head):
            raise ValueError("col_widths must match the number of columns")

        y = self.ensure_space(y, 2 * TABLE_ROW_HEIGHT_MM)
        y = self._table_row(y, head, col_widths, fill=TABLE_HEAD_FILL,
                            text_color=(255, 255, 255), bold=True)
        for i, row in enumerate(rows):
            if y + TABLE_ROW_HEIGHT_MM > CONTENT_BOTTOM_MM:
                y = self.new_page()
                y = self._table_row(y, head, col_widths, fill=TABLE_HEAD_FILL,
                                    text_color=(255, 255, 255), bold=True)
            fill = TABLE_ALT_FILL if i % 2 == 1 else None
            y = self._table_row(y, row, col_widths, fill=fill, text_color=(60, 60, 60))
        return y

    def _table_row(
        self,
        y: float,
        cells: Sequence[str],
        col_widths: Sequence[float],
        fill: Optional[RGB],
        text_color: RGB,
        bold: bool = False,
    ) -> float:
        if fill is not None:
            self.rect(MARGIN_MM, y, sum(col_widths), TABLE_ROW_HEIGHT_MM, fill)
        x = MARGIN_MM
        for cell, w in zip(cells, col_widths):
            self.text(x + 2, y + 5.5, fit_text(str(cell), w - 4, TABLE_FONT_SIZE),
                      size=TABLE_FONT_SIZE, color=text_color, bold=bold)
            x += w
        return y + TABLE_ROW_HEIGHT_MM


def bullet_lines(lines: List[str]) -> List[str]:
    return [f"• {line}" for line in lines]
