"""Page canvas: cursor-driven drawing over a growing PyMuPDF document.

The canvas owns the vertical cursor and every page break. Callers ask for
room with ensure_space(); when a page is added the canvas writes the
continuation marker, the continuation title, the column header and the
current section label itself, so header formatting lives in one place.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import fitz  # pymupdf

from ..exceptions import LayoutError
from ..models.layout import DrawOp

logger = logging.getLogger(__name__)

# A4 in points
PAGE_WIDTH = 595.28
PAGE_HEIGHT = 841.89

# Helvetica averages about half an em per character
AVG_CHAR_WIDTH_EM = 0.5

Color = Tuple[float, float, float]

TEXT_DARK: Color = (0.1, 0.1, 0.1)
TEXT_MUTED: Color = (0.3, 0.3, 0.3)
RULE_GRAY: Color = (0.8, 0.8, 0.8)
BAND_GRAY: Color = (0.95, 0.95, 0.95)
PAID_GREEN: Color = (0.0, 0.5, 0.0)

CONTINUED_MARKER = "Continued on next page..."

# Space taken by the continuation title above the column header band
TITLE_ADVANCE = 30
BAND_GAP = 6


class FontSet:
    """Regular and bold base-14 fonts shared by every page of one document."""

    def __init__(self, regular: str = "helv", bold: str = "hebo"):
        try:
            self.regular = fitz.Font(regular)
            self.bold = fitz.Font(bold)
        except Exception as e:
            raise LayoutError(f"Failed to load fonts {regular!r}/{bold!r}: {e}") from e
        self.regular_name = regular
        self.bold_name = bold

    def name(self, bold: bool = False) -> str:
        return self.bold_name if bold else self.regular_name

    def text_width(self, text: str, size: float, bold: bool = False) -> float:
        """Measured width of text in points."""
        font = self.bold if bold else self.regular
        return font.text_length(text, fontsize=size)


@dataclass
class HeaderCell:
    """Column header label drawn left-aligned at x."""

    label: str
    x: float


@dataclass
class RunningHeader:
    """Title and column labels repeated at the top of continuation pages."""

    continuation_title: str
    cells: List[HeaderCell] = field(default_factory=list)
    band_left: float = 50.0
    band_height: float = 20.0
    label_size: float = 10.0
    title_size: float = 16.0


class PageCanvas:
    """Cursor over a document's pages.

    Coordinates are top-down; y is the cursor (next free baseline region).
    Every draw call is forwarded to the current page and recorded in ops.
    """

    def __init__(
        self,
        doc: fitz.Document,
        fonts: FontSet,
        width: float = PAGE_WIDTH,
        height: float = PAGE_HEIGHT,
        top_margin: float = 50.0,
        bottom_margin: float = 100.0,
        running_header: Optional[RunningHeader] = None,
    ):
        self.doc = doc
        self.fonts = fonts
        self.width = width
        self.height = height
        self.top_margin = top_margin
        self.bottom_margin = bottom_margin
        self.running_header = running_header
        self.section_label: Optional[str] = None
        self.ops: List[DrawOp] = []
        self.y = top_margin
        self._page: Optional[fitz.Page] = None
        # Cursor position right after the last page break's running header
        self._fresh_top: Optional[float] = None
        self.page_number = 0
        self.new_page()

    # -- cursor ---------------------------------------------------------------

    @property
    def bottom_limit(self) -> float:
        return self.height - self.bottom_margin

    def current_page(self) -> fitz.Page:
        return self._page

    def remaining_height(self) -> float:
        return self.bottom_limit - self.y

    def continuation_top(self) -> float:
        """Cursor y on a continuation page once the running header is drawn."""
        top = self.top_margin
        if self.running_header is not None:
            top += TITLE_ADVANCE + self.running_header.band_height + BAND_GAP
        return top

    def usable_height(self) -> float:
        """Height available to content on a continuation page."""
        return self.bottom_limit - self.continuation_top()

    def advance(self, dy: float) -> None:
        self.y += dy

    def new_page(self) -> fitz.Page:
        """Append a page and move the cursor to its top margin."""
        self._page = self.doc.new_page(width=self.width, height=self.height)
        self.page_number += 1
        self.y = self.top_margin
        logger.debug("Allocated page %d", self.page_number)
        return self._page

    def ensure_space(self, min_height: float) -> bool:
        """Make sure min_height fits below the cursor.

        Returns:
            True if a new page was allocated
        """
        if self.remaining_height() >= min_height:
            return False
        if self._fresh_top is not None and self.y == self._fresh_top:
            # Already at the top of a fresh page
            logger.warning(
                "Block of %.1fpt is taller than a page (%.1fpt available)",
                min_height, self.remaining_height(),
            )
            return False

        self.draw_text(self.width / 2 - 60, CONTINUED_MARKER, size=10, bold=True,
                       color=TEXT_MUTED, y=self.height - 50)
        self.new_page()

        if self.running_header is not None:
            header = self.running_header
            self.draw_text(header.band_left, header.continuation_title,
                           size=header.title_size, bold=True, y=self.y)
            self.advance(TITLE_ADVANCE)
            self.draw_column_header()
        if self.section_label:
            self.draw_text(60, f"{self.section_label} (continued)", size=12, bold=True,
                           y=self.y + 12)
            self.advance(25)

        self._fresh_top = self.y
        if self.remaining_height() < min_height:
            logger.warning(
                "Block of %.1fpt is taller than a page (%.1fpt available)",
                min_height, self.remaining_height(),
            )
        return True

    # -- drawing --------------------------------------------------------------

    def draw_text(
        self,
        x: float,
        text: str,
        size: float = 10,
        bold: bool = False,
        color: Color = TEXT_DARK,
        y: Optional[float] = None,
    ) -> None:
        """Draw text with its baseline at y (defaults to the cursor)."""
        baseline = self.y if y is None else y
        if text:
            self._page.insert_text(
                fitz.Point(x, baseline), text,
                fontsize=size, fontname=self.fonts.name(bold), color=color,
            )
        self.ops.append(DrawOp(kind="text", page_number=self.page_number, x=x, y=baseline,
                               text=text, size=size, bold=bold))

    def draw_text_right(
        self,
        right_edge: float,
        text: str,
        size: float = 10,
        bold: bool = False,
        color: Color = TEXT_DARK,
        y: Optional[float] = None,
    ) -> None:
        """Right-align text against right_edge using an average glyph width."""
        x = right_edge - len(text) * size * AVG_CHAR_WIDTH_EM
        self.draw_text(x, text, size=size, bold=bold, color=color, y=y)

    def draw_line(self, x1: float, y1: float, x2: float, y2: float,
                  color: Color = RULE_GRAY, thickness: float = 1) -> None:
        self._page.draw_line(fitz.Point(x1, y1), fitz.Point(x2, y2), color=color, width=thickness)
        self.ops.append(DrawOp(kind="line", page_number=self.page_number,
                               x=x1, y=y1, x2=x2, y2=y2))

    def draw_rect(self, x: float, y: float, width: float, height: float,
                  fill: Color = BAND_GRAY) -> None:
        rect = fitz.Rect(x, y, x + width, y + height)
        self._page.draw_rect(rect, color=None, fill=fill, width=0)
        self.ops.append(DrawOp(kind="rect", page_number=self.page_number,
                               x=rect.x0, y=rect.y0, x2=rect.x1, y2=rect.y1))

    def draw_column_header(self) -> None:
        """Draw the shaded column header band at the cursor and advance past it."""
        header = self.running_header
        if header is None:
            return
        band_width = self.width - 2 * header.band_left
        self.draw_rect(header.band_left, self.y, band_width, header.band_height)
        baseline = self.y + header.band_height - 5
        for cell in header.cells:
            self.draw_text(cell.x, cell.label, size=header.label_size, bold=True, y=baseline)
        self.advance(header.band_height + BAND_GAP)
