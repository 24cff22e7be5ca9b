"""Records produced while laying out a document."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple


@dataclass
class DrawOp:
    """One draw call made through the page canvas.

    Coordinates are PyMuPDF page coordinates (origin top-left). For text, y
    is the baseline; for lines, (x, y) and (x2, y2) are the end points; for
    rects, (x, y, x2, y2) are the corners.
    """

    kind: str  # "text" | "line" | "rect"
    page_number: int
    x: float
    y: float
    x2: Optional[float] = None
    y2: Optional[float] = None
    text: str = ""
    size: float = 0.0
    bold: bool = False


@dataclass
class RowPlacement:
    """Where one line item row landed.

    Attributes:
        section_index: Index of the animal section (0-based)
        item_index: Index of the item inside its section (0-based)
        page_number: Page the row was drawn on (starts at 1)
        top: y of the row's top edge
        height: Row height in points
        procedure_lines: Wrapped procedure text
        description_lines: Wrapped description text
    """

    section_index: int
    item_index: int
    page_number: int
    top: float
    height: float
    procedure_lines: List[str] = field(default_factory=list)
    description_lines: List[str] = field(default_factory=list)

    @property
    def bottom(self) -> float:
        return self.top + self.height


@dataclass
class InvoiceLayoutResult:
    """Rendered invoice plus the layout decisions behind it."""

    pdf_bytes: bytes
    page_count: int
    ops: List[DrawOp] = field(default_factory=list)
    rows: List[RowPlacement] = field(default_factory=list)
    page_size: Tuple[float, float] = (0.0, 0.0)

    def __post_init__(self):
        if self.page_count < 1:
            raise ValueError(f"page_count must be >= 1, got {self.page_count}")

    def texts_on_page(self, page_number: int) -> List[str]:
        """Text runs drawn on a page, in drawing order."""
        return [op.text for op in self.ops if op.kind == "text" and op.page_number == page_number]
