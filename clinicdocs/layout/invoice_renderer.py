"""Invoice layout engine: InvoiceLayoutInput -> paginated PDF bytes."""

import logging
from typing import List, Optional

import fitz  # pymupdf

from ..config import LayoutProfile, load_profile
from ..exceptions import LayoutError
from ..models.invoice import AnimalSection, InvoiceLayoutInput, LineItem
from ..models.layout import InvoiceLayoutResult, RowPlacement
from .canvas import (
    PAID_GREEN,
    TEXT_MUTED,
    FontSet,
    HeaderCell,
    PageCanvas,
    RunningHeader,
)
from .text_wrap import wrap

logger = logging.getLogger(__name__)

# Column grid (x of each column's left edge) for a 595pt page
COL_PROCEDURE = 60
COL_DESCRIPTION = 180
COL_QTY = 360
COL_UNIT_PRICE = 410
COL_TOTAL = 500
RIGHT_MARGIN = 50

# Right edges for the numeric columns
QTY_RIGHT = COL_UNIT_PRICE - 10
UNIT_PRICE_RIGHT = COL_TOTAL - 10

PROCEDURE_WRAP = 20
DESCRIPTION_WRAP = 30
LINE_HEIGHT = 14
ROW_PADDING = 10
MIN_ROW_HEIGHT = 25
FIRST_BASELINE_OFFSET = 12

SECTION_HEADING_HEIGHT = 25
SECTION_GAP = 15
TOTALS_BLOCK_HEIGHT = 90
SUMMARY_MAX_CHARS = 90
ELLIPSIS = "..."


def row_height(procedure_lines: List[str], description_lines: List[str]) -> float:
    """Vertical space of one line item row."""
    line_count = max(len(procedure_lines), len(description_lines))
    return max(MIN_ROW_HEIGHT, line_count * LINE_HEIGHT + ROW_PADDING)


def clip_lines(lines: List[str], max_lines: int, max_chars: int) -> List[str]:
    """Keep at most max_lines lines, ending a clipped cell with an ellipsis."""
    if len(lines) <= max_lines:
        return lines
    kept = lines[:max_lines]
    kept[-1] = kept[-1][:max_chars - len(ELLIPSIS)].rstrip() + ELLIPSIS
    return kept


def render_invoice(invoice: InvoiceLayoutInput, profile: Optional[LayoutProfile] = None) -> bytes:
    """Render an invoice to PDF bytes.

    Raises:
        LayoutError: If the document cannot be produced
    """
    return layout_invoice(invoice, profile).pdf_bytes


def layout_invoice(invoice: InvoiceLayoutInput,
                   profile: Optional[LayoutProfile] = None) -> InvoiceLayoutResult:
    """Render an invoice and return the bytes with the layout decisions."""
    return InvoiceRenderer(invoice, profile or load_profile()).render()


class InvoiceRenderer:
    """Draws one invoice onto a fresh document. Use once per render."""

    def __init__(self, invoice: InvoiceLayoutInput, profile: LayoutProfile):
        self.invoice = invoice
        self.profile = profile
        self.rows: List[RowPlacement] = []

    def render(self) -> InvoiceLayoutResult:
        doc = fitz.open()
        try:
            canvas = PageCanvas(doc, FontSet(), running_header=self._running_header())
            self._draw_header(canvas)
            self._draw_client_block(canvas)
            self._draw_animal_summary(canvas)
            canvas.draw_column_header()
            self._draw_sections(canvas)
            self._draw_totals(canvas)
            self._draw_footer(canvas)
            pdf_bytes = doc.tobytes(deflate=True)
            page_count = doc.page_count
        except LayoutError:
            raise
        except Exception as e:
            raise LayoutError(f"Failed to generate PDF: {e}") from e
        finally:
            doc.close()

        logger.info(
            "Rendered invoice %s: %d page(s), %d row(s)",
            self.invoice.header.invoice_number or "N/A", page_count, len(self.rows),
        )
        return InvoiceLayoutResult(
            pdf_bytes=pdf_bytes,
            page_count=page_count,
            ops=canvas.ops,
            rows=self.rows,
            page_size=(canvas.width, canvas.height),
        )

    def _running_header(self) -> RunningHeader:
        number = self.invoice.header.invoice_number or "N/A"
        return RunningHeader(
            continuation_title=f"INVOICE #{number} (continued)",
            cells=[
                HeaderCell("Procedure", COL_PROCEDURE),
                HeaderCell("Description", COL_DESCRIPTION),
                HeaderCell("Qty", COL_QTY),
                HeaderCell("Unit Price", COL_UNIT_PRICE),
                HeaderCell("Total", COL_TOTAL),
            ],
        )

    # -- blocks ---------------------------------------------------------------

    def _draw_header(self, canvas: PageCanvas) -> None:
        header = self.invoice.header
        profile = self.profile
        width = canvas.width

        canvas.draw_text(50, profile.clinic_name, size=24, bold=True, y=50)
        canvas.draw_text(50, profile.tagline, size=12, color=TEXT_MUTED, y=80)
        canvas.draw_line(50, 100, width - RIGHT_MARGIN, 100)

        canvas.draw_text(50, f"INVOICE #{header.invoice_number or 'N/A'}", size=16, bold=True, y=140)
        canvas.draw_text(50, f"Date: {profile.format_date(header.issue_date)}",
                         color=TEXT_MUTED, y=170)
        canvas.draw_text(50, f"Due Date: {profile.format_date(header.due_date)}",
                         color=TEXT_MUTED, y=190)
        canvas.draw_text(50, f"Status: {header.status or 'N/A'}", color=TEXT_MUTED, y=210)

        if (header.status or "").lower() == profile.paid_status.lower():
            canvas.draw_text(width - 150, "PAID", size=20, bold=True, color=PAID_GREEN, y=140)
            if header.payment_date:
                canvas.draw_text(width - 200,
                                 f"Payment Date: {profile.format_date(header.payment_date)}",
                                 color=TEXT_MUTED, y=170)
            if header.payment_method:
                method = header.payment_method.replace("_", " ").title()
                canvas.draw_text(width - 200, f"Payment Method: {method}",
                                 color=TEXT_MUTED, y=190)

        canvas.y = 250

    def _draw_client_block(self, canvas: PageCanvas) -> None:
        party = self.invoice.party
        canvas.draw_text(50, "Client Information:", size=12, bold=True)
        canvas.advance(20)

        name = party.display_name if party and party.display_name else "Client information not available"
        canvas.draw_text(70, name, color=TEXT_MUTED)
        if party and party.address:
            for line in party.address.display_lines(self.profile.default_country):
                canvas.advance(LINE_HEIGHT)
                canvas.draw_text(70, line, color=TEXT_MUTED)
        canvas.advance(30)

    def _draw_animal_summary(self, canvas: PageCanvas) -> None:
        canvas.draw_text(50, "Animal Information:", size=12, bold=True)
        canvas.advance(20)

        labels = [section.animal.label() for section in self.invoice.sections
                  if section.animal is not None]
        if labels:
            summary = ", ".join(labels)
            if len(summary) > SUMMARY_MAX_CHARS:
                summary = summary[:SUMMARY_MAX_CHARS - 3].rstrip(", ") + "..."
        else:
            summary = "Animal information not available"
        canvas.draw_text(70, summary, color=TEXT_MUTED)
        canvas.advance(30)

    def _draw_sections(self, canvas: PageCanvas) -> None:
        if not self.invoice.sections:
            canvas.draw_text(60, "No items in this invoice", color=TEXT_MUTED,
                             y=canvas.y + FIRST_BASELINE_OFFSET)
            canvas.advance(MIN_ROW_HEIGHT)
            return

        for section_index, section in enumerate(self.invoice.sections):
            self._draw_section(canvas, section_index, section)

    def _draw_section(self, canvas: PageCanvas, section_index: int, section: AnimalSection) -> None:
        # Keep the heading on the same page as the first row
        first_row = MIN_ROW_HEIGHT
        if section.items:
            first_row = row_height(*self._wrap_item(canvas, section.items[0]))
        canvas.section_label = None

        # Sections billed against an unpopulated animal reference get no heading
        if section.animal is None:
            canvas.ensure_space(first_row)
        else:
            canvas.ensure_space(SECTION_HEADING_HEIGHT + first_row)
            label = f"Animal: {section.animal.label()}"
            canvas.draw_text(COL_PROCEDURE, label, size=12, bold=True, y=canvas.y + 12)
            canvas.advance(SECTION_HEADING_HEIGHT)
            canvas.section_label = label

        for item_index, item in enumerate(section.items):
            self._draw_item(canvas, section_index, item_index, item)

        canvas.section_label = None
        canvas.advance(SECTION_GAP)

    def _draw_item(self, canvas: PageCanvas, section_index: int, item_index: int,
                   item: LineItem) -> None:
        procedure_lines, description_lines = self._wrap_item(canvas, item)
        height = row_height(procedure_lines, description_lines)
        canvas.ensure_space(height)

        top = canvas.y
        baseline = top + FIRST_BASELINE_OFFSET
        for i, line in enumerate(procedure_lines):
            canvas.draw_text(COL_PROCEDURE, line, y=baseline + i * LINE_HEIGHT)
        for i, line in enumerate(description_lines):
            canvas.draw_text(COL_DESCRIPTION, line, size=9, color=TEXT_MUTED,
                             y=baseline + i * LINE_HEIGHT)

        canvas.draw_text_right(QTY_RIGHT, item.quantity_text(), y=baseline)
        canvas.draw_text_right(UNIT_PRICE_RIGHT, self.profile.format_money(item.unit_price), y=baseline)
        canvas.draw_text_right(canvas.width - RIGHT_MARGIN, self.profile.format_money(item.total),
                               y=baseline)

        self.rows.append(RowPlacement(
            section_index=section_index,
            item_index=item_index,
            page_number=canvas.page_number,
            top=top,
            height=height,
            procedure_lines=procedure_lines,
            description_lines=description_lines,
        ))
        canvas.advance(height)

    def _draw_totals(self, canvas: PageCanvas) -> None:
        canvas.ensure_space(TOTALS_BLOCK_HEIGHT)
        right = canvas.width - RIGHT_MARGIN
        top = canvas.y + 10

        canvas.draw_line(350, top, right, top)
        canvas.draw_text(400, "Subtotal:", bold=True, y=top + 20)
        canvas.draw_text_right(right, self.profile.format_money(self.invoice.subtotal), y=top + 20)
        canvas.draw_line(350, top + 30, right, top + 30)
        canvas.draw_text(400, "Total:", size=12, bold=True, y=top + 50)
        canvas.draw_text_right(right, self.profile.format_money(self.invoice.total),
                               size=12, bold=True, y=top + 50)
        canvas.advance(70)

    def _draw_footer(self, canvas: PageCanvas) -> None:
        message = self.profile.footer_message
        if not message:
            return
        x = (canvas.width - canvas.fonts.text_width(message, 10)) / 2
        canvas.draw_text(x, message, color=TEXT_MUTED, y=canvas.height - 50)

    @staticmethod
    def _wrap_item(canvas: PageCanvas, item: LineItem):
        # A row plus a section heading must fit on one continuation page
        room = canvas.usable_height() - SECTION_HEADING_HEIGHT - ROW_PADDING
        max_lines = max(1, int(room // LINE_HEIGHT))
        return (
            clip_lines(wrap(item.procedure, PROCEDURE_WRAP), max_lines, PROCEDURE_WRAP),
            clip_lines(wrap(item.description, DESCRIPTION_WRAP), max_lines, DESCRIPTION_WRAP),
        )
