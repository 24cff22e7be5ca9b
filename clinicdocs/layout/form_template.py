"""Blank medical form with named, empty interactive widgets."""

import logging
from typing import List, Optional

import fitz  # pymupdf

from ..config import LayoutProfile, load_profile
from ..exceptions import LayoutError
from .canvas import TEXT_MUTED, FontSet, PageCanvas

logger = logging.getLogger(__name__)

PATIENT_FIELDS = [
    ("patient.name", "Patient Name:"),
    ("patient.species", "Species:"),
    ("patient.breed", "Breed:"),
    ("patient.age", "Age:"),
    ("patient.sex", "Sex:"),
]

HISTORY_CONDITIONS = [
    "Allergies",
    "Heart Disease",
    "Kidney Disease",
    "Liver Disease",
    "Neurological Disorders",
]

CERTIFICATION_TEXT = (
    "I certify that the information provided above is accurate to the best of my knowledge."
)

MARGIN = 50
BORDER_GRAY = (0.6, 0.6, 0.6)


def history_field_name(condition: str, answer: str) -> str:
    """Checkbox name for a condition answer, e.g. history.heart_disease.yes."""
    key = "_".join(condition.lower().split())
    return f"history.{key}.{answer}"


def _field_names() -> List[str]:
    names = [name for name, _ in PATIENT_FIELDS]
    for condition in HISTORY_CONDITIONS:
        names.append(history_field_name(condition, "yes"))
        names.append(history_field_name(condition, "no"))
    names.extend(["medications", "signature", "date"])
    return names


MEDICAL_FORM_FIELDS = _field_names()


def build_medical_form(profile: Optional[LayoutProfile] = None) -> bytes:
    """Build the blank medical form.

    Returns:
        PDF bytes with one page and one empty widget per entry in
        MEDICAL_FORM_FIELDS

    Raises:
        LayoutError: If the document cannot be produced
    """
    profile = profile or load_profile()
    doc = fitz.open()
    try:
        canvas = PageCanvas(doc, FontSet())
        page = canvas.current_page()
        content_width = canvas.width - 2 * MARGIN

        canvas.draw_text(MARGIN, "Medical Form", size=24, bold=True, y=50)
        canvas.draw_text(MARGIN, profile.clinic_name, size=12, color=TEXT_MUTED, y=80)

        _add_patient_section(canvas, page, 120, content_width)
        _add_history_section(canvas, page, 350, content_width)
        _add_medications_section(canvas, page, 550, content_width)
        _add_authorization_section(canvas, page, 750, content_width)

        pdf_bytes = doc.tobytes(deflate=True)
    except LayoutError:
        raise
    except Exception as e:
        raise LayoutError(f"Failed to generate medical form: {e}") from e
    finally:
        doc.close()

    logger.info("Built medical form template with %d fields", len(MEDICAL_FORM_FIELDS))
    return pdf_bytes


def _section_title(canvas: PageCanvas, title: str, top: float, width: float) -> None:
    canvas.draw_text(MARGIN, title, size=14, bold=True, y=top)
    canvas.draw_line(MARGIN, top + 10, MARGIN + width, top + 10)


def _add_text_widget(page: fitz.Page, name: str, rect: fitz.Rect, multiline: bool = False) -> None:
    widget = fitz.Widget()
    widget.field_name = name
    widget.field_type = fitz.PDF_WIDGET_TYPE_TEXT
    widget.rect = rect
    widget.field_value = ""
    widget.text_fontsize = 0 if multiline else 10
    widget.border_color = BORDER_GRAY
    widget.border_width = 1
    if multiline:
        widget.field_flags |= fitz.PDF_TX_FIELD_IS_MULTILINE
    page.add_widget(widget)


def _add_checkbox_widget(page: fitz.Page, name: str, rect: fitz.Rect) -> None:
    widget = fitz.Widget()
    widget.field_name = name
    widget.field_type = fitz.PDF_WIDGET_TYPE_CHECKBOX
    widget.rect = rect
    widget.field_value = False
    widget.border_color = BORDER_GRAY
    widget.border_width = 1
    page.add_widget(widget)


def _add_patient_section(canvas: PageCanvas, page: fitz.Page, top: float, width: float) -> None:
    _section_title(canvas, "Patient Information", top, width)
    for index, (name, label) in enumerate(PATIENT_FIELDS):
        row = top + 30 * (index + 1)
        canvas.draw_text(MARGIN, label, bold=True, y=row + 5)
        _add_text_widget(page, name, fitz.Rect(MARGIN + 120, row - 10, MARGIN + 420, row + 10))


def _add_history_section(canvas: PageCanvas, page: fitz.Page, top: float, width: float) -> None:
    _section_title(canvas, "Medical History", top, width)
    for index, condition in enumerate(HISTORY_CONDITIONS):
        row = top + 40 + index * 30
        canvas.draw_text(MARGIN, f"{condition}:", bold=True, y=row)

        _add_checkbox_widget(page, history_field_name(condition, "yes"),
                             fitz.Rect(MARGIN + 150, row - 5, MARGIN + 165, row + 10))
        canvas.draw_text(MARGIN + 170, "Yes", y=row)

        _add_checkbox_widget(page, history_field_name(condition, "no"),
                             fitz.Rect(MARGIN + 200, row - 5, MARGIN + 215, row + 10))
        canvas.draw_text(MARGIN + 220, "No", y=row)


def _add_medications_section(canvas: PageCanvas, page: fitz.Page, top: float, width: float) -> None:
    _section_title(canvas, "Current Medications", top, width)
    canvas.draw_text(MARGIN, "List all current medications and supplements:", y=top + 30)
    _add_text_widget(page, "medications",
                     fitz.Rect(MARGIN, top + 40, MARGIN + width, top + 140), multiline=True)


def _add_authorization_section(canvas: PageCanvas, page: fitz.Page, top: float, width: float) -> None:
    _section_title(canvas, "Authorization", top, width)
    canvas.draw_text(MARGIN, CERTIFICATION_TEXT, y=top + 30)

    canvas.draw_text(MARGIN, "Signature:", bold=True, y=top + 45)
    _add_text_widget(page, "signature", fitz.Rect(MARGIN + 60, top + 35, MARGIN + 300, top + 55))

    canvas.draw_text(MARGIN + 350, "Date:", bold=True, y=top + 45)
    _add_text_widget(page, "date", fitz.Rect(MARGIN + 385, top + 35, MARGIN + 495, top + 55))
