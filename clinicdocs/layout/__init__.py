"""Procedural layout: wrapping, page canvas, invoice and form renderers."""

from .form_template import MEDICAL_FORM_FIELDS, build_medical_form
from .invoice_renderer import layout_invoice, render_invoice, row_height
from .text_wrap import wrap

__all__ = [
    "MEDICAL_FORM_FIELDS",
    "build_medical_form",
    "layout_invoice",
    "render_invoice",
    "row_height",
    "wrap",
]
