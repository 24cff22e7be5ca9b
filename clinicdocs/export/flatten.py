"""Baking widgets into page content and serializing documents."""

import logging

from ..pdf_io import open_document, save_document

logger = logging.getLogger(__name__)


def flatten_document(data: bytes) -> bytes:
    """Bake widgets and annotations into static page content.

    Raises:
        FormatError: If data is not a readable PDF
    """
    with open_document(data) as doc:
        doc.bake()
        return save_document(doc, compact=True)


def export_document(data: bytes, flatten: bool = False) -> bytes:
    """Serialize a document for hand-off, optionally flattened first."""
    if flatten:
        return flatten_document(data)
    with open_document(data) as doc:
        return save_document(doc, compact=True)


def make_editable(data: bytes) -> bytes:
    """Flatten existing form fields so the page can be annotated freely.

    Documents without widgets are returned re-serialized. On any failure
    the original bytes are returned unchanged.
    """
    try:
        with open_document(data) as doc:
            has_widgets = any(True for page in doc for _ in page.widgets())
            if has_widgets:
                doc.bake()
            return save_document(doc, compact=True)
    except Exception as e:
        logger.warning("Could not prepare document for editing, returning original: %s", e)
        return data
