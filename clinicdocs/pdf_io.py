"""Loading PDF bytes into PyMuPDF documents and serializing them back."""

import logging
from contextlib import contextmanager
from typing import Iterator

import fitz  # pymupdf

from .exceptions import FormatError

logger = logging.getLogger(__name__)

# Readers accept leading junk before the header, but not much of it
_HEADER_SEARCH_WINDOW = 1024


def load_document(data: bytes) -> fitz.Document:
    """Open PDF bytes as a new, unshared Document.

    Args:
        data: Raw PDF bytes of any provenance

    Returns:
        fitz.Document owned by the caller (close it when done)

    Raises:
        FormatError: If the buffer is empty, not a PDF, or cannot be parsed
    """
    if not data:
        raise FormatError("Cannot open document: buffer is empty")
    if b"%PDF" not in bytes(data[:_HEADER_SEARCH_WINDOW]):
        raise FormatError("Cannot open document: missing %PDF header")

    try:
        doc = fitz.open(stream=bytes(data), filetype="pdf")
    except Exception as e:
        raise FormatError(f"Cannot open document: {e}") from e

    if doc.page_count < 1:
        doc.close()
        raise FormatError("Cannot open document: it has no pages")
    return doc


@contextmanager
def open_document(data: bytes) -> Iterator[fitz.Document]:
    """Load a document for the duration of a with-block and always close it."""
    doc = load_document(data)
    try:
        yield doc
    finally:
        doc.close()


def save_document(doc: fitz.Document, compact: bool = False) -> bytes:
    """Serialize a document to PDF bytes.

    Args:
        doc: Document to serialize
        compact: Drop unused objects and compact the cross-reference table
    """
    if compact:
        return doc.tobytes(garbage=3, deflate=True)
    return doc.tobytes(deflate=True)
