"""Reading produced PDFs back with pdfplumber."""

import io
from typing import List

import pdfplumber

from ..exceptions import FormatError


def read_page_texts(data: bytes) -> List[str]:
    """Extract the text of every page.

    Args:
        data: PDF bytes

    Returns:
        One string per page, in page order

    Raises:
        FormatError: If the PDF cannot be read
    """
    try:
        with pdfplumber.open(io.BytesIO(data)) as pdf:
            return [page.extract_text() or "" for page in pdf.pages]
    except Exception as e:
        raise FormatError(f"Failed to read PDF text: {e}") from e


def count_pages(data: bytes) -> int:
    """Number of pages in a PDF.

    Raises:
        FormatError: If the PDF cannot be read
    """
    try:
        with pdfplumber.open(io.BytesIO(data)) as pdf:
            return len(pdf.pages)
    except Exception as e:
        raise FormatError(f"Failed to read PDF: {e}") from e
