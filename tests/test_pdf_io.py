"""Tests for loading and saving PDF bytes."""

import fitz
import pytest

from clinicdocs.exceptions import FormatError
from clinicdocs.pdf_io import load_document, open_document, save_document


def _blank_pdf() -> bytes:
    doc = fitz.open()
    doc.new_page(width=595, height=842)
    data = doc.tobytes()
    doc.close()
    return data


@pytest.mark.parametrize("data", [b"", b"hello world", b"\x00" * 2048 + b"%PDF-1.7"])
def test_rejects_non_pdf(data):
    with pytest.raises(FormatError):
        load_document(data)


def test_rejects_truncated_pdf():
    with pytest.raises(FormatError):
        load_document(b"%PDF-1.7\n%%EOF\n")


def test_open_and_save():
    with open_document(_blank_pdf()) as doc:
        assert doc.page_count == 1
        data = save_document(doc, compact=True)

    assert data.startswith(b"%PDF")
    with open_document(data) as doc:
        assert doc.page_count == 1


def test_documents_are_independent():
    data = _blank_pdf()
    first = load_document(data)
    second = load_document(data)
    try:
        first.new_page()
        assert second.page_count == 1
    finally:
        first.close()
        second.close()
