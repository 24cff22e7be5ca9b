"""Flattening, inspection and printing of produced documents."""

from .flatten import export_document, flatten_document, make_editable
from .printing import PrintDispatcher, PrintOutcome, document_url, print_document
from .reader import count_pages, read_page_texts

__all__ = [
    "PrintDispatcher",
    "PrintOutcome",
    "count_pages",
    "document_url",
    "export_document",
    "flatten_document",
    "make_editable",
    "print_document",
    "read_page_texts",
]
