"""Data models for invoice layout and form fields."""

from .fields import FieldEntry, FieldKind
from .invoice import (
    Address,
    AnimalInfo,
    AnimalSection,
    InvoiceHeaderInfo,
    InvoiceLayoutInput,
    LineItem,
    PartyBlock,
    round_currency,
)
from .layout import DrawOp, InvoiceLayoutResult, RowPlacement
from .records import InvoiceRecord

__all__ = [
    "Address",
    "AnimalInfo",
    "AnimalSection",
    "DrawOp",
    "FieldEntry",
    "FieldKind",
    "InvoiceHeaderInfo",
    "InvoiceLayoutInput",
    "InvoiceLayoutResult",
    "InvoiceRecord",
    "LineItem",
    "PartyBlock",
    "RowPlacement",
    "round_currency",
]
