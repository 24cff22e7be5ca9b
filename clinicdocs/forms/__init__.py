"""Widget probing and filling for PDFs without a known schema."""

from .fill import FillResult, fill_fields, fill_fields_with_report
from .probe import probe_fields

__all__ = [
    "FillResult",
    "fill_fields",
    "fill_fields_with_report",
    "probe_fields",
]
