"""Uniform view of a probed form field."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Union

FieldValue = Union[str, bool, List[str]]


class FieldKind(str, Enum):
    """Widget kinds, in probing priority order (ERROR is the fallback)."""

    TEXT = "text"
    CHECKBOX = "checkbox"
    EXCLUSIVE_CHOICE = "exclusive_choice"
    SINGLE_SELECT = "single_select"
    ERROR = "error"


@dataclass
class FieldEntry:
    """Kind and current value of one named widget.

    Attributes:
        kind: Kind discovered by probing
        value: str for text and exclusive choice, bool for checkbox,
               list of selected options for single select, "" for error
        options: Declared options for choice kinds (sorted), else empty
    """

    kind: FieldKind
    value: FieldValue
    options: List[str] = field(default_factory=list)

    @classmethod
    def error(cls) -> FieldEntry:
        return cls(kind=FieldKind.ERROR, value="")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        data: Dict[str, Any] = {"kind": self.kind.value, "value": self.value}
        if self.options:
            data["options"] = list(self.options)
        return data
