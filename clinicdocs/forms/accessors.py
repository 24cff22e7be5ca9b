"""Ordered accessor table used to discover a widget's kind by trial.

No stored field-type tag is consulted. Each accessor checks for the
capabilities its kind needs (appearance states, choice lists, a string
value) and raises NotThisKind when they are missing; the first accessor
that succeeds owns the field. The order is fixed:

    text -> checkbox -> exclusive_choice -> single_select
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

import fitz  # pymupdf

from ..exceptions import FillFieldError, ProbeFieldError
from ..models.fields import FieldEntry, FieldKind

logger = logging.getLogger(__name__)

OFF_STATE = "Off"


class NotThisKind(ProbeFieldError):
    """The field lacks a capability this accessor needs."""
    pass


@dataclass
class FieldGroup:
    """All widget annotations that share one field name.

    A radio group is one field spread over several widgets; every other kind
    usually has exactly one. PyMuPDF widgets only hold a weak reference to
    their page, so the group keeps the pages alive while it is in use.
    """

    name: str
    doc: fitz.Document
    widgets: List[fitz.Widget] = field(default_factory=list)
    pages: List[fitz.Page] = field(default_factory=list)


def collect_field_groups(doc: fitz.Document) -> Dict[str, FieldGroup]:
    """Group a document's widgets by field name, in first-seen order."""
    groups: Dict[str, FieldGroup] = {}
    for page in doc:
        for widget in page.widgets():
            name = widget.field_name
            if not name:
                logger.debug("Skipping unnamed widget on page %d", page.number + 1)
                continue
            group = groups.get(name)
            if group is None:
                group = groups[name] = FieldGroup(name=name, doc=doc)
            group.widgets.append(widget)
            if not any(p is page for p in group.pages):
                group.pages.append(page)
    return groups


# -- capability helpers ------------------------------------------------------

def _has_button_states(widget: fitz.Widget) -> bool:
    return widget.button_states() is not None


def _has_choices(widget: fitz.Widget) -> bool:
    return widget.choice_values is not None


def _on_state(widget: fitz.Widget) -> Optional[str]:
    """Name of the widget's ON appearance state."""
    state = widget.on_state()
    if state is True:
        # Widget without a named ON state yet
        return "Yes"
    if not state or state == OFF_STATE:
        return None
    return str(state)


def _is_on(group: FieldGroup, widget: fitz.Widget) -> bool:
    on = _on_state(widget)
    if on is None:
        return False
    kind, value = group.doc.xref_get_key(widget.xref, "AS")
    if kind == "name":
        return value.lstrip("/") == on
    current = widget.field_value
    return current is True or current == on


def _choice_options(widget: fitz.Widget) -> List[str]:
    """Export values of a choice widget (pairs are [export, display])."""
    options = []
    for choice in widget.choice_values or []:
        if isinstance(choice, (list, tuple)):
            options.append(str(choice[0]))
        else:
            options.append(str(choice))
    return options


def _apply(widget: fitz.Widget, value: Any) -> None:
    widget.field_value = value
    widget.update()


# -- accessors ---------------------------------------------------------------

class FieldAccessor:
    """Reads and writes one widget kind; raises NotThisKind when it does not apply."""

    kind: FieldKind

    def require(self, group: FieldGroup) -> None:
        raise NotImplementedError

    def read(self, group: FieldGroup) -> FieldEntry:
        raise NotImplementedError

    def write(self, group: FieldGroup, value: Any) -> None:
        raise NotImplementedError


class TextAccessor(FieldAccessor):
    kind = FieldKind.TEXT

    def require(self, group: FieldGroup) -> None:
        for widget in group.widgets:
            if _has_button_states(widget) or _has_choices(widget):
                raise NotThisKind(f"{group.name}: has button states or choices")
            if widget.field_flags & fitz.PDF_BTN_FIELD_IS_PUSHBUTTON:
                raise NotThisKind(f"{group.name}: is a push button")
            if widget.field_value is not None and not isinstance(widget.field_value, str):
                raise NotThisKind(f"{group.name}: value is not text")

    def read(self, group: FieldGroup) -> FieldEntry:
        self.require(group)
        return FieldEntry(kind=self.kind, value=group.widgets[0].field_value or "")

    def write(self, group: FieldGroup, value: Any) -> None:
        self.require(group)
        if not isinstance(value, str):
            raise FillFieldError(f"{group.name}: text field needs a str, got {type(value).__name__}")
        for widget in group.widgets:
            _apply(widget, value)


class CheckboxAccessor(FieldAccessor):
    kind = FieldKind.CHECKBOX

    def require(self, group: FieldGroup) -> None:
        if not all(_has_button_states(w) for w in group.widgets):
            raise NotThisKind(f"{group.name}: no button states")
        states = {_on_state(w) for w in group.widgets} - {None}
        if len(states) > 1:
            raise NotThisKind(f"{group.name}: {len(states)} distinct ON states")

    def read(self, group: FieldGroup) -> FieldEntry:
        self.require(group)
        return FieldEntry(kind=self.kind, value=any(_is_on(group, w) for w in group.widgets))

    def write(self, group: FieldGroup, value: Any) -> None:
        self.require(group)
        if not isinstance(value, bool):
            raise FillFieldError(f"{group.name}: checkbox needs a bool, got {type(value).__name__}")
        for widget in group.widgets:
            _apply(widget, value)


class ExclusiveChoiceAccessor(FieldAccessor):
    kind = FieldKind.EXCLUSIVE_CHOICE

    def require(self, group: FieldGroup) -> None:
        if not all(_has_button_states(w) for w in group.widgets):
            raise NotThisKind(f"{group.name}: no button states")
        if len(self._options(group)) < 2:
            raise NotThisKind(f"{group.name}: fewer than two ON states")

    @staticmethod
    def _options(group: FieldGroup) -> List[str]:
        return sorted({_on_state(w) for w in group.widgets} - {None})

    def read(self, group: FieldGroup) -> FieldEntry:
        self.require(group)
        selected = ""
        for widget in group.widgets:
            if _is_on(group, widget):
                selected = _on_state(widget)
                break
        return FieldEntry(kind=self.kind, value=selected, options=self._options(group))

    def write(self, group: FieldGroup, value: Any) -> None:
        self.require(group)
        options = self._options(group)
        if not isinstance(value, str) or value not in options:
            raise FillFieldError(f"{group.name}: {value!r} is not one of {options}")
        targets = [w for w in group.widgets if _on_state(w) == value]
        # Others off before the target
        for widget in group.widgets:
            if _on_state(widget) != value:
                _apply(widget, False)
        for widget in targets:
            _apply(widget, True)


class SingleSelectAccessor(FieldAccessor):
    kind = FieldKind.SINGLE_SELECT

    def require(self, group: FieldGroup) -> None:
        if not all(_has_choices(w) for w in group.widgets):
            raise NotThisKind(f"{group.name}: no choice values")

    @staticmethod
    def _options(group: FieldGroup) -> List[str]:
        return sorted({option for w in group.widgets for option in _choice_options(w)})

    def read(self, group: FieldGroup) -> FieldEntry:
        self.require(group)
        current = group.widgets[0].field_value
        if isinstance(current, (list, tuple)):
            selected = [str(v) for v in current]
        elif current:
            selected = [str(current)]
        else:
            selected = []
        return FieldEntry(kind=self.kind, value=selected, options=self._options(group))

    def write(self, group: FieldGroup, value: Any) -> None:
        self.require(group)
        choice = _single_choice(value)
        options = self._options(group)
        if choice is None or choice not in options:
            raise FillFieldError(f"{group.name}: {value!r} is not one of {options}")
        for widget in group.widgets:
            _apply(widget, choice)


def _single_choice(value: Any) -> Optional[str]:
    if isinstance(value, str):
        return value
    if isinstance(value, (list, tuple)) and len(value) == 1 and isinstance(value[0], str):
        return value[0]
    return None


ACCESSORS: Sequence[FieldAccessor] = (
    TextAccessor(),
    CheckboxAccessor(),
    ExclusiveChoiceAccessor(),
    SingleSelectAccessor(),
)
