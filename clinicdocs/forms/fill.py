"""Form field writer: apply caller values to an arbitrary PDF's widgets."""

import logging
from dataclasses import dataclass, field
from typing import Any, List, Mapping

from ..exceptions import FillFieldError
from ..pdf_io import open_document, save_document
from .accessors import ACCESSORS, FieldGroup, NotThisKind, collect_field_groups

logger = logging.getLogger(__name__)


@dataclass
class FillResult:
    """Filled document plus which names were applied or skipped."""

    pdf_bytes: bytes
    applied: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)


def fill_fields(data: bytes, values: Mapping[str, Any]) -> bytes:
    """Write values into the document's widgets.

    Names without a widget and values whose shape does not fit the widget
    are skipped silently.

    Raises:
        FormatError: If data is not a readable PDF
    """
    return fill_fields_with_report(data, values).pdf_bytes


def fill_fields_with_report(data: bytes, values: Mapping[str, Any]) -> FillResult:
    """Same as fill_fields, also reporting applied and skipped names."""
    applied: List[str] = []
    skipped: List[str] = []

    with open_document(data) as doc:
        groups = collect_field_groups(doc)
        for name, value in values.items():
            group = groups.get(name)
            if group is None:
                logger.debug("No widget named %r, skipping", name)
                skipped.append(name)
                continue
            if write_group(group, value):
                applied.append(name)
            else:
                skipped.append(name)
        pdf_bytes = save_document(doc)

    logger.debug("Filled %d field(s), skipped %d", len(applied), len(skipped))
    return FillResult(pdf_bytes=pdf_bytes, applied=applied, skipped=skipped)


def write_group(group: FieldGroup, value: Any) -> bool:
    """Write value with the first accessor that accepts the field.

    Returns:
        True if the value was written
    """
    for accessor in ACCESSORS:
        try:
            accessor.write(group, value)
            return True
        except NotThisKind:
            continue
        except FillFieldError as e:
            logger.debug("Skipping %r: %s", group.name, e)
            return False
        except Exception as e:
            logger.debug("Writing %r as %s failed: %s", group.name, accessor.kind.value, e)
            return False
    logger.debug("Field %r matched no accessor", group.name)
    return False
