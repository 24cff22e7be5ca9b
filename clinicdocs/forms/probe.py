"""Form field prober: name -> (kind, value) for an arbitrary PDF."""

import logging
from typing import Dict

from ..models.fields import FieldEntry
from ..pdf_io import open_document
from .accessors import ACCESSORS, FieldGroup, NotThisKind, collect_field_groups

logger = logging.getLogger(__name__)


def probe_fields(data: bytes) -> Dict[str, FieldEntry]:
    """Discover every named widget's kind and current value.

    Accessors are tried in their fixed priority order; the first one that
    reads the field determines its kind. A field no accessor can read is
    reported with kind ``error`` and value ``""``. Failures on one field
    never stop the others from being probed.

    Args:
        data: PDF bytes of unknown provenance

    Returns:
        Dict of field name -> FieldEntry, in document order

    Raises:
        FormatError: If data is not a readable PDF
    """
    with open_document(data) as doc:
        groups = collect_field_groups(doc)
        result = {name: probe_group(group) for name, group in groups.items()}

    logger.debug("Probed %d field(s)", len(result))
    return result


def probe_group(group: FieldGroup) -> FieldEntry:
    """Probe one field group, degrading to an error entry on failure."""
    for accessor in ACCESSORS:
        try:
            return accessor.read(group)
        except NotThisKind:
            continue
        except Exception as e:
            logger.debug("Reading %r as %s failed: %s", group.name, accessor.kind.value, e)
            continue
    logger.debug("Field %r matched no accessor", group.name)
    return FieldEntry.error()
