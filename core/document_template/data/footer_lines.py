"""
Footer line store.

Footer lines carry two identities: a generated ``id`` used for direct edits
and reordering, and a normalized label used by recalculation to update
system lines ("Subtotal", "Total", ...) in place.
"""

import logging
import uuid
from typing import Callable, List, Optional, Sequence

from ..models import FooterLine, normalize_label

logger = logging.getLogger(__name__)

IdFactory = Callable[[], str]


def new_line_id() -> str:
    """Default id generator for footer lines."""
    return uuid.uuid4().hex


def make_footer_line(label: str, value: str, id_factory: Optional[IdFactory] = None) -> FooterLine:
    return FooterLine(id=(id_factory or new_line_id)(), label=label, value=value)


def find_line_index(lines: Sequence[FooterLine], label: str) -> int:
    """Index of the first line whose normalized label matches, or -1."""
    wanted = normalize_label(label)
    for idx, line in enumerate(lines):
        if normalize_label(line.label) == wanted:
            return idx
    return -1


def find_line(lines: Sequence[FooterLine], label: str) -> Optional[FooterLine]:
    idx = find_line_index(lines, label)
    return lines[idx] if idx != -1 else None


def upsert(
    lines: Sequence[FooterLine],
    label: str,
    value: str,
    id_factory: Optional[IdFactory] = None,
) -> List[FooterLine]:
    """
    Updates the value of the line matching ``label``, or appends a new line.

    On update the stored label, id and position are kept; only ``value``
    changes. On insert the label is stored exactly as given.

    Args:
        lines: Current footer lines (not modified).
        label: Label to match, compared case- and whitespace-insensitively.
        value: New value text.
        id_factory: Generator for the id of an inserted line.

    Returns:
        A new list of footer lines.
    """
    result = list(lines)
    idx = find_line_index(result, label)
    if idx != -1:
        result[idx] = result[idx].model_copy(update={"value": value})
        return result

    logger.debug(f"Footer line '{label}' not present, appending it")
    result.append(make_footer_line(label, value, id_factory))
    return result
