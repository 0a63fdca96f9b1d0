# Text helpers for header fields written into the exported sheet.

import datetime
import logging
from typing import Any, Optional

from openpyxl.cell import Cell
# The python-dateutil library is required for free-form date parsing.
from dateutil.parser import parse, ParserError

from ..styling.style_config import FORMAT_DATE

logger = logging.getLogger(__name__)

# Two defaults that differ in every date field: a part missing from the text
# shows up as a difference between the two parses.
_DEFAULT_A = datetime.datetime(2000, 1, 1)
_DEFAULT_B = datetime.datetime(2001, 2, 2)


def parse_header_date(value: Any) -> Optional[datetime.datetime]:
    """
    Parses a user-typed date (day-first, like the rest of the header).

    Returns None unless day, month and year all come from the text itself, so
    partial input such as "12", "3/4" or "March" is never completed with
    today's parts.
    """
    if isinstance(value, datetime.datetime):
        return value
    if isinstance(value, datetime.date):
        return datetime.datetime(value.year, value.month, value.day)
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        first = parse(value, dayfirst=True, default=_DEFAULT_A)
        second = parse(value, dayfirst=True, default=_DEFAULT_B)
    except (ParserError, ValueError, OverflowError):
        logger.debug(f"Header date '{value}' is not a recognizable date, keeping the text")
        return None
    if first.date() != second.date():
        logger.debug(f"Header date '{value}' is incomplete, keeping the text")
        return None
    return first


def write_date_cell(cell: Cell, value: Any) -> None:
    """Writes a real date when the value is a complete date, otherwise the raw text."""
    parsed = parse_header_date(value)
    if parsed:
        cell.value = parsed
        cell.number_format = FORMAT_DATE
    else:
        cell.value = value
