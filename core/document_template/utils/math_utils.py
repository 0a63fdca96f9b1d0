"""
Math Utilities

Tolerant conversion of user-typed values (plain numbers, currency strings,
half-typed input) into floats, plus the fixed-point formatting used for
row totals and footer lines.
"""

import logging
import math
import re
from typing import Any

logger = logging.getLogger(__name__)

# Everything except ASCII digits, the decimal point and the minus sign.
_NON_NUMERIC_CHARS = re.compile(r"[^0-9.\-]")
# Leading float literal of the cleaned text; trailing garbage is ignored.
_LEADING_FLOAT = re.compile(r"^-?(?:[0-9]+\.?[0-9]*|\.[0-9]+)")


def parse_number(value: Any) -> float:
    """
    Converts a raw field value to a float, never raising.

    Handles:
    - None, booleans, ints and floats (NaN becomes 0)
    - Currency strings like "$1,234.56" (every character other than a digit,
      "." or "-" is stripped before parsing)
    - Partially typed input such as "12." or "1.2.3" (leading number wins)

    Args:
        value: The raw cell or footer value.

    Returns:
        The parsed float, or 0.0 if nothing numeric could be read.
    """
    if value is None:
        return 0.0

    if isinstance(value, str):
        cleaned = _NON_NUMERIC_CHARS.sub("", value)
        match = _LEADING_FLOAT.match(cleaned)
        if not match:
            return 0.0
        return float(match.group(0))

    try:
        number = float(value)
    except (TypeError, ValueError):
        logger.debug(f"Could not coerce {type(value).__name__} value to a number, using 0")
        return 0.0

    if math.isnan(number):
        return 0.0
    return number


def format_fixed(value: float, digits: int = 2) -> str:
    """Formats a number with a fixed number of decimals. Negative zero prints as "0.00"."""
    if value == 0:
        value = 0.0
    return f"{value:.{digits}f}"


def format_plain_number(value: float) -> str:
    """Formats a count without a trailing ".0" when it is whole (13.0 -> "13")."""
    if math.isfinite(value) and float(value).is_integer():
        return str(int(value))
    return repr(float(value))
