"""
Utility functions for safe access into raw provider JSON.
"""

import logging
import math
import re
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

logger = logging.getLogger(__name__)

CURRENCY_SYMBOLS = ["$", "£", "€", "USD", "EUR", "GBP", "AUD", "NZD", "CAD"]


def safe_get(data: Any, key: str, default: Any = None) -> Any:
    """
    Safely get value from dict, handling None values.

    Args:
        data: Dictionary or anything else
        key: Key to retrieve
        default: Default value if key missing or value is None

    Returns:
        Value from dict, or default if missing/None
    """
    if not isinstance(data, dict):
        return default

    value = data.get(key, default)
    return default if value is None else value


def safe_list_get(data: Any, index: int, default: Any = None) -> Any:
    """
    Safely get item from list by index.

    Returns:
        Item at index, or default if out of range or not a list
    """
    if not isinstance(data, list) or not data:
        return default

    return data[index] if -len(data) <= index < len(data) else default


def parse_amount(value: Any) -> Optional[float]:
    """
    Parse a report cell value into a float.

    Handles:
    - numbers and numeric strings: "1500.25" -> 1500.25
    - currency symbols and thousands separators: "$1,234.56" -> 1234.56
    - parentheses for negatives: "(500.00)" -> -500.0
    - dashes and blanks: "-", "" -> None

    Returns:
        Float value, or None when the value is missing or not a number
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, (int, float, Decimal)):
        result = float(value)
        return result if math.isfinite(result) else None

    if not isinstance(value, str):
        return None

    value_str = value.strip()
    if not value_str or value_str in ("-", "—", "–"):
        return None

    for symbol in CURRENCY_SYMBOLS:
        value_str = value_str.replace(symbol, "").strip()

    if value_str.startswith("(") and value_str.endswith(")"):
        value_str = "-" + value_str[1:-1].strip()

    if re.search(r"\d{1,3}(,\d{3})+(\.\d+)?$", value_str):
        value_str = value_str.replace(",", "")

    try:
        result = float(Decimal(value_str))
    except (InvalidOperation, ValueError):
        logger.debug("Unparsable amount %r treated as missing", value)
        return None

    return result if math.isfinite(result) else None
