"""
Coercion helpers for song fields coming from JSON bodies and seed files.
"""

import re

LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def coerce_key(value):
    """Key offset in seconds as an int, 0 when it cannot be parsed.

    Strings are read like a leading integer: "7abc" -> 7, "3.9" -> 3, "abc" -> 0.
    """
    if isinstance(value, bool) or value is None:
        return 0
    if isinstance(value, (int, float)):
        try:
            return int(value)
        except (ValueError, OverflowError):
            return 0

    match = LEADING_INT.match(str(value))
    return int(match.group(1)) if match else 0
