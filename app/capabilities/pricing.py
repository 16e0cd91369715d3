# FILE: app/capabilities/pricing.py
"""Pricing value normalisation.

External sources hand us prices as numbers, as currency strings ("$0.02",
"$1,234.5", "0.02/image") or not at all. parse_pricing() turns all of those
into a float or None and never raises.
"""

from __future__ import annotations

import math
import re
from typing import Any, Optional

_STRIP_RE = re.compile(r"[$,\s]")

# Leading decimal number, read the way parseFloat reads it ("0.02/M" -> 0.02).
_LEADING_NUMBER_RE = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def parse_pricing(value: Any) -> Optional[float]:
    """Normalise a price to a float, or None when absent or unparseable."""
    if value is None:
        return None

    # bool is an int subclass but never a price
    if isinstance(value, bool):
        return None

    if isinstance(value, (int, float)):
        if isinstance(value, float) and not math.isfinite(value):
            return None
        return value

    if isinstance(value, str):
        cleaned = _STRIP_RE.sub("", value)
        match = _LEADING_NUMBER_RE.match(cleaned)
        if not match:
            return None
        try:
            parsed = float(match.group(0))
        except ValueError:
            return None
        return parsed if math.isfinite(parsed) else None

    return None
