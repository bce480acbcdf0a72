"""Forgiving numeric parsing for live-typed form fields

Fields are edited keystroke by keystroke, so half-typed values like "", "-"
or "1e" are normal. They resolve to a default instead of raising.
"""

import logging
import math
from typing import Optional

from .errors import InvalidNumericInput

logger = logging.getLogger(__name__)


def to_float(raw) -> float:
    """Strictly convert a field value to a finite float

    Args:
        raw: str, int, float or None as delivered by the UI

    Returns:
        The parsed value

    Raises:
        InvalidNumericInput: empty, unparsable, NaN or infinite input
    """
    if raw is None or isinstance(raw, bool):
        raise InvalidNumericInput(raw)

    if isinstance(raw, str):
        raw_text = raw.strip()
        if not raw_text:
            raise InvalidNumericInput(raw)
        try:
            value = float(raw_text)
        except ValueError:
            raise InvalidNumericInput(raw) from None
    else:
        try:
            value = float(raw)
        except (TypeError, ValueError):
            raise InvalidNumericInput(raw) from None

    if not math.isfinite(value):
        raise InvalidNumericInput(raw)
    return value


def parse_number(raw, default: float = 0.0) -> float:
    """Parse a field value, falling back to `default` on anything unreadable"""
    try:
        return to_float(raw)
    except InvalidNumericInput as e:
        logger.debug(f"{e}; using {default}")
        return default


def clamp(value: float, minimum: Optional[float] = None, maximum: Optional[float] = None) -> float:
    if minimum is not None and value < minimum:
        return minimum
    if maximum is not None and value > maximum:
        return maximum
    return value


def parse_bounded(raw, minimum: float, maximum: Optional[float] = None) -> float:
    """Parse a bounded parameter

    Unreadable input resolves to the lower boundary, readable input is
    clamped into [minimum, maximum].
    """
    return clamp(parse_number(raw, default=minimum), minimum, maximum)
