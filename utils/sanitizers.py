"""
Input sanitization utilities for uploads and policy knobs.
"""
import math
import re
import os
import logging
from typing import Any, Optional, Union

logger = logging.getLogger(__name__)

Number = Union[int, float]


def sanitize_filename(filename: str) -> str:
    """
    Sanitize filename to prevent path traversal and injections.

    Args:
        filename: Original filename

    Returns:
        Sanitized filename
    """
    # Base name only, drop any path components
    filename = os.path.basename(filename or "")

    filename = re.sub(r'[^\w\s\-\.]', '', filename)
    filename = filename.strip('. ')

    if len(filename) > 100:
        name, ext = os.path.splitext(filename)
        filename = name[:90] + ext

    if not filename:
        filename = "unnamed_resume.txt"

    return filename


def sanitize_text(text: str) -> str:
    """
    Strip script content and control characters from uploaded resume text.

    Line breaks and tabs are kept so section headings survive.

    Args:
        text: Input text

    Returns:
        Sanitized text
    """
    if not text:
        return ""

    text = re.sub(r'<script.*?</script>', '', text, flags=re.IGNORECASE | re.DOTALL)
    text = re.sub(r'javascript:', '', text, flags=re.IGNORECASE)
    text = text.replace('\r\n', '\n').replace('\r', '\n')
    text = ''.join(char for char in text if char.isprintable() or char in '\n\t')

    return text


def coerce_number(
    value: Any,
    default: Number,
    minimum: Optional[Number] = None,
    maximum: Optional[Number] = None,
    integer: bool = False
) -> Number:
    """
    Coerce a raw configuration value into a valid number.

    Non-numeric, NaN and infinite input falls back to ``default``;
    out-of-range input is clamped to the nearest bound.

    Args:
        value: Raw value (number, numeric string, None, ...)
        default: Value used when ``value`` is not numeric
        minimum: Lower bound (inclusive), or None
        maximum: Upper bound (inclusive), or None
        integer: Round the result to an int

    Returns:
        Coerced number
    """
    if isinstance(value, str) and re.fullmatch(r'[+-]?\d+', value.strip()):
        try:
            value = int(value.strip())
        except ValueError:
            # Exceeds the interpreter's integer string conversion limit
            pass

    if isinstance(value, bool):
        number = default
    else:
        if isinstance(value, int):
            # Clamp before float() so huge integers cannot overflow
            if minimum is not None and value < minimum:
                value = minimum
            if maximum is not None and value > maximum:
                value = maximum
        try:
            number = float(str(value).strip()) if isinstance(value, str) else float(value)
        except OverflowError:
            logger.warning(f"Configuration value out of float range, using {default}")
            number = default
        except (TypeError, ValueError):
            logger.warning(f"Non-numeric configuration value {value!r}, using {default}")
            number = default

    if math.isnan(number) or math.isinf(number):
        logger.warning(f"Non-finite configuration value {value!r}, using {default}")
        number = default

    if minimum is not None and number < minimum:
        number = minimum
    if maximum is not None and number > maximum:
        number = maximum

    if integer:
        return int(round(number))
    return float(number)
