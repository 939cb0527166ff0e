"""Masked DD/MM/YYYY text entry."""

import logging
import re
from datetime import date
from typing import NamedTuple, Optional

from .calendar_math import CalendarDate

logger = logging.getLogger(__name__)

MASKED_LENGTH = len("DD/MM/YYYY")

_NON_DIGITS = re.compile(r"[^0-9]")


class ParseResult(NamedTuple):
    """Outcome of feeding raw input through the mask."""

    text: str
    date: Optional[CalendarDate]


def mask_input(raw: str) -> str:
    """Format raw keystrokes as DD/MM/YYYY.

    Every non-digit is dropped and separators are inserted after the second
    and fourth digits. Extra digits are kept, so the result can be longer
    than the mask and will then never resolve to a date.

    Args:
        raw: Accumulated text from the input field

    Returns:
        Masked display text
    """
    digits = _NON_DIGITS.sub("", raw or "")
    if len(digits) > 4:
        return f"{digits[:2]}/{digits[2:4]}/{digits[4:]}"
    if len(digits) > 2:
        return f"{digits[:2]}/{digits[2:]}"
    return digits


def parse_masked(text: str) -> Optional[CalendarDate]:
    """Resolve complete masked text to a calendar date.

    Args:
        text: Masked DD/MM/YYYY text

    Returns:
        The date, or None when the text is incomplete or names a day that
        does not exist (for example 30/02/2026)
    """
    if len(text) != MASKED_LENGTH:
        return None

    try:
        day, month, year = (int(part, 10) for part in text.split("/"))
        candidate = date(year, month, day)
    except ValueError:
        logger.debug(f"Rejected calendar-invalid input: {text!r}")
        return None

    return candidate


def parse_input(raw: str) -> ParseResult:
    """Mask raw input and try to resolve it.

    Args:
        raw: Accumulated text from the input field

    Returns:
        ParseResult with the masked text and the resolved date, if any
    """
    text = mask_input(raw)
    return ParseResult(text, parse_masked(text))
