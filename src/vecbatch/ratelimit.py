"""Parsing for the provider's rate-limit reset headers.

The provider reports how long to wait after a 429 as a compact duration string
such as ``6m10s``, ``500ms`` or ``1.5s``. The format is not ISO 8601 and not
Go's ``time.ParseDuration`` either, so it gets a small dedicated scanner.
"""

from __future__ import annotations

from datetime import timedelta
import logging
import math
from typing import Mapping

logger = logging.getLogger(__name__)

RESET_REQUESTS_HEADER = "x-ratelimit-reset-requests"
RESET_TOKENS_HEADER = "x-ratelimit-reset-tokens"
RESET_HEADERS = (RESET_REQUESTS_HEADER, RESET_TOKENS_HEADER)

_UNITS: dict[str, timedelta] = {
    "h": timedelta(hours=1),
    "m": timedelta(minutes=1),
    "s": timedelta(seconds=1),
    "ms": timedelta(milliseconds=1),
}


def parse_ratelimit_duration(value: str | None) -> timedelta | None:
    """Parse a reset header value into a duration.

    Returns ``None`` when no non-zero duration can be determined. An unknown
    unit drops only the number in front of it, and so does any punctuation
    (``"1,5s"`` is 5 s, ``"-5s"`` is 5 s since signs are not part of the
    format). Whitespace is ignored. A malformed, non-finite or overflowing
    number means the value is not usable at all and nothing is returned.
    """
    if not value:
        return None

    total = timedelta(0)
    pending = ""
    index = 0
    length = len(value)
    try:
        while index < length:
            char = value[index]
            if char.isdigit() or char == ".":
                pending += char
            elif char.isalpha():
                if char == "m" and index + 1 < length and value[index + 1] == "s":
                    unit = "ms"
                    index += 1
                else:
                    unit = char
                if pending:
                    magnitude = _to_number(pending)
                    if magnitude is None:
                        return None
                    multiplier = _UNITS.get(unit)
                    if multiplier is None:
                        logger.warning("Ignoring %r in rate-limit duration %r: unknown unit %r", pending, value, unit)
                    else:
                        total += multiplier * magnitude
                    pending = ""
            elif not char.isspace():
                if pending:
                    logger.warning("Ignoring %r in rate-limit duration %r: followed by %r", pending, value, char)
                    pending = ""
            index += 1

        if pending:
            # Bare trailing number, read as seconds.
            magnitude = _to_number(pending)
            if magnitude is None:
                return None
            total += _UNITS["s"] * magnitude
    except OverflowError:
        logger.warning("Rate-limit duration %r is out of range", value)
        return None

    if total <= timedelta(0):
        return None
    return total


def retry_after_from_headers(headers: Mapping[str, str]) -> timedelta | None:
    """Return the wait hinted by the first reset header that parses."""
    for name in RESET_HEADERS:
        duration = parse_ratelimit_duration(headers.get(name))
        if duration is not None:
            return duration
    return None


def _to_number(text: str) -> float | None:
    try:
        number = float(text)
    except ValueError:
        return None
    if not math.isfinite(number):
        return None
    return number
