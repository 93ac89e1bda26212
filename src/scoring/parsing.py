"""Fallible field parsers for scoring. Each returns the parsed value or None."""

import logging
import re
from decimal import Decimal

log = logging.getLogger("receipt_processor.scoring")

# "35.35", "35", "35." and ".35"; at least one digit.
_AMOUNT_RE = re.compile(r"[0-9]+\.?[0-9]*|\.[0-9]+")
_CLOCK_RE = re.compile(r"([0-9]{1,2}):([0-9]{2})")


def parse_amount(text: str) -> Decimal | None:
    """
    Parse a decimal amount such as "35.35" into an exact Decimal.
    Signs, exponents, NaN/Infinity and anything that is not plain digits with
    an optional decimal point are rejected. No length limit: the engine sizes
    its decimal context to the value.
    """
    if not isinstance(text, str) or not _AMOUNT_RE.fullmatch(text):
        log.debug("Unparseable amount: %r", text)
        return None
    return Decimal(text)


def parse_day_of_month(purchase_date: str) -> int | None:
    """Day component of a YYYY-MM-DD date. None unless there are exactly three parts."""
    parts = purchase_date.split("-") if isinstance(purchase_date, str) else []
    if len(parts) != 3:
        log.debug("Unparseable purchase date: %r", purchase_date)
        return None
    day = parts[2]
    if not (day.isascii() and day.isdigit()):
        log.debug("Unparseable day of month in %r", purchase_date)
        return None
    return int(day)


def parse_clock_minutes(purchase_time: str) -> int | None:
    """Minutes since midnight for a 24-hour HH:MM time."""
    m = _CLOCK_RE.fullmatch(purchase_time) if isinstance(purchase_time, str) else None
    if not m:
        log.debug("Unparseable purchase time: %r", purchase_time)
        return None
    hours, minutes = int(m.group(1)), int(m.group(2))
    if hours > 23 or minutes > 59:
        log.debug("Out-of-range purchase time: %r", purchase_time)
        return None
    return hours * 60 + minutes
