"""Deterministic points engine. Pure code: same receipt in, same points out."""

import string
from decimal import MAX_EMAX, MIN_EMIN, ROUND_CEILING, Decimal, getcontext, localcontext

from src.models import Receipt
from src.scoring.parsing import parse_amount, parse_clock_minutes, parse_day_of_month

ALPHANUMERIC = frozenset(string.ascii_letters + string.digits)

ROUND_DOLLAR_POINTS = 50
QUARTER_MULTIPLE_POINTS = 25
POINTS_PER_ITEM_PAIR = 5
DESCRIPTION_PRICE_MULTIPLIER = Decimal("0.2")
TOTAL_OVER_TEN_POINTS = 5
TOTAL_THRESHOLD = Decimal("10.00")
ODD_DAY_POINTS = 6
AFTERNOON_POINTS = 10
AFTERNOON_START = 14 * 60  # exclusive
AFTERNOON_END = 16 * 60  # exclusive

QUARTER = Decimal("0.25")


def _exact_context(value: Decimal):
    """
    Decimal context wide enough that %, * and ceil on `value` are exact.
    Remainders by 1 or 0.25 and products with 0.2 need at most a couple of
    digits beyond the value's own.
    """
    ctx = getcontext().copy()
    ctx.prec = max(ctx.prec, len(value.as_tuple().digits) + 10)
    ctx.Emax = MAX_EMAX
    ctx.Emin = MIN_EMIN
    return localcontext(ctx)


def retailer_name_points(receipt: Receipt) -> int:
    if not isinstance(receipt.retailer, str):
        return 0
    return sum(1 for ch in receipt.retailer if ch in ALPHANUMERIC)


def round_dollar_points(receipt: Receipt) -> int:
    total = parse_amount(receipt.total)
    if total is None:
        return 0
    with _exact_context(total):
        return ROUND_DOLLAR_POINTS if total % 1 == 0 else 0


def quarter_multiple_points(receipt: Receipt) -> int:
    total = parse_amount(receipt.total)
    if total is None:
        return 0
    with _exact_context(total):
        return QUARTER_MULTIPLE_POINTS if total % QUARTER == 0 else 0


def item_pair_points(receipt: Receipt) -> int:
    return (len(receipt.items) // 2) * POINTS_PER_ITEM_PAIR


def item_description_points(receipt: Receipt) -> int:
    """
    For each item whose trimmed description length is a positive multiple of 3,
    award ceil(price * 0.2). Items with a non-text description or an
    unparseable price award nothing.
    """
    points = 0
    for item in receipt.items:
        if not isinstance(item.short_description, str):
            continue
        length = len(item.short_description.strip())
        if length == 0 or length % 3 != 0:
            continue
        price = parse_amount(item.price)
        if price is None:
            continue
        with _exact_context(price):
            points += int((price * DESCRIPTION_PRICE_MULTIPLIER).to_integral_value(rounding=ROUND_CEILING))
    return points


def total_over_ten_points(receipt: Receipt) -> int:
    total = parse_amount(receipt.total)
    if total is None:
        return 0
    return TOTAL_OVER_TEN_POINTS if total > TOTAL_THRESHOLD else 0


def odd_day_points(receipt: Receipt) -> int:
    day = parse_day_of_month(receipt.purchase_date)
    if day is None:
        return 0
    return ODD_DAY_POINTS if day % 2 == 1 else 0


def afternoon_points(receipt: Receipt) -> int:
    minutes = parse_clock_minutes(receipt.purchase_time)
    if minutes is None:
        return 0
    return AFTERNOON_POINTS if AFTERNOON_START < minutes < AFTERNOON_END else 0


# Rule name -> rule. Rules are independent; order only affects breakdown display.
RULES = {
    "retailer_name": retailer_name_points,
    "round_dollar_total": round_dollar_points,
    "quarter_multiple_total": quarter_multiple_points,
    "item_pairs": item_pair_points,
    "item_descriptions": item_description_points,
    "total_over_ten": total_over_ten_points,
    "odd_purchase_day": odd_day_points,
    "afternoon_purchase": afternoon_points,
}


def score_breakdown(receipt: Receipt) -> dict[str, int]:
    """Points contributed by each rule, keyed by rule name."""
    return {name: rule(receipt) for name, rule in RULES.items()}


def compute_points(receipt: Receipt) -> int:
    """
    Total reward points for a receipt: the sum of every rule's contribution.
    Never raises for malformed amount/date/time fields; the affected rule
    contributes 0 instead.
    """
    return sum(score_breakdown(receipt).values())
