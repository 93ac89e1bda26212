"""Per-rule tests: each rule's contribution, its edges, and malformed-field degradation."""

import pytest

from src.models import Item, Receipt
from src.scoring import compute_points, score_breakdown


def make_receipt(
    retailer: str = "",
    total: str = "0.10",
    purchase_date: str = "2023-03-10",
    purchase_time: str = "10:00",
    items: tuple = (),
) -> Receipt:
    """Defaults score 0 on every rule so each test isolates one rule."""
    return Receipt(
        retailer=retailer,
        purchase_date=purchase_date,
        purchase_time=purchase_time,
        total=total,
        items=tuple(Item(short_description=d, price=p) for d, p in items),
    )


def test_neutral_receipt_scores_zero():
    assert compute_points(make_receipt()) == 0


@pytest.mark.parametrize(
    "retailer,expected",
    [
        ("Target", 6),
        ("M&M Corner Market", 14),
        ("   ", 0),
        ("Café 7-Eleven", 10),
    ],
)
def test_retailer_alphanumeric_characters(retailer, expected):
    assert score_breakdown(make_receipt(retailer=retailer))["retailer_name"] == expected


def test_round_total_triggers_round_and_quarter_rules():
    b = score_breakdown(make_receipt(total="25.00"))
    assert b["round_dollar_total"] == 50
    assert b["quarter_multiple_total"] == 25


def test_non_quarter_total_triggers_neither():
    b = score_breakdown(make_receipt(total="25.10"))
    assert b["round_dollar_total"] == 0
    assert b["quarter_multiple_total"] == 0


def test_quarter_but_not_round_total():
    b = score_breakdown(make_receipt(total="9.75"))
    assert b["round_dollar_total"] == 0
    assert b["quarter_multiple_total"] == 25


def test_zero_total_is_round_and_quarter_multiple():
    b = score_breakdown(make_receipt(total="0.00"))
    assert b["round_dollar_total"] == 50
    assert b["quarter_multiple_total"] == 25
    assert b["total_over_ten"] == 0


@pytest.mark.parametrize("total", ["0.30", "0.70", "1.10", "35.35"])
def test_quarter_check_has_no_float_rounding_error(total):
    assert score_breakdown(make_receipt(total=total))["quarter_multiple_total"] == 0


@pytest.mark.parametrize(
    "count,expected",
    [(0, 0), (1, 0), (2, 5), (3, 5), (4, 10), (5, 10)],
)
def test_item_pairs(count, expected):
    items = tuple(("Item", "1.00") for _ in range(count))
    assert score_breakdown(make_receipt(items=items))["item_pairs"] == expected


def test_description_multiple_of_three_rounds_up():
    # 12.25 * 0.2 = 2.45 -> 3
    b = score_breakdown(make_receipt(items=(("Emils Cheese Pizza", "12.25"),)))
    assert b["item_descriptions"] == 3


def test_description_is_trimmed_before_length_check():
    b = score_breakdown(make_receipt(items=(("   Klarbrunn 12-PK 12 FL OZ  ", "12.00"),)))
    assert b["item_descriptions"] == 3


def test_description_exact_product_is_not_rounded_up():
    # 15.00 * 0.2 is exactly 3; binary floating point would give 3.0000000000000004
    b = score_breakdown(make_receipt(items=(("Pen", "15.00"),)))
    assert b["item_descriptions"] == 3


@pytest.mark.parametrize("description", ["Book", "", "   ", "Mountain Dew 12PK"])
def test_description_not_positive_multiple_of_three(description):
    b = score_breakdown(make_receipt(items=((description, "10.00"),)))
    assert b["item_descriptions"] == 0


def test_unparseable_price_skips_only_that_item():
    items = (("Pen", "abc"), ("Cup", "5.00"))
    b = score_breakdown(make_receipt(items=items))
    assert b["item_descriptions"] == 1
    assert b["item_pairs"] == 5


@pytest.mark.parametrize("total,expected", [("10.00", 0), ("10.01", 5), ("35.35", 5), ("9.99", 0)])
def test_total_over_ten(total, expected):
    assert score_breakdown(make_receipt(total=total))["total_over_ten"] == expected


@pytest.mark.parametrize(
    "purchase_date,expected",
    [
        ("2023-03-11", 6),
        ("2023-03-10", 0),
        ("2022-01-01", 6),
        ("2023/03/11", 0),
        ("2023-03", 0),
        ("2023-03-11-01", 0),
        ("2023-03-xx", 0),
        ("", 0),
    ],
)
def test_odd_purchase_day(purchase_date, expected):
    assert score_breakdown(make_receipt(purchase_date=purchase_date))["odd_purchase_day"] == expected


@pytest.mark.parametrize(
    "purchase_time,expected",
    [
        ("15:00", 10),
        ("14:01", 10),
        ("15:59", 10),
        ("14:00", 0),
        ("16:00", 0),
        ("13:01", 0),
        ("25:00", 0),
        ("14:60", 0),
        ("3:00 PM", 0),
        ("", 0),
    ],
)
def test_afternoon_purchase(purchase_time, expected):
    assert score_breakdown(make_receipt(purchase_time=purchase_time))["afternoon_purchase"] == expected


@pytest.mark.parametrize("total", ["abc", "", "-5.00", "1e3", "NaN", "Infinity", "35.35\n", "٣٥.٠٠"])
def test_malformed_total_contributes_zero(total):
    receipt = make_receipt(retailer="Shop", total=total, items=(("Pen", "3.25"), ("Cup", "1.00")))
    b = score_breakdown(receipt)
    assert b["round_dollar_total"] == 0
    assert b["quarter_multiple_total"] == 0
    assert b["total_over_ten"] == 0
    # Other rules still score.
    assert compute_points(receipt) == 4 + 5 + 1 + 1


def test_breakdown_sums_to_points():
    receipt = make_receipt(
        retailer="Amazon",
        total="45.75",
        purchase_date="2023-03-11",
        purchase_time="15:30",
        items=(("Book", "12.00"), ("Pen", "3.25")),
    )
    b = score_breakdown(receipt)
    assert sum(b.values()) == compute_points(receipt) == 58


@pytest.mark.parametrize(
    "total,rule,expected",
    [
        (".50", "quarter_multiple_total", 25),
        (".50", "round_dollar_total", 0),
        ("35.", "round_dollar_total", 50),
        ("35.", "quarter_multiple_total", 25),
        ("10.000000001", "total_over_ten", 5),
        ("10.000000001", "round_dollar_total", 0),
        ("25.000000000000000000000000000000", "round_dollar_total", 50),
        ("1" * 40 + ".25", "quarter_multiple_total", 25),
        ("1" * 40 + ".25", "round_dollar_total", 0),
        ("0." + "0" * 60 + "1", "quarter_multiple_total", 0),
    ],
)
def test_total_accepts_any_plain_decimal_form(total, rule, expected):
    assert score_breakdown(make_receipt(total=total))[rule] == expected


@pytest.mark.parametrize(
    "price,expected",
    [
        (".50", 1),
        ("15.", 3),
        ("15.000000001", 4),
        ("5" * 40 + ".00", int("1" + "1" * 39)),
    ],
)
def test_price_accepts_any_plain_decimal_form(price, expected):
    assert score_breakdown(make_receipt(items=(("Pen", price),)))["item_descriptions"] == expected


@pytest.mark.parametrize("amount", [".", "", "1.2.3", "+1.00", " 1.00"])
def test_amount_without_plain_digits_is_unparseable(amount):
    b = score_breakdown(make_receipt(total=amount, items=(("Pen", amount),)))
    assert b["round_dollar_total"] == 0
    assert b["quarter_multiple_total"] == 0
    assert b["item_descriptions"] == 0


@pytest.mark.parametrize("value", [None, 42, 3.5, ["Pen"]])
def test_non_text_retailer_and_description_score_zero(value):
    receipt = make_receipt(retailer=value, items=((value, "10.00"), ("Pen", "10.00")))
    b = score_breakdown(receipt)
    assert b["retailer_name"] == 0
    assert b["item_descriptions"] == 2
    assert b["item_pairs"] == 5
    assert compute_points(receipt) == 7
