from datetime import date, datetime
from decimal import Decimal

import pytest

from roastery.errors import ValidationError
from roastery.services.pricing import calculate_totals, line_subtotal
from roastery.time_utils import day_bounds, parse_display_date, to_display_date
from roastery.validation import (
    parse_choice,
    parse_id,
    parse_money,
    parse_percentage,
    parse_quantity,
    require_fields,
    to_money,
)


class TestCalculateTotals:

    @pytest.mark.parametrize("subtotal,pct,discount,total", [
        ("15.00", "10", "1.50", "13.50"),
        ("80.00", "25", "20.00", "60.00"),
        ("33.33", "15", "5.00", "28.33"),
        ("0.10", "5", "0.01", "0.09"),
        ("19.99", "0", "0.00", "19.99"),
        ("19.99", "100", "19.99", "0.00"),
    ])
    def test_known_values(self, subtotal, pct, discount, total):
        totals = calculate_totals(Decimal(subtotal), Decimal(pct))
        assert totals.discount_amount == Decimal(discount)
        assert totals.total_amount == Decimal(total)
        assert totals.subtotal - totals.discount_amount == totals.total_amount

    def test_half_cent_rounds_up(self):
        # 2.50 * 1% = 0.025
        assert calculate_totals(Decimal("2.50"), Decimal("1")).discount_amount == Decimal("0.03")

    def test_line_subtotal(self):
        assert line_subtotal(Decimal("2.35"), 3) == Decimal("7.05")


class TestParsers:

    @pytest.mark.parametrize("value,expected", [(7, 7), ("12", 12), (" 3 ", 3)])
    def test_parse_id_accepts(self, value, expected):
        assert parse_id(value, "product") == expected

    @pytest.mark.parametrize("value", [None, "", "abc", 0, -2, "1.5", "1e2", True, 2.0])
    def test_parse_id_rejects(self, value):
        with pytest.raises(ValidationError, match="Invalid product ID"):
            parse_id(value, "product")

    def test_parse_quantity(self):
        assert parse_quantity("4") == 4
        assert parse_quantity(0, allow_zero=True) == 0
        with pytest.raises(ValidationError, match="> 0"):
            parse_quantity(0)
        with pytest.raises(ValidationError, match=">= 0"):
            parse_quantity(-1, allow_zero=True)

    def test_parse_money(self):
        assert parse_money("4.005", "price") == Decimal("4.01")
        assert parse_money(3, "price") == Decimal("3.00")
        with pytest.raises(ValidationError, match="cannot exceed"):
            parse_money("100000000", "price")
        with pytest.raises(ValidationError, match="must be a number"):
            parse_money("NaN", "price")

    @pytest.mark.parametrize("value", [0, "0", 100, "12.5", Decimal("99.99")])
    def test_parse_percentage_accepts(self, value):
        assert Decimal("0") <= parse_percentage(value) <= Decimal("100")

    @pytest.mark.parametrize("value,message", [
        (None, "Invalid discount percentage"),
        ("ten", "Invalid discount percentage"),
        (-1, "between 0 and 100"),
        ("100.01", "between 0 and 100"),
    ])
    def test_parse_percentage_rejects(self, value, message):
        with pytest.raises(ValidationError, match=message):
            parse_percentage(value)

    def test_require_fields_lists_every_missing_field(self):
        with pytest.raises(ValidationError, match="Missing required fields: a, c"):
            require_fields({"a": " ", "b": 1}, ("a", "b", "c"))

    def test_parse_choice(self):
        assert parse_choice(" available ", "status", ("available", "not available")) == "available"
        with pytest.raises(ValidationError, match="status must be one of"):
            parse_choice("gone", "status", ("available", "not available"))

    def test_to_money(self):
        assert to_money(None) == Decimal("0.00")
        assert to_money(2.675) == Decimal("2.68")
        assert to_money(Decimal("1")) == Decimal("1.00")


class TestDisplayDates:

    def test_round_trip_format(self):
        assert parse_display_date("05/03/2024") == date(2024, 3, 5)
        assert to_display_date(datetime(2024, 3, 5, 17, 45)) == "05/03/2024"

    def test_blank_is_none(self):
        assert parse_display_date(None) is None
        assert parse_display_date("") is None
        assert to_display_date(None) is None

    @pytest.mark.parametrize("value", [
        "2024-03-05", "5/3/2024", "31/04/2024", "05/03/2024x",
        "  ", " 05/03/2024", "05/03/2024\n",
    ])
    def test_invalid(self, value):
        with pytest.raises(ValueError):
            parse_display_date(value)

    def test_day_bounds_are_half_open(self):
        lower, upper = day_bounds(date(2024, 1, 31), date(2024, 1, 31))
        assert lower == datetime(2024, 1, 31)
        assert upper == datetime(2024, 2, 1)
