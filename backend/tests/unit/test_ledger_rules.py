"""
Unit tests for subscription ledger rules and price handling.
"""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from app.domain.subscription import (
    PlanName,
    cycle_days_for,
    ensure_utc,
    format_price,
    is_active_for_business,
    parse_price,
    period_end,
)


NOW = datetime(2026, 6, 15, tzinfo=timezone.utc)


class TestPrices:

    def test_parse_is_numeric_not_lexicographic(self):
        assert parse_price("10") > parse_price("9")

    def test_parse_rejects_garbage(self):
        with pytest.raises(ValueError):
            parse_price("ten dollars")

    @pytest.mark.parametrize("value,expected", [
        (Decimal("50"), "50"),
        (Decimal("50.50"), "50.5"),
        (Decimal("100.00"), "100"),
        (Decimal("0.10"), "0.1"),
    ])
    def test_format_price(self, value, expected):
        assert format_price(value) == expected


class TestCycles:

    def test_month_and_year_lengths(self):
        assert cycle_days_for(PlanName.MONTH.value) == 30
        assert cycle_days_for(PlanName.YEAR.value) == 365

    def test_every_plan_name_has_a_cycle(self):
        assert {cycle_days_for(name.value) for name in PlanName} == {30, 365}

    def test_unknown_plan_name_rejected(self):
        with pytest.raises(ValueError):
            cycle_days_for("week")

    def test_period_end_for_naive_activation(self):
        activated = NOW.replace(tzinfo=None)
        assert period_end(activated, "month") == NOW + timedelta(days=30)

    def test_ensure_utc_converts_other_offsets(self):
        plus_two = timezone(timedelta(hours=2))
        moment = datetime(2026, 6, 15, 2, 0, tzinfo=plus_two)
        assert ensure_utc(moment) == NOW
        assert ensure_utc(moment).tzinfo == timezone.utc


class TestActiveForBusiness:
    """Active flag AND paid latest order AND period not elapsed."""

    def test_paid_within_period(self):
        assert is_active_for_business(True, NOW - timedelta(days=5), "month", NOW)

    def test_flag_off(self):
        assert not is_active_for_business(False, NOW - timedelta(days=5), "month", NOW)

    def test_unpaid(self):
        assert not is_active_for_business(True, None, "month", NOW)

    def test_monthly_period_elapsed(self):
        assert not is_active_for_business(True, NOW - timedelta(days=31), "month", NOW)

    def test_yearly_period_still_running(self):
        assert is_active_for_business(True, NOW - timedelta(days=31), "year", NOW)
