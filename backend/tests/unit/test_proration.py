"""
Unit tests for upgrade proration arithmetic.

No storage involved: prices, activation time and "now" are passed in.
"""

import math
from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from app.domain.proration import (
    prorate_upgrade,
    remaining_days,
    whole_days_between,
)


START = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


class TestWholeDays:
    """whole_days_between truncates toward zero in both directions."""

    def test_partial_day_truncates_down(self):
        assert whole_days_between(START + timedelta(days=3, hours=23), START) == 3

    def test_negative_partial_day_truncates_up(self):
        assert whole_days_between(START - timedelta(days=3, hours=23), START) == -3

    def test_naive_timestamps_treated_as_utc(self):
        naive = START.replace(tzinfo=None) + timedelta(days=2)
        assert whole_days_between(naive, START) == 2


class TestRemainingDays:

    def test_just_activated_has_almost_full_cycle(self):
        assert remaining_days(START, START + timedelta(seconds=1)) == 29

    def test_at_activation_instant(self):
        assert remaining_days(START, START) == 30

    def test_elapsed_cycle_is_negative(self):
        assert remaining_days(START, START + timedelta(days=35)) == -5

    def test_custom_cycle_length(self):
        assert remaining_days(START, START + timedelta(days=5), cycle_days=10) == 5


class TestProrateUpgrade:
    """Charge = ceil(price_delta / 30 * remaining_days)."""

    def test_full_cycle_charges_full_delta(self):
        charge = prorate_upgrade(Decimal("20"), Decimal("50"), START, START)
        assert charge == 30

    def test_ten_days_in(self):
        charge = prorate_upgrade(
            Decimal("20"), Decimal("50"), START, START + timedelta(days=10)
        )
        assert charge == 20

    def test_rounds_up_fractional_charge(self):
        # 10 / 30 * 29 = 9.666...
        charge = prorate_upgrade(
            Decimal("10"), Decimal("20"), START, START + timedelta(days=1)
        )
        assert charge == 10

    def test_exact_thirds_do_not_round_up(self):
        # 10 * 27 / 30 = 9 exactly
        charge = prorate_upgrade(
            Decimal("10"), Decimal("20"), START, START + timedelta(days=3)
        )
        assert charge == 9

    def test_decimal_prices(self):
        charge = prorate_upgrade(
            Decimal("19.99"), Decimal("49.99"), START, START + timedelta(days=15)
        )
        assert charge == 15

    def test_elapsed_cycle_gives_zero(self):
        charge = prorate_upgrade(
            Decimal("20"), Decimal("50"), START, START + timedelta(days=30, hours=5)
        )
        assert charge == 0

    def test_long_elapsed_cycle_gives_negative(self):
        charge = prorate_upgrade(
            Decimal("20"), Decimal("50"), START, START + timedelta(days=40)
        )
        assert charge == -10

    @staticmethod
    def charges_by_remaining_days(current, target):
        return [
            prorate_upgrade(
                Decimal(current), Decimal(target), START, START + timedelta(days=30 - d)
            )
            for d in range(1, 31)
        ]

    @pytest.mark.parametrize("current,target", [("20", "50"), ("9", "10"), ("0.5", "99.5")])
    def test_charge_never_shrinks_with_remaining_days(self, current, target):
        """Holding prices fixed, more remaining days never costs less."""
        charges = self.charges_by_remaining_days(current, target)
        assert charges == sorted(charges)
        assert all(c >= 0 for c in charges)

    @pytest.mark.parametrize("current,target", [("20", "50"), ("0.5", "99.5")])
    def test_charge_strictly_grows_when_gap_covers_cycle(self, current, target):
        """With a price gap of at least 30, every extra day costs more."""
        charges = self.charges_by_remaining_days(current, target)
        assert all(later > earlier for earlier, later in zip(charges, charges[1:]))

    def test_small_gap_charges_minimum_unit(self):
        """A gap of 1 rounds up to 1 for any remaining day in the cycle."""
        assert set(self.charges_by_remaining_days("9", "10")) == {1}

    def test_matches_float_formula_for_whole_prices(self):
        days = 17
        expected = math.ceil((50 - 20) / 30 * days)
        charge = prorate_upgrade(
            Decimal("20"), Decimal("50"), START, START + timedelta(days=30 - days)
        )
        assert charge == expected
