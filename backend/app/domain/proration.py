"""
Plan upgrade proration.

Pure arithmetic, no storage access: the caller supplies the prices, the
activation timestamp of the paid order and the current instant.
"""

import math
from datetime import datetime, timedelta
from decimal import Decimal

from app.domain.subscription import ensure_utc


DEFAULT_CYCLE_DAYS = 30


def whole_days_between(later: datetime, earlier: datetime) -> int:
    """Whole days from ``earlier`` to ``later``, truncated toward zero."""
    return int((ensure_utc(later) - ensure_utc(earlier)) / timedelta(days=1))


def remaining_days(
    activated_at: datetime,
    now: datetime,
    cycle_days: int = DEFAULT_CYCLE_DAYS,
) -> int:
    """
    Days left in the paid cycle that started at ``activated_at``.

    Zero or negative once the cycle has elapsed.
    """
    cycle_end = ensure_utc(activated_at) + timedelta(days=cycle_days)
    return whole_days_between(cycle_end, now)


def prorate_upgrade(
    current_price: Decimal,
    target_price: Decimal,
    activated_at: datetime,
    now: datetime,
    cycle_days: int = DEFAULT_CYCLE_DAYS,
) -> int:
    """
    Charge for switching from ``current_price`` to ``target_price`` now.

    ``ceil(price_delta / cycle_days * remaining_days)``, computed in
    Decimal with the multiplication first so no rounding happens before
    the final ceiling. An elapsed cycle is not rejected: it yields a zero
    or negative charge.

    Example: 20 -> 50 upgraded ten days into a 30-day cycle costs
    ceil(30 * 20 / 30) = 20.
    """
    days = remaining_days(activated_at, now, cycle_days)
    price_delta = target_price - current_price
    return math.ceil(price_delta * days / cycle_days)
