"""
Subscription price arithmetic.

Daily plan prices are quoted VAT-inclusive. A period price is derived by
stripping VAT from the daily rate, extrapolating over a fixed day count
(30 for a month, 365 for a year) and then either re-adding VAT (monthly)
or taking the yearly discount off the subtotal (yearly).

The yearly path returns ``subtotal - discount`` without re-adding VAT.
That is the quoted customer price and must stay that way; see
``total_with_vat``.

Every function here is pure: no I/O, no shared state.
"""
from __future__ import annotations

import enum
from decimal import Decimal

from app.core.exceptions import InvalidBillingIntervalError

VAT_RATE_PERCENT = Decimal("15")
YEARLY_DISCOUNT_PERCENT = Decimal("20")

_HUNDRED = Decimal("100")
_ZERO = Decimal("0")


class BillingInterval(str, enum.Enum):
    """Recurring billing period."""
    MONTH = "month"
    YEAR = "year"

    @property
    def days(self) -> int:
        """Fixed day count; no calendar-aware month or year lengths."""
        return DAYS_PER_INTERVAL[self]


DAYS_PER_INTERVAL: dict[BillingInterval, int] = {
    BillingInterval.MONTH: 30,
    BillingInterval.YEAR: 365,
}

_INTERVAL_ALIASES = {
    "month": BillingInterval.MONTH,
    "monthly": BillingInterval.MONTH,
    "year": BillingInterval.YEAR,
    "yearly": BillingInterval.YEAR,
}


def parse_interval(value: str | BillingInterval) -> BillingInterval:
    """Accept ``month``/``year`` as well as ``monthly``/``yearly``.

    Raises:
        InvalidBillingIntervalError: for any other value
    """
    if isinstance(value, BillingInterval):
        return value
    interval = _INTERVAL_ALIASES.get(str(value).strip().lower())
    if interval is None:
        raise InvalidBillingIntervalError(str(value))
    return interval


def to_decimal(value: int | float | str | Decimal) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def subtotal(price_with_vat, vat_rate_percent=VAT_RATE_PERCENT) -> Decimal:
    """Remove VAT from a VAT-inclusive price: ``price / (1 + rate/100)``."""
    rate = to_decimal(vat_rate_percent) / _HUNDRED
    return to_decimal(price_with_vat) / (1 + rate)


def period_subtotal(daily_price_with_vat, interval: str | BillingInterval) -> Decimal:
    """VAT-exclusive cost of a full billing period."""
    interval = parse_interval(interval)
    daily_subtotal = subtotal(daily_price_with_vat, VAT_RATE_PERCENT)
    return daily_subtotal * interval.days


def yearly_discount_amount(daily_price_with_vat) -> Decimal:
    """Discount granted on the yearly period subtotal."""
    return period_subtotal(daily_price_with_vat, BillingInterval.YEAR) * (YEARLY_DISCOUNT_PERCENT / _HUNDRED)


def total_with_vat(daily_price_with_vat, interval: str | BillingInterval) -> Decimal:
    """Payable amount for one billing period.

    Monthly: ``subtotal + subtotal * 15%``, which recovers ``daily * 30``.
    Yearly: ``subtotal - subtotal * 20%``. VAT is deliberately not
    re-applied after the yearly discount.
    """
    interval = parse_interval(interval)
    period = period_subtotal(daily_price_with_vat, interval)
    if interval is BillingInterval.YEAR:
        discount = period * (YEARLY_DISCOUNT_PERCENT / _HUNDRED)
        return period - discount
    return period + period * (VAT_RATE_PERCENT / _HUNDRED)


def discount_percent_for(interval: str | BillingInterval) -> Decimal:
    return YEARLY_DISCOUNT_PERCENT if parse_interval(interval) is BillingInterval.YEAR else _ZERO
