"""Money formatting for pricing and billing responses.

    fmt_money(3000)                  # "3,000 ETB"
    fmt_money(25391.3043, decimals=True)  # "25,391.30 ETB"
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from app.core.config import settings


def fmt_money(
    amount: float | int | Decimal,
    currency: str | None = None,
    *,
    decimals: bool = False,
) -> str:
    """Format *amount* with thousands separators and a trailing currency code.

    Whole-unit output rounds half up, matching how the pricing page
    displays period totals.
    """
    code = currency or settings.CURRENCY
    value = Decimal(str(amount or 0))
    if decimals:
        return f"{value.quantize(Decimal('0.01'), rounding=ROUND_HALF_UP):,.2f} {code}"
    return f"{value.quantize(Decimal('1'), rounding=ROUND_HALF_UP):,.0f} {code}"
