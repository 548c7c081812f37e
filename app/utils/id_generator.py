from __future__ import annotations

import datetime as dt
import secrets


def generate_invoice_number(now: dt.datetime | None = None) -> str:
    """Billing invoice number in the form ``INV-YYYYMM-NNNN``."""
    now = now or dt.datetime.now(dt.timezone.utc)
    return f"INV-{now.year:04d}{now.month:02d}-{secrets.randbelow(10_000):04d}"
