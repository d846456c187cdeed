"""
Core Utilities

Shared helpers used across the application.
"""
from datetime import datetime, timezone
from decimal import Context, Decimal, ROUND_HALF_UP
from typing import Union


def utcnow() -> datetime:
    """
    Return timezone-aware UTC datetime.

    Use this instead of datetime.utcnow() which returns naive datetime.
    """
    return datetime.now(timezone.utc)


def format_amount(value: Union[int, float, Decimal]) -> str:
    """
    Format a number the way en-US locales display it.

    Comma thousands separators, at most three fraction digits and no
    trailing zeros: 1500 -> "1,500", 1234.5 -> "1,234.5", 0.1 + 0.2 -> "0.3".
    """
    amount = Decimal(str(value))
    # Integer digits, a carry from rounding and the three fraction digits
    context = Context(prec=max(amount.adjusted(), 0) + 5)
    amount = amount.quantize(Decimal("0.001"), rounding=ROUND_HALF_UP, context=context)
    if amount == 0:
        return "0"
    return f"{amount:,.3f}".rstrip("0").rstrip(".")
