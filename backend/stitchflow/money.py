# Overview: Whole-currency-unit arithmetic and display helpers.

from __future__ import annotations

from decimal import Decimal, ROUND_HALF_UP


def round_half_up(value) -> int:
    """Round to the nearest whole currency unit; .5 always rounds away from zero."""
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def percentage(part, whole) -> int:
    """Whole-number percentage with a zero-safe denominator."""
    return round_half_up(100 * part / max(1, whole))


def format_money(amount, currency: str = "₹") -> str:
    """Format an amount as <currency>X,XXX for receipts and job cards."""
    if amount < 0:
        return f"-{currency}{abs(amount):,}"
    return f"{currency}{amount:,}"
