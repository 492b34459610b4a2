"""Money helpers. All amounts are Decimals rounded to whole cents."""
from decimal import Decimal, ROUND_HALF_UP

from pharmacy_pos.core.config import settings

CENTS = Decimal("0.01")
ZERO = Decimal("0.00")


def to_money(value) -> Decimal:
    if isinstance(value, float):
        value = str(value)
    return Decimal(value).quantize(CENTS, rounding=ROUND_HALF_UP)


def format_money(value: Decimal) -> str:
    return f"{settings.CURRENCY_SYMBOL}{to_money(value):,.2f}"
