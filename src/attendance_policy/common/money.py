from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from ..core.constants import CURRENCY_QUANTUM


def round_currency(value: float) -> float:
    """Round a final amount to 2 places (half up). Never used mid-calculation."""
    return float(Decimal(str(value)).quantize(Decimal(CURRENCY_QUANTUM), rounding=ROUND_HALF_UP))
