import math
from typing import Any

from common.errors import invalid


def _as_number(value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return math.nan


def validate_rate(rate: Any) -> float:
    number = _as_number(rate)
    if math.isnan(number) or number < 0 or number > 1:
        raise invalid("INVALID_RATE", "rate must be a number between 0 and 1")
    return number


def validate_base_price(base_price: Any) -> float:
    number = _as_number(base_price)
    if not math.isfinite(number) or number <= 0:
        raise invalid("INVALID_BASE_PRICE", "basePrice must be a positive number")
    return number
