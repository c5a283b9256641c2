import math
from typing import Any

from common.errors import invalid


def validate_stock(stock: Any) -> int:
    try:
        number = float(stock)
    except (TypeError, ValueError):
        number = math.nan

    if not number.is_integer() or number < 0:
        raise invalid("INVALID_STOCK", "stock must be a non-negative integer")
    return int(number)


def validate_price(price: Any) -> float:
    try:
        number = float(price)
    except (TypeError, ValueError):
        number = math.nan

    if not math.isfinite(number) or number <= 0:
        raise invalid("INVALID_PRICE", "price must be a positive number")
    return number
