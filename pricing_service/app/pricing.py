import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Optional

from common.models import PricingQuote
from common.validation import validate_loyalty_tier
from pricing_service.app.store import DiscountRuleStore, get_store

logger = logging.getLogger("pricing_quote")

CURRENCY = "GBP"


def round_half_up(value: float) -> int:
    """Nearest integer, ties away from zero (2.5 -> 3), unlike round()."""
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def calculate_quote(
    product_id: str,
    user_id: str,
    base_price: float,
    loyalty_tier: Any,
    rules: Optional[DiscountRuleStore] = None,
) -> PricingQuote:
    if rules is None:
        rules = get_store()

    tier = validate_loyalty_tier(loyalty_tier)
    rule = rules.find_active_rule_for_tier(tier)

    rate = rule.rate if rule is not None else 0
    discount = round_half_up(base_price * rate)

    logger.info(
        f"Quote for {product_id}/{user_id}: tier={tier.value} "
        f"rule={rule.id if rule else None} discount={discount}"
    )
    return PricingQuote(
        product_id=product_id,
        user_id=user_id,
        base_price=base_price,
        discount=discount,
        final_price=base_price - discount,
        currency=CURRENCY,
    )
