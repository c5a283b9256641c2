from typing import Any, Dict, Iterable, Optional

from common.models import DiscountRule, LoyaltyTier
from common.repository import InMemoryRepository
from common.validation import validate_loyalty_tier
from pricing_service.app.validation import validate_rate

INITIAL_DISCOUNT_RULES = [
    DiscountRule(
        id="rule-gold-default",
        loyalty_tier=LoyaltyTier.GOLD,
        rate=0.3,
        description="Base discount for GOLD customers",
    ),
    DiscountRule(
        id="rule-silver-default",
        loyalty_tier=LoyaltyTier.SILVER,
        rate=0.15,
        description="Base discount for SILVER customers",
    ),
    DiscountRule(
        id="rule-bronze-default",
        loyalty_tier=LoyaltyTier.BRONZE,
        rate=0,
        description="No default discount for BRONZE customers",
    ),
]


def select_active_rule(rules: Iterable[DiscountRule], tier: LoyaltyTier) -> Optional[DiscountRule]:
    """First active rule for the tier, in insertion order."""
    for rule in rules:
        if rule.loyalty_tier == tier and rule.active:
            return rule
    return None


class DiscountRuleStore(InMemoryRepository[DiscountRule]):
    model = DiscountRule
    entity = "RULE"
    label = "Discount rule"
    logger_name = "pricing_store"

    def check_fields(self, fields: Dict[str, Any]) -> Dict[str, Any]:
        checked = dict(fields)
        if "loyalty_tier" in checked:
            checked["loyalty_tier"] = validate_loyalty_tier(checked["loyalty_tier"])
        if "rate" in checked:
            checked["rate"] = validate_rate(checked["rate"])
        return checked

    def find_active_rule_for_tier(self, tier: LoyaltyTier) -> Optional[DiscountRule]:
        return select_active_rule(self.list(), tier)


store = DiscountRuleStore(INITIAL_DISCOUNT_RULES)


def get_store() -> DiscountRuleStore:
    return store
