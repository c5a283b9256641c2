import pytest

from common.errors import ServiceError
from common.models import DiscountRule, LoyaltyTier
from pricing_service.app.store import INITIAL_DISCOUNT_RULES, DiscountRuleStore


@pytest.fixture
def rules():
    return DiscountRuleStore(INITIAL_DISCOUNT_RULES)


def test_lists_seeded_rules(rules):
    assert len(rules.list()) == len(INITIAL_DISCOUNT_RULES)


def test_create_defaults_to_active(rules):
    created = rules.create({"id": "rule-new", "loyalty_tier": "GOLD", "rate": 0.2, "description": "New rule"})

    assert created.active is True
    assert rules.find_by_id("rule-new") == created


def test_rejects_duplicate_id(rules):
    with pytest.raises(ServiceError) as exc_info:
        rules.create({"id": "rule-gold-default", "loyalty_tier": "BRONZE", "rate": 0.1})
    assert exc_info.value.code == "RULE_ALREADY_EXISTS"


def test_validates_rate_bounds(rules):
    with pytest.raises(ServiceError) as exc_info:
        rules.create({"id": "bad-rate", "loyalty_tier": "SILVER", "rate": 2})
    assert exc_info.value.code == "INVALID_RATE"

    with pytest.raises(ServiceError) as exc_info:
        rules.update("rule-gold-default", {"rate": -0.1})
    assert exc_info.value.code == "INVALID_RATE"
    assert rules.find_by_id("rule-gold-default").rate == 0.3


def test_update_fields(rules):
    updated = rules.update("rule-gold-default", {"description": "Updated", "active": False})

    assert updated.description == "Updated"
    assert updated.active is False
    assert updated.rate == 0.3


def test_missing_rule_errors(rules):
    with pytest.raises(ServiceError) as exc_info:
        rules.update("missing", {"description": "x"})
    assert exc_info.value.code == "RULE_NOT_FOUND"

    with pytest.raises(ServiceError):
        rules.delete("missing")
    assert rules.find_by_id("missing") is None


def test_first_active_rule_for_tier_wins(rules):
    rules.reset([
        DiscountRule(id="r1", loyalty_tier=LoyaltyTier.GOLD, rate=0.1, active=False),
        DiscountRule(id="r2", loyalty_tier=LoyaltyTier.GOLD, rate=0.2, active=True),
        DiscountRule(id="r3", loyalty_tier=LoyaltyTier.GOLD, rate=0.05, active=True),
    ])

    assert rules.find_active_rule_for_tier(LoyaltyTier.GOLD).id == "r2"
    assert rules.find_active_rule_for_tier(LoyaltyTier.SILVER) is None
