import pytest

from common.errors import ServiceError
from pricing_service.app.pricing import calculate_quote, round_half_up
from pricing_service.app.store import DiscountRuleStore


@pytest.fixture
def rules():
    store = DiscountRuleStore()
    store.create({"id": "tier-gold", "loyalty_tier": "GOLD", "rate": 0.25, "description": "gold rule"})
    return store


def test_applies_active_rule_and_rounds_discount(rules):
    quote = calculate_quote("p1", "u1", 99, "GOLD", rules)

    assert quote.discount == 25
    assert quote.final_price == 74
    assert quote.currency == "GBP"
    assert quote.product_id == "p1"
    assert quote.user_id == "u1"


def test_tier_is_case_insensitive(rules):
    assert calculate_quote("p1", "u1", 100, "gold", rules).discount == 25


def test_uses_first_active_rule_for_tier(rules):
    rules.create({"id": "tier-gold-second", "loyalty_tier": "GOLD", "rate": 0.1})

    quote = calculate_quote("p1", "u1", 100, "GOLD", rules)

    assert quote.discount == 25


def test_inactive_rules_are_skipped(rules):
    rules.update("tier-gold", {"active": False})
    rules.create({"id": "tier-gold-fallback", "loyalty_tier": "GOLD", "rate": 0.1})

    assert calculate_quote("p1", "u1", 100, "GOLD", rules).discount == 10


def test_falls_back_to_zero_discount_when_no_rule(rules):
    quote = calculate_quote("p1", "u1", 50, "SILVER", rules)

    assert quote.discount == 0
    assert quote.final_price == 50


def test_unknown_tier_is_rejected(rules):
    with pytest.raises(ServiceError) as exc_info:
        calculate_quote("p1", "u1", 50, "PLATINUM", rules)
    assert exc_info.value.code == "INVALID_TIER"


def test_defaults_to_seeded_rules():
    quote = calculate_quote("p1", "u1", 100, "GOLD")
    assert quote.discount == 30
    assert quote.final_price == 70


@pytest.mark.parametrize("value, expected", [(24.75, 25), (2.5, 3), (3.5, 4), (2.4999, 2), (0, 0)])
def test_round_half_up(value, expected):
    assert round_half_up(value) == expected
