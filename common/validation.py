from typing import Any

from common.errors import invalid
from common.models import LoyaltyTier


def validate_loyalty_tier(tier: Any) -> LoyaltyTier:
    """Accepts any casing of BRONZE, SILVER or GOLD."""
    normalized = str(getattr(tier, "value", tier)).upper()
    try:
        return LoyaltyTier(normalized)
    except ValueError:
        raise invalid("INVALID_TIER", "loyaltyTier must be one of BRONZE, SILVER or GOLD") from None
