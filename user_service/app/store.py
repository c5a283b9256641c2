from typing import Any, Dict

from common.models import LoyaltyTier, User
from common.repository import InMemoryRepository
from common.validation import validate_loyalty_tier

INITIAL_USERS = [
    User(id="u1", name="Alice Example", loyalty_tier=LoyaltyTier.GOLD),
    User(id="u2", name="Bob Example", loyalty_tier=LoyaltyTier.SILVER),
    User(id="u3", name="Charlie Example", loyalty_tier=LoyaltyTier.BRONZE),
    User(id="u4", name="Diana Shopper", loyalty_tier=LoyaltyTier.GOLD),
    User(id="u5", name="Ethan Frequent", loyalty_tier=LoyaltyTier.SILVER),
]


class UserStore(InMemoryRepository[User]):
    model = User
    entity = "USER"
    label = "User"
    logger_name = "user_store"

    def check_fields(self, fields: Dict[str, Any]) -> Dict[str, Any]:
        checked = dict(fields)
        if "loyalty_tier" in checked:
            checked["loyalty_tier"] = validate_loyalty_tier(checked["loyalty_tier"])
        return checked


store = UserStore(INITIAL_USERS)


def get_store() -> UserStore:
    return store
