from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class LoyaltyTier(str, Enum):
    BRONZE = "BRONZE"
    SILVER = "SILVER"
    GOLD = "GOLD"


class CamelModel(BaseModel):
    """Snake-case attributes in Python, camelCase keys on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Product(CamelModel):
    id: str
    name: str
    stock: int
    price: float


class User(CamelModel):
    id: str
    name: str
    loyalty_tier: LoyaltyTier


class DiscountRule(CamelModel):
    id: str
    loyalty_tier: LoyaltyTier
    rate: float  # 0.3 = 30% discount
    description: Optional[str] = None
    active: bool = True


class PricingQuote(CamelModel):
    product_id: str
    user_id: str
    base_price: float
    discount: int
    final_price: float
    currency: str = "GBP"
