from typing import Optional

from common.models import CamelModel


class DiscountRuleCreateRequest(CamelModel):
    id: str
    loyalty_tier: str
    rate: float
    description: Optional[str] = None
    active: Optional[bool] = None


class DiscountRuleUpdateRequest(CamelModel):
    loyalty_tier: Optional[str] = None
    rate: Optional[float] = None
    description: Optional[str] = None
    active: Optional[bool] = None
