from typing import Optional

from common.models import CamelModel


class UserCreateRequest(CamelModel):
    id: str
    name: str
    loyalty_tier: str


class UserUpdateRequest(CamelModel):
    name: Optional[str] = None
    loyalty_tier: Optional[str] = None
