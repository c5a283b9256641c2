from typing import Optional

from pydantic import BaseModel


class ProductCreateRequest(BaseModel):
    id: str
    name: str
    stock: float
    price: float


class ProductUpdateRequest(BaseModel):
    name: Optional[str] = None
    stock: Optional[float] = None
    price: Optional[float] = None
