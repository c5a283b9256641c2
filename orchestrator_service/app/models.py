from common.models import CamelModel, LoyaltyTier, PricingQuote


class PreviewProduct(CamelModel):
    id: str
    name: str
    stock: int
    base_price: float


class PreviewUser(CamelModel):
    id: str
    name: str
    loyalty_tier: LoyaltyTier


class CheckoutPreview(CamelModel):
    product: PreviewProduct
    user: PreviewUser
    pricing: PricingQuote
