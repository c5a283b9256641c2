"""
Checkout preview: product lookup, then user lookup, then a pricing quote.

The calls run one after another and the first failure ends the request.
map_checkout_error turns whatever was raised into the single
(code, status, message) triple the route returns.
"""

import logging
from typing import NamedTuple, Optional

from common.errors import ErrorKind, ServiceError
from common.models import PricingQuote, Product, User
from orchestrator_service.app.client import UpstreamClients
from orchestrator_service.app.models import CheckoutPreview, PreviewProduct, PreviewUser

logger = logging.getLogger("orchestrator_checkout")

UPSTREAM_UNAVAILABLE_MESSAGE = "Could not retrieve data from one or more upstream services"

CHECKOUT_ERROR_STATUS = {
    "INVALID_REQUEST": 400,
    "PRODUCT_NOT_FOUND": 404,
    "USER_NOT_FOUND": 404,
    "PRICING_API_ERROR": 502,
}


class CheckoutError(NamedTuple):
    code: str
    status: int
    message: str


def assemble_preview(product: Product, user: User, pricing: PricingQuote) -> CheckoutPreview:
    return CheckoutPreview(
        product=PreviewProduct(
            id=product.id,
            name=product.name,
            stock=product.stock,
            base_price=product.price,
        ),
        user=PreviewUser(id=user.id, name=user.name, loyalty_tier=user.loyalty_tier),
        pricing=pricing,
    )


async def build_checkout_preview(
    product_id: Optional[str],
    user_id: Optional[str],
    clients: UpstreamClients,
    correlation_id: Optional[str] = None,
) -> CheckoutPreview:
    if not product_id or not user_id:
        raise ServiceError(
            ErrorKind.INVALID, "INVALID_REQUEST", "productId and userId query parameters are required"
        )

    product = await clients.inventory.fetch_product(product_id, correlation_id=correlation_id)
    user = await clients.users.fetch_user(user_id, correlation_id=correlation_id)

    # Pricing rules live in pricing-api; the orchestrator only forwards price and tier
    pricing = await clients.pricing.fetch_quote(
        product.id,
        user.id,
        product.price,
        user.loyalty_tier,
        correlation_id=correlation_id,
    )

    logger.info(
        f"Preview for product {product.id}, user {user.id}: "
        f"{pricing.base_price} -> {pricing.final_price} {pricing.currency}, correlation {correlation_id}"
    )
    return assemble_preview(product, user, pricing)


def map_checkout_error(error: BaseException) -> CheckoutError:
    if isinstance(error, ServiceError) and error.code in CHECKOUT_ERROR_STATUS:
        return CheckoutError(error.code, CHECKOUT_ERROR_STATUS[error.code], error.message)
    return CheckoutError("UPSTREAM_UNAVAILABLE", 502, UPSTREAM_UNAVAILABLE_MESSAGE)
