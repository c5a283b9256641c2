
import logging
from typing import List, Optional

import uvicorn
from fastapi import Depends, Query, Request

from common.app import create_app
from common.errors import error_response
from common.models import DiscountRule, Product, User
from orchestrator_service.app.checkout import build_checkout_preview, map_checkout_error
from orchestrator_service.app.client import UpstreamClients, get_upstream_clients
from orchestrator_service.app.config import (
    CORS_ORIGIN,
    INVENTORY_SERVICE_URL,
    LOG_LEVEL,
    MOCK_MODE,
    PORT,
    PRICING_SERVICE_URL,
    USER_SERVICE_URL,
)
from orchestrator_service.app.models import CheckoutPreview

# Configure logging
logging.basicConfig(level=LOG_LEVEL, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
logger = logging.getLogger("orchestrator_service")

app = create_app(
    "orchestrator-api",
    title="Orchestrator API",
    description="Catalog proxy and checkout preview over inventory, user and pricing APIs",
    cors_origin=CORS_ORIGIN,
)

logger.info(
    f"Upstreams (mock mode {MOCK_MODE}): inventory={INVENTORY_SERVICE_URL} "
    f"user={USER_SERVICE_URL} pricing={PRICING_SERVICE_URL}"
)


@app.get("/catalog/products", response_model=List[Product])
async def catalog_products(request: Request, clients: UpstreamClients = Depends(get_upstream_clients)):
    correlation_id = request.state.correlation_id
    try:
        return await clients.inventory.fetch_products(correlation_id=correlation_id)
    except Exception as e:
        logger.error(f"Error while fetching product list: {e}, correlation {correlation_id}")
        return error_response(
            "INVENTORY_UNAVAILABLE", "Could not retrieve product list from inventory-api", 502
        )


@app.get("/catalog/users", response_model=List[User])
async def catalog_users(request: Request, clients: UpstreamClients = Depends(get_upstream_clients)):
    correlation_id = request.state.correlation_id
    try:
        return await clients.users.fetch_users(correlation_id=correlation_id)
    except Exception as e:
        logger.error(f"Error while fetching user list: {e}, correlation {correlation_id}")
        return error_response(
            "USER_SERVICE_UNAVAILABLE", "Could not retrieve user list from user-api", 502
        )


@app.get("/catalog/pricing-rules", response_model=List[DiscountRule])
async def catalog_pricing_rules(request: Request, clients: UpstreamClients = Depends(get_upstream_clients)):
    correlation_id = request.state.correlation_id
    try:
        return await clients.pricing.fetch_rules(correlation_id=correlation_id)
    except Exception as e:
        logger.error(f"Error while fetching discount rules: {e}, correlation {correlation_id}")
        return error_response(
            "PRICING_UNAVAILABLE", "Could not retrieve discount rules from pricing-api", 502
        )


@app.get("/checkout/preview", response_model=CheckoutPreview)
async def checkout_preview(
    request: Request,
    product_id: Optional[str] = Query(None, alias="productId"),
    user_id: Optional[str] = Query(None, alias="userId"),
    clients: UpstreamClients = Depends(get_upstream_clients),
):
    correlation_id = request.state.correlation_id
    logger.info(f"Checkout preview for product {product_id}, user {user_id}, correlation {correlation_id}")

    try:
        return await build_checkout_preview(product_id, user_id, clients, correlation_id=correlation_id)
    except Exception as e:
        mapped = map_checkout_error(e)
        if mapped.status >= 500:
            logger.error(f"Checkout preview failed: {mapped.code} ({e!r}), correlation {correlation_id}")
        else:
            logger.warning(f"Checkout preview rejected: {mapped.code} ({e}), correlation {correlation_id}")
        return error_response(mapped.code, mapped.message, mapped.status)


if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=PORT)
