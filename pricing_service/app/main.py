
import logging
from typing import List, Optional

import uvicorn
from fastapi import Depends, Query, Request, Response

from common.app import create_app
from common.errors import error_response
from common.models import DiscountRule, PricingQuote
from common.validation import validate_loyalty_tier
from pricing_service.app.config import CORS_ORIGIN, LOG_LEVEL, PORT
from pricing_service.app.models import DiscountRuleCreateRequest, DiscountRuleUpdateRequest
from pricing_service.app.pricing import calculate_quote
from pricing_service.app.store import DiscountRuleStore, get_store
from pricing_service.app.validation import validate_base_price

# Configure logging
logging.basicConfig(level=LOG_LEVEL, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
logger = logging.getLogger("pricing_service")

app = create_app(
    "pricing-api",
    title="Pricing API",
    description="Loyalty discount rules and price quotes",
    cors_origin=CORS_ORIGIN,
)


@app.get("/pricing/quote", response_model=PricingQuote)
def get_quote(
    request: Request,
    product_id: Optional[str] = Query(None, alias="productId"),
    user_id: Optional[str] = Query(None, alias="userId"),
    base_price: Optional[str] = Query(None, alias="basePrice"),
    loyalty_tier: Optional[str] = Query(None, alias="loyaltyTier"),
    rules: DiscountRuleStore = Depends(get_store),
):
    correlation_id = request.state.correlation_id

    if not product_id or not user_id or not base_price or not loyalty_tier:
        logger.warning(f"Quote request missing parameters, correlation {correlation_id}")
        return error_response(
            "INVALID_REQUEST",
            "productId, userId, basePrice and loyaltyTier query parameters are required",
            400,
        )

    price = validate_base_price(base_price)
    tier = validate_loyalty_tier(loyalty_tier)

    logger.info(f"Quote request for product {product_id}, user {user_id} ({tier.value}), correlation {correlation_id}")
    return calculate_quote(product_id, user_id, price, tier, rules)


@app.get("/pricing/rules", response_model=List[DiscountRule])
def list_rules(rules: DiscountRuleStore = Depends(get_store)):
    return rules.list()


@app.get("/pricing/rules/{rule_id}", response_model=DiscountRule)
def get_rule(rule_id: str, rules: DiscountRuleStore = Depends(get_store)):
    rule = rules.find_by_id(rule_id)
    if rule is None:
        return error_response("RULE_NOT_FOUND", f"Discount rule with id '{rule_id}' not found", 404)
    return rule


@app.post("/pricing/rules", response_model=DiscountRule, status_code=201)
def create_rule(request: Request, body: DiscountRuleCreateRequest, rules: DiscountRuleStore = Depends(get_store)):
    logger.info(f"Create discount rule {body.id} for {body.loyalty_tier}, correlation {request.state.correlation_id}")
    return rules.create(body)


@app.put("/pricing/rules/{rule_id}", response_model=DiscountRule)
def update_rule(
    request: Request,
    rule_id: str,
    body: DiscountRuleUpdateRequest,
    rules: DiscountRuleStore = Depends(get_store),
):
    changes = body.model_dump(exclude_none=True)
    if not changes:
        return error_response(
            "INVALID_PAYLOAD",
            "At least one of loyaltyTier, rate, description or active must be provided",
            400,
        )
    logger.info(f"Update discount rule {rule_id}, correlation {request.state.correlation_id}")
    return rules.update(rule_id, changes)


@app.delete("/pricing/rules/{rule_id}", status_code=204)
def delete_rule(request: Request, rule_id: str, rules: DiscountRuleStore = Depends(get_store)):
    rules.delete(rule_id)
    logger.info(f"Deleted discount rule {rule_id}, correlation {request.state.correlation_id}")
    return Response(status_code=204)


if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=PORT)
