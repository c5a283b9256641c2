
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from common.errors import ErrorKind, ServiceError
from common.ids import CORRELATION_HEADER
from common.models import DiscountRule, LoyaltyTier, PricingQuote, Product, User
from orchestrator_service.app.config import (
    INVENTORY_SERVICE_URL,
    PRICING_SERVICE_URL,
    UPSTREAM_TIMEOUT_MS,
    USER_SERVICE_URL,
)

logger = logging.getLogger("orchestrator_client")


def create_api_error(
    code_prefix: str,
    default_message: str,
    status_code: Optional[int] = None,
    body: Any = None,
) -> ServiceError:
    """
    Normalises a failed upstream call.

    A response with a JSON ``message`` keeps that text; 404 becomes
    ``<PREFIX>_NOT_FOUND`` and every other status ``<PREFIX>_API_ERROR``.
    No status at all means the request never got a response.
    """
    if status_code is None:
        return ServiceError(ErrorKind.UPSTREAM, f"{code_prefix}_API_ERROR", default_message)

    message = default_message
    if isinstance(body, dict) and body.get("message"):
        message = str(body["message"])

    if status_code == 404:
        return ServiceError(ErrorKind.NOT_FOUND, f"{code_prefix}_NOT_FOUND", message)
    return ServiceError(ErrorKind.UPSTREAM, f"{code_prefix}_API_ERROR", message)


def _json_or_none(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return None


class ServiceClient:
    def __init__(
        self,
        base_url: str,
        service: str,
        timeout_ms: int = UPSTREAM_TIMEOUT_MS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.service = service
        self.code_prefix = service.upper().replace("-", "_")
        self.timeout_ms = timeout_ms
        self.default_message = f"Failed to fetch from {service}-api"
        self._transport = transport

    async def get(
        self,
        path: str,
        params: Optional[Dict[str, str]] = None,
        correlation_id: Optional[str] = None,
    ) -> Any:
        headers = {"Accept": "application/json"}
        if correlation_id:
            headers[CORRELATION_HEADER] = correlation_id

        async with httpx.AsyncClient(base_url=self.base_url, transport=self._transport) as client:
            # Convert ms to seconds
            timeout_sec = self.timeout_ms / 1000.0
            try:
                response = await client.get(path, params=params, headers=headers, timeout=timeout_sec)
            except httpx.RequestError as e:
                logger.error(f"{self.service}-api unreachable on GET {path}: {e!r}, correlation {correlation_id}")
                raise create_api_error(self.code_prefix, self.default_message) from e

        if not response.is_success:
            logger.warning(f"{self.service}-api returned {response.status_code} on GET {path}, correlation {correlation_id}")
            raise create_api_error(
                self.code_prefix,
                self.default_message,
                status_code=response.status_code,
                body=_json_or_none(response),
            )
        return response.json()

    def _remap_not_found(self, exc: ServiceError, code: str, message: str) -> ServiceError:
        if exc.kind is not ErrorKind.NOT_FOUND:
            return exc
        if exc.message != self.default_message:
            message = exc.message
        return ServiceError(ErrorKind.NOT_FOUND, code, message)


def product_path(product_id: str) -> str:
    return f"/products/{quote(product_id, safe='')}"


def user_path(user_id: str) -> str:
    return f"/users/{quote(user_id, safe='')}"


def _format_number(value: float) -> str:
    number = float(value)
    return str(int(number)) if number.is_integer() else repr(number)


def pricing_query(product_id: str, user_id: str, base_price: float, loyalty_tier: Any) -> Dict[str, str]:
    return {
        "productId": product_id,
        "userId": user_id,
        "basePrice": _format_number(base_price),
        "loyaltyTier": str(getattr(loyalty_tier, "value", loyalty_tier)),
    }


class InventoryClient(ServiceClient):
    def __init__(self, base_url: str = INVENTORY_SERVICE_URL, **kwargs):
        super().__init__(base_url, "inventory", **kwargs)

    async def fetch_product(self, product_id: str, correlation_id: Optional[str] = None) -> Product:
        try:
            data = await self.get(product_path(product_id), correlation_id=correlation_id)
        except ServiceError as exc:
            raise self._remap_not_found(
                exc, "PRODUCT_NOT_FOUND", f"Product with id '{product_id}' was not found"
            ) from exc
        return Product.model_validate(data)

    async def fetch_products(self, correlation_id: Optional[str] = None) -> List[Product]:
        data = await self.get("/products", correlation_id=correlation_id)
        return [Product.model_validate(item) for item in data]


class UserClient(ServiceClient):
    def __init__(self, base_url: str = USER_SERVICE_URL, **kwargs):
        super().__init__(base_url, "user", **kwargs)

    async def fetch_user(self, user_id: str, correlation_id: Optional[str] = None) -> User:
        try:
            data = await self.get(user_path(user_id), correlation_id=correlation_id)
        except ServiceError as exc:
            raise self._remap_not_found(
                exc, "USER_NOT_FOUND", f"User with id '{user_id}' was not found"
            ) from exc
        return User.model_validate(data)

    async def fetch_users(self, correlation_id: Optional[str] = None) -> List[User]:
        data = await self.get("/users", correlation_id=correlation_id)
        return [User.model_validate(item) for item in data]


class PricingClient(ServiceClient):
    def __init__(self, base_url: str = PRICING_SERVICE_URL, **kwargs):
        super().__init__(base_url, "pricing", **kwargs)

    async def fetch_quote(
        self,
        product_id: str,
        user_id: str,
        base_price: float,
        loyalty_tier: LoyaltyTier,
        correlation_id: Optional[str] = None,
    ) -> PricingQuote:
        params = pricing_query(product_id, user_id, base_price, loyalty_tier)
        # Every pricing failure surfaces as PRICING_API_ERROR, including 404s
        try:
            data = await self.get("/pricing/quote", params=params, correlation_id=correlation_id)
            return PricingQuote.model_validate(data)
        except ServiceError as exc:
            raise ServiceError(ErrorKind.UPSTREAM, "PRICING_API_ERROR", exc.message) from exc
        except (ValidationError, ValueError) as exc:
            raise ServiceError(
                ErrorKind.UPSTREAM, "PRICING_API_ERROR", "Invalid pricing quote received from pricing-api"
            ) from exc

    async def fetch_rules(self, correlation_id: Optional[str] = None) -> List[DiscountRule]:
        data = await self.get("/pricing/rules", correlation_id=correlation_id)
        return [DiscountRule.model_validate(item) for item in data]


@dataclass
class UpstreamClients:
    inventory: InventoryClient
    users: UserClient
    pricing: PricingClient


def get_upstream_clients() -> UpstreamClients:
    return UpstreamClients(
        inventory=InventoryClient(),
        users=UserClient(),
        pricing=PricingClient(),
    )
