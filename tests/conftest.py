import httpx
import pytest
from fastapi.testclient import TestClient

from inventory_service.app.main import app as inventory_app
from inventory_service.app.store import store as product_store
from orchestrator_service.app.client import (
    InventoryClient,
    PricingClient,
    UpstreamClients,
    UserClient,
    get_upstream_clients,
)
from orchestrator_service.app.main import app as orchestrator_app
from pricing_service.app.main import app as pricing_app
from pricing_service.app.store import store as rule_store
from user_service.app.main import app as user_app
from user_service.app.store import store as user_store


@pytest.fixture(autouse=True)
def reset_stores():
    """Every test starts from the seed data."""
    product_store.reset()
    user_store.reset()
    rule_store.reset()
    yield
    for app in (inventory_app, user_app, pricing_app, orchestrator_app):
        app.dependency_overrides.clear()


@pytest.fixture
def inventory_client():
    return TestClient(inventory_app)


@pytest.fixture
def user_client():
    return TestClient(user_app)


@pytest.fixture
def pricing_client():
    return TestClient(pricing_app)


@pytest.fixture
def orchestrator_client():
    return TestClient(orchestrator_app)


def in_process_upstreams() -> UpstreamClients:
    """Orchestrator clients that call the other three apps without a network."""
    return UpstreamClients(
        inventory=InventoryClient("http://inventory-api", transport=httpx.ASGITransport(app=inventory_app)),
        users=UserClient("http://user-api", transport=httpx.ASGITransport(app=user_app)),
        pricing=PricingClient("http://pricing-api", transport=httpx.ASGITransport(app=pricing_app)),
    )


@pytest.fixture
def wired_orchestrator():
    orchestrator_app.dependency_overrides[get_upstream_clients] = in_process_upstreams
    return httpx.AsyncClient(transport=httpx.ASGITransport(app=orchestrator_app), base_url="http://orchestrator-api")
