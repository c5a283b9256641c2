import os

PORT = int(os.getenv("PORT", 4000))
CORS_ORIGIN = os.getenv("CORS_ORIGIN", "http://localhost:5173")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# MOCK_MODE points the upstreams at the mock servers instead of the real APIs
MOCK_MODE = os.getenv("MOCK_MODE", "false").lower() == "true"

MOCK_PORTS = {"inventory": 5001, "user": 5002, "pricing": 5003}
REAL_PORTS = {"inventory": 4001, "user": 4002, "pricing": 4003}


def _service_url(service: str, env_var: str) -> str:
    override = os.getenv(env_var)
    if override:
        return override.rstrip("/")
    port = MOCK_PORTS[service] if MOCK_MODE else REAL_PORTS[service]
    return f"http://localhost:{port}"


INVENTORY_SERVICE_URL = _service_url("inventory", "INVENTORY_SERVICE_URL")
USER_SERVICE_URL = _service_url("user", "USER_SERVICE_URL")
PRICING_SERVICE_URL = _service_url("pricing", "PRICING_SERVICE_URL")

UPSTREAM_TIMEOUT_MS = int(os.getenv("UPSTREAM_TIMEOUT_MS", 5000))
