import uuid

CORRELATION_HEADER = "X-Correlation-Id"


def generate_correlation_id() -> str:
    return str(uuid.uuid4())
