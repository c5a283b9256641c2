import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from common import ids
from common.errors import ErrorKind, ServiceError, error_response


def create_app(service: str, title: str, description: str, cors_origin: str) -> FastAPI:
    """
    Builds a FastAPI app with the pieces every service shares: CORS for the
    admin UI, X-Correlation-Id propagation, GET /health and the JSON error
    envelope for domain, validation and unexpected errors.
    """
    logger = logging.getLogger(service.replace("-api", "_service"))

    app = FastAPI(title=title, description=description, version="1.0.0")

    @app.middleware("http")
    async def add_correlation_id(request: Request, call_next):
        correlation_id = request.headers.get(ids.CORRELATION_HEADER)
        if not correlation_id:
            correlation_id = ids.generate_correlation_id()

        # Store in request state for access in endpoints
        request.state.correlation_id = correlation_id

        try:
            response = await call_next(request)
        except Exception:
            logger.exception(
                f"Unexpected error on {request.method} {request.url.path}, correlation {correlation_id}"
            )
            error = ServiceError(ErrorKind.INTERNAL, "INTERNAL_ERROR", f"Unexpected error in {service}")
            response = error_response(error.code, error.message, error.status)

        response.headers[ids.CORRELATION_HEADER] = correlation_id
        return response

    # Added last so it wraps the correlation middleware, error responses included
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[cors_origin],
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[ids.CORRELATION_HEADER],
    )

    @app.exception_handler(ServiceError)
    async def handle_service_error(request: Request, exc: ServiceError):
        if exc.status >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.code} {exc.message}")
        else:
            logger.warning(f"{request.method} {request.url.path} rejected: {exc.code} {exc.message}")
        return error_response(exc.code, exc.message, exc.status)

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError):
        fields = ", ".join(str(err["loc"][-1]) for err in exc.errors() if err.get("loc"))
        logger.warning(f"{request.method} {request.url.path} invalid payload: {fields}")
        return error_response("INVALID_PAYLOAD", f"Invalid or missing fields: {fields}", 400)

    @app.get("/health")
    def health():
        return {"status": "ok", "service": service}

    return app
