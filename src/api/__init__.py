"""nightsWriter API layer - routes, schemas, auth, dashboard and middleware."""

from src.api.middleware import (
    ErrorHandlingMiddleware,
    RequestLoggingMiddleware,
    http_exception_handler,
    validation_exception_handler,
)
from src.api.routes import router, trigger_router
from src.api.schemas import ErrorResponse, GenerateRequest, HealthResponse

__all__ = [
    "ErrorHandlingMiddleware",
    "ErrorResponse",
    "GenerateRequest",
    "HealthResponse",
    "RequestLoggingMiddleware",
    "router",
    "trigger_router",
    "http_exception_handler",
    "validation_exception_handler",
]
