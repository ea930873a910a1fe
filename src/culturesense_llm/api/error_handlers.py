"""
FastAPI exception handlers for structured error responses.

Maps domain exceptions to appropriate HTTP status codes and formats.
"""

from datetime import datetime, timezone

import structlog
from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from culturesense_llm.retry.exceptions import ServiceUnavailableError

logger = structlog.get_logger(__name__)


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


async def service_unavailable_handler(
    request: Request, exc: ServiceUnavailableError
) -> JSONResponse:
    """
    Handle total provider exhaustion.
    
    Maps to 503 Service Unavailable with a human-readable message. The full
    per-provider failure detail goes to the logs; clients only see counts.
    """
    logger.error(
        "AI service unavailable",
        total_attempts=exc.total_attempts,
        failures=exc.summary(),
    )
    
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={
            "error": "service_unavailable",
            "message": "AI service is temporarily unavailable. Please try again later.",
            "providers": [
                {"provider": item["provider"], "attempts": item["attempts"]}
                for item in exc.summary()
            ],
            "timestamp": _timestamp(),
        },
    )


async def value_error_handler(request: Request, exc: ValueError) -> JSONResponse:
    """
    Handle invalid caller input detected in the service layer
    (empty conversation, unknown provider, empty chat message).
    
    Maps to 400 Bad Request.
    """
    logger.warning("Invalid request", error=str(exc))
    
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": "invalid_request",
            "message": str(exc),
            "timestamp": _timestamp(),
        },
    )


async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """
    Handle request body validation errors (invalid request format).
    
    Maps to 400 Bad Request (client error).
    """
    logger.warning("Invalid request format", errors=exc.errors())
    
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": "invalid_request",
            "message": "Request validation failed",
            "details": jsonable_errors(exc),
            "timestamp": _timestamp(),
        },
    )


async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Handle unexpected errors.
    
    Maps to 500 Internal Server Error.
    """
    logger.exception("Unexpected error", error_type=type(exc).__name__)
    
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "internal_error",
            "message": "An unexpected error occurred",
            "timestamp": _timestamp(),
        },
    )


def jsonable_errors(exc: RequestValidationError) -> list[dict]:
    """Strip non-serializable context (e.g. exception objects) from errors."""
    return [
        {"loc": list(error.get("loc", ())), "msg": error.get("msg"), "type": error.get("type")}
        for error in exc.errors()
    ]


# Exception handler mapping for FastAPI app.add_exception_handler()
EXCEPTION_HANDLERS = {
    ServiceUnavailableError: service_unavailable_handler,
    RequestValidationError: request_validation_error_handler,
    ValueError: value_error_handler,
    Exception: generic_error_handler,
}
