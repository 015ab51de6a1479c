"""
Global error handling middleware.
"""
import logging
from fastapi import Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from typing import Callable

from app.domain.errors import (
    EngineError,
    InvalidCoordinates,
    LocationUnavailable,
    SpeciesNotFound,
    WeatherUnavailable,
    ZoneUnresolved,
)
from app.infrastructure.external_api_client import ExternalAPIError


logger = logging.getLogger(__name__)

# Engine error -> (HTTP status, error title)
ENGINE_ERROR_RESPONSES = {
    LocationUnavailable: (status.HTTP_422_UNPROCESSABLE_ENTITY, "Location unavailable"),
    InvalidCoordinates: (status.HTTP_400_BAD_REQUEST, "Invalid coordinates"),
    SpeciesNotFound: (status.HTTP_404_NOT_FOUND, "Tree species not found"),
    ZoneUnresolved: (status.HTTP_422_UNPROCESSABLE_ENTITY, "Zone unresolved"),
    WeatherUnavailable: (status.HTTP_503_SERVICE_UNAVAILABLE, "Weather unavailable"),
}


def error_body(
    error: str,
    detail: str,
    retryable: bool = False,
    requires_manual_entry: bool = False,
) -> dict:
    return {
        "error": error,
        "detail": detail,
        "retryable": retryable,
        "requires_manual_entry": requires_manual_entry,
    }


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """
    Global error handling middleware.

    Catches unhandled exceptions and returns consistent error responses.
    """

    async def dispatch(self, request: Request, call_next: Callable):
        """
        Process the request and handle any exceptions.

        Args:
            request: The incoming request
            call_next: The next middleware or route handler

        Returns:
            Response object
        """
        try:
            response = await call_next(request)
            return response

        except EngineError as e:
            status_code, title = ENGINE_ERROR_RESPONSES.get(
                type(e), (status.HTTP_400_BAD_REQUEST, "Invalid request")
            )
            logger.warning(
                f"{type(e).__name__}: {e.message}",
                extra={
                    "path": request.url.path,
                    "method": request.method,
                    "status_code": status_code,
                }
            )
            return JSONResponse(
                status_code=status_code,
                content=error_body(
                    title,
                    e.message,
                    retryable=e.retryable,
                    requires_manual_entry=e.requires_manual_entry,
                ),
            )

        except ExternalAPIError as e:
            # Log external API errors
            logger.error(
                f"External API error: {str(e)}",
                extra={
                    "path": request.url.path,
                    "method": request.method,
                    "status_code": e.status_code,
                }
            )
            return JSONResponse(
                status_code=status.HTTP_502_BAD_GATEWAY,
                content=error_body(
                    "External API error",
                    e.message,
                    retryable=e.retryable,
                ),
            )

        except ValueError as e:
            # Log validation errors
            logger.warning(
                f"Validation error: {str(e)}",
                extra={
                    "path": request.url.path,
                    "method": request.method,
                }
            )
            return JSONResponse(
                status_code=status.HTTP_400_BAD_REQUEST,
                content=error_body("Invalid request", str(e)),
            )

        except Exception as e:
            # Log unexpected errors
            logger.exception(
                f"Unhandled exception: {str(e)}",
                extra={
                    "path": request.url.path,
                    "method": request.method,
                }
            )
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content=error_body("Internal server error", "An unexpected error occurred"),
            )
