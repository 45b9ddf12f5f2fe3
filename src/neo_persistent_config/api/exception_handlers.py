"""
Exception handlers mapping persistent config errors to HTTP responses.
"""
import logging
from typing import Any, Callable, Dict, Optional

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from ..core.exceptions import (
    PersistentConfigError,
    StorageError,
    ValidationError,
    create_error_response,
)

logger = logging.getLogger(__name__)


ResponseFormatter = Callable[[PersistentConfigError], Dict[str, Any]]


class ExceptionHandlerRegistry:
    """Registers persistent config exception handlers on an application."""

    def __init__(
        self,
        response_formatter: Optional[ResponseFormatter] = None,
        is_production: bool = True
    ):
        self.response_formatter = response_formatter or create_error_response
        self.is_production = is_production

    def register_handlers(self, app: FastAPI) -> None:
        """Register exception handlers for the application.

        Args:
            app: FastAPI application instance
        """
        @app.exception_handler(ValidationError)
        async def validation_error_handler(request: Request, exc: ValidationError):
            """Return per-item messages for invalid config values."""
            return JSONResponse(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                content=self.response_formatter(exc)
            )

        @app.exception_handler(StorageError)
        async def storage_error_handler(request: Request, exc: StorageError):
            """Handle unavailable persistent storage."""
            logger.error(f"Persistent config storage failure: {exc.message}")
            return JSONResponse(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                content=self._sanitize(exc)
            )

        @app.exception_handler(PersistentConfigError)
        async def persistent_config_error_handler(request: Request, exc: PersistentConfigError):
            """Handle any other library exception."""
            logger.error(f"Persistent config error: {exc.message}", exc_info=True)
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content=self._sanitize(exc)
            )

    def _sanitize(self, exc: PersistentConfigError) -> Dict[str, Any]:
        content = self.response_formatter(exc)
        if self.is_production and "error" in content:
            content["error"]["details"] = {}
        return content


def register_exception_handlers(
    app: FastAPI,
    response_formatter: Optional[ResponseFormatter] = None,
    is_production: bool = True
) -> None:
    """
    Register persistent config exception handlers for a FastAPI application.

    Args:
        app: FastAPI application instance
        response_formatter: Custom response formatter function
        is_production: Hide error details for non validation errors
    """
    registry = ExceptionHandlerRegistry(response_formatter, is_production)
    registry.register_handlers(app)
