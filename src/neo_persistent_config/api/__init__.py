"""FastAPI integration for managing persistent config."""

from .routers import create_config_router
from .exception_handlers import ExceptionHandlerRegistry, register_exception_handlers
from .schemas import (
    ConfigItemResponse,
    ConfigItemListResponse,
    ConfigUpdateRequest,
    OperationResponse,
)

__all__ = [
    "create_config_router",
    "ExceptionHandlerRegistry",
    "register_exception_handlers",
    "ConfigItemResponse",
    "ConfigItemListResponse",
    "ConfigUpdateRequest",
    "OperationResponse",
]
