"""
Router factory for managing persistent config over HTTP.

The router is built around a dependency returning the application's
PersistentRepository, so it can be mounted in any FastAPI application:

    app.include_router(
        create_config_router(lambda: container.persistent_config),
        prefix="/admin/config",
    )
"""
import logging
from typing import Callable

from fastapi import APIRouter, Depends, status

from ..repositories.persistent_repository import PersistentRepository
from .schemas import (
    ConfigItemListResponse,
    ConfigItemResponse,
    ConfigUpdateRequest,
    OperationResponse,
)

logger = logging.getLogger(__name__)


def create_config_router(
    get_repository: Callable[[], PersistentRepository],
    **kwargs
) -> APIRouter:
    """
    Create a router exposing persistent config items.

    Args:
        get_repository: FastAPI dependency returning the persistent repository
        **kwargs: Additional router arguments (prefix, tags, dependencies)

    Returns:
        Configured router
    """
    kwargs.setdefault("tags", ["Persistent Config"])
    router = APIRouter(**kwargs)

    @router.get(
        "/",
        response_model=ConfigItemListResponse,
        summary="List config items",
        description="List persisted config items with their current values"
    )
    def list_items(
        repository: PersistentRepository = Depends(get_repository)
    ) -> ConfigItemListResponse:
        if not repository.is_restored:
            repository.restore()
        items = [
            ConfigItemResponse.from_item_dict(item.to_dict())
            for item in repository.get_items().values()
        ]
        return ConfigItemListResponse(items=items, total=len(items))

    @router.put(
        "/",
        response_model=OperationResponse,
        summary="Save config values",
        description="Validate and persist config item values keyed by item id"
    )
    def save_values(
        request: ConfigUpdateRequest,
        repository: PersistentRepository = Depends(get_repository)
    ) -> OperationResponse:
        values = repository.validate(request.values)
        repository.save(values)
        logger.info(f"Persistent config updated via API: {', '.join(sorted(values))}")
        return OperationResponse(
            success=True,
            message="Config values saved successfully",
            data={"saved": sorted(values)}
        )

    @router.delete(
        "/",
        response_model=OperationResponse,
        summary="Reset config values",
        description="Clear all persisted values, restoring origin config"
    )
    def reset_values(
        repository: PersistentRepository = Depends(get_repository)
    ) -> OperationResponse:
        repository.reset()
        return OperationResponse(success=True, message="Config values reset successfully")

    @router.delete(
        "/{key}",
        response_model=OperationResponse,
        status_code=status.HTTP_200_OK,
        summary="Reset config value",
        description="Clear one persisted value by storage key, restoring its origin value"
    )
    def reset_value(
        key: str,
        repository: PersistentRepository = Depends(get_repository)
    ) -> OperationResponse:
        repository.reset_value(key)
        return OperationResponse(
            success=True,
            message="Config value reset successfully",
            data={"key": key}
        )

    return router
