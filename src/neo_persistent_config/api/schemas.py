"""Request and response models for the persistent config API."""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class ConfigItemResponse(BaseModel):
    """A persisted config item with its current value."""

    id: str = Field(..., description="Item id, used as input name")
    key: str = Field(..., description="Config store and storage key")
    label: str = Field(..., description="Human readable label")
    hint: Optional[str] = Field(default=None, description="Input hint")
    rules: List[Any] = Field(default_factory=list, description="Validation rules")
    cast: Optional[str] = Field(default=None, description="Storage cast type")
    encrypt: bool = Field(default=False, description="Whether the value is encrypted at rest")
    value: Any = Field(default=None, description="Current value")
    options: Dict[str, Any] = Field(default_factory=dict, description="Free form presentation options")

    @classmethod
    def from_item_dict(cls, data: Dict[str, Any]) -> "ConfigItemResponse":
        known = set(cls.model_fields) - {"options"}
        fields = {name: value for name, value in data.items() if name in known}
        # callable rules are reported by name
        fields["rules"] = [
            rule if isinstance(rule, str) else getattr(rule, "__name__", repr(rule))
            for rule in fields.get("rules", [])
        ]
        return cls(
            **fields,
            options={name: value for name, value in data.items() if name not in known},
        )


class ConfigItemListResponse(BaseModel):
    """All persisted config items."""

    items: List[ConfigItemResponse]
    total: int = Field(..., ge=0)


class ConfigUpdateRequest(BaseModel):
    """Values to validate and save, keyed by item id."""

    values: Dict[str, Any] = Field(..., description="Item values keyed by item id")

    model_config = {
        "json_schema_extra": {
            "example": {
                "values": {
                    "mail.driver": "smtp",
                    "mail.contact.address": "admin@example.com",
                }
            }
        }
    }


class OperationResponse(BaseModel):
    """Generic persistent config operation result."""

    success: bool = Field(..., description="Whether the operation was successful")
    message: Optional[str] = Field(default=None, description="Operation message")
    data: Optional[Dict[str, Any]] = Field(default=None, description="Additional operation data")
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
