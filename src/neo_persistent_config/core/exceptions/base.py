"""Root of the persistent config exception tree.

Every error carries a machine readable ``error_code`` (the class name unless
given) and a ``details`` mapping, both of which end up in API error bodies.
"""

from typing import Any, Dict, Optional


class PersistentConfigError(Exception):
    """Error raised by config items, storages, caches or validation."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or type(self).__name__
        self.details = dict(details or {})

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.error_code,
            "message": self.message,
            "details": self.details,
            "type": type(self).__name__,
        }


def create_error_response(exception: PersistentConfigError) -> Dict[str, Any]:
    """Wrap an error as ``{"error": {...}}``, the body returned by the API handlers."""
    return {"error": exception.to_dict()}
