"""Exception types for the ShopReco engine.

Read paths never let these escape the engine boundary (they degrade to an
empty result). The tracking write path raises them to the caller, and the
HTTP layer turns them into JSON error responses.
"""

from typing import Any, Dict, Optional


class ShopRecoError(Exception):
    """Base exception for ShopReco errors."""

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None,
    ):
        """Initialize exception.

        Args:
            message: Human-readable error message
            status_code: HTTP status code for API responses
            details: Additional error details for debugging
        """
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.details = details or {}


class ValidationError(ShopRecoError):
    """Raised when a tracking request is malformed (missing ids, unknown type)."""

    def __init__(self, message: str, field: str, value: Any = None):
        super().__init__(
            message=message,
            status_code=400,
            details={"field": field, "value": value},
        )


class StoreUnavailable(ShopRecoError):
    """Raised when the catalog, order or interaction store cannot be queried."""

    def __init__(self, operation: str, error: Optional[Exception] = None):
        message = f"Store unavailable during '{operation}'"
        if error is not None:
            message += f": {error}"
        super().__init__(
            message=message,
            status_code=503,
            details={
                "operation": operation,
                "error": str(error) if error is not None else None,
                "error_type": type(error).__name__ if error is not None else None,
            },
        )
