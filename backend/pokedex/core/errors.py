"""Error Hierarchy - typed, categorized exceptions for catalog failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Upstream errors are mapped here before they leave the infrastructure layer
    - to_response() produces the REST envelope; no internal details leaked
    - Partial enrichment failure is NOT an exception (see core/enrichment.Skipped)

Design Decisions:
    - Single hierarchy with PokedexError base: FastAPI global handler catches all
    - ErrorContext as dataclass: observability fields without coupling to logging
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    EXTERNAL_API = "external_api"
    INTERNAL = "internal"
    TIMEOUT = "timeout"


@dataclass
class ErrorContext:
    """Context attached to an error for logs and responses."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    url: str | None = None
    resource_id: str | None = None
    attempts: int | None = None
    debug_info: dict[str, Any] | None = None


class PokedexError(Exception):
    """Base exception for all catalog errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "resource_id": self.context.resource_id,
                    "attempts": self.context.attempts,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class ResourceNotFoundError(PokedexError):
    """Requested resource does not exist upstream."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.resource_id = resource_id
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, ctx, 404,
        )
        self.resource_type = resource_type


# ─── Upstream Errors (500-level) ────────────────────────────────

class UpstreamNetworkError(PokedexError):
    """Transport failure or timeout that survived every retry."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            f"PokeAPI unreachable: {message}",
            "UPSTREAM_NETWORK_ERROR", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.CRITICAL, context, 503,
        )


class UpstreamStatusError(PokedexError):
    """PokeAPI answered with a non-2xx status other than 404."""
    def __init__(self, status_code: int, url: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.url = url
        super().__init__(
            f"PokeAPI returned status {status_code}",
            "UPSTREAM_STATUS_ERROR", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.ERROR, ctx, 502,
        )
        self.status_code = status_code


class PayloadValidationError(PokedexError):
    """Upstream payload did not match the expected shape. Never retried."""
    def __init__(self, model_name: str, detail: str, context: ErrorContext | None = None):
        super().__init__(
            f"Invalid {model_name} payload: {detail}",
            "PAYLOAD_VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 502,
        )
        self.model_name = model_name
