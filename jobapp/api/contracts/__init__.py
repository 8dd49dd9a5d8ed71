"""Public API response contracts."""

from jobapp.api.contracts.models import (
    ApiErrorResponse,
    GeneratedPdfResponse,
    HealthResponse,
)

__all__ = [
    "ApiErrorResponse",
    "GeneratedPdfResponse",
    "HealthResponse",
]
