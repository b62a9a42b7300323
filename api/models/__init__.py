"""API response models."""

from api.models.responses import (
    ClaimCheckResponse,
    ClaimResponse,
    ClaimStatusResponse,
    DigestResponse,
    DomainInfo,
    ErrorDetail,
    ErrorResponse,
    HealthResponse,
    RootResponse,
    TokenResponse,
)

__all__ = [
    "ClaimCheckResponse",
    "ClaimResponse",
    "ClaimStatusResponse",
    "DigestResponse",
    "DomainInfo",
    "ErrorDetail",
    "ErrorResponse",
    "HealthResponse",
    "RootResponse",
    "TokenResponse",
]
