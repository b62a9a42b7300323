"""
Distributor API Error Handling

Standardized error handling for the API. Claim rejections raised by the
distributor are translated to HTTP statuses by error code.
"""

import logging
from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from api.models.responses import ErrorDetail, ErrorResponse
from core.schemas.errors import AirdropException, ErrorCodes


logger = logging.getLogger(__name__)


STATUS_BY_CODE: dict[str, int] = {
    ErrorCodes.ALREADY_CLAIMED: 409,
    ErrorCodes.INVALID_SIGNATURE: 401,
    ErrorCodes.INVALID_PROOF: 400,
    ErrorCodes.TRANSFER_FAILED: 502,
    ErrorCodes.CANONICALIZATION_ERROR: 400,
    ErrorCodes.SCHEMA_VALIDATION_ERROR: 400,
    ErrorCodes.CONFIG_ERROR: 503,
}


class APIError(Exception):
    """Base API error with structured response."""

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 400,
        details: dict[str, Any] | None = None,
    ):
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)

    def to_response(self) -> ErrorResponse:
        return ErrorResponse(
            ok=False,
            error=ErrorDetail(
                code=self.code,
                message=self.message,
                details=self.details,
            ),
        )


class ServiceNotConfiguredError(APIError):
    """The distributor could not be built from configuration."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(
            code=ErrorCodes.CONFIG_ERROR,
            message=message,
            status_code=503,
            details=details,
        )


def _error_content(code: str, message: str, details: dict[str, Any]) -> dict[str, Any]:
    return ErrorResponse(
        ok=False,
        error=ErrorDetail(code=code, message=message, details=details),
    ).model_dump(mode="json")


async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    """Handle APIError exceptions."""
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_response().model_dump(mode="json"),
    )


async def airdrop_error_handler(request: Request, exc: AirdropException) -> JSONResponse:
    """Handle claim rejections and input errors raised by the distributor."""
    status_code = STATUS_BY_CODE.get(exc.code, 400)
    logger.info("%s %s -> %d %s", request.method, request.url.path, status_code, exc.code)
    return JSONResponse(
        status_code=status_code,
        content=_error_content(exc.code, exc.message, exc.details),
    )


async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Malformed bodies and query parameters are reported as 400."""
    errors = [
        {"loc": [str(part) for part in err.get("loc", ())], "msg": err.get("msg", "")}
        for err in exc.errors()
    ]
    return JSONResponse(
        status_code=400,
        content=_error_content(
            ErrorCodes.SCHEMA_VALIDATION_ERROR,
            "Request validation failed",
            {"errors": errors},
        ),
    )


async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions."""
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content=_error_content(
            "INTERNAL_ERROR",
            "An unexpected error occurred",
            {"type": type(exc).__name__},
        ),
    )
