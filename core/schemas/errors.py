"""
Schemas & Canonicalization
File: errors.py

Purpose: Standard error taxonomy across the airdrop distributor.
Defines both Pydantic models for structured error communication
and Python exceptions for control flow.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes used across the distributor."""

    # Schema & Validation Errors
    SCHEMA_VALIDATION_ERROR = "SCHEMA_VALIDATION_ERROR"
    CANONICALIZATION_ERROR = "CANONICALIZATION_ERROR"
    CONFIG_ERROR = "CONFIG_ERROR"

    # Claim Rejections
    ALREADY_CLAIMED = "ALREADY_CLAIMED"
    INVALID_SIGNATURE = "INVALID_SIGNATURE"
    INVALID_PROOF = "INVALID_PROOF"
    TRANSFER_FAILED = "TRANSFER_FAILED"

    # Token Ledger Errors
    INSUFFICIENT_BALANCE = "INSUFFICIENT_BALANCE"


# =============================================================================
# Pydantic Error Models (Structured Communication)
# =============================================================================

class AirdropError(BaseModel):
    """
    Base error model for structured error communication.

    Used for passing errors across the API and CLI boundaries without
    exceptions, enabling structured error handling and serialization.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=False,
        validate_assignment=True,
    )

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.INVALID_PROOF],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional structured details about the error",
    )
    retryable: bool = Field(
        default=False,
        description="Whether the operation can be retried",
    )

    def to_exception(self) -> "AirdropException":
        """Convert this error model to a raised exception."""
        cls = _EXCEPTIONS_BY_CODE.get(self.code)
        if cls is not None:
            return cls(message=self.message, details=self.details)
        return AirdropException(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class AirdropException(Exception):
    """
    Base exception for all airdrop distributor errors.

    This exception carries structured error information and can be
    converted to/from AirdropError models.
    """

    def __init__(
        self,
        message: str,
        code: str = "AIRDROP_ERROR",
        details: dict[str, Any] | None = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}
        self.retryable = retryable

    def to_error_model(self) -> AirdropError:
        """Convert this exception to an AirdropError model."""
        return AirdropError(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class CanonicalizationException(AirdropException):
    """Exception raised when an account or amount cannot be canonically encoded."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.CANONICALIZATION_ERROR,
            details=details,
            retryable=False,
        )


class ConfigException(AirdropException):
    """Exception raised when distributor configuration is missing or invalid."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.CONFIG_ERROR,
            details=details,
            retryable=False,
        )


class TransferError(AirdropException):
    """Raised by a token ledger when a transfer cannot be completed."""

    def __init__(
        self,
        message: str,
        code: str = ErrorCodes.TRANSFER_FAILED,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=code,
            details=details,
            retryable=False,
        )


# =============================================================================
# Claim Rejections
# =============================================================================

class ClaimException(AirdropException):
    """
    Base class for rejections of a single claim request.

    A rejection never leaves partial ledger state behind.
    """

    default_code = "CLAIM_REJECTED"

    def __init__(
        self,
        message: str,
        account: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = dict(details or {})
        if account:
            full_details["account"] = account
        super().__init__(
            message=message,
            code=self.default_code,
            details=full_details,
            retryable=False,
        )


class AlreadyClaimedException(ClaimException):
    """The account's claim flag is already set."""

    default_code = ErrorCodes.ALREADY_CLAIMED


class InvalidSignatureException(ClaimException):
    """Signature does not recover to the claiming account for this domain."""

    default_code = ErrorCodes.INVALID_SIGNATURE


class InvalidProofException(ClaimException):
    """Reconstructed Merkle root does not match the committed root."""

    default_code = ErrorCodes.INVALID_PROOF


class TransferFailedException(ClaimException):
    """The token ledger rejected the payout after every check passed."""

    default_code = ErrorCodes.TRANSFER_FAILED


_EXCEPTIONS_BY_CODE: dict[str, type[ClaimException]] = {
    ErrorCodes.ALREADY_CLAIMED: AlreadyClaimedException,
    ErrorCodes.INVALID_SIGNATURE: InvalidSignatureException,
    ErrorCodes.INVALID_PROOF: InvalidProofException,
    ErrorCodes.TRANSFER_FAILED: TransferFailedException,
}
