"""
Schemas & Canonicalization
File: __init__.py

Purpose: Export the public API for the schemas module.
This is the main entry point for other modules to import schema definitions.
"""

# Error models and exceptions
from .errors import (
    AirdropError,
    AirdropException,
    AlreadyClaimedException,
    CanonicalizationException,
    ClaimException,
    ConfigException,
    ErrorCodes,
    InvalidProofException,
    InvalidSignatureException,
    TransferError,
    TransferFailedException,
)

# Canonical serialization API (must load before claims)
from .canonical import (
    UINT256_MAX,
    WORD_SIZE,
    address_bytes,
    encode_address,
    encode_bytes32,
    encode_entitlement,
    encode_uint256,
    normalize_address,
    validate_amount,
)

# Claim schemas
from .claims import (
    ClaimReceipt,
    ClaimRequest,
    Entitlement,
)

# Verification schemas
from .verification import (
    CheckResult,
    CheckSeverity,
    VerificationResult,
)


__all__ = [
    # Errors
    "AirdropError",
    "AirdropException",
    "AlreadyClaimedException",
    "CanonicalizationException",
    "ClaimException",
    "ConfigException",
    "ErrorCodes",
    "InvalidProofException",
    "InvalidSignatureException",
    "TransferError",
    "TransferFailedException",
    # Canonical serialization
    "UINT256_MAX",
    "WORD_SIZE",
    "address_bytes",
    "encode_address",
    "encode_bytes32",
    "encode_entitlement",
    "encode_uint256",
    "normalize_address",
    "validate_amount",
    # Claims
    "ClaimReceipt",
    "ClaimRequest",
    "Entitlement",
    # Verification
    "CheckResult",
    "CheckSeverity",
    "VerificationResult",
]
