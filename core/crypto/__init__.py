"""
Core cryptographic utilities.

Keccak-256 hashing, secp256k1 signature recovery, and structured-data
(EIP-712) digests for claim authorization.
"""
from .hashing import (
    DIGEST_SIZE,
    keccak256,
    hash_text,
    to_hex,
    from_hex,
    digest_from_hex,
    hash_concat,
)
from .signatures import (
    Signature,
    split_signature,
    join_signature,
    address_from_private_key,
    sign_digest,
    recover_address,
    is_valid_signature,
)
from .typed_data import (
    CLAIM_TYPEHASH,
    DOMAIN_TYPEHASH,
    EIP712Domain,
    MessageAuthenticator,
    claim_struct_hash,
    typed_data_digest,
)

__all__ = [
    "DIGEST_SIZE",
    "keccak256",
    "hash_text",
    "to_hex",
    "from_hex",
    "digest_from_hex",
    "hash_concat",
    "Signature",
    "split_signature",
    "join_signature",
    "address_from_private_key",
    "sign_digest",
    "recover_address",
    "is_valid_signature",
    "CLAIM_TYPEHASH",
    "DOMAIN_TYPEHASH",
    "EIP712Domain",
    "MessageAuthenticator",
    "claim_struct_hash",
    "typed_data_digest",
]
