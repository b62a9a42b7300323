"""
Structured-Data (EIP-712) Message Digests

Builds the digest a claimant signs for an (account, amount) claim:

    domain_separator = keccak256(abi(DOMAIN_TYPEHASH, keccak(name),
                                     keccak(version), chainId, verifyingContract))
    struct_hash      = keccak256(abi(CLAIM_TYPEHASH, account, amount))
    digest           = keccak256(0x19 0x01 || domain_separator || struct_hash)

Binding chainId and verifyingContract into the separator means identical
claim content hashes differently on every deployment, so a signature for one
distributor never validates on another.
"""
from __future__ import annotations

from dataclasses import dataclass, field

from core.crypto.hashing import hash_text, keccak256
from core.crypto.signatures import is_valid_signature
from core.schemas.canonical import (
    encode_address,
    encode_bytes32,
    encode_uint256,
    normalize_address,
)


EIP712_PREFIX = b"\x19\x01"

DOMAIN_TYPE = (
    "EIP712Domain(string name,string version,uint256 chainId,address verifyingContract)"
)
CLAIM_TYPE = "AirDropClaim(address account,uint256 amount)"

DOMAIN_TYPEHASH: bytes = hash_text(DOMAIN_TYPE)
CLAIM_TYPEHASH: bytes = hash_text(CLAIM_TYPE)

DEFAULT_DOMAIN_NAME = "MerkleAirdrop"
DEFAULT_DOMAIN_VERSION = "1"


@dataclass(frozen=True)
class EIP712Domain:
    """
    Signing domain of one distributor instance.

    Attributes:
        name: Human-readable signing domain name
        version: Domain version string
        chain_id: Execution-environment identity
        verifying_contract: Address of the distributor instance
    """
    name: str
    version: str
    chain_id: int
    verifying_contract: str
    _separator: bytes = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "verifying_contract", normalize_address(self.verifying_contract)
        )
        object.__setattr__(self, "_separator", self._compute_separator())

    def _compute_separator(self) -> bytes:
        return keccak256(
            encode_bytes32(DOMAIN_TYPEHASH)
            + encode_bytes32(hash_text(self.name))
            + encode_bytes32(hash_text(self.version))
            + encode_uint256(self.chain_id)
            + encode_address(self.verifying_contract)
        )

    def separator(self) -> bytes:
        """The 32-byte domain separator, computed once at construction."""
        return self._separator


def claim_struct_hash(account: str, amount: int) -> bytes:
    """keccak256 of the ABI-encoded AirDropClaim struct."""
    return keccak256(
        encode_bytes32(CLAIM_TYPEHASH)
        + encode_address(account)
        + encode_uint256(amount)
    )


def typed_data_digest(domain_separator: bytes, struct_hash: bytes) -> bytes:
    """Final ``\\x19\\x01`` digest over a domain separator and struct hash."""
    return keccak256(
        EIP712_PREFIX + encode_bytes32(domain_separator) + encode_bytes32(struct_hash)
    )


class MessageAuthenticator:
    """
    Builds claim digests for one domain and validates signatures over them.

    Example:
        >>> auth = MessageAuthenticator(EIP712Domain("MerkleAirdrop", "1", 1, contract))
        >>> digest = auth.message_digest(account, 100)
        >>> auth.authenticate(account, digest, signature)
        True
    """

    def __init__(self, domain: EIP712Domain) -> None:
        self._domain = domain

    @property
    def domain(self) -> EIP712Domain:
        return self._domain

    def domain_separator(self) -> bytes:
        return self._domain.separator()

    def message_digest(self, account: str, amount: int) -> bytes:
        """The exact digest ``account`` must sign to claim ``amount``."""
        return typed_data_digest(
            self._domain.separator(), claim_struct_hash(account, amount)
        )

    def authenticate(self, account: str, digest: bytes, signature: bytes) -> bool:
        """
        True iff ``signature`` over ``digest`` was produced by ``account``.

        Malformed signatures return False instead of raising.
        """
        return is_valid_signature(account, digest, signature)


__all__ = [
    "EIP712_PREFIX",
    "DOMAIN_TYPE",
    "CLAIM_TYPE",
    "DOMAIN_TYPEHASH",
    "CLAIM_TYPEHASH",
    "DEFAULT_DOMAIN_NAME",
    "DEFAULT_DOMAIN_VERSION",
    "EIP712Domain",
    "claim_struct_hash",
    "typed_data_digest",
    "MessageAuthenticator",
]
