"""
Merkle Airdrop Distributor

Single entry point for claims against a committed entitlement root.

Claim state machine (fixed order, never reordered):

    RECEIVED -> AUTHENTICATED -> MEMBERSHIP_CHECKED -> LEDGER_COMMITTED -> TRANSFERRED
        \\             \\                  \\
         AlreadyClaimed  InvalidSignature    InvalidProof        (-> REJECTED)

1. Already-claimed short circuit
2. Signature over the typed-data digest of (account, amount)
3. Merkle membership of encode_leaf(account, amount) under the root
4. Ledger flag committed
5. Token transfer, then one ClaimEvent

The whole sequence runs inside the account's claim slot. A transfer
failure reverts the ledger flag before the slot is released
(fail-closed). Once the transfer succeeds the flag is final: a failure
after that point propagates but never undoes the claim.
"""
from __future__ import annotations

import logging
from enum import Enum
from typing import Optional, Sequence

from core.config import RuntimeConfig
from core.crypto.hashing import DIGEST_SIZE, to_hex
from core.crypto.typed_data import (
    DEFAULT_DOMAIN_NAME,
    DEFAULT_DOMAIN_VERSION,
    EIP712Domain,
    MessageAuthenticator,
)
from core.events import ClaimEventLog
from core.ledger import ClaimLedger
from core.merkle.leaves import encode_leaf
from core.merkle.merkle_tree import verify_merkle_proof
from core.schemas.canonical import normalize_address, validate_amount
from core.schemas.claims import ClaimReceipt, ClaimRequest
from core.schemas.errors import (
    AlreadyClaimedException,
    ConfigException,
    InvalidProofException,
    InvalidSignatureException,
    TransferFailedException,
)
from core.schemas.verification import CheckResult, VerificationResult
from core.token import InMemoryTokenLedger, TokenLedger


logger = logging.getLogger(__name__)


class ClaimStage(str, Enum):
    """Progress of a single claim request."""
    RECEIVED = "received"
    AUTHENTICATED = "authenticated"
    MEMBERSHIP_CHECKED = "membership_checked"
    LEDGER_COMMITTED = "ledger_committed"
    TRANSFERRED = "transferred"
    REJECTED = "rejected"


class MerkleAirdrop:
    """
    Distributes a committed set of entitlements as one-time token transfers.

    Configuration is fixed at construction: the root, the token, and the
    signing domain (name, version, chain id, instance address) never change.

    Example:
        >>> airdrop = MerkleAirdrop(root, token, chain_id=1, verifying_contract=addr)
        >>> digest = airdrop.message_digest(alice, 100)   # what alice signs
        >>> airdrop.claim(alice, 100, proof, signature)
        >>> airdrop.has_claimed(alice)
        True
    """

    def __init__(
        self,
        merkle_root: bytes,
        token: TokenLedger,
        *,
        chain_id: int,
        verifying_contract: str,
        domain_name: str = DEFAULT_DOMAIN_NAME,
        domain_version: str = DEFAULT_DOMAIN_VERSION,
        ledger: Optional[ClaimLedger] = None,
        event_log: Optional[ClaimEventLog] = None,
    ) -> None:
        if len(merkle_root) != DIGEST_SIZE:
            raise ConfigException(
                f"Merkle root must be {DIGEST_SIZE} bytes, got {len(merkle_root)}",
            )
        self._merkle_root = bytes(merkle_root)
        self._token = token
        self._authenticator = MessageAuthenticator(
            EIP712Domain(
                name=domain_name,
                version=domain_version,
                chain_id=chain_id,
                verifying_contract=verifying_contract,
            )
        )
        self._ledger = ledger if ledger is not None else ClaimLedger()
        self._events = event_log if event_log is not None else ClaimEventLog()

    @classmethod
    def from_config(
        cls,
        config: RuntimeConfig,
        token: Optional[TokenLedger] = None,
    ) -> "MerkleAirdrop":
        """
        Build a distributor from runtime configuration.

        Without an explicit ``token``, an in-memory ledger is created and
        ``distribution.token_supply`` is minted to the distributor's own
        address so claims can be paid from it.
        """
        config.validate()
        verifying_contract = normalize_address(config.domain.verifying_contract)
        if token is None:
            token = InMemoryTokenLedger(
                config.distribution.token_address,
                holder=verifying_contract,
                name=config.distribution.token_name,
                symbol=config.distribution.token_symbol,
                initial_supply=config.distribution.token_supply,
            )
        logger.info(
            "Distributor %s on chain %d: root=%s token=%s",
            verifying_contract, config.domain.chain_id,
            config.distribution.merkle_root, token.address,
        )
        return cls(
            config.merkle_root_bytes(),
            token,
            chain_id=config.domain.chain_id,
            verifying_contract=verifying_contract,
            domain_name=config.domain.name,
            domain_version=config.domain.version,
        )

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------

    def get_root(self) -> bytes:
        return self._merkle_root

    def get_token(self) -> TokenLedger:
        return self._token

    @property
    def domain(self) -> EIP712Domain:
        return self._authenticator.domain

    @property
    def events(self) -> ClaimEventLog:
        return self._events

    def domain_separator(self) -> bytes:
        return self._authenticator.domain_separator()

    def message_digest(self, account: str, amount: int) -> bytes:
        """The digest ``account`` must sign to claim ``amount`` here."""
        return self._authenticator.message_digest(account, amount)

    def has_claimed(self, account: str) -> bool:
        return self._ledger.has_claimed(account)

    # ------------------------------------------------------------------
    # Claim
    # ------------------------------------------------------------------

    def claim(
        self,
        account: str,
        amount: int,
        proof_path: Sequence[bytes],
        signature: bytes,
    ) -> ClaimReceipt:
        """
        Verify and pay out one claim.

        Raises:
            AlreadyClaimedException: account already claimed
            InvalidSignatureException: signature not from account for this
                (account, amount) under this domain
            InvalidProofException: entitlement not under the committed root
            TransferFailedException: token ledger refused the payout; the
                ledger flag is rolled back
            CanonicalizationException: malformed account or amount
        """
        account = normalize_address(account)
        validate_amount(amount)
        stage = ClaimStage.RECEIVED

        with self._ledger.claim_slot(account) as slot:
            if slot.claimed:
                self._reject(stage, AlreadyClaimedException(
                    f"Account {account} has already claimed", account=account,
                ))

            digest = self.message_digest(account, amount)
            if not self._authenticator.authenticate(account, digest, signature):
                self._reject(stage, InvalidSignatureException(
                    "Signature does not authorize this claim", account=account,
                ))
            stage = ClaimStage.AUTHENTICATED

            leaf = encode_leaf(account, amount)
            if not verify_merkle_proof(proof_path, self._merkle_root, leaf):
                self._reject(stage, InvalidProofException(
                    "Merkle proof does not match the committed root",
                    account=account,
                    details={"proof_length": len(proof_path)},
                ))
            stage = ClaimStage.MEMBERSHIP_CHECKED

            slot.commit()
            stage = ClaimStage.LEDGER_COMMITTED

            try:
                self._token.transfer(account, amount)
            except Exception as e:
                slot.revert()
                logger.error(
                    "Transfer of %d to %s failed at stage %s: %s",
                    amount, account, stage.value, e,
                )
                raise TransferFailedException(
                    f"Token transfer failed: {e}",
                    account=account,
                    details={"amount": str(amount)},
                ) from e
            stage = ClaimStage.TRANSFERRED

            event = self._events.emit(
                account=account,
                amount=amount,
                merkle_root=to_hex(self._merkle_root),
                token=self._token.address,
            )

        logger.info("Claim paid: %s amount=%d (event %d)", account, amount, event.sequence)
        return ClaimReceipt(
            account=account,
            amount=amount,
            token=self._token.address,
            merkle_root=to_hex(self._merkle_root),
            sequence=event.sequence,
        )

    def submit(self, request: ClaimRequest) -> ClaimReceipt:
        """Claim from a validated wire request."""
        return self.claim(
            request.account,
            request.amount,
            request.proof_bytes(),
            request.signature_bytes(),
        )

    def check_claim(
        self,
        account: str,
        amount: int,
        proof_path: Sequence[bytes],
        signature: bytes,
    ) -> VerificationResult:
        """
        Dry run of every claim check without touching any state.

        All checks are reported; ``error`` is the rejection a real claim
        would hit first.
        """
        account = normalize_address(account)
        validate_amount(amount)
        result = VerificationResult(ok=True)

        checks: list[tuple[CheckResult, Optional[type]]] = []

        if self._ledger.has_claimed(account):
            checks.append((
                CheckResult.failed("not_claimed", f"Account {account} has already claimed"),
                AlreadyClaimedException,
            ))
        else:
            checks.append((CheckResult.passed("not_claimed", "Account has not claimed"), None))

        digest = self.message_digest(account, amount)
        if self._authenticator.authenticate(account, digest, signature):
            checks.append((
                CheckResult.passed("signature", "Signature recovers to account",
                                   details={"digest": to_hex(digest)}),
                None,
            ))
        else:
            checks.append((
                CheckResult.failed("signature", "Signature does not authorize this claim",
                                   details={"digest": to_hex(digest)}),
                InvalidSignatureException,
            ))

        leaf = encode_leaf(account, amount)
        if verify_merkle_proof(proof_path, self._merkle_root, leaf):
            checks.append((
                CheckResult.passed("merkle_proof", "Entitlement is under the committed root",
                                   details={"leaf": to_hex(leaf)}),
                None,
            ))
        else:
            checks.append((
                CheckResult.failed("merkle_proof", "Merkle proof does not match the committed root",
                                   details={"leaf": to_hex(leaf)}),
                InvalidProofException,
            ))

        for check, exc_type in checks:
            result.add_check(check)
            if exc_type is not None and result.error is None:
                result.error = exc_type(check.message, account=account).to_error_model()

        return result

    def _reject(self, stage: ClaimStage, exc: Exception) -> None:
        logger.info(
            "Claim %s -> %s: %s (%s)",
            stage.value, ClaimStage.REJECTED.value,
            getattr(exc, "code", type(exc).__name__), exc,
        )
        raise exc
