"""
Common test fixtures shared by all modules.

Provides deterministic keys and factories for the distributor stack:
- Accounts with known private keys (Alice, Bob, Carol)
- EntitlementTree over {Alice: 100, Bob: 50}
- InMemoryTokenLedger funded at the distributor address
- MerkleAirdrop wired to both
- Signed claim arguments and ClaimRequest wire models
"""

from typing import Optional, Sequence

from core.crypto.hashing import keccak256
from core.crypto.signatures import address_from_private_key, sign_digest
from core.merkle.merkle_proofs import EntitlementTree
from core.schemas.claims import ClaimRequest
from core.schemas.errors import TransferError
from core.token import InMemoryTokenLedger, TokenLedger
from orchestrator.distributor import MerkleAirdrop


ALICE_KEY = keccak256(b"alice")
BOB_KEY = keccak256(b"bob")
CAROL_KEY = keccak256(b"carol")

ALICE = address_from_private_key(ALICE_KEY)
BOB = address_from_private_key(BOB_KEY)
CAROL = address_from_private_key(CAROL_KEY)

CHAIN_ID = 1
CONTRACT = "0x" + "c0" * 20
OTHER_CONTRACT = "0x" + "c1" * 20
TOKEN = "0x" + "70" * 20

DEFAULT_ENTITLEMENTS = ((ALICE, 100), (BOB, 50))


def make_tree(pairs: Optional[Sequence[tuple[str, int]]] = None) -> EntitlementTree:
    """Entitlement tree over ``pairs`` (default: Alice 100, Bob 50)."""
    return EntitlementTree.from_pairs(pairs or DEFAULT_ENTITLEMENTS)


def make_token(supply: int = 1_000, holder: str = CONTRACT) -> InMemoryTokenLedger:
    """Token ledger with ``supply`` minted to ``holder``."""
    return InMemoryTokenLedger(TOKEN, holder, initial_supply=supply)


def make_airdrop(
    tree: Optional[EntitlementTree] = None,
    token: Optional[TokenLedger] = None,
    *,
    chain_id: int = CHAIN_ID,
    verifying_contract: str = CONTRACT,
) -> tuple[EntitlementTree, MerkleAirdrop]:
    """A distributor over ``tree`` paying from ``token``; returns both."""
    tree = tree if tree is not None else make_tree()
    airdrop = MerkleAirdrop(
        tree.root,
        token if token is not None else make_token(holder=verifying_contract),
        chain_id=chain_id,
        verifying_contract=verifying_contract,
    )
    return tree, airdrop


def sign_claim(airdrop: MerkleAirdrop, key: bytes, account: str, amount: int) -> bytes:
    """Signature by ``key`` over the claim digest of (account, amount)."""
    return sign_digest(airdrop.message_digest(account, amount), key)


def make_claim(
    airdrop: MerkleAirdrop,
    tree: EntitlementTree,
    key: bytes,
    account: str,
) -> tuple[str, int, list[bytes], bytes]:
    """Positional ``claim()`` arguments for ``account``'s own entitlement."""
    amount = tree.entitlement_for(account).amount
    proof = tree.proof_for(account)
    return account, amount, proof.siblings, sign_claim(airdrop, key, account, amount)


def make_claim_request(
    airdrop: MerkleAirdrop,
    tree: EntitlementTree,
    key: bytes,
    account: str,
) -> ClaimRequest:
    """Wire model for ``account``'s own entitlement."""
    return ClaimRequest.from_parts(*make_claim(airdrop, tree, key, account))


class FailingTokenLedger(TokenLedger):
    """Token ledger whose transfers always fail."""

    def __init__(self, address: str = TOKEN) -> None:
        self._address = address
        self.attempts = 0

    @property
    def address(self) -> str:
        return self._address

    def transfer(self, to: str, amount: int) -> None:
        self.attempts += 1
        raise TransferError("token paused")

    def balance_of(self, account: str) -> int:
        return 0
