"""
CLI Build and Proof Commands

Build the distribution file for an entitlement CSV, and look up one
account's proof in it.

Usage:
    airdrop build entitlements.csv [--out merkle.json] [--json]
    airdrop proof merkle.json <account> [--json]

The CSV needs a header row with ``address`` and ``amount`` columns.
"""

from __future__ import annotations

import csv
import json
import logging
import sys
from argparse import Namespace
from pathlib import Path
from typing import Any

from core.crypto.hashing import digest_from_hex
from core.merkle.merkle_proofs import EntitlementTree, MerkleVerifier
from core.schemas.canonical import normalize_address
from core.schemas.claims import Entitlement


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


def load_entitlements_csv(path: Path) -> list[Entitlement]:
    """
    Read ``address,amount`` rows into entitlements.

    Blank rows are skipped.

    Raises:
        ValueError: On a missing header, a malformed row, or no rows at all
    """
    entries: list[Entitlement] = []
    with open(path, newline="") as f:
        reader = csv.DictReader(f)
        fields = reader.fieldnames or []
        if "address" not in fields or "amount" not in fields:
            raise ValueError("CSV needs header: address,amount")
        for line_no, row in enumerate(reader, start=2):
            address = (row.get("address") or "").strip()
            amount = (row.get("amount") or "").strip()
            if not address and not amount:
                continue
            try:
                entries.append(Entitlement(account=address, amount=int(amount)))
            except ValueError as e:
                raise ValueError(f"{path}:{line_no}: invalid row: {e}") from e
    if not entries:
        raise ValueError(f"No entitlement rows in {path}")
    return entries


def build_cmd(args: Namespace) -> int:
    """
    Execute the build command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code
    """
    csv_path = Path(args.csv)
    out_path = Path(args.out)

    if not csv_path.exists():
        print(f"Error: CSV not found: {csv_path}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    try:
        tree = EntitlementTree(load_entitlements_csv(csv_path))
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    distribution = tree.to_dict()
    with open(out_path, "w") as f:
        json.dump(distribution, f, indent=2)
    logger.info(f"Wrote {len(tree)} entitlements to {out_path}")

    if args.json:
        print(json.dumps({
            "merkle_root": distribution["merkle_root"],
            "token_total": distribution["token_total"],
            "entries": len(tree),
            "out": str(out_path),
        }, indent=2))
    else:
        print(f"merkle_root: {distribution['merkle_root']}")
        print(f"token_total: {distribution['token_total']}")
        print(f"entries: {len(tree)}")
        print(f"written: {out_path}")

    return EXIT_SUCCESS


def lookup_proof(distribution: dict[str, Any], account: str) -> dict[str, Any] | None:
    """
    Find ``account`` in a distribution file and re-verify its proof.

    Returns None if the account has no entitlement.
    """
    account = normalize_address(account)
    entry = distribution.get("claims", {}).get(account)
    if entry is None:
        return None

    root = digest_from_hex(distribution["merkle_root"])
    proof = [digest_from_hex(node) for node in entry["proof"]]
    valid = MerkleVerifier.verify_entitlement(account, int(entry["amount"]), proof, root)
    return {
        "account": account,
        "amount": entry["amount"],
        "index": entry.get("index"),
        "leaf": entry.get("leaf"),
        "proof": entry["proof"],
        "merkle_root": distribution["merkle_root"],
        "valid": valid,
    }


def proof_cmd(args: Namespace) -> int:
    """Execute the proof command."""
    tree_path = Path(args.tree)
    if not tree_path.exists():
        print(f"Error: Distribution file not found: {tree_path}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    with open(tree_path) as f:
        distribution = json.load(f)

    result = lookup_proof(distribution, args.account)
    if result is None:
        print(f"Error: Account not in distribution: {args.account}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    if args.json:
        print(json.dumps(result, indent=2))
    else:
        print(f"account: {result['account']}")
        print(f"amount: {result['amount']}")
        print(f"leaf: {result['leaf']}")
        print(f"proof ({len(result['proof'])}):")
        for node in result["proof"]:
            print(f"  {node}")
        print(f"valid: {str(result['valid']).lower()}")

    if not result["valid"]:
        logger.warning(f"Proof for {result['account']} does not match the root")
        return EXIT_VERIFICATION_FAILED
    return EXIT_SUCCESS
