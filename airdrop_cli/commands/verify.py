"""
CLI Verify Command

Offline dry run of a claim file against a root and signing domain:
- Signature recovers to the claiming account
- Merkle proof folds up to the committed root

No ledger is consulted; whether the account already claimed is only known
to a running distributor (see GET /claims/{account}).

Usage:
    airdrop verify claim.json [--root HEX] [--chain-id N] [--verifying-contract ADDR] [--json]

The claim file holds ``{"account", "amount", "proof", "signature"}``.
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace

from pydantic import ValidationError

from airdrop_cli.config import resolve_domain
from core.crypto.hashing import digest_from_hex, to_hex
from core.crypto.typed_data import MessageAuthenticator
from core.merkle.leaves import encode_leaf
from core.merkle.merkle_tree import verify_merkle_proof
from core.schemas.claims import ClaimRequest
from core.schemas.errors import ConfigException, InvalidProofException, InvalidSignatureException
from core.schemas.verification import CheckResult, VerificationResult


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


def verify_claim(
    request: ClaimRequest,
    merkle_root: bytes,
    authenticator: MessageAuthenticator,
) -> VerificationResult:
    """Check signature and membership of one claim, reporting both."""
    result = VerificationResult(ok=True)

    digest = authenticator.message_digest(request.account, request.amount)
    if authenticator.authenticate(request.account, digest, request.signature_bytes()):
        result.add_check(CheckResult.passed(
            "signature", "Signature recovers to account", details={"digest": to_hex(digest)},
        ))
    else:
        message = "Signature does not authorize this claim"
        result.add_check(CheckResult.failed("signature", message, details={"digest": to_hex(digest)}))
        result.error = InvalidSignatureException(message, account=request.account).to_error_model()

    leaf = encode_leaf(request.account, request.amount)
    if verify_merkle_proof(request.proof_bytes(), merkle_root, leaf):
        result.add_check(CheckResult.passed(
            "merkle_proof", "Entitlement is under the committed root", details={"leaf": to_hex(leaf)},
        ))
    else:
        message = "Merkle proof does not match the committed root"
        result.add_check(CheckResult.failed("merkle_proof", message, details={"leaf": to_hex(leaf)}))
        if result.error is None:
            result.error = InvalidProofException(message, account=request.account).to_error_model()

    return result


def verify_cmd(args: Namespace) -> int:
    """
    Execute the verify command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code
    """
    config = args.cli_config

    try:
        with open(args.claim_path) as f:
            request = ClaimRequest.model_validate(json.load(f))
    except FileNotFoundError:
        print(f"Error: Claim file not found: {args.claim_path}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except (ValidationError, ValueError) as e:
        print(f"Error: Invalid claim file: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    root_hex = args.root or config.runtime.distribution.merkle_root
    if not root_hex:
        print("Error: No merkle root configured (use --root)", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    try:
        merkle_root = digest_from_hex(root_hex)
    except ValueError as e:
        print(f"Error: Invalid merkle root: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    try:
        domain = resolve_domain(
            config,
            chain_id=args.chain_id,
            verifying_contract=args.verifying_contract,
            name=args.domain_name,
            version=args.domain_version,
        )
    except ConfigException as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    result = verify_claim(request, merkle_root, MessageAuthenticator(domain))

    if args.json:
        print(json.dumps({
            "ok": result.ok,
            "account": request.account,
            "amount": str(request.amount),
            "merkle_root": to_hex(merkle_root),
            "checks": [c.model_dump(mode="json") for c in result.checks],
            "error": result.error.model_dump(mode="json") if result.error else None,
        }, indent=2))
    else:
        print(f"account: {request.account}")
        print(f"amount: {request.amount}")
        print(f"merkle_root: {to_hex(merkle_root)}")
        for check in result.checks:
            status = "✓" if check.ok else "✗"
            print(f"  {status} {check.check_id}: {check.message}")
        print(f"ok: {str(result.ok).lower()}")

    if result.ok:
        logger.info("Claim verification passed")
        return EXIT_SUCCESS
    logger.warning("Claim verification failed")
    return EXIT_VERIFICATION_FAILED
