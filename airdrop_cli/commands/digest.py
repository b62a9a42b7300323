"""
CLI Digest Command

Print the typed-data digest an account signs to authorize its claim
under the configured (or overridden) signing domain.

Usage:
    airdrop digest <account> <amount> [--chain-id N] [--verifying-contract ADDR] [--json]
"""

from __future__ import annotations

import json
from argparse import Namespace

from airdrop_cli.config import resolve_domain
from core.crypto.hashing import to_hex
from core.crypto.typed_data import MessageAuthenticator
from core.schemas.canonical import normalize_address, validate_amount


EXIT_SUCCESS = 0


def digest_cmd(args: Namespace) -> int:
    """Execute the digest command."""
    domain = resolve_domain(
        args.cli_config,
        chain_id=args.chain_id,
        verifying_contract=args.verifying_contract,
        name=args.domain_name,
        version=args.domain_version,
    )
    account = normalize_address(args.account)
    amount = validate_amount(args.amount)

    authenticator = MessageAuthenticator(domain)
    result = {
        "account": account,
        "amount": str(amount),
        "chain_id": domain.chain_id,
        "verifying_contract": domain.verifying_contract,
        "domain_separator": to_hex(authenticator.domain_separator()),
        "digest": to_hex(authenticator.message_digest(account, amount)),
    }

    if args.json:
        print(json.dumps(result, indent=2))
    else:
        for key, value in result.items():
            print(f"{key}: {value}")
    return EXIT_SUCCESS
