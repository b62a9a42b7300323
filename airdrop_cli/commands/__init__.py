"""
CLI command modules.
"""

from airdrop_cli.commands import build, digest, verify

__all__ = ["build", "digest", "verify"]
