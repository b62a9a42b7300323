"""
Merkle Airdrop CLI

Command-line interface for building and checking airdrop distributions.

Usage:
    python -m airdrop_cli build entitlements.csv --out merkle.json
    python -m airdrop_cli proof merkle.json 0xabc...
    python -m airdrop_cli digest 0xabc... 100
    python -m airdrop_cli verify claim.json
    python -m airdrop_cli config --init
"""

__version__ = "0.1.0"
