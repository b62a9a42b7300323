"""
Airdrop CLI Configuration

Configuration management for the airdrop CLI.
Supports environment variables and configuration files.

The distributor settings (domain, distribution) are a RuntimeConfig; the
CLI adds only its own output and logging options on top.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from core.config.runtime import ENV_PREFIX, RuntimeConfig
from core.crypto.typed_data import EIP712Domain
from core.schemas.errors import CanonicalizationException, ConfigException


DEFAULT_CONFIG_PATHS = (
    Path("airdrop.json"),
    Path(".airdrop.json"),
    Path.home() / ".config" / "airdrop" / "config.json",
)


@dataclass
class CLIConfig:
    """Main CLI configuration."""

    runtime: RuntimeConfig = field(default_factory=RuntimeConfig)

    # Logging
    log_file: str | None = None

    # Output
    default_output_format: str = "human"  # "human" or "json"

    @property
    def log_level(self) -> str:
        return self.runtime.log_level

    def to_dict(self) -> dict[str, Any]:
        data = self.runtime.to_dict()
        data["log_file"] = self.log_file
        data["default_output_format"] = self.default_output_format
        return data


def load_config_from_file(path: Path) -> CLIConfig:
    """Load configuration from a JSON file."""
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path, "r") as f:
        data = json.load(f)

    return CLIConfig(
        runtime=RuntimeConfig.from_dict(data),
        log_file=data.get("log_file"),
        default_output_format=data.get("default_output_format", "human"),
    )


def load_config(config_path: Path | None = None) -> CLIConfig:
    """
    Load configuration from file and/or environment.

    Environment variables override file settings.

    Args:
        config_path: Optional path to config file; searched in the default
            locations when omitted

    Returns:
        Merged configuration
    """
    # Start with defaults
    config = CLIConfig()

    if config_path is not None:
        config = load_config_from_file(config_path)
    else:
        for default_path in DEFAULT_CONFIG_PATHS:
            if default_path.exists():
                config = load_config_from_file(default_path)
                break

    # Override with environment variables
    config.runtime = config.runtime.with_env_overrides()
    if os.getenv(f"{ENV_PREFIX}LOG_FILE"):
        config.log_file = os.getenv(f"{ENV_PREFIX}LOG_FILE")

    return config


def resolve_domain(
    config: CLIConfig,
    *,
    chain_id: Optional[int] = None,
    verifying_contract: Optional[str] = None,
    name: Optional[str] = None,
    version: Optional[str] = None,
) -> EIP712Domain:
    """
    Signing domain from configuration, with command-line overrides.

    Raises:
        ConfigException: if no verifying contract is configured or it is malformed
    """
    domain = config.runtime.domain
    verifying_contract = verifying_contract or domain.verifying_contract
    if not verifying_contract:
        raise ConfigException(
            "No verifying contract configured "
            f"(use --verifying-contract or {ENV_PREFIX}VERIFYING_CONTRACT)"
        )
    try:
        return EIP712Domain(
            name=name or domain.name,
            version=version or domain.version,
            chain_id=domain.chain_id if chain_id is None else chain_id,
            verifying_contract=verifying_contract,
        )
    except CanonicalizationException as e:
        raise ConfigException(e.message, details=e.details) from e


def get_default_config_template() -> str:
    """Get a template configuration file."""
    return """{
  "domain": {
    "name": "MerkleAirdrop",
    "version": "1",
    "chain_id": 1,
    "verifying_contract": "0x0000000000000000000000000000000000000000"
  },
  "distribution": {
    "merkle_root": null,
    "token_address": null,
    "token_name": "Airdrop Token",
    "token_symbol": "DROP",
    "token_supply": 0
  },
  "api": {
    "host": "0.0.0.0",
    "port": 8000
  },
  "log_level": "INFO",
  "log_file": null,
  "default_output_format": "human"
}
"""
