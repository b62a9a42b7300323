"""
Runtime Configuration

Central configuration for a distributor instance: signing domain,
committed distribution, HTTP service, and logging.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any, Optional
from pathlib import Path

from dotenv import load_dotenv

from core.crypto.hashing import digest_from_hex
from core.crypto.typed_data import DEFAULT_DOMAIN_NAME, DEFAULT_DOMAIN_VERSION
from core.schemas.canonical import normalize_address
from core.schemas.errors import CanonicalizationException, ConfigException

load_dotenv()


ENV_PREFIX = "AIRDROP_"


@dataclass
class DomainConfig:
    """Signing domain of the distributor instance."""
    name: str = DEFAULT_DOMAIN_NAME
    version: str = DEFAULT_DOMAIN_VERSION
    chain_id: int = 1
    verifying_contract: Optional[str] = None


@dataclass
class DistributionConfig:
    """The committed entitlement root and the token it pays out."""
    merkle_root: Optional[str] = None
    token_address: Optional[str] = None
    token_name: str = "Airdrop Token"
    token_symbol: str = "DROP"
    token_supply: int = 0


@dataclass
class ApiConfig:
    """Configuration for the HTTP service."""
    host: str = "0.0.0.0"
    port: int = 8000


@dataclass
class RuntimeConfig:
    """
    Complete runtime configuration for a distributor.

    Can be loaded from:
    - Environment variables
    - YAML or JSON file
    - Programmatic construction
    """
    domain: DomainConfig = field(default_factory=DomainConfig)
    distribution: DistributionConfig = field(default_factory=DistributionConfig)
    api: ApiConfig = field(default_factory=ApiConfig)
    log_level: str = "INFO"
    extra: dict[str, Any] = field(default_factory=dict)

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        This is the SINGLE source of truth for all env var reading.

        Supported variables:
        - AIRDROP_DOMAIN_NAME / AIRDROP_DOMAIN_VERSION: signing domain
        - AIRDROP_CHAIN_ID: execution-environment identity
        - AIRDROP_VERIFYING_CONTRACT: distributor instance address
        - AIRDROP_MERKLE_ROOT: committed root (0x-prefixed hex)
        - AIRDROP_TOKEN_ADDRESS: token ledger address
        - AIRDROP_TOKEN_SUPPLY: amount minted to the distributor at startup
        - AIRDROP_LOG_LEVEL: log level
        """
        overrides: dict[str, Any] = {}

        def env(name: str) -> Optional[str]:
            return os.getenv(f"{ENV_PREFIX}{name}")

        # Domain settings
        if env("DOMAIN_NAME"):
            overrides.setdefault("domain", {})["name"] = env("DOMAIN_NAME")
        if env("DOMAIN_VERSION"):
            overrides.setdefault("domain", {})["version"] = env("DOMAIN_VERSION")
        if env("CHAIN_ID"):
            overrides.setdefault("domain", {})["chain_id"] = int(env("CHAIN_ID"))
        if env("VERIFYING_CONTRACT"):
            overrides.setdefault("domain", {})["verifying_contract"] = env("VERIFYING_CONTRACT")

        # Distribution settings
        if env("MERKLE_ROOT"):
            overrides.setdefault("distribution", {})["merkle_root"] = env("MERKLE_ROOT")
        if env("TOKEN_ADDRESS"):
            overrides.setdefault("distribution", {})["token_address"] = env("TOKEN_ADDRESS")
        if env("TOKEN_SUPPLY"):
            overrides.setdefault("distribution", {})["token_supply"] = int(env("TOKEN_SUPPLY"))

        if env("LOG_LEVEL"):
            overrides["log_level"] = env("LOG_LEVEL")

        return overrides

    @classmethod
    def from_env(cls) -> "RuntimeConfig":
        """
        Load configuration purely from environment variables.

        Uses defaults for any values not specified in env vars.
        """
        return cls.from_dict(cls._get_env_overrides())

    @classmethod
    def from_yaml(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a YAML (or JSON, a YAML subset) file."""
        import yaml
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f)

        return cls.from_dict(data or {})

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuntimeConfig":
        """Load configuration from a dictionary (supports partial data)."""
        domain_data = data.get("domain", {})
        distribution_data = data.get("distribution", {})
        api_data = data.get("api", {})

        domain = DomainConfig(**domain_data) if domain_data else DomainConfig()
        distribution = (
            DistributionConfig(**distribution_data) if distribution_data else DistributionConfig()
        )
        api = ApiConfig(**api_data) if api_data else ApiConfig()

        return cls(
            domain=domain,
            distribution=distribution,
            api=api,
            log_level=data.get("log_level", "INFO"),
            extra=data.get("extra", {}),
        )

    def with_env_overrides(self) -> "RuntimeConfig":
        """
        Return a new config with environment variable overrides applied.

        This allows loading from a config file first, then overlaying env vars.
        """
        overrides = self._get_env_overrides()
        if not overrides:
            return self

        import copy
        new_config = copy.deepcopy(self)

        for section in ("domain", "distribution"):
            if section in overrides:
                target = getattr(new_config, section)
                for key, value in overrides[section].items():
                    setattr(target, key, value)

        if "log_level" in overrides:
            new_config.log_level = overrides["log_level"]

        return new_config

    def validate(self) -> None:
        """
        Check that everything needed to run a distributor is present.

        Raises:
            ConfigException: On a missing or malformed value
        """
        missing = [
            name for name, value in (
                ("domain.verifying_contract", self.domain.verifying_contract),
                ("distribution.merkle_root", self.distribution.merkle_root),
                ("distribution.token_address", self.distribution.token_address),
            )
            if not value
        ]
        if missing:
            raise ConfigException(
                f"Missing required configuration: {', '.join(missing)}",
                details={"missing": missing},
            )
        try:
            normalize_address(self.domain.verifying_contract)
            normalize_address(self.distribution.token_address)
        except CanonicalizationException as e:
            raise ConfigException(e.message, details=e.details) from e
        self.merkle_root_bytes()
        if self.domain.chain_id < 0:
            raise ConfigException(f"chain_id must be non-negative, got {self.domain.chain_id}")

    def merkle_root_bytes(self) -> bytes:
        """The committed root as 32 raw bytes."""
        if not self.distribution.merkle_root:
            raise ConfigException("distribution.merkle_root is not set")
        try:
            return digest_from_hex(self.distribution.merkle_root)
        except ValueError as e:
            raise ConfigException(f"Invalid merkle_root: {e}") from e

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a dictionary."""
        return {
            "domain": {
                "name": self.domain.name,
                "version": self.domain.version,
                "chain_id": self.domain.chain_id,
                "verifying_contract": self.domain.verifying_contract,
            },
            "distribution": {
                "merkle_root": self.distribution.merkle_root,
                "token_address": self.distribution.token_address,
                "token_name": self.distribution.token_name,
                "token_symbol": self.distribution.token_symbol,
                "token_supply": self.distribution.token_supply,
            },
            "api": {
                "host": self.api.host,
                "port": self.api.port,
            },
            "log_level": self.log_level,
            "extra": self.extra,
        }


# Global default configuration
_default_config: Optional[RuntimeConfig] = None


def get_default_config() -> RuntimeConfig:
    """Get the default runtime configuration."""
    global _default_config
    if _default_config is None:
        _default_config = RuntimeConfig.from_env()
    return _default_config


def set_default_config(config: Optional[RuntimeConfig]) -> None:
    """Set (or with None, reset) the default runtime configuration."""
    global _default_config
    _default_config = config
