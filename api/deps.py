"""
Distributor API Dependencies

Dependency injection for the API.
Provides the process-wide distributor instance built from configuration.
"""

from __future__ import annotations

import json
import logging
import threading
from pathlib import Path
from typing import Optional

from api.errors import ServiceNotConfiguredError
from core.config.runtime import RuntimeConfig
from core.schemas.errors import ConfigException
from orchestrator.distributor import MerkleAirdrop

logger = logging.getLogger(__name__)


CONFIG_SEARCH_PATHS = (
    Path("airdrop.json"),
    Path(".airdrop.json"),
    Path.home() / ".config" / "airdrop" / "config.json",
)

_airdrop: Optional[MerkleAirdrop] = None
_airdrop_lock = threading.Lock()


def _load_runtime_config() -> RuntimeConfig:
    """Load RuntimeConfig from config file, then overlay environment variables.

    Search order for config file:
      1. ./airdrop.json
      2. ./.airdrop.json
      3. ~/.config/airdrop/config.json

    Environment variables ALWAYS override config file values.
    The .env file is loaded automatically by core.config.runtime on import.
    """
    config: RuntimeConfig | None = None

    for path in CONFIG_SEARCH_PATHS:
        if path.exists():
            try:
                with open(path) as f:
                    data = json.load(f)
                logger.info(f"Loaded config from {path}")
                config = RuntimeConfig.from_dict(data)
                break
            except (OSError, ValueError, TypeError) as e:
                logger.warning(f"Failed to parse {path}: {e}")

    if config is None:
        # No config file found, start with defaults
        config = RuntimeConfig()

    # Always apply environment variable overrides
    return config.with_env_overrides()


def get_airdrop() -> MerkleAirdrop:
    """
    Get the distributor served by this process.

    Built lazily from configuration on first use; claim state lives for
    the lifetime of the process.

    Raises:
        ServiceNotConfiguredError: if configuration is missing or invalid
    """
    global _airdrop
    with _airdrop_lock:
        if _airdrop is None:
            config = _load_runtime_config()
            try:
                _airdrop = MerkleAirdrop.from_config(config)
            except ConfigException as e:
                raise ServiceNotConfiguredError(e.message, details=e.details) from e
        return _airdrop


def set_airdrop(airdrop: Optional[MerkleAirdrop]) -> None:
    """Replace (or with None, reset) the served distributor."""
    global _airdrop
    with _airdrop_lock:
        _airdrop = airdrop
