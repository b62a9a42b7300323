"""
Runtime Configuration Module

Provides configuration loading and management for distributor instances.
"""

from .runtime import (
    ApiConfig,
    DistributionConfig,
    DomainConfig,
    RuntimeConfig,
    get_default_config,
    set_default_config,
)

__all__ = [
    "ApiConfig",
    "DistributionConfig",
    "DomainConfig",
    "RuntimeConfig",
    "get_default_config",
    "set_default_config",
]
