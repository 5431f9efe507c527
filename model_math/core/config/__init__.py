"""
Configuration management for model_math.

This module provides the global runtime configuration with validation and
environment variable support.
"""

from .settings import (
    RuntimeConfig,
    get_config,
    set_config,
    reset_config,
    update_config,
    load_config_from_env,
    configure_logging,
    ERROR_POLICIES,
    RNG_TYPES,
    LOG_LEVELS,
)

__all__ = [
    # Configuration classes
    "RuntimeConfig",
    # Global config functions
    "get_config",
    "set_config",
    "reset_config",
    "update_config",
    "load_config_from_env",
    "configure_logging",
    # Allowed values
    "ERROR_POLICIES",
    "RNG_TYPES",
    "LOG_LEVELS",
]
