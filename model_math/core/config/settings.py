"""
Runtime configuration for model_math.

This module provides centralized configuration with validation and
environment variable support. The configuration decides how the error sink
reacts to numerical errors, how verbose the package logger is, and which
pseudo-random generator new ``PerThread`` contexts use.
"""

import os
import logging
from dataclasses import dataclass, fields
from typing import Any, Dict, Optional

from ..base.exceptions import ConfigurationError


# Global configuration instance
_global_config: Optional["RuntimeConfig"] = None

ERROR_POLICIES = ("log", "raise", "flag")
RNG_TYPES = ("mt19937", "pcg64", "philox", "sfc64")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

# 4 * epsilon
DEFAULT_LAMBERT_W_EPSILON = 4.0 * 2.0 ** -52
DEFAULT_TEMPORARY_BUFFER_SIZE = 2048

# Smallest scratch buffer able to hold the zeta accelerator's 100 complex terms.
MINIMUM_TEMPORARY_BUFFER_SIZE = 100 * 16


@dataclass
class RuntimeConfig:
    """Process-wide runtime settings.

    Attributes
    ----------
    error_policy : str
        How the error sink reacts: ``"log"`` logs a warning and sets a sticky
        flag, ``"raise"`` raises the matching exception, ``"flag"`` only sets
        the sticky flag.
    log_level : str
        Level applied to the ``model_math`` logger.
    rng_type : str
        Bit generator used by newly created ``PerThread`` contexts.
    rng_seed : int, optional
        Seed for newly created ``PerThread`` contexts; ``None`` draws entropy
        from the operating system.
    lambert_w_epsilon : float
        Default relative tolerance of ``lambert_w``.
    temporary_buffer_size : int
        Size in bytes of the per-thread scratch buffer.
    """

    error_policy: str = "log"
    log_level: str = "WARNING"
    rng_type: str = "mt19937"
    rng_seed: Optional[int] = None
    lambert_w_epsilon: float = DEFAULT_LAMBERT_W_EPSILON
    temporary_buffer_size: int = DEFAULT_TEMPORARY_BUFFER_SIZE

    def __post_init__(self):
        """Post-initialization normalization and validation."""
        self.error_policy = str(self.error_policy).lower()
        self.log_level = str(self.log_level).upper()
        self.rng_type = str(self.rng_type).lower()
        self.validate()

    def validate(self) -> None:
        """Validate configuration parameters.

        Raises
        ------
        ConfigurationError
            If any configuration parameter is invalid
        """
        errors = []

        if self.error_policy not in ERROR_POLICIES:
            errors.append(f"error_policy must be one of {list(ERROR_POLICIES)}")

        if self.log_level not in LOG_LEVELS:
            errors.append(f"log_level must be one of {list(LOG_LEVELS)}")

        if self.rng_type not in RNG_TYPES:
            errors.append(f"rng_type must be one of {list(RNG_TYPES)}")

        if self.rng_seed is not None and (not isinstance(self.rng_seed, int) or self.rng_seed < 0):
            errors.append("rng_seed must be a non-negative integer or None")

        if not 0 < self.lambert_w_epsilon < 1:
            errors.append("lambert_w_epsilon must be between 0 and 1")

        if self.temporary_buffer_size < MINIMUM_TEMPORARY_BUFFER_SIZE:
            errors.append(
                f"temporary_buffer_size must be at least {MINIMUM_TEMPORARY_BUFFER_SIZE} bytes"
            )

        if errors:
            raise ConfigurationError(f"Configuration validation failed: {'; '.join(errors)}")

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary.

        Returns
        -------
        dict
            Dictionary representation of configuration
        """
        return {f.name: getattr(self, f.name) for f in fields(self)}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RuntimeConfig":
        """Create configuration from dictionary.

        Parameters
        ----------
        data : dict
            Dictionary containing configuration data

        Returns
        -------
        RuntimeConfig
            New configuration instance

        Raises
        ------
        ConfigurationError
            If the dictionary holds unknown keys
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigurationError(f"Unknown configuration parameters: {unknown}",
                                     parameter=unknown[0])
        return cls(**data)

    def update(self, **kwargs) -> None:
        """Update configuration parameters.

        Parameters
        ----------
        **kwargs
            Configuration parameters to update

        Raises
        ------
        ConfigurationError
            If unknown parameter or validation fails
        """
        previous = self.to_dict()
        for key, value in kwargs.items():
            if hasattr(self, key):
                setattr(self, key, value)
            else:
                raise ConfigurationError(f"Unknown configuration parameter: {key}", parameter=key)

        try:
            self.__post_init__()
        except ConfigurationError:
            for key, value in previous.items():
                setattr(self, key, value)
            raise


def configure_logging(level: Optional[str] = None) -> logging.Logger:
    """Apply a log level to the package logger.

    Parameters
    ----------
    level : str, optional
        Level name; defaults to the global configuration's ``log_level``.

    Returns
    -------
    logging.Logger
        The ``model_math`` logger
    """
    if level is None:
        level = get_config().log_level
    logger = logging.getLogger("model_math")
    logger.setLevel(level.upper())
    return logger


def get_config() -> RuntimeConfig:
    """Get the global configuration instance.

    Returns
    -------
    RuntimeConfig
        Global configuration instance
    """
    global _global_config
    if _global_config is None:
        _global_config = RuntimeConfig()
    return _global_config


def set_config(config: RuntimeConfig) -> None:
    """Set the global configuration instance.

    Parameters
    ----------
    config : RuntimeConfig
        Configuration instance to set as global

    Raises
    ------
    TypeError
        If config is not a RuntimeConfig instance
    """
    global _global_config
    if not isinstance(config, RuntimeConfig):
        raise TypeError("config must be a RuntimeConfig instance")
    config.validate()
    _global_config = config


def reset_config() -> None:
    """Reset configuration to defaults."""
    global _global_config
    _global_config = RuntimeConfig()


def update_config(**kwargs) -> None:
    """Update global configuration parameters.

    Parameters
    ----------
    **kwargs
        Configuration parameters to update
    """
    config = get_config()
    config.update(**kwargs)


def load_config_from_env() -> RuntimeConfig:
    """Load configuration from environment variables.

    Returns
    -------
    RuntimeConfig
        Configuration loaded from environment

    Raises
    ------
    ConfigurationError
        If a variable cannot be converted or fails validation
    """
    env_mapping = {
        'MODEL_MATH_ERROR_POLICY': 'error_policy',
        'MODEL_MATH_LOG_LEVEL': 'log_level',
        'MODEL_MATH_RNG_TYPE': 'rng_type',
        'MODEL_MATH_RNG_SEED': 'rng_seed',
        'MODEL_MATH_LAMBERT_W_EPSILON': 'lambert_w_epsilon',
        'MODEL_MATH_TEMPORARY_BUFFER_SIZE': 'temporary_buffer_size',
    }

    updates = {}
    for env_var, attr_name in env_mapping.items():
        if env_var not in os.environ:
            continue
        value = os.environ[env_var]

        try:
            if attr_name == 'rng_seed':
                updates[attr_name] = int(value) if value else None
            elif attr_name == 'temporary_buffer_size':
                updates[attr_name] = int(value)
            elif attr_name == 'lambert_w_epsilon':
                updates[attr_name] = float(value)
            else:
                updates[attr_name] = value
        except ValueError as e:
            raise ConfigurationError(f"Invalid value for {env_var}: {value!r}",
                                     parameter=attr_name, cause=e)

    config = RuntimeConfig(**updates)
    if updates:
        logging.info(f"Loaded configuration from environment: {sorted(updates)}")
    return config
