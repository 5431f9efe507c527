"""
Core functionality for model_math.

This module provides the foundational components the public functions
build upon: the exception hierarchy and error sink, the runtime
configuration, the value types, the typed numerical kernels and the
polymorphic dispatch layer.
"""

from model_math.core.base import (
    ModelMathError,
    ConfigurationError,
    ErrorKind,
    error_flags,
    has_error,
    clear_error_flags,
    error_policy,
)
from model_math.core.config import (
    RuntimeConfig,
    get_config,
    set_config,
    reset_config,
    update_config,
)
from model_math.core.values import (
    ValueType,
    Variant,
    Set,
    Tuple,
    MatrixBoolean,
    MatrixInteger,
    MatrixReal,
    MatrixComplex,
    PerThread,
)

__all__ = [
    # Errors
    "ModelMathError",
    "ConfigurationError",
    "ErrorKind",
    "error_flags",
    "has_error",
    "clear_error_flags",
    "error_policy",
    # Configuration
    "RuntimeConfig",
    "get_config",
    "set_config",
    "reset_config",
    "update_config",
    # Values
    "ValueType",
    "Variant",
    "Set",
    "Tuple",
    "MatrixBoolean",
    "MatrixInteger",
    "MatrixReal",
    "MatrixComplex",
    "PerThread",
]
