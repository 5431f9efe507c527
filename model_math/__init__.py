"""
model_math: special functions, distributions and variadic statistics over
a small tower of scalar and container value types.
"""

__version__ = "0.1.0"
__author__ = "model_math developers"

from model_math.core import (
    ModelMathError,
    ConfigurationError,
    ErrorKind,
    error_flags,
    has_error,
    clear_error_flags,
    error_policy,
    RuntimeConfig,
    get_config,
    set_config,
    reset_config,
    update_config,
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
from model_math.core import dispatch as functions

__all__ = [
    "__version__",
    "ModelMathError",
    "ConfigurationError",
    "ErrorKind",
    "error_flags",
    "has_error",
    "clear_error_flags",
    "error_policy",
    "RuntimeConfig",
    "get_config",
    "set_config",
    "reset_config",
    "update_config",
    "ValueType",
    "Variant",
    "Set",
    "Tuple",
    "MatrixBoolean",
    "MatrixInteger",
    "MatrixReal",
    "MatrixComplex",
    "PerThread",
    "functions",
]


def get_version():
    """Get the version string."""
    return __version__


def get_info():
    """Get package information."""
    return {
        "version": __version__,
        "author": __author__,
        "kernels": len(functions.__all__),
    }
