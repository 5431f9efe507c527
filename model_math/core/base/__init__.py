"""
Base components for model_math.

This module contains the exception hierarchy, the error sink every kernel
reports through, the process-wide constants and lookup tables, and the
parameter checks shared by the kernels.
"""

from .exceptions import (
    ModelMathError,
    TypeConversionError,
    InvalidParameterError,
    CanNotConvergeError,
    NaNError,
    InfinityError,
    InvalidRangeError,
    MalformedStringError,
    ConfigurationError,
    check_index,
)
from .error_sink import (
    ErrorKind,
    trigger_nan,
    trigger_infinity,
    trigger_invalid_parameter,
    trigger_type_conversion,
    trigger_can_not_converge,
    trigger_invalid_range,
    trigger_malformed_string,
    error_flags,
    has_error,
    clear_error_flags,
    error_policy,
)
from .constants import (
    CONSTANTS,
    pi,
    e,
    epsilon,
    infinity,
    NaN,
    default_lambert_w_epsilon,
    factorial_table,
    log_factorial_table,
)

__all__ = [
    # Exceptions
    "ModelMathError",
    "TypeConversionError",
    "InvalidParameterError",
    "CanNotConvergeError",
    "NaNError",
    "InfinityError",
    "InvalidRangeError",
    "MalformedStringError",
    "ConfigurationError",
    "check_index",
    # Error sink
    "ErrorKind",
    "trigger_nan",
    "trigger_infinity",
    "trigger_invalid_parameter",
    "trigger_type_conversion",
    "trigger_can_not_converge",
    "trigger_invalid_range",
    "trigger_malformed_string",
    "error_flags",
    "has_error",
    "clear_error_flags",
    "error_policy",
    # Constants
    "CONSTANTS",
    "pi",
    "e",
    "epsilon",
    "infinity",
    "NaN",
    "default_lambert_w_epsilon",
    "factorial_table",
    "log_factorial_table",
]
