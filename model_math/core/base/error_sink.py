"""
Central error sink for the numerical kernels.

Kernels never raise on numerical trouble themselves. They call one of the
``trigger_*`` functions below and then return their sentinel value (NaN, an
empty matrix, ...). The active ``error_policy`` of the runtime configuration
decides what the sink does:

``"log"``
    log a warning and record a sticky flag (default)
``"raise"``
    raise the matching :class:`ModelMathError` subclass
``"flag"``
    only record a sticky flag

Sticky flags accumulate until :func:`clear_error_flags` is called.
"""

import logging
from contextlib import contextmanager
from enum import Enum
from typing import Any, Dict, Iterator, Optional

from .exceptions import (
    ModelMathError,
    TypeConversionError,
    InvalidParameterError,
    CanNotConvergeError,
    NaNError,
    InfinityError,
    InvalidRangeError,
    MalformedStringError,
)

logger = logging.getLogger(__name__)


class ErrorKind(Enum):
    """Categories of errors reported through the sink."""

    NAN = "nan"
    INFINITY = "infinity"
    INVALID_PARAMETER = "invalid_parameter"
    TYPE_CONVERSION = "type_conversion"
    CAN_NOT_CONVERGE = "can_not_converge"
    INVALID_RANGE = "invalid_range"
    MALFORMED_STRING = "malformed_string"


_flags: Dict[ErrorKind, int] = {}


def _current_policy() -> str:
    # Imported here, the configuration package itself depends on base.
    from ..config.settings import get_config
    return get_config().error_policy


def _report(kind: ErrorKind, error: ModelMathError, always_raise: bool = False) -> None:
    _flags[kind] = _flags.get(kind, 0) + 1

    policy = _current_policy()
    if always_raise or policy == "raise":
        raise error
    if policy == "log":
        logger.warning(str(error))


def trigger_nan(context: Optional[str] = None) -> None:
    """Report an undefined result.

    Parameters
    ----------
    context : str, optional
        Name of the function that produced the NaN
    """
    details = {'function': context} if context else None
    _report(ErrorKind.NAN, NaNError("Result is not a number", details=details))


def trigger_infinity(context: Optional[str] = None) -> None:
    """Report an unexpected overflow to infinity.

    Parameters
    ----------
    context : str, optional
        Name of the function that overflowed
    """
    details = {'function': context} if context else None
    _report(ErrorKind.INFINITY, InfinityError("Result overflowed to infinity", details=details))


def trigger_invalid_parameter(parameter: Optional[str] = None, value: Any = None) -> None:
    """Report a parameter outside its valid domain.

    Parameters
    ----------
    parameter : str, optional
        Name of the offending parameter
    value : Any, optional
        Offending value
    """
    _report(
        ErrorKind.INVALID_PARAMETER,
        InvalidParameterError("Invalid parameter value", parameter=parameter, value=value),
    )


def trigger_type_conversion(from_type: Any, to_type: Any) -> None:
    """Report a value that cannot be converted without loss.

    Parameters
    ----------
    from_type : ValueType
        Type of the value
    to_type : ValueType
        Requested type
    """
    _report(
        ErrorKind.TYPE_CONVERSION,
        TypeConversionError(
            f"Can not convert {_type_name(from_type)} to {_type_name(to_type)}",
            from_type=from_type, to_type=to_type,
        ),
    )


def trigger_can_not_converge(kernel: Optional[str] = None, iterations: Optional[int] = None) -> None:
    """Report an iterative kernel that exhausted its iteration cap.

    Parameters
    ----------
    kernel : str, optional
        Name of the iterative kernel
    iterations : int, optional
        Number of iterations performed
    """
    _report(
        ErrorKind.CAN_NOT_CONVERGE,
        CanNotConvergeError("Function did not converge", kernel=kernel, iterations=iterations),
    )


def trigger_invalid_range(start: Any = None, end: Any = None) -> None:
    """Report a reversed or out of bounds range.

    Ranges have no numeric sentinel, so this always raises.

    Raises
    ------
    InvalidRangeError
    """
    _report(ErrorKind.INVALID_RANGE, InvalidRangeError("Invalid range", start=start, end=end),
            always_raise=True)


def trigger_malformed_string(byte_offset: int) -> None:
    """Report a broken UTF-8 sequence at ``byte_offset``.

    Raises
    ------
    MalformedStringError
    """
    _report(
        ErrorKind.MALFORMED_STRING,
        MalformedStringError(f"Malformed string at byte offset {byte_offset}", byte_offset=byte_offset),
        always_raise=True,
    )


def error_flags() -> Dict[ErrorKind, int]:
    """Return a copy of the sticky error counters.

    Returns
    -------
    dict
        Mapping of error kind to the number of reports since the last clear
    """
    return dict(_flags)


def has_error(kind: Optional[ErrorKind] = None) -> bool:
    """Check whether any (or a specific kind of) error was reported."""
    if kind is None:
        return bool(_flags)
    return _flags.get(kind, 0) > 0


def clear_error_flags() -> None:
    """Clear all sticky error counters."""
    _flags.clear()


@contextmanager
def error_policy(policy: str) -> Iterator[None]:
    """Temporarily switch the sink policy.

    Parameters
    ----------
    policy : str
        One of ``"log"``, ``"raise"`` or ``"flag"``

    Examples
    --------
    >>> with error_policy("raise"):
    ...     trigger_nan("example")
    Traceback (most recent call last):
    ...
    model_math.core.base.exceptions.NaNError: Result is not a number (Details: function=example)
    """
    from ..config.settings import get_config

    config = get_config()
    previous = config.error_policy
    config.update(error_policy=policy)
    try:
        yield
    finally:
        config.update(error_policy=previous)


def _type_name(value_type: Any) -> str:
    return getattr(value_type, "name", str(value_type))
