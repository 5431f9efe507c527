"""
Exception hierarchy for model_math.

Containers and configuration objects raise these directly; the numerical
kernels only raise them through the error sink when the ``raise`` policy
is active. Each subclass names the details it records in ``detail_names``;
those become attributes and are appended to the string form.
"""

from typing import Any, Dict, Optional, Tuple


class ModelMathError(Exception):
    """Base exception for all model_math errors.

    Parameters
    ----------
    message : str
        Primary error message
    details : dict, optional
        Additional context information
    cause : Exception, optional
        Exception that triggered this one
    **named
        Values for the names in ``detail_names``
    """

    detail_names: Tuple[str, ...] = ()

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None,
                 cause: Optional[Exception] = None, **named: Any):
        unknown = set(named) - set(self.detail_names)
        if unknown:
            raise TypeError(f"{type(self).__name__} got unexpected details {sorted(unknown)}")

        super().__init__(message)
        self.message = message
        self.details = dict(details or {})
        self.cause = cause

        for name in self.detail_names:
            value = named.get(name)
            setattr(self, name, value)
            if value is not None:
                self.details[name] = value

    def __str__(self) -> str:
        text = self.message
        if self.details:
            text += " (Details: " + ", ".join(f"{k}={v}" for k, v in self.details.items()) + ")"
        if self.cause:
            text += f" (Caused by: {self.cause})"
        return text

    def add_detail(self, key: str, value: Any) -> "ModelMathError":
        """Record ``key = value`` and return the error for chaining."""
        self.details[key] = value
        return self

    def get_detail(self, key: str, default: Any = None) -> Any:
        return self.details.get(key, default)


class TypeConversionError(ModelMathError):
    """A value cannot be represented in the requested type.

    For example a complex value with a non-zero imaginary part requested as
    a Real, or a Set requested as a scalar.
    """

    detail_names = ("from_type", "to_type")


class InvalidParameterError(ModelMathError):
    """A function parameter lies outside its domain."""

    detail_names = ("parameter", "value")


class CanNotConvergeError(ModelMathError):
    """An iterative kernel exhausted its iteration cap."""

    detail_names = ("kernel", "iterations")


class NaNError(ModelMathError):
    """A computation produced an undefined result."""


class InfinityError(ModelMathError):
    """A computation overflowed."""


class InvalidRangeError(ModelMathError):
    """An index lies outside its container, or a range is reversed."""

    detail_names = ("start", "end")


class MalformedStringError(ModelMathError):
    """UTF-8 encoding or decoding of a Tuple failed at ``byte_offset``."""

    detail_names = ("byte_offset",)


class ConfigurationError(ModelMathError):
    """Unknown configuration parameters, invalid values or malformed
    environment variables."""

    detail_names = ("parameter",)


def check_index(index: int, first: int, last: Optional[int], name: str) -> int:
    """Check a 1-based index against ``first..last``.

    Parameters
    ----------
    index : int
        Index to check
    first : int
        Smallest valid index
    last : int or None
        Largest valid index, or None when unbounded
    name : str
        Name used in the error message

    Returns
    -------
    int
        ``index`` unchanged

    Raises
    ------
    InvalidRangeError
        If the index is outside the bounds
    """
    if index < first or (last is not None and index > last):
        bounds = f"{first}..{last}" if last is not None else f">= {first}"
        raise InvalidRangeError(f"{name} {index} outside {bounds}", start=first, end=last)
    return index
