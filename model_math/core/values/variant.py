"""
Discriminated union over every runtime value.

A :class:`Variant` carries exactly one of None, a scalar, a Set, a Tuple or
one of the matrix types. The ``to_*`` accessors convert the payload by
promotion; when a conversion would lose information the error sink is
called and the zero value of the requested type is returned (NaN for Real
and Complex).
"""

import math
from typing import Any, Tuple as PyTuple

from ..base.constants import INTEGER_MAX, INTEGER_MIN
from ..base.error_sink import trigger_type_conversion
from .value_type import ValueType, value_type_of


NAN_COMPLEX = complex(math.nan, math.nan)


class Variant:
    """Tagged value holder.

    Parameters
    ----------
    value : Any, optional
        Payload; another Variant is copied. Numpy scalars are converted to
        the matching Python scalar.

    Examples
    --------
    >>> Variant(3).value_type()
    <ValueType.INTEGER: 2>
    >>> Variant(2.5).try_convert(ValueType.INTEGER)
    (0, False)
    """

    __slots__ = ("_value_type", "_value")

    def __init__(self, value: Any = None):
        if isinstance(value, Variant):
            self._value_type = value._value_type
            self._value = value._value
            return

        self._value_type = value_type_of(value)
        if self._value_type is ValueType.BOOLEAN:
            value = bool(value)
        elif self._value_type is ValueType.INTEGER:
            value = int(value)
        elif self._value_type is ValueType.REAL:
            value = float(value)
        elif self._value_type is ValueType.COMPLEX:
            value = complex(value)
        self._value = value

    def value_type(self) -> ValueType:
        return self._value_type

    @property
    def value(self) -> Any:
        """The raw payload."""
        return self._value

    def is_none(self) -> bool:
        return self._value_type is ValueType.NONE

    # Conversions -----------------------------------------------------------

    def _convert(self, to_type: ValueType) -> PyTuple[Any, bool]:
        vt = self._value_type
        v = self._value

        if to_type is ValueType.BOOLEAN:
            if vt is ValueType.NONE:
                return False, True
            if vt.is_scalar:
                return v != 0, True
            if vt in (ValueType.SET, ValueType.TUPLE):
                return not v.is_empty(), True
            return False, False

        if to_type is ValueType.INTEGER:
            if vt is ValueType.NONE:
                return 0, True
            if vt in (ValueType.BOOLEAN, ValueType.INTEGER):
                return int(v), True
            if vt is ValueType.REAL or (vt is ValueType.COMPLEX and v.imag == 0):
                real = v.real
                if math.isfinite(real) and real == math.floor(real) and INTEGER_MIN <= real <= INTEGER_MAX:
                    return int(real), True
            return 0, False

        if to_type is ValueType.REAL:
            if vt is ValueType.NONE:
                return 0.0, True
            if vt in (ValueType.BOOLEAN, ValueType.INTEGER, ValueType.REAL):
                return float(v), True
            if vt is ValueType.COMPLEX and v.imag == 0:
                return v.real, True
            return math.nan, False

        if to_type is ValueType.COMPLEX:
            if vt is ValueType.NONE:
                return complex(0.0, 0.0), True
            if vt.is_scalar:
                return complex(v), True
            return NAN_COMPLEX, False

        if vt is to_type:
            return v, True
        return None, False

    def convert(self, to_type: ValueType, report: bool = True) -> Any:
        """Convert the payload to ``to_type``.

        Parameters
        ----------
        to_type : ValueType
            Requested type
        report : bool
            Call the error sink when the conversion fails

        Returns
        -------
        Any
            The converted value, or the sentinel of ``to_type`` on failure
        """
        result, ok = self._convert(to_type)
        if not ok and report:
            trigger_type_conversion(self._value_type, to_type)
        return result

    def to_boolean(self, report: bool = True) -> Any:
        return self.convert(ValueType.BOOLEAN, report=report)

    def to_integer(self, report: bool = True) -> Any:
        return self.convert(ValueType.INTEGER, report=report)

    def to_real(self, report: bool = True) -> Any:
        return self.convert(ValueType.REAL, report=report)

    def to_complex(self, report: bool = True) -> Any:
        return self.convert(ValueType.COMPLEX, report=report)

    def to_set(self, report: bool = True) -> Any:
        return self.convert(ValueType.SET, report=report)

    def to_tuple(self, report: bool = True) -> Any:
        return self.convert(ValueType.TUPLE, report=report)

    def to_matrix_boolean(self, report: bool = True) -> Any:
        return self.convert(ValueType.MATRIX_BOOLEAN, report=report)

    def to_matrix_integer(self, report: bool = True) -> Any:
        return self.convert(ValueType.MATRIX_INTEGER, report=report)

    def to_matrix_real(self, report: bool = True) -> Any:
        return self.convert(ValueType.MATRIX_REAL, report=report)

    def to_matrix_complex(self, report: bool = True) -> Any:
        return self.convert(ValueType.MATRIX_COMPLEX, report=report)

    def try_convert(self, to_type: ValueType) -> PyTuple[Any, bool]:
        """Convert without reporting, returning ``(value, ok)``."""
        return self._convert(to_type)

    # Python protocol ---------------------------------------------------------

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Variant):
            try:
                other = Variant(other)
            except TypeError:
                return NotImplemented
        return self._value_type is other._value_type and self._value == other._value

    def __hash__(self) -> int:
        return hash((self._value_type, self._value))

    def __bool__(self) -> bool:
        result, ok = self._convert(ValueType.BOOLEAN)
        return bool(result) if ok else True

    def __repr__(self) -> str:
        if self._value_type is ValueType.NONE:
            return "Variant()"
        return f"Variant({self._value!r})"
