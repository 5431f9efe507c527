"""
Set and Tuple containers.

Both containers hold :class:`Variant` elements and are 1-indexed at the
public surface. A :class:`Set` is immutable, free of duplicates and iterates
in implicit ordering. A :class:`Tuple` is an ordered, mutable sequence that
can also be built from and emitted as a UTF-8 string of code points.
"""

from typing import Any, Iterable, Iterator, List, Union

from ..base.error_sink import trigger_invalid_range, trigger_malformed_string
from ..base.exceptions import check_index
from .ordering import implicit_ordering, implicit_sort_key
from .value_type import ValueType
from .variant import Variant


MAXIMUM_CODE_POINT = 0x10FFFF


class Set:
    """Immutable collection of unique values.

    Parameters
    ----------
    *values
        Members; duplicates are dropped

    Examples
    --------
    >>> [v.value for v in Set(3, 1, 2, 1)]
    [1, 2, 3]
    """

    __slots__ = ("_members",)

    def __init__(self, *values: Any):
        ordered = sorted((Variant(v) for v in values), key=implicit_sort_key)

        members: List[Variant] = []
        group_start = 0
        for value in ordered:
            if members and implicit_ordering(members[-1], value) != 0:
                group_start = len(members)
            if value not in members[group_start:]:
                members.append(value)
        self._members = tuple(members)

    @classmethod
    def from_iterable(cls, values: Iterable[Any]) -> "Set":
        return cls(*values)

    def value_type(self) -> ValueType:
        return ValueType.SET

    def size(self) -> int:
        return len(self._members)

    def is_empty(self) -> bool:
        return not self._members

    def at(self, index: int) -> Variant:
        """Return the member at 1-based ``index`` in iteration order."""
        check_index(index, 1, len(self._members), "index")
        return self._members[int(index) - 1]

    def contains(self, value: Any) -> bool:
        return Variant(value) in self._members

    def union(self, other: "Set") -> "Set":
        return Set(*self._members, *other._members)

    def __or__(self, other: "Set") -> "Set":
        if not isinstance(other, Set):
            return NotImplemented
        return self.union(other)

    def __contains__(self, value: Any) -> bool:
        return self.contains(value)

    def __iter__(self) -> Iterator[Variant]:
        return iter(self._members)

    def __len__(self) -> int:
        return len(self._members)

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Set):
            return NotImplemented
        return self._members == other._members

    def __hash__(self) -> int:
        return hash(self._members)

    def __repr__(self) -> str:
        return f"Set({', '.join(repr(v.value) for v in self._members)})"


class Tuple:
    """Ordered sequence of values.

    Parameters
    ----------
    *values
        Elements in order

    Notes
    -----
    ``a * b`` concatenates two tuples. ``a / b`` removes the first
    contiguous occurrence of ``b`` from ``a``, which covers removing a
    prefix or a suffix; ``a`` is returned unchanged when ``b`` does not
    occur.
    """

    __slots__ = ("_elements",)

    def __init__(self, *values: Any):
        self._elements: List[Variant] = [Variant(v) for v in values]

    @classmethod
    def from_iterable(cls, values: Iterable[Any]) -> "Tuple":
        return cls(*values)

    @classmethod
    def from_string(cls, text: Union[str, bytes]) -> "Tuple":
        """Build a tuple of integer code points from a UTF-8 string.

        Parameters
        ----------
        text : str or bytes
            Text to convert; ``bytes`` must be UTF-8 encoded

        Returns
        -------
        Tuple
            One Integer element per code point

        Raises
        ------
        MalformedStringError
            If ``text`` is not valid UTF-8; carries the offending byte offset
        """
        if isinstance(text, str):
            text = text.encode("utf-8", "surrogatepass")

        try:
            decoded = bytes(text).decode("utf-8")
        except UnicodeDecodeError as e:
            trigger_malformed_string(e.start)
            raise

        return cls(*(ord(c) for c in decoded))

    def value_type(self) -> ValueType:
        return ValueType.TUPLE

    def size(self) -> int:
        return len(self._elements)

    def is_empty(self) -> bool:
        return not self._elements

    def at(self, index: int) -> Variant:
        """Return the element at 1-based ``index``."""
        check_index(index, 1, len(self._elements), "index")
        return self._elements[int(index) - 1]

    def first(self) -> Variant:
        return self.at(1)

    def last(self) -> Variant:
        return self.at(len(self._elements))

    def update(self, index: int, value: Any) -> None:
        """Replace the element at 1-based ``index``.

        Updating past the end grows the tuple, padding with None values.
        """
        check_index(index, 1, None, "index")
        index = int(index)
        while len(self._elements) < index:
            self._elements.append(Variant())
        self._elements[index - 1] = Variant(value)

    def append(self, value: Any) -> None:
        self._elements.append(Variant(value))

    def prepend(self, value: Any) -> None:
        self._elements.insert(0, Variant(value))

    def take_first(self) -> Variant:
        """Remove and return the first element."""
        if not self._elements:
            trigger_invalid_range(1, 0)
        return self._elements.pop(0)

    def take_last(self) -> Variant:
        """Remove and return the last element."""
        if not self._elements:
            trigger_invalid_range(1, 0)
        return self._elements.pop()

    def to_bytes(self) -> bytes:
        """Emit the tuple as UTF-8.

        Raises
        ------
        MalformedStringError
            If an element is not a code point in ``1..0x10FFFF``; the byte
            offset is where the offending character would have started
        """
        encoded = bytearray()
        for element in self._elements:
            code_point, ok = element.try_convert(ValueType.INTEGER)
            if not ok or not 0 < code_point <= MAXIMUM_CODE_POINT:
                trigger_malformed_string(len(encoded))
            encoded += chr(code_point).encode("utf-8", "surrogatepass")
        return bytes(encoded)

    def to_string(self) -> str:
        """Emit the tuple as a Python string."""
        return self.to_bytes().decode("utf-8", "surrogatepass")

    def __mul__(self, other: "Tuple") -> "Tuple":
        if not isinstance(other, Tuple):
            return NotImplemented
        result = Tuple()
        result._elements = self._elements + other._elements
        return result

    def __imul__(self, other: "Tuple") -> "Tuple":
        if not isinstance(other, Tuple):
            return NotImplemented
        self._elements.extend(other._elements)
        return self

    def __truediv__(self, other: "Tuple") -> "Tuple":
        if not isinstance(other, Tuple):
            return NotImplemented

        result = Tuple()
        result._elements = list(self._elements)

        n = len(other._elements)
        if n == 0 or n > len(self._elements):
            return result

        for start in range(len(self._elements) - n + 1):
            if self._elements[start:start + n] == other._elements:
                del result._elements[start:start + n]
                break
        return result

    def __itruediv__(self, other: "Tuple") -> "Tuple":
        if not isinstance(other, Tuple):
            return NotImplemented
        self._elements = (self / other)._elements
        return self

    def __iter__(self) -> Iterator[Variant]:
        return iter(self._elements)

    def __len__(self) -> int:
        return len(self._elements)

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Tuple):
            return NotImplemented
        return self._elements == other._elements

    __hash__ = None

    def __repr__(self) -> str:
        return f"Tuple({', '.join(repr(v.value) for v in self._elements)})"


null_set = Set()
