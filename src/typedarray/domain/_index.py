"""
Index selectors and the key parser.

Array access is expressed through three explicit selector variants:

- :class:`Single`     : one position, returns the raw element
- :class:`MultiIndex` : an ordered list of positions to gather
- :class:`Slice`      : a ``start:stop:step`` window with Python slice rules

:func:`parse_index` turns a user-facing key into one of these variants. The
typed array then dispatches on the selector type instead of inspecting the
key itself.

Accepted keys
-------------
- ``int`` (including NumPy integers)         -> ``Single``
- ``"0,2,4"`` or a list/tuple of ints         -> ``MultiIndex``
- ``"1:5"``, ``"::2"``, ``"-3:-1"``, ``slice`` -> ``Slice``

A comma or colon key whose components are not integers is rejected with
:class:`IndexParseError`; it is never coerced to zero.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from numbers import Integral
from typing import Any, List, Optional, Sequence, Tuple, Union

from typing_extensions import TypeAlias

from ._errors import IndexOutOfRangeError, IndexParseError, UnsupportedIndexError

_INT_PATTERN = re.compile(r"^[+-]?\d+$")


@dataclass(frozen=True)
class Single:
    """
    Selector for one element by non-negative position.
    """

    position: int

    def select(self, elements: Sequence[Any]) -> Any:
        """
        Return the element at ``position``.

        Raises
        ------
        IndexOutOfRangeError
            If the position is negative or not smaller than ``len(elements)``.
        """
        _check_position(self.position, len(elements))
        return elements[self.position]


@dataclass(frozen=True)
class MultiIndex:
    """
    Selector gathering the elements at each listed position, in order.

    Positions may repeat. Each must lie in ``[0, len(elements))``.
    """

    positions: Tuple[int, ...]

    def select(self, elements: Sequence[Any]) -> List[Any]:
        n = len(elements)
        for p in self.positions:
            _check_position(p, n)
        return [elements[p] for p in self.positions]


@dataclass(frozen=True)
class Slice:
    """
    Selector for a ``start:stop:step`` window.

    Omitted bounds are ``None`` and follow Python's slice defaults; negative
    bounds count from the end.

    Attributes
    ----------
    start : Optional[int]
        First position (inclusive).
    stop : Optional[int]
        End position (exclusive).
    step : Optional[int]
        Stride; must not be zero.
    """

    start: Optional[int] = None
    stop: Optional[int] = None
    step: Optional[int] = None

    def __post_init__(self) -> None:
        if self.step == 0:
            raise IndexParseError(self.as_slice(), "slice step cannot be zero")

    def as_slice(self) -> slice:
        return slice(self.start, self.stop, self.step)

    def select(self, elements: Sequence[Any]) -> List[Any]:
        return list(elements[self.as_slice()])


Index: TypeAlias = Union[Single, MultiIndex, Slice]
"""Tagged union of the supported selectors."""


def parse_index(key: Any) -> Index:
    """
    Parse an indexing key into a selector.

    Parameters
    ----------
    key : Any
        An integer, a builtin ``slice``, a list/tuple of integers, or a
        comma-/colon-delimited string. An already-built selector is returned
        unchanged.

    Returns
    -------
    Index
        The selector describing the key.

    Raises
    ------
    IndexParseError
        If a delimited string has a non-integer component, a slice string has
        more than three components, or a slice step is zero.
    UnsupportedIndexError
        For any other key kind, including plain strings without a delimiter
        and booleans.
    """
    if isinstance(key, (Single, MultiIndex, Slice)):
        return key

    # bool is an Integral subclass but never a meaningful position
    if isinstance(key, bool):
        raise UnsupportedIndexError(key)

    if isinstance(key, Integral):
        return Single(int(key))

    if isinstance(key, slice):
        return Slice(
            _optional_int(key.start, key),
            _optional_int(key.stop, key),
            _optional_int(key.step, key),
        )

    if isinstance(key, (list, tuple)):
        positions = []
        for p in key:
            if isinstance(p, bool) or not isinstance(p, Integral):
                raise IndexParseError(key, "Multi-index positions must be integers")
            positions.append(int(p))
        return MultiIndex(tuple(positions))

    if isinstance(key, str):
        if "," in key:
            return MultiIndex(tuple(_parse_int(part, key) for part in key.split(",")))
        if ":" in key:
            parts = key.split(":")
            if len(parts) > 3:
                raise IndexParseError(key, "Slice has more than three components")
            bounds = [None if not p.strip() else _parse_int(p, key) for p in parts]
            bounds += [None] * (3 - len(bounds))
            return Slice(*bounds)

    raise UnsupportedIndexError(key)


def _parse_int(text: str, key: str) -> int:
    stripped = text.strip()
    if not _INT_PATTERN.match(stripped):
        raise IndexParseError(key, f"Invalid index component {text!r}")
    return int(stripped)


def _optional_int(value: Any, key: Any) -> Optional[int]:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, Integral):
        raise IndexParseError(key, "Slice bounds must be integers or None")
    return int(value)


def _check_position(position: int, length: int) -> None:
    if position < 0 or position >= length:
        raise IndexOutOfRangeError(position, length)
