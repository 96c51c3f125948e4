"""
Snapshot iterator over typed array elements.

:class:`ArrayIterator` captures the element sequence at construction time
and walks it with an explicit, restartable cursor. It exposes both a cursor
API (``restart`` / ``current`` / ``key`` / ``advance`` / ``is_valid``) and the
Python iterator protocol, so it can be driven manually or used in a ``for``
loop.

State machine
-------------
The cursor lives in ``[0, length]``. The iterator is *valid* while
``cursor < length``; ``cursor == length`` is the terminal state. ``advance``
past the end is a no-op, and ``current`` in the terminal state raises
:class:`IteratorExhaustedError`.
"""

from __future__ import annotations

from typing import Any, Iterable, Iterator, Tuple

from ..domain._errors import IteratorExhaustedError


class ArrayIterator(Iterator[Any]):
    """
    Restartable cursor over a snapshot of elements.

    Parameters
    ----------
    elements : Iterable[Any]
        The elements to traverse. They are copied into an internal tuple, so
        later changes to the source do not affect the iterator.

    Notes
    -----
    - Python iteration (``next()``) yields the current element and advances.
      ``iter()`` returns the iterator itself at its current position, so a
      partly consumed iterator resumes where it stopped. Only :meth:`restart`
      rewinds it.
    """

    __slots__ = ("_elements", "_position")

    def __init__(self, elements: Iterable[Any]) -> None:
        self._elements: Tuple[Any, ...] = tuple(elements)
        self._position = 0

    def __len__(self) -> int:
        return len(self._elements)

    def restart(self) -> None:
        """
        Move the cursor back to the first element.
        """
        self._position = 0

    def current(self) -> Any:
        """
        Return the element under the cursor.

        Raises
        ------
        IteratorExhaustedError
            If the cursor is past the last element.
        """
        if not self.is_valid():
            raise IteratorExhaustedError(self._position, len(self._elements))
        return self._elements[self._position]

    def key(self) -> int:
        """
        Return the cursor position.
        """
        return self._position

    def advance(self) -> None:
        """
        Move the cursor forward by one. No-op in the terminal state.
        """
        if self._position < len(self._elements):
            self._position += 1

    def is_valid(self) -> bool:
        """
        Return True while the cursor addresses an existing element.
        """
        return self._position < len(self._elements)

    has_next = is_valid

    def __iter__(self) -> "ArrayIterator":
        return self

    def __next__(self) -> Any:
        if not self.is_valid():
            raise StopIteration
        value = self._elements[self._position]
        self._position += 1
        return value

    def __repr__(self) -> str:
        return (
            f"ArrayIterator(position={self._position}, "
            f"length={len(self._elements)})"
        )
