"""
Typed array interface definitions.

This module defines :class:`ITypedArray`, the structural interface satisfied
by the concrete ``TypedArray`` implementation. Domain-level code and the
auxiliary components (iterator, random sampler, encoders) type against this
protocol rather than the concrete class.

Notes
-----
- Every transforming operation returns a *new* array. The only aliasing
  operation is :meth:`ITypedArray.view`.
- The protocol mirrors the public API of the concrete implementation so
  that the whole surface can be typed without importing infrastructure code.
"""

from __future__ import annotations

from typing import Any, Callable, List, Optional, Protocol, Sequence, runtime_checkable

from ._dtype import DType, DTypeLike

Predicate = Callable[[Any], bool]
"""Callable deciding whether an element is kept/selected."""


@runtime_checkable
class ITypedArray(Protocol):
    """
    Typed array interface.

    An `ITypedArray` is an ordered, homogeneous sequence of Python values
    tagged with a :class:`DType`. After a reshape, elements are themselves
    ordered sub-sequences (one level of nesting) whose leaves carry the dtype.
    """

    # ---------------------------------------------------------------------
    # Identity / metadata
    # ---------------------------------------------------------------------
    @property
    def dtype(self) -> DType:
        """
        Return the element type tag.
        """
        ...

    @property
    def base(self) -> Optional["ITypedArray"]:
        """
        Return the array this one is a view of, or None for an owning array.
        """
        ...

    @property
    def size(self) -> int:
        """
        Return the number of top-level elements.
        """
        ...

    def shape(self) -> str:
        """
        Return the JSON encoding of the top-level length, e.g. ``"[7]"``.
        """
        ...

    # ---------------------------------------------------------------------
    # Access
    # ---------------------------------------------------------------------
    def get(self, key: Any) -> Any:
        """
        Return an element (integer key) or a new array (multi-index/slice key).
        """
        ...

    def tolist(self) -> List[Any]:
        """
        Return an independent Python list of the elements.
        """
        ...

    # ---------------------------------------------------------------------
    # Transforms (all return new arrays)
    # ---------------------------------------------------------------------
    def astype(self, dtype: DTypeLike) -> "ITypedArray": ...

    def copy(self) -> "ITypedArray": ...

    def view(self) -> "ITypedArray": ...

    def reshape(self, shape: Sequence[int]) -> "ITypedArray": ...

    def split(self, parts: int) -> List["ITypedArray"]: ...

    def where(self, predicate: Predicate) -> "ITypedArray": ...

    def search(self, value: Any) -> "ITypedArray": ...

    def sort(self) -> "ITypedArray": ...

    def filter(self, predicate: Predicate) -> "ITypedArray": ...

    # ---------------------------------------------------------------------
    # Serialization / traversal
    # ---------------------------------------------------------------------
    def to_text(self) -> str:
        """
        Return the canonical JSON-array text of the elements.
        """
        ...

    def iterate(self) -> Any:
        """
        Return a fresh snapshot iterator over the elements.
        """
        ...
