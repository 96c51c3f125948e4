"""
Concrete typed array implementation.

This module defines :class:`TypedArray`, an ordered, homogeneous sequence of
Python values tagged with a :class:`DType`. It provides indexing and slicing,
type conversion, reshaping (partitioning), splitting, searching, sorting,
filtering and iteration.

Design notes
------------
- Storage is a plain Python list. Elements are always coerced through
  :class:`TypeConverter` on construction, so the list is never shared with
  the caller.
- Every transforming operation returns a *new* array built through the
  public constructor. :meth:`TypedArray.view` is the only operation that
  aliases storage; since no operation mutates storage in place, a view and
  its base always observe the same elements.
- After :meth:`TypedArray.reshape`, elements are lists (one level of nesting)
  whose leaves carry the dtype. Nested elements handed out to callers
  (``get``, ``tolist``, iterators) are copies.
- Key parsing is delegated to :func:`parse_index`; this class only
  dispatches on the resulting selector type.
"""

from __future__ import annotations

import json
import math
import warnings
from numbers import Integral
from typing import Any, Callable, List, Optional, Sequence, Union

import numpy as np

from ..domain._array import ITypedArray, Predicate
from ..domain._dtype import DEFAULT_DTYPE, DType, DTypeLike
from ..domain._errors import InvalidSplitError, ReshapeSizeMismatchError
from ..domain._index import Single, parse_index
from ._converter import TypeConverter, as_sequence, flatten, infer_dtype
from ._iterator import ArrayIterator
from .encoding._json import elements_to_text

_NUMPY_DTYPES = {
    DType.INTEGER: np.int64,
    DType.FLOAT: np.float64,
    DType.STRING: np.str_,
    DType.BOOLEAN: np.bool_,
}


class TypedArray(ITypedArray):
    """
    Ordered, dtype-tagged sequence of values.

    Parameters
    ----------
    data : Any
        An ordered collection (list, tuple, range, mapping, NumPy array or
        another typed array). Mapping values are taken in insertion order and
        renumbered from 0.
    dtype : DTypeLike or None, optional
        Element type tag. Defaults to ``"int"``. ``None`` infers the dtype
        from the input elements.

    Raises
    ------
    InvalidInputError
        If `data` is not an ordered collection.
    UnknownDTypeError
        If `dtype` is not a supported tag.

    Examples
    --------
    >>> arr = TypedArray([7, 3, 5])
    >>> arr.sort().to_text()
    '[3,5,7]'
    >>> arr["0,2"].to_text()
    '[7,5]'
    """

    __hash__ = None  # type: ignore[assignment]

    def __init__(self, data: Any, dtype: Optional[DTypeLike] = DEFAULT_DTYPE) -> None:
        items = as_sequence(data)
        self._dtype = infer_dtype(items) if dtype is None else DType.parse(dtype)
        self._elements: List[Any] = TypeConverter.convert(items, self._dtype)
        self._base: Optional[TypedArray] = None

    # ------------------------------------------------------------------
    # Metadata
    # ------------------------------------------------------------------
    @property
    def dtype(self) -> DType:
        """
        Element type tag of this array.
        """
        return self._dtype

    @property
    def base(self) -> Optional["TypedArray"]:
        """
        The owning array if this array is a view, otherwise None.
        """
        return self._base

    @property
    def size(self) -> int:
        return len(self._elements)

    def __len__(self) -> int:
        return len(self._elements)

    def shape(self) -> str:
        """
        Return the JSON encoding of the top-level length.

        Returns
        -------
        str
            ``"[n]"`` where ``n`` is the number of top-level elements.
        """
        return json.dumps([len(self._elements)])

    # ------------------------------------------------------------------
    # Indexing
    # ------------------------------------------------------------------
    def get(self, key: Any) -> Any:
        """
        Index into the array.

        Parameters
        ----------
        key : Any
            - ``int``: return the element at that position (no wrapping).
            - ``"i,j,k"`` or ``[i, j, k]``: return a new array of the elements
              at those positions, in that order.
            - ``"start:stop:step"`` or ``slice``: return a new array over the
              selected window (Python slice semantics).

        Returns
        -------
        Any
            A single element, or a new :class:`TypedArray` sharing this dtype.

        Raises
        ------
        IndexOutOfRangeError
            If a position lies outside ``[0, len(self))``.
        IndexParseError
            If a delimited key has a non-integer component or a zero step.
        UnsupportedIndexError
            For any other key.
        """
        selector = parse_index(key)
        if isinstance(selector, Single):
            return _detach(selector.select(self._elements))
        return self.__class__(selector.select(self._elements), self._dtype)

    def __getitem__(self, key: Any) -> Any:
        return self.get(key)

    # ------------------------------------------------------------------
    # Type conversion / copies
    # ------------------------------------------------------------------
    def astype(self, dtype: DTypeLike) -> "TypedArray":
        """
        Return a new array with every element re-coerced into `dtype`.

        Notes
        -----
        Casting is lossy where the target type cannot represent the value
        (e.g. ``float -> int`` truncates). See :mod:`._converter`.
        """
        return self.__class__(self._elements, dtype)

    def copy(self) -> "TypedArray":
        """
        Return an independent copy with the same elements and dtype.
        """
        return self.__class__(self._elements, self._dtype)

    def view(self) -> "TypedArray":
        """
        Return a new array object aliasing this array's storage.

        The view's :attr:`base` is the owning array (the base of a view of a
        view is the original owner).
        """
        out = self.__class__.__new__(self.__class__)
        out._dtype = self._dtype
        out._elements = self._elements
        out._base = self._base if self._base is not None else self
        return out

    def shares_memory(self, other: "TypedArray") -> bool:
        return self._elements is other._elements

    # ------------------------------------------------------------------
    # Structural ops
    # ------------------------------------------------------------------
    def reshape(self, shape: Union[int, Sequence[int]]) -> "TypedArray":
        """
        Partition the flattened elements into consecutive chunks.

        Parameters
        ----------
        shape : int or Sequence[int]
            Chunk sizes. The i-th chunk holds the next ``shape[i]`` elements.

        Returns
        -------
        TypedArray
            A new array whose elements are the chunks (lists).

        Raises
        ------
        ReshapeSizeMismatchError
            If the product of `shape` differs from the flattened element
            count, or any size is negative.

        Notes
        -----
        - This is a partition by listed sizes, not a grid reshape: ``[2, 3]``
          on six elements yields chunks of 2 and 3 elements.
        - When the sizes do not sum to the element count, trailing elements
          are left out (or the last chunks come up short) and a
          ``RuntimeWarning`` is emitted.
        """
        sizes = [shape] if isinstance(shape, Integral) else list(shape)
        flat = flatten(self._elements)

        if any(isinstance(s, bool) or not isinstance(s, Integral) for s in sizes):
            raise TypeError(f"Shape entries must be integers, got {sizes!r}")
        sizes = [int(s) for s in sizes]
        if any(s < 0 for s in sizes) or math.prod(sizes) != len(flat):
            raise ReshapeSizeMismatchError(len(flat), sizes)

        if sum(sizes) != len(flat):
            warnings.warn(
                f"Chunk sizes {sizes} cover {sum(sizes)} of {len(flat)} elements.",
                RuntimeWarning,
                stacklevel=2,
            )

        chunks = []
        cursor = 0
        for s in sizes:
            chunks.append(flat[cursor : cursor + s])
            cursor += s
        return self.__class__(chunks, self._dtype)

    def split(self, parts: int) -> List["TypedArray"]:
        """
        Split the array into chunks of ``ceil(len / parts)`` elements.

        Parameters
        ----------
        parts : int
            Requested number of parts. Must be positive.

        Returns
        -------
        list[TypedArray]
            The chunks, in order, each sharing this dtype. Only non-empty
            chunks are returned, so fewer than `parts` arrays may come back
            (and none for an empty array). The last chunk may be shorter.

        Raises
        ------
        InvalidSplitError
            If `parts` is not a positive integer.
        """
        if isinstance(parts, bool) or not isinstance(parts, Integral) or parts <= 0:
            raise InvalidSplitError(parts)

        n = len(self._elements)
        if n == 0:
            return []
        chunk = math.ceil(n / int(parts))
        return [
            self.__class__(self._elements[i : i + chunk], self._dtype)
            for i in range(0, n, chunk)
        ]

    # ------------------------------------------------------------------
    # Searching / ordering / filtering
    # ------------------------------------------------------------------
    def where(self, predicate: Predicate) -> "TypedArray":
        """
        Return the positions (as an int array) whose element satisfies
        `predicate`, in ascending order.
        """
        return self.__class__(
            [i for i, v in enumerate(self._elements) if predicate(v)], DType.INTEGER
        )

    def search(self, value: Any) -> "TypedArray":
        """
        Return the positions (as an int array) whose element is exactly equal
        to `value`: same type and same value. ``1``, ``1.0`` and ``True`` do
        not match each other.
        """
        return self.__class__(
            [
                i
                for i, v in enumerate(self._elements)
                if type(v) is type(value) and v == value
            ],
            DType.INTEGER,
        )

    def sort(self) -> "TypedArray":
        """
        Return a new array with the elements in ascending natural order.

        Numbers sort numerically, strings lexicographically, booleans with
        ``False < True``, and reshaped chunks lexicographically by content.
        The sort is stable.
        """
        return self.__class__(sorted(self._elements), self._dtype)

    def filter(self, predicate: Predicate) -> "TypedArray":
        """
        Return a new array of the elements satisfying `predicate`, keeping
        their relative order.
        """
        return self.__class__(
            [v for v in self._elements if predicate(v)], self._dtype
        )

    # ------------------------------------------------------------------
    # Traversal
    # ------------------------------------------------------------------
    def iterate(self) -> ArrayIterator:
        """
        Return a fresh iterator over a snapshot of the current elements.
        """
        return ArrayIterator(self.tolist())

    nditer = iterate
    traverse = iterate

    def __iter__(self) -> ArrayIterator:
        return self.iterate()

    # ------------------------------------------------------------------
    # Conversion / representation
    # ------------------------------------------------------------------
    def tolist(self) -> List[Any]:
        return [_detach(v) for v in self._elements]

    def to_numpy(self) -> np.ndarray:
        """
        Materialize the elements as a NumPy array.

        Flat arrays map to ``int64``, ``float64``, ``str_`` or ``bool_``.
        Reshaped arrays with equal-length chunks become 2D arrays; ragged
        chunks produce a 1D object array of lists.
        """
        np_dtype = _NUMPY_DTYPES[self._dtype]
        lengths = {len(v) for v in self._elements if isinstance(v, list)}
        if not lengths or (
            len(lengths) == 1
            and all(isinstance(v, list) for v in self._elements)
        ):
            return np.array(self.tolist(), dtype=np_dtype)

        out = np.empty(len(self._elements), dtype=object)
        for i, v in enumerate(self.tolist()):
            out[i] = v
        return out

    def to_text(self) -> str:
        """
        Return the canonical compact JSON-array text of the elements.
        """
        return elements_to_text(self._elements)

    to_json = to_text

    def __str__(self) -> str:
        return self.to_text()

    def __repr__(self) -> str:
        return f"array({self.to_text()}, dtype='{self._dtype}')"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TypedArray):
            return NotImplemented
        return self._dtype is other._dtype and self._elements == other._elements


def foreach(arr: TypedArray, callback: Callable[[Any], Any]) -> None:
    """
    Call `callback` on every element of `arr`, in order, via its iterator.
    """
    iterator = arr.iterate()
    while iterator.is_valid():
        callback(iterator.current())
        iterator.advance()


def _detach(value: Any) -> Any:
    if isinstance(value, list):
        return [_detach(v) for v in value]
    return value
