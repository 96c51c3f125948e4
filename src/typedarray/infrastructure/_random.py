"""
Random sampling into scalars and typed arrays.

This module defines :class:`RandomSampler`, which draws uniformly distributed
integers, floats, or elements of a collection, either as a single scalar or
as a :class:`TypedArray` of independent draws.

Design notes
------------
- Each sampler owns an explicit ``numpy.random.Generator``. There is no
  module-level random state: two samplers built with the same seed produce
  the same sequence of draws, independently of any other sampler.
- ``size`` may be an integer (a flat array of that many draws) or a
  sequence of dimensions. A sequence draws exactly ``prod(size)`` values and
  returns ``size[0]`` chunks of ``prod(size[1:])`` draws each, so every
  draw is kept. A one-element sequence gives a flat array.
"""

from __future__ import annotations

import math
from numbers import Integral
from typing import Any, List, Optional, Sequence, Union

import numpy as np

from ..domain._dtype import DType
from ..domain._errors import EmptyCollectionError
from ._converter import as_sequence, infer_dtype
from ._typed_array import TypedArray

Size = Union[int, Sequence[int]]
"""A number of draws, or dimensions: `size[0]` chunks of `prod(size[1:])` draws."""


class RandomSampler:
    """
    Uniform sampler producing scalars or typed arrays.

    Parameters
    ----------
    seed : int or None, optional
        Seed for a freshly created generator. ``None`` seeds from OS entropy.
    generator : numpy.random.Generator or None, optional
        Use this generator instead of creating one. Mutually exclusive with
        `seed`.

    Examples
    --------
    >>> rng = RandomSampler(seed=0)
    >>> 0 <= rng.randint(10) <= 10
    True
    >>> len(rng.rand(size=5))
    5
    """

    def __init__(
        self,
        seed: Optional[int] = None,
        *,
        generator: Optional[np.random.Generator] = None,
    ) -> None:
        if generator is not None and seed is not None:
            raise ValueError("Pass either seed or generator, not both")
        self._rng = generator if generator is not None else np.random.default_rng(seed)

    @property
    def generator(self) -> np.random.Generator:
        return self._rng

    def randint(
        self, low: int, high: Optional[int] = None, size: Optional[Size] = None
    ) -> Union[int, TypedArray]:
        """
        Draw integers uniformly from an inclusive range.

        Parameters
        ----------
        low : int
            Lower bound, or the upper bound of ``[0, low]`` when `high` is
            omitted.
        high : int or None, optional
            Upper bound (inclusive).
        size : int, Sequence[int] or None, optional
            Number of draws. ``None`` returns a single ``int``.

        Returns
        -------
        int or TypedArray
            A scalar, or an ``int`` array of independent draws.

        Raises
        ------
        ValueError
            If the range is empty (``low > high``).
        """
        if high is None:
            low, high = 0, low
        low, high = int(low), int(high)
        if low > high:
            raise ValueError(f"Empty range: low={low} > high={high}")

        if size is None:
            return int(self._rng.integers(low, high, endpoint=True))

        draws = self._rng.integers(low, high, size=_count(size), endpoint=True)
        return _to_array(draws.tolist(), DType.INTEGER, size)

    def rand(self, size: Optional[Size] = None) -> Union[float, TypedArray]:
        """
        Draw floats uniformly from ``[0, 1)``.
        """
        if size is None:
            return float(self._rng.random())
        draws = self._rng.random(_count(size))
        return _to_array(draws.tolist(), DType.FLOAT, size)

    def choice(self, collection: Any, size: Optional[Size] = None) -> Any:
        """
        Draw elements uniformly, with replacement, from `collection`.

        Parameters
        ----------
        collection : Any
            An ordered collection (list, tuple, mapping, NumPy array, typed
            array). Typed arrays keep their dtype; otherwise the dtype is
            inferred from the collection's elements.
        size : int, Sequence[int] or None, optional
            Number of draws. ``None`` returns a single element.

        Raises
        ------
        InvalidInputError
            If `collection` is not an ordered collection.
        EmptyCollectionError
            If `collection` is empty.
        """
        items = as_sequence(collection)
        if not items:
            raise EmptyCollectionError()

        if size is None:
            return items[int(self._rng.integers(0, len(items)))]

        positions = self._rng.integers(0, len(items), size=_count(size))
        picked = [items[int(p)] for p in positions]
        dtype = collection.dtype if isinstance(collection, TypedArray) else infer_dtype(items)
        return _to_array(picked, dtype, size)


def _count(size: Size) -> int:
    if isinstance(size, bool):
        raise TypeError("size must be an integer or a sequence of integers")
    if isinstance(size, Integral):
        n = int(size)
    else:
        dims = [int(s) for s in size]
        if any(d < 0 for d in dims):
            raise ValueError(f"size must be non-negative, got {size!r}")
        n = math.prod(dims)
    if n < 0:
        raise ValueError(f"size must be non-negative, got {size!r}")
    return n


def _to_array(draws: List[Any], dtype: DType, size: Size) -> TypedArray:
    if isinstance(size, Integral):
        return TypedArray(draws, dtype)
    dims = [int(s) for s in size]
    if len(dims) <= 1:
        return TypedArray(draws, dtype)
    width = math.prod(dims[1:])
    chunks = [draws[i * width : (i + 1) * width] for i in range(dims[0])]
    return TypedArray(chunks, dtype)
