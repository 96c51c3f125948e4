"""
TypedArray - a minimal dtype-tagged array library.

Public entry points
-------------------
- :func:`array`   : build a :class:`TypedArray` from an ordered collection
- :func:`random`  : build a :class:`RandomSampler` (optionally seeded)
- :func:`foreach` : apply a callback to every element of an array
- ``__version__`` / ``version`` : informational version string
"""

from typing import Any, Optional

from .domain._dtype import DEFAULT_DTYPE, DType, DTypeLike
from .domain._errors import *
from .domain._index import MultiIndex, Single, Slice, parse_index
from .infrastructure._converter import TypeConverter
from .infrastructure._iterator import ArrayIterator
from .infrastructure._random import RandomSampler
from .infrastructure._typed_array import TypedArray, foreach

__version__ = "0.5.3"
version = __version__


def array(data: Any, dtype: Optional[DTypeLike] = DEFAULT_DTYPE) -> TypedArray:
    """
    Construct a typed array.

    Parameters
    ----------
    data : Any
        An ordered collection of raw values.
    dtype : DTypeLike or None, optional
        Element type tag (``"int"``, ``"float"``, ``"str"``, ``"bool"``).
        Defaults to ``"int"``; ``None`` infers it from `data`.
    """
    return TypedArray(data, dtype)


def random(seed: Optional[int] = None) -> RandomSampler:
    """
    Create a new random sampler with its own generator.
    """
    return RandomSampler(seed)
