"""
Concrete typed array implementation and its collaborators.
"""

from ._converter import TypeConverter
from ._iterator import ArrayIterator
from ._typed_array import TypedArray, foreach
from ._random import RandomSampler

__all__ = [
    TypeConverter.__name__,
    ArrayIterator.__name__,
    TypedArray.__name__,
    RandomSampler.__name__,
    foreach.__name__,
]
