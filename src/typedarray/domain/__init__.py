"""
Backend-agnostic building blocks: dtype tags, index selectors, error types
and the typed array protocol.
"""

from ._dtype import DEFAULT_DTYPE, DType
from ._index import Index, MultiIndex, Single, Slice, parse_index
from ._array import ITypedArray
from ._errors import *
