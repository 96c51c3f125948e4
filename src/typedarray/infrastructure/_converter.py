"""
Element coercion for typed arrays.

This module defines :class:`TypeConverter`, the registry-backed component that
coerces raw input values into the Python type named by a :class:`DType`.

Design
------
- One coercion callable is registered per dtype via a decorator-based
  registry (``TypeConverter.register_coercion``).
- :meth:`TypeConverter.convert` validates that the input is an ordered
  collection, normalizes it to a list (mapping values are renumbered from 0),
  and coerces every leaf. Elements may be one level of sub-sequences (the
  chunks produced by ``reshape``); a chunk holding a sequence is rejected
  with ``InvalidInputError``.
- Coercion is a best-effort, lossy cast rather than a validating parse:
  floats are truncated toward zero when cast to ``int``, strings contribute
  their leading numeric prefix, and values with no numeric interpretation
  become ``0`` / ``0.0`` with a ``RuntimeWarning``.

Examples of lossy round trips
-----------------------------
- ``["3.7"]`` as ``float`` is ``[3.7]``; as ``int`` it is ``[3]``.
- ``[3.7]`` ``float -> int -> float`` gives ``[3.0]``.
- ``["abc"]`` as ``int`` is ``[0]`` (warns), and back to ``str`` is ``["0"]``.
"""

from __future__ import annotations

import math
import re
import warnings
from numbers import Integral, Real
from typing import Any, Callable, ClassVar, Dict, List, Mapping, Sequence, TypeVar

import numpy as np

from ..domain._array import ITypedArray
from ..domain._dtype import DEFAULT_DTYPE, DType, DTypeLike
from ..domain._errors import InvalidInputError

C = TypeVar("C", bound=Callable[[Any], Any])

_NUMERIC_PREFIX = re.compile(r"^\s*[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


class TypeConverter:
    """
    Registry-backed scalar coercion dispatcher.

    Usage
    -----
    Register:
        @TypeConverter.register_coercion(DType.INTEGER)
        def to_int(value) -> int: ...

    Dispatch:
        to_int = TypeConverter("int")
        to_int("42")                     # 42
        TypeConverter.convert([1.5], "int")  # [1]

    Notes
    -----
    - Coercions are stored per :class:`DType` in a class-level registry.
    - A coercion receives a single leaf value and must always return a value
      of the dtype's Python type.
    """

    COERCIONS: ClassVar[Dict[DType, Callable[[Any], Any]]] = {}

    def __init__(self, dtype: DTypeLike) -> None:
        self.dtype = DType.parse(dtype)
        try:
            self._coerce = self.COERCIONS[self.dtype]
        except KeyError as e:
            raise ValueError(f"No coercion registered for dtype {self.dtype}") from e

    @classmethod
    def register_coercion(
        cls, dtype: DType, *, overwrite: bool = False
    ) -> Callable[[C], C]:
        """
        Decorator to register the scalar coercion for `dtype`.

        Parameters
        ----------
        dtype:
            The dtype the decorated callable coerces into.
        overwrite:
            If False (default), raises if `dtype` already has a coercion.
        """

        def decorator(func: C) -> C:
            if not overwrite and dtype in cls.COERCIONS:
                raise ValueError(f"Coercion already registered: {dtype}")
            cls.COERCIONS[dtype] = func
            return func

        return decorator

    def __call__(self, value: Any) -> Any:
        return self._coerce(value)

    @classmethod
    def convert(cls, raw: Any, dtype: DTypeLike) -> List[Any]:
        """
        Coerce every element of a raw collection into `dtype`.

        Parameters
        ----------
        raw : Any
            An ordered collection: list, tuple, range, mapping (values are
            taken in insertion order), NumPy array, or typed array.
        dtype : DTypeLike
            Target dtype tag.

        Returns
        -------
        list
            A new list of coerced values. Sub-sequences (chunks) are
            converted into new lists of coerced values.

        Raises
        ------
        InvalidInputError
            If `raw` is not an ordered collection, or a chunk itself holds a
            sequence (elements nest at most one level deep).
        UnknownDTypeError
            If `dtype` is not a supported tag.
        """
        converter = cls(dtype)
        return converter._convert_sequence(as_sequence(raw))

    def _convert_sequence(self, items: Sequence[Any], depth: int = 0) -> List[Any]:
        out = []
        for item in items:
            if not _is_nested(item):
                out.append(self._coerce(item))
            elif depth:
                raise InvalidInputError(
                    item, "Elements may be nested at most one level deep."
                )
            else:
                out.append(self._convert_sequence(as_sequence(item), depth + 1))
        return out


def as_sequence(raw: Any) -> List[Any]:
    """
    Normalize an ordered collection into a new top-level list.

    Raises
    ------
    InvalidInputError
        For scalars, strings, bytes, sets, iterators and 0-d NumPy arrays.
    """
    if isinstance(raw, np.ndarray):
        if raw.ndim == 0:
            raise InvalidInputError(raw)
        return raw.tolist()
    if isinstance(raw, (str, bytes, bytearray)):
        raise InvalidInputError(raw)
    if isinstance(raw, Mapping):
        return list(raw.values())
    if isinstance(raw, (list, tuple, range)):
        return list(raw)
    if isinstance(raw, ITypedArray):
        return raw.tolist()
    raise InvalidInputError(raw)


def flatten(items: Sequence[Any]) -> List[Any]:
    """
    Return the leaves of a (possibly nested) element sequence, in order.
    """
    out: List[Any] = []
    for item in items:
        if _is_nested(item):
            out.extend(flatten(as_sequence(item)))
        else:
            out.append(item)
    return out


def infer_dtype(raw: Any) -> DType:
    """
    Infer the narrowest dtype holding every leaf of `raw`.

    Leaves widen along ``bool < int < float < str``; anything that is not a
    bool, integer or real number is treated as a string. An empty collection
    yields the default dtype.
    """
    leaves = flatten(as_sequence(raw))
    if not leaves:
        return DEFAULT_DTYPE
    result = _leaf_dtype(leaves[0])
    for leaf in leaves[1:]:
        result = result.widen(_leaf_dtype(leaf))
    return result


def _leaf_dtype(value: Any) -> DType:
    if isinstance(value, (bool, np.bool_)):
        return DType.BOOLEAN
    if isinstance(value, Integral):
        return DType.INTEGER
    if isinstance(value, Real):
        return DType.FLOAT
    return DType.STRING


def _is_nested(item: Any) -> bool:
    return isinstance(item, (list, tuple, np.ndarray, ITypedArray)) and not (
        isinstance(item, np.ndarray) and item.ndim == 0
    )


def _numeric_prefix(text: str) -> str:
    m = _NUMERIC_PREFIX.match(text)
    return m.group(0).strip() if m else ""


def _degraded(value: Any, dtype: DType, fallback: Any) -> Any:
    warnings.warn(
        f"Could not interpret {value!r} as {dtype}; using {fallback!r}.",
        RuntimeWarning,
        stacklevel=2,
    )
    return fallback


@TypeConverter.register_coercion(DType.INTEGER)
def to_integer(value: Any) -> int:
    """
    Cast a value to ``int``, truncating toward zero.
    """
    if value is None:
        return 0
    if isinstance(value, (bool, np.bool_, Integral)):
        return int(value)
    if isinstance(value, Real):
        f = float(value)
        if not math.isfinite(f):
            return _degraded(value, DType.INTEGER, 0)
        return int(f)
    if isinstance(value, str):
        prefix = _numeric_prefix(value)
        if not prefix:
            return _degraded(value, DType.INTEGER, 0)
        if not any(c in prefix for c in ".eE"):
            return int(prefix)
        f = float(prefix)
        if not math.isfinite(f):
            return _degraded(value, DType.INTEGER, 0)
        return int(f)
    try:
        return int(value)
    except (TypeError, ValueError):
        return _degraded(value, DType.INTEGER, 0)


@TypeConverter.register_coercion(DType.FLOAT)
def to_float(value: Any) -> float:
    """
    Cast a value to ``float``, keeping any fractional part.
    """
    if value is None:
        return 0.0
    if isinstance(value, (bool, np.bool_, Real)):
        return float(value)
    if isinstance(value, str):
        prefix = _numeric_prefix(value)
        if prefix:
            return float(prefix)
        try:
            # "nan", "inf", "-Infinity"
            return float(value)
        except ValueError:
            return _degraded(value, DType.FLOAT, 0.0)
    try:
        return float(value)
    except (TypeError, ValueError):
        return _degraded(value, DType.FLOAT, 0.0)


@TypeConverter.register_coercion(DType.STRING)
def to_string(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, np.generic):
        value = value.item()
    return str(value)


@TypeConverter.register_coercion(DType.BOOLEAN)
def to_boolean(value: Any) -> bool:
    return bool(value)
