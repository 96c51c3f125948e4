"""
Element type tags.

This module defines :class:`DType`, the closed enumeration of element types a
typed array may carry, together with the parsing rules used to turn the
user-facing tags (``"int"``, ``"float"``, ``"str"``, ``"bool"`` and their long
aliases) into enum members.

The enum is intentionally free of conversion logic: coercion of raw values
into a dtype lives in the infrastructure layer (see ``TypeConverter``).
"""

from __future__ import annotations

from enum import Enum
from typing import Union

from ._errors import UnknownDTypeError


class DType(Enum):
    """
    Enumeration of supported element types.

    Attributes
    ----------
    INTEGER : DType
        Python ``int`` elements.
    FLOAT : DType
        Python ``float`` elements.
    STRING : DType
        Python ``str`` elements.
    BOOLEAN : DType
        Python ``bool`` elements.

    Notes
    -----
    - The member value is the canonical short tag and is what ``str()``
      returns, so ``str(DType.INTEGER) == "int"``.
    - Ordering between members (see :meth:`widen`) follows the widening
      chain ``bool < int < float < str`` used for dtype inference.
    """

    BOOLEAN = "bool"
    INTEGER = "int"
    FLOAT = "float"
    STRING = "str"

    def __str__(self) -> str:
        return self.value

    @property
    def python_type(self) -> type:
        """
        Return the Python type that elements of this dtype are stored as.

        Returns
        -------
        type
            One of ``int``, ``float``, ``str``, ``bool``.
        """
        return _PYTHON_TYPES[self]

    @classmethod
    def parse(cls, tag: DTypeLike) -> DType:
        """
        Resolve a dtype tag into a :class:`DType` member.

        Parameters
        ----------
        tag : DTypeLike
            A ``DType`` member, a tag string (case-insensitive, with aliases
            such as ``"integer"`` or ``"boolean"``), or one of the builtin
            types ``int``, ``float``, ``str``, ``bool``.

        Returns
        -------
        DType
            The matching enum member.

        Raises
        ------
        UnknownDTypeError
            If the tag does not name a supported dtype.
        """
        if isinstance(tag, cls):
            return tag
        if isinstance(tag, type):
            for member, py_type in _PYTHON_TYPES.items():
                if tag is py_type:
                    return member
            raise UnknownDTypeError(tag)
        if isinstance(tag, str):
            member = _ALIASES.get(tag.strip().lower())
            if member is not None:
                return member
        raise UnknownDTypeError(tag)

    def widen(self, other: DType) -> DType:
        """
        Return the narrowest dtype able to hold values of both dtypes.
        """
        return self if _RANK[self] >= _RANK[other] else other


DTypeLike = Union[DType, str, type]
"""Anything accepted by :meth:`DType.parse`."""


_PYTHON_TYPES = {
    DType.BOOLEAN: bool,
    DType.INTEGER: int,
    DType.FLOAT: float,
    DType.STRING: str,
}

_RANK = {
    DType.BOOLEAN: 0,
    DType.INTEGER: 1,
    DType.FLOAT: 2,
    DType.STRING: 3,
}

_ALIASES = {
    "bool": DType.BOOLEAN,
    "boolean": DType.BOOLEAN,
    "int": DType.INTEGER,
    "integer": DType.INTEGER,
    "float": DType.FLOAT,
    "double": DType.FLOAT,
    "str": DType.STRING,
    "string": DType.STRING,
}

DEFAULT_DTYPE = DType.INTEGER
