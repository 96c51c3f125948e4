"""
Array-related exceptions for TypedArray.

This module defines the custom errors raised by array construction, indexing,
reshaping, splitting, iteration, and sampling. Every error derives from
:class:`TypedArrayError` so callers can catch the whole family at once, and
also from the closest builtin exception (``TypeError``, ``ValueError``,
``IndexError``) so code written against builtins keeps working.

All errors are raised synchronously to the immediate caller. None of the
operations in this package has a retryable failure mode.
"""

from typing import Any, Optional, Sequence

__all__ = [
    "TypedArrayError",
    "InvalidInputError",
    "UnknownDTypeError",
    "IndexOutOfRangeError",
    "UnsupportedIndexError",
    "IndexParseError",
    "ReshapeSizeMismatchError",
    "InvalidSplitError",
    "IteratorExhaustedError",
    "EmptyCollectionError",
]


class TypedArrayError(Exception):
    """
    Base class for all errors raised by the typedarray package.
    """


class InvalidInputError(TypedArrayError, TypeError):
    """
    Raised when an array is constructed from something that is not an
    ordered collection (e.g. a scalar, a string, a set, or an iterator), or
    from elements nested more than one level deep.

    Attributes
    ----------
    value : Any
        The rejected input.
    """

    def __init__(self, value: Any, message: Optional[str] = None) -> None:
        """
        Initialize the InvalidInputError.

        Parameters
        ----------
        value : Any
            The rejected input object.
        message : str or None, optional
            Replaces the default "not an ordered collection" message.
        """
        super().__init__(
            message
            or f"Input must be an ordered collection, got {type(value).__name__}."
        )
        self.value = value


class UnknownDTypeError(TypedArrayError, ValueError):
    """
    Raised when a dtype tag does not name a supported element type.
    """

    def __init__(self, tag: Any) -> None:
        super().__init__(
            f"Unknown dtype {tag!r}. Expected one of 'int', 'float', 'str', 'bool'."
        )
        self.tag = tag


class IndexOutOfRangeError(TypedArrayError, IndexError):
    """
    Raised when an integer position lies outside ``[0, length)``.

    Negative positions are not wrapped for single-element access; they are
    reported through this error as well.

    Attributes
    ----------
    index : int
        The requested position.
    length : int
        Number of elements in the array that was indexed.
    """

    def __init__(self, index: int, length: int) -> None:
        """
        Initialize the IndexOutOfRangeError.

        Parameters
        ----------
        index : int
            The requested position.
        length : int
            Length of the indexed array.
        """
        super().__init__(f"Index {index} is out of range for length {length}.")
        self.index = index
        self.length = length


class UnsupportedIndexError(TypedArrayError, TypeError):
    """
    Raised when a key is neither an integer, a multi-index selector, nor a
    slice selector.
    """

    def __init__(self, key: Any, reason: str = "Unsupported indexing") -> None:
        super().__init__(f"{reason}: {key!r}")
        self.key = key


class IndexParseError(UnsupportedIndexError):
    """
    Raised when a comma- or colon-delimited key has a component that is not
    an integer, or when a slice step is zero.
    """


class ReshapeSizeMismatchError(TypedArrayError, ValueError):
    """
    Raised when the product of the requested chunk sizes differs from the
    number of elements being reshaped.

    Attributes
    ----------
    size : int
        Number of elements in the flattened array.
    shape : tuple[int, ...]
        The requested chunk sizes.
    """

    def __init__(self, size: int, shape: Sequence[int]) -> None:
        """
        Initialize the ReshapeSizeMismatchError.

        Parameters
        ----------
        size : int
            Flattened element count.
        shape : Sequence[int]
            Requested chunk sizes.
        """
        super().__init__(
            f"Cannot reshape array of size {size} into shape {list(shape)}."
        )
        self.size = size
        self.shape = tuple(shape)


class InvalidSplitError(TypedArrayError, ValueError):
    """
    Raised when an array is split into a non-positive number of parts.
    """

    def __init__(self, parts: Any) -> None:
        super().__init__(f"Number of parts must be a positive integer, got {parts!r}.")
        self.parts = parts


class IteratorExhaustedError(TypedArrayError, IndexError):
    """
    Raised when an iterator's current element is read while the cursor is
    past the last element.
    """

    def __init__(self, position: int, length: int) -> None:
        super().__init__(
            f"Iterator is exhausted (position {position}, length {length})."
        )
        self.position = position
        self.length = length


class EmptyCollectionError(TypedArrayError, ValueError):
    """
    Raised when a random choice is requested from an empty collection.
    """

    def __init__(self) -> None:
        super().__init__("Cannot choose from an empty collection.")
