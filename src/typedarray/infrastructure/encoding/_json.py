from __future__ import annotations

import json
import math
from typing import Any, Dict, Sequence

from ...domain._array import ITypedArray

_SEPARATORS = (",", ":")


def _json_safe(value: Any) -> Any:
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, (list, tuple)):
        return [_json_safe(v) for v in value]
    return value


def elements_to_text(elements: Sequence[Any]) -> str:
    """
    Encode an element sequence as compact JSON-array text.

    The encoding is deterministic: the same elements always produce the same
    text (e.g. ``[1,2,3]``, ``[[1,2],[3]]``, ``["a","b"]``, ``[true,false]``).
    ``nan`` and ``±inf`` have no JSON form and are written as ``null``, so the
    text always parses with a strict JSON reader.
    """
    return json.dumps(_json_safe(list(elements)), separators=_SEPARATORS, allow_nan=False)


def array_to_payload(arr: ITypedArray) -> Dict[str, Any]:
    """
    Serialize a typed array into a JSON-safe payload.

    Returns
    -------
    dict
        {
          "dtype": "<dtype tag>",
          "shape": [n],
          "elements": [...]
        }
    """
    return {
        "dtype": str(arr.dtype),
        "shape": [arr.size],
        "elements": arr.tolist(),
    }


def payload_to_array(payload: Dict[str, Any]) -> ITypedArray:
    """
    Rebuild a typed array from a payload produced by :func:`array_to_payload`.

    Notes
    -----
    - Elements are re-coerced into the stored dtype.
    - ``shape`` is validated against the element count.
    """
    from .._typed_array import TypedArray

    elements = payload["elements"]
    arr = TypedArray(elements, str(payload["dtype"]))

    shape = payload.get("shape")
    if shape is not None and list(shape) != [arr.size]:
        raise ValueError(
            f"Payload shape {list(shape)} does not match {arr.size} elements"
        )
    return arr
