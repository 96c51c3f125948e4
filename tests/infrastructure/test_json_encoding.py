import json
import unittest
from unittest import TestCase

from src.typedarray.domain._dtype import DType
from src.typedarray.infrastructure._typed_array import TypedArray
from src.typedarray.infrastructure.encoding._json import (
    array_to_payload,
    elements_to_text,
    payload_to_array,
)


class TestElementsToText(TestCase):
    def test_compact_and_stable(self):
        self.assertEqual(elements_to_text([1, 2, 3]), "[1,2,3]")
        self.assertEqual(elements_to_text([[1, 2], [3]]), "[[1,2],[3]]")
        self.assertEqual(elements_to_text(("a", "b")), '["a","b"]')
        self.assertEqual(elements_to_text([]), "[]")

    def test_non_finite_floats_are_written_as_null(self):
        def reject(token):
            raise ValueError(f"non-standard JSON constant {token}")

        text = TypedArray(["nan", "inf", "-inf", 1.5], "float").to_text()
        self.assertEqual(text, "[null,null,null,1.5]")
        self.assertEqual(json.loads(text, parse_constant=reject), [None, None, None, 1.5])

    def test_non_finite_floats_in_chunks(self):
        text = elements_to_text([[float("nan"), 1.0], (float("inf"),)])
        self.assertEqual(text, "[[null,1.0],[null]]")


class TestPayload(TestCase):
    def test_payload_is_json_safe(self):
        arr = TypedArray([1.5, 2.0], "float")
        payload = array_to_payload(arr)
        self.assertEqual(payload, {"dtype": "float", "shape": [2], "elements": [1.5, 2.0]})
        json.dumps(payload)

    def test_payload_restores_array(self):
        arr = TypedArray([1, 2, 3, 4]).reshape([2, 2])
        restored = payload_to_array(json.loads(json.dumps(array_to_payload(arr))))
        self.assertEqual(restored, arr)
        self.assertIs(restored.dtype, DType.INTEGER)

    def test_shape_mismatch_raises(self):
        with self.assertRaises(ValueError):
            payload_to_array({"dtype": "int", "shape": [3], "elements": [1]})


if __name__ == "__main__":
    unittest.main()
