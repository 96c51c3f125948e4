import unittest
import warnings
from collections import OrderedDict
from unittest import TestCase

import numpy as np

from src.typedarray.domain._dtype import DType
from src.typedarray.domain._errors import InvalidInputError, UnknownDTypeError
from src.typedarray.infrastructure._converter import (
    TypeConverter,
    as_sequence,
    flatten,
    infer_dtype,
)


class TestTypeConverterConvert(TestCase):
    def test_integer_cast_truncates_toward_zero(self):
        self.assertEqual(TypeConverter.convert([1.9, -1.9, True, "42", "3.7"], "int"), [1, -1, 1, 42, 3])

    def test_float_cast_keeps_fraction(self):
        out = TypeConverter.convert([1, "3.7", False, " 2.5e1xyz"], "float")
        self.assertEqual(out, [1.0, 3.7, 0.0, 25.0])
        self.assertTrue(all(type(v) is float for v in out))

    def test_string_cast(self):
        self.assertEqual(TypeConverter.convert([1, 2.5, True, "x", None], "str"), ["1", "2.5", "True", "x", ""])

    def test_boolean_cast_is_truthiness(self):
        self.assertEqual(TypeConverter.convert([0, 1, "", "0", 0.0, None], "bool"), [False, True, False, True, False, False])

    def test_numpy_scalars_become_python_values(self):
        out = TypeConverter.convert(np.array([1, 2, 3], dtype=np.int32), "int")
        self.assertEqual(out, [1, 2, 3])
        self.assertTrue(all(type(v) is int for v in out))

        out = TypeConverter.convert([np.float32(0.5)], "str")
        self.assertEqual(out, ["0.5"])

    def test_unparseable_string_degrades_to_zero_with_warning(self):
        with self.assertWarns(RuntimeWarning):
            self.assertEqual(TypeConverter.convert(["abc"], "int"), [0])
        with self.assertWarns(RuntimeWarning):
            self.assertEqual(TypeConverter.convert(["abc"], "float"), [0.0])

    def test_non_finite_float_to_int_degrades(self):
        with self.assertWarns(RuntimeWarning):
            self.assertEqual(TypeConverter.convert([float("nan")], "int"), [0])
        with self.assertWarns(RuntimeWarning):
            self.assertEqual(TypeConverter.convert(["1e400"], "int"), [0])

    def test_special_float_strings(self):
        out = TypeConverter.convert(["inf", "-inf"], "float")
        self.assertEqual(out, [float("inf"), float("-inf")])

    def test_parseable_values_do_not_warn(self):
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            TypeConverter.convert(["12", "-3", "4.5", 6], "int")

    def test_chunks_are_converted_elementwise(self):
        out = TypeConverter.convert([[1, 2], (3.5,), []], "float")
        self.assertEqual(out, [[1.0, 2.0], [3.5], []])

    def test_rejects_nesting_deeper_than_one_level(self):
        for raw in ([[[1]]], [1, [2, (3,)]], [[np.array([1, 2])]], np.zeros((2, 2, 2))):
            with self.subTest(raw=raw):
                with self.assertRaises(InvalidInputError) as cm:
                    TypeConverter.convert(raw, "int")
                self.assertIn("one level", str(cm.exception))

    def test_mapping_values_are_renumbered(self):
        out = TypeConverter.convert(OrderedDict([(5, "1"), (2, "2"), ("k", "3")]), "int")
        self.assertEqual(out, [1, 2, 3])

    def test_returns_new_list(self):
        src = [1, 2, 3]
        out = TypeConverter.convert(src, "int")
        self.assertIsNot(out, src)

    def test_rejects_non_collections(self):
        for raw in (5, 2.5, "123", b"12", None, {1, 2}, iter([1]), np.array(3)):
            with self.subTest(raw=raw):
                with self.assertRaises(InvalidInputError):
                    TypeConverter.convert(raw, "int")

    def test_unknown_dtype(self):
        with self.assertRaises(UnknownDTypeError):
            TypeConverter.convert([1], "complex")


class TestTypeConverterRegistry(TestCase):
    def test_every_dtype_has_a_coercion(self):
        for dtype in DType:
            self.assertIn(dtype, TypeConverter.COERCIONS)

    def test_instance_is_scalar_coercion(self):
        self.assertEqual(TypeConverter("int")("7"), 7)
        self.assertIs(TypeConverter(DType.BOOLEAN)(0), False)

    def test_duplicate_registration_raises(self):
        with self.assertRaises(ValueError):
            TypeConverter.register_coercion(DType.INTEGER)(int)


class TestHelpers(TestCase):
    def test_as_sequence(self):
        self.assertEqual(as_sequence((1, 2)), [1, 2])
        self.assertEqual(as_sequence(range(3)), [0, 1, 2])
        self.assertEqual(as_sequence({"a": 1, "b": 2}), [1, 2])
        self.assertEqual(as_sequence(np.array([[1, 2], [3, 4]])), [[1, 2], [3, 4]])

    def test_flatten(self):
        self.assertEqual(flatten([[1, 2], [3], [], 4]), [1, 2, 3, 4])

    def test_infer_dtype(self):
        self.assertIs(infer_dtype([True, False]), DType.BOOLEAN)
        self.assertIs(infer_dtype([1, True]), DType.INTEGER)
        self.assertIs(infer_dtype([1, 2.5]), DType.FLOAT)
        self.assertIs(infer_dtype([1, "a"]), DType.STRING)
        self.assertIs(infer_dtype([[1], [2.0]]), DType.FLOAT)
        self.assertIs(infer_dtype(np.array([1.5])), DType.FLOAT)
        self.assertIs(infer_dtype([]), DType.INTEGER)


if __name__ == "__main__":
    unittest.main()
