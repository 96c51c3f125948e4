import unittest
from unittest import TestCase

import numpy as np

from src.typedarray.domain._errors import (
    IndexOutOfRangeError,
    IndexParseError,
    UnsupportedIndexError,
)
from src.typedarray.domain._index import MultiIndex, Single, Slice, parse_index


class TestParseIndex(TestCase):
    def test_integer_keys(self):
        self.assertEqual(parse_index(3), Single(3))
        self.assertEqual(parse_index(np.int64(2)), Single(2))
        self.assertEqual(parse_index(-1), Single(-1))

    def test_comma_key_is_multi_index(self):
        self.assertEqual(parse_index("0,2,4"), MultiIndex((0, 2, 4)))
        self.assertEqual(parse_index(" 4 , 0 "), MultiIndex((4, 0)))

    def test_list_and_tuple_keys_are_multi_index(self):
        self.assertEqual(parse_index([1, 1, 0]), MultiIndex((1, 1, 0)))
        self.assertEqual(parse_index((2,)), MultiIndex((2,)))

    def test_colon_keys_are_slices(self):
        self.assertEqual(parse_index("1:5"), Slice(1, 5, None))
        self.assertEqual(parse_index("1:5:2"), Slice(1, 5, 2))
        self.assertEqual(parse_index("::2"), Slice(None, None, 2))
        self.assertEqual(parse_index("4:"), Slice(4, None, None))
        self.assertEqual(parse_index(":4"), Slice(None, 4, None))
        self.assertEqual(parse_index("-3:-1"), Slice(-3, -1, None))

    def test_builtin_slice(self):
        self.assertEqual(parse_index(slice(1, None, 3)), Slice(1, None, 3))

    def test_selector_passes_through(self):
        sel = Slice(0, 2)
        self.assertIs(parse_index(sel), sel)

    def test_non_integer_components_raise(self):
        for key in ("a:3", "1:b", "1,x", "1,,2", "1.5:3", "1:2:3:4", [1, "2"], [1.0]):
            with self.subTest(key=key):
                with self.assertRaises(IndexParseError):
                    parse_index(key)

    def test_zero_step_raises(self):
        with self.assertRaises(IndexParseError):
            parse_index("::0")
        with self.assertRaises(IndexParseError):
            parse_index(slice(None, None, 0))

    def test_unsupported_keys(self):
        for key in ("abc", "3", "", 1.5, True, None, {"a": 1}):
            with self.subTest(key=key):
                with self.assertRaises(UnsupportedIndexError):
                    parse_index(key)

    def test_parse_error_is_unsupported_index_error(self):
        self.assertTrue(issubclass(IndexParseError, UnsupportedIndexError))


class TestSelectors(TestCase):
    def setUp(self) -> None:
        self.data = [10, 20, 30, 40, 50]

    def test_single_select(self):
        self.assertEqual(Single(0).select(self.data), 10)
        self.assertEqual(Single(4).select(self.data), 50)

    def test_single_out_of_range(self):
        with self.assertRaises(IndexOutOfRangeError) as cm:
            Single(5).select(self.data)
        self.assertEqual(cm.exception.index, 5)
        self.assertEqual(cm.exception.length, 5)

    def test_single_negative_does_not_wrap(self):
        with self.assertRaises(IndexOutOfRangeError):
            Single(-1).select(self.data)

    def test_multi_index_keeps_order_and_repeats(self):
        self.assertEqual(MultiIndex((4, 0, 0)).select(self.data), [50, 10, 10])

    def test_multi_index_out_of_range(self):
        with self.assertRaises(IndexOutOfRangeError):
            MultiIndex((0, 9)).select(self.data)

    def test_slice_select_follows_python_semantics(self):
        self.assertEqual(Slice(1, 4).select(self.data), [20, 30, 40])
        self.assertEqual(Slice(None, None, 2).select(self.data), [10, 30, 50])
        self.assertEqual(Slice(-3, -1).select(self.data), [30, 40])
        self.assertEqual(Slice(None, None, -1).select(self.data), [50, 40, 30, 20, 10])
        self.assertEqual(Slice(10, 20).select(self.data), [])


if __name__ == "__main__":
    unittest.main()
