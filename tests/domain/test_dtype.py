import unittest
from unittest import TestCase

from src.typedarray.domain._dtype import DEFAULT_DTYPE, DType
from src.typedarray.domain._errors import TypedArrayError, UnknownDTypeError


class TestDTypeParse(TestCase):
    def test_short_and_long_aliases(self):
        self.assertIs(DType.parse("int"), DType.INTEGER)
        self.assertIs(DType.parse("integer"), DType.INTEGER)
        self.assertIs(DType.parse("float"), DType.FLOAT)
        self.assertIs(DType.parse("double"), DType.FLOAT)
        self.assertIs(DType.parse("str"), DType.STRING)
        self.assertIs(DType.parse("string"), DType.STRING)
        self.assertIs(DType.parse("bool"), DType.BOOLEAN)
        self.assertIs(DType.parse("boolean"), DType.BOOLEAN)

    def test_case_and_whitespace_insensitive(self):
        self.assertIs(DType.parse("  Float "), DType.FLOAT)

    def test_enum_and_builtin_types(self):
        self.assertIs(DType.parse(DType.STRING), DType.STRING)
        self.assertIs(DType.parse(int), DType.INTEGER)
        self.assertIs(DType.parse(bool), DType.BOOLEAN)
        self.assertIs(DType.parse(float), DType.FLOAT)
        self.assertIs(DType.parse(str), DType.STRING)

    def test_unknown_tag_raises(self):
        for tag in ("complex", "", None, 3, list):
            with self.subTest(tag=tag):
                with self.assertRaises(UnknownDTypeError):
                    DType.parse(tag)

    def test_unknown_dtype_is_value_error(self):
        with self.assertRaises(ValueError):
            DType.parse("int8")
        with self.assertRaises(TypedArrayError):
            DType.parse("int8")


class TestDTypeProperties(TestCase):
    def test_str_is_tag(self):
        self.assertEqual(str(DType.INTEGER), "int")
        self.assertEqual(str(DType.BOOLEAN), "bool")

    def test_python_type(self):
        self.assertIs(DType.INTEGER.python_type, int)
        self.assertIs(DType.FLOAT.python_type, float)
        self.assertIs(DType.STRING.python_type, str)
        self.assertIs(DType.BOOLEAN.python_type, bool)

    def test_widen_chain(self):
        self.assertIs(DType.BOOLEAN.widen(DType.INTEGER), DType.INTEGER)
        self.assertIs(DType.FLOAT.widen(DType.INTEGER), DType.FLOAT)
        self.assertIs(DType.FLOAT.widen(DType.STRING), DType.STRING)
        self.assertIs(DType.BOOLEAN.widen(DType.BOOLEAN), DType.BOOLEAN)

    def test_default_is_integer(self):
        self.assertIs(DEFAULT_DTYPE, DType.INTEGER)


if __name__ == "__main__":
    unittest.main()
