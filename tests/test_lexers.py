import unittest

from bdecode import _lexers
from bdecode import errors
from bdecode.lazy import cursor


class TestUint(unittest.TestCase):
    def test_valid(self):
        examples = [
            (b"0:", 0, b":"),
            (b"0", 0, b""),
            (b"7e", 7, b"e"),
            (b"115:", 115, b":"),
            (b"18446744073709551615:", 2 ** 64 - 1, b":"),
        ]
        for x, n, rest in examples:
            with self.subTest(x):
                self.assertEqual(_lexers.parse_uint(cursor(x)), (rest, n))

    def test_malformed(self):
        for x in [b"01", b"00:", b"a", b"-1", b":"]:
            with self.subTest(x):
                with self.assertRaises(errors.MalformedLength):
                    _lexers.parse_uint(cursor(x))

    def test_overflow(self):
        with self.assertRaises(errors.LengthOverflow):
            _lexers.parse_uint(cursor(b"18446744073709551616:"))

        with self.subTest("Raised before the run ends."):
            with self.assertRaises(errors.LengthOverflow):
                _lexers.parse_uint(cursor(b"9" * 25))

    def test_incomplete(self):
        for x in [b"", b"1", b"12"]:
            with self.subTest(x):
                with self.assertRaises(errors.Incomplete):
                    _lexers.parse_uint(cursor(x))
                with self.assertRaises(errors.UnterminatedContainer):
                    _lexers.parse_uint(cursor(x), final=True)


class TestInteger(unittest.TestCase):
    def test_valid(self):
        examples = [
            (b"i0e", 0),
            (b"i-12e", -12),
            (b"i115e", 115),
            (b"i9223372036854775807e", 2 ** 63 - 1),
            (b"i-9223372036854775808e", -(2 ** 63)),
        ]
        for x, n in examples:
            with self.subTest(x):
                self.assertEqual(_lexers.parse_integer(cursor(x)), (b"", n))

        with self.subTest("Trailing input is left alone."):
            self.assertEqual(_lexers.parse_integer(cursor(b"i3ei4e")), (b"i4e", 3))

    def test_malformed(self):
        for x in [b"i01e", b"i-01e", b"i-0e", b"ie", b"i-e", b"i--1e", b"i1-e", b"iae", b"x1e"]:
            with self.subTest(x):
                with self.assertRaises(errors.MalformedInteger):
                    _lexers.parse_integer(cursor(x))

    def test_overflow(self):
        for x in [
            b"i9223372036854775808e",
            b"i-9223372036854775809e",
            b"i99999999999999999999e",
        ]:
            with self.subTest(x):
                with self.assertRaises(errors.IntegerOverflow):
                    _lexers.parse_integer(cursor(x))

    def test_incomplete(self):
        for x in [b"", b"i", b"i-", b"i0", b"i12", b"i-12"]:
            with self.subTest(x):
                with self.assertRaises(errors.Incomplete):
                    _lexers.parse_integer(cursor(x))
                with self.assertRaises(errors.UnterminatedContainer):
                    _lexers.parse_integer(cursor(x), final=True)


class TestByteString(unittest.TestCase):
    def test_valid(self):
        examples = [
            (b"4:spam", b"spam", b""),
            (b"0:", b"", b""),
            (b"6:foobar3:baz", b"foobar", b"3:baz"),
            (b"3:\x00e:", b"\x00e:", b""),
        ]
        for x, s, rest in examples:
            with self.subTest(x):
                self.assertEqual(_lexers.parse_byte_string(cursor(x)), (rest, s))

    def test_zero_copy(self):
        buf = b"4:spam"
        _, data = _lexers.parse_byte_string(cursor(buf))
        self.assertIsInstance(data, memoryview)
        self.assertIs(data.obj, buf)

    def test_malformed(self):
        for x in [b"01:x", b"4-spam", b"4;spam"]:
            with self.subTest(x):
                with self.assertRaises(errors.MalformedLength):
                    _lexers.parse_byte_string(cursor(x))

    def test_incomplete(self):
        examples = [(b"4", None), (b"4:", 4), (b"4:spa", 1), (b"0", 1), (b"10", None)]
        for x, needed in examples:
            with self.subTest(x):
                with self.assertRaises(errors.Incomplete) as cm:
                    _lexers.parse_byte_string(cursor(x))
                self.assertEqual(cm.exception.needed, needed)
                with self.assertRaises(errors.TruncatedByteString):
                    _lexers.parse_byte_string(cursor(x), final=True)
