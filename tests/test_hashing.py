"""
Tests for value canonicalization and hash combination.
"""

import unittest

from merkle_trees.hashing import (
    DEFAULT_SEED,
    CanonicalizationError,
    canonical_string,
    hash_parents,
    hash_value,
    parent_hash_string,
    xxh64_hash,
)


class Point:
    def __init__(self, x, y):
        self.x, self.y = x, y

    def __repr__(self):
        return f"Point({self.x}, {self.y})"


class Opaque:
    pass


class Broken:
    def __str__(self):
        raise RuntimeError("no string for you")


class TestCanonicalString(unittest.TestCase):

    def test_strings_pass_through(self):
        for value in ("", "abc", "7", "ünïcode"):
            with self.subTest(value=value):
                self.assertIs(canonical_string(value), value)

    def test_bytes_pass_through(self):
        self.assertEqual(canonical_string(b"\x00\x01"), b"\x00\x01")
        self.assertEqual(canonical_string(bytearray(b"ab")), b"ab")
        self.assertIsInstance(canonical_string(bytearray(b"ab")), bytes)

    def test_other_values_are_stringified(self):
        cases = [(7, "7"), (-3, "-3"), (1.5, "1.5"), (None, "None"), ([1, 2], "[1, 2]")]
        for value, expected in cases:
            with self.subTest(value=value):
                self.assertEqual(canonical_string(value), expected)

    def test_custom_repr_is_used(self):
        self.assertEqual(canonical_string(Point(1, 2)), "Point(1, 2)")

    def test_identity_repr_is_rejected(self):
        with self.assertRaises(CanonicalizationError):
            canonical_string(Opaque())

    def test_failing_str_is_wrapped(self):
        with self.assertRaises(CanonicalizationError) as ctx:
            canonical_string(Broken())
        self.assertIsInstance(ctx.exception.__cause__, RuntimeError)
        self.assertIsInstance(ctx.exception, TypeError)


class TestXxh64(unittest.TestCase):

    def test_known_digest_of_empty_input(self):
        self.assertEqual(xxh64_hash(""), 0xEF46DB3751D8E999)
        self.assertEqual(xxh64_hash(b""), 0xEF46DB3751D8E999)

    def test_str_is_utf8_encoded(self):
        self.assertEqual(xxh64_hash("ünïcode"), xxh64_hash("ünïcode".encode("utf-8")))

    def test_fits_in_64_bits(self):
        for data in ("a", "7", "8748", "x" * 1000):
            with self.subTest(data=data[:10]):
                h = xxh64_hash(data)
                self.assertGreaterEqual(h, 0)
                self.assertLess(h, 1 << 64)

    def test_seed_changes_digest(self):
        self.assertEqual(DEFAULT_SEED, 0)
        self.assertEqual(xxh64_hash("7"), xxh64_hash("7", seed=DEFAULT_SEED))
        self.assertNotEqual(xxh64_hash("7"), xxh64_hash("7", seed=1))

    def test_hash_value_uses_canonical_string(self):
        self.assertEqual(hash_value(7), xxh64_hash("7"))
        self.assertEqual(hash_value("7"), hash_value(7))


class TestParentHash(unittest.TestCase):

    def test_sorts_as_strings_not_numbers(self):
        # "10" < "9" lexicographically
        self.assertEqual(parent_hash_string(9, 10), "109")
        self.assertEqual(parent_hash_string(10, 9), "109")
        self.assertEqual(parent_hash_string(2, 1), "12")

    def test_equal_inputs(self):
        self.assertEqual(parent_hash_string(5, 5), "55")

    def test_order_independent(self):
        a, b = xxh64_hash("a"), xxh64_hash("b")
        self.assertEqual(hash_parents(a, b), hash_parents(b, a))
        self.assertEqual(hash_parents(a, b), xxh64_hash(parent_hash_string(a, b)))

    def test_uses_given_hash_function(self):
        self.assertEqual(hash_parents(12, 3, hash_function=len), 3)
        self.assertEqual(hash_parents(12, 3, hash_function=lambda s: int(s)), 123)


if __name__ == "__main__":
    unittest.main()
