import random

from django.test import SimpleTestCase

from purrdle.puzzles.codec import WordIdentifierCodec, _permute, _unpermute


class WordIdentifierCodecTests(SimpleTestCase):
    def setUp(self):
        self.codec = WordIdentifierCodec(5000)

    def test_round_trip_over_whole_catalog(self):
        for index in range(self.codec.catalog_size):
            self.assertEqual(self.codec.decode(self.codec.encode(index)), index)

    def test_identifiers_are_distinct_and_url_safe(self):
        ids = [self.codec.encode(i) for i in range(self.codec.catalog_size)]
        self.assertEqual(len(set(ids)), len(ids))
        for identifier in ids:
            self.assertRegex(identifier, r"^[0-9a-z]{1,7}$")

    def test_neighbouring_indices_do_not_look_related(self):
        ids = [self.codec.encode(i) for i in range(20)]
        self.assertNotEqual(ids, [str(i) for i in range(20)])
        values = [int(i, 36) for i in ids]
        steps = {b - a for a, b in zip(values, values[1:])}
        self.assertGreater(len(steps), 1)

    def test_permutation_is_invertible_on_full_word_range(self):
        rng = random.Random(7)
        samples = [0, 1, 0xFFFFFFFF, 0x80000000] + [rng.getrandbits(32) for _ in range(2000)]
        for value in samples:
            self.assertEqual(_unpermute(_permute(value, 1234), 1234), value)

    def test_decode_rejects_malformed_input(self):
        for bad in ["", "   ", "hello world", "abc!", "-1", "zzzzzzzz", "\x00", None, 42, ["a"]]:
            self.assertIsNone(self.codec.decode(bad), msg=repr(bad))

    def test_decode_rejects_values_beyond_32_bits(self):
        self.assertIsNone(self.codec.decode("zzzzzzz"))

    def test_decode_rejects_non_canonical_spelling(self):
        identifier = self.codec.encode(3)
        self.assertIsNone(self.codec.decode("0" + identifier))

    def test_decode_accepts_surrounding_whitespace_and_upper_case(self):
        identifier = self.codec.encode(11)
        self.assertEqual(self.codec.decode(f"  {identifier.upper()} "), 11)

    def test_decode_rejects_out_of_range_index(self):
        big = WordIdentifierCodec(100000)
        small = WordIdentifierCodec(10)
        outside = [big.encode(i) for i in range(10, 200)]
        for identifier in outside:
            self.assertIsNone(small.decode(identifier))

    def test_key_changes_identifiers(self):
        other = WordIdentifierCodec(5000, key=99)
        self.assertNotEqual(
            [self.codec.encode(i) for i in range(10)],
            [other.encode(i) for i in range(10)],
        )

    def test_encode_rejects_index_outside_catalog(self):
        with self.assertRaises(ValueError):
            self.codec.encode(5000)
        with self.assertRaises(ValueError):
            self.codec.encode(-1)

    def test_empty_catalog_is_a_precondition_failure(self):
        with self.assertRaises(ValueError):
            WordIdentifierCodec(0)
