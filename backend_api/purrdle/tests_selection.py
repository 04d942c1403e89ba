import random
from datetime import date, datetime, timedelta, timezone

from django.test import SimpleTestCase

from purrdle.puzzles import WordCatalog, WordEntry, WordIdentifierCodec, resolve_word, route_from_path
from purrdle.puzzles.selection import DEFAULT_EPOCH, daily_index, day_number, random_index, today


def _catalog(words):
    return WordCatalog(WordEntry(word=w, definitions=("", "", ""), quality=1) for w in words)


class DailyIndexTests(SimpleTestCase):
    def test_same_day_same_index(self):
        day = date(2025, 3, 14)
        self.assertEqual(daily_index(500, day), daily_index(500, day))

    def test_adjacent_days_differ(self):
        day = date(2025, 3, 14)
        for n in (2, 7, 32, 500):
            self.assertNotEqual(daily_index(n, day), daily_index(n, day + timedelta(days=1)))

    def test_no_repeats_within_catalog_size_days(self):
        start = date(2024, 6, 1)
        for n in (1, 2, 3, 10, 32, 97, 100):
            seen = {daily_index(n, start + timedelta(days=d)) for d in range(n)}
            self.assertEqual(seen, set(range(n)))

    def test_sequence_does_not_follow_catalog_order(self):
        n = 100
        start = date(2024, 6, 1)
        sequence = [daily_index(n, start + timedelta(days=d)) for d in range(10)]
        steps = {(b - a) % n for a, b in zip(sequence, sequence[1:])}
        self.assertNotIn(1, steps)

    def test_days_before_epoch_are_valid(self):
        index = daily_index(40, DEFAULT_EPOCH - timedelta(days=400))
        self.assertTrue(0 <= index < 40)

    def test_epoch_is_configurable(self):
        day = date(2025, 1, 1)
        self.assertEqual(daily_index(50, day, epoch=day), daily_index(50, DEFAULT_EPOCH))

    def test_empty_catalog_fails_fast(self):
        with self.assertRaises(ValueError):
            daily_index(0, date(2025, 1, 1))
        with self.assertRaises(ValueError):
            random_index(0)

    def test_day_number(self):
        self.assertEqual(day_number(date(2024, 1, 1)), 0)
        self.assertEqual(day_number(date(2024, 1, 31)), 30)

    def test_today_uses_reference_timezone(self):
        moment = datetime(2025, 5, 1, 23, 30, tzinfo=timezone.utc)
        ahead = timezone(timedelta(hours=2))
        self.assertEqual(today(timezone.utc, now=moment), date(2025, 5, 1))
        self.assertEqual(today(ahead, now=moment), date(2025, 5, 2))


class RandomIndexTests(SimpleTestCase):
    def test_random_index_in_range(self):
        rng = random.Random(3)
        values = [random_index(9, rng) for _ in range(500)]
        self.assertTrue(all(0 <= v < 9 for v in values))
        self.assertEqual(set(values), set(range(9)))


class RoutingTests(SimpleTestCase):
    def setUp(self):
        self.catalog = _catalog(["crane", "apple", "lemon", "speed", "tabby"])
        self.codec = WordIdentifierCodec(len(self.catalog))
        self.day = date(2025, 2, 2)

    def test_specific_identifier_resolves(self):
        resolved = resolve_word(self.catalog, self.codec, "specific", self.codec.encode(3), day=self.day)
        self.assertEqual(resolved.mode, "specific")
        self.assertEqual(resolved.entry.word, "speed")
        self.assertEqual(resolved.identifier, self.codec.encode(3))

    def test_bad_identifier_falls_back_to_daily(self):
        expected = daily_index(len(self.catalog), self.day)
        for bad in ["", "not-an-id", None, WordIdentifierCodec(1000).encode(999)]:
            resolved = resolve_word(self.catalog, self.codec, "specific", bad, day=self.day)
            self.assertEqual(resolved.mode, "daily")
            self.assertEqual(resolved.index, expected)

    def test_unknown_mode_falls_back_to_daily(self):
        resolved = resolve_word(self.catalog, self.codec, "weekly", day=self.day)
        self.assertEqual(resolved.mode, "daily")

    def test_daily_label_counts_days_from_epoch(self):
        resolved = resolve_word(self.catalog, self.codec, "daily", day=date(2024, 1, 10))
        self.assertEqual(resolved.label, "#10")

    def test_random_returns_shareable_identifier(self):
        resolved = resolve_word(self.catalog, self.codec, "random", rng=random.Random(1))
        self.assertEqual(resolved.mode, "random")
        self.assertEqual(self.codec.decode(resolved.identifier), resolved.index)
        self.assertIs(self.catalog[resolved.index], resolved.entry)

    def test_route_from_path(self):
        self.assertEqual(route_from_path("#/random"), ("random", None))
        self.assertEqual(route_from_path("#/w/abc12"), ("specific", "abc12"))
        self.assertEqual(route_from_path("w/xyz"), ("specific", "xyz"))
        self.assertEqual(route_from_path("#/"), ("daily", None))
        self.assertEqual(route_from_path(None), ("daily", None))
