from datetime import date
from io import StringIO

from django.apps import apps
from django.core.management import call_command
from django.core.management.base import CommandError
from django.test import SimpleTestCase

from purrdle.puzzles import daily_index


class DailyWordCommandTests(SimpleTestCase):
    def setUp(self):
        self.app = apps.get_app_config("purrdle")

    def test_prints_index_and_identifier(self):
        index = daily_index(len(self.app.catalog), date(2024, 1, 1))
        out = StringIO()
        call_command("daily_word", "--date", "2024-01-01", stdout=out)
        self.assertIn("puzzle #1", out.getvalue())
        self.assertIn(f"index {index}, id {self.app.codec.encode(index)}", out.getvalue())
        self.assertEqual(len(out.getvalue().strip().splitlines()), 1)

    def test_reveal_prints_word(self):
        index = daily_index(len(self.app.catalog), date(2024, 2, 1))
        out = StringIO()
        call_command("daily_word", "--date", "2024-02-01", "--reveal", stdout=out)
        self.assertIn(self.app.catalog[index].word, out.getvalue())

    def test_invalid_date(self):
        with self.assertRaises(CommandError):
            call_command("daily_word", "--date", "tomorrow", stdout=StringIO())
