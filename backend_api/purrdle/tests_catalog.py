import tempfile
from pathlib import Path

from django.apps import apps
from django.test import SimpleTestCase

from purrdle.puzzles.catalog import CatalogError, WordCatalog, WordEntry, load_catalog, parse_catalog

SAMPLE = [
    "word,quality,definition1,definition2,definition3\n",
    "crane,5,A wading bird,\"A machine, for lifting\",To stretch\n",
    "\n",
    "quote,3,\"He said \"\"hello\"\"\",Second\n",
    "   \n",
    "lemon,4,A citrus fruit\n",
]


class ParseCatalogTests(SimpleTestCase):
    def test_parses_rows_in_source_order(self):
        catalog = parse_catalog(SAMPLE)
        self.assertEqual([e.word for e in catalog], ["crane", "quote", "lemon"])

    def test_quoted_fields_with_commas_and_doubled_quotes(self):
        catalog = parse_catalog(SAMPLE)
        self.assertEqual(catalog[0].definitions[1], "A machine, for lifting")
        self.assertEqual(catalog[1].definitions[0], 'He said "hello"')

    def test_missing_trailing_columns_default_to_empty(self):
        lemon = parse_catalog(SAMPLE)[2]
        self.assertEqual(lemon.definitions, ("A citrus fruit", "", ""))
        self.assertIsNone(lemon.example)
        self.assertEqual(lemon.quality, 4.0)

    def test_optional_example_column(self):
        catalog = parse_catalog(["word,quality,d1,d2,d3,example\n", "purr,5,a,b,c,The cat purrs.\n"])
        self.assertEqual(catalog[0].example, "The cat purrs.")

    def test_malformed_rows_are_skipped_with_warning(self):
        lines = ["word,quality,d1,d2,d3\n", "tabby,lots,a,b,c\n", ",5,a,b,c\n", "purr,5,a,b,c\n"]
        with self.assertLogs("purrdle.puzzles.catalog", level="WARNING") as logs:
            catalog = parse_catalog(lines)
        self.assertEqual([e.word for e in catalog], ["purr"])
        self.assertEqual(len(logs.records), 2)

    def test_header_only_is_an_error(self):
        with self.assertRaises(CatalogError):
            parse_catalog(["word,quality,d1,d2,d3\n"])


class WordCatalogTests(SimpleTestCase):
    def setUp(self):
        self.catalog = parse_catalog(SAMPLE)

    def test_empty_catalog_rejected(self):
        with self.assertRaises(CatalogError):
            WordCatalog([])

    def test_lookup_helpers(self):
        self.assertEqual(len(self.catalog), 3)
        self.assertEqual(self.catalog.index_of("LEMON"), 2)
        self.assertIsNone(self.catalog.index_of("zebra"))
        self.assertIsNone(self.catalog.get(3))
        self.assertIsNone(self.catalog.get(-1))
        self.assertEqual(self.catalog.get(0).word, "crane")

    def test_entries_are_immutable(self):
        with self.assertRaises(AttributeError):
            self.catalog[0].word = "other"

    def test_entry_length(self):
        self.assertEqual(WordEntry(word="cat nap", definitions=("", "", ""), quality=1).length, 7)


class LoadCatalogTests(SimpleTestCase):
    def test_missing_file(self):
        with self.assertRaises(CatalogError):
            load_catalog("/nonexistent/words.csv")

    def test_load_from_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "words.csv"
            path.write_text("".join(SAMPLE), encoding="utf-8")
            catalog = load_catalog(path)
        self.assertEqual(len(catalog), 3)

    def test_bundled_dictionary_loaded_at_startup(self):
        catalog = apps.get_app_config("purrdle").catalog
        self.assertIsNotNone(catalog.index_of("crane"))
        self.assertTrue(all(len(entry.definitions) == 3 for entry in catalog))
