"""
Unit tests for the title audit dictionary.

- unique titles of both providers paired 1:1 (strict score, best first)
- titles without counterpart are listed as orphans with their own tags
"""

import unittest
from datetime import date

from coursesynergy.dictionary import build_dictionary, dictionary_titles
from coursesynergy.model import SOURCE_A, Course


class TestBuildDictionary(unittest.TestCase):
    def test_pairs_then_orphans(self) -> None:
        titles_a = ["Trabajos en altura", "Trabajos en altura ", "Primeros auxilios", "Gestión del tiempo", ""]
        titles_b = ["Trabajos verticales en altura", "Primeros auxilios básicos", "Excel avanzado"]
        entries = build_dictionary(titles_a, titles_b)

        self.assertEqual(len(entries), 4)

        self.assertEqual(entries[0].title_a, "Primeros auxilios")
        self.assertEqual(entries[0].title_b, "Primeros auxilios básicos")
        self.assertEqual(entries[0].score, 3)
        self.assertEqual(entries[0].keywords, "Primeros Auxilios")

        self.assertEqual(entries[1].title_a, "Trabajos en altura")
        self.assertEqual(entries[1].title_b, "Trabajos verticales en altura")
        self.assertEqual(entries[1].keywords, "Trabajos en Altura")

        self.assertEqual((entries[2].title_a, entries[2].title_b), ("", "Excel avanzado"))
        self.assertEqual((entries[3].title_a, entries[3].title_b), ("Gestión del tiempo", ""))
        self.assertEqual(entries[3].keywords, "-")
        self.assertFalse(entries[3].is_pair)

    def test_generic_only_titles_stay_orphans(self) -> None:
        entries = build_dictionary(["PRL básico"], ["PRL básico"])
        self.assertEqual([e.is_pair for e in entries], [False, False])
        self.assertEqual(entries[0].keywords, "Nivel Basico, PRL")

    def test_one_to_one(self) -> None:
        entries = build_dictionary(["Trabajos en altura"], ["Trabajos en altura", "Trabajos verticales en altura"])
        pairs = [e for e in entries if e.is_pair]
        self.assertEqual(len(pairs), 1)
        self.assertEqual(pairs[0].title_b, "Trabajos en altura")
        self.assertEqual(entries[-1].title_b, "Trabajos verticales en altura")

    def test_to_dict(self) -> None:
        entry = build_dictionary(["Soldadura"], ["Soldadura MIG"])[0]
        self.assertEqual(
            entry.to_dict(),
            {"title_a": "Soldadura", "title_b": "Soldadura MIG", "score": 3, "keywords": "Soldadura"},
        )

    def test_empty(self) -> None:
        self.assertEqual(build_dictionary([], []), [])


class TestDictionaryTitles(unittest.TestCase):
    def test_unique_sorted_titles(self) -> None:
        courses = [
            Course("1", SOURCE_A, "Soldadura", "Madrid", date(2026, 1, 1)),
            Course("2", SOURCE_A, "Amianto", None, None),
            Course("3", SOURCE_A, "Soldadura", "Sevilla", date(2026, 2, 1)),
        ]
        self.assertEqual(dictionary_titles(courses), ["Amianto", "Soldadura"])


if __name__ == "__main__":
    unittest.main()
