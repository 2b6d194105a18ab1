"""
Tests for fuzzy matching strategies.
"""

import unittest

from deduper.core.config import FuzzyMatchingStrategy
from deduper.dedup.matchers import (
    BitapMatcher,
    LevenshteinMatcher,
    bitap_search,
    create_matcher,
)
from deduper.utils.exceptions import ConfigurationError


class TestLevenshteinMatcher(unittest.TestCase):
    def setUp(self):
        self.matcher = LevenshteinMatcher()

    def test_single_insertion(self):
        self.assertTrue(self.matcher.matches("acmecorp", "acmecorpp", 1))

    def test_distance_limit(self):
        # kitten -> sitting needs three edits
        self.assertFalse(self.matcher.matches("kitten", "sitting", 2))
        self.assertTrue(self.matcher.matches("kitten", "sitting", 3))

    def test_identical(self):
        self.assertTrue(self.matcher.matches("globex", "globex", 1))

    def test_symmetric(self):
        pairs = [
            ("acmecorp", "acmecorpp"),
            ("kitten", "sitting"),
            ("initech", "initrode"),
            ("abc", "abcdef"),
        ]
        for a, b in pairs:
            for limit in (1, 2, 3):
                self.assertEqual(
                    self.matcher.matches(a, b, limit), self.matcher.matches(b, a, limit)
                )


class TestBitapSearch(unittest.TestCase):
    def test_exact_substring(self):
        self.assertEqual(bitap_search("hello world", "world", 0), 6)
        self.assertEqual(bitap_search("acmecorpp", "acmecorp", 1), 0)

    def test_substitution_within_limit(self):
        self.assertEqual(bitap_search("acmecorx", "acmecorp", 1), 0)
        self.assertEqual(bitap_search("acmecorx", "acmecorp", 0), -1)

    def test_empty_pattern(self):
        self.assertEqual(bitap_search("abc", "", 1), 0)

    def test_pattern_over_word_size(self):
        self.assertEqual(bitap_search("a" * 40, "a" * 32, 5), -1)
        self.assertEqual(bitap_search("a" * 40, "a" * 31, 0), 0)


class TestBitapMatcher(unittest.TestCase):
    def setUp(self):
        self.matcher = BitapMatcher()

    def test_argument_order_does_not_matter(self):
        self.assertTrue(self.matcher.matches("acmecorp", "acmecorpp", 1))
        self.assertTrue(self.matcher.matches("acmecorpp", "acmecorp", 1))

    def test_no_match(self):
        self.assertFalse(self.matcher.matches("abc", "xyz", 1))

    def test_long_pattern_fails_closed(self):
        self.assertFalse(self.matcher.matches("a" * 32, "a" * 40, 10))
        self.assertFalse(self.matcher.matches("a" * 40, "a" * 32, 10))

    def test_characters_outside_ascii(self):
        self.assertTrue(self.matcher.matches("café", "cafés", 1))


class TestCreateMatcher(unittest.TestCase):
    def test_known_strategies(self):
        self.assertIsInstance(create_matcher(FuzzyMatchingStrategy.LEVENSHTEIN), LevenshteinMatcher)
        self.assertIsInstance(create_matcher(FuzzyMatchingStrategy.BITAP), BitapMatcher)
        self.assertIsInstance(create_matcher("bitap"), BitapMatcher)

    def test_unknown_strategy(self):
        with self.assertRaises(ConfigurationError):
            create_matcher("soundex")


if __name__ == '__main__':
    unittest.main()
