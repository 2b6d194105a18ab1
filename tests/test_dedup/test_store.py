"""
Tests for the grouping store and fuzzy key resolution.
"""

import unittest

from deduper.core.config import DeduperConfig, FuzzyMatchingConfig, FuzzyMatchingStrategy
from deduper.dedup.store import GroupingStore
from deduper.utils.exceptions import ConfigurationError


def make_store(**kwargs):
    return GroupingStore(DeduperConfig(**kwargs))


class TestExactGrouping(unittest.TestCase):
    def setUp(self):
        self.store = make_store(normalize="company", ignored_suffixes=["inc"])
        for raw in ("Acme Inc", "ACME, Inc.", "Acme Inc", "Globex"):
            self.store.add(raw)

    def test_groups_by_key(self):
        self.assertEqual(len(self.store), 2)
        group = self.store.get_group("acme")
        self.assertEqual(group.values, {"Acme Inc": 2, "ACME, Inc.": 1})
        self.assertEqual(group.representative, "Acme Inc")
        self.assertEqual(group.total_count, 3)

    def test_duplicates_skip_first_occurrence(self):
        self.assertEqual(list(self.store.duplicates()), ["Acme Inc", "ACME, Inc."])

    def test_duplicates_with_representative(self):
        self.assertEqual(
            list(self.store.duplicates(include_representative=True)),
            ["Acme Inc", "Acme Inc", "ACME, Inc."],
        )

    def test_duplicates_collapse_repeats(self):
        self.assertEqual(
            list(self.store.duplicates(collapse_repeats=True)), ["Acme Inc", "ACME, Inc."]
        )
        self.assertEqual(
            list(self.store.duplicates(include_representative=True, collapse_repeats=True)),
            ["Acme Inc", "ACME, Inc."],
        )

    def test_duplicates_group_separator(self):
        self.assertEqual(
            list(self.store.duplicates(include_representative=True, group_separator=True)),
            ["Acme Inc", "Acme Inc", "ACME, Inc.", ""],
        )

    def test_uniques(self):
        self.assertEqual(list(self.store.uniques()), ["Acme Inc", "Globex"])
        self.assertEqual(list(self.store.uniques(restrict_to_input_unique=True)), ["Globex"])

    def test_everything(self):
        self.assertEqual(
            list(self.store.everything(group_separator=True)),
            ["Acme Inc", "Acme Inc", "ACME, Inc.", "", "Globex", ""],
        )
        self.assertEqual(
            list(self.store.everything(collapse_repeats=True)),
            ["Acme Inc", "ACME, Inc.", "Globex"],
        )

    def test_index_unused_without_fuzzy(self):
        self.assertIsNone(self.store.matcher)
        self.assertEqual(len(self.store.index), 0)


class TestRepeatedSingleValue(unittest.TestCase):
    def test_exact_duplicates(self):
        store = make_store(normalize="company", ignored_suffixes=["inc"])
        for _ in range(3):
            store.add("Acme Inc")

        self.assertEqual(len(store), 1)
        self.assertEqual(list(store.duplicates()), ["Acme Inc", "Acme Inc"])

    def test_collapsed_group_still_gets_separator(self):
        store = make_store()
        for _ in range(3):
            store.add("Acme Inc")

        self.assertEqual(
            list(store.duplicates(collapse_repeats=True, group_separator=True)),
            ["Acme Inc", ""],
        )

    def test_collapsed_repeats_reported_once(self):
        store = make_store()
        for _ in range(3):
            store.add("Microsoft")

        self.assertEqual(list(store.duplicates(collapse_repeats=True)), ["Microsoft"])
        self.assertEqual(
            list(store.duplicates(include_representative=True, collapse_repeats=True)),
            ["Microsoft"],
        )

    def test_collapsed_repeated_first_value_with_variant(self):
        store = make_store(normalize="company")
        for raw in ("Microsoft", "Microsoft", "MICROSOFT"):
            store.add(raw)

        self.assertEqual(
            list(store.duplicates(collapse_repeats=True)), ["Microsoft", "MICROSOFT"]
        )
        self.assertEqual(list(store.duplicates()), ["Microsoft", "MICROSOFT"])

    def test_restrict_to_input_unique(self):
        store = make_store()
        for raw in ("Foo", "Foo", "Bar"):
            store.add(raw)

        self.assertEqual(list(store.uniques()), ["Foo", "Bar"])
        self.assertEqual(list(store.uniques(restrict_to_input_unique=True)), ["Bar"])


class TestFuzzyResolution(unittest.TestCase):
    def fuzzy_store(self, **fuzzy):
        return make_store(normalize="company", fuzzy=FuzzyMatchingConfig(**fuzzy))

    def test_one_edit_merges(self):
        store = self.fuzzy_store(min_string_length=3, max_deviation=1)
        store.add("Acme Corp")
        store.add("Acme Corpp")

        self.assertEqual(len(store), 1)
        self.assertEqual(store.get_group("acmecorp").values, {"Acme Corp": 1, "Acme Corpp": 1})
        self.assertEqual(list(store.uniques()), ["Acme Corp"])
        self.assertEqual(store.fuzzy_redirects, 1)
        self.assertEqual(store.resolve_key("ACME CORPP"), "acmecorp")

    def test_first_key_wins(self):
        store = self.fuzzy_store(min_string_length=3, max_deviation=1)
        store.add("Acme Corpp")
        store.add("Acme Corp")
        store.add("Acme Corp")

        self.assertEqual(len(store), 1)
        self.assertIsNotNone(store.get_group("acmecorpp"))
        self.assertIsNone(store.get_group("acmecorp"))

    def test_short_keys_stay_exact(self):
        store = self.fuzzy_store(min_string_length=10, max_deviation=1)
        store.add("Acme Corp")
        store.add("Acme Corpp")

        self.assertEqual(len(store), 2)
        self.assertEqual(len(store.index), 2)

    def test_existing_key_keeps_its_group(self):
        store = make_store(fuzzy=FuzzyMatchingConfig(min_string_length=5, max_deviation=1))
        store.add("abcde")
        store.add("abcd")
        store.add("abcde")

        self.assertEqual(store.get_group("abcde").total_count, 2)
        self.assertEqual(store.get_group("abcd").total_count, 1)

    def test_index_mirrors_group_keys(self):
        store = self.fuzzy_store(min_string_length=3, max_deviation=1)
        for raw in ("Acme Corp", "Acme Corpp", "Globex", "Globe", "Initech", "Acme"):
            store.add(raw)

        self.assertEqual(set(store.index), {group.key for group in store.groups()})

    def test_bitap_strategy(self):
        store = self.fuzzy_store(
            strategy=FuzzyMatchingStrategy.BITAP, min_string_length=3, max_deviation=1
        )
        store.add("Acme Corp")
        store.add("Acme Corpp")

        self.assertEqual(len(store), 1)

    def test_unknown_strategy(self):
        fuzzy = FuzzyMatchingConfig.model_construct(
            strategy="soundex", min_string_length=3, max_deviation=1
        )
        with self.assertRaises(ConfigurationError):
            GroupingStore(DeduperConfig(fuzzy=fuzzy))


class TestStoreLifecycle(unittest.TestCase):
    def test_blank_key_dropped(self):
        store = make_store(normalize="company")
        self.assertIsNone(store.add("!!!"))
        self.assertEqual(len(store), 0)

    def test_clear(self):
        store = make_store(fuzzy=FuzzyMatchingConfig(min_string_length=3))
        for raw in ("Acme", "Acme", "Acmee"):
            store.add(raw)

        store.clear()

        self.assertEqual(len(store), 0)
        self.assertEqual(len(store.index), 0)
        self.assertEqual(store.fuzzy_redirects, 0)
        self.assertEqual(list(store.duplicates()), [])
        self.assertEqual(list(store.uniques()), [])

    def test_queries_read_live_state(self):
        store = make_store()
        store.add("Acme")
        query = store.uniques()
        store.add("Globex")

        self.assertEqual(list(query), ["Acme", "Globex"])


if __name__ == '__main__':
    unittest.main()
