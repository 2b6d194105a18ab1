"""
Tests for the length-bucketed key index.
"""

import unittest

from deduper.dedup.index import LengthBucketIndex


class TestLengthBucketIndex(unittest.TestCase):
    def setUp(self):
        self.index = LengthBucketIndex()
        for key in ("abcd", "abc", "abcdef", "abcde", "xyz"):
            self.index.add(key)

    def test_candidates_cover_length_window(self):
        self.assertEqual(
            list(self.index.candidates_within(4, 1)), ["abc", "xyz", "abcd", "abcde"]
        )

    def test_candidates_start_at_length_one(self):
        self.assertEqual(list(self.index.candidates_within(1, 3)), ["abc", "xyz", "abcd"])

    def test_wider_deviation(self):
        self.assertEqual(
            list(self.index.candidates_within(6, 2)), ["abcd", "abcde", "abcdef"]
        )

    def test_add_is_idempotent(self):
        self.index.add("abc")
        self.assertEqual(len(self.index), 5)
        self.assertEqual(self.index.bucket_sizes(), {3: 2, 4: 1, 5: 1, 6: 1})

    def test_membership(self):
        self.assertIn("abcde", self.index)
        self.assertNotIn("abcdx", self.index)
        self.assertNotIn(5, self.index)

    def test_clear(self):
        self.index.clear()
        self.assertEqual(len(self.index), 0)
        self.assertEqual(list(self.index.candidates_within(4, 2)), [])


if __name__ == '__main__':
    unittest.main()
