"""Tests for the Levenshtein scorer: distance, bounded distance and percentage.

This module tests the space-optimized edit distance provided by docsim,
including the distance budget and its translation into percentages.
"""

import time

import pytest

import docsim as ds


class TestLevenshtein:
    """Tests for Levenshtein distance."""

    def test_identical_strings(self):
        assert ds.levenshtein("hello", "hello") == 0, "Identical strings should have distance 0"
        assert ds.levenshtein("", "") == 0, "Two empty strings should have distance 0"

    def test_empty_strings(self):
        assert ds.levenshtein("hello", "") == 5, "Distance to empty string equals string length"
        assert ds.levenshtein("", "hello") == 5, "Distance from empty string equals target length"

    def test_classic_examples(self):
        # kitten -> sitten (s for k) -> sittin (i for e) -> sitting (g added) = 3 edits
        assert ds.levenshtein("kitten", "sitting") == 3, "kitten->sitting requires 3 edits"
        assert ds.levenshtein("saturday", "sunday") == 3, "saturday->sunday requires 3 edits"

    def test_symmetric_when_lengths_differ(self):
        assert ds.levenshtein("sitting", "kitten") == ds.levenshtein("kitten", "sitting")
        assert ds.levenshtein("ab", "abcdef") == ds.levenshtein("abcdef", "ab") == 4

    def test_unicode(self):
        # Characters, not bytes: an accented letter is one substitution
        assert ds.levenshtein("café", "cafe") == 1, "Accent difference is 1 edit"
        assert ds.levenshtein("日本語", "日本") == 1, "Removing one Japanese character is 1 edit"

    def test_case_sensitive(self):
        assert ds.levenshtein("Hello", "hello") == 1

    def test_edit_distance_alias(self):
        assert ds.edit_distance("kitten", "sitting") == 3


class TestDistanceBudget:
    """Tests for the optional max_distance budget."""

    def test_exceeded_returns_sentinel(self):
        # Should return max_distance + 1 when distance exceeds threshold
        result = ds.levenshtein("abcdef", "ghijkl", max_distance=3)
        assert result == 4, "Distance exceeding max_distance returns max_distance + 1"

    def test_within_budget_returns_distance(self):
        assert ds.levenshtein("abc", "abd", max_distance=2) == 1, \
            "Distance within max_distance returns actual distance"
        assert ds.levenshtein("kitten", "sitting", max_distance=3) == 3, \
            "Distance equal to max_distance is not exceeded"

    def test_empty_side_respects_budget(self):
        assert ds.levenshtein("abc", "", max_distance=1) == 2
        assert ds.levenshtein("", "abc", max_distance=5) == 3

    def test_zero_budget(self):
        assert ds.levenshtein("same", "same", max_distance=0) == 0
        assert ds.levenshtein("same", "sane", max_distance=0) == 1

    def test_bounded_variant(self):
        assert ds.levenshtein_bounded("abc", "abd", max_distance=2) == 1
        assert ds.levenshtein_bounded("abcdef", "ghijkl", max_distance=3) is None

    def test_negative_budget_raises(self):
        with pytest.raises(ds.ValidationError):
            ds.levenshtein("abc", "abd", max_distance=-1)

    def test_early_termination_is_fast(self):
        """A tight budget on very different long strings stops after a few rows."""
        long_a = "a" * 5000
        long_b = "b" * 5000
        start = time.perf_counter()
        result = ds.levenshtein(long_a, long_b, max_distance=5)
        elapsed = time.perf_counter() - start
        assert result == 6
        # A full 5000x5000 table would take several seconds in pure Python
        assert elapsed < 1.0


class TestLevenshteinSimilarity:
    """Tests for the percentage conversion."""

    def test_identical(self):
        assert ds.levenshtein_similarity("hello", "hello") == 100.0, \
            "Identical strings should have similarity 100.0"

    def test_both_empty(self):
        assert ds.levenshtein_similarity("", "") == 100.0

    def test_one_empty(self):
        assert ds.levenshtein_similarity("hello", "") == 0.0, \
            "Comparing to empty string should have similarity 0.0"
        assert ds.levenshtein_similarity("", "hello") == 0.0

    def test_single_edit(self):
        # "hello" vs "hallo": 1 edit out of 5 chars = 80%
        assert ds.levenshtein_similarity("hello", "hallo") == pytest.approx(80.0)

    def test_uses_longer_length(self):
        # kitten/sitting: 3 edits, longer length 7
        assert ds.levenshtein_similarity("kitten", "sitting") == pytest.approx(4 / 7 * 100)

    def test_budget_exceeded_is_zero(self):
        """An exceeded budget must not be turned into a percentage."""
        assert ds.levenshtein_similarity("abcdef", "ghijkl", max_distance=3) == 0.0

    def test_budget_not_exceeded_is_exact(self):
        assert ds.levenshtein_similarity("kitten", "sitting", max_distance=5) == \
            ds.levenshtein_similarity("kitten", "sitting")


class TestVeryLongStringProtection:
    """Tests verifying long strings complete in linear memory."""

    @pytest.mark.slow
    def test_levenshtein_long_strings(self):
        long_a = "a" * 1000
        long_b = "b" * 1000
        assert ds.levenshtein(long_a, long_b) == 1000

    def test_long_versus_short(self):
        assert ds.levenshtein("x" * 2000, "x") == 1999


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
