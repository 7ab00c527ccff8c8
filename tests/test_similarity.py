"""Tests for edit distance, similarity and ad-hoc fuzzy matching."""

import pytest

from propsearch.models import MatchType
from propsearch.similarity import (
    calculate_similarity,
    fuzzy_match,
    is_subsequence,
    levenshtein_distance,
)


class TestLevenshteinDistance:
    """Test edit distance."""

    def test_classic_example(self):
        """kitten -> sitting takes three edits."""
        assert levenshtein_distance("kitten", "sitting") == 3

    def test_identity(self):
        """Should be zero for identical strings."""
        assert levenshtein_distance("東京都", "東京都") == 0
        assert levenshtein_distance("", "") == 0

    def test_empty_side(self):
        """Should equal the other string's length."""
        assert levenshtein_distance("", "渋谷区") == 3
        assert levenshtein_distance("abc", "") == 3

    def test_symmetric(self):
        """Should not depend on argument order."""
        pairs = [("東京都", "京都"), ("tokyo", "kyoto"), ("flaw", "lawn")]
        for a, b in pairs:
            assert levenshtein_distance(a, b) == levenshtein_distance(b, a)

    def test_single_edits(self):
        """Should count one insertion, deletion or substitution as 1."""
        assert levenshtein_distance("渋谷", "渋谷区") == 1
        assert levenshtein_distance("渋谷区", "渋谷") == 1
        assert levenshtein_distance("tokyo", "tokyu") == 1


class TestCalculateSimilarity:
    """Test normalized similarity."""

    def test_empty_strings(self):
        """Two empty strings are identical."""
        assert calculate_similarity("", "") == 1.0

    def test_identity(self):
        """Should be 1.0 for identical strings."""
        assert calculate_similarity("マンション", "マンション") == 1.0

    def test_normalized_by_longer_string(self):
        """Should divide by the longer length."""
        assert calculate_similarity("kitten", "sitting") == pytest.approx(4 / 7)
        assert calculate_similarity("", "abc") == 0.0

    def test_symmetric(self):
        """Should not depend on argument order."""
        assert calculate_similarity("東京都", "京都") == calculate_similarity("京都", "東京都")

    def test_monotonic(self):
        """Should decrease as edits increase for a fixed length."""
        one = calculate_similarity("abcd", "abcx")
        two = calculate_similarity("abcd", "abxx")
        three = calculate_similarity("abcd", "axxx")

        assert 1.0 > one > two > three


class TestFuzzyMatch:
    """Test ad-hoc fuzzy matching."""

    def test_prefix(self):
        """Should score a prefix match 0.9."""
        result = fuzzy_match("東京都", "東京都渋谷区")

        assert result.match is True
        assert result.type == MatchType.PREFIX
        assert result.type == "prefix"
        assert result.score == 0.9

    def test_equal_text_is_exact(self):
        """Should treat case-insensitive equality as exact."""
        result = fuzzy_match("Tokyo", "tokyo")

        assert result.match is True
        assert result.type == MatchType.EXACT
        assert result.score == 1.0

    def test_substring_is_exact(self):
        """Should treat a substring away from the start as exact."""
        result = fuzzy_match("渋谷", "東京都渋谷区")

        assert result.type == MatchType.EXACT
        assert result.score == 1.0

    def test_similar_text(self):
        """Should accept similar strings above the threshold."""
        result = fuzzy_match("tokyo", "tokio")

        assert result.match is True
        assert result.type == MatchType.FUZZY
        assert result.score == pytest.approx(0.8)

    def test_threshold(self):
        """Should reject similarity below the threshold."""
        result = fuzzy_match("tokyo", "tokio", threshold=0.9)

        assert result.type != MatchType.FUZZY

    def test_subsequence(self):
        """Should fall back to in-order character matching."""
        result = fuzzy_match("tkd", "takadanobaba")

        assert result.match is True
        assert result.type == MatchType.SUBSEQUENCE
        assert result.score == pytest.approx(3 / 12 * 0.7)

    def test_no_match(self):
        """Should report no match for unrelated text."""
        result = fuzzy_match("xyz", "東京")

        assert result.match is False
        assert result.score == 0.0
        assert result.type is None

    def test_empty_inputs(self):
        """Should not match empty query or text."""
        assert fuzzy_match("", "東京").match is False
        assert fuzzy_match("東京", None).match is False


class TestIsSubsequence:
    """Test subsequence detection."""

    def test_in_order(self):
        """Should require characters in order."""
        assert is_subsequence("tkd", "takadanobaba")
        assert not is_subsequence("dkt", "takadanobaba")
        assert is_subsequence("", "anything")
