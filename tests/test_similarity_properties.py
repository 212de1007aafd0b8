"""
Property-based tests for the string similarity used by brand matching.
"""
import pytest
from hypothesis import given, strategies as st

from brandaudit.services.similarity import (
    CONTAINS_MATCH_SCORE,
    EXACT_MATCH_SCORE,
    levenshtein_distance,
    similarity,
)

words = st.text(alphabet="abcdefghijklmnopqrstuvwxyz", min_size=1, max_size=20)


class TestSimilarityProperties:

    @given(words)
    def test_identical_strings_score_one(self, s):
        assert similarity(s, s) == EXACT_MATCH_SCORE

    @given(words)
    def test_case_is_ignored(self, s):
        assert similarity(s.upper(), s) == EXACT_MATCH_SCORE

    @given(words, words)
    def test_containment_scores_point_eight(self, a, b):
        assert similarity(a, a + b) == CONTAINS_MATCH_SCORE
        assert similarity(a + b, b) == CONTAINS_MATCH_SCORE

    @given(words, words)
    def test_symmetric(self, a, b):
        assert similarity(a, b) == similarity(b, a)

    @given(st.text(max_size=30), st.text(max_size=30))
    def test_bounded(self, a, b):
        assert 0.0 <= similarity(a, b) <= 1.0

    @given(words)
    def test_empty_side_scores_zero(self, s):
        assert similarity("", s) == 0.0
        assert similarity(s, "") == 0.0
        assert similarity(None, s) == 0.0


class TestLevenshtein:

    @pytest.mark.parametrize("a, b, expected", [
        ("", "", 0),
        ("", "abc", 3),
        ("flaw", "lawn", 2),
        ("kitten", "sitting", 3),
        ("github", "github", 0),
    ])
    def test_known_distances(self, a, b, expected):
        assert levenshtein_distance(a, b) == expected

    @given(words, words)
    def test_distance_is_symmetric(self, a, b):
        assert levenshtein_distance(a, b) == levenshtein_distance(b, a)

    def test_normalized_distance(self):
        # 3 edits over 7 characters
        assert similarity("kitten", "sitting") == pytest.approx(4 / 7)

    def test_disjoint_letters_score_zero(self):
        assert similarity("zzzz", "apple") == 0.0
