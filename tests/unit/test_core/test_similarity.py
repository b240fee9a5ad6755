"""
test_similarity.py - 문자열 유사도 테스트

DoD:
- similarity(s, s) == 1.0
- 대칭: similarity(a, b) == similarity(b, a)
- 빈 문자열 규칙
- 대소문자 무시
"""

import pytest

from docmerge.core.similarity import levenshtein_distance, similarity

NAMES = ["name", "Name", "姓名", "address", "Adress", "city", "Country", "x", "", "e-mail"]


# =============================================================================
# levenshtein_distance 테스트
# =============================================================================

class TestLevenshteinDistance:
    """levenshtein_distance 함수 테스트."""

    def test_classic_example(self):
        """kitten → sitting = 3."""
        assert levenshtein_distance("kitten", "sitting") == 3

    def test_empty_to_string(self):
        """빈 문자열 → 길이만큼 삽입."""
        assert levenshtein_distance("", "abc") == 3
        assert levenshtein_distance("abc", "") == 3

    def test_identical(self):
        assert levenshtein_distance("same", "same") == 0

    def test_single_operations(self):
        """삽입/삭제/치환 각각 비용 1."""
        assert levenshtein_distance("cat", "cats") == 1
        assert levenshtein_distance("cats", "cat") == 1
        assert levenshtein_distance("cat", "cut") == 1

    def test_case_sensitive_at_distance_level(self):
        """거리 계산 자체는 정규화하지 않음."""
        assert levenshtein_distance("A", "a") == 1


# =============================================================================
# similarity 테스트
# =============================================================================

class TestSimilarity:
    """similarity 함수 테스트."""

    @pytest.mark.parametrize("s", NAMES)
    def test_identity(self, s: str):
        """similarity(s, s) == 1.0."""
        assert similarity(s, s) == 1.0

    @pytest.mark.parametrize("a", NAMES)
    @pytest.mark.parametrize("b", NAMES)
    def test_symmetric(self, a: str, b: str):
        """similarity(a, b) == similarity(b, a)."""
        assert similarity(a, b) == similarity(b, a)

    def test_empty_vs_empty(self):
        assert similarity("", "") == 1.0

    def test_empty_vs_nonempty(self):
        assert similarity("", "x") == 0.0
        assert similarity("x", "") == 0.0

    def test_none_treated_as_empty(self):
        assert similarity(None, None) == 1.0
        assert similarity(None, "x") == 0.0

    def test_case_insensitive(self):
        """대소문자만 다르면 1.0."""
        assert similarity("NAME", "name") == 1.0
        assert similarity("Email", "eMAIL") == 1.0

    def test_normalized_distance(self):
        """1 - distance / max(len)."""
        assert similarity("kitten", "sitting") == pytest.approx(1 - 3 / 7)
        assert similarity("Adress", "Address") == pytest.approx(1 - 1 / 7)

    def test_completely_different(self):
        assert similarity("abc", "xyz") == 0.0

    @pytest.mark.parametrize("a", NAMES)
    @pytest.mark.parametrize("b", NAMES)
    def test_range(self, a: str, b: str):
        """항상 0.0 ~ 1.0."""
        assert 0.0 <= similarity(a, b) <= 1.0
