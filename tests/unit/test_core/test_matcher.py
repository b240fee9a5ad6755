"""
test_matcher.py - 변수 매칭 테스트

DoD:
- 정확 매칭: 대소문자 무시, 타깃은 최대 한 번만 소비
- 퍼지 매칭: threshold 이상 + 최고 점수, 동점은 타깃 순서상 먼저
- greedy / 소스 순서 의존
- match_exact == match_variables(fuzzy_enabled=False)
- None 입력 → INVALID_ARGUMENT
"""

import pytest

from docmerge.core.matcher import match_exact, match_variables, remap_record
from docmerge.core.similarity import similarity
from docmerge.domain.errors import ErrorCodes, MergeError

NAME_SET_PAIRS = [
    (["Name", "Age", "City"], ["name", "Age", "Country"]),
    (["姓名", "编号", "日期"], ["姓名", "日期", "金额"]),
    (["Adress", "Phone", "E-mail"], ["Address", "Email", "phone"]),
    (["nam", "names"], ["name"]),
    (["Name", "NAME", "name"], ["name", "Name"]),
    ([], ["a"]),
    (["a"], []),
    ([], []),
]


# =============================================================================
# 인자 검증
# =============================================================================

class TestArguments:
    """입력 검증 테스트."""

    def test_none_source_raises(self):
        with pytest.raises(MergeError) as exc_info:
            match_variables(None, ["a"])

        assert exc_info.value.code == ErrorCodes.INVALID_ARGUMENT
        assert exc_info.value.context["argument"] == "source"

    def test_none_target_raises(self):
        with pytest.raises(MergeError) as exc_info:
            match_variables(["a"], None)

        assert exc_info.value.code == ErrorCodes.INVALID_ARGUMENT
        assert exc_info.value.context["argument"] == "target"

    def test_match_exact_none_raises(self):
        with pytest.raises(MergeError):
            match_exact(None, None)

    def test_empty_sets_fully_matched(self):
        result = match_variables([], [])

        assert result.matched == ()
        assert result.is_fully_matched is True

    def test_accepts_tuples(self):
        result = match_variables(("a", "b"), ("B", "A"))

        assert result.matched == ("a", "b")


# =============================================================================
# 정확 매칭
# =============================================================================

class TestExactPass:
    """정확 매칭 단계 테스트."""

    def test_scenario_name_age_city(self):
        """Name/Age/City ↔ name/Age/Country."""
        result = match_variables(["Name", "Age", "City"], ["name", "Age", "Country"])

        assert result.matched == ("Name", "Age")
        assert result.unmatched_source == ("City",)
        assert result.unmatched_target == ("Country",)
        assert result.is_fully_matched is False

    def test_scenario_with_exact_only(self):
        result = match_exact(["Name", "Age", "City"], ["name", "Age", "Country"])

        assert result.matched == ("Name", "Age")
        assert result.unmatched_source == ("City",)
        assert result.unmatched_target == ("Country",)

    def test_matched_reports_source_side_name(self):
        result = match_exact(["EMAIL"], ["email"])

        assert result.matched == ("EMAIL",)
        assert result.pairs[0].target == "email"
        assert result.pairs[0].method == "exact"
        assert result.pairs[0].similarity == 1.0

    def test_target_consumed_once(self):
        """대소문자만 다른 소스 두 개 → 타깃 하나는 한 번만 소비."""
        result = match_exact(["Name", "NAME"], ["name"])

        assert result.matched == ("Name",)
        assert result.unmatched_source == ("NAME",)
        assert result.unmatched_target == ()

    def test_second_source_takes_next_equal_target(self):
        result = match_exact(["Name", "NAME"], ["name", "Name"])

        assert result.mapping() == {"Name": "name", "NAME": "Name"}
        assert result.is_fully_matched is True

    def test_fully_matched(self):
        result = match_exact(["a", "B"], ["b", "A"])

        assert result.is_fully_matched is True
        assert result.mapping() == {"a": "A", "B": "b"}

    def test_unicode_names(self):
        result = match_exact(["姓名", "编号"], ["编号", "姓名", "日期"])

        assert result.matched == ("姓名", "编号")
        assert result.unmatched_target == ("日期",)

    @pytest.mark.parametrize("source,target", NAME_SET_PAIRS)
    def test_exact_pairs_are_case_insensitive_equal(self, source, target):
        """정확 매칭은 대소문자 무시 동등한 이름만 짝지음."""
        result = match_exact(source, target)

        for pair in result.pairs:
            assert pair.source.lower() == pair.target.lower()


# =============================================================================
# 퍼지 매칭
# =============================================================================

class TestFuzzyPass:
    """퍼지 매칭 단계 테스트."""

    def test_typo_matched(self):
        """Adress ~ Address (0.857)."""
        result = match_variables(["Adress"], ["Address"])

        assert result.matched == ("Adress",)
        assert result.pairs[0].method == "fuzzy"
        assert result.pairs[0].similarity == pytest.approx(1 - 1 / 7)
        assert result.is_fully_matched is True

    def test_disabled(self):
        result = match_variables(["Adress"], ["Address"], fuzzy_enabled=False)

        assert result.matched == ()
        assert result.unmatched_source == ("Adress",)
        assert result.unmatched_target == ("Address",)

    def test_below_threshold_not_matched(self):
        """City vs Country < 0.6."""
        assert similarity("City", "Country") < 0.6

        result = match_variables(["City"], ["Country"])

        assert result.matched == ()
        assert result.unmatched_source == ("City",)

    def test_exactly_threshold_matches(self):
        """abcde vs abxyz는 0.4, abcde vs abcxy는 0.6 → 경계값 포함."""
        assert similarity("abcde", "abcxy") == pytest.approx(0.6)

        result = match_variables(["abcde"], ["abcxy"])

        assert result.matched == ("abcde",)

    def test_exact_before_fuzzy(self):
        """정확 매칭된 소스는 퍼지 단계에서 다시 보지 않음."""
        result = match_variables(["name", "nam"], ["Name", "names"])

        assert result.mapping() == {"name": "Name", "nam": "names"}
        assert [p.method for p in result.pairs] == ["exact", "fuzzy"]

    def test_matched_order_exact_then_fuzzy(self):
        result = match_variables(["Adress", "Phone"], ["Address", "phone"])

        assert result.matched == ("Phone", "Adress")

    def test_best_score_wins(self):
        result = match_variables(["address"], ["adres", "adress"])

        assert result.mapping() == {"address": "adress"}

    def test_tie_keeps_first_target(self):
        """동점이면 타깃 순서상 먼저 나온 것."""
        assert similarity("abcd", "abcx") == similarity("abcd", "abcy")

        result = match_variables(["abcd"], ["abcx", "abcy"])

        assert result.mapping() == {"abcd": "abcx"}
        assert result.unmatched_target == ("abcy",)

    def test_greedy_source_order(self):
        """먼저 처리된 소스가 타깃을 가져감 (더 높은 점수의 뒷 소스가 있어도)."""
        assert similarity("names", "name") > similarity("nam", "name")

        result = match_variables(["nam", "names"], ["name"])

        assert result.mapping() == {"nam": "name"}
        assert result.unmatched_source == ("names",)

    def test_greedy_order_dependent(self):
        """소스 순서가 바뀌면 결과도 바뀜."""
        result = match_variables(["names", "nam"], ["name"])

        assert result.mapping() == {"names": "name"}
        assert result.unmatched_source == ("nam",)

    def test_custom_threshold(self):
        result = match_variables(["City"], ["Country"], threshold=0.4)

        assert result.matched == ("City",)

    @pytest.mark.parametrize("source,target", NAME_SET_PAIRS)
    def test_fuzzy_never_below_threshold(self, source, target):
        result = match_variables(source, target)

        for pair in result.pairs:
            assert similarity(pair.source, pair.target) >= 0.6


# =============================================================================
# 불변 조건
# =============================================================================

class TestInvariants:
    """MatchResult 불변 조건 테스트."""

    @pytest.mark.parametrize("source,target", NAME_SET_PAIRS)
    @pytest.mark.parametrize("fuzzy", [True, False])
    def test_each_source_in_exactly_one_list(self, source, target, fuzzy):
        result = match_variables(source, target, fuzzy_enabled=fuzzy)

        assert sorted(result.matched + result.unmatched_source) == sorted(source)

    @pytest.mark.parametrize("source,target", NAME_SET_PAIRS)
    @pytest.mark.parametrize("fuzzy", [True, False])
    def test_each_target_consumed_at_most_once(self, source, target, fuzzy):
        result = match_variables(source, target, fuzzy_enabled=fuzzy)
        consumed = [p.target for p in result.pairs]

        assert sorted(consumed + list(result.unmatched_target)) == sorted(target)

    @pytest.mark.parametrize("source,target", NAME_SET_PAIRS)
    def test_match_exact_equals_fuzzy_disabled(self, source, target):
        assert match_exact(source, target) == match_variables(
            source, target, fuzzy_enabled=False
        )

    def test_fully_matched_flag(self):
        result = match_variables(["a"], ["a", "b"])

        assert result.unmatched_source == ()
        assert result.unmatched_target == ("b",)
        assert result.is_fully_matched is False

    def test_deterministic(self):
        source = ["Adress", "Phone", "E-mail"]
        target = ["Address", "Email", "phone"]

        assert match_variables(source, target) == match_variables(source, target)

    def test_result_is_immutable(self):
        result = match_variables(["a"], ["a"])

        with pytest.raises(AttributeError):
            result.matched = ()  # type: ignore[misc]

    def test_to_dict(self):
        data = match_variables(["Name", "City"], ["name"]).to_dict()

        assert data["matched"] == ["Name"]
        assert data["unmatched_source"] == ["City"]
        assert data["unmatched_target"] == []
        assert data["is_fully_matched"] is False
        assert data["pairs"][0] == {
            "source": "Name",
            "target": "name",
            "similarity": 1.0,
            "method": "exact",
        }


# =============================================================================
# remap_record
# =============================================================================

class TestRemapRecord:
    """레코드 키 변환 테스트."""

    def test_matched_keys_copied_to_target_names(self):
        result = match_variables(["Name", "Adress"], ["name", "Address"])
        record = {"Name": "Kim", "Adress": "Seoul"}

        remapped = remap_record(record, result)

        assert remapped["name"] == "Kim"
        assert remapped["Address"] == "Seoul"

    def test_unmatched_columns_kept(self):
        result = match_variables(["Name", "City"], ["name"])

        remapped = remap_record({"Name": "Kim", "City": "Seoul"}, result)

        assert remapped["City"] == "Seoul"
        assert remapped["Name"] == "Kim"

    def test_original_not_mutated(self):
        result = match_variables(["Name"], ["name"])
        record = {"Name": "Kim"}

        remap_record(record, result)

        assert record == {"Name": "Kim"}

    def test_existing_target_column_not_overwritten(self):
        """NAME → name 매칭이어도 실제 name 열 값은 그대로."""
        result = match_variables(["NAME", "name"], ["name"])
        assert result.mapping() == {"NAME": "name"}

        remapped = remap_record({"NAME": "upper", "name": "lower"}, result)

        assert remapped == {"NAME": "upper", "name": "lower"}

    def test_missing_source_key_skipped(self):
        result = match_variables(["Name"], ["name"])

        assert remap_record({"Age": 3}, result) == {"Age": 3}
