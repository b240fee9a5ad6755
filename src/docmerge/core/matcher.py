"""
변수 매칭: 스프레드시트 열 제목 ↔ 템플릿 placeholder.

2단계 (순서 고정):
1. 정확 매칭: 대소문자 무시 동등 비교, 타깃 순서상 첫 번째 미소비 타깃과 짝
2. 퍼지 매칭 (옵션): 남은 소스를 원래 순서대로, 남은 타깃 중
   유사도가 가장 높고 threshold 이상인 것과 짝 (동점이면 타깃 순서상 먼저)

퍼지 매칭은 greedy + 순서 의존적이다. 전역 최적 할당(이분 매칭)이 아님.
소비된 타깃은 이후 소스에서 사용할 수 없다.
"""

from collections.abc import Mapping
from typing import Any

from docmerge.core.similarity import similarity
from docmerge.domain.constants import (
    DEFAULT_SIMILARITY_THRESHOLD,
    MATCH_METHOD_EXACT,
    MATCH_METHOD_FUZZY,
)
from docmerge.domain.errors import ErrorCodes, MergeError
from docmerge.domain.schemas import MatchResult, VariablePair, VariableSet


def _require_names(names: VariableSet | None, argument: str) -> list[str]:
    if names is None:
        raise MergeError(ErrorCodes.INVALID_ARGUMENT, argument=argument, reason="is None")
    return list(names)


def _exact_pass(
    source: list[str],
    target: list[str],
    used_source: set[int],
    used_target: set[int],
) -> list[VariablePair]:
    pairs = []
    for i, name in enumerate(source):
        key = name.lower()
        for j, candidate in enumerate(target):
            if j in used_target:
                continue
            if candidate.lower() == key:
                pairs.append(VariablePair(name, candidate, 1.0, MATCH_METHOD_EXACT))
                used_source.add(i)
                used_target.add(j)
                break
    return pairs


def _fuzzy_pass(
    source: list[str],
    target: list[str],
    used_source: set[int],
    used_target: set[int],
    threshold: float,
) -> list[VariablePair]:
    pairs = []
    for i, name in enumerate(source):
        if i in used_source or not name:
            continue

        best_index = None
        best_score = 0.0
        for j, candidate in enumerate(target):
            if j in used_target or not candidate:
                continue
            score = similarity(name, candidate)
            # 엄격히 큰 경우만 교체 → 동점은 타깃 순서상 먼저 나온 것 유지
            if score > best_score and score >= threshold:
                best_index = j
                best_score = score

        if best_index is not None:
            pairs.append(
                VariablePair(name, target[best_index], best_score, MATCH_METHOD_FUZZY)
            )
            used_source.add(i)
            used_target.add(best_index)
    return pairs


def match_variables(
    source: VariableSet | None,
    target: VariableSet | None,
    fuzzy_enabled: bool = True,
    threshold: float = DEFAULT_SIMILARITY_THRESHOLD,
) -> MatchResult:
    """
    소스 이름 집합과 타깃 이름 집합을 매칭.

    Args:
        source: 소스 이름 (스프레드시트 열 제목), 원래 순서 유지
        target: 타깃 이름 (템플릿 변수)
        fuzzy_enabled: 퍼지 매칭 단계 실행 여부
        threshold: 퍼지 매칭 최소 유사도

    Returns:
        MatchResult

    Raises:
        MergeError: INVALID_ARGUMENT (source 또는 target이 None)
    """
    source_names = _require_names(source, "source")
    target_names = _require_names(target, "target")

    used_source: set[int] = set()
    used_target: set[int] = set()

    pairs = _exact_pass(source_names, target_names, used_source, used_target)

    if (
        fuzzy_enabled
        and len(used_source) < len(source_names)
        and len(used_target) < len(target_names)
    ):
        pairs += _fuzzy_pass(
            source_names, target_names, used_source, used_target, threshold
        )

    return MatchResult(
        matched=tuple(p.source for p in pairs),
        unmatched_source=tuple(
            n for i, n in enumerate(source_names) if i not in used_source
        ),
        unmatched_target=tuple(
            n for j, n in enumerate(target_names) if j not in used_target
        ),
        pairs=tuple(pairs),
    )


def match_exact(
    source: VariableSet | None,
    target: VariableSet | None,
) -> MatchResult:
    """정확 매칭만 수행. match_variables(..., fuzzy_enabled=False)와 동일."""
    return match_variables(source, target, fuzzy_enabled=False)


def remap_record(record: Mapping[str, Any], result: MatchResult) -> dict[str, Any]:
    """
    레코드 키를 템플릿 변수 이름으로 변환.

    매칭된 열은 타깃 이름으로 복사하고, 매칭되지 않은 열은 그대로 둔다.
    타깃 이름과 정확히 같은 열이 이미 있으면 그 값을 우선한다
    (예: NAME → name 매칭이어도 실제 name 열은 덮어쓰지 않음).
    원본 레코드는 수정하지 않는다.

    Args:
        record: 스프레드시트 한 행
        result: match_variables 결과

    Returns:
        새 dict (렌더러 컨텍스트용)
    """
    remapped = dict(record)
    for pair in result.pairs:
        if pair.target in record or pair.source not in record:
            continue
        remapped[pair.target] = record[pair.source]
    return remapped
