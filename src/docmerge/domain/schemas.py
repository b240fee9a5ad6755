"""
Data schemas for the merge engine.

규칙:
- MatchResult: 읽기 전용 결과, 재계산 시 통째로 교체 (in-place 수정 금지)
- Record: 스프레드시트 한 행 (열 이름 → 값), 엔진은 수정하지 않음
- 레코드 단위 성공/실패는 RecordOutcome으로 명시적으로 표현
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

# 스프레드시트 한 행. 값은 str / int / float / "" 등 스칼라.
Record = Mapping[str, Any]

# 열 제목 또는 템플릿 변수 이름 목록 (순서 유지, 비교는 대소문자 무시)
VariableSet = Sequence[str]


# =============================================================================
# Matching Schemas
# =============================================================================

@dataclass(frozen=True)
class VariablePair:
    """소스 이름(열 제목) ↔ 타깃 이름(템플릿 변수) 한 쌍."""
    source: str
    target: str
    similarity: float
    method: str  # exact, fuzzy

    def to_dict(self) -> dict[str, Any]:
        return {
            "source": self.source,
            "target": self.target,
            "similarity": round(self.similarity, 4),
            "method": self.method,
        }


@dataclass(frozen=True)
class MatchResult:
    """
    변수 매칭 결과.

    불변 조건:
    - 모든 소스 이름은 matched 또는 unmatched_source 중 정확히 한 곳에 존재
    - 타깃 이름은 최대 한 번만 소비됨
    """
    matched: tuple[str, ...] = ()  # 소스 측 이름
    unmatched_source: tuple[str, ...] = ()
    unmatched_target: tuple[str, ...] = ()
    pairs: tuple[VariablePair, ...] = ()

    @property
    def is_fully_matched(self) -> bool:
        """양쪽 모두 미매칭 항목이 없는지."""
        return not self.unmatched_source and not self.unmatched_target

    def mapping(self) -> dict[str, str]:
        """소스 이름 → 타깃 이름."""
        return {p.source: p.target for p in self.pairs}

    def to_dict(self) -> dict[str, Any]:
        return {
            "matched": list(self.matched),
            "unmatched_source": list(self.unmatched_source),
            "unmatched_target": list(self.unmatched_target),
            "pairs": [p.to_dict() for p in self.pairs],
            "is_fully_matched": self.is_fully_matched,
        }


# =============================================================================
# Spreadsheet Schemas
# =============================================================================

@dataclass
class SheetData:
    """스프레드시트 읽기 결과 (헤더 + 행)."""
    headers: list[str] = field(default_factory=list)
    rows: list[dict[str, Any]] = field(default_factory=list)
    path: Path | None = None

    @property
    def row_count(self) -> int:
        return len(self.rows)


# =============================================================================
# Batch Schemas
# =============================================================================

@dataclass(frozen=True)
class RecordOutcome:
    """
    레코드 하나의 렌더링 결과 (tagged success/failure).

    batch 루프는 예외를 삼키지 않고 이 값으로 변환해 집계한다.
    """
    index: int  # 1-based
    file_name: str
    ok: bool
    output_path: Path | None = None
    error_code: str | None = None
    error_message: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "index": self.index,
            "file_name": self.file_name,
            "ok": self.ok,
            "output_path": str(self.output_path) if self.output_path else None,
            "error_code": self.error_code,
            "error_message": self.error_message,
        }


@dataclass
class BatchResult:
    """
    batch 생성 결과.

    progress는 시도한 레코드 수 기준, success_count는 성공 수 기준.
    생성된 문서 수(int)는 success_count 또는 int(result).
    """
    total: int
    outcomes: list[RecordOutcome] = field(default_factory=list)
    cancelled: bool = False

    @property
    def success_count(self) -> int:
        return sum(1 for o in self.outcomes if o.ok)

    @property
    def attempted(self) -> int:
        return len(self.outcomes)

    @property
    def failures(self) -> list[RecordOutcome]:
        return [o for o in self.outcomes if not o.ok]

    @property
    def message(self) -> str:
        return f"{self.success_count} of {self.total} documents generated"

    def __int__(self) -> int:
        return self.success_count

    def to_dict(self) -> dict[str, Any]:
        return {
            "success_count": self.success_count,
            "total": self.total,
            "attempted": self.attempted,
            "cancelled": self.cancelled,
            "message": self.message,
            "failures": [f.to_dict() for f in self.failures],
        }


# =============================================================================
# Logging Schemas
# =============================================================================

@dataclass
class FailureLog:
    """
    레코드 실패 로그.

    필수 컨텍스트: index, file_name, code, message
    """
    level: str = "warning"
    index: int = 0
    file_name: str = ""
    code: str = ""
    message: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "level": self.level,
            "index": self.index,
            "file_name": self.file_name,
            "code": self.code,
            "message": self.message,
        }


@dataclass
class RunLog:
    """
    실행 로그.

    batch 실행 단위 결과 및 메타데이터.
    """
    run_id: str
    started_at: str  # ISO 8601
    template_path: str = ""
    source_path: str | None = None
    output_dir: str | None = None
    finished_at: str | None = None
    result: str = "pending"  # pending, success, partial, failed, cancelled

    total: int = 0
    success_count: int = 0

    failures: list[FailureLog] = field(default_factory=list)
    match: dict[str, Any] | None = None

    # Error (if failed)
    error_code: str | None = None
    error_context: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "run_id": self.run_id,
            "started_at": self.started_at,
            "finished_at": self.finished_at,
            "template_path": self.template_path,
            "source_path": self.source_path,
            "output_dir": self.output_dir,
            "result": self.result,
            "total": self.total,
            "success_count": self.success_count,
            "failures": [f.to_dict() for f in self.failures],
            "match": self.match,
            "error_code": self.error_code,
            "error_context": self.error_context,
        }
