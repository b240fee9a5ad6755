"""
Run logging: batch 실행 로그 스키마, 실패 이벤트 기록.

규칙:
- 실패 로그 필수 컨텍스트: index, file_name, code, message
- 성공/부분 성공/실패/취소 모두 로그를 남긴다
"""

import json
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from docmerge.core.ids import generate_run_id
from docmerge.core.storage import atomic_write_json
from docmerge.domain.schemas import (
    BatchResult,
    FailureLog,
    MatchResult,
    RecordOutcome,
    RunLog,
)

# =============================================================================
# Run Log Management
# =============================================================================


def create_run_log(
    template_path: str | Path,
    source_path: str | Path | None = None,
    output_dir: str | Path | None = None,
    match: MatchResult | None = None,
) -> RunLog:
    """
    새 RunLog 생성.

    Args:
        template_path: 템플릿 경로
        source_path: 스프레드시트 경로
        output_dir: 출력 폴더
        match: 실행 시점의 변수 매칭 결과

    Returns:
        초기화된 RunLog
    """
    return RunLog(
        run_id=generate_run_id(),
        started_at=datetime.now(UTC).isoformat(),
        template_path=str(template_path),
        source_path=str(source_path) if source_path is not None else None,
        output_dir=str(output_dir) if output_dir is not None else None,
        match=match.to_dict() if match is not None else None,
    )


def record_failure(run_log: RunLog, outcome: RecordOutcome) -> None:
    """
    레코드 실패 이벤트 기록.

    Args:
        run_log: RunLog 인스턴스
        outcome: 실패한 RecordOutcome
    """
    run_log.failures.append(
        FailureLog(
            index=outcome.index,
            file_name=outcome.file_name,
            code=outcome.error_code or "",
            message=outcome.error_message or "",
        )
    )


def complete_run_log(
    run_log: RunLog,
    result: BatchResult | None = None,
    error_code: str | None = None,
    error_context: dict[str, Any] | None = None,
) -> None:
    """
    RunLog 완료 처리.

    result가 없으면 batch가 시작 전에 실패한 것으로 본다.

    Args:
        run_log: RunLog 인스턴스
        result: batch 결과
        error_code: 에러 코드 (실패 시)
        error_context: 에러 컨텍스트 (실패 시)
    """
    run_log.finished_at = datetime.now(UTC).isoformat()

    if result is None:
        run_log.result = "failed"
        run_log.error_code = error_code
        run_log.error_context = error_context
        return

    run_log.total = result.total
    run_log.success_count = result.success_count
    for outcome in result.failures:
        record_failure(run_log, outcome)

    if result.cancelled:
        run_log.result = "cancelled"
    elif result.success_count == result.total:
        run_log.result = "success"
    elif result.success_count > 0:
        run_log.result = "partial"
    else:
        run_log.result = "failed"


def save_run_log(run_log: RunLog, logs_dir: Path) -> Path:
    """
    RunLog를 파일로 저장.

    Args:
        run_log: RunLog 인스턴스
        logs_dir: 로그 디렉터리 경로

    Returns:
        저장된 파일 경로
    """
    logs_dir.mkdir(parents=True, exist_ok=True)
    log_path = logs_dir / f"run_{run_log.run_id}.json"
    atomic_write_json(log_path, run_log.to_dict())
    return log_path


def load_run_log(log_path: Path) -> dict[str, Any]:
    """RunLog 파일 로드."""
    data: dict[str, Any] = json.loads(log_path.read_text(encoding="utf-8"))
    return data


def list_run_logs(logs_dir: Path) -> list[Path]:
    """
    로그 디렉터리의 모든 run log 파일 목록.

    Args:
        logs_dir: 로그 디렉터리 경로

    Returns:
        로그 파일 경로 목록 (최신순)
    """
    if not logs_dir.exists():
        return []

    logs = list(logs_dir.glob("run_*.json"))
    logs.sort(key=lambda p: p.stat().st_mtime, reverse=True)
    return logs
