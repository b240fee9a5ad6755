"""
Batch 문서 생성: 레코드별 렌더링 + 부분 실패 허용 + 진행률 보고.

규칙:
- 사전 조건(템플릿 존재, records 존재, 출력 폴더)은 렌더링 전에 한 번만 검사
- 레코드는 입력 순서대로 하나씩 처리 (batch 내부 병렬 처리 없음)
- 렌더러 호출 실패는 해당 레코드만 실패로 기록하고 계속 진행
- on_progress(i + 1)는 성공/실패와 무관하게 시도한 레코드마다 1회
- 취소는 레코드 사이에서만 반영되고, 그때까지의 성공 수를 보존
- 레코드 경계 밖의 예외는 그대로 전파되어 batch 전체를 중단
"""

import asyncio
import logging
from collections.abc import Callable, Mapping, Sequence
from pathlib import Path
from typing import Any

from docmerge.core.naming import output_filename
from docmerge.core.storage import ensure_output_dir
from docmerge.domain.constants import OUTPUT_DOCX_EXTENSION
from docmerge.domain.errors import ErrorCodes, MergeError
from docmerge.domain.schemas import BatchResult, RecordOutcome

logger = logging.getLogger(__name__)

# (template_path, record, output_path) → 반환값은 사용하지 않음
Renderer = Callable[[Path, Mapping[str, Any], Path], Any]
ProgressCallback = Callable[[int], None]
CancelCheck = Callable[[], bool]


def _default_renderer() -> Renderer:
    from docmerge.render.word import render_docx

    return render_docx


def _check_preconditions(
    template_path: str | Path | None,
    records: Sequence[Mapping[str, Any]] | None,
    output_dir: str | Path | None,
) -> tuple[Path, Path]:
    """
    사전 조건 검사 (fail-fast).

    Raises:
        MergeError: INVALID_ARGUMENT, TEMPLATE_NOT_FOUND, OUTPUT_DIR_UNUSABLE
    """
    if template_path is None or not str(template_path).strip():
        raise MergeError(
            ErrorCodes.INVALID_ARGUMENT,
            argument="template_path",
            reason="empty",
        )

    template = Path(template_path)
    if not template.is_file():
        raise MergeError(ErrorCodes.TEMPLATE_NOT_FOUND, path=str(template))

    if records is None:
        raise MergeError(
            ErrorCodes.INVALID_ARGUMENT,
            argument="records",
            reason="is None",
        )

    return template, ensure_output_dir(output_dir)


def _render_one(
    renderer: Renderer,
    template: Path,
    record: Mapping[str, Any],
    output_path: Path,
    index: int,
) -> RecordOutcome:
    """렌더러 호출 한 번을 RecordOutcome으로 변환."""
    try:
        renderer(template, record, output_path)
    except MergeError as e:
        return RecordOutcome(
            index=index,
            file_name=output_path.name,
            ok=False,
            error_code=e.code,
            error_message=str(e),
        )
    except Exception as e:
        return RecordOutcome(
            index=index,
            file_name=output_path.name,
            ok=False,
            error_code=ErrorCodes.RENDER_FAILED,
            error_message=str(e),
        )

    return RecordOutcome(
        index=index,
        file_name=output_path.name,
        ok=True,
        output_path=output_path,
    )


def _log_outcome(outcome: RecordOutcome) -> None:
    if not outcome.ok:
        logger.warning(
            f"Document {outcome.file_name} (record {outcome.index}) failed: "
            f"{outcome.error_message}"
        )


def _log_finished(result: BatchResult, output_dir: Path) -> None:
    if result.cancelled:
        logger.info(
            f"Batch cancelled after {result.attempted} records: {result.message}"
        )
    else:
        logger.info(f"Batch finished in {output_dir}: {result.message}")


def generate_batch(
    template_path: str | Path,
    records: Sequence[Mapping[str, Any]] | None,
    output_dir: str | Path,
    on_progress: ProgressCallback | None = None,
    renderer: Renderer | None = None,
    *,
    should_cancel: CancelCheck | None = None,
    extension: str = OUTPUT_DOCX_EXTENSION,
) -> BatchResult:
    """
    레코드마다 문서 하나씩 생성.

    Args:
        template_path: 템플릿 파일 경로
        records: 레코드 목록 (빈 목록 허용 → 0건)
        output_dir: 출력 폴더 (없으면 생성)
        on_progress: 레코드 시도마다 호출 (1..N)
        renderer: 단일 문서 렌더러 (기본: render_docx)
        should_cancel: 레코드 사이마다 확인하는 취소 플래그
        extension: 출력 파일 확장자

    Returns:
        BatchResult. 생성된 문서 수는 result.success_count (또는 int(result)).
        int가 아니므로 result == 3 같은 비교는 항상 False; 숫자 비교는
        success_count로 한다.

    Raises:
        MergeError: 사전 조건 위반 (INVALID_ARGUMENT, TEMPLATE_NOT_FOUND,
            OUTPUT_DIR_UNUSABLE)
    """
    template, out_dir = _check_preconditions(template_path, records, output_dir)
    render = renderer or _default_renderer()

    result = BatchResult(total=len(records))
    logger.info(f"Batch started: {result.total} records, template={template.name}")

    for i, record in enumerate(records):
        if should_cancel is not None and should_cancel():
            result.cancelled = True
            break

        output_path = out_dir / output_filename(record, i + 1, extension)
        outcome = _render_one(render, template, record, output_path, i + 1)
        result.outcomes.append(outcome)
        _log_outcome(outcome)

        if on_progress is not None:
            on_progress(i + 1)

    _log_finished(result, out_dir)
    return result


async def agenerate_batch(
    template_path: str | Path,
    records: Sequence[Mapping[str, Any]] | None,
    output_dir: str | Path,
    on_progress: ProgressCallback | None = None,
    renderer: Renderer | None = None,
    *,
    should_cancel: CancelCheck | None = None,
    extension: str = OUTPUT_DOCX_EXTENSION,
) -> BatchResult:
    """
    generate_batch의 비동기 버전.

    렌더러 호출만 worker thread로 넘기고(asyncio.to_thread) 그 외에는
    동기 버전과 같다. 레코드는 여전히 하나씩 순서대로 처리되고,
    on_progress는 이벤트 루프 쪽에서 순서대로 호출된다.
    """
    template, out_dir = _check_preconditions(template_path, records, output_dir)
    render = renderer or _default_renderer()

    result = BatchResult(total=len(records))
    logger.info(f"Batch started: {result.total} records, template={template.name}")

    for i, record in enumerate(records):
        if should_cancel is not None and should_cancel():
            result.cancelled = True
            break

        output_path = out_dir / output_filename(record, i + 1, extension)
        outcome = await asyncio.to_thread(
            _render_one, render, template, record, output_path, i + 1
        )
        result.outcomes.append(outcome)
        _log_outcome(outcome)

        if on_progress is not None:
            on_progress(i + 1)

    _log_finished(result, out_dir)
    return result
