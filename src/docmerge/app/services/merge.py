"""
Merge 세션: 스프레드시트 + 템플릿 로드 상태와 매칭 결과 관리.

규칙:
- 열 제목/템플릿 변수는 로드할 때마다 새로 계산
- 어느 한쪽이 바뀌면 MatchResult는 통째로 다시 계산 (in-place 수정 금지)
- 생성 시 레코드는 매칭 결과로 키를 템플릿 변수 이름으로 변환
- Run Log: 성공/부분 성공/실패 모두 저장 (출력 폴더가 있을 때)
"""

import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any

from docmerge.config import MergeConfig
from docmerge.core.batch import agenerate_batch, generate_batch
from docmerge.core.logging import complete_run_log, create_run_log, save_run_log
from docmerge.core.matcher import match_variables, remap_record
from docmerge.domain.errors import ErrorCodes, MergeError
from docmerge.domain.schemas import BatchResult, MatchResult, RunLog, SheetData
from docmerge.sources.spreadsheet import read_spreadsheet
from docmerge.templates.placeholders import extract_template_variables, find_unrenderable

logger = logging.getLogger(__name__)


class MergeSession:
    """
    스프레드시트 한 개 + 템플릿 한 개에 대한 병합 작업 상태.

    Usage:
        session = MergeSession(config)
        session.load_spreadsheet("people.xlsx")
        session.load_template("letter.docx")
        session.match_result.is_fully_matched
        result, run_log = session.generate("out/")
    """

    def __init__(self, config: MergeConfig | None = None):
        self.config = config or MergeConfig()
        self.sheet: SheetData | None = None
        self.template_path: Path | None = None
        self.template_variables: list[str] = []
        self.match_result: MatchResult | None = None

    # =========================================================================
    # Loading
    # =========================================================================

    def load_spreadsheet(self, path: str | Path) -> SheetData:
        """스프레드시트 로드 후 매칭 재계산."""
        self.sheet = read_spreadsheet(path)
        logger.info(
            f"Loaded spreadsheet {self.sheet.path}: "
            f"{len(self.sheet.headers)} columns, {self.sheet.row_count} rows"
        )
        self._recompute()
        return self.sheet

    def load_template(self, path: str | Path) -> list[str]:
        """템플릿 로드 후 매칭 재계산."""
        variables = extract_template_variables(path)
        self.template_path = Path(path)
        self.template_variables = variables
        logger.info(f"Loaded template {self.template_path}: {len(variables)} variables")
        unrenderable = find_unrenderable(variables)
        if unrenderable:
            logger.warning(
                f"Template {self.template_path.name} has placeholders that cannot be "
                f"rendered: {unrenderable}"
            )
        self._recompute()
        return variables

    def set_fuzzy(self, enabled: bool) -> MatchResult | None:
        """퍼지 매칭 on/off 후 매칭 재계산."""
        self.config.fuzzy_enabled = enabled
        self._recompute()
        return self.match_result

    def _recompute(self) -> None:
        if self.sheet is None or self.template_path is None:
            self.match_result = None
            return

        self.match_result = match_variables(
            self.sheet.headers,
            self.template_variables,
            fuzzy_enabled=self.config.fuzzy_enabled,
            threshold=self.config.similarity_threshold,
        )

    # =========================================================================
    # Reporting
    # =========================================================================

    @property
    def is_ready(self) -> bool:
        return self.sheet is not None and self.template_path is not None

    def summary(self) -> dict[str, Any]:
        """UI/API 표시용 요약."""
        return {
            "spreadsheet_path": str(self.sheet.path) if self.sheet else None,
            "template_path": str(self.template_path) if self.template_path else None,
            "headers": list(self.sheet.headers) if self.sheet else [],
            "placeholders": list(self.template_variables),
            "unrenderable_placeholders": find_unrenderable(self.template_variables),
            "row_count": self.sheet.row_count if self.sheet else 0,
            "fuzzy_enabled": self.config.fuzzy_enabled,
            "match": self.match_result.to_dict() if self.match_result else None,
        }

    def records(self) -> list[dict[str, Any]]:
        """템플릿 변수 이름으로 키를 변환한 레코드 목록."""
        if self.sheet is None or self.match_result is None:
            return []
        return [remap_record(row, self.match_result) for row in self.sheet.rows]

    # =========================================================================
    # Generation
    # =========================================================================

    def _require_ready(self) -> Path:
        if self.sheet is None:
            raise MergeError(
                ErrorCodes.INVALID_ARGUMENT,
                argument="spreadsheet",
                reason="not loaded",
            )
        if self.template_path is None:
            raise MergeError(
                ErrorCodes.INVALID_ARGUMENT,
                argument="template",
                reason="not loaded",
            )
        return self.template_path

    def _start_run_log(self, output_dir: str | Path) -> RunLog:
        return create_run_log(
            self.template_path or "",
            source_path=self.sheet.path if self.sheet else None,
            output_dir=output_dir,
            match=self.match_result,
        )

    def _finish_run_log(
        self,
        run_log: RunLog,
        output_dir: str | Path,
        result: BatchResult | None = None,
        error: MergeError | None = None,
    ) -> None:
        if error is not None:
            complete_run_log(run_log, error_code=error.code, error_context=error.to_dict())
        else:
            complete_run_log(run_log, result)

        logs_dir = Path(output_dir) / self.config.logs_dir
        if not self.config.save_run_log or not Path(output_dir).is_dir():
            return
        path = save_run_log(run_log, logs_dir)
        logger.info(f"Run log saved: {path}")

    def generate(
        self,
        output_dir: str | Path,
        on_progress: Callable[[int], None] | None = None,
        should_cancel: Callable[[], bool] | None = None,
    ) -> tuple[BatchResult, RunLog]:
        """
        로드된 레코드 전체로 문서 생성.

        Args:
            output_dir: 출력 폴더
            on_progress: 레코드 시도마다 호출 (1..N)
            should_cancel: 레코드 사이마다 확인하는 취소 플래그

        Returns:
            (BatchResult, RunLog)

        Raises:
            MergeError: 로드 안 됨(INVALID_ARGUMENT) 또는 batch 사전 조건 위반
        """
        template_path = self._require_ready()
        run_log = self._start_run_log(output_dir)

        try:
            result = generate_batch(
                template_path,
                self.records(),
                output_dir,
                on_progress,
                should_cancel=should_cancel,
                extension=self.config.extension,
            )
        except MergeError as e:
            self._finish_run_log(run_log, output_dir, error=e)
            raise

        self._finish_run_log(run_log, output_dir, result=result)
        return result, run_log

    async def agenerate(
        self,
        output_dir: str | Path,
        on_progress: Callable[[int], None] | None = None,
        should_cancel: Callable[[], bool] | None = None,
    ) -> tuple[BatchResult, RunLog]:
        """generate()의 비동기 버전 (렌더러 호출을 worker thread로)."""
        template_path = self._require_ready()
        run_log = self._start_run_log(output_dir)

        try:
            result = await agenerate_batch(
                template_path,
                self.records(),
                output_dir,
                on_progress,
                should_cancel=should_cancel,
                extension=self.config.extension,
            )
        except MergeError as e:
            self._finish_run_log(run_log, output_dir, error=e)
            raise

        self._finish_run_log(run_log, output_dir, result=result)
        return result, run_log
