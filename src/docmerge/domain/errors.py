"""
Error definitions for the merge engine.

규칙:
- 조용한 실패 금지 → MergeError로 명시적 실패
- 사전 조건(인자/파일/출력 폴더) 위반 → 작업 시작 전에 즉시 실패
- 레코드 단위 렌더링 실패 → 예외가 아니라 RecordOutcome으로 기록
"""

from typing import Any


class MergeError(Exception):
    """
    병합 파이프라인 정책 위반 시 발생하는 에러.

    즉시 중단이 필요한 경우에만 사용:
    - 필수 인자 누락 (None, 빈 경로)
    - 템플릿/스프레드시트 파일 없음
    - 헤더 행 없음 등 구조적으로 읽을 수 없는 데이터
    - 출력 폴더 생성 실패

    Usage:
        raise MergeError("TEMPLATE_NOT_FOUND", path="letter.docx")
    """

    def __init__(self, code: str, **context: Any) -> None:
        self.code = code
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        ctx_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
        return f"[{self.code}] {ctx_str}" if ctx_str else f"[{self.code}]"

    def to_dict(self) -> dict[str, Any]:
        """로그/JSON 직렬화용."""
        return {
            "code": self.code,
            **{k: str(v) for k, v in self.context.items()},
        }


# =============================================================================
# Error Codes
# =============================================================================

class ErrorCodes:
    """에러 코드 상수."""

    # === Arguments ===
    INVALID_ARGUMENT = "INVALID_ARGUMENT"

    # === Not found ===
    SOURCE_NOT_FOUND = "SOURCE_NOT_FOUND"
    TEMPLATE_NOT_FOUND = "TEMPLATE_NOT_FOUND"

    # === Malformed data ===
    UNSUPPORTED_FORMAT = "UNSUPPORTED_FORMAT"
    MALFORMED_DATA = "MALFORMED_DATA"

    # === Render ===
    RENDER_FAILED = "RENDER_FAILED"  # 레코드 단위, batch는 계속 진행
    OUTPUT_DIR_UNUSABLE = "OUTPUT_DIR_UNUSABLE"  # batch 전체 중단

    # === Config ===
    CONFIG_INVALID = "CONFIG_INVALID"


NOT_FOUND_CODES = frozenset({
    ErrorCodes.SOURCE_NOT_FOUND,
    ErrorCodes.TEMPLATE_NOT_FOUND,
})

BAD_INPUT_CODES = frozenset({
    ErrorCodes.INVALID_ARGUMENT,
    ErrorCodes.UNSUPPORTED_FORMAT,
    ErrorCodes.MALFORMED_DATA,
    ErrorCodes.CONFIG_INVALID,
})
