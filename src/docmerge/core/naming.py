"""
출력 파일명 생성.

우선순위:
1. IDENTIFIER_FIELDS 순서대로 레코드에서 값이 있는 첫 식별 필드
2. 없으면 순번 (文档_0007)

식별 필드가 없는 것은 정상 경로이며 예외를 발생시키지 않는다.
"""

from collections.abc import Mapping
from typing import Any

from docmerge.domain.constants import (
    FALLBACK_INDEX_WIDTH,
    FALLBACK_STEM_PREFIX,
    IDENTIFIER_FIELDS,
    INVALID_FILENAME_CHARS,
    OUTPUT_DOCX_EXTENSION,
)


def sanitize_filename(text: str) -> str:
    """파일명 금지 문자를 밑줄로 치환."""
    return "".join("_" if c in INVALID_FILENAME_CHARS else c for c in text)


def output_stem(record: Mapping[str, Any], index: int) -> str:
    """
    레코드의 출력 파일명 stem (확장자 제외).

    Args:
        record: 스프레드시트 한 행
        index: 1부터 시작하는 레코드 순번

    Returns:
        파일명 stem
    """
    for key in IDENTIFIER_FIELDS:
        value = record.get(key)
        if value is None:
            continue
        text = str(value).strip()
        if text:
            return sanitize_filename(text)

    return f"{FALLBACK_STEM_PREFIX}{index:0{FALLBACK_INDEX_WIDTH}d}"


def output_filename(
    record: Mapping[str, Any],
    index: int,
    extension: str = OUTPUT_DOCX_EXTENSION,
) -> str:
    """stem + 렌더러 확장자."""
    return f"{output_stem(record, index)}{extension}"
