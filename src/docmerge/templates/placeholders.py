"""
템플릿 변수 추출: python-docx로 읽은 텍스트에서 {{name}} placeholder 검색.

- 본문 문단, 표 셀(중첩 표 포함), 섹션별 머리글/바닥글
- 문단 텍스트 기준으로 검색하므로 여러 run으로 나뉜 placeholder도 인식
- 대소문자 구분, 중복 제거, 정렬
- placeholder 이름 앞뒤 공백은 제거 ({{ name }} → name)
"""

import keyword
import re
from collections.abc import Iterable, Iterator
from pathlib import Path

from docx import Document
from docx.table import Table
from docx.text.paragraph import Paragraph

from docmerge.domain.errors import ErrorCodes, MergeError

PLACEHOLDER_PATTERN = re.compile(r"\{\{([^}]+)\}\}")


def detect_placeholders(text: str) -> list[str]:
    """
    텍스트에서 placeholder 감지.

    Args:
        text: 검색할 텍스트

    Returns:
        발견 순서대로의 placeholder 이름 목록 (중복 포함)
    """
    names = []
    for match in PLACEHOLDER_PATTERN.finditer(text):
        name = match.group(1).strip()
        if name:
            names.append(name)
    return names


def has_placeholders(text: str) -> bool:
    """placeholder가 있는지 확인."""
    return bool(PLACEHOLDER_PATTERN.search(text))


def is_renderable_name(name: str) -> bool:
    """렌더러(Jinja2)가 변수로 해석할 수 있는 이름인지. 유니코드 식별자 허용."""
    return name.isidentifier() and not keyword.iskeyword(name)


def find_unrenderable(names: Iterable[str]) -> list[str]:
    """렌더링 시 실패할 placeholder 이름 목록 (입력 순서 유지)."""
    return [name for name in names if not is_renderable_name(name)]


# =============================================================================
# DOCX text walk
# =============================================================================

def _table_texts(tables: Iterable[Table]) -> Iterator[str]:
    for table in tables:
        for row in table.rows:
            for cell in row.cells:
                yield from _block_texts(cell.paragraphs, cell.tables)


def _block_texts(
    paragraphs: Iterable[Paragraph],
    tables: Iterable[Table],
) -> Iterator[str]:
    for para in paragraphs:
        yield para.text
    yield from _table_texts(tables)


def _section_texts(doc) -> Iterator[str]:
    """섹션별 머리글/바닥글 (이전 섹션에 연결된 것은 건너뜀)."""
    for section in doc.sections:
        parts = (
            section.header,
            section.footer,
            section.first_page_header,
            section.first_page_footer,
            section.even_page_header,
            section.even_page_footer,
        )
        for part in parts:
            if part.is_linked_to_previous:
                continue
            yield from _block_texts(part.paragraphs, part.tables)


def extract_template_variables(template_path: str | Path | None) -> list[str]:
    """
    템플릿에서 변수 목록 추출.

    Args:
        template_path: DOCX 템플릿 경로

    Returns:
        정렬된 고유 변수 이름 목록

    Raises:
        MergeError: INVALID_ARGUMENT, TEMPLATE_NOT_FOUND, MALFORMED_DATA
    """
    if template_path is None or not str(template_path).strip():
        raise MergeError(
            ErrorCodes.INVALID_ARGUMENT,
            argument="template_path",
            reason="empty",
        )

    path = Path(template_path)
    if not path.is_file():
        raise MergeError(ErrorCodes.TEMPLATE_NOT_FOUND, path=str(path))

    try:
        doc = Document(path)
    except Exception as e:
        raise MergeError(
            ErrorCodes.MALFORMED_DATA,
            path=str(path),
            error=str(e),
        ) from e

    variables: set[str] = set()
    for text in _block_texts(doc.paragraphs, doc.tables):
        variables.update(detect_placeholders(text))
    for text in _section_texts(doc):
        variables.update(detect_placeholders(text))

    return sorted(variables)
