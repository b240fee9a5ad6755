"""
Word (DOCX) 렌더러: docxtpl 기반.

- placeholder: {{name}} (Jinja2 변수, 유니코드 식별자 허용)
- 레코드 한 건 → 문서 한 건
- 값 변환: None → "", Decimal → str
- 값은 XML 이스케이프 (autoescape)
"""

from collections.abc import Mapping
from decimal import Decimal
from pathlib import Path
from typing import Any

from docxtpl import DocxTemplate

from docmerge.domain.errors import ErrorCodes, MergeError


class DocxRenderer:
    """
    Word 문서 렌더러.

    Usage:
        renderer = DocxRenderer(template_path)
        renderer.render(record, output_path)
    """

    def __init__(self, template_path: str | Path):
        """
        Args:
            template_path: DOCX 템플릿 파일 경로

        Raises:
            MergeError: TEMPLATE_NOT_FOUND
        """
        template_path = Path(template_path)
        if not template_path.is_file():
            raise MergeError(
                ErrorCodes.TEMPLATE_NOT_FOUND,
                path=str(template_path),
            )

        self.template_path = template_path

    def _load_template(self) -> DocxTemplate:
        """템플릿 로드. render()가 문서를 변경하므로 호출마다 새로 로드."""
        return DocxTemplate(self.template_path)

    def render(
        self,
        record: Mapping[str, Any],
        output_path: str | Path,
    ) -> Path:
        """
        템플릿에 레코드 값을 채워 Word 문서 생성.

        Args:
            record: 변수 이름 → 값
            output_path: 출력 파일 경로

        Returns:
            저장된 파일 경로

        Raises:
            MergeError: RENDER_FAILED
        """
        output_path = Path(output_path)
        try:
            doc = self._load_template()
            doc.render(self._build_context(record), autoescape=True)

            output_path.parent.mkdir(parents=True, exist_ok=True)
            doc.save(output_path)

            return output_path

        except MergeError:
            raise
        except Exception as e:
            raise MergeError(
                ErrorCodes.RENDER_FAILED,
                template=str(self.template_path),
                output=output_path.name,
                error=str(e),
            ) from e

    def _build_context(self, record: Mapping[str, Any]) -> dict[str, Any]:
        """렌더링 컨텍스트 구성."""
        return {str(key): self._convert_value(value) for key, value in record.items()}

    def _convert_value(self, value: Any) -> Any:
        if value is None:
            return ""
        if isinstance(value, Decimal):
            return str(value)
        return value

    def get_placeholders(self) -> list[str]:
        """
        템플릿에서 사용된 Jinja2 변수 목록 추출.

        Returns:
            placeholder 이름 목록 (정렬됨)
        """
        try:
            variables = self._load_template().get_undeclared_template_variables()
        except Exception as e:
            raise MergeError(
                ErrorCodes.MALFORMED_DATA,
                template=str(self.template_path),
                error=str(e),
            ) from e
        return sorted(variables)


def render_docx(
    template_path: str | Path,
    record: Mapping[str, Any],
    output_path: str | Path,
) -> Path:
    """
    Word 문서 생성 (간편 함수). batch 생성기의 기본 렌더러.

    Args:
        template_path: DOCX 템플릿 파일 경로
        record: 템플릿에 채울 값
        output_path: 출력 파일 경로

    Returns:
        저장된 파일 경로
    """
    renderer = DocxRenderer(template_path)
    return renderer.render(record, output_path)
