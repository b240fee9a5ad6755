"""
Pytest fixtures for the merge engine tests.

테스트 구성:
- 실제 DOCX(python-docx)/XLSX(openpyxl) 파일을 tmp_path에 생성
- 렌더러가 필요 없는 batch 테스트는 가짜 렌더러 사용
"""

from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Any

import pytest
from docx import Document
from openpyxl import Workbook

# =============================================================================
# Path Fixtures
# =============================================================================

@pytest.fixture
def project_root() -> Path:
    """프로젝트 루트 경로."""
    return Path(__file__).parent.parent


@pytest.fixture
def default_config_path(project_root: Path) -> Path:
    """default.yaml 경로."""
    return project_root / "default.yaml"


# =============================================================================
# File Factories
# =============================================================================

@pytest.fixture
def make_docx(tmp_path: Path) -> Callable[..., Path]:
    """
    DOCX 템플릿 생성 팩토리.

    Usage:
        path = make_docx(["이름: {{name}}", "나이: {{age}}"])
    """
    def _make(paragraphs: Sequence[str], name: str = "template.docx") -> Path:
        path = tmp_path / name
        doc = Document()
        for text in paragraphs:
            doc.add_paragraph(text)
        doc.save(path)
        return path

    return _make


@pytest.fixture
def make_xlsx(tmp_path: Path) -> Callable[..., Path]:
    """
    XLSX 생성 팩토리. 첫 번째 행이 헤더.

    Usage:
        path = make_xlsx([["name", "age"], ["Kim", 30]])
    """
    def _make(rows: Sequence[Sequence[Any]], name: str = "data.xlsx") -> Path:
        path = tmp_path / name
        wb = Workbook()
        ws = wb.active
        for row in rows:
            ws.append(list(row))
        wb.save(path)
        return path

    return _make


@pytest.fixture
def letter_template(make_docx: Callable[..., Path]) -> Path:
    """기본 편지 템플릿: {{name}}, {{age}}, {{city}}."""
    return make_docx([
        "안내문",
        "이름: {{name}}",
        "나이: {{age}}",
        "도시: {{city}}",
    ])


@pytest.fixture
def people_xlsx(make_xlsx: Callable[..., Path]) -> Path:
    """기본 명단: Name, Age, City (3명)."""
    return make_xlsx([
        ["Name", "Age", "City"],
        ["Kim", 30, "Seoul"],
        ["Lee", 41, "Busan"],
        ["Park", 25, "Incheon"],
    ])


@pytest.fixture
def sample_records() -> list[dict[str, Any]]:
    """batch 테스트용 레코드."""
    return [
        {"name": "Kim", "age": 30},
        {"name": "Lee", "age": 41},
        {"name": "Park", "age": 25},
    ]


# =============================================================================
# Fake Renderer
# =============================================================================

class FakeRenderer:
    """
    호출 기록용 가짜 렌더러.

    fail_on: 실패시킬 레코드 순번(1-based)
    """

    def __init__(self, fail_on: Sequence[int] = (), error: Exception | None = None):
        self.fail_on = set(fail_on)
        self.error = error
        self.calls: list[tuple[Path, dict[str, Any], Path]] = []

    def __call__(self, template_path: Path, record: Any, output_path: Path) -> Path:
        self.calls.append((template_path, dict(record), output_path))
        if len(self.calls) in self.fail_on:
            raise self.error or RuntimeError(f"boom at {len(self.calls)}")
        output_path.write_bytes(b"rendered")
        return output_path


@pytest.fixture
def fake_renderer() -> FakeRenderer:
    return FakeRenderer()


@pytest.fixture
def fake_template(tmp_path: Path) -> Path:
    """가짜 렌더러용 템플릿 파일 (내용 무관)."""
    path = tmp_path / "fake_template.docx"
    path.write_bytes(b"PK\x03\x04fake docx content")
    return path


@pytest.fixture
def renderer_factory() -> type[FakeRenderer]:
    """실패 순번을 지정한 FakeRenderer 생성용."""
    return FakeRenderer
