"""
스프레드시트 읽기: openpyxl 기반.

- 첫 번째(활성) 워크시트, 첫 행 = 헤더 행
- 모든 레코드는 모든 헤더 키를 가짐 (빈 셀 → "")
- 수식은 계산하지 않고 캐시된 값만 읽음 (data_only=True)
"""

from pathlib import Path
from typing import Any

from openpyxl import load_workbook

from docmerge.domain.constants import SPREADSHEET_EXTENSIONS
from docmerge.domain.errors import ErrorCodes, MergeError
from docmerge.domain.schemas import SheetData


def _validate_path(file_path: str | Path | None) -> Path:
    """
    경로 검증.

    Raises:
        MergeError: INVALID_ARGUMENT, SOURCE_NOT_FOUND, UNSUPPORTED_FORMAT
    """
    if file_path is None or not str(file_path).strip():
        raise MergeError(
            ErrorCodes.INVALID_ARGUMENT,
            argument="file_path",
            reason="empty",
        )

    path = Path(file_path)
    if not path.is_file():
        raise MergeError(ErrorCodes.SOURCE_NOT_FOUND, path=str(path))

    if path.suffix.lower() not in SPREADSHEET_EXTENSIONS:
        raise MergeError(
            ErrorCodes.UNSUPPORTED_FORMAT,
            path=str(path),
            extension=path.suffix.lower(),
            supported=", ".join(SPREADSHEET_EXTENSIONS),
        )
    return path


def _cell_value(value: Any) -> Any:
    """빈 셀 → "", 문자열은 그대로, 그 외 스칼라도 그대로."""
    if value is None:
        return ""
    return value


def _read_rows(path: Path) -> list[tuple[Any, ...]]:
    try:
        wb = load_workbook(path, read_only=True, data_only=True)
    except Exception as e:
        raise MergeError(
            ErrorCodes.MALFORMED_DATA,
            path=str(path),
            error=str(e),
        ) from e

    try:
        ws = wb.active
        if ws is None:
            return []
        return list(ws.iter_rows(values_only=True))
    finally:
        wb.close()


def _parse_headers(header_row: tuple[Any, ...]) -> list[tuple[int, str]]:
    """(열 인덱스, 헤더 이름) 목록. 빈 헤더와 중복 헤더는 건너뜀 (첫 열 우선)."""
    headers = []
    seen = set()
    for col, value in enumerate(header_row):
        if value is None:
            continue
        name = str(value).strip()
        if name and name not in seen:
            headers.append((col, name))
            seen.add(name)
    return headers


def read_spreadsheet(file_path: str | Path) -> SheetData:
    """
    스프레드시트를 읽어 헤더 + 레코드 반환.

    Args:
        file_path: .xlsx / .xlsm 경로

    Returns:
        SheetData

    Raises:
        MergeError: INVALID_ARGUMENT, SOURCE_NOT_FOUND, UNSUPPORTED_FORMAT,
            MALFORMED_DATA (헤더 행 없음, 데이터 행 없음, 파싱 실패)
    """
    path = _validate_path(file_path)
    rows = _read_rows(path)

    headers = _parse_headers(rows[0]) if rows else []
    if not headers:
        raise MergeError(
            ErrorCodes.MALFORMED_DATA,
            path=str(path),
            reason="no header row",
        )

    records: list[dict[str, Any]] = []
    for row in rows[1:]:
        if row is None or all(v is None or str(v).strip() == "" for v in row):
            continue
        record = {}
        for col, name in headers:
            value = row[col] if col < len(row) else None
            record[name] = _cell_value(value)
        records.append(record)

    if not records:
        raise MergeError(
            ErrorCodes.MALFORMED_DATA,
            path=str(path),
            reason="no data rows",
        )

    return SheetData(
        headers=[name for _, name in headers],
        rows=records,
        path=path,
    )


def read_headers(file_path: str | Path) -> list[str]:
    """
    헤더 행만 읽기.

    Raises:
        MergeError: read_spreadsheet와 동일 (데이터 행이 없어도 헤더만 있으면 성공)
    """
    path = _validate_path(file_path)
    rows = _read_rows(path)

    headers = _parse_headers(rows[0]) if rows else []
    if not headers:
        raise MergeError(
            ErrorCodes.MALFORMED_DATA,
            path=str(path),
            reason="no header row",
        )
    return [name for _, name in headers]


def count_rows(file_path: str | Path) -> int:
    """데이터 행 수."""
    return read_spreadsheet(file_path).row_count
