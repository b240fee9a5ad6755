"""
Sources layer: 입력 데이터 읽기.

역할:
- 스프레드시트 → 헤더 + 레코드 (openpyxl)
"""

from .spreadsheet import count_rows, read_headers, read_spreadsheet

__all__ = [
    "read_spreadsheet",
    "read_headers",
    "count_rows",
]
