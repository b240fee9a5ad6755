"""
Render layer: DOCX 출력 생성.

역할:
- 템플릿 + 레코드 → 최종 파일
- docxtpl (Word)
"""

from .word import DocxRenderer, render_docx

__all__ = [
    "render_docx",
    "DocxRenderer",
]
