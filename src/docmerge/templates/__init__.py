"""
Templates layer: 템플릿 변수 추출.

주의: 이 모듈은 Word 템플릿 문서를 다루는 코드이며,
Jinja2 렌더링은 render/ 에서 수행한다.
"""

from .placeholders import (
    PLACEHOLDER_PATTERN,
    detect_placeholders,
    extract_template_variables,
    find_unrenderable,
    has_placeholders,
    is_renderable_name,
)

__all__ = [
    "PLACEHOLDER_PATTERN",
    "detect_placeholders",
    "has_placeholders",
    "extract_template_variables",
    "is_renderable_name",
    "find_unrenderable",
]
