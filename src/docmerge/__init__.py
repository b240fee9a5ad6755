"""
docmerge: 스프레드시트 행 → Word 문서 일괄 생성 (mail merge).

계층:
- domain/: 에러, 스키마, 상수
- core/: 유사도, 변수 매칭, 출력 파일명, batch 생성, 실행 로그
- sources/: 스프레드시트 읽기 (openpyxl)
- templates/: 템플릿 변수 추출
- render/: 단일 문서 렌더러 (docxtpl)
- app/: 오케스트레이션 (세션 + FastAPI)
"""

from docmerge.core.batch import agenerate_batch, generate_batch
from docmerge.core.matcher import match_exact, match_variables
from docmerge.core.naming import output_stem
from docmerge.core.similarity import similarity
from docmerge.domain.errors import ErrorCodes, MergeError
from docmerge.domain.schemas import BatchResult, MatchResult

__version__ = "0.1.0"

__all__ = [
    "similarity",
    "match_variables",
    "match_exact",
    "output_stem",
    "generate_batch",
    "agenerate_batch",
    "MatchResult",
    "BatchResult",
    "MergeError",
    "ErrorCodes",
]
