"""
Core layer: 매칭/생성 엔진.

역할:
- 변수 이름 유사도, 열 제목 ↔ 템플릿 변수 매칭
- 출력 파일명, batch 생성, 실행 로그
"""

from .batch import agenerate_batch, generate_batch
from .ids import generate_run_id
from .logging import complete_run_log, create_run_log, save_run_log
from .matcher import match_exact, match_variables, remap_record
from .naming import output_filename, output_stem, sanitize_filename
from .similarity import levenshtein_distance, similarity
from .storage import atomic_write_json, ensure_output_dir

__all__ = [
    # similarity
    "similarity",
    "levenshtein_distance",
    # matcher
    "match_variables",
    "match_exact",
    "remap_record",
    # naming
    "output_stem",
    "output_filename",
    "sanitize_filename",
    # batch
    "generate_batch",
    "agenerate_batch",
    # ids
    "generate_run_id",
    # logging
    "create_run_log",
    "complete_run_log",
    "save_run_log",
    # storage
    "atomic_write_json",
    "ensure_output_dir",
]
