"""
Domain Constants: 병합 엔진 전역 상수.

파일명 정책, 매칭 임계값, 지원 확장자 등 시스템 전반에서 사용되는 값들.
"""

# =============================================================================
# Variable Matching (변수 매칭 정책)
# =============================================================================
# 정확 매칭(대소문자 무시) 후 남은 이름만 퍼지 매칭.
# 유사도 = 1 - levenshtein / max(len)

DEFAULT_SIMILARITY_THRESHOLD = 0.6

MATCH_METHOD_EXACT = "exact"
MATCH_METHOD_FUZZY = "fuzzy"

# =============================================================================
# Output Filenames (출력 파일명 정책)
# =============================================================================
# 레코드에서 아래 순서대로 식별 필드를 찾아 파일명으로 사용.
# 없으면 FALLBACK_STEM_PREFIX + 4자리 순번.

IDENTIFIER_FIELDS = ("姓名", "名称", "编号", "序号", "ID", "id", "Name", "name")

FALLBACK_STEM_PREFIX = "文档_"
FALLBACK_INDEX_WIDTH = 4

OUTPUT_DOCX_EXTENSION = ".docx"

# 파일명 금지 문자 (Windows 기준이 가장 엄격) + 제어 문자
INVALID_FILENAME_CHARS = frozenset('<>:"/\\|?*') | frozenset(chr(i) for i in range(32))

# =============================================================================
# Supported Inputs (지원 입력 형식)
# =============================================================================

SPREADSHEET_EXTENSIONS = (".xlsx", ".xlsm")

# =============================================================================
# Run Log
# =============================================================================

RUN_ID_PREFIX = "RUN-"
RUN_LOG_DIRNAME = "_logs"
