"""
문자열 유사도: Levenshtein 편집 거리 기반.

- 대소문자 무시 (양쪽 모두 소문자로 정규화)
- 유사도 = 1 - distance / max(len(a), len(b))
- 순수 함수, 결정론적, 대칭
"""


def levenshtein_distance(a: str, b: str) -> int:
    """
    Levenshtein 편집 거리 (삽입/삭제/치환 비용 1).

    (len(a)+1) x (len(b)+1) DP 테이블, 0행/0열은 인덱스로 초기화.

    Args:
        a: 문자열 1
        b: 문자열 2

    Returns:
        편집 거리
    """
    rows = len(a) + 1
    cols = len(b) + 1
    matrix = [[0] * cols for _ in range(rows)]

    for i in range(rows):
        matrix[i][0] = i
    for j in range(cols):
        matrix[0][j] = j

    for i in range(1, rows):
        for j in range(1, cols):
            cost = 0 if a[i - 1] == b[j - 1] else 1
            matrix[i][j] = min(
                matrix[i - 1][j] + 1,  # 삭제
                matrix[i][j - 1] + 1,  # 삽입
                matrix[i - 1][j - 1] + cost,  # 치환 또는 일치
            )

    return matrix[rows - 1][cols - 1]


def similarity(a: str | None, b: str | None) -> float:
    """
    두 변수 이름의 정규화된 유사도.

    Args:
        a: 이름 1
        b: 이름 2

    Returns:
        0.0 ~ 1.0 (1.0 = 동일)
    """
    if not a and not b:
        return 1.0
    if not a or not b:
        return 0.0

    a = a.lower()
    b = b.lower()

    if a == b:
        return 1.0

    distance = levenshtein_distance(a, b)
    return 1.0 - distance / max(len(a), len(b))
