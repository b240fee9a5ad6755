"""
App services: 로드 상태와 생성 흐름을 묶는 얇은 계층.

⚠️ 매칭/생성 로직 없음 (core에 위임)
"""

from .merge import MergeSession

__all__ = ["MergeSession"]
