"""
App layer: 오케스트레이션 (FastAPI).

역할:
- 스프레드시트/템플릿 로드 상태 관리, 매칭 결과 재계산
- HTTP API로 매칭 확인, 일괄 생성 요청
- ⚠️ 매칭/생성 로직 없음 (core에 위임)
"""
