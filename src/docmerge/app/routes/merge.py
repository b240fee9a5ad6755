"""
Merge Routes: 변수 매칭 확인 + 문서 일괄 생성.

- POST /api/match → 이름 목록 두 개 매칭
- POST /api/inspect → 스프레드시트 + 템플릿 로드, 매칭 결과
- POST /api/generate → 레코드마다 문서 생성, "N of M" 결과

경로 인자는 서버 로컬 경로. 매칭/생성 로직 없음 (core에 위임).
"""

import asyncio
import logging
from dataclasses import replace
from typing import Any

from fastapi import APIRouter, Form, HTTPException, Request

from docmerge.app.services.merge import MergeSession
from docmerge.config import MergeConfig
from docmerge.core.matcher import match_variables
from docmerge.domain.errors import BAD_INPUT_CODES, NOT_FOUND_CODES, MergeError

logger = logging.getLogger(__name__)

api_router = APIRouter()


def _to_http_error(error: MergeError) -> HTTPException:
    """MergeError → HTTPException (code별 상태 코드)."""
    if error.code in NOT_FOUND_CODES:
        status_code = 404
    elif error.code in BAD_INPUT_CODES:
        status_code = 400
    else:
        status_code = 500
    return HTTPException(status_code=status_code, detail=error.to_dict())


def _session(request: Request, fuzzy: bool) -> MergeSession:
    base: MergeConfig = request.app.state.config
    config = replace(base, fuzzy_enabled=fuzzy)
    return MergeSession(config)


async def _load_inputs(
    session: MergeSession,
    spreadsheet_path: str,
    template_path: str,
) -> None:
    """스프레드시트/템플릿 로드 (파일 읽기는 worker thread에서)."""
    await asyncio.to_thread(session.load_spreadsheet, spreadsheet_path)
    await asyncio.to_thread(session.load_template, template_path)


@api_router.post("/match")
async def match_names(
    request: Request,
    source: list[str] = Form(default=[]),
    target: list[str] = Form(default=[]),
    fuzzy: bool = Form(True),
) -> dict[str, Any]:
    """
    이름 목록 두 개 매칭.

    Args:
        source: 소스 이름 (열 제목)
        target: 타깃 이름 (템플릿 변수)
        fuzzy: 퍼지 매칭 여부

    Returns:
        MatchResult.to_dict()
    """
    config: MergeConfig = request.app.state.config
    try:
        result = match_variables(
            source,
            target,
            fuzzy_enabled=fuzzy,
            threshold=config.similarity_threshold,
        )
    except MergeError as e:
        raise _to_http_error(e) from e
    return result.to_dict()


@api_router.post("/inspect")
async def inspect(
    request: Request,
    spreadsheet_path: str = Form(...),
    template_path: str = Form(...),
    fuzzy: bool = Form(True),
) -> dict[str, Any]:
    """스프레드시트 + 템플릿 로드 후 요약 반환."""
    session = _session(request, fuzzy)
    try:
        await _load_inputs(session, spreadsheet_path, template_path)
    except MergeError as e:
        raise _to_http_error(e) from e
    return session.summary()


@api_router.post("/generate")
async def generate(
    request: Request,
    spreadsheet_path: str = Form(...),
    template_path: str = Form(...),
    output_dir: str = Form(...),
    fuzzy: bool = Form(True),
) -> dict[str, Any]:
    """
    문서 일괄 생성.

    레코드 단위 실패는 에러가 아니라 failures 목록으로 반환한다.

    Returns:
        run_id, success_count, total, message, failures, match
    """
    session = _session(request, fuzzy)
    try:
        await _load_inputs(session, spreadsheet_path, template_path)
        result, run_log = await session.agenerate(output_dir)
    except MergeError as e:
        logger.error(f"Generate failed: {e}")
        raise _to_http_error(e) from e

    return {
        "run_id": run_log.run_id,
        **result.to_dict(),
        "match": session.match_result.to_dict() if session.match_result else None,
    }
