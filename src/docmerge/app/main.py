"""
FastAPI 애플리케이션 진입점.

실행:
- 개발: uvicorn docmerge.app.main:app --reload
- 프로덕션: uvicorn docmerge.app.main:app
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI

from docmerge.app.routes import merge
from docmerge.config import load_config

# =============================================================================
# Lifespan
# =============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    애플리케이션 생명주기 관리.

    시작 시: 설정 로드, 로그 레벨 적용
    """
    app.state.config = load_config()
    logging.getLogger("docmerge").setLevel(app.state.config.log_level)

    yield


# =============================================================================
# App Instance
# =============================================================================

app = FastAPI(
    title="docmerge",
    description="스프레드시트 행 → Word 문서 일괄 생성",
    version="0.1.0",
    lifespan=lifespan,
)

app.include_router(merge.api_router, prefix="/api", tags=["Merge API"])


# =============================================================================
# Root Endpoints
# =============================================================================


@app.get("/")
async def root() -> dict[str, Any]:
    """엔드포인트 목록."""
    return {
        "message": "docmerge",
        "endpoints": {
            "match": "/api/match",
            "inspect": "/api/inspect",
            "generate": "/api/generate",
        },
    }


@app.get("/health")
async def health() -> dict[str, str]:
    """헬스 체크."""
    return {"status": "ok"}


# =============================================================================
# CLI Entry Point
# =============================================================================

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "docmerge.app.main:app",
        host="127.0.0.1",
        port=8000,
        reload=True,
    )
