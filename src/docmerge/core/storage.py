"""
파일시스템 헬퍼: 출력 폴더 보장, 원자적 JSON 쓰기.

- 출력 폴더: 멱등 생성, 반환 시 존재 보장 또는 OUTPUT_DIR_UNUSABLE
- 원자적 쓰기: temp → rename + fsync (best-effort)
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from docmerge.domain.errors import ErrorCodes, MergeError

logger = logging.getLogger(__name__)


def ensure_output_dir(output_dir: str | Path | None) -> Path:
    """
    출력 폴더 준비.

    Args:
        output_dir: 출력 폴더 경로

    Returns:
        존재가 보장된 폴더 경로

    Raises:
        MergeError: INVALID_ARGUMENT (빈 경로), OUTPUT_DIR_UNUSABLE (생성 실패)
    """
    if output_dir is None or not str(output_dir).strip():
        raise MergeError(
            ErrorCodes.INVALID_ARGUMENT,
            argument="output_dir",
            reason="empty",
        )

    path = Path(output_dir)
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise MergeError(
            ErrorCodes.OUTPUT_DIR_UNUSABLE,
            path=str(path),
            error=str(e),
        ) from e

    if not path.is_dir():
        raise MergeError(
            ErrorCodes.OUTPUT_DIR_UNUSABLE,
            path=str(path),
            error="not a directory",
        )
    return path


def _fsync_dir(dir_path: Path) -> None:
    """디렉토리 fsync (지원하지 않는 플랫폼에서는 무시)."""
    if not hasattr(os, "O_DIRECTORY"):
        return
    try:
        fd = os.open(dir_path, os.O_RDONLY | os.O_DIRECTORY)
    except OSError:
        return
    try:
        os.fsync(fd)
    except OSError as e:
        logger.warning(f"Directory fsync failed for {dir_path}: {e}")
    finally:
        os.close(fd)


def atomic_write_json(path: Path, data: dict[str, Any]) -> None:
    """
    원자적 JSON 쓰기.

    동작:
    - 중간 상태 없음: temp → rename
    - fsync 실패 시 경고 남기고 계속 진행
    - 실패 시 temp 파일 삭제, 기존 파일 보존

    Args:
        path: 저장할 파일 경로
        data: JSON 직렬화할 데이터
    """
    dir_path = path.parent
    dir_path.mkdir(parents=True, exist_ok=True)

    temp_path = None
    try:
        with tempfile.NamedTemporaryFile(
            mode="w",
            dir=dir_path,
            suffix=".tmp",
            delete=False,
            encoding="utf-8",
        ) as f:
            temp_path = Path(f.name)
            json.dump(data, f, indent=2, ensure_ascii=False)
            f.flush()
            try:
                os.fsync(f.fileno())
            except OSError as e:
                logger.warning(
                    f"File fsync failed for {path}: {e}. "
                    f"Data may not be durable on power loss."
                )

        os.replace(temp_path, path)
        _fsync_dir(dir_path)

    except Exception:
        if temp_path and temp_path.exists():
            try:
                temp_path.unlink()
            except OSError:
                pass
        raise
