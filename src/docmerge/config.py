"""
설정 로드: default.yaml → MergeConfig.

우선순위:
1. 명시적 경로 인자
2. DOCMERGE_CONFIG 환경 변수
3. 프로젝트 루트의 default.yaml (없으면 기본값)
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from docmerge.domain.constants import (
    DEFAULT_SIMILARITY_THRESHOLD,
    OUTPUT_DOCX_EXTENSION,
    RUN_LOG_DIRNAME,
)
from docmerge.domain.errors import ErrorCodes, MergeError

DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent / "default.yaml"
CONFIG_ENV_VAR = "DOCMERGE_CONFIG"


@dataclass
class MergeConfig:
    """병합 설정."""
    fuzzy_enabled: bool = True
    similarity_threshold: float = DEFAULT_SIMILARITY_THRESHOLD
    extension: str = OUTPUT_DOCX_EXTENSION
    save_run_log: bool = True
    logs_dir: str = RUN_LOG_DIRNAME  # output_dir 기준 상대 경로
    log_level: str = "INFO"


def _read_yaml(config_path: Path) -> dict[str, Any]:
    try:
        with open(config_path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise MergeError(
            ErrorCodes.CONFIG_INVALID,
            path=str(config_path),
            error=str(e),
        ) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise MergeError(
            ErrorCodes.CONFIG_INVALID,
            path=str(config_path),
            reason="top level must be a mapping",
        )
    return data


def load_config(config_path: str | Path | None = None) -> MergeConfig:
    """
    설정 파일 로드.

    Args:
        config_path: YAML 경로 (None이면 환경 변수 → default.yaml)

    Returns:
        MergeConfig (파일이 없으면 기본값)

    Raises:
        MergeError: CONFIG_INVALID
    """
    if config_path is None:
        config_path = os.environ.get(CONFIG_ENV_VAR) or DEFAULT_CONFIG_PATH
    config_path = Path(config_path)

    if not config_path.exists():
        return MergeConfig()

    data = _read_yaml(config_path)
    matching = data.get("matching") or {}
    output = data.get("output") or {}
    logging_config = data.get("logging") or {}

    try:
        threshold = float(
            matching.get("similarity_threshold", DEFAULT_SIMILARITY_THRESHOLD)
        )
    except (TypeError, ValueError) as e:
        raise MergeError(
            ErrorCodes.CONFIG_INVALID,
            path=str(config_path),
            field="matching.similarity_threshold",
            error=str(e),
        ) from e

    config = MergeConfig(
        fuzzy_enabled=bool(matching.get("fuzzy_enabled", True)),
        similarity_threshold=threshold,
        extension=str(output.get("extension", OUTPUT_DOCX_EXTENSION)),
        save_run_log=bool(output.get("save_run_log", True)),
        logs_dir=str(output.get("logs_dir", RUN_LOG_DIRNAME)),
        log_level=str(logging_config.get("level", "INFO")).upper(),
    )

    if not 0.0 <= config.similarity_threshold <= 1.0:
        raise MergeError(
            ErrorCodes.CONFIG_INVALID,
            path=str(config_path),
            field="matching.similarity_threshold",
            value=config.similarity_threshold,
        )
    if not config.extension.startswith("."):
        raise MergeError(
            ErrorCodes.CONFIG_INVALID,
            path=str(config_path),
            field="output.extension",
            value=config.extension,
        )

    return config
