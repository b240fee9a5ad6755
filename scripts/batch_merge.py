#!/usr/bin/env python3
"""
batch_merge.py - 스프레드시트 행마다 Word 문서 생성

명령:
- inspect: 열 제목 ↔ 템플릿 변수 매칭 결과 출력
- generate: 레코드마다 문서 생성, "N of M documents generated" 출력

사용법:
    # 매칭 확인
    python scripts/batch_merge.py inspect people.xlsx letter.docx

    # 문서 생성 (퍼지 매칭 끔)
    python scripts/batch_merge.py generate people.xlsx letter.docx out/ --no-fuzzy

종료 코드:
- 0: 모든 레코드 성공 (inspect는 항상 0)
- 1: 일부/전체 레코드 실패
- 2: 사전 조건 실패 (파일 없음, 헤더 없음 등)
"""

import argparse
import logging
import sys

from docmerge.app.services.merge import MergeSession
from docmerge.config import load_config
from docmerge.domain.errors import MergeError

# 로깅 설정
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)


def _print_match(session: MergeSession) -> None:
    result = session.match_result
    if result is None:
        return

    for pair in result.pairs:
        marker = "=" if pair.method == "exact" else "~"
        print(f"  {pair.source} {marker} {pair.target} ({pair.similarity:.2f})")
    for name in result.unmatched_source:
        print(f"  ? column without placeholder: {name}")
    for name in result.unmatched_target:
        print(f"  ? placeholder without column: {name}")
    print(f"  fully matched: {'yes' if result.is_fully_matched else 'no'}")


def _load(args: argparse.Namespace) -> MergeSession:
    config = load_config(args.config)
    if args.no_fuzzy:
        config.fuzzy_enabled = False
    logging.getLogger().setLevel(config.log_level)

    session = MergeSession(config)
    session.load_spreadsheet(args.spreadsheet)
    session.load_template(args.template)
    return session


def cmd_inspect(args: argparse.Namespace) -> int:
    """매칭 결과 출력."""
    session = _load(args)
    summary = session.summary()
    print(f"{summary['row_count']} rows, {len(summary['headers'])} columns, "
          f"{len(summary['placeholders'])} placeholders")
    for name in summary["unrenderable_placeholders"]:
        print(f"  ! placeholder cannot be rendered: {name}")
    _print_match(session)
    return 0


def cmd_generate(args: argparse.Namespace) -> int:
    """문서 일괄 생성."""
    session = _load(args)
    _print_match(session)

    total = session.sheet.row_count if session.sheet else 0

    def on_progress(completed: int) -> None:
        print(f"  [{completed}/{total}]", flush=True)

    result, run_log = session.generate(args.output_dir, on_progress)

    for failure in result.failures:
        logger.warning(f"  - {failure.file_name}: {failure.error_message}")
    print(result.message)
    logger.info(f"run_id: {run_log.run_id}")

    return 0 if result.success_count == result.total else 1


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="스프레드시트 행마다 Word 문서 생성",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="설정 YAML 경로 (기본: default.yaml)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    p_inspect = subparsers.add_parser("inspect", help="열 제목 ↔ 템플릿 변수 매칭 확인")
    p_inspect.add_argument("spreadsheet", help=".xlsx 경로")
    p_inspect.add_argument("template", help=".docx 템플릿 경로")
    p_inspect.add_argument("--no-fuzzy", action="store_true", help="퍼지 매칭 끄기")
    p_inspect.set_defaults(func=cmd_inspect)

    p_generate = subparsers.add_parser("generate", help="문서 일괄 생성")
    p_generate.add_argument("spreadsheet", help=".xlsx 경로")
    p_generate.add_argument("template", help=".docx 템플릿 경로")
    p_generate.add_argument("output_dir", help="출력 폴더 (없으면 생성)")
    p_generate.add_argument("--no-fuzzy", action="store_true", help="퍼지 매칭 끄기")
    p_generate.set_defaults(func=cmd_generate)

    args = parser.parse_args(argv)

    try:
        return args.func(args)
    except MergeError as e:
        logger.error(str(e))
        return 2


if __name__ == "__main__":
    sys.exit(main())
