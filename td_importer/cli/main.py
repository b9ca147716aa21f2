from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path

from dotenv import load_dotenv

from ..config.loader import ConfigError, load_config, resolve_config_path
from ..errors import TdImportError
from ..logging.error_log import IssueLogBuffer
from ..logging.init import log_summary, setup_logging
from ..models.config_models import EntityCasingPolicy, ImportConfig
from ..models.error_record import SEVERITY_ERROR, SEVERITY_WARNING
from ..services.copy_affordance import copy_affordance
from ..services.document import format_document, parse_document
from ..services.orchestrator import ProcessingError, process_all
from ..services.summary import render_summary_line

"""CLI entrypoint.

Subcommands:
- import: CSV / Excel files -> properties spliced into a Thing Description
- copy:   duplicate an affordance of a Thing Description

Exit codes: 0 success, 2 some input files failed, 1 fatal error.
"""

EXIT_SUCCESS_ALL = 0
EXIT_PARTIAL_FAILURE = 2
EXIT_FATAL = 1


def _load_env_file(path: Path, override: bool = True) -> None:
    """Load .env using python-dotenv (TD_IMPORT_CONFIG etc.)."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="td-import", description="CSV -> Thing Description importer")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument("--config", type=Path, default=None, help="Config YAML (default: config/import.yml)")
    sub = p.add_subparsers(dest="command", required=True)

    imp = sub.add_parser("import", help="Import CSV/Excel files as TD properties")
    imp.add_argument("files", nargs="+", type=Path, help="CSV or .xlsx files")
    imp.add_argument("--td", type=Path, default=None, help="Existing TD to import into")
    imp.add_argument("--output", "-o", type=Path, default=None, help="Write the TD here instead of stdout")
    imp.add_argument(
        "--strict-entities",
        action="store_true",
        help="Warn about modbus entities that only match case-insensitively",
    )

    cp = sub.add_parser("copy", help="Copy an affordance next to the original")
    cp.add_argument("td", type=Path, help="TD JSON file")
    cp.add_argument("section", help="Section, e.g. properties / actions / events")
    cp.add_argument("name", help="Affordance to copy")
    cp.add_argument("--output", "-o", type=Path, default=None, help="Write the TD here instead of stdout")
    return p.parse_args(argv)


def _resolve_config(explicit: Path | None) -> ImportConfig:
    path = resolve_config_path(explicit)
    if explicit is None and not path.exists():
        # 設定ファイルは任意 (明示指定時のみ必須)
        return ImportConfig()
    return load_config(path)


def _write_output(text: str, output: Path | None) -> None:
    if output is None:
        sys.stdout.write(text + "\n")
    else:
        output.write_text(text + "\n", encoding="utf-8")


def _read_document(path: Path) -> dict:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise TdImportError(f"cannot read TD {path}: {e}") from e
    return parse_document(text)


def _run_import(args: argparse.Namespace, cfg: ImportConfig, logger: logging.Logger) -> int:
    if args.strict_entities:
        cfg = replace(cfg, entity_casing_policy=EntityCasingPolicy.WARN)
    document = _read_document(args.td) if args.td is not None else {}

    issue_log = IssueLogBuffer(Path(cfg.logs_directory))
    outcome = process_all(args.files, cfg, document=document, issue_log=issue_log)
    if cfg.write_issue_log:
        log_path = issue_log.flush()
        if log_path is not None:
            logger.info(
                f"issue log written: {log_path} "
                f"(errors={issue_log.count(SEVERITY_ERROR)}, warnings={issue_log.count(SEVERITY_WARNING)})"
            )

    result = outcome.result
    if result.success_files > 0:
        _write_output(format_document(outcome.document, indent=cfg.indent), args.output)

    total_files = result.success_files + result.failed_files
    summary_line = render_summary_line(total_files, result)
    log_summary(summary_line.removeprefix("SUMMARY "))

    if result.failed_files > 0:
        return EXIT_PARTIAL_FAILURE
    return EXIT_SUCCESS_ALL


def _run_copy(args: argparse.Namespace, cfg: ImportConfig, logger: logging.Logger) -> int:
    document = _read_document(args.td)
    copied = copy_affordance(document, args.section, args.name)
    logger.info(f'copied "{args.name}" to "{copied.new_name}" in {args.section}')
    _write_output(format_document(copied.updated_document, indent=cfg.indent), args.output)
    return EXIT_SUCCESS_ALL


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # NOTE: argv=[] (テストからの呼び出し) で sys.argv が混入しないよう None のときのみ読む
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    _load_env_file(Path(".env"), override=True)

    if args.debug:
        logger.setLevel(logging.DEBUG)
        logger.debug("debug mode enabled")

    try:
        cfg = _resolve_config(args.config)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    try:
        if args.command == "import":
            return _run_import(args, cfg, logger)
        return _run_copy(args, cfg, logger)
    except ProcessingError as e:
        logger.error(f"processing: {e}")
        return EXIT_FATAL
    except TdImportError as e:
        logger.error(str(e))
        return EXIT_FATAL
