from __future__ import annotations

import argparse
import sys
from dataclasses import replace
from pathlib import Path

from dotenv import load_dotenv

from throughput_records.config.loader import (
    DEFAULT_CONFIG_PATH,
    ConfigError,
    EditorConfig,
    apply_env_overrides,
    load_config,
)
from throughput_records.dataset.reader import DatasetLoadError, load_dataset
from throughput_records.logging.error_log import ErrorLogBuffer, flush_and_report
from throughput_records.logging.init import log_summary, set_debug, setup_logging
from throughput_records.models.record import COLUMN_TITLES, Record
from throughput_records.services.display import LIST_STYLES, colorize, render_record
from throughput_records.services.editor import RecordEditor
from throughput_records.services.progress import is_tty_enabled
from throughput_records.services.summary import render_summary_line

"""CLI entrypoint.

Flow:
- Load .env, then config (YAML) and apply env / CLI overrides
- Load the dataset (fatal on failure: the editor never starts)
- --inspect-data: print a short preview and exit
- otherwise run the interactive editor and print a SUMMARY line on exit
"""

EXIT_SUCCESS = 0
EXIT_FATAL = 1
EXIT_INTERRUPTED = 130

INSPECT_SAMPLE_ROWS = 3


def _load_env_file(path: Path, override: bool = True) -> None:
    """Load .env using python-dotenv (values override the process environment)."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Pipeline throughput CSV record editor")
    p.add_argument("--config", type=Path, default=None, help=f"YAML config (default: {DEFAULT_CONFIG_PATH})")
    p.add_argument("--dataset", type=Path, default=None, help="Dataset CSV to load")
    p.add_argument("--output", type=Path, default=None, help="CSV written by 'Save dataset to file'")
    p.add_argument("--style", choices=LIST_STYLES, default=None, help="How 'Display all records' renders a record")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument("--inspect-data", action="store_true", help="Print the header and first rows then exit")
    return p.parse_args(argv)


def _resolve_config(args: argparse.Namespace) -> EditorConfig:
    """Config precedence: CLI flags > environment (.env) > YAML > built-in defaults.

    An explicit --config must exist; a missing default config file means defaults.
    """
    if args.config is not None:
        cfg = load_config(args.config)
    elif DEFAULT_CONFIG_PATH.exists():
        cfg = load_config(DEFAULT_CONFIG_PATH)
    else:
        cfg = EditorConfig()
    cfg = apply_env_overrides(cfg)
    if args.dataset is not None:
        cfg = replace(cfg, dataset_path=str(args.dataset))
    if args.output is not None:
        cfg = replace(cfg, output_path=str(args.output))
    if args.style is not None:
        cfg = replace(cfg, list_style=args.style)
    return cfg


def _color_enabled(mode: str) -> bool:
    if mode == "always":
        return True
    if mode == "never":
        return False
    return is_tty_enabled()


def _inspect_data(path: Path, records: list[Record], interactive: bool) -> int:
    print(f"FILE: {path} records={len(records)}")
    print(f"  columns={list(COLUMN_TITLES)}")
    for number, record in enumerate(records[:INSPECT_SAMPLE_ROWS], start=1):
        print(colorize(f"\nRecord {number}:", "heading", interactive))
        print(render_record(record, interactive))
    return EXIT_SUCCESS


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # Only read the real command line when argv is None: tests call main([]).
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    _load_env_file(Path(".env"), override=True)

    if args.debug:
        set_debug()
        logger.debug("debug mode enabled")

    try:
        cfg = _resolve_config(args)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    source = Path(cfg.dataset_path)
    output = Path(cfg.output_path)
    if source.resolve() == output.resolve():
        logger.error(f"config: output_path must differ from dataset_path ({source})")
        return EXIT_FATAL

    interactive = _color_enabled(cfg.color)
    error_log = ErrorLogBuffer(Path(cfg.error_log_dir))

    try:
        records = load_dataset(source, error_log)
    except DatasetLoadError as e:
        logger.error(f"Error loading dataset: {e}")
        return EXIT_FATAL
    finally:
        flush_and_report(error_log)

    if args.inspect_data:
        return _inspect_data(source, records, interactive)

    editor = RecordEditor(
        records,
        source,
        output,
        list_style=cfg.list_style,
        interactive=interactive,
        error_log=error_log,
    )
    try:
        editor.run()
    except KeyboardInterrupt:
        print()
        logger.warning("interrupted, unsaved changes are discarded")
        return EXIT_INTERRUPTED

    # log_summary adds the "SUMMARY " label itself
    log_summary(render_summary_line(editor.result).removeprefix("SUMMARY "))
    return EXIT_SUCCESS


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
