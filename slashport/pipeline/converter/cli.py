"""CLI entrypoint and logging/argument utilities for the command converter.

This module implements the command-line interface of the converter. It is a
thin orchestration layer: argument parsing, logging setup, building the
immutable configuration and the completion client, and running
:class:`CommandConverter` under ``asyncio.run``. All conversion logic lives
in the sibling modules.

Fatal startup conditions (missing API key, invalid configuration, missing
source directory) exit with status 1 before any file is processed. Per-file
failures are reported in the final summary and do not change the exit
status.

Examples
--------
CLI usage:

>>> # In shell
>>> slashport --model gpt-4o --delay 2000
>>> slashport --endpoint http://localhost:8080/v1 --api-key local-key

Programmatic usage:

>>> from slashport.pipeline.converter.cli import main
>>> # exit_code = main(["--source", "cmds/prefix", "--output", "cmds/slash"])
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
from pathlib import Path
from typing import Sequence

from rich.console import Console
from rich.logging import RichHandler

from slashport.config import (
    DEFAULT_LOG_LEVEL,
    EXIT_FATAL,
    EXIT_INTERRUPTED,
    EXIT_OK,
    LOG_FORMAT,
)
from slashport.exceptions import ConfigurationError
from slashport.ui import (
    ui_config_table,
    ui_info,
    ui_progress,
    ui_rule,
    ui_summary,
    ui_warning,
)

from .client import CompletionClient
from .config import ConverterConfig
from .processor import CommandConverter, ConversionStats

logger = logging.getLogger(__name__)


def configure_logging(
    level: str = DEFAULT_LOG_LEVEL, log_file: Path | None = None
) -> None:
    r"""Configure logging output for the converter CLI.

    Replaces all root handlers with a Rich console handler on stderr and,
    when ``log_file`` is given, a file handler appending plain records in
    ``LOG_FORMAT``. A log file that cannot be opened is reported as a
    warning; console logging still works.

    Parameters
    ----------
    level : str, optional
        Logging level name, e.g. ``"DEBUG"`` or ``"WARNING"``. Unknown names
        fall back to ``INFO``.
    log_file : Path | None, optional
        Optional file that receives a copy of every record.
    """
    for handler in logging.root.handlers[:]:
        logging.root.removeHandler(handler)
    handlers: list[logging.Handler] = [
        RichHandler(console=Console(stderr=True), show_path=False)
    ]
    file_error: OSError | None = None
    if log_file is not None:
        try:
            Path(log_file).parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
            file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
            handlers.append(file_handler)
        except OSError as err:
            file_error = err
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(message)s",
        handlers=handlers,
    )
    if file_error is not None:
        logger.warning(f"Could not open log file {log_file}: {file_error}")


def log_processing_summary(stats: ConversionStats) -> None:
    """Log a one-line summary of a finished run."""
    logger.info(
        "Processing summary: total=%d success=%d skipped=%d failed=%d",
        stats.total,
        stats.success,
        stats.skipped,
        stats.failed,
    )


def parse_arguments(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments for the converter.

    Options left unset are ``None`` so environment variables and defaults
    from :meth:`ConverterConfig.from_env` apply.
    """
    parser = argparse.ArgumentParser(
        prog="slashport",
        description=(
            "Converts Discord.js prefix commands to slash commands using an "
            "OpenAI-compatible chat-completion API."
        ),
        epilog=(
            "examples:\n"
            "  slashport --model gpt-4 --delay 2000\n"
            "  slashport --endpoint https://api.openai.com/v1 --api-key your-key"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("-m", "--model", help="model to use (default: gpt-5)")
    parser.add_argument(
        "-e", "--endpoint", dest="base_url", help="API base URL (default: OpenAI)"
    )
    parser.add_argument(
        "-k", "--api-key", help="API key (or set the OPENAI_API_KEY env var)"
    )
    parser.add_argument(
        "-s",
        "--source",
        dest="source_dir",
        type=Path,
        help="source directory (default: ./commands/PrefixCommands)",
    )
    parser.add_argument(
        "-o",
        "--output",
        dest="output_dir",
        type=Path,
        help="output directory (default: ./commands/SlashCommands)",
    )
    parser.add_argument(
        "-d",
        "--delay",
        dest="delay_ms",
        type=int,
        help="delay between requests in ms (default: 1000)",
    )
    parser.add_argument(
        "-x", "--extension", help="file extension to convert (default: .js)"
    )
    parser.add_argument(
        "--max-size",
        dest="max_content_size",
        type=int,
        help="character budget per file (default: 20000)",
    )
    parser.add_argument(
        "--max-tokens", type=int, help="max output tokens per reply (default: 2000)"
    )
    parser.add_argument(
        "--temperature", type=float, help="sampling temperature (default: 0.3)"
    )
    parser.add_argument(
        "--timeout",
        dest="request_timeout",
        type=int,
        help="request timeout in seconds (default: 300)",
    )
    parser.add_argument(
        "--log-level", default=os.environ.get("LOG_LEVEL", DEFAULT_LOG_LEVEL)
    )
    parser.add_argument("--log-file", type=Path, default=None)
    return parser.parse_args(argv)


_CONFIG_OPTIONS = (
    "model",
    "base_url",
    "api_key",
    "source_dir",
    "output_dir",
    "delay_ms",
    "extension",
    "max_content_size",
    "max_tokens",
    "temperature",
    "request_timeout",
)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the converter CLI and return the process exit status."""
    args = parse_arguments(argv)
    configure_logging(args.log_level, args.log_file)
    ui_rule("Discord Command Converter")

    try:
        cfg = ConverterConfig.from_env(
            **{name: getattr(args, name) for name in _CONFIG_OPTIONS}
        )
        client = CompletionClient(cfg)
    except ConfigurationError as err:
        logger.error(f"Configuration error: {err.message}")
        return EXIT_FATAL
    logger.info(f"Initialized completion client with endpoint: {cfg.base_url}")
    ui_config_table(cfg)

    if not cfg.source_dir.is_dir():
        logger.error(f"Source directory not found: {cfg.source_dir}")
        return EXIT_FATAL
    if not cfg.output_dir.exists():
        cfg.output_dir.mkdir(parents=True, exist_ok=True)
        ui_info(f"Created output directory: {cfg.output_dir}")

    converter = CommandConverter(
        cfg, client, on_progress=lambda i, n, path: ui_progress(i, n, path.name)
    )
    try:
        stats = asyncio.run(converter.process_all_files())
    except KeyboardInterrupt:
        logger.warning("Processing interrupted by user (KeyboardInterrupt).")
        return EXIT_INTERRUPTED

    if stats.total == 0:
        ui_warning(f"No {cfg.extension} files found to convert")
        return EXIT_OK
    log_processing_summary(stats)
    ui_summary(stats)
    return EXIT_OK


__all__ = ["configure_logging", "log_processing_summary", "main", "parse_arguments"]
