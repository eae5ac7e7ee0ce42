"""The converter package turns prefix command files into slash command files.

This package is the processing layer of the tool. It encapsulates the
immutable run configuration, the asynchronous completion client, the
content-cleaning and response-sanitizing transforms, file handling and the
sequential conversion driver. Its public API is used by the CLI and the test
suite.

Modules exported
----------------
CompletionClient
    Asynchronous client for the OpenAI-compatible chat-completion API.
ConverterConfig
    Immutable run configuration built from ``.env``, environment and flags.
CommandConverter
    Sequential driver converting every source file.
ConversionResult, ConversionStats, FileOutcome
    Per-file results and the run-level tally.
clean_content, strip_content, sanitize_response
    Pure text transforms applied before and after the service call.
find_source_files, output_path_for, save_converted_file
    File system helpers.

Examples
--------
>>> from slashport.pipeline.converter import (
...     CommandConverter, CompletionClient, ConverterConfig,
... )
>>> cfg = ConverterConfig.from_env(api_key="...")
>>> converter = CommandConverter(cfg, CompletionClient(cfg))
>>> # stats = asyncio.run(converter.process_all_files())
"""

from __future__ import annotations

from .cleaning import clean_content, strip_content
from .client import CompletionClient
from .config import ConverterConfig
from .file_handler import find_source_files, output_path_for, save_converted_file
from .processor import (
    CommandConverter,
    ConversionResult,
    ConversionStats,
    FileOutcome,
)
from .sanitizer import sanitize_response

__all__ = [
    "CommandConverter",
    "CompletionClient",
    "ConversionResult",
    "ConversionStats",
    "ConverterConfig",
    "FileOutcome",
    "clean_content",
    "find_source_files",
    "output_path_for",
    "sanitize_response",
    "save_converted_file",
    "strip_content",
]
