"""CommandConverter: sequential conversion driver.

This module orchestrates the conversion of every source file found under the
configured source directory. For each file it decides whether to skip, clean
or convert, calls the completion service through :class:`CompletionClient`,
sanitizes the reply and writes the mirrored output file. Results are folded
into an immutable :class:`ConversionStats` tally.

Files are processed strictly one at a time in listing order, with a fixed
pause between consecutive files. Per-file failures are logged and counted;
they never abort the batch.

Examples
--------
>>> import asyncio
>>> from slashport.pipeline.converter import (
...     CommandConverter, CompletionClient, ConverterConfig,
... )
>>> cfg = ConverterConfig.from_env(api_key="secret")
>>> converter = CommandConverter(cfg, CompletionClient(cfg))
>>> # stats = asyncio.run(converter.process_all_files())
"""

from __future__ import annotations

import asyncio
import enum
import logging
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Callable

import aiohttp

from slashport.config import SYSTEM_PROMPT, USER_PROMPT_PREFIX
from slashport.exceptions import AppError, ContentTooLargeError, EmptyResponseError

from .cleaning import strip_content
from .client import CompletionClient
from .file_handler import find_source_files, output_path_for, save_converted_file
from .sanitizer import sanitize_response

logger = logging.getLogger(__name__)


class ConversionResult(enum.Enum):
    """Outcome of converting one source file."""

    SUCCESS = "success"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True)
class FileOutcome:
    """Result of one file together with its paths and failure cause."""

    source: Path
    output: Path
    result: ConversionResult
    cause: str | None = None


@dataclass(frozen=True)
class ConversionStats:
    """Immutable run-level tally of conversion results.

    Attributes
    ----------
    success : int
        Files converted and written.
    failed : int
        Files that could not be converted.
    skipped : int
        Files whose output already existed.
    failures : tuple[FileOutcome, ...]
        Outcomes of the failed files, in processing order.
    """

    success: int = 0
    failed: int = 0
    skipped: int = 0
    failures: tuple[FileOutcome, ...] = ()

    @property
    def total(self) -> int:
        return self.success + self.failed + self.skipped

    def record(self, outcome: FileOutcome) -> ConversionStats:
        """Return a new tally including ``outcome``."""
        if outcome.result is ConversionResult.SUCCESS:
            return replace(self, success=self.success + 1)
        if outcome.result is ConversionResult.SKIPPED:
            return replace(self, skipped=self.skipped + 1)
        return replace(
            self, failed=self.failed + 1, failures=self.failures + (outcome,)
        )

    def as_dict(self) -> dict[str, int]:
        return {
            "success": self.success,
            "failed": self.failed,
            "skipped": self.skipped,
            "total": self.total,
        }


ProgressCallback = Callable[[int, int, Path], None]


class CommandConverter:
    """Convert prefix command files into slash command files one by one.

    Parameters
    ----------
    config : Any
        Run configuration (normally a ``ConverterConfig``) supplying the
        source and output directories, extension, content budget and delay.
    client : CompletionClient
        Completion service client owned by this converter for the run.
    on_progress : ProgressCallback | None, optional
        Called as ``on_progress(index, total, path)`` before each file, with a
        1-based index. Used by the CLI for the per-file status line.
    """

    def __init__(
        self,
        config: Any,
        client: CompletionClient,
        on_progress: ProgressCallback | None = None,
    ) -> None:
        self.config = config
        self.client = client
        self.on_progress = on_progress
        self.source_dir = Path(config.source_dir)
        self.output_dir = Path(config.output_dir)

    def build_messages(self, content: str) -> list[dict[str, str]]:
        """Return the two-message prompt for ``content``."""
        return [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": f"{USER_PROMPT_PREFIX}{content}"},
        ]

    def prepare_content(self, source_file: Path, content: str) -> str:
        """Strip comments and whitespace if ``content`` exceeds the budget.

        Oversized content is never truncated: a file whose stripped form is
        still over budget is rejected instead of being sent half converted.

        Raises
        ------
        ContentTooLargeError
            If the cleaned content is still over budget.
        """
        max_size = self.config.max_content_size
        if len(content) <= max_size:
            return content
        logger.warning(
            f"Large file {source_file.name} ({len(content)} chars), cleaning..."
        )
        cleaned = strip_content(content)
        if len(cleaned) > max_size:
            raise ContentTooLargeError(
                f"File still too large ({len(cleaned)} chars)",
                context={"file": str(source_file), "max_size": max_size},
            )
        return cleaned

    async def convert_file(
        self, session: aiohttp.ClientSession, source_file: Path
    ) -> FileOutcome:
        """Convert a single source file and write its mirrored output.

        Never raises for per-file problems: an existing output yields
        ``SKIPPED``; read errors, oversized content, service errors and empty
        replies yield ``FAILED`` with the cause recorded.

        Parameters
        ----------
        session : aiohttp.ClientSession
            Open HTTP session for the completion client.
        source_file : Path
            File under the source directory.

        Returns
        -------
        FileOutcome
            The outcome for this file.
        """
        output_path = output_path_for(source_file, self.source_dir, self.output_dir)
        name = source_file.name

        if output_path.exists():
            logger.warning(f"Skipping {name} (already exists)")
            return FileOutcome(
                source_file, output_path, ConversionResult.SKIPPED, "already exists"
            )

        logger.info(f"Converting {name}")
        try:
            content = self.prepare_content(
                source_file, source_file.read_text(encoding="utf-8")
            )
            reply = await self.client.complete(session, self.build_messages(content))
            converted = sanitize_response(reply)
            if not converted:
                raise EmptyResponseError(
                    "Empty response from API", context={"file": str(source_file)}
                )
            save_converted_file(output_path, converted)
        except FileExistsError:
            logger.warning(f"Skipping {name} (output appeared during conversion)")
            return FileOutcome(
                source_file, output_path, ConversionResult.SKIPPED, "already exists"
            )
        except AppError as error:
            logger.error(f"Failed to convert {name}: {error.message}")
            return FileOutcome(
                source_file, output_path, ConversionResult.FAILED, error.message
            )
        except Exception as error:
            logger.error(f"Failed to convert {name}: {error}", exc_info=True)
            return FileOutcome(
                source_file, output_path, ConversionResult.FAILED, str(error)
            )

        logger.info(f"Converted {name}")
        return FileOutcome(source_file, output_path, ConversionResult.SUCCESS)

    async def process_all_files(self) -> ConversionStats:
        """Convert every source file, pausing between consecutive files.

        Returns
        -------
        ConversionStats
            Tally over all enumerated files; ``total`` equals the number of
            files found.
        """
        source_files = find_source_files(self.source_dir, self.config.extension)
        stats = ConversionStats()
        if not source_files:
            logger.warning(
                f"No {self.config.extension} files found to convert in {self.source_dir}"
            )
            return stats

        logger.info(f"Found {len(source_files)} files to process")
        delay_seconds = self.config.delay_ms / 1000
        total = len(source_files)
        async with aiohttp.ClientSession() as session:
            for index, source_file in enumerate(source_files, start=1):
                if self.on_progress is not None:
                    self.on_progress(index, total, source_file)
                stats = stats.record(await self.convert_file(session, source_file))
                if index < total and delay_seconds > 0:
                    await asyncio.sleep(delay_seconds)
        return stats
