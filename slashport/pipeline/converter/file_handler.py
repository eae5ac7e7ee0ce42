"""File handling utilities for the command converter.

This module knows how to find source files, map them to their mirrored
output location and save converted outputs. It performs only file I/O and
does not contact external services.
"""

from __future__ import annotations

import logging
from pathlib import Path

logger = logging.getLogger(__name__)


def find_source_files(source_dir: Path, extension: str) -> list[Path]:
    """Recursively find files ending with ``extension`` under ``source_dir``.

    Parameters
    ----------
    source_dir : Path
        Root directory to search.
    extension : str
        File name suffix to match, e.g. ``".js"``.

    Returns
    -------
    list[Path]
        Matching regular files. Each directory is visited in sorted name
        order with subdirectories expanded in place; symlinked directories
        are not followed. Empty if ``source_dir`` does not exist.
    """
    root = Path(source_dir)
    if not root.is_dir():
        logger.error(f"Directory not found: {root}")
        return []
    found: list[Path] = []
    _collect(root, extension, found)
    return found


def _collect(directory: Path, extension: str, found: list[Path]) -> None:
    for entry in sorted(directory.iterdir()):
        if entry.is_symlink() and entry.is_dir():
            logger.debug(f"Skipping symlinked directory: {entry}")
        elif entry.is_dir():
            _collect(entry, extension, found)
        elif entry.is_file() and entry.name.endswith(extension):
            found.append(entry)


def output_path_for(source_file: Path, source_dir: Path, output_dir: Path) -> Path:
    """Return the path mirroring ``source_file`` under ``output_dir``."""
    return Path(output_dir) / Path(source_file).relative_to(source_dir)


def save_converted_file(output_path: Path, content: str) -> None:
    """Write converted content to ``output_path`` without overwriting.

    Parent directories are created as needed. The file is opened in
    exclusive-create mode.

    Parameters
    ----------
    output_path : Path
        Destination file path.
    content : str
        Converted text to write.

    Raises
    ------
    FileExistsError
        If ``output_path`` already exists.
    """
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with output_path.open("x", encoding="utf-8") as output_file:
        output_file.write(content)
