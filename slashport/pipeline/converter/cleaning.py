"""Content-cleaning transform for oversized source files.

Shrinks file content that exceeds the character budget before it is sent to
the completion service. The reduction is heuristic and lossy: comments and
redundant whitespace are removed with regular expressions, then the text is
hard-truncated if it is still too long. Comment-like text inside string or
template literals is removed as well; the result is not guaranteed to be
valid source code.
"""

from __future__ import annotations

import re

_LINE_COMMENT = re.compile(r"//.*$", re.MULTILINE)
_BLOCK_COMMENT = re.compile(r"/\*[\s\S]*?\*/")
_BLANK_AFTER_LINE = re.compile(r"\n\s*\n")
_NEWLINE_RUN = re.compile(r"\n{3,}")
_EMPTY_LINE = re.compile(r"^\s*\n", re.MULTILINE)


def strip_content(content: str) -> str:
    r"""Remove comments and redundant whitespace from ``content``.

    Applies, in order: strip ``//`` comments, strip ``/* ... */`` comments,
    collapse blank lines, trim every line and drop empty lines. No
    truncation is performed.

    Examples
    --------
    >>> strip_content("a = 1  // set\n\n\n/* note */b = 2\n")
    'a = 1\nb = 2\n'
    """
    stripped = _LINE_COMMENT.sub("", content)
    stripped = _BLOCK_COMMENT.sub("", stripped)
    stripped = _BLANK_AFTER_LINE.sub("\n", stripped)
    stripped = _NEWLINE_RUN.sub("\n\n", stripped)
    stripped = "\n".join(line.strip() for line in stripped.split("\n"))
    return _EMPTY_LINE.sub("", stripped)


def clean_content(content: str, max_size: int) -> str:
    r"""Reduce ``content`` to at most ``max_size`` characters.

    Content already within the budget is returned unchanged. Otherwise
    :func:`strip_content` is applied and the result is truncated to
    ``max_size`` if it is still too long.

    Parameters
    ----------
    content : str
        Raw file content.
    max_size : int
        Character budget.

    Returns
    -------
    str
        Cleaned content; never longer than ``max_size``.

    Examples
    --------
    >>> clean_content("short", 100)
    'short'
    >>> clean_content("a = 1  // set\n\n\n/* note */b = 2\n", 8)
    'a = 1\nb '
    """
    if len(content) <= max_size:
        return content
    cleaned = strip_content(content)
    return cleaned[:max_size] if len(cleaned) > max_size else cleaned
