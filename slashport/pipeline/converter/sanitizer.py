"""Sanitizing of raw completion replies.

Models frequently wrap code in Markdown fences or prepend a reasoning
section. This module extracts the part of a reply that should be written to
disk.
"""

from __future__ import annotations

import re

_THINK_BLOCK = re.compile(r"<think>[\s\S]*?</think>", re.IGNORECASE)
# Opening fence with an optional language tag on its own line.
_FENCED_BLOCK = re.compile(r"```(?:[\w+#.-]*[ \t]*\r?\n)?([\s\S]*?)```")


def sanitize_response(content: str | None) -> str:
    r"""Extract the converted source from a completion reply.

    Removes ``<think>...</think>`` sections, then keeps only the inner
    content of the first fenced code block if there is one. The result is
    trimmed; an empty string means the reply carried nothing usable.

    Parameters
    ----------
    content : str | None
        Raw reply text as returned by the completion service.

    Returns
    -------
    str
        Sanitized text, possibly empty.

    Examples
    --------
    >>> sanitize_response("  plain text \n")
    'plain text'
    >>> sanitize_response("<think>hmm</think>Here:\n```js\nrun();\n```\nDone.")
    'run();'
    """
    if not content:
        return ""
    content = _THINK_BLOCK.sub("", content)
    match = _FENCED_BLOCK.search(content)
    if match:
        content = match.group(1)
    return content.strip()
