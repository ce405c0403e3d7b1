"""
Composite-format placeholder utilities.

This module provides functions to:
- Locate positional format items ({0}, {1,-8}, {2:N2}) in text
- Count how many replacement arguments a format string requires

The counting rule is independent of the target language: escaped braces
(``{{`` / ``}}``) are literal text and never start a format item.
"""

from __future__ import annotations

import re
from typing import Iterator

# {index[,alignment][:format]}
_FORMAT_ITEM = re.compile(r"\{(\d+)(?:\s*,\s*-?\d+)?(?::[^{}]*)?\}")


def iter_format_items(text: str) -> Iterator[tuple[int, str]]:
    """
    Yield ``(index, item_text)`` for every format item in *text*.

    Example:
        >>> list(iter_format_items("{0} of {1:N0}, {{2}}"))
        [(0, '{0}'), (1, '{1:N0}')]
    """
    if not text:
        return
    i = 0
    n = len(text)
    while i < n:
        ch = text[i]
        if ch in "{}" and i + 1 < n and text[i + 1] == ch:
            # 转义的 {{ 或 }}
            i += 2
            continue
        if ch == "{":
            m = _FORMAT_ITEM.match(text, i)
            if m:
                yield int(m.group(1)), m.group(0)
                i = m.end()
                continue
        i += 1


def get_replacement_count(text: str) -> int:
    """
    Number of replacement arguments *text* needs when used as a format string.

    This is the highest positional index referenced plus one, so ``"{0} {0}"``
    needs 1 argument and ``"{1}"`` needs 2.

    Args:
        text: Source or target text

    Returns:
        Replacement count (0 when the text has no format items)
    """
    highest = -1
    for index, _ in iter_format_items(text):
        if index > highest:
            highest = index
    return highest + 1
