"""Comment block formatting for generated macro files."""

from __future__ import annotations

from typing import List, Optional, Sequence


def format_comments(comments: Optional[Sequence[str]]) -> List[str]:
    """Turn free-form text lines into macro file comment lines.

    Trailing whitespace is stripped, leading whitespace is kept. Blank lines
    stay blank; every other line gets a ``"# "`` prefix, even when it already
    starts with ``#``.
    """
    if not comments:
        return []

    formatted = []
    for comment in comments:
        comment = comment.rstrip()
        if comment:
            formatted.append(f"# {comment}")
        else:
            formatted.append("")
    return formatted
