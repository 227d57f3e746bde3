"""
Display width measurement and per-column width calculation.

Widths are measured in terminal cells with wcwidth, so East Asian wide
characters count as two cells and combining marks as none.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from wcwidth import wcswidth, wcwidth

from .splitter import is_comment_line, split_comment, split_fields

if TYPE_CHECKING:
    from .config import RetableConfig


def display_width(text: str) -> int:
    """Number of terminal cells occupied by text.

    Non-printable characters (for which wcwidth reports -1) count as zero.
    """
    width = wcswidth(text)
    if width >= 0:
        return width
    return sum(max(wcwidth(char), 0) for char in text)


def compute_widths(text: str, config: RetableConfig) -> tuple[int, ...]:
    """Compute the rendered width of every column in text.

    Each entry is the widest field seen at that index on any data line, plus
    the configured inter-column width. Blank and comment-only lines are
    skipped.
    """
    widths: list[int] = []

    for line in text.split("\n"):
        content, comment = split_comment(line, config.comment_token)
        if is_comment_line(content, comment):
            continue

        for index, field in enumerate(split_fields(content, config.column_token)):
            if index >= len(widths):
                widths.append(0)

            field_width = display_width(field)
            if widths[index] < field_width:
                widths[index] = field_width

    return tuple(value + config.width for value in widths)
