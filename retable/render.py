"""
Rendering aligned tables.

retable() makes two passes over the text: one to compute column widths and
one to write every line padded to those widths. Rows are ragged: the last
field of a line is only padded when a comment follows it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterator, TextIO

from .logging_config import get_logger
from .splitter import is_comment_line, split_comment, split_fields
from .width import compute_widths, display_width

if TYPE_CHECKING:
    from .config import RetableConfig


def render_line(line: str, config: RetableConfig, widths: tuple[int, ...]) -> str:
    """Render a single line against a precomputed width table.

    Args:
        line: Input line without its newline
        config: Resolved configuration
        widths: Column widths from compute_widths()

    Returns:
        The rendered line, without a newline
    """
    content, comment = split_comment(line, config.comment_token)
    if is_comment_line(content, comment):
        return comment

    parts: list[str] = []
    mark = 0
    for index, field in enumerate(split_fields(content, config.column_token)):
        parts.append(field)
        mark = len(parts)
        parts.append(config.padding * (widths[index] - display_width(field)))

    if not comment:
        # Drop the padding after the last field
        return "".join(parts[:mark])
    return "".join(parts) + comment


def render_lines(text: str, config: RetableConfig, widths: tuple[int, ...]) -> Iterator[str]:
    """Yield the rendered form of every newline-separated line in text."""
    for line in text.split("\n"):
        yield render_line(line, config, widths)


def retable(text: str, config: RetableConfig, out: TextIO) -> bool:
    """
    Re-format text into aligned columns, writing the result to out.

    Lines are joined with newlines exactly as in the input, so the line count
    and the presence of a final newline are preserved. Output is flushed after
    every line.

    Args:
        text: Complete input text
        config: Resolved configuration
        out: Writable text stream

    Returns:
        True if all output was written, False if the reader closed the pipe
        early.

    Raises:
        OSError: On any write failure other than a broken pipe
    """
    logger = get_logger()

    if not text:
        logger.debug("Empty input, nothing to do")
        return True

    widths = compute_widths(text, config)
    logger.debug(f"Column widths: {list(widths)}")

    last = text.count("\n")
    try:
        for number, line in enumerate(render_lines(text, config, widths)):
            out.write(line + "\n" if number < last else line)
            out.flush()
    except BrokenPipeError:
        logger.debug("Output closed by reader, stopping")
        return False

    return True
