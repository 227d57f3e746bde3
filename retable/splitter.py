"""
Splitting lines into fields and trailing comments.
"""

from __future__ import annotations

from typing import Iterator


def split_fields(line: str, column_token: str | None) -> Iterator[str]:
    """Split a line on a literal token, or on runs of whitespace if no token is given.

    With a token, empty fields between consecutive tokens are kept; whitespace
    splitting never yields empty fields.
    """
    if column_token is None:
        return iter(line.split())
    return iter(line.split(column_token))


def split_comment(line: str, comment_token: str | None) -> tuple[str, str]:
    """Split a line into (content, comment) at the first comment token.

    The comment keeps the token itself. Without a token, or when the token does
    not occur, the comment is empty.
    """
    if comment_token is None:
        return line, ""

    index = line.find(comment_token)
    if index == -1:
        return line, ""
    return line[:index], line[index:]


def is_comment_line(content: str, comment: str) -> bool:
    """Check whether a split line is blank or holds nothing but a comment."""
    if not content:
        return True
    return bool(comment) and not content.strip()
