"""
Common utilities shared across retable modules.
"""

from __future__ import annotations

import os


def debug_enabled() -> bool:
    """Check whether RETABLE_DEBUG is set in the environment."""
    return os.environ.get("RETABLE_DEBUG", "0") == "1"


def vlog(msg: str, verbose: bool = False) -> None:
    """
    Log a debug message when verbose mode or RETABLE_DEBUG is enabled.

    Args:
        msg: Message to log
        verbose: Whether verbose mode is enabled
    """
    if verbose or debug_enabled():
        from .logging_config import get_logger
        get_logger().info(msg)


def decode_escapes(raw: str) -> str:
    """
    Decode backslash escapes in a command-line value.

    Accepts bash-style $'\\t' quoting as well as plain '\\t', so that a tab
    delimiter can be passed without relying on the shell.
    """
    if raw.startswith("$'") and raw.endswith("'"):
        body = raw[2:-1]
    else:
        body = raw
    if "\\" not in body or not body.isascii():
        return body
    try:
        return body.encode("ascii").decode("unicode_escape")
    except UnicodeDecodeError:
        # Incomplete escape such as a lone backslash; take the value literally
        return body
