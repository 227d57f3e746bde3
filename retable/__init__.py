"""
retable - re-format delimited text into aligned columns.

Core Modules:
- Splitting: fields and trailing comments of a line
- Widths: Unicode display width and per-column widths
- Rendering: padded, ragged-right output
- Foundation: configuration, input sources, logging
"""

__version__ = "0.1.0"

from .splitter import split_fields, split_comment, is_comment_line
from .width import display_width, compute_widths
from .render import render_line, render_lines, retable
from .config import (
    DEFAULT_COMMENT_TOKEN,
    RetableConfig,
    ConfigDefaults,
    ConfigError,
    load_config,
    load_config_file,
)
from .sources import SourceError, read_sources
from .logging_config import setup_logging, get_logger

__all__ = [
    "__version__",
    # Splitting
    "split_fields",
    "split_comment",
    "is_comment_line",
    # Widths
    "display_width",
    "compute_widths",
    # Rendering
    "render_line",
    "render_lines",
    "retable",
    # Foundation
    "DEFAULT_COMMENT_TOKEN",
    "RetableConfig",
    "ConfigDefaults",
    "ConfigError",
    "load_config",
    "load_config_file",
    "SourceError",
    "read_sources",
    "setup_logging",
    "get_logger",
]
