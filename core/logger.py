"""Logging utilities for the MathJax to LaTeX converter."""
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler

from core.config import settings

LOG_FILE = settings.log_file


def init_logging() -> None:
    """Initialize logging with console and rotating file handler."""
    LOG_FILE.parent.mkdir(parents=True, exist_ok=True)
    logger.setLevel(settings.log_level)

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )
    # Glyph output contains non-ASCII symbols
    if hasattr(sys.stdout, 'reconfigure'):
        sys.stdout.reconfigure(encoding='utf-8', errors='replace')
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    file_handler = RotatingFileHandler(
        LOG_FILE,
        maxBytes=1_000_000,
        backupCount=3,
        encoding='utf-8',
        errors='replace'
    )
    file_handler.setFormatter(formatter)

    if not logger.handlers:
        logger.addHandler(console_handler)
        logger.addHandler(file_handler)


def truncate_for_log(value: object, limit: int | None = None) -> str:
    """Shorten a debug payload to the configured maximum length."""
    text = str(value)
    limit = settings.max_log_length if limit is None else limit
    if len(text) <= limit:
        return text
    return text[:limit] + "..."


logger = logging.getLogger("mathjax_latex")
