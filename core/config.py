"""Configuration management for the MathJax to LaTeX converter."""
from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv


def _get_base_dir() -> Path:
    """Get base directory, handling both development and frozen executables."""
    if getattr(sys, 'frozen', False):
        if sys.platform == 'win32':
            appdata = os.getenv('APPDATA', os.path.expanduser('~'))
            return Path(appdata) / 'MathJaxLatex'
        return Path.home() / '.mathjax_latex'
    # Running as script - use project root
    return Path(__file__).resolve().parents[1]


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


# Load .env from project root before the Settings defaults are evaluated
_env_path = _get_base_dir() / ".env"
if _env_path.exists():
    load_dotenv(_env_path)


@dataclass
class Settings:
    """Application settings."""

    base_dir: Path = _get_base_dir()
    data_dir: Path = base_dir / "data"
    log_file: Path = data_dir / "mathjax_latex.log"
    host: str = os.getenv("MATHJAX_LATEX_HOST", "127.0.0.1")
    port: int = int(os.getenv("MATHJAX_LATEX_PORT", "8000"))
    log_level: str = os.getenv("MATHJAX_LATEX_LOG_LEVEL", "INFO")
    max_log_length: int = int(os.getenv("MATHJAX_LATEX_MAX_LOG_LENGTH", "200"))

    # Conversion behaviour
    cache_enabled: bool = _env_flag("MATHJAX_LATEX_CACHE", "true")
    prefer_assistive_mml: bool = _env_flag("MATHJAX_LATEX_PREFER_ASSISTIVE", "true")

    # Caller-side text cleanup applied to finished LaTeX
    normalize_nbsp: bool = _env_flag("MATHJAX_LATEX_NORMALIZE_NBSP", "true")
    strip_trailing_period: bool = _env_flag("MATHJAX_LATEX_STRIP_PERIOD", "true")


settings = Settings()
