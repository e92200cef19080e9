"""Utilities for playtracks setup and configuration.

Includes:
- Configuration loading with env var substitution
- Service account credential resolution
- Structured logging with secret redaction
"""

from .config_loader import load_yaml_with_env
from .credentials import resolve_credentials
from .logging import StructuredLogger, configure_logging, get_logger, logger

__all__ = [
    "load_yaml_with_env",
    "resolve_credentials",
    "StructuredLogger",
    "configure_logging",
    "get_logger",
    "logger",
]
