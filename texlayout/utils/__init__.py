"""Utilities: errors, logging setup, layout constants."""

from .errors import TexLayoutError, format_error_for_user
from .logging_config import setup_logging

__all__ = ["TexLayoutError", "format_error_for_user", "setup_logging"]
