# utils/__init__.py
"""Utility modules."""
from .config import Config
from .logging_config import setup_logging
from .sanitizers import coerce_number, sanitize_filename, sanitize_text
from .file_helpers import validate_file

__all__ = [
    'Config',
    'setup_logging',
    'coerce_number',
    'sanitize_filename',
    'sanitize_text',
    'validate_file'
]
