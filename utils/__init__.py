"""Utility modules"""

from .encoding import detect_encoding
from .logging_setup import setup_logging, ColourFormatter

__all__ = [
    "detect_encoding",
    "setup_logging",
    "ColourFormatter",
]
