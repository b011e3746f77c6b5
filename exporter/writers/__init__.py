"""Export codecs"""

from .base import is_ignored, kept_columns, render_value
from .spreadsheet import SpreadsheetWriter
from .text import TextWriter
from .csv import CSVWriter
from .html import HTMLWriter

__all__ = [
    "SpreadsheetWriter",
    "TextWriter",
    "CSVWriter",
    "HTMLWriter",
    "is_ignored",
    "kept_columns",
    "render_value",
]
