"""Export engine: tables to xlsx, txt, csv and html"""

from .engine import DataExporter, save_to_xlsx
from .options import ExportOptions

__all__ = [
    "DataExporter",
    "ExportOptions",
    "save_to_xlsx",
]
