"""Import engine: txt, csv, xls and xlsx files into tables"""

from .engine import DataImporter
from .options import ImportOptions
from .coercion import coerce_value, FALLBACK_VALUES

__all__ = [
    "DataImporter",
    "ImportOptions",
    "coerce_value",
    "FALLBACK_VALUES",
]
