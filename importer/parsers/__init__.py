"""Import codecs"""

from .text import TextParser
from .csv import CSVParser, split_csv_record, iter_csv_records
from .excel import ExcelParser

__all__ = [
    "TextParser",
    "CSVParser",
    "ExcelParser",
    "split_csv_record",
    "iter_csv_records",
]
