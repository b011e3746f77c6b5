"""Delimited and fixed-width text parser"""

from typing import List

from core.enums import ImportFormat
from ..options import ImportOptions
from .base import TextFileParser


class TextParser(TextFileParser):
    """Parser for .txt files split on a tab/separator or by field length"""

    @property
    def supported_formats(self) -> List[ImportFormat]:
        return [ImportFormat.TXT]

    def split(self, record: str, options: ImportOptions) -> list[str]:
        return record.split(options.field_separator)
