"""CSV file parser"""

import csv
import io
from typing import Callable, Iterable, Iterator, List, Optional, TextIO

from config import settings
from core.context import RunContext
from core.enums import ImportFormat
from ..options import ImportOptions
from .base import Record, TextFileParser

UNTERMINATED_QUOTE = "Unterminated quoted value; the line was read on its own"


def split_csv_record(record: str, separator: str = ",") -> list[str]:
    """Raw values of one CSV record, quotes removed and doubled quotes unescaped"""
    reader = csv.reader(io.StringIO(record, newline=""), delimiter=separator)
    return next(reader, [""])


def iter_csv_records(
    lines: Iterable[str],
    on_unterminated: Optional[Callable[[int], None]] = None
) -> Iterator[Record]:
    """
    Join physical lines into records while a quoted value is still open.

    A quote still open at end of file is reported through on_unterminated
    with the line it started on. That line becomes a record by itself and
    the lines after it are scanned again as records of their own.

    Args:
        lines: Lines read with their terminators kept (newline="")
        on_unterminated: Called with the start line of an unclosed quote

    Yields:
        (line number the record starts on, record text without its final terminator)
    """
    pending = enumerate(lines, 1)
    while True:
        buffer = []
        quotes = 0
        for line_number, line in pending:
            buffer.append((line_number, line))
            quotes += line.count('"')
            # Doubled quotes add two, so an odd total means a value is still open
            if quotes % 2 == 0:
                yield buffer[0][0], "".join(text for _, text in buffer).rstrip("\r\n")
                buffer = []
                quotes = 0

        if not buffer:
            return

        start, line = buffer[0]
        if on_unterminated is not None:
            on_unterminated(start)
        yield start, line.rstrip("\r\n")
        pending = iter(buffer[1:])


class CSVParser(TextFileParser):
    """Parser for comma separated files with quoted values"""

    @property
    def supported_formats(self) -> List[ImportFormat]:
        return [ImportFormat.CSV]

    def iter_records(self, fh: TextIO, ctx: RunContext) -> Iterator[Record]:
        return iter_csv_records(fh, lambda line_number: ctx.add_error(UNTERMINATED_QUOTE, line_number))

    def split(self, record: str, options: ImportOptions) -> list[str]:
        return split_csv_record(record, settings.CSV_SEPARATOR)
