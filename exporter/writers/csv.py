"""CSV writer"""

import csv
from typing import TextIO

from config import settings
from core.enums import ExportFormat
from core.models import Dataset
from core.context import RunContext
from ..options import ExportOptions
from .base import TextTableWriter, kept_columns, render_value


class CSVWriter(TextTableWriter):
    """Writer for comma separated output"""

    @property
    def export_type(self) -> ExportFormat:
        return ExportFormat.CSV

    def write_text(self, dataset: Dataset, out: TextIO, options: ExportOptions, ctx: RunContext):
        writer = csv.writer(
            out,
            delimiter=settings.CSV_SEPARATOR,
            quoting=csv.QUOTE_MINIMAL,
            lineterminator=options.line_terminator
        )

        for table in dataset.tables:
            columns = kept_columns(table, options.ignored_columns)

            if options.write_headers:
                writer.writerow([col.display_name for _, col in columns])

            for row in table.rows:
                writer.writerow([render_value(row[i]) for i, _ in columns])
                ctx.advance()
