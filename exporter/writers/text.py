"""Delimited and fixed-width text writer"""

import logging
from typing import TextIO

from core.enums import ExportFormat
from core.exceptions import SchemaError
from core.models import Column, Dataset, Table
from core.context import RunContext
from ..options import ExportOptions
from .base import TextTableWriter, kept_columns, render_value

logger = logging.getLogger(__name__)


def pad_field(text: str, width: int, filler: str) -> str:
    """Right-pad with filler, cutting longer text, so the result is exactly width chars"""
    return text[:width].ljust(width, filler)


def resolve_widths(table: Table, columns: list[tuple[int, Column]], options: ExportOptions) -> list[int]:
    """
    Fixed width of every kept column

    Raises:
        SchemaError: a kept column has no width in options.widths or on the column
    """
    widths = []
    for position, col in columns:
        width = options.width_for(position, col.width)
        if width <= 0:
            raise SchemaError(
                f"Column '{col.name}' of table '{table.name}' has no fixed width"
            )
        widths.append(width)
    return widths


class TextWriter(TextTableWriter):
    """Writer for .txt output, delimited or fixed-width"""

    @property
    def export_type(self) -> ExportFormat:
        return ExportFormat.TXT

    def write_text(self, dataset: Dataset, out: TextIO, options: ExportOptions, ctx: RunContext):
        for table in dataset.tables:
            if options.delimited_by_length:
                self._write_fixed_width(table, out, options, ctx)
            else:
                self._write_delimited(table, out, options, ctx)

    def _write_delimited(self, table: Table, out: TextIO, options: ExportOptions, ctx: RunContext):
        columns = kept_columns(table, options.ignored_columns)
        sep = options.separator
        eol = options.line_terminator

        if options.write_headers:
            out.write(sep.join(col.display_name for _, col in columns) + eol)

        for row in table.rows:
            out.write(sep.join(render_value(row[i]) for i, _ in columns) + eol)
            ctx.advance()

    def _write_fixed_width(self, table: Table, out: TextIO, options: ExportOptions, ctx: RunContext):
        columns = kept_columns(table, options.ignored_columns)
        widths = resolve_widths(table, columns, options)
        filler = options.char_filler
        eol = options.line_terminator

        logger.debug(f"Fixed-width layout for '{table.name}': {widths}")

        if options.write_headers:
            out.write("".join(
                pad_field(col.name, width, filler)
                for (_, col), width in zip(columns, widths)
            ) + eol)

        for row in table.rows:
            out.write("".join(
                pad_field(render_value(row[i]), width, filler)
                for (i, _), width in zip(columns, widths)
            ) + eol)
            ctx.advance()
