"""Shared helpers for export writers"""

import io
from abc import abstractmethod
from typing import Any, BinaryIO, Iterable, TextIO

from core.interfaces import TableWriter
from core.models import Column, Dataset, Table
from core.context import RunContext
from ..options import ExportOptions


def is_ignored(column: Column, ignored: Iterable[str]) -> bool:
    """True when the column's display name or name is in the ignore list"""
    names = {column.display_name.lower(), column.name.lower()}
    return any(name.lower() in names for name in ignored)


def kept_columns(table: Table, ignored: Iterable[str]) -> list[tuple[int, Column]]:
    """
    Columns that survive the ignore list

    Returns:
        (original position, column) pairs in table order; output positions
        are the indexes into this list
    """
    ignored = list(ignored or [])
    return [
        (i, col) for i, col in enumerate(table.columns)
        if not is_ignored(col, ignored)
    ]


def render_value(value: Any) -> str:
    """Text rendering of one cell, absent values render empty"""
    if value is None:
        return ""
    return str(value)


class TextTableWriter(TableWriter):
    """Base for writers that emit encoded text lines"""

    def write(self, dataset: Dataset, stream: BinaryIO, options: ExportOptions, ctx: RunContext):
        text = io.TextIOWrapper(stream, encoding=options.encoding, newline="")
        try:
            self.write_text(dataset, text, options, ctx)
            text.flush()
        finally:
            # Leave the caller's stream open
            text.detach()

    @abstractmethod
    def write_text(self, dataset: Dataset, out: TextIO, options: ExportOptions, ctx: RunContext):
        pass
