"""Spreadsheet (.xlsx) writer"""

import datetime
import logging
import re
from decimal import Decimal
from typing import Any, BinaryIO, Optional

from openpyxl import Workbook
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE
from openpyxl.comments import Comment
from openpyxl.packaging.custom import StringProperty
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from config import settings
from core.context import RunContext
from core.enums import CellStyle, ExportFormat, WIDTH_ADJUST_SAMPLE_ROWS
from core.interfaces import TableWriter
from core.models import CellAnnotation, Dataset, Table
from core.themes import CELL_STYLE_COLOURS, Palette, get_palette
from ..options import ExportOptions
from .base import kept_columns, render_value

logger = logging.getLogger(__name__)

_NATIVE_TYPES = (bool, int, float, Decimal, datetime.datetime, datetime.date, datetime.time)
_INVALID_SHEET_CHARS = re.compile(r"[\\/*?:\[\]]")
_MAX_SHEET_NAME = 31


def _border(side: Side, boxed: bool) -> Border:
    if boxed:
        return Border(left=side, right=side, top=side, bottom=side)
    return Border(bottom=side)


class SheetStyles:
    """openpyxl style objects for one palette, built once per sheet"""

    def __init__(self, palette: Palette):
        self.header_font = Font(bold=True, size=12, color=palette.header_fg)
        self.header_fill = PatternFill(fill_type="solid", fgColor=palette.header_bg)
        self.header_alignment = Alignment(horizontal="center", vertical="center", wrap_text=True)
        self.header_border = _border(
            Side(style=palette.header_border_style, color=palette.header_border),
            palette.boxed
        )

        self.row_font = Font(size=10, color=palette.row_fg)
        self.row_fill = PatternFill(fill_type="solid", fgColor=palette.row_bg)
        self.alt_fill = PatternFill(fill_type="solid", fgColor=palette.alt_bg)
        self.row_alignment = Alignment(horizontal="left")
        if palette.row_border:
            self.row_border = _border(Side(style="thin", color=palette.border), palette.boxed)
        else:
            self.row_border = Border()

        self.plain_font = Font(size=10, color="000000")
        self.plain_fill = PatternFill(fill_type="solid", fgColor="FFFFFF")

    def header(self, cell):
        cell.font = self.header_font
        cell.fill = self.header_fill
        cell.alignment = self.header_alignment
        cell.border = self.header_border

    def row(self, cell, alternate: bool = False):
        cell.font = self.row_font
        cell.fill = self.alt_fill if alternate else self.row_fill
        cell.alignment = self.row_alignment
        cell.border = self.row_border

    def plain(self, cell):
        cell.font = self.plain_font
        cell.fill = self.plain_fill
        cell.alignment = self.row_alignment


_ANNOTATION_SIDE = Side(style="thick", color="000000")


def apply_cell_style(cell, style: CellStyle):
    """Override a cell's base style with an annotation style; NONE leaves it as is"""
    colours = CELL_STYLE_COLOURS.get(style)
    if colours is None:
        return
    cell.fill = PatternFill(fill_type="solid", fgColor=colours.fill)
    cell.font = Font(size=cell.font.size, bold=colours.bold, color=colours.font)
    if colours.boxed:
        cell.border = _border(_ANNOTATION_SIDE, True)


def cell_value(value: Any, max_length: int) -> Any:
    """
    Value to store in a cell

    Native numbers, booleans and dates are kept. Everything else is written
    as text: empty renders become blank cells, text starting with "=" becomes
    a formula, and other text has XML-illegal characters removed and is cut
    to max_length.
    """
    if value is None:
        return None
    if isinstance(value, _NATIVE_TYPES):
        if isinstance(value, (datetime.datetime, datetime.time)) and value.tzinfo is not None:
            return value.replace(tzinfo=None)
        return value

    text = ILLEGAL_CHARACTERS_RE.sub("", render_value(value))
    if not text:
        return None
    if text.startswith("="):
        return text
    return text[:max_length]


def write_literal(cell, text: str, max_length: int):
    """Store text as a plain string so a leading "=" is not read as a formula"""
    text = ILLEGAL_CHARACTERS_RE.sub("", text)[:max_length]
    if text:
        cell.value = text
        cell.data_type = "s"


def sheet_title(table: Table, index: int, options: ExportOptions) -> str:
    """Default "Data", "Data 1", ... sequence, or the table's own name"""
    if options.use_default_sheet_names:
        base = settings.DEFAULT_SHEET_NAME
        return base if index == 0 else f"{base} {index}"
    title = _INVALID_SHEET_CHARS.sub("_", table.name).strip("'")
    return title[:_MAX_SHEET_NAME] or f"{settings.DEFAULT_SHEET_NAME} {index}"


def _display_length(value: Any) -> int:
    text = render_value(value)
    return max((len(line) for line in text.splitlines()), default=0)


class ColumnSizer:
    """Tracks rendered widths and fits column dimensions once"""

    def __init__(self, sheet: Worksheet, column_count: int, sample_rows: Optional[int]):
        self.sheet = sheet
        self.lengths = [0] * column_count
        self.sample_rows = sample_rows  # None = all rows, -1 = never
        self.done = sample_rows == -1

    def observe(self, position: int, value: Any):
        if not self.done:
            length = _display_length(value)
            if length > self.lengths[position]:
                self.lengths[position] = length

    def after_header(self):
        if self.sample_rows == 0:
            self.fit()

    def after_row(self, rows_written: int):
        if self.sample_rows and rows_written >= self.sample_rows:
            self.fit()

    def finish(self):
        self.fit()

    def fit(self):
        if self.done:
            return
        self.done = True
        for i, length in enumerate(self.lengths, 1):
            if length > 0:
                width = min(length + 2, settings.MAX_COLUMN_WIDTH)
                self.sheet.column_dimensions[get_column_letter(i)].width = width


class SpreadsheetWriter(TableWriter):
    """Writer for .xlsx workbooks, one worksheet per table"""

    @property
    def export_type(self) -> ExportFormat:
        return ExportFormat.XLSX

    def write(self, dataset: Dataset, stream: BinaryIO, options: ExportOptions, ctx: RunContext):
        book = Workbook()
        book.remove(book.active)
        self._set_properties(book, options)

        for index, table in enumerate(dataset.tables):
            self._write_sheet(book, table, index, options, ctx)

        if not book.worksheets:
            book.create_sheet(settings.DEFAULT_SHEET_NAME)

        book.save(stream)

    def _set_properties(self, book: Workbook, options: ExportOptions):
        if options.author:
            book.properties.creator = options.author
        if options.title:
            book.properties.title = options.title
        if options.subject:
            book.properties.subject = options.subject
        if options.company:
            book.custom_doc_props.append(StringProperty(name="Company", value=options.company))

    def _write_sheet(
        self,
        book: Workbook,
        table: Table,
        index: int,
        options: ExportOptions,
        ctx: RunContext
    ):
        sheet = book.create_sheet(sheet_title(table, index, options))
        columns = kept_columns(table, options.ignored_columns)
        styles = SheetStyles(get_palette(options.theme))
        sizer = ColumnSizer(sheet, len(columns), WIDTH_ADJUST_SAMPLE_ROWS[options.auto_cell_adjust])
        annotations = self._annotations_for(table, options.annotations)
        max_length = settings.MAX_CELL_TEXT_LENGTH
        comment_author = options.author or "Tabulario"

        logger.debug(f"Sheet '{sheet.title}': {table.row_count} rows, {len(columns)} columns")

        sheet_row = 1
        if options.write_headers:
            sheet.row_dimensions[1].height = settings.HEADER_ROW_HEIGHT
            for position, (_, col) in enumerate(columns):
                cell = sheet.cell(row=1, column=position + 1)
                write_literal(cell, col.display_name, max_length)
                if options.export_with_styles:
                    styles.header(cell)
                else:
                    styles.plain(cell)
                sizer.observe(position, col.display_name)
            sheet_row = 2
        sizer.after_header()

        for row_index, row in enumerate(table.rows):
            alternate = options.use_alternate_row_styles and row_index % 2 == 0
            for position, (source, _) in enumerate(columns):
                value = row[source]
                cell = sheet.cell(row=sheet_row, column=position + 1, value=cell_value(value, max_length))
                if options.export_with_styles:
                    styles.row(cell, alternate)
                else:
                    styles.plain(cell)

                annotation = annotations.get((sheet_row, position + 1))
                if annotation is not None:
                    apply_cell_style(cell, annotation.style)
                    if annotation.comment:
                        cell.comment = Comment(annotation.comment, comment_author)

                sizer.observe(position, value)

            sheet_row += 1
            sizer.after_row(row_index + 1)
            ctx.advance()

        sizer.finish()

    def _annotations_for(
        self,
        table: Table,
        annotations: list[CellAnnotation]
    ) -> dict[tuple[int, int], CellAnnotation]:
        matched = {}
        for annotation in annotations:
            if annotation.table_name is None or annotation.table_name == table.name:
                matched.setdefault((annotation.row, annotation.col), annotation)
        return matched
