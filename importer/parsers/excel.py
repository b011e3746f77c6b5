"""Excel file parser"""

import logging
from typing import List, Optional

import openpyxl
import pandas as pd

from core.context import RunContext
from core.enums import ImportFormat
from core.exceptions import WorkbookReadError
from core.models import ImportResult, SchemaDescriptor
from core.schema import schema_from_dataframe, table_from_dataframe
from ..options import ImportOptions
from .base import FileParser

logger = logging.getLogger(__name__)


class ExcelParser(FileParser):
    """Parser for Excel files (.xlsx through openpyxl, .xls through xlrd)"""

    ENGINES = {
        "openpyxl": ImportFormat.XLSX,
        "xlrd": ImportFormat.XLS,
    }

    def __init__(self, engine: str = "openpyxl"):
        if engine not in self.ENGINES:
            raise ValueError(f"Unknown Excel engine: {engine}")
        self.engine = engine

    @property
    def supported_formats(self) -> List[ImportFormat]:
        return [self.ENGINES[self.engine]]

    def count_records(self, file_path: str, options: ImportOptions) -> int:
        """Row count of the target sheet, header included; 0 when the sheet is missing"""
        try:
            if self.engine == "openpyxl":
                return self._count_xlsx(file_path, options.sheet_name)
            with pd.ExcelFile(file_path, engine=self.engine) as book:
                sheet = options.sheet_name or book.sheet_names[0]
                if sheet not in book.sheet_names:
                    return 0
                return len(book.parse(sheet, header=None))
        except Exception as e:
            raise WorkbookReadError(f"Failed to open workbook: {e}", file_path) from e

    def _count_xlsx(self, file_path: str, sheet_name: Optional[str]) -> int:
        workbook = openpyxl.load_workbook(file_path, read_only=True, data_only=True)
        try:
            if sheet_name is None:
                sheet = workbook.worksheets[0]
            elif sheet_name in workbook.sheetnames:
                sheet = workbook[sheet_name]
            else:
                return 0
            if sheet.max_row is not None:
                return sheet.max_row
            return sum(1 for _ in sheet.iter_rows(values_only=True))
        finally:
            workbook.close()

    def parse(
        self,
        file_path: str,
        options: ImportOptions,
        schema: Optional[SchemaDescriptor],
        ctx: RunContext
    ) -> ImportResult:
        """Read the whole sheet in one pass and adopt it as the result table"""
        try:
            with pd.ExcelFile(file_path, engine=self.engine) as book:
                sheet = options.sheet_name or book.sheet_names[0]
                if sheet in book.sheet_names:
                    df = book.parse(sheet, header=0 if options.has_header else None)
                else:
                    df = None
        except Exception as e:
            raise WorkbookReadError(f"Failed to read workbook: {e}", file_path) from e

        table = None
        if df is None:
            logger.warning(f"Sheet '{options.sheet_name}' not found in {file_path}")
        else:
            if options.has_header:
                df.columns = [str(c) for c in df.columns]
            else:
                df.columns = [f"Column{i}" for i in range(1, len(df.columns) + 1)]

            inferred = schema_from_dataframe(df, name=sheet)
            schema = schema or inferred
            table = table_from_dataframe(df, name=sheet, schema=inferred, on_row=ctx.advance)

        return ImportResult(
            table=table,
            errors=ctx.errors,
            descriptor=schema,
            source_path=file_path,
            import_type=ctx.fmt,
            total_records=ctx.total
        )
