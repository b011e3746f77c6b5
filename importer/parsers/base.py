"""Base classes for import parsers"""

import logging
from abc import abstractmethod
from pathlib import Path
from typing import Iterator, Optional, TextIO

from config import settings
from core.context import RunContext
from core.exceptions import SchemaError
from core.interfaces import FileParser as IFileParser
from core.models import ImportResult, SchemaDescriptor, SchemaField, Table
from core.schema import build_table, schema_from_header
from utils.encoding import detect_encoding
from ..coercion import coerce_row
from ..options import ImportOptions

logger = logging.getLogger(__name__)

# (1-based physical line number where the record starts, record text)
Record = tuple[int, str]


class FileParser(IFileParser):
    """Abstract base class for import parsers"""

    @abstractmethod
    def parse(
        self,
        file_path: str,
        options: ImportOptions,
        schema: Optional[SchemaDescriptor],
        ctx: RunContext
    ) -> ImportResult:
        pass


class TextFileParser(FileParser):
    """
    Shared line handling for text sources.

    Subclasses decide how a record is split into raw field values.
    """

    def detect_encoding(self, file_path: str, options: ImportOptions) -> str:
        """Explicit encoding, sniffed encoding, or the configured default"""
        if options.encoding:
            return options.encoding
        if settings.DETECT_ENCODING:
            return detect_encoding(Path(file_path), default=settings.TEXT_ENCODING)
        return settings.TEXT_ENCODING

    def count_records(self, file_path: str, options: ImportOptions) -> int:
        """Physical line count, header included"""
        count = 0
        last = b""
        with open(file_path, "rb") as f:
            for line in f:
                count += 1
                last = line
        # A file of only line breaks holds nothing to import
        if count == 1 and not last.strip():
            return 0
        return count

    def iter_records(self, fh: TextIO, ctx: RunContext) -> Iterator[Record]:
        """One record per physical line, line terminator removed"""
        for line_number, line in enumerate(fh, 1):
            yield line_number, line.rstrip("\r\n")

    @abstractmethod
    def split(self, record: str, options: ImportOptions) -> list[str]:
        """Raw field values of one delimited record"""
        pass

    def infer_schema(self, first: Record, options: ImportOptions) -> SchemaDescriptor:
        """Schema from the header record, or Column1..N when there is no header"""
        tokens = self.split(first[1], options)
        if not options.has_header:
            tokens = [f"Column{i}" for i in range(1, len(tokens) + 1)]
        return schema_from_header(tokens, name="Table1")

    def parse(
        self,
        file_path: str,
        options: ImportOptions,
        schema: Optional[SchemaDescriptor],
        ctx: RunContext
    ) -> ImportResult:
        if options.fixed_width:
            self.validate_fixed_width(schema)

        encoding = self.detect_encoding(file_path, options)
        logger.debug(f"Reading {file_path} as {encoding}")

        table = None
        with open(file_path, "r", encoding=encoding, errors="replace", newline="") as fh:
            records = self.iter_records(fh, ctx)
            if options.fixed_width:
                records = (r for r in records if r[1] != "")
            # Blank lines ahead of the first record carry no header or shape
            first = next((r for r in records if r[1] != ""), None)

            if first is not None:
                if schema is None:
                    schema = self.infer_schema(first, options)
                table = build_table(schema, name=schema.name or "Table1")

                if not options.has_header:
                    self._import_record(first, table, schema, options, ctx)
                for record in records:
                    self._import_record(record, table, schema, options, ctx)

        return ImportResult(
            table=table,
            errors=ctx.errors,
            descriptor=schema,
            source_path=file_path,
            import_type=ctx.fmt,
            total_records=ctx.total
        )

    def _import_record(
        self,
        record: Record,
        table: Table,
        schema: SchemaDescriptor,
        options: ImportOptions,
        ctx: RunContext
    ):
        line_number, text = record
        try:
            if options.fixed_width:
                raw_values = self.slice_fixed_width(record, schema.fields, options, ctx)
            else:
                raw_values = self.split(text, options)
            table.add_row(coerce_row(raw_values, schema.fields), row_number=line_number)
        except Exception as e:
            ctx.add_error(str(e), line_number)
        ctx.advance()

    @staticmethod
    def validate_fixed_width(schema: Optional[SchemaDescriptor]):
        """
        Raises:
            SchemaError: no schema, or a field without a length
        """
        if schema is None or not schema.fields:
            raise SchemaError("Fixed-width import requires a schema with field lengths")
        missing = [f.name for f in schema.fields if f.length <= 0]
        if missing:
            raise SchemaError(f"Fixed-width fields without a length: {', '.join(missing)}")

    @staticmethod
    def slice_fixed_width(
        record: Record,
        fields: tuple[SchemaField, ...],
        options: ImportOptions,
        ctx: RunContext
    ) -> list[Optional[str]]:
        """
        Cut a line into consecutive slices of each field's length.

        A slice running past the end of the line is recorded as an error
        and its value left as None; the other fields are still returned.
        """
        line_number, line = record
        filler = options.filler_char
        values: list[Optional[str]] = []
        position = 0
        for field in fields:
            end = position + field.length
            if end > len(line):
                ctx.add_error(
                    f"Field '{field.name}' expects characters {position + 1}-{end} "
                    f"but the line has {len(line)}",
                    line_number
                )
                values.append(None)
            else:
                values.append(line[position:end].strip(filler))
            position = end
        return values
