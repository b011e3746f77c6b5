"""Import engine"""

import logging
from pathlib import Path
from typing import Optional, Union

from config import settings
from core.context import RunContext
from core.enums import Delimiter, ImportFormat
from core.exceptions import JobCancelledError, UnsupportedFormatError
from core.interfaces import FileParser
from core.jobs import BackgroundRunner, Job
from core.models import ImportIssue, ImportResult, SchemaDescriptor
from ui.progress import NullListener, ProgressListener
from .options import ImportOptions
from .parsers import CSVParser, ExcelParser, TextParser

logger = logging.getLogger(__name__)


class DataImporter:
    """Reads txt, csv, xls and xlsx files into a table plus per-row errors"""

    def __init__(
        self,
        import_type: Union[ImportFormat, str] = ImportFormat.TXT,
        listener: Optional[ProgressListener] = None,
        options: Optional[ImportOptions] = None,
        **overrides
    ):
        self.import_type = import_type
        self.listener = listener or NullListener()
        base = options or ImportOptions()
        self.options = ImportOptions.model_validate({**base.model_dump(), **overrides}) if overrides else base
        self.parsers: dict[ImportFormat, FileParser] = {
            ImportFormat.TXT: TextParser(),
            ImportFormat.CSV: CSVParser(),
            ImportFormat.XLS: ExcelParser("xlrd"),
            ImportFormat.XLSX: ExcelParser("openpyxl"),
        }
        self.errors: list[ImportIssue] = []
        self.result: Optional[ImportResult] = None
        self._runner = BackgroundRunner("importer")

    @property
    def was_clean_execution(self) -> bool:
        """True when the most recent run recorded no row errors"""
        return not self.errors

    @property
    def current_job(self) -> Optional[Job]:
        return self._runner.current

    def _get_parser(self) -> tuple[ImportFormat, FileParser]:
        try:
            fmt = ImportFormat(self.import_type)
        except ValueError:
            raise UnsupportedFormatError(self.import_type, "import") from None
        if fmt not in self.parsers:
            raise UnsupportedFormatError(fmt, "import")
        return fmt, self.parsers[fmt]

    def _run_options(self, fmt: ImportFormat) -> ImportOptions:
        """Options for one run; CSV always splits on a comma"""
        if fmt == ImportFormat.CSV:
            return self.options.model_copy(update={
                "delimiter": Delimiter.SEPARATOR,
                "separator_char": settings.CSV_SEPARATOR,
            })
        return self.options.model_copy()

    def import_from_file(
        self,
        path: Union[str, Path],
        schema: Optional[SchemaDescriptor] = None,
        background: bool = False
    ) -> Union[ImportResult, Job]:
        """
        Import a file.

        Args:
            path: Source file
            schema: Field definitions; inferred from the header line or the
                sheet when omitted (required for fixed-width text)
            background: Run on the engine's worker thread and return a Job

        Returns:
            ImportResult, or a Job whose result() is the ImportResult

        Raises:
            UnsupportedFormatError: import_type has no parser
            SchemaError: fixed-width import without usable field lengths
            WorkbookReadError: spreadsheet could not be opened
        """
        fmt, parser = self._get_parser()
        options = self._run_options(fmt)
        ctx = RunContext(fmt=fmt, listener=self.listener)
        self.errors = ctx.errors

        if background:
            return self._runner.submit(
                self._run,
                ctx.cancel_event,
                description=f"import {fmt.value} <- {path}",
                parser=parser,
                path=str(path),
                options=options,
                schema=schema,
                ctx=ctx
            )
        return self._run(parser, str(path), options, schema, ctx)

    def shutdown(self, wait: bool = True):
        self._runner.shutdown(wait)

    def _run(
        self,
        parser: FileParser,
        path: str,
        options: ImportOptions,
        schema: Optional[SchemaDescriptor],
        ctx: RunContext
    ) -> ImportResult:
        fmt = ctx.fmt
        count = parser.count_records(path, options) if Path(path).is_file() else 0

        if count == 0:
            logger.info(f"Nothing to import from {path}")
            result = ImportResult(
                table=None,
                errors=ctx.errors,
                descriptor=schema,
                source_path=path,
                import_type=fmt,
                total_records=0
            )
            self.result = result
            return result

        ctx.total = count - 1 if options.has_header else count
        logger.info(f"Importing {ctx.total:,} records from {fmt.value.upper()} file {path}")
        ctx.start()

        try:
            result = parser.parse(path, options, schema, ctx)
        except JobCancelledError as e:
            logger.warning(f"{fmt.value.upper()} import cancelled: {e}")
            ctx.fail(str(e))
            raise
        except Exception as e:
            logger.error(f"{fmt.value.upper()} import failed: {e}")
            ctx.fail(str(e))
            raise

        self.result = result
        rows = result.table.row_count if result.table is not None else 0
        logger.info(f"Import complete: {rows:,} rows, {len(ctx.errors)} errors")
        ctx.complete(None, path)
        return result
