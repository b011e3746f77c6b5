"""Export engine"""

import io
import logging
from pathlib import Path
from typing import Any, BinaryIO, Callable, Iterable, Optional, Union

from core.context import RunContext
from core.enums import ExportFormat
from core.exceptions import ExportError, JobCancelledError, TabularioError, UnsupportedFormatError
from core.interfaces import TableWriter
from core.jobs import BackgroundRunner, Job
from core.models import Dataset, SchemaField, Table
from core.themes import Theme
from ui.progress import NullListener, ProgressListener
from .options import ExportOptions
from .writers import CSVWriter, HTMLWriter, SpreadsheetWriter, TextWriter

logger = logging.getLogger(__name__)

Destination = Union[str, Path, None]


def as_dataset(data: Union[Dataset, Table]) -> Dataset:
    if isinstance(data, Dataset):
        return data
    if isinstance(data, Table):
        return Dataset.of(data)
    raise TypeError(f"Expected Dataset or Table, got {type(data).__name__}")


class DataExporter:
    """Serializes tables to xlsx, txt, csv or html"""

    def __init__(
        self,
        export_type: Union[ExportFormat, str] = ExportFormat.XLSX,
        listener: Optional[ProgressListener] = None,
        options: Optional[ExportOptions] = None,
        **overrides
    ):
        self.export_type = export_type
        self.listener = listener or NullListener()
        base = options or ExportOptions()
        self.options = ExportOptions.model_validate({**base.model_dump(), **overrides}) if overrides else base
        self.writers: dict[ExportFormat, TableWriter] = {
            ExportFormat.XLSX: SpreadsheetWriter(),
            ExportFormat.TXT: TextWriter(),
            ExportFormat.CSV: CSVWriter(),
            ExportFormat.HTML: HTMLWriter(),
        }
        self._runner = BackgroundRunner("exporter")

    @property
    def current_job(self) -> Optional[Job]:
        return self._runner.current

    def _get_writer(self) -> TableWriter:
        try:
            fmt = ExportFormat(self.export_type)
        except ValueError:
            raise UnsupportedFormatError(self.export_type, "export") from None
        if fmt not in self.writers:
            raise UnsupportedFormatError(fmt, "export")
        return self.writers[fmt]

    def export(
        self,
        data: Union[Dataset, Table],
        destination: Destination = None,
        background: bool = False
    ) -> Union[BinaryIO, Job, None]:
        """
        Export a dataset or a single table.

        Args:
            data: Dataset, or a Table wrapped into a one-table Dataset
            destination: File path; empty or None returns an in-memory stream
            background: Run on the engine's worker thread and return a Job

        Returns:
            BytesIO positioned at 0 (stream mode), None (file mode), or a Job

        Raises:
            UnsupportedFormatError: export_type has no writer
            SchemaError: fixed-width export without widths
            ExportError: writing the output failed
        """
        writer = self._get_writer()
        dataset = as_dataset(data)
        options = self.options.model_copy(deep=True)
        ctx = RunContext(fmt=writer.export_type, total=dataset.record_count, listener=self.listener)
        path = str(destination) if destination else ""

        if background:
            return self._runner.submit(
                self._run,
                ctx.cancel_event,
                description=f"export {writer.export_type.value} -> {path or 'stream'}",
                writer=writer,
                dataset=dataset,
                path=path,
                options=options,
                ctx=ctx
            )
        return self._run(writer, dataset, path, options, ctx)

    def export_to_file(
        self,
        path: Union[str, Path],
        data: Union[Dataset, Table],
        background: bool = False
    ) -> Optional[Job]:
        if not path:
            raise ValueError("A destination path is required")
        return self.export(data, path, background)

    def export_to_stream(
        self,
        data: Union[Dataset, Table],
        background: bool = False
    ) -> Union[BinaryIO, Job]:
        return self.export(data, None, background)

    def export_records(
        self,
        records: Iterable[Any],
        fields: Iterable[SchemaField],
        destination: Destination = None,
        to_row: Optional[Callable[[Any], list[Any]]] = None,
        name: str = "Table1",
        background: bool = False
    ) -> Union[BinaryIO, Job, None]:
        """Export typed objects through to_row() or a mapping function"""
        table = Table.from_records(records, fields, to_row=to_row, name=name)
        return self.export(table, destination, background)

    def shutdown(self, wait: bool = True):
        self._runner.shutdown(wait)

    def _run(
        self,
        writer: TableWriter,
        dataset: Dataset,
        path: str,
        options: ExportOptions,
        ctx: RunContext
    ) -> Optional[BinaryIO]:
        fmt = writer.export_type
        logger.info(f"Exporting {ctx.total:,} records as {fmt.value.upper()} to {path or 'stream'}")
        ctx.start()

        stream = None
        try:
            if path:
                target = Path(path)
                if target.exists():
                    target.unlink()
                with open(target, "wb") as fh:
                    writer.write(dataset, fh, options, ctx)
            else:
                stream = io.BytesIO()
                writer.write(dataset, stream, options, ctx)
                stream.seek(0)
        except JobCancelledError as e:
            self._discard(path)
            logger.warning(f"{fmt.value.upper()} export cancelled: {e}")
            ctx.fail(str(e))
            raise
        except TabularioError as e:
            self._discard(path)
            logger.error(f"{fmt.value.upper()} export failed: {e}")
            ctx.fail(str(e))
            raise
        except Exception as e:
            self._discard(path)
            logger.error(f"{fmt.value.upper()} export failed: {e}")
            ctx.fail(str(e))
            raise ExportError(f"Failed to export {fmt.value.upper()}: {e}", fmt) from e

        logger.info(f"Export complete: {ctx.total:,} records -> {path or 'stream'}")
        ctx.complete(stream, path)
        return stream

    @staticmethod
    def _discard(path: str):
        """Remove a partially written destination"""
        if path:
            Path(path).unlink(missing_ok=True)


def save_to_xlsx(table: Table, path: Union[str, Path], with_styles: bool = True):
    """Write one table to an .xlsx file with the Simple theme"""
    exporter = DataExporter(
        ExportFormat.XLSX,
        theme=Theme.SIMPLE,
        export_with_styles=with_styles,
        use_default_sheet_names=True
    )
    exporter.export_to_file(path, table)
