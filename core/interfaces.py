"""Abstract base classes for Tabulario components"""

from abc import ABC, abstractmethod
from typing import Any, BinaryIO, Optional, Protocol, runtime_checkable


@runtime_checkable
class RowConvertible(Protocol):
    """Object that knows how to render itself as one table row"""

    def to_row(self) -> list[Any]:
        ...


class TableWriter(ABC):
    """Abstract base class for export codecs"""

    @property
    @abstractmethod
    def export_type(self) -> "ExportFormat":
        """Format produced by this writer"""
        pass

    @abstractmethod
    def write(
        self,
        dataset: "Dataset",
        stream: BinaryIO,
        options: "ExportOptions",
        ctx: "RunContext"
    ):
        """Serialize every table of the dataset into the binary stream"""
        pass


class FileParser(ABC):
    """Abstract base class for import codecs"""

    @property
    @abstractmethod
    def supported_formats(self) -> list["ImportFormat"]:
        """Formats this parser can read"""
        pass

    @abstractmethod
    def count_records(self, file_path: str, options: "ImportOptions") -> int:
        """Row-counting pre-pass used to drive progress"""
        pass

    @abstractmethod
    def parse(
        self,
        file_path: str,
        options: "ImportOptions",
        schema: Optional["SchemaDescriptor"],
        ctx: "RunContext"
    ) -> "ImportResult":
        """Read the file into a table, recording per-row errors on ctx"""
        pass
