"""Core abstractions for Tabulario"""

from .models import *
from .enums import *
from .exceptions import *
from .interfaces import *
from .themes import Theme, Palette, PALETTES, CELL_STYLE_COLOURS, get_palette, get_theme

__all__ = [
    # Models
    "SchemaField",
    "SchemaDescriptor",
    "Column",
    "Table",
    "Dataset",
    "CellAnnotation",
    "ImportIssue",
    "ImportResult",
    # Enums
    "ExportFormat",
    "ImportFormat",
    "Delimiter",
    "FieldType",
    "CellStyle",
    "WidthAdjust",
    "JobStatus",
    # Exceptions
    "TabularioError",
    "UnsupportedFormatError",
    "SchemaError",
    "RowConstraintError",
    "WorkbookReadError",
    "ExportError",
    "JobCancelledError",
    # Interfaces
    "RowConvertible",
    "TableWriter",
    "FileParser",
    # Themes
    "Theme",
    "Palette",
    "PALETTES",
    "CELL_STYLE_COLOURS",
    "get_palette",
    "get_theme",
]
