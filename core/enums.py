"""Core enumerations for Tabulario"""

from enum import Enum


class ExportFormat(str, Enum):
    """Supported export targets"""
    XLSX = "xlsx"
    TXT = "txt"
    CSV = "csv"
    HTML = "html"


class ImportFormat(str, Enum):
    """Supported import sources"""
    TXT = "txt"
    CSV = "csv"
    XLS = "xls"
    XLSX = "xlsx"


class Delimiter(str, Enum):
    """How fields are separated in a text source"""
    TAB = "tab"
    SEPARATOR = "separator"
    LENGTH = "length"


class FieldType(str, Enum):
    """Semantic type of a field"""
    INTEGER = "integer"
    FLOATING_POINT = "floating_point"
    CHARACTER = "character"
    STRING = "string"
    DATE = "date"
    BIT = "bit"


class CellStyle(str, Enum):
    """Semantic style for an annotated spreadsheet cell"""
    GOOD = "good"
    BAD = "bad"
    NEUTRAL = "neutral"
    CALCULATION = "calculation"
    CHECK = "check"
    ALERT = "alert"
    NONE = "none"


class WidthAdjust(str, Enum):
    """When spreadsheet column widths are fitted to their contents"""
    BY_HEADERS = "by_headers"
    BY_FIRST_10_ROWS = "by_first_10_rows"
    BY_FIRST_100_ROWS = "by_first_100_rows"
    BY_ALL_ROWS = "by_all_rows"
    NONE = "none"


class JobStatus(str, Enum):
    """Background job status"""
    QUEUED = "queued"
    RUNNING = "running"
    SUCCESS = "success"
    FAILED = "failed"
    CANCELLED = "cancelled"


# Number of data rows sampled before auto-sizing; -1 never sizes during the pass.
WIDTH_ADJUST_SAMPLE_ROWS = {
    WidthAdjust.BY_HEADERS: 0,
    WidthAdjust.BY_FIRST_10_ROWS: 10,
    WidthAdjust.BY_FIRST_100_ROWS: 100,
    WidthAdjust.BY_ALL_ROWS: None,
    WidthAdjust.NONE: -1,
}
