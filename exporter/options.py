"""Export configuration"""

from typing import Optional

from pydantic import BaseModel, Field, field_validator

from config import settings
from core.enums import WidthAdjust
from core.models import CellAnnotation
from core.themes import Theme, get_theme


class ExportOptions(BaseModel):
    """Presentation and framing parameters for one export call"""

    # Headers and styling
    write_headers: bool = True
    export_with_styles: bool = True
    use_alternate_row_styles: bool = True
    theme: Theme = Field(default_factory=lambda: get_theme(settings.DEFAULT_THEME))

    # Text layout
    separator: str = Field(default_factory=lambda: settings.DEFAULT_SEPARATOR)
    delimited_by_length: bool = False
    char_filler: str = Field(default_factory=lambda: settings.DEFAULT_FILLER)
    widths: list[int] = []  # Indexed by original column position

    # Filtering and annotation
    ignored_columns: list[str] = []
    annotations: list[CellAnnotation] = []

    # Spreadsheet layout
    auto_cell_adjust: WidthAdjust = WidthAdjust.BY_HEADERS
    use_default_sheet_names: bool = True

    # Document properties
    author: Optional[str] = Field(default_factory=lambda: settings.DEFAULT_AUTHOR)
    company: Optional[str] = None
    subject: Optional[str] = None
    title: Optional[str] = None

    # Output framing
    encoding: str = Field(default_factory=lambda: settings.TEXT_ENCODING)
    line_terminator: str = Field(default_factory=lambda: settings.LINE_TERMINATOR)

    @field_validator("theme", mode="before")
    @classmethod
    def _resolve_theme(cls, v):
        return get_theme(v)

    @field_validator("char_filler")
    @classmethod
    def _single_char(cls, v: str) -> str:
        if len(v) != 1:
            raise ValueError("char_filler must be exactly one character")
        return v

    def width_for(self, position: int, default: int = 0) -> int:
        """Fixed width for the column at its original position"""
        if position < len(self.widths) and self.widths[position] > 0:
            return self.widths[position]
        return default
