"""Import configuration"""

from typing import Optional

from pydantic import BaseModel, Field, field_validator

from config import settings
from core.enums import Delimiter


class ImportOptions(BaseModel):
    """Framing parameters for one import call"""
    has_header: bool = True
    delimiter: Delimiter = Delimiter.TAB
    separator_char: str = Field(default_factory=lambda: settings.CSV_SEPARATOR)
    filler_char: str = Field(default_factory=lambda: settings.DEFAULT_FILLER)
    sheet_name: Optional[str] = None  # None = first sheet
    encoding: Optional[str] = None  # None = detect or settings.TEXT_ENCODING

    @field_validator("separator_char", "filler_char")
    @classmethod
    def _single_char(cls, v: str) -> str:
        if len(v) != 1:
            raise ValueError("must be exactly one character")
        return v

    @property
    def field_separator(self) -> str:
        """Character that splits delimited lines"""
        return "\t" if self.delimiter == Delimiter.TAB else self.separator_char

    @property
    def fixed_width(self) -> bool:
        return self.delimiter == Delimiter.LENGTH
