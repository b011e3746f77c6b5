"""Configuration and environment settings"""

from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    """Application configuration"""

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_DIR: Optional[str] = None  # No log file when unset

    # Text codecs
    TEXT_ENCODING: str = "utf-8"
    LINE_TERMINATOR: str = "\r\n"
    DEFAULT_SEPARATOR: str = "\t"
    DEFAULT_FILLER: str = " "
    CSV_SEPARATOR: str = ","
    DETECT_ENCODING: bool = True  # Sniff text encoding on import when none is given

    # Spreadsheet export
    MAX_CELL_TEXT_LENGTH: int = 32750
    HEADER_ROW_HEIGHT: int = 35
    MAX_COLUMN_WIDTH: int = 100
    DEFAULT_SHEET_NAME: str = "Data"
    DEFAULT_THEME: str = "Default"
    DEFAULT_AUTHOR: str = "Tabulario"

    # Progress
    PROGRESS_EVERY_RECORD_LIMIT: int = 100  # Up to this many records, report every one

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True
        extra = "ignore"


settings = Settings()
