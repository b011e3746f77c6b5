"""Colour palettes shared by the spreadsheet and HTML writers"""

from enum import Enum
from typing import NamedTuple, Union

from .enums import CellStyle


class Theme(str, Enum):
    """Named colour themes"""
    DEFAULT = "Default"
    SIMPLE = "Simple"
    OCEAN = "Ocean"
    FOREST = "Forest"
    SUNSET = "Sunset"
    MONOCHROME = "Monochrome"
    CORPORATE = "Corporate"
    MINT = "Mint"
    LAVENDER = "Lavender"
    AUTUMN = "Autumn"
    STEEL = "Steel"
    CHERRY = "Cherry"
    SKY = "Sky"
    CHARCOAL = "Charcoal"


class Palette(NamedTuple):
    """Colours (6-digit RGB hex) applied to header, rows and alternate rows"""
    header_bg: str
    header_fg: str
    row_fg: str
    alt_bg: str
    border: str
    header_border: str
    header_border_style: str = "medium"
    row_bg: str = "FFFFFF"
    boxed: bool = False  # Borders on all four sides instead of bottom only
    row_border: bool = True


class CellStyleColours(NamedTuple):
    fill: str
    font: str
    bold: bool = False
    boxed: bool = False


PALETTES: dict[Theme, Palette] = {
    Theme.DEFAULT: Palette("000080", "FFFFFF", "000080", "87CEFA", "000000", "000000", "thick", boxed=True),
    Theme.SIMPLE: Palette("FFFFFF", "000000", "000000", "F5F5F5", "808080", "808080", "thick", row_border=False),
    Theme.OCEAN: Palette("003366", "FFFFFF", "003366", "CCE5FF", "0066CC", "0066CC"),
    Theme.FOREST: Palette("22572C", "FFFFFF", "22572C", "DCEDC8", "4C9900", "4C9900"),
    Theme.SUNSET: Palette("E65C00", "FFFFFF", "E65C00", "FFE0B2", "FF8000", "FF8000"),
    Theme.MONOCHROME: Palette("333333", "FFFFFF", "333333", "F5F5F5", "808080", "000000", "thick"),
    Theme.CORPORATE: Palette("4472C4", "FFFFFF", "4472C4", "D9E1F2", "2F5496", "2F5496"),
    Theme.MINT: Palette("00B08A", "FFFFFF", "00B08A", "C6EFCE", "00CC99", "00CC99"),
    Theme.LAVENDER: Palette("7030A0", "FFFFFF", "7030A0", "EADDF4", "8E44AD", "8E44AD"),
    Theme.AUTUMN: Palette("8C5225", "FFFFFF", "8C5225", "F4E0B0", "BF5700", "BF5700"),
    Theme.STEEL: Palette("607D8B", "FFFFFF", "607D8B", "ECEFF1", "455A64", "455A64"),
    Theme.CHERRY: Palette("C00000", "FFFFFF", "C00000", "FFCDD2", "880015", "880015"),
    Theme.SKY: Palette("039BE5", "FFFFFF", "039BE5", "E1F5FE", "0277BD", "0277BD"),
    Theme.CHARCOAL: Palette("263238", "FFFFFF", "263238", "ECEFF1", "000000", "000000"),
}

CELL_STYLE_COLOURS: dict[CellStyle, CellStyleColours] = {
    CellStyle.GOOD: CellStyleColours("98FB98", "006400"),
    CellStyle.BAD: CellStyleColours("F08080", "B22222"),
    CellStyle.NEUTRAL: CellStyleColours("FFFF00", "FF8C00"),
    CellStyle.CALCULATION: CellStyleColours("C0C0C0", "FF8C00"),
    CellStyle.CHECK: CellStyleColours("696969", "FFA500", bold=True, boxed=True),
    CellStyle.ALERT: CellStyleColours("FF0000", "FFFFFF", bold=True, boxed=True),
}


def get_theme(theme: Union[Theme, str]) -> Theme:
    """Resolve a theme from its enum value or case-insensitive name"""
    if isinstance(theme, Theme):
        return theme
    for candidate in Theme:
        if candidate.value.lower() == str(theme).lower() or candidate.name.lower() == str(theme).lower():
            return candidate
    raise ValueError(f"Unknown theme: {theme}")


def get_palette(theme: Union[Theme, str]) -> Palette:
    return PALETTES[get_theme(theme)]
