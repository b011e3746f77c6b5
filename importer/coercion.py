"""Per-field text to value coercion for text imports"""

from datetime import datetime
from typing import Any, Optional

import pandas as pd

from core.enums import FieldType
from core.models import SchemaField

# Used for non-nullable fields whose text does not parse
FALLBACK_VALUES = {
    FieldType.INTEGER: 0,
    FieldType.FLOATING_POINT: 0.0,
    FieldType.CHARACTER: "-",
    FieldType.DATE: datetime(1900, 1, 1),
    FieldType.BIT: False,
}


def parse_integer(text: str) -> Optional[int]:
    try:
        return int(text)
    except ValueError:
        return None


def parse_float(text: str) -> Optional[float]:
    try:
        return float(text)
    except ValueError:
        return None


def parse_character(text: str) -> Optional[str]:
    return text[0] if text else None


def parse_date(text: str) -> Optional[datetime]:
    if not text:
        return None
    try:
        value = pd.to_datetime(text)
    except (ValueError, TypeError, OverflowError):
        return None
    if pd.isna(value):
        return None
    return value.to_pydatetime()


def parse_bit(text: str) -> Optional[bool]:
    lowered = text.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    return None


PARSERS = {
    FieldType.INTEGER: parse_integer,
    FieldType.FLOATING_POINT: parse_float,
    FieldType.CHARACTER: parse_character,
    FieldType.DATE: parse_date,
    FieldType.BIT: parse_bit,
}


def coerce_value(raw: Optional[str], field: SchemaField) -> Any:
    """
    Convert raw field text to the field's type.

    Strings are returned verbatim. Other types are parsed from the
    whitespace-trimmed text; when parsing fails a non-nullable field gets its
    fallback value and a nullable one stays None. An absent raw value
    (None) is returned as None.
    """
    if raw is None:
        return None
    if field.field_type == FieldType.STRING:
        return raw

    value = PARSERS[field.field_type](raw.strip())
    if value is None and not field.nullable:
        return FALLBACK_VALUES[field.field_type]
    return value


def coerce_row(raw_values: list[Optional[str]], fields: tuple[SchemaField, ...]) -> list[Any]:
    """Coerce each raw value against its field; missing trailing values stay None"""
    values = []
    for i, field in enumerate(fields):
        raw = raw_values[i] if i < len(raw_values) else None
        values.append(coerce_value(raw, field))
    return values
