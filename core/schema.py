"""Schema descriptor construction and inference"""

from typing import Any, Callable, Iterable, Optional

import pandas as pd

from .enums import FieldType
from .models import Column, SchemaDescriptor, SchemaField, Table


def build_table(schema: SchemaDescriptor, name: Optional[str] = None) -> Table:
    """Create an empty table with one column per schema field"""
    return Table(
        name=name or schema.name or "Table1",
        columns=[Column.from_field(f) for f in schema.fields]
    )


def schema_from_header(tokens: Iterable[str], name: str = "Table1") -> SchemaDescriptor:
    """One nullable String field per header token"""
    return SchemaDescriptor(
        name=name,
        fields=tuple(SchemaField(name=token) for token in tokens)
    )


def schema_from_table(table: Table) -> SchemaDescriptor:
    """Descriptor mirroring an existing table's columns"""
    return SchemaDescriptor(
        name=table.name,
        fields=tuple(
            SchemaField(
                name=col.name,
                nullable=col.nullable,
                field_type=col.field_type,
                length=col.max_length or col.width
            )
            for col in table.columns
        )
    )


def field_type_for_dtype(dtype) -> FieldType:
    """Map a pandas dtype onto a semantic field type"""
    if pd.api.types.is_bool_dtype(dtype):
        return FieldType.BIT
    if pd.api.types.is_integer_dtype(dtype):
        return FieldType.INTEGER
    if pd.api.types.is_float_dtype(dtype):
        return FieldType.FLOATING_POINT
    if pd.api.types.is_datetime64_any_dtype(dtype):
        return FieldType.DATE
    return FieldType.STRING


def schema_from_dataframe(df: pd.DataFrame, name: str = "Table1") -> SchemaDescriptor:
    """Infer a descriptor from DataFrame column names and dtypes"""
    return SchemaDescriptor(
        name=name,
        fields=tuple(
            SchemaField(name=str(col), field_type=field_type_for_dtype(df[col].dtype))
            for col in df.columns
        )
    )


def to_python_value(value: Any) -> Any:
    """Convert pandas/numpy scalars to plain Python values, missing -> None"""
    if value is None:
        return None
    if pd.api.types.is_scalar(value) and pd.isna(value):
        return None
    if isinstance(value, pd.Timestamp):
        return value.to_pydatetime()
    if hasattr(value, "item") and hasattr(value, "dtype"):
        return value.item()
    return value


def table_from_dataframe(
    df: pd.DataFrame,
    name: str = "Table1",
    schema: Optional[SchemaDescriptor] = None,
    on_row: Optional[Callable[[], None]] = None
) -> Table:
    """
    Adopt a DataFrame as a Table

    Args:
        df: Source frame, columns become table columns in order
        name: Table name
        schema: Descriptor to shape the columns; inferred from dtypes when omitted
        on_row: Called after each row is added

    Returns:
        Table holding the frame's rows as plain Python values
    """
    schema = schema or schema_from_dataframe(df, name)
    table = build_table(schema, name=name)
    # Sheet columns are adopted as-is; nullability is not enforced on them
    for col in table.columns:
        col.nullable = True
        col.max_length = 0
    for i, values in enumerate(df.itertuples(index=False, name=None), 1):
        table.add_row([to_python_value(v) for v in values], row_number=i)
        if on_row is not None:
            on_row()
    return table
