"""Core data models for Tabulario"""

from typing import Any, Callable, Iterable, Optional

import pandas as pd
from pydantic import BaseModel, ConfigDict

from .enums import CellStyle, FieldType, ImportFormat
from .exceptions import RowConstraintError


# ─────────────────────────────────────────────────────────────
# Schema descriptor
# ─────────────────────────────────────────────────────────────

class SchemaField(BaseModel):
    """Declarative definition of one column"""
    model_config = ConfigDict(frozen=True)

    name: str = "NoName"
    nullable: bool = True
    field_type: FieldType = FieldType.STRING
    length: int = 0  # Fixed-width slice length / bounded string length


class SchemaDescriptor(BaseModel):
    """Ordered field definitions; immutable once an import run starts"""
    model_config = ConfigDict(frozen=True)

    name: str = ""
    fields: tuple[SchemaField, ...] = ()

    @property
    def field_names(self) -> list[str]:
        return [f.name for f in self.fields]

    def __len__(self) -> int:
        return len(self.fields)


# ─────────────────────────────────────────────────────────────
# Tabular data model
# ─────────────────────────────────────────────────────────────

class Column(BaseModel):
    """Typed column of a table"""
    name: str
    caption: Optional[str] = None
    field_type: FieldType = FieldType.STRING
    nullable: bool = True
    max_length: int = 0  # 0 = unbounded
    width: int = 0  # Fixed-width export width, 0 = unset

    @property
    def display_name(self) -> str:
        """Caption when present, otherwise the column name"""
        return self.caption or self.name

    @classmethod
    def from_field(cls, field: SchemaField) -> "Column":
        return cls(
            name=field.name,
            field_type=field.field_type,
            nullable=field.nullable,
            max_length=field.length if field.field_type == FieldType.STRING and field.length > 0 else 0,
            width=field.length,
        )


class Table(BaseModel):
    """Named ordered columns plus ordered rows"""
    name: str = "Table1"
    columns: list[Column] = []
    rows: list[list[Any]] = []

    @property
    def row_count(self) -> int:
        return len(self.rows)

    @property
    def column_names(self) -> list[str]:
        return [c.name for c in self.columns]

    def column_index(self, name: str) -> int:
        """Case-insensitive column lookup, -1 when missing"""
        wanted = name.lower()
        for i, col in enumerate(self.columns):
            if col.name.lower() == wanted:
                return i
        return -1

    def add_row(self, values: Iterable[Any], row_number: int = None) -> list[Any]:
        """
        Append a row, fitting it to the column count

        Short rows are padded with None and long rows truncated before
        nullability and max-length checks run.

        Raises:
            RowConstraintError: value violates its column's constraints
        """
        width = len(self.columns)
        row = list(values)[:width]
        if len(row) < width:
            row.extend([None] * (width - len(row)))

        for col, value in zip(self.columns, row):
            if value is None:
                if not col.nullable:
                    raise RowConstraintError(
                        f"Column '{col.name}' does not allow nulls.",
                        row=row_number,
                        column=col.name
                    )
            elif col.max_length > 0 and isinstance(value, str) and len(value) > col.max_length:
                raise RowConstraintError(
                    f"Cannot set column '{col.name}'. The value violates the "
                    f"MaxLength limit of this column ({col.max_length}).",
                    row=row_number,
                    column=col.name
                )

        self.rows.append(row)
        return row

    def clone(self) -> "Table":
        """Copy of the column shape without rows"""
        return Table(
            name=self.name,
            columns=[c.model_copy() for c in self.columns],
            rows=[]
        )

    def to_dataframe(self) -> pd.DataFrame:
        return pd.DataFrame(self.rows, columns=self.column_names)

    @classmethod
    def from_dataframe(cls, df: pd.DataFrame, name: str = "Table1") -> "Table":
        from .schema import table_from_dataframe
        return table_from_dataframe(df, name=name)

    @classmethod
    def from_records(
        cls,
        records: Iterable[Any],
        fields: Iterable[SchemaField],
        to_row: Optional[Callable[[Any], list[Any]]] = None,
        name: str = "Table1"
    ) -> "Table":
        """
        Build a table from typed objects

        Args:
            records: Objects to convert, in order
            fields: Column definitions the rows map onto
            to_row: Mapping function; when omitted each record's own
                ``to_row()`` is used
            name: Table name

        Returns:
            Populated Table
        """
        table = cls(name=name, columns=[Column.from_field(f) for f in fields])
        for i, record in enumerate(records, 1):
            values = to_row(record) if to_row is not None else record.to_row()
            table.add_row(values, row_number=i)
        return table


class Dataset(BaseModel):
    """Ordered collection of tables; names need not be unique"""
    name: str = "Dataset"
    tables: list[Table] = []

    @property
    def record_count(self) -> int:
        return sum(t.row_count for t in self.tables)

    @classmethod
    def of(cls, *tables: Table, name: str = "Dataset") -> "Dataset":
        return cls(name=name, tables=list(tables))


# ─────────────────────────────────────────────────────────────
# Export annotations
# ─────────────────────────────────────────────────────────────

class CellAnnotation(BaseModel):
    """Style/comment override for one exported spreadsheet cell"""
    row: int  # 1-based sheet row, header included
    col: int  # 1-based sheet column, after ignored columns are removed
    comment: Optional[str] = None
    style: CellStyle = CellStyle.BAD
    table_name: Optional[str] = None  # None applies to every sheet


# ─────────────────────────────────────────────────────────────
# Import results
# ─────────────────────────────────────────────────────────────

class ImportIssue(BaseModel):
    """Recoverable per-row import failure"""
    description: str = ""
    location: int = -1  # 1-based source line, -1 when unknown

    def __str__(self) -> str:
        return f"{self.location} - {self.description}"


class ImportResult(BaseModel):
    """Outcome of one import run"""
    table: Optional[Table] = None
    errors: list[ImportIssue] = []
    descriptor: Optional[SchemaDescriptor] = None
    source_path: str = ""
    import_type: Optional[ImportFormat] = None
    total_records: int = 0

    @property
    def was_clean(self) -> bool:
        return not self.errors
