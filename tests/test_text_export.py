from pathlib import Path

import pytest

from core.enums import ExportFormat, FieldType
from core.exceptions import SchemaError, UnsupportedFormatError
from core.interfaces import RowConvertible
from core.models import Column, Dataset, SchemaField, Table
from exporter import DataExporter, ExportOptions


def people() -> Table:
    table = Table(
        name="People",
        columns=[
            Column(name="Name", width=6),
            Column(name="Age", field_type=FieldType.INTEGER, width=3),
            Column(name="City", caption="Town", width=8),
        ],
    )
    table.add_row(["Ann", 30, "Oslo"])
    table.add_row(["Bob", None, "Lima"])
    table.add_row(["Cy", 7, None])
    return table


def lines_of(stream) -> list[str]:
    return stream.read().decode("utf-8").split("\r\n")[:-1]


def test_delimited_default_is_tab_with_crlf():
    stream = DataExporter(ExportFormat.TXT).export(people())
    assert stream.tell() == 0
    raw = stream.read().decode("utf-8")
    assert raw.startswith("Name\tAge\tTown\r\n")
    assert raw.endswith("\r\n")


def test_delimited_rows_render_none_as_empty_field():
    lines = lines_of(DataExporter(ExportFormat.TXT).export(people()))
    assert lines == [
        "Name\tAge\tTown",
        "Ann\t30\tOslo",
        "Bob\t\tLima",
        "Cy\t7\t",
    ]


def test_no_separator_after_last_field():
    lines = lines_of(DataExporter(ExportFormat.TXT, separator="|").export(people()))
    assert lines[1] == "Ann|30|Oslo"
    assert lines[0].count("|") == 2


def test_headers_can_be_omitted():
    lines = lines_of(DataExporter(ExportFormat.TXT, write_headers=False).export(people()))
    assert lines[0] == "Ann\t30\tOslo"
    assert len(lines) == 3


def test_ignored_columns_match_caption_or_name():
    by_caption = lines_of(DataExporter(ExportFormat.TXT, ignored_columns=["town"]).export(people()))
    by_name = lines_of(DataExporter(ExportFormat.TXT, ignored_columns=["CITY"]).export(people()))
    assert by_caption == by_name
    assert by_caption[0] == "Name\tAge"
    assert by_caption[1] == "Ann\t30"


def test_custom_line_terminator():
    stream = DataExporter(ExportFormat.TXT, line_terminator="\n").export(people())
    assert stream.read().decode("utf-8").split("\n")[1] == "Ann\t30\tOslo"


def test_fixed_width_fields_have_exact_width():
    exporter = DataExporter(ExportFormat.TXT, delimited_by_length=True, char_filler=".")
    lines = lines_of(exporter.export(people()))

    assert lines[0] == "Name..Age" + "City...."
    assert lines[1] == "Ann...30.Oslo...."
    assert lines[2] == "Bob......Lima...."
    assert all(len(line) == 6 + 3 + 8 for line in lines)


def test_fixed_width_cuts_long_values():
    table = Table(columns=[Column(name="Code", width=3)])
    table.add_row(["ABCDEFG"])
    lines = lines_of(DataExporter(ExportFormat.TXT, delimited_by_length=True, write_headers=False).export(table))
    assert lines == ["ABC"]


def test_fixed_width_option_widths_override_column_widths():
    exporter = DataExporter(
        ExportFormat.TXT,
        delimited_by_length=True,
        widths=[4, 2, 5],
        write_headers=False,
    )
    lines = lines_of(exporter.export(people()))
    assert lines[0] == "Ann 30Oslo "


def test_fixed_width_widths_follow_original_positions_when_ignoring():
    exporter = DataExporter(
        ExportFormat.TXT,
        delimited_by_length=True,
        widths=[4, 2, 5],
        ignored_columns=["Age"],
        write_headers=False,
    )
    lines = lines_of(exporter.export(people()))
    assert lines[0] == "Ann Oslo "


def test_fixed_width_without_width_raises_schema_error():
    table = Table(columns=[Column(name="A", width=2), Column(name="B")])
    table.add_row(["x", "y"])
    with pytest.raises(SchemaError):
        DataExporter(ExportFormat.TXT, delimited_by_length=True).export(table)


def test_multiple_tables_are_written_in_order():
    first, second = people(), people()
    second.rows = second.rows[:1]
    lines = lines_of(DataExporter(ExportFormat.TXT).export(Dataset.of(first, second)))
    assert len(lines) == 4 + 2


def test_export_to_file_replaces_existing_file(tmp_path: Path):
    target = tmp_path / "people.txt"
    target.write_text("old content that is longer than the new one" * 100)

    result = DataExporter(ExportFormat.TXT).export_to_file(target, people())

    assert result is None
    assert target.read_bytes().decode("utf-8").startswith("Name\tAge\tTown\r\n")
    assert "old content" not in target.read_text()


def test_empty_destination_means_stream():
    stream = DataExporter(ExportFormat.TXT).export(people(), "")
    assert stream is not None
    assert stream.read().startswith(b"Name")


def test_encoding_option_is_applied():
    table = Table(columns=[Column(name="Ciudad")])
    table.add_row(["Málaga"])
    stream = DataExporter(ExportFormat.TXT, encoding="cp1252", write_headers=False).export(table)
    assert stream.read() == "Málaga\r\n".encode("cp1252")


def test_unknown_format_raises_before_io(tmp_path: Path):
    target = tmp_path / "never.pdf"
    with pytest.raises(UnsupportedFormatError):
        DataExporter("pdf").export(people(), target)
    assert not target.exists()


def test_options_object_and_overrides_combine():
    options = ExportOptions(separator=";", write_headers=False)
    lines = lines_of(DataExporter(ExportFormat.TXT, options=options, ignored_columns=["Town"]).export(people()))
    assert lines[0] == "Ann;30"
    assert options.ignored_columns == []


def test_char_filler_must_be_single_character():
    with pytest.raises(ValueError):
        ExportOptions(char_filler="--")


class Order:
    def __init__(self, number, customer):
        self.number = number
        self.customer = customer

    def to_row(self):
        return [self.number, self.customer]


ORDER_FIELDS = [
    SchemaField(name="Number", field_type=FieldType.INTEGER, nullable=False),
    SchemaField(name="Customer"),
]


def test_export_records_uses_to_row():
    orders = [Order(1, "Acme"), Order(2, None)]
    assert isinstance(orders[0], RowConvertible)

    lines = lines_of(DataExporter(ExportFormat.TXT).export_records(orders, ORDER_FIELDS, name="Orders"))

    assert lines == ["Number\tCustomer", "1\tAcme", "2\t"]


def test_export_records_with_mapping_function(tmp_path: Path):
    rows = [{"n": 5, "c": "Initech"}]
    target = tmp_path / "orders.txt"

    DataExporter(ExportFormat.TXT).export_records(
        rows, ORDER_FIELDS, target, to_row=lambda r: list(r.values())
    )

    assert target.read_text().splitlines()[1] == "5\tInitech"


def test_export_to_stream():
    stream = DataExporter(ExportFormat.TXT, write_headers=False).export_to_stream(people())
    assert stream.read().startswith(b"Ann\t30")


def test_export_to_file_requires_path():
    with pytest.raises(ValueError):
        DataExporter(ExportFormat.TXT).export_to_file("", people())
