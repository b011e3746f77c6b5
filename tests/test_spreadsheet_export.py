from datetime import datetime
from pathlib import Path

from openpyxl import load_workbook

from config import settings
from core.enums import CellStyle, ExportFormat, FieldType, WidthAdjust
from core.models import CellAnnotation, Column, Dataset, Table
from core.themes import Theme
from exporter import DataExporter, save_to_xlsx
from exporter.writers.spreadsheet import cell_value


def orders() -> Table:
    table = Table(
        name="Orders",
        columns=[
            Column(name="Id", field_type=FieldType.INTEGER),
            Column(name="Customer", caption="Client"),
            Column(name="Placed", field_type=FieldType.DATE),
            Column(name="Internal"),
        ],
    )
    table.add_row([1, "Acme", datetime(2024, 3, 1, 9, 30), "x"])
    table.add_row([2, "Globex", datetime(2024, 3, 2), "y"])
    table.add_row([3, None, None, "z"])
    return table


def export_book(data, **overrides):
    stream = DataExporter(ExportFormat.XLSX, **overrides).export(data)
    return load_workbook(stream)


def test_stream_is_a_loadable_workbook():
    book = export_book(orders())
    sheet = book.active
    assert sheet.title == "Data"
    assert [c.value for c in sheet[1]] == ["Id", "Client", "Placed", "Internal"]
    assert sheet.max_row == 4


def test_native_values_are_kept():
    sheet = export_book(orders()).active
    assert sheet["A2"].value == 1
    assert isinstance(sheet["A2"].value, int)
    assert sheet["C2"].value == datetime(2024, 3, 1, 9, 30)
    assert sheet["B4"].value is None


def test_header_row_is_bold_and_tall():
    sheet = export_book(orders()).active
    assert sheet["A1"].font.bold
    assert sheet.row_dimensions[1].height == settings.HEADER_ROW_HEIGHT


def test_theme_colours_header():
    sheet = export_book(orders(), theme="Ocean").active
    assert sheet["A1"].fill.fgColor.rgb.endswith("003366")


def test_alternate_rows_use_alternate_fill():
    sheet = export_book(orders(), theme=Theme.OCEAN).active
    assert sheet["A2"].fill.fgColor.rgb.endswith("CCE5FF")
    assert sheet["A3"].fill.fgColor.rgb.endswith("FFFFFF")
    assert sheet["A4"].fill.fgColor.rgb.endswith("CCE5FF")


def test_without_styles_header_is_plain():
    sheet = export_book(orders(), export_with_styles=False).active
    assert not sheet["A1"].font.bold


def test_default_sheet_names_are_numbered():
    book = export_book(Dataset.of(orders(), orders(), orders()))
    assert book.sheetnames == ["Data", "Data 1", "Data 2"]


def test_table_names_are_used_when_defaults_are_off():
    other = orders()
    other.name = "Q1/Q2 [draft]"
    book = export_book(Dataset.of(orders(), other), use_default_sheet_names=False)
    assert book.sheetnames == ["Orders", "Q1_Q2 _draft_"]


def test_empty_dataset_still_has_a_sheet():
    book = export_book(Dataset())
    assert book.sheetnames == ["Data"]


def test_ignored_column_is_not_written():
    sheet = export_book(orders(), ignored_columns=["internal"]).active
    assert [c.value for c in sheet[1]] == ["Id", "Client", "Placed"]
    assert sheet.max_column == 3


def test_annotation_sets_comment_and_style():
    annotation = CellAnnotation(row=2, col=2, comment="Check this client", style=CellStyle.BAD)
    sheet = export_book(orders(), annotations=[annotation]).active

    cell = sheet["B2"]
    assert "Check this client" in cell.comment.text
    assert cell.fill.fgColor.rgb.endswith("F08080")
    assert sheet["B3"].comment is None


def test_annotation_for_other_table_is_ignored():
    annotation = CellAnnotation(row=2, col=1, comment="elsewhere", table_name="Invoices")
    sheet = export_book(orders(), annotations=[annotation]).active
    assert sheet["A2"].comment is None


def test_boxed_annotation_styles_get_thick_borders():
    annotation = CellAnnotation(row=3, col=1, style=CellStyle.ALERT)
    sheet = export_book(orders(), annotations=[annotation]).active
    cell = sheet["A3"]
    assert cell.border.left.style == "thick"
    assert cell.border.top.style == "thick"
    assert cell.font.bold
    assert cell.comment is None


def test_formula_text_is_written_as_formula():
    table = Table(columns=[Column(name="Calc")])
    table.add_row(["=1+1"])
    sheet = export_book(table).active
    assert sheet["A2"].data_type == "f"
    assert sheet["A2"].value == "=1+1"


def test_header_text_is_never_a_formula():
    table = Table(columns=[Column(name="=Total"), Column(name="Plain")])
    table.add_row(["=1+1", "x"])
    sheet = export_book(table).active
    assert sheet["A1"].value == "=Total"
    assert sheet["A1"].data_type == "s"
    assert sheet["A2"].data_type == "f"


def test_long_text_is_truncated():
    table = Table(columns=[Column(name="Body")])
    table.add_row(["x" * 40000])
    sheet = export_book(table).active
    assert len(sheet["A2"].value) == settings.MAX_CELL_TEXT_LENGTH


def test_illegal_characters_are_removed():
    assert cell_value("bad\x01value", 100) == "badvalue"
    assert cell_value("\x02", 100) is None
    table = Table(columns=[Column(name="T")])
    table.add_row(["a\x01b"])
    assert export_book(table).active["A2"].value == "ab"


def test_column_widths_follow_headers():
    table = Table(columns=[Column(name="Short"), Column(name="A much longer header")])
    table.add_row(["x" * 60, "y"])
    sheet = export_book(table).active
    assert sheet.column_dimensions["A"].width == len("Short") + 2
    assert sheet.column_dimensions["B"].width == len("A much longer header") + 2


def test_column_widths_can_follow_all_rows():
    table = Table(columns=[Column(name="Short")])
    table.add_row(["x" * 60])
    table.add_row(["y" * 300])
    sheet = export_book(table, auto_cell_adjust=WidthAdjust.BY_ALL_ROWS).active
    assert sheet.column_dimensions["A"].width == settings.MAX_COLUMN_WIDTH


def test_document_properties():
    book = export_book(orders(), author="Ana", title="Orders report", subject="Q1")
    assert book.properties.creator == "Ana"
    assert book.properties.title == "Orders report"
    assert book.properties.subject == "Q1"


def test_export_to_file(tmp_path: Path, listener):
    target = tmp_path / "orders.xlsx"
    DataExporter(ExportFormat.XLSX, listener).export_to_file(target, orders())

    assert load_workbook(target).active["B2"].value == "Acme"
    completed = listener.of_kind("completed")[0]
    assert completed[1] == 3
    assert completed[3] is None
    assert completed[4] == str(target)


def test_save_to_xlsx(tmp_path: Path):
    target = tmp_path / "saved.xlsx"
    save_to_xlsx(orders(), target)
    sheet = load_workbook(target).active
    assert sheet.title == "Data"
    assert sheet["A1"].fill.fgColor.rgb.endswith("FFFFFF")
    assert sheet["A4"].value == 3
