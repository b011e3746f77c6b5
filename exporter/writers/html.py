"""Filterable HTML writer"""

import html
from string import Template
from typing import TextIO

from core.context import RunContext
from core.enums import ExportFormat
from core.models import Dataset, Table
from core.themes import Palette, get_palette
from ..options import ExportOptions
from .base import TextTableWriter, kept_columns, render_value

DOCUMENT_HEAD = Template("""<!DOCTYPE html>
<html>
<head>
<meta charset="$charset">
<title>$title</title>
<style>
body { font-family: Segoe UI, Arial, sans-serif; font-size: 10pt; margin: 16px; }
h2 { color: #$header_bg; }
.filter-bar { margin: 8px 0; }
.filter-bar input { padding: 4px; width: 280px; border: 1px solid #$border; }
.filter-bar button { padding: 4px 12px; background: #$header_bg; color: #$header_fg; border: 1px solid #$header_border; cursor: pointer; }
.counter { margin-left: 12px; color: #$row_fg; }
table.data { border-collapse: collapse; margin-bottom: 24px; }
table.data th { background: #$header_bg; color: #$header_fg; border-bottom: 2px solid #$header_border; padding: 6px 10px; text-align: center; }
table.data td { background: #$row_bg; color: #$row_fg; border-bottom: 1px solid #$border; padding: 4px 10px; white-space: pre-wrap; }
$alternate_rule</style>
</head>
<body>
""")

TABLE_BLOCK = Template("""<h2>$caption</h2>
<div class="filter-bar">
<input type="text" id="filter-$index" placeholder="Filter...">
<button type="button" id="apply-$index">Filter</button>
<button type="button" id="clear-$index">Clear</button>
<span class="counter" id="count-$index">$rows / $rows</span>
</div>
<table class="data" id="table-$index" data-columns="$columns">
""")

DOCUMENT_TAIL = Template("""<script>
(function () {
  function wire(index) {
    var table = document.getElementById("table-" + index);
    var input = document.getElementById("filter-" + index);
    var counter = document.getElementById("count-" + index);
    var rows = table.tBodies.length ? Array.prototype.slice.call(table.tBodies[0].rows) : [];
    var cache = rows.map(function (row) { return row.textContent.toLowerCase(); });
    function apply() {
      var needle = input.value.toLowerCase();
      var visible = 0;
      for (var i = 0; i < rows.length; i++) {
        var show = needle === "" || cache[i].indexOf(needle) !== -1;
        rows[i].style.display = show ? "" : "none";
        if (show) { visible++; }
      }
      counter.textContent = visible + " / " + rows.length;
    }
    input.addEventListener("keyup", apply);
    document.getElementById("apply-" + index).addEventListener("click", apply);
    document.getElementById("clear-" + index).addEventListener("click", function () {
      input.value = "";
      apply();
    });
  }
  for (var t = 0; t < $tables; t++) { wire(t); }
})();
</script>
</body>
</html>
""")


def palette_values(palette: Palette) -> dict:
    return {
        "header_bg": palette.header_bg,
        "header_fg": palette.header_fg,
        "row_fg": palette.row_fg,
        "row_bg": palette.row_bg,
        "border": palette.border,
        "header_border": palette.header_border,
    }


def alternate_rule(palette: Palette) -> str:
    return f"table.data tbody tr:nth-child(odd) td {{ background: #{palette.alt_bg}; }}\n"


class HTMLWriter(TextTableWriter):
    """Writer for a self-contained HTML document with a row filter per table"""

    @property
    def export_type(self) -> ExportFormat:
        return ExportFormat.HTML

    def write_text(self, dataset: Dataset, out: TextIO, options: ExportOptions, ctx: RunContext):
        eol = options.line_terminator
        title = options.title or dataset.name
        palette = get_palette(options.theme)

        out.write(DOCUMENT_HEAD.substitute(
            charset=html.escape(options.encoding),
            title=html.escape(title),
            alternate_rule=alternate_rule(palette) if options.use_alternate_row_styles else "",
            **palette_values(palette)
        ))

        for index, table in enumerate(dataset.tables):
            self._write_table(table, index, out, options, ctx, eol)

        out.write(DOCUMENT_TAIL.substitute(tables=len(dataset.tables)))

    def _write_table(
        self,
        table: Table,
        index: int,
        out: TextIO,
        options: ExportOptions,
        ctx: RunContext,
        eol: str
    ):
        columns = kept_columns(table, options.ignored_columns)

        out.write(TABLE_BLOCK.substitute(
            caption=html.escape(table.name),
            index=index,
            rows=table.row_count,
            columns=len(columns)
        ))

        if options.write_headers:
            cells = "".join(f"<th>{html.escape(col.display_name)}</th>" for _, col in columns)
            out.write(f"<thead><tr>{cells}</tr></thead>{eol}")

        out.write(f"<tbody>{eol}")
        for row in table.rows:
            cells = "".join(f"<td>{html.escape(render_value(row[i]))}</td>" for i, _ in columns)
            out.write(f"<tr>{cells}</tr>{eol}")
            ctx.advance()
        out.write(f"</tbody>{eol}</table>{eol}")
