import pytest

from core.context import RunContext
from core.enums import ExportFormat, FieldType
from core.exceptions import JobCancelledError
from core.models import Column, Table
from exporter import DataExporter
from ui.progress import CallbackListener, ConsoleProgress


def run(total, listener):
    ctx = RunContext(fmt=ExportFormat.CSV, total=total, listener=listener)
    ctx.start()
    for _ in range(total):
        ctx.advance()
    ctx.complete(None, "out.csv")
    return ctx


def test_large_runs_report_on_step_boundaries(listener):
    run(250, listener)
    progress = [e[2] for e in listener.of_kind("progress")]

    assert len(progress) == 100
    assert all(p % 2 == 0 for p in progress)
    assert progress == sorted(progress)
    assert progress[-1] == 250


def test_percentages_never_decrease(listener):
    run(1234, listener)
    percents = [e[2] * 100 // 1234 for e in listener.of_kind("progress")]
    assert len(percents) <= 100
    assert percents == sorted(percents)
    assert len(set(percents)) == len(percents)


def test_small_runs_report_every_record(listener):
    run(37, listener)
    progress = [e[2] for e in listener.of_kind("progress")]
    assert progress == list(range(1, 38))


def test_exactly_one_hundred_records_report_every_record(listener):
    run(100, listener)
    assert len(listener.of_kind("progress")) == 100


def test_event_order(listener):
    run(5, listener)
    assert listener.kinds[0] == "start"
    assert listener.events[0][2] == 0
    assert listener.kinds[-1] == "completed"


def test_zero_records_fire_no_progress(listener):
    run(0, listener)
    assert listener.kinds == ["start", "completed"]


def test_cancelled_context_raises_on_advance(listener):
    ctx = RunContext(fmt=ExportFormat.TXT, total=10, listener=listener)
    ctx.start()
    ctx.advance()
    ctx.cancel_event.set()
    with pytest.raises(JobCancelledError):
        ctx.advance()
    assert ctx.current == 1


def test_add_error_collects_issues():
    ctx = RunContext(fmt=ExportFormat.TXT)
    ctx.add_error("broken", 3)
    assert ctx.errors[0].location == 3
    assert ctx.errors[0].description == "broken"


def test_exporter_reports_progress_per_row(listener):
    table = Table(columns=[Column(name="n", field_type=FieldType.INTEGER)])
    for i in range(250):
        table.add_row([i])

    DataExporter(ExportFormat.CSV, listener).export(table)

    progress = listener.of_kind("progress")
    assert len(progress) == 100
    assert all(e[1] == 250 and e[3] == ExportFormat.CSV for e in progress)
    assert listener.kinds[-1] == "completed"


def test_callback_listener_forwards_events():
    seen = []
    cb = CallbackListener(
        on_start=lambda *a: seen.append("start"),
        on_completed=lambda *a: seen.append("completed"),
    )
    run(3, cb)
    assert seen == ["start", "completed"]


def test_console_progress_prints_lifecycle(capsys):
    run(3, ConsoleProgress("Export "))
    out = capsys.readouterr().out
    assert "[◉] Export CSV: 3 records" in out
    assert "[✓] Export CSV: 3 records -> out.csv" in out
