import io
import threading
from pathlib import Path

import pytest

from core.enums import ExportFormat, FieldType, ImportFormat, JobStatus
from core.exceptions import JobCancelledError
from core.jobs import BackgroundRunner
from core.models import Column, Table
from exporter import DataExporter
from importer import DataImporter
from ui.progress import CallbackListener


def numbers(count: int) -> Table:
    table = Table(columns=[Column(name="n", field_type=FieldType.INTEGER)])
    for i in range(count):
        table.add_row([i])
    return table


def test_background_export_returns_stream():
    exporter = DataExporter(ExportFormat.CSV)
    try:
        job = exporter.export(numbers(10), background=True)
        stream = job.result(timeout=10)

        assert isinstance(stream, io.BytesIO)
        assert stream.read().decode("utf-8").startswith("n\r\n0\r\n")
        assert job.status == JobStatus.SUCCESS
        assert exporter.current_job is job
    finally:
        exporter.shutdown()


def test_background_import(tmp_path: Path, listener):
    source = tmp_path / "rows.txt"
    source.write_text("A\tB\n1\t2\n3\t4\n", encoding="utf-8")

    importer = DataImporter(ImportFormat.TXT, listener)
    try:
        job = importer.import_from_file(source, background=True)
        result = job.result(timeout=10)
    finally:
        importer.shutdown()

    assert result.table.rows == [["1", "2"], ["3", "4"]]
    assert importer.result is result
    assert job.started_at is not None
    assert job.completed_at >= job.started_at
    assert listener.kinds[-1] == "completed"


def test_failed_background_job(tmp_path: Path):
    table = Table(columns=[Column(name="A")])
    table.add_row(["x"])
    exporter = DataExporter(ExportFormat.TXT, delimited_by_length=True)
    try:
        job = exporter.export(table, tmp_path / "out.txt", background=True)
        with pytest.raises(Exception):
            job.result(timeout=10)
        assert job.status == JobStatus.FAILED
    finally:
        exporter.shutdown()
    assert not (tmp_path / "out.txt").exists()


def test_new_submission_cancels_the_running_job(tmp_path: Path):
    started = threading.Event()
    gate = threading.Event()
    failures = []

    def hold_first_run(fired_at, records, progress, fmt):
        if not started.is_set():
            started.set()
            gate.wait(10)

    listener = CallbackListener(
        on_progress=hold_first_run,
        on_failed=lambda fired_at, fmt, message: failures.append(message),
    )
    exporter = DataExporter(ExportFormat.TXT, listener)
    first_path = tmp_path / "first.txt"
    second_path = tmp_path / "second.txt"

    try:
        first = exporter.export(numbers(50), first_path, background=True)
        assert started.wait(10)

        second = exporter.export(numbers(50), second_path, background=True)
        assert exporter.current_job is second
        gate.set()

        assert second.result(timeout=10) is None
        with pytest.raises(JobCancelledError):
            first.result(timeout=10)
    finally:
        gate.set()
        exporter.shutdown()

    assert first.status == JobStatus.CANCELLED
    assert second.status == JobStatus.SUCCESS
    assert not first_path.exists()
    assert second_path.read_text().count("\n") == 51
    assert len(failures) == 1


def test_queued_job_cancelled_before_start_never_runs():
    runner = BackgroundRunner("test")
    started = threading.Event()
    gate = threading.Event()
    ran = []

    def block():
        started.set()
        gate.wait(10)

    try:
        blocker = runner.submit(block, threading.Event(), description="blocker")
        assert started.wait(10)
        queued = runner.submit(lambda: ran.append("queued"), threading.Event(), description="queued")
        last = runner.submit(lambda: ran.append("last"), threading.Event(), description="last")
        gate.set()
        last.result(timeout=10)
    finally:
        gate.set()
        runner.shutdown()

    assert queued.status == JobStatus.CANCELLED
    assert ran == ["last"]
    with pytest.raises(JobCancelledError):
        queued.result()
    assert blocker.done()


def test_job_to_dict():
    runner = BackgroundRunner("test")
    try:
        job = runner.submit(lambda value: value * 2, threading.Event(), description="double", value=21)
        assert job.result(timeout=10) == 42
    finally:
        runner.shutdown()

    data = job.to_dict()
    assert set(data) == {"job_id", "description", "status", "created_at", "started_at", "completed_at"}
    assert data["status"] == "success"
    assert data["description"] == "double"


def test_cancel_after_completion_is_refused():
    runner = BackgroundRunner("test")
    try:
        job = runner.submit(lambda: None, threading.Event())
        job.result(timeout=10)
        assert job.cancel() is False
    finally:
        runner.shutdown()
