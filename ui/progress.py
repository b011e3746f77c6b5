"""Progress and lifecycle listeners"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import BinaryIO, Callable, Optional


class ProgressListener(ABC):
    """
    Start/progress/completion contract shared by the export and import engines

    Hooks may be called from a background worker thread.
    """

    @abstractmethod
    def on_start(self, fired_at: datetime, records: int, progress: int, fmt):
        """Run started; progress is always 0"""
        pass

    @abstractmethod
    def on_progress(self, fired_at: datetime, records: int, progress: int, fmt):
        """Record number `progress` of `records` processed"""
        pass

    @abstractmethod
    def on_completed(
        self,
        fired_at: datetime,
        records: int,
        fmt,
        stream: Optional[BinaryIO],
        path: str
    ):
        """Run completed; last event of a run"""
        pass

    def on_failed(self, fired_at: datetime, fmt, message: str):
        """Run failed or was cancelled"""
        pass


class NullListener(ProgressListener):
    """Ignores every event"""

    def on_start(self, fired_at, records, progress, fmt):
        pass

    def on_progress(self, fired_at, records, progress, fmt):
        pass

    def on_completed(self, fired_at, records, fmt, stream, path):
        pass


class CallbackListener(ProgressListener):
    """Forwards events to optional plain callables"""

    def __init__(
        self,
        on_start: Optional[Callable] = None,
        on_progress: Optional[Callable] = None,
        on_completed: Optional[Callable] = None,
        on_failed: Optional[Callable] = None
    ):
        self._on_start = on_start
        self._on_progress = on_progress
        self._on_completed = on_completed
        self._on_failed = on_failed

    def on_start(self, fired_at, records, progress, fmt):
        if self._on_start:
            self._on_start(fired_at, records, progress, fmt)

    def on_progress(self, fired_at, records, progress, fmt):
        if self._on_progress:
            self._on_progress(fired_at, records, progress, fmt)

    def on_completed(self, fired_at, records, fmt, stream, path):
        if self._on_completed:
            self._on_completed(fired_at, records, fmt, stream, path)

    def on_failed(self, fired_at, fmt, message):
        if self._on_failed:
            self._on_failed(fired_at, fmt, message)


class ConsoleProgress(ProgressListener):
    """Console-based progress listener"""

    def __init__(self, label: str = ""):
        self.label = label

    def _fmt_name(self, fmt) -> str:
        return getattr(fmt, "value", str(fmt)).upper()

    def on_start(self, fired_at, records, progress, fmt):
        print(f"[◉] {self.label}{self._fmt_name(fmt)}: {records:,} records...")

    def on_progress(self, fired_at, records, progress, fmt):
        percent = (progress * 100) // records if records else 100
        print(f"    {progress:,}/{records:,} ({percent}%)", end="\r", flush=True)

    def on_completed(self, fired_at, records, fmt, stream, path):
        target = path or "stream"
        print(f"\n[✓] {self.label}{self._fmt_name(fmt)}: {records:,} records -> {target}")

    def on_failed(self, fired_at, fmt, message):
        print(f"\n[✗] {self.label}{self._fmt_name(fmt)} failed - {message}")
