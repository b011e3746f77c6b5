"""Per-call run state shared between an engine and its codec"""

import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime
from typing import BinaryIO, Optional

from ui.progress import NullListener, ProgressListener
from config import settings
from .exceptions import JobCancelledError
from .models import ImportIssue

logger = logging.getLogger(__name__)


@dataclass
class RunContext:
    """
    Mutable state for exactly one export or import call

    A fresh context is built per call so one engine instance can be reused
    without runs overwriting each other's counters.
    """
    fmt: object
    total: int = 0
    listener: ProgressListener = field(default_factory=NullListener)
    cancel_event: threading.Event = field(default_factory=threading.Event)
    current: int = 0
    last_percent: int = 0
    progress_events: int = 0
    errors: list[ImportIssue] = field(default_factory=list)

    @property
    def cancelled(self) -> bool:
        return self.cancel_event.is_set()

    def check_cancelled(self):
        if self.cancel_event.is_set():
            raise JobCancelledError(f"{self._fmt_name()} run cancelled at record {self.current}")

    def start(self):
        self.current = 0
        self.last_percent = 0
        self.listener.on_start(datetime.now(), self.total, 0, self.fmt)

    def advance(self, count: int = 1):
        """Count processed records and emit throttled progress"""
        self.check_cancelled()
        for _ in range(count):
            self.current += 1
            if self._should_report():
                self.progress_events += 1
                self.listener.on_progress(datetime.now(), self.total, self.current, self.fmt)

    def _should_report(self) -> bool:
        if self.total <= 0:
            return False
        if self.total <= settings.PROGRESS_EVERY_RECORD_LIMIT:
            return True

        step = self.total // 100
        if self.current % step != 0 and self.current != self.total:
            return False

        percent = (self.current * 100) // self.total
        if percent <= self.last_percent:
            return False
        self.last_percent = percent
        return True

    def complete(self, stream: Optional[BinaryIO] = None, path: str = ""):
        self.listener.on_completed(datetime.now(), self.total, self.fmt, stream, path)

    def fail(self, message: str):
        self.listener.on_failed(datetime.now(), self.fmt, message)

    def add_error(self, description: str, location: int = -1):
        logger.debug(f"Row {location}: {description}")
        self.errors.append(ImportIssue(description=description, location=location))

    def _fmt_name(self) -> str:
        return getattr(self.fmt, "value", str(self.fmt)).upper()
