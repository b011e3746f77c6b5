import threading

import pytest

from ui.progress import ProgressListener


class RecordingListener(ProgressListener):
    """Collects every event in firing order"""

    def __init__(self):
        self.events = []
        self._lock = threading.Lock()

    def _record(self, *event):
        with self._lock:
            self.events.append(event)

    def on_start(self, fired_at, records, progress, fmt):
        self._record("start", records, progress, fmt)

    def on_progress(self, fired_at, records, progress, fmt):
        self._record("progress", records, progress, fmt)

    def on_completed(self, fired_at, records, fmt, stream, path):
        self._record("completed", records, fmt, stream, path)

    def on_failed(self, fired_at, fmt, message):
        self._record("failed", fmt, message)

    def of_kind(self, kind):
        return [e for e in self.events if e[0] == kind]

    @property
    def kinds(self):
        return [e[0] for e in self.events]


@pytest.fixture
def listener():
    return RecordingListener()
