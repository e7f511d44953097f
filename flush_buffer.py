"""Lock-guarded record buffer that hands full batches to a sink.

Workers call :meth:`FlushBuffer.append` concurrently.  The append that
brings the buffer to ``threshold`` records writes the whole batch while it
still holds the lock, so at most one flush runs at a time and the buffer
never holds more than ``threshold`` records.  :meth:`FlushBuffer.drain`
writes whatever is left once the scan is done.

A sink failure is final: the buffer keeps the failed batch, stops taking
records and re-raises the same error on every later call.
"""

from __future__ import annotations

import threading
from typing import Callable

from power_calc import PrimeRecord

FLUSH_THRESHOLD = 10_000


class FlushBuffer:
    def __init__(self, sink: Callable[[list[PrimeRecord]], None], threshold: int = FLUSH_THRESHOLD):
        if threshold < 1:
            raise ValueError("threshold must be >= 1")
        self.threshold = threshold
        self._sink = sink
        self._records: list[PrimeRecord] = []
        self._lock = threading.Lock()
        self._error: BaseException | None = None
        self.flush_count = 0
        self.records_written = 0

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    @property
    def failed(self) -> bool:
        return self._error is not None

    def append(self, record: PrimeRecord) -> None:
        with self._lock:
            if self._error is not None:
                raise self._error
            self._records.append(record)
            if len(self._records) >= self.threshold:
                self._flush_locked()

    def drain(self) -> None:
        with self._lock:
            if self._error is not None:
                raise self._error
            if self._records:
                self._flush_locked()

    def _flush_locked(self) -> None:
        try:
            self._sink(self._records)
        except BaseException as e:
            self._error = e
            raise
        self.flush_count += 1
        self.records_written += len(self._records)
        self._records.clear()
