"""Append-only CSV table of primes and their powers.

Columns are ``prime, squared, cubed, to_fourth_power``, all written as
base-10 digit strings.  The header goes in once, when the file is missing
or empty; later batches only append rows.  Re-running against the same file
appends duplicate rows.
"""

from __future__ import annotations

import csv
import os
import sys
from typing import Iterable, Iterator

from power_calc import PrimeRecord

# Lift Python's big-int<->str limit (3.11+)
if hasattr(sys, "set_int_max_str_digits"):
    sys.set_int_max_str_digits(0)

FIELDNAMES = ("prime", "squared", "cubed", "to_fourth_power")
DEFAULT_OUTPUT = "primes_and_powers.csv"


def _has_content(path: str) -> bool:
    try:
        return os.path.getsize(path) > 0
    except FileNotFoundError:
        return False


class CsvSink:
    def __init__(self, path: str = DEFAULT_OUTPUT, header: bool = True):
        self.path = os.fspath(path)
        self.header = header
        self.rows_written = 0

    def write_batch(self, records: Iterable[PrimeRecord]) -> None:
        """Append ``records`` and force them to disk before returning."""
        write_header = self.header and not _has_content(self.path)
        with open(self.path, "a", newline="") as f:
            writer = csv.writer(f)
            if write_header:
                writer.writerow(FIELDNAMES)
            n = 0
            for record in records:
                writer.writerow(record.as_row())
                n += 1
            f.flush()
            os.fsync(f.fileno())
        self.rows_written += n

    __call__ = write_batch


def iter_records(path: str) -> Iterator[PrimeRecord]:
    """Yield rows from ``path``, with or without a header.  Missing file yields nothing."""
    try:
        f = open(path, newline="")
    except FileNotFoundError:
        return
    with f:
        for lineno, row in enumerate(csv.reader(f), start=1):
            if not row:
                continue
            if tuple(row) == FIELDNAMES:
                continue
            if len(row) != len(FIELDNAMES):
                raise ValueError(f"{path}:{lineno}: expected {len(FIELDNAMES)} fields, got {len(row)}")
            prime, squared, cubed, fourth = row
            yield PrimeRecord(int(prime), squared, cubed, fourth)


def read_records(path: str) -> list[PrimeRecord]:
    return list(iter_records(path))
