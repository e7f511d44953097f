"""Whole-table view of a finished scan."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from csv_sink import iter_records
from power_calc import PrimeRecord, make_record


@dataclass
class TableSummary:
    rows: int = 0
    distinct: int = 0
    duplicates: int = 0
    smallest: int | None = None
    largest: int | None = None
    mismatched: int = 0

    def lines(self) -> list[str]:
        return [
            f"Rows:        {self.rows}",
            f"Distinct:    {self.distinct}",
            f"Duplicates:  {self.duplicates}",
            f"Smallest:    {self.smallest}",
            f"Largest:     {self.largest}",
            f"Mismatched:  {self.mismatched}",
        ]


def reconcile(records: Iterable[PrimeRecord]) -> list[PrimeRecord]:
    """One record per prime, ascending.  The first row seen for a prime wins."""
    seen: dict[int, PrimeRecord] = {}
    for r in records:
        seen.setdefault(r.prime, r)
    return [seen[p] for p in sorted(seen)]


def summarize_records(records: Iterable[PrimeRecord]) -> TableSummary:
    summary = TableSummary()
    primes = set()
    for r in records:
        summary.rows += 1
        if r.prime in primes:
            summary.duplicates += 1
        else:
            primes.add(r.prime)
        if summary.smallest is None or r.prime < summary.smallest:
            summary.smallest = r.prime
        if summary.largest is None or r.prime > summary.largest:
            summary.largest = r.prime
        if make_record(r.prime) != r:
            summary.mismatched += 1
    summary.distinct = len(primes)
    return summary


def summarize_table(path: str) -> TableSummary:
    return summarize_records(iter_records(path))
