#!/usr/bin/env python3
"""Scan an integer range for primes and log their powers to CSV.

Every odd candidate in ``[start, end]`` (plus 2) is trial-divided on a pool
of worker threads.  Each prime gets its square, cube and fourth power
computed exactly and is pushed into a shared :class:`FlushBuffer`, which
appends full batches to the CSV file.  Memory stays at one batch no matter
how wide the range is.

Example::

    prime_scan.py -s 2 -e 1000000 -c 4 -o primes_and_powers.csv
"""

from __future__ import annotations

import argparse
import operator
import os
import sys
import threading
import time
from dataclasses import dataclass, field
from multiprocessing.pool import ThreadPool
from typing import Callable, Iterator

import requests
from tqdm import tqdm

from aggregate import reconcile, summarize_table
from csv_sink import DEFAULT_OUTPUT, CsvSink, read_records
from flush_buffer import FLUSH_THRESHOLD, FlushBuffer
from power_calc import make_record
from remote_range import fetch_default_range, submit_results
from trial_division import is_prime

DEFAULT_START = 2
DEFAULT_END = 1_000_000
BLOCK_SIZE = 4096


class ScanConfigError(ValueError):
    pass


@dataclass
class ScanResult:
    start: int
    end: int
    workers: int
    primes_written: int = 0
    flushes: int = 0
    skipped: list[int] = field(default_factory=list)
    elapsed: float = 0.0


# ─────────────────────────────────────────────────────────────────────────────
# Validation
# ─────────────────────────────────────────────────────────────────────────────

def validate_range(start, end) -> tuple[int, int]:
    try:
        start, end = operator.index(start), operator.index(end)
    except TypeError:
        raise ScanConfigError(f"range bounds must be integers, got {start!r}, {end!r}") from None
    if start < 0:
        raise ScanConfigError(f"start must be >= 0, got {start}")
    if end < start:
        raise ScanConfigError(f"start ({start}) must not exceed end ({end})")
    return start, end


def validate_workers(workers) -> int:
    try:
        workers = operator.index(workers)
    except TypeError:
        raise ScanConfigError(f"worker count must be an integer, got {workers!r}") from None
    if workers < 1:
        raise ScanConfigError(f"worker count must be >= 1, got {workers}")
    return workers


def default_workers(cpus: int | None = None) -> int:
    """One worker per core, leaving one core for the writer and the OS."""
    if cpus is None:
        cpus = os.cpu_count() or 1
    return max(1, cpus - 1)


# ─────────────────────────────────────────────────────────────────────────────
# Partitioning
# ─────────────────────────────────────────────────────────────────────────────

def iter_candidates(lo: int, hi: int) -> Iterator[int]:
    """Yield 2 (when in range) and every odd number in ``[lo, hi]``."""
    if lo <= 2 <= hi:
        yield 2
    first = lo if lo % 2 else lo + 1
    yield from range(first, hi + 1, 2)


def count_blocks(start: int, end: int, block_size: int) -> int:
    return (end - start) // block_size + 1


def block_bounds(k: int, start: int, end: int, block_size: int) -> tuple[int, int]:
    lo = start + k * block_size
    return lo, min(lo + block_size - 1, end)


# ─────────────────────────────────────────────────────────────────────────────
# Scan
# ─────────────────────────────────────────────────────────────────────────────

def _report(msg: str) -> None:
    tqdm.write(msg, file=sys.stderr)


def scan_range(
    start: int,
    end: int,
    sink: Callable,
    workers: int | None = None,
    threshold: int = FLUSH_THRESHOLD,
    block_size: int = BLOCK_SIZE,
    progress: bool = False,
) -> ScanResult:
    """Scan ``[start, end]`` and flush every prime found into ``sink``.

    Blocks until all candidates are checked.  An exception from ``sink``
    stops every worker before its next append and is re-raised here;
    records still buffered at that point are not written and the sink is
    not called again.
    """
    start, end = validate_range(start, end)
    workers = default_workers() if workers is None else validate_workers(workers)
    if block_size < 1:
        raise ScanConfigError(f"block size must be >= 1, got {block_size}")
    if threshold < 1:
        raise ScanConfigError(f"threshold must be >= 1, got {threshold}")

    buffer = FlushBuffer(sink, threshold)
    result = ScanResult(start, end, workers)
    nblocks = count_blocks(start, end, block_size)
    stop = threading.Event()
    skipped_lock = threading.Lock()
    bar = tqdm(total=nblocks, unit="block", desc="Scanning", disable=not progress)

    def scan_stripe(index: int) -> None:
        try:
            for k in range(index, nblocks, workers):
                if stop.is_set():
                    return
                lo, hi = block_bounds(k, start, end, block_size)
                for n in iter_candidates(lo, hi):
                    if not is_prime(n):
                        continue
                    record = make_record(n)
                    if record is None:
                        _report(f"Overflow error for {n}")
                        with skipped_lock:
                            result.skipped.append(n)
                        continue
                    if stop.is_set():
                        return
                    buffer.append(record)
                bar.update(1)
        except BaseException:
            stop.set()
            raise

    t0 = time.perf_counter()
    try:
        with ThreadPool(processes=workers) as pool:
            pool.map(scan_stripe, range(workers), chunksize=1)
        buffer.drain()
    finally:
        bar.close()
        result.elapsed = time.perf_counter() - t0
        result.primes_written = buffer.records_written
        result.flushes = buffer.flush_count
    return result


# ─────────────────────────────────────────────────────────────────────────────
# Command-line interface
# ─────────────────────────────────────────────────────────────────────────────

def resolve_range(start: int | None, end: int | None, range_url: str | None) -> tuple[int, int]:
    """Fill in missing bounds from ``range_url`` or the local defaults."""
    if start is not None and end is not None:
        return start, end
    default_start, default_end = DEFAULT_START, DEFAULT_END
    if range_url:
        try:
            default_start, default_end = fetch_default_range(range_url)
        except (requests.RequestException, ValueError) as e:
            print(f"WARNING: could not fetch default range ({e}); "
                  f"using [{DEFAULT_START}, {DEFAULT_END}]", file=sys.stderr)
    return (default_start if start is None else start,
            default_end if end is None else end)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate primes in a range with their 2nd, 3rd and 4th powers"
    )
    parser.add_argument("-s", "--start", type=int, help="Start of the range (inclusive)")
    parser.add_argument("-e", "--end", type=int, help="End of the range (inclusive)")
    parser.add_argument("-c", "--cpus", type=int, help="Number of worker threads")
    parser.add_argument("-o", "--output", default=DEFAULT_OUTPUT, help="CSV file to append to")
    parser.add_argument("--threshold", type=int, default=FLUSH_THRESHOLD,
                        help="Records buffered before each write (default 10000)")
    parser.add_argument("--block-size", type=int, default=BLOCK_SIZE,
                        help="Integers per scheduling block (default 4096)")
    parser.add_argument("--no-header", action="store_true", help="Never write a CSV header row")
    parser.add_argument("--range-url", help="Fetch missing bounds from this URL")
    parser.add_argument("--submit-url", help="POST the finished table to this URL")
    parser.add_argument("--summary", action="store_true", help="Print a summary of the whole table")
    parser.add_argument("--quiet", action="store_true", help="Disable the progress bar")
    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    start, end = resolve_range(args.start, args.end, args.range_url)
    try:
        start, end = validate_range(start, end)
        workers = default_workers() if args.cpus is None else validate_workers(args.cpus)
    except ScanConfigError as e:
        parser.error(str(e))

    sink = CsvSink(args.output, header=not args.no_header)
    print(f"Scanning [{start}, {end}] with {workers} worker(s) → {args.output}")
    try:
        result = scan_range(start, end, sink.write_batch, workers=workers,
                            threshold=args.threshold, block_size=args.block_size,
                            progress=not args.quiet)
    except ScanConfigError as e:
        parser.error(str(e))
    except OSError as e:
        print(f"Error: failed to write {args.output}: {e}", file=sys.stderr)
        sys.exit(1)

    print(f"Primes written: {result.primes_written} in {result.flushes} flush(es)")
    if result.skipped:
        print(f"Skipped (not representable): {len(result.skipped)}", file=sys.stderr)
    print(f"Time taken: {result.elapsed:.3f}s")

    try:
        if args.summary:
            for line in summarize_table(args.output).lines():
                print(line)
        if args.submit_url:
            # one row per prime, even if the file holds earlier runs
            records = reconcile(read_records(args.output))
            if submit_results(records, args.submit_url):
                print(f"Results posted to {args.submit_url}")
    except ValueError as e:
        print(f"Error: could not read {args.output}: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
