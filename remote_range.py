"""HTTP collaborators: default scan range and result submission."""

from __future__ import annotations

import sys
from typing import Iterable

import requests

from power_calc import PrimeRecord

DEFAULT_RANGE_URL = "http://primegen.io/api/default_range"
SUBMIT_URL = "http://primegen.io/api/post_results"
TIMEOUT = 10.0


def fetch_default_range(url: str = DEFAULT_RANGE_URL, timeout: float = TIMEOUT) -> tuple[int, int]:
    """GET ``{"start": .., "end": ..}`` from ``url``.

    Raises ``requests.RequestException`` on transport errors and ``ValueError``
    when the payload is not a usable range.
    """
    resp = requests.get(url, timeout=timeout)
    resp.raise_for_status()
    data = resp.json()
    try:
        start, end = int(data["start"]), int(data["end"])
    except (KeyError, TypeError) as e:
        raise ValueError(f"malformed range payload: {data!r}") from e
    if start < 0 or end < start:
        raise ValueError(f"invalid range from server: [{start}, {end}]")
    return start, end


def submit_results(records: Iterable[PrimeRecord], url: str = SUBMIT_URL, timeout: float = TIMEOUT) -> bool:
    payload = [r.as_dict() for r in records]
    try:
        resp = requests.post(url, json=payload, timeout=timeout)
        resp.raise_for_status()
    except requests.RequestException as e:
        print(f"ERROR: failed to submit {len(payload)} records to {url}: {e}", file=sys.stderr)
        return False
    return True
