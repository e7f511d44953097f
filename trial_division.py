#!/usr/bin/env python3
"""Deterministic trial-division primality test.

Candidates are checked against divisors of the form ``6k-1`` and ``6k+1``
(5, 7, 11, 13, 17, 19, ...).  Values below ``2**64`` take a fixed-width
path: the divisors are laid out in ``uint64`` numpy blocks so each block is
a single vectorised modulus.  Anything larger falls back to the same loop on
``gmpy2.mpz`` integers.

There is no probabilistic shortcut here.  The cost is O(sqrt(N)) divisions,
which makes the big-integer path impractical much beyond ``10**24`` or so.
"""

from __future__ import annotations

import math

import gmpy2
import numpy as np

NATIVE_LIMIT = 1 << 64

# number of 6k steps tested per numpy block
DIVISOR_BLOCK = 1 << 15


# ---------------------------------------------------------------------------
# Fixed-width path
# ---------------------------------------------------------------------------

def is_prime_native(n: int) -> bool:
    """Trial division with ``uint64`` arithmetic.  ``n`` must be below ``2**64``."""
    if n < 0 or n >= NATIVE_LIMIT:
        raise ValueError(f"{n} does not fit in 64 bits")
    if n < 2:
        return False
    if n < 4:
        return True
    if n % 2 == 0 or n % 3 == 0:
        return False

    limit = math.isqrt(n) + 1
    nn = np.uint64(n)
    two = np.uint64(2)
    step = 6 * DIVISOR_BLOCK
    for lo in range(5, limit + 1, step):
        i = np.arange(lo, min(lo + step, limit + 1), 6, dtype=np.uint64)
        if not (nn % i).all() or not (nn % (i + two)).all():
            return False
    return True


# ---------------------------------------------------------------------------
# Arbitrary-precision path
# ---------------------------------------------------------------------------

def is_prime_big(n: int) -> bool:
    """Same 6k±1 trial division on ``gmpy2.mpz``; works for any size."""
    n = gmpy2.mpz(n)
    if n <= 1:
        return False
    if n <= 3:
        return True
    if n % 2 == 0 or n % 3 == 0:
        return False

    i = gmpy2.mpz(5)
    while i * i <= n:
        if n % i == 0 or n % (i + 2) == 0:
            return False
        i += 6
    return True


# ---------------------------------------------------------------------------

def is_prime(n: int) -> bool:
    """Return ``True`` iff ``n`` is prime."""
    if n < 0:
        raise ValueError("Negative numbers not supported")
    if n < NATIVE_LIMIT:
        return is_prime_native(n)
    return is_prime_big(n)
