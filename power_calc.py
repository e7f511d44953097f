"""Second, third and fourth powers of a prime, kept exact with gmpy2."""

from __future__ import annotations

import operator
from dataclasses import dataclass

import gmpy2


@dataclass(frozen=True)
class PrimeRecord:
    prime: int
    squared: str
    cubed: str
    to_fourth_power: str

    def as_row(self) -> list[str]:
        return [str(self.prime), self.squared, self.cubed, self.to_fourth_power]

    def as_dict(self) -> dict:
        return {
            "prime": self.prime,
            "squared": self.squared,
            "cubed": self.cubed,
            "to_fourth_power": self.to_fourth_power,
        }


def calculate_powers(n) -> tuple[gmpy2.mpz, gmpy2.mpz, gmpy2.mpz] | None:
    """Return ``(n**2, n**3, n**4)`` as ``mpz``, or ``None`` if ``n`` is not an integer."""
    try:
        big_n = gmpy2.mpz(operator.index(n))
    except TypeError:
        return None
    squared = big_n * big_n
    cubed = squared * big_n
    to_fourth_power = squared * squared
    return squared, cubed, to_fourth_power


def make_record(n) -> PrimeRecord | None:
    powers = calculate_powers(n)
    if powers is None:
        return None
    squared, cubed, to_fourth_power = powers
    return PrimeRecord(
        prime=operator.index(n),
        squared=gmpy2.digits(squared, 10),
        cubed=gmpy2.digits(cubed, 10),
        to_fourth_power=gmpy2.digits(to_fourth_power, 10),
    )
