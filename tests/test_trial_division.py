import pytest
from sympy import isprime, nextprime

from trial_division import NATIVE_LIMIT, is_prime, is_prime_big, is_prime_native


@pytest.mark.parametrize("n", [0, 1])
def test_zero_and_one_are_not_prime(n):
    assert not is_prime(n)
    assert not is_prime_big(n)


@pytest.mark.parametrize("n", [2, 3])
def test_two_and_three_are_prime(n):
    assert is_prime(n)
    assert is_prime_big(n)


def test_fast_and_big_paths_agree_up_to_10000():
    for n in range(10_001):
        assert is_prime_native(n) == is_prime_big(n), n


def test_matches_sympy_up_to_10000():
    for n in range(10_001):
        assert is_prime(n) == isprime(n), n


def test_matches_sympy_above_one_million():
    for n in range(10**6, 10**6 + 2000):
        assert is_prime(n) == isprime(n), n


def test_squares_of_primes_rejected():
    # limit is isqrt(n) + 1, so a square's root must still be tested
    for p in (5, 7, 11, 13, 101, 65521):
        assert not is_prime(p * p)


def test_mersenne_31():
    assert is_prime(2**31 - 1)


def test_big_path_used_above_native_limit():
    # 2**64 + 1 = 274177 * 67280421310721
    assert not is_prime(NATIVE_LIMIT + 1)
    assert not is_prime(2**70)
    assert not is_prime(3**41)


def test_big_path_on_semiprime():
    q = nextprime(2**50)
    n = 1_000_003 * q
    assert n >= NATIVE_LIMIT
    assert not is_prime(n)


def test_native_rejects_out_of_range():
    with pytest.raises(ValueError):
        is_prime_native(NATIVE_LIMIT)


def test_negative_rejected():
    with pytest.raises(ValueError):
        is_prime(-7)
