"""
Primality Testing for Group Parameters

Miller-Rabin used to check moduli handed to the modular-exponentiation
groups. Answers never depend on randomness: the same n always gets the same
witnesses.
"""

import hashlib
from typing import Iterator

_SMALL_PRIMES = (2, 3, 5, 7, 11, 13, 17, 19, 23, 29, 31, 37)

# The bases above decide primality exactly for every n below this bound
_DETERMINISTIC_BOUND = 3317044064679887385961981


def _split(n: int):
    """Write n - 1 as d * 2^s with d odd."""
    d, s = n - 1, 0
    while not d & 1:
        d >>= 1
        s += 1
    return d, s


def _is_witness(a: int, d: int, s: int, n: int) -> bool:
    """True if a proves n composite."""
    x = pow(a, d, n)
    if x == 1 or x == n - 1:
        return False
    for _ in range(s - 1):
        x = x * x % n
        if x == n - 1:
            return False
    return True


def _hashed_bases(n: int, count: int) -> Iterator[int]:
    seed = n.to_bytes((n.bit_length() + 7) // 8, "big")
    for i in range(count):
        h = hashlib.sha256(i.to_bytes(4, "big") + seed).digest()
        yield 2 + int.from_bytes(h, "big") % (n - 3)


def is_probable_prime(n: int, rounds: int = 64) -> bool:
    """
    Miller-Rabin primality test.

    Every n is tested against the first twelve primes as bases, which is
    exact below 3.3 * 10^24. Larger n get rounds extra bases derived from
    SHA-256 of n.

    Args:
        n: Candidate integer
        rounds: Number of hash-derived bases for large n (default: 64)

    Returns:
        bool: False if n is composite, True if n is prime (with error
        probability at most 4^-rounds for large n)

    Example:
        >>> is_probable_prime(2039)
        True
        >>> is_probable_prime(2047)  # 23 * 89
        False
    """
    if n < 2:
        return False
    if n in _SMALL_PRIMES:
        return True
    if any(n % p == 0 for p in _SMALL_PRIMES):
        return False

    d, s = _split(n)
    if any(_is_witness(a, d, s, n) for a in _SMALL_PRIMES):
        return False
    if n < _DETERMINISTIC_BOUND:
        return True
    return not any(_is_witness(a, d, s, n) for a in _hashed_bases(n, rounds))
