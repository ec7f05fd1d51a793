"""
Arithmetic primitives used by both recovery algorithms.

Thin wrappers around gmpy2 and pycryptodome so the algorithms never touch
the libraries directly and tests can swap the randomized pieces out.
"""

from typing import Callable, Optional

import gmpy2
from Crypto.Math.Primality import generate_probable_safe_prime
from Crypto.Util.number import getPrime

# Miller-Rabin rounds for the probable-prime test
PRIMALITY_ROUNDS = 25

# Smallest size generate_probable_safe_prime accepts
SAFE_PRIME_MIN_BITS = 161

PrimeSource = Callable[[int], int]
PrimalityTest = Callable[[int], bool]


def isqrt_ceil(n: int) -> gmpy2.mpz:
    """
    Smallest integer a with a * a >= n.

    Args:
        n: Non-negative integer

    Returns:
        ceil(sqrt(n)) as an mpz
    """
    root = gmpy2.isqrt(n)
    if root * root < n:
        root += 1
    return root


def is_perfect_square(r: int) -> bool:
    """Check whether r is the square of an integer. Negative values never are."""
    if r < 0:
        return False
    return bool(gmpy2.is_square(r))


def is_probable_prime(n: int, rounds: int = PRIMALITY_ROUNDS) -> bool:
    """
    Probabilistic primality test.

    Args:
        n: Number to test
        rounds: Number of Miller-Rabin rounds

    Returns:
        True if n is probably prime, False if it is certainly composite
    """
    if n < 2:
        return False
    return bool(gmpy2.is_prime(n, rounds))


def modular_inverse(a: int, m: int) -> Optional[int]:
    """
    Calculate the modular multiplicative inverse of a modulo m.

    Returns:
        The inverse in [0, m-1], or None when gcd(a, m) != 1
    """
    if m <= 0 or gmpy2.gcd(a, m) != 1:
        return None
    return int(gmpy2.invert(a, m))


def random_prime(bits: int, safe: bool = False) -> int:
    """
    Generate a random prime of exactly `bits` bits from a cryptographic source.

    Args:
        bits: Bit size of the prime, at least 2
        safe: Generate a safe prime (2q + 1 with q prime), at least 3 bits

    Returns:
        The prime as an int

    Raises:
        ValueError: If no prime of the requested size can be generated
    """
    if bits < 2:
        raise ValueError(f"size cannot be less then 2 received {bits}")
    if safe:
        return _random_safe_prime(bits)
    return getPrime(bits)


def _random_safe_prime(bits: int) -> int:
    if bits < 3:
        raise ValueError(f"no safe prime has {bits} bits")
    if bits >= SAFE_PRIME_MIN_BITS:
        return int(generate_probable_safe_prime(exact_bits=bits))
    # pycryptodome refuses small sizes, search 2q + 1 over random q instead
    while True:
        p = 2 * getPrime(bits - 1) + 1
        if is_probable_prime(p):
            return p


def safe_prime_source(bits: int) -> int:
    """Prime source producing safe primes, for use with the strong search."""
    return random_prime(bits, safe=True)
