"""
Weak private key recovery using Fermat's factorization method.

If n = p * q with p and q close together, n can be written as a^2 - b^2 with
a just above sqrt(n). With common 2048 bit keys, 100 rounds reliably factor
moduli whose primes differ by up to 2^517, i.e. primes that only differ in
their lower 64 bytes.
"""

import logging
from typing import Optional, Tuple

import gmpy2

from picklock.derivation import derive_private_exponent
from picklock.errors import FactorizationFailed
from picklock.primitives import is_perfect_square, isqrt_ceil

logger = logging.getLogger(__name__)


def fermat_factorization(n: int, max_iter: int) -> Optional[Tuple[int, int]]:
    """
    Search for p, q with p * q == n, starting at a = ceil(sqrt(n)).

    Args:
        n: Modulus to factor
        max_iter: Maximum number of values of a to try

    Returns:
        Tuple of (p, q) with p >= q if successful, None otherwise
    """
    n = gmpy2.mpz(n)
    a = isqrt_ceil(n)

    for i in range(max_iter):
        r = a * a - n
        if is_perfect_square(r):
            b = gmpy2.isqrt(r)
            p = a + b
            q = a - b
            if p * q != n:
                return None
            logger.debug("Fermat square found after %d iterations", i + 1)
            return int(p), int(q)
        a += 1

    return None


def recover_weak(e: int, n: int, max_iter: int) -> int:
    """
    Recover the private exponent of a key whose primes are close together.

    Args:
        e: Public exponent
        n: Modulus
        max_iter: Iteration cap for the Fermat search

    Returns:
        The private exponent d

    Raises:
        FactorizationFailed: If the primes could not be found
        ModularInverseUndefined: If the primes were found but e is not invertible
    """
    factors = fermat_factorization(n, max_iter)
    if factors is None:
        raise FactorizationFailed(n, e, f"no close primes found within {max_iter} iterations")

    p, q = factors
    logger.info("Found factorization with Fermat's method: %d, %d", p, q)
    return derive_private_exponent(p, q, e)
