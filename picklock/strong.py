"""
Strong private key recovery by guessing far apart primes.

Works on the principle that RSA primes are chosen so that:
 -> p * q = n,
 -> p and q are fairly equal in bit size and can vary +/- 1 bit,
 -> the bit sizes of p and q add up to the bit size of n.

Random primes of the expected size are generated and tried as a factor of n.
This is a prototype only. There are far too many primes to check, so finding
the matching pair remains a matter of luck no matter how many are generated.
"""

import logging
import operator
from typing import Callable, NamedTuple, Optional, Set, Tuple

from picklock.derivation import derive_private_exponent
from picklock.errors import FactorizationFailed, IntegerConversionFailed
from picklock.primitives import PrimalityTest, PrimeSource, is_probable_prime, random_prime

logger = logging.getLogger(__name__)

BITS_IN_BYTE = 8
REPORT_EVERY = 25
# n = p * q, so the size of each prime is half the size of n +/- 1 bit
SIZE_ADJUSTMENTS = (-1, 0, 1)


class ProgressEvent(NamedTuple):
    """Snapshot of a running strong search."""
    checked: int
    attempts: int
    delta: int
    bits: int
    final: bool = False


ProgressObserver = Callable[[ProgressEvent], None]


def log_progress(event: ProgressEvent) -> None:
    """Default observer used when reporting is requested without a callback."""
    logger.info("Checked %d primes.", event.checked)


def prime_size_estimate(n: int) -> int:
    """Expected size of each prime of n in bytes."""
    return (n.bit_length() + 7) // BITS_IN_BYTE // 2


def _as_candidate(value) -> int:
    try:
        candidate = operator.index(value)
    except TypeError:
        raise IntegerConversionFailed(f"prime candidate {value!r} is not an integer") from None
    if candidate <= 0:
        raise IntegerConversionFailed(f"prime candidate {candidate} is not a positive integer")
    return candidate


def guess_far_primes(n: int, max_iter: int,
                     prime_source: PrimeSource = random_prime,
                     primality_test: PrimalityTest = is_probable_prime,
                     observer: Optional[ProgressObserver] = None) -> Optional[Tuple[int, int]]:
    """
    Try random primes of the expected size as a factor of n.

    A ValueError from prime_source ends the current size bucket, so sizes it
    cannot serve are skipped.

    Args:
        n: Modulus to factor
        max_iter: Attempts per size bucket
        prime_source: Callable returning a prime of the requested bit size
        primality_test: Callable telling whether the cofactor is probably prime
        observer: Called with a ProgressEvent every REPORT_EVERY attempts and
            once when the search ends

    Returns:
        Tuple of (p, q) if a factorization was found, None otherwise

    Raises:
        IntegerConversionFailed: If prime_source returns something that is not
            a positive integer
    """
    p_size = prime_size_estimate(n)
    checked = 0
    attempts = 0
    delta = bits = 0
    result = None

    for delta in SIZE_ADJUSTMENTS:
        bits = p_size * BITS_IN_BYTE - delta
        if bits < 2:
            logger.debug("Skipping %d bit candidates, no such primes", bits)
            continue

        tried: Set[int] = set()
        for _ in range(max_iter):
            attempts += 1
            try:
                candidate = prime_source(bits)
            except ValueError as exc:
                logger.debug("No %d bit candidates: %s", bits, exc)
                attempts -= 1
                break
            p = _as_candidate(candidate)
            if p not in tried:
                tried.add(p)
                q = n // p
                if p * q == n and primality_test(q):
                    result = (p, q)

            if observer is not None and attempts % REPORT_EVERY == 0:
                observer(ProgressEvent(checked + len(tried), attempts, delta, bits))
            if result is not None:
                break

        checked += len(tried)
        if result is not None:
            break

    if observer is not None:
        observer(ProgressEvent(checked, attempts, delta, bits, final=True))
    return result


def recover_strong(e: int, n: int, max_iter: int,
                   prime_source: PrimeSource = random_prime,
                   primality_test: PrimalityTest = is_probable_prime,
                   observer: Optional[ProgressObserver] = None) -> int:
    """
    Recover the private exponent of a key by guessing one of its primes.

    Args:
        e: Public exponent
        n: Modulus
        max_iter: Attempts per size bucket
        prime_source: Source of random prime candidates
        primality_test: Probable-prime test applied to the cofactor
        observer: Optional progress callback

    Returns:
        The private exponent d

    Raises:
        FactorizationFailed: If no matching pair was found
        ModularInverseUndefined: If the pair was found but e is not invertible
        IntegerConversionFailed: If a candidate is not a positive integer
    """
    factors = guess_far_primes(n, max_iter, prime_source, primality_test, observer)

    # the attempt loops may be exhausted without a match
    if factors is None or factors[0] * factors[1] != n:
        raise FactorizationFailed(n, e, f"no prime pair found within {max_iter} attempts per size")

    p, q = factors
    logger.info("Found factorization by prime guessing: %d, %d", p, q)
    return derive_private_exponent(p, q, e)
