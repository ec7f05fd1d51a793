"""
PickLock: an imprint of a public RSA key used to brute force its private exponent.

If this tool cracks your key, you are using an insecure RSA key generator.
"""

import logging
import operator
from typing import Optional, Union

from Crypto.Util.number import bytes_to_long

from picklock.errors import InvalidModulus
from picklock.keys import load_public_numbers
from picklock.primitives import PrimalityTest, PrimeSource, is_probable_prime, random_prime
from picklock.strong import ProgressObserver, log_progress, recover_strong
from picklock.weak import recover_weak

logger = logging.getLogger(__name__)

MAX_ITERATIONS = 1000


def _byte_length(value: int) -> int:
    return (value.bit_length() + 7) // 8


def _checked_cap(max_iter: int) -> int:
    try:
        max_iter = operator.index(max_iter)
    except TypeError:
        raise ValueError(f"max_iter must be an integer, got {max_iter!r}") from None
    if max_iter < 0:
        raise ValueError(f"max_iter must not be negative, got {max_iter}")
    return max_iter


class PickLock:
    """
    Holds the public exponent and modulus of one audited key.

    e and n are fixed for the lifetime of the instance. max_iter caps both
    searches and is read once at the start of every recovery call.
    """

    def __init__(self, e: int, n: int, max_iter: int = MAX_ITERATIONS):
        try:
            e = operator.index(e)
            n = operator.index(n)
        except TypeError:
            raise InvalidModulus(f"exponent and modulus must be integers, got {type(e).__name__} "
                                 f"and {type(n).__name__}") from None
        if n <= 0:
            raise InvalidModulus(f"modulus must be positive, got {n}")
        if e < 0:
            raise InvalidModulus(f"exponent must not be negative, got {e}")

        self._e = e
        self._n = n
        self.alter_max_iter(max_iter)

    @classmethod
    def from_exponent_and_modulus(cls, e: int, n: int) -> 'PickLock':
        """Straight forward way to create a PickLock from a publicly known exponent and modulus."""
        return cls(e, n)

    @classmethod
    def from_bytes(cls, exponent: bytes, modulus: bytes) -> 'PickLock':
        """
        Create a PickLock from big-endian unsigned encodings of e and n.

        Args:
            exponent: Public exponent bytes
            modulus: Modulus bytes

        Returns:
            A new PickLock

        Raises:
            InvalidModulus: If either value is not a byte buffer or the modulus encodes zero
        """
        for value in (exponent, modulus):
            if not isinstance(value, (bytes, bytearray, memoryview)):
                raise InvalidModulus(f"exponent and modulus must be byte buffers, got {type(value).__name__}")
        return cls(bytes_to_long(bytes(exponent)), bytes_to_long(bytes(modulus)))

    @classmethod
    def from_pem(cls, rsa_pem: Union[str, bytes]) -> 'PickLock':
        """Create a PickLock from a PEM encoded RSA public key."""
        e, n = load_public_numbers(rsa_pem)
        return cls(e, n)

    @property
    def e(self) -> int:
        return self._e

    @property
    def n(self) -> int:
        return self._n

    @property
    def max_iter(self) -> int:
        return self._max_iter

    def alter_max_iter(self, max_iter: int) -> None:
        """
        Alter the safety cap on how many iterations a brute force search may perform.

        Badly picked p and q can very likely be recalculated within 100
        iterations, so the default of 1000 is well above what is expected to
        be needed. A cap of 0 makes every search fail immediately.

        Raises:
            ValueError: If max_iter is negative or not an integer
        """
        self._max_iter = _checked_cap(max_iter)

    def _cap(self, max_iter: Optional[int]) -> int:
        if max_iter is None:
            return self._max_iter
        return _checked_cap(max_iter)

    def try_weak(self, max_iter: Optional[int] = None) -> int:
        """
        Attempt to lock pick a weak private key by finding close p and q primes.

        Args:
            max_iter: Iteration cap for this call only, defaults to self.max_iter

        Returns:
            The private exponent d, to be encoded by the caller

        Raises:
            FactorizationFailed: If no close primes were found
            ModularInverseUndefined: If e has no inverse modulo phi
        """
        cap = self._cap(max_iter)
        logger.debug("Starting weak lock pick of %s", self)
        return recover_weak(self._e, self._n, cap)

    def try_strong(self, report: bool = False,
                   observer: Optional[ProgressObserver] = None,
                   max_iter: Optional[int] = None,
                   prime_source: Optional[PrimeSource] = None,
                   primality_test: Optional[PrimalityTest] = None) -> int:
        """
        Attempt to lock pick a strong private key by guessing far apart primes.

        It is not guaranteed to work at all. Two calls on the same key may
        take a different number of attempts or fail where the other succeeded.

        Args:
            report: Log the number of checked primes every 25 attempts
            observer: Progress callback receiving ProgressEvent values,
                used instead of the log when given
            max_iter: Attempts per size bucket for this call only
            prime_source: Replacement for the random prime generator
            primality_test: Replacement for the probable-prime test

        Returns:
            The private exponent d

        Raises:
            FactorizationFailed: If no matching pair was found
            ModularInverseUndefined: If e has no inverse modulo phi
            IntegerConversionFailed: If a prime candidate is not a positive integer
        """
        cap = self._cap(max_iter)
        if observer is None and report:
            observer = log_progress
        logger.debug("Starting strong lock pick of %s", self)
        return recover_strong(
            self._e, self._n, cap,
            prime_source=prime_source or random_prime,
            primality_test=primality_test or is_probable_prime,
            observer=observer,
        )

    # Descriptive aliases
    try_lock_pick_weak_private = try_weak
    try_lock_pick_strong_private = try_strong

    def __str__(self) -> str:
        return (f"e: {self._e} [ bytes {_byte_length(self._e)} ], "
                f"n: {self._n} [ bytes {_byte_length(self._n)} ], iter: {self.max_iter},")

    def __repr__(self) -> str:
        return f"PickLock(e={self._e}, n={self._n}, max_iter={self.max_iter})"
