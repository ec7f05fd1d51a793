"""
Exception types raised by the PickLock recovery engine.

Every failure of a recovery attempt is reported by raising one of these.
Callers that only care whether recovery worked can catch PickLockError.
"""


class PickLockError(Exception):
    """Base class for all PickLock failures."""


class InvalidModulus(PickLockError, ValueError):
    """The key material could not be read as a usable exponent and modulus."""


class FactorizationFailed(PickLockError):
    """No prime pair with p * q == n was found within the iteration cap."""

    def __init__(self, n: int, e: int, reason: str = ''):
        self.n = n
        self.e = e
        message = f"cannot crack the private exponent of the given n {n} and e {e}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class ModularInverseUndefined(PickLockError):
    """The primes were found but e has no inverse modulo phi."""

    def __init__(self, phi: int, e: int):
        self.phi = phi
        self.e = e
        super().__init__(f"cannot calculate private exponent for phi {phi} and e {e}")


class IntegerConversionFailed(PickLockError, TypeError):
    """A computed value could not be used as a non-negative integer."""
