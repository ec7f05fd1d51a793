"""Private exponent derivation shared by the weak and strong searches."""

from picklock.errors import ModularInverseUndefined
from picklock.primitives import modular_inverse


def totient(p: int, q: int) -> int:
    """Euler's totient of n = p * q for distinct primes p and q."""
    return (p - 1) * (q - 1)


def derive_private_exponent(p: int, q: int, e: int) -> int:
    """
    Compute the RSA private exponent from a recovered prime pair.

    Args:
        p: First prime factor of n
        q: Second prime factor of n
        e: Public exponent

    Returns:
        d such that e * d == 1 (mod (p-1)(q-1))

    Raises:
        ModularInverseUndefined: If e and phi are not coprime
    """
    phi = totient(int(p), int(q))
    d = modular_inverse(e, phi)
    if d is None:
        raise ModularInverseUndefined(phi, e)
    return d
