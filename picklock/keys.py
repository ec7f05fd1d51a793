"""
Key material boundary: reading public keys and encoding recovered values.
"""

from enum import Enum
from typing import Tuple, Union

from Crypto.IO import PEM
from Crypto.Util.number import long_to_bytes
from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives.asymmetric import rsa
from cryptography.hazmat.primitives.serialization import load_pem_public_key

from picklock.errors import InvalidModulus


class KeyType(Enum):
    """Label of the PEM block a value is wrapped in."""
    PRIVATE = 'PRIVATE KEY'
    PUBLIC = 'PUBLIC KEY'

    def __str__(self) -> str:
        return self.value


def load_public_numbers(pem_data: Union[str, bytes]) -> Tuple[int, int]:
    """
    Parse a PEM-formatted RSA public key.

    Args:
        pem_data: The PEM key data, SubjectPublicKeyInfo or PKCS#1

    Returns:
        Tuple of (e, n)

    Raises:
        InvalidModulus: If the data is not an RSA public key
    """
    if isinstance(pem_data, str):
        pem_data = pem_data.encode()

    try:
        key = load_pem_public_key(pem_data.strip())
    except (ValueError, TypeError, UnsupportedAlgorithm) as e:
        raise InvalidModulus(f"cannot read RSA public key: {e}") from e

    if not isinstance(key, rsa.RSAPublicKey):
        raise InvalidModulus(f"expected an RSA public key, got {type(key).__name__}")

    public_numbers = key.public_numbers()
    return public_numbers.e, public_numbers.n


def to_bytes(value: int) -> bytes:
    """Big-endian unsigned encoding of a recovered value."""
    if value < 0:
        raise ValueError(f"cannot encode negative value {value}")
    return long_to_bytes(value)


def to_pem(value: int, key_type: KeyType = KeyType.PRIVATE) -> str:
    """
    Wrap the big-endian bytes of value in a PEM block.

    Args:
        value: Integer to encode, usually the recovered private exponent
        key_type: Label of the PEM block

    Returns:
        PEM text ending with a newline
    """
    return PEM.encode(to_bytes(value), str(key_type)) + '\n'
