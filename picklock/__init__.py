"""
PickLock recovers the private exponent of RSA keys generated with weak primes.
"""

from picklock.derivation import derive_private_exponent
from picklock.engine import MAX_ITERATIONS, PickLock
from picklock.errors import (FactorizationFailed, IntegerConversionFailed, InvalidModulus,
                             ModularInverseUndefined, PickLockError)
from picklock.keys import KeyType, to_bytes, to_pem
from picklock.strong import ProgressEvent

__version__ = '0.1.0'

__all__ = [
    'MAX_ITERATIONS',
    'FactorizationFailed',
    'IntegerConversionFailed',
    'InvalidModulus',
    'KeyType',
    'ModularInverseUndefined',
    'PickLock',
    'PickLockError',
    'ProgressEvent',
    'derive_private_exponent',
    'to_bytes',
    'to_pem',
]
