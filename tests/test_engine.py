import pytest

from picklock import MAX_ITERATIONS, InvalidModulus, PickLock
from tests.vectors import SECURE_PUBLIC_KEY, SMALL_N, sequence_source


def test_defaults(small_lock):
    assert small_lock.e == 17
    assert small_lock.n == SMALL_N
    assert small_lock.max_iter == MAX_ITERATIONS == 1000


def test_from_bytes():
    lock = PickLock.from_bytes(b'\x01\x00\x01', SMALL_N.to_bytes(2, 'big'))
    assert lock.e == 65537
    assert lock.n == SMALL_N


def test_from_pem(secure_lock):
    assert secure_lock.e == 65537
    assert secure_lock.n.bit_length() == 512


@pytest.mark.parametrize('e, n', [(17, 0), (17, -3233), (-17, SMALL_N), (17, 'abc'), (17.0, SMALL_N)])
def test_rejects_invalid_numbers(e, n):
    with pytest.raises(InvalidModulus):
        PickLock(e, n)


def test_rejects_empty_modulus_bytes():
    with pytest.raises(InvalidModulus):
        PickLock.from_bytes(b'\x03', b'')


@pytest.mark.parametrize('exponent, modulus', [
    ('\x03', 'n'),
    (3, SMALL_N.to_bytes(2, 'big')),
    (b'\x03', SMALL_N),
    (b'\x03', [12, 161]),
])
def test_rejects_non_bytes(exponent, modulus):
    with pytest.raises(InvalidModulus):
        PickLock.from_bytes(exponent, modulus)


def test_from_bytes_accepts_buffers():
    lock = PickLock.from_bytes(bytearray(b'\x11'), memoryview(SMALL_N.to_bytes(2, 'big')))
    assert (lock.e, lock.n) == (17, SMALL_N)


def test_invalid_modulus_is_a_value_error():
    with pytest.raises(ValueError):
        PickLock(3, 0)


def test_rejects_garbage_pem():
    with pytest.raises(InvalidModulus):
        PickLock.from_pem(SECURE_PUBLIC_KEY.replace('MFww', 'XXXX'))


def test_key_is_read_only(small_lock):
    with pytest.raises(AttributeError):
        small_lock.n = 15
    with pytest.raises(AttributeError):
        small_lock.e = 3
    with pytest.raises(AttributeError):
        small_lock.max_iter = -5
    assert small_lock.max_iter == MAX_ITERATIONS


def test_alter_max_iter(small_lock):
    small_lock.alter_max_iter(5)
    assert small_lock.max_iter == 5
    small_lock.alter_max_iter(0)
    assert small_lock.max_iter == 0


@pytest.mark.parametrize('cap', [-1, 1.5, '10'])
def test_alter_max_iter_rejects_invalid(small_lock, cap):
    with pytest.raises(ValueError):
        small_lock.alter_max_iter(cap)
    assert small_lock.max_iter == MAX_ITERATIONS


def test_per_call_cap_leaves_engine_unchanged(small_lock):
    small_lock.alter_max_iter(0)
    assert small_lock.try_weak(max_iter=1) == 2753
    assert small_lock.try_strong(max_iter=1, prime_source=sequence_source([61])) == 2753
    assert small_lock.max_iter == 0

    with pytest.raises(ValueError):
        small_lock.try_weak(max_iter=-1)


def test_aliases(small_lock):
    assert small_lock.try_lock_pick_weak_private() == 2753
    assert small_lock.try_lock_pick_strong_private(False, prime_source=sequence_source([53])) == 2753


def test_str(small_lock):
    assert str(small_lock) == "e: 17 [ bytes 1 ], n: 3233 [ bytes 2 ], iter: 1000,"
    assert repr(small_lock) == "PickLock(e=17, n=3233, max_iter=1000)"
