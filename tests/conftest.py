import pytest

from picklock import PickLock
from tests.vectors import SECURE_PUBLIC_KEY, SMALL_N


@pytest.fixture
def small_lock():
    return PickLock(17, SMALL_N)


@pytest.fixture
def secure_lock():
    return PickLock.from_pem(SECURE_PUBLIC_KEY)
