"""
Pytest Configuration and Shared Fixtures

Provides fixtures shared by all tests:
- ECC / Schnorr engine instances
- A handful of random private keys (bytes and int forms)
- Fixed AES-256 key and IV
"""

import os
import sys

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from purecrypto import ECC, Schnorr, random_private_key
from purecrypto.utils import bytes_to_int


@pytest.fixture(scope="session")
def ecc():
    return ECC()


@pytest.fixture(scope="session")
def schnorr():
    return Schnorr()


@pytest.fixture(scope="session")
def private_keys():
    """Three independent random 32-byte private keys."""
    return [random_private_key() for _ in range(3)]


@pytest.fixture(scope="session")
def private_scalars(private_keys):
    return [bytes_to_int(k) for k in private_keys]


@pytest.fixture
def aes_key():
    return bytes(range(32))


@pytest.fixture
def aes_iv():
    return bytes(range(16))
