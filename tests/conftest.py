"""Pytest fixtures for AM E2EE tests."""
import itertools

import pytest
from Crypto.PublicKey import RSA


class CountingRandom:
    """Deterministic random source that records how many bytes were drawn."""

    def __init__(self, start: int = 0):
        self._counter = itertools.count(start)
        self.bytes_drawn = 0

    def fill_random(self, buffer: bytearray) -> None:
        for i in range(len(buffer)):
            buffer[i] = next(self._counter) & 0xFF
        self.bytes_drawn += len(buffer)


class FailingRandom:
    """Random source that must never be used."""

    def fill_random(self, buffer: bytearray) -> None:
        raise AssertionError("random source should not have been used")


@pytest.fixture(scope="session")
def rsa_1024():
    """Generates a 1024-bit RSA key pair."""
    return RSA.generate(1024)


@pytest.fixture(scope="session")
def rsa_2048():
    """Generates a 2048-bit RSA key pair."""
    return RSA.generate(2048)


@pytest.fixture
def pub_key_1024(rsa_1024):
    """Returns the 1024-bit public key as "<modulusHex>,<exponentHex>"."""
    return f"{rsa_1024.n:x},{rsa_1024.e:x}"


@pytest.fixture
def pub_key_2048(rsa_2048):
    """Returns the 2048-bit public key as "<modulusHex>,<exponentHex>"."""
    return f"{rsa_2048.n:x},{rsa_2048.e:x}"


@pytest.fixture
def counting_random():
    return CountingRandom()


@pytest.fixture
def failing_random():
    return FailingRandom()


@pytest.fixture
def server_random():
    return "00112233445566778899aabbccddeeff"


@pytest.fixture
def make_random():
    """Returns a factory for deterministic random sources."""
    return CountingRandom
