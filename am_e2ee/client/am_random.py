import os
from typing import Protocol

from .am_errors import RandomGenerationFailure


class RandomSource(Protocol):
    """Source of random bytes used for OAEP seeds and labels"""

    def fill_random(self, buffer: bytearray) -> None:
        """Overwrite every byte of buffer with random data"""


class SecureRandom:
    """CSPRNG backed by os.urandom, safe to share between threads"""

    def fill_random(self, buffer: bytearray) -> None:
        try:
            buffer[:] = os.urandom(len(buffer))
        except (OSError, NotImplementedError) as ex:
            raise RandomGenerationFailure("Secure random source is unavailable") from ex


def random_bytes(source: RandomSource, length: int) -> bytes:
    """Draw length bytes from source"""
    buffer = bytearray(length)
    source.fill_random(buffer)
    return bytes(buffer)
