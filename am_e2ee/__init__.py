"""AM E2EE PIN 암호화 모듈"""

from .client.am_errors import (
    AmE2eeError,
    InvalidPublicKey,
    InvalidServerRandom,
    MessageTooLong,
    RandomGenerationFailure,
    UnsupportedHashAlgorithm,
)
from .client.am_hash import AmHashAlgorithm
from .client.am_pin import AmE2ee, AmEncryptionResult, encrypt_pin_for_am
from .client.am_random import RandomSource, SecureRandom

__all__ = [
    "AmE2ee",
    "AmE2eeError",
    "AmEncryptionResult",
    "AmHashAlgorithm",
    "InvalidPublicKey",
    "InvalidServerRandom",
    "MessageTooLong",
    "RandomGenerationFailure",
    "RandomSource",
    "SecureRandom",
    "UnsupportedHashAlgorithm",
    "encrypt_pin_for_am",
]
