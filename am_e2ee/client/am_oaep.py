"""RSA-OAEP encoding and encryption (PKCS#1 v2 style, random label per message)"""

import logging

from ..const import OAEP_LABEL_LENGTH
from .am_errors import MessageTooLong
from .am_hash import AmHashAlgorithm
from .am_random import RandomSource, random_bytes
from .am_rsa import RSAKey

_LOGGER = logging.getLogger(__name__)


def mgf1(seed: bytes, length: int, hash_algo: AmHashAlgorithm) -> bytes:
    """Mask generation function MGF1: expand seed into length bytes"""
    if length < 0:
        raise ValueError("MGF1 mask length must be non-negative")
    output = bytearray()
    counter = 0
    while len(output) < length:
        output += hash_algo.digest(seed + counter.to_bytes(4, byteorder="big"))
        counter += 1
    return bytes(output[:length])


def xor(a: bytes, b: bytes) -> bytes:
    if len(a) != len(b):
        raise ValueError("XOR failure: two binaries have different lengths")
    return bytes(x ^ y for x, y in zip(a, b))


def max_message_length(k: int, hash_algo: AmHashAlgorithm) -> int:
    """Largest message that fits a k-byte OAEP block"""
    return k - 2 * hash_algo.digest_size - 2


def oaep_encode(
    k: int,
    label: bytes,
    message: bytes,
    hash_algo: AmHashAlgorithm,
    random_source: RandomSource,
) -> bytes:
    """Return the k-byte OAEP encoding 0x00 || maskedSeed || maskedDB of message"""
    h_len = hash_algo.digest_size
    if len(message) > max_message_length(k, hash_algo):
        raise MessageTooLong("The message to be encrypted is too long")

    ps = bytes(k - len(message) - 2 * h_len - 2)
    db = hash_algo.digest(label) + ps + b"\x01" + message
    seed = random_bytes(random_source, h_len)
    masked_db = xor(db, mgf1(seed, k - h_len - 1, hash_algo))
    masked_seed = xor(seed, mgf1(masked_db, h_len, hash_algo))
    return b"\x00" + masked_seed + masked_db


def encrypt(
    rsa_key: RSAKey,
    label: bytes,
    message: bytes,
    hash_algo: AmHashAlgorithm,
    random_source: RandomSource,
) -> str:
    """OAEP-encode and RSA-encrypt message, returning upper-case hex padded to the modulus width"""
    k = rsa_key.block_size
    encoded = oaep_encode(k, label, message, hash_algo, random_source)
    encrypted = rsa_key.encrypt(encoded)
    return encrypted.zfill(2 * k).upper()


def encrypt_and_gen_label(
    n_hex: str,
    e_hex: str,
    message: bytes,
    hash_algo: AmHashAlgorithm,
    random_source: RandomSource,
) -> str:
    """Encrypt message under a fresh 16-byte label and return "labelHex:ciphertext" """
    rsa_key = RSAKey()
    rsa_key.set_public(n_hex, e_hex)
    # Fail before drawing any randomness
    if len(message) > max_message_length(rsa_key.block_size, hash_algo):
        raise MessageTooLong("The message to be encrypted is too long")
    _LOGGER.debug(
        "RSA-OAEP encrypt: k=%d, hash=%s, message_len=%d",
        rsa_key.block_size,
        hash_algo,
        len(message),
    )

    label = random_bytes(random_source, OAEP_LABEL_LENGTH)
    label_hex = label.hex().upper().zfill(OAEP_LABEL_LENGTH * 2)
    return label_hex + ":" + encrypt(rsa_key, label, message, hash_algo, random_source)
