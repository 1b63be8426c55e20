import hashlib
from enum import StrEnum
from typing import Optional

from .am_errors import UnsupportedHashAlgorithm


class AmHashAlgorithm(StrEnum):
    """Digest algorithms supported for OAEP label hashing and MGF1"""

    SHA_1 = "SHA-1"
    SHA_224 = "SHA-224"
    SHA_256 = "SHA-256"
    SHA_384 = "SHA-384"
    SHA_512 = "SHA-512"

    @staticmethod
    def value_of(name: Optional[str]) -> "AmHashAlgorithm":
        """Normalize an algorithm name or alias; an empty name means SHA-1"""
        if not name:
            return AmHashAlgorithm.SHA_1
        if name in _ALIASES:
            return _ALIASES[name]
        try:
            return AmHashAlgorithm(name)
        except ValueError as ex:
            raise UnsupportedHashAlgorithm(
                f"HASH algorithm is not recognized, hashAlgo={name}"
            ) from ex

    @property
    def digest_size(self) -> int:
        """Digest length in bytes"""
        return _DIGEST_SIZES[self]

    def digest(self, data: bytes) -> bytes:
        """Return the digest of data"""
        return hashlib.new(_HASHLIB_NAMES[self], data).digest()


_ALIASES = {
    "SHA1": AmHashAlgorithm.SHA_1,
    "SHA224": AmHashAlgorithm.SHA_224,
    "SHA2-224": AmHashAlgorithm.SHA_224,
    "SHA256": AmHashAlgorithm.SHA_256,
    "SHA2-256": AmHashAlgorithm.SHA_256,
    "SHA384": AmHashAlgorithm.SHA_384,
    "SHA2-384": AmHashAlgorithm.SHA_384,
    "SHA512": AmHashAlgorithm.SHA_512,
    "SHA2-512": AmHashAlgorithm.SHA_512,
}

_HASHLIB_NAMES = {
    AmHashAlgorithm.SHA_1: "sha1",
    AmHashAlgorithm.SHA_224: "sha224",
    AmHashAlgorithm.SHA_256: "sha256",
    AmHashAlgorithm.SHA_384: "sha384",
    AmHashAlgorithm.SHA_512: "sha512",
}

_DIGEST_SIZES = {
    AmHashAlgorithm.SHA_1: 20,
    AmHashAlgorithm.SHA_224: 28,
    AmHashAlgorithm.SHA_256: 32,
    AmHashAlgorithm.SHA_384: 48,
    AmHashAlgorithm.SHA_512: 64,
}
