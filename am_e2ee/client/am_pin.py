import logging
import string
from dataclasses import dataclass
from typing import Optional

from ..const import (
    PIN_BLOCK_MARKER,
    PIN_BLOCK_PAD_BYTE,
    PIN_BLOCK_SIZE,
    PIN_MESSAGE_FORMAT_VERSION,
)
from .am_errors import InvalidPublicKey, InvalidServerRandom
from .am_hash import AmHashAlgorithm
from .am_oaep import encrypt_and_gen_label
from .am_random import RandomSource, SecureRandom

_HEX_DIGITS = frozenset(string.hexdigits)

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class AmEncryptionResult:
    """PIN 암호화 결과를 나타내는 데이터 클래스입니다."""

    session_id: str
    encrypted_pin: str
    encrypted_change_pin: str = ""

    def __str__(self) -> str:
        """전송용 문자열로 변환합니다."""
        result = self.session_id + "," + self.encrypted_pin
        if self.encrypted_change_pin:
            result = result + "," + self.encrypted_change_pin
        return result


class AmE2ee:
    """AM 서버로 보낼 PIN을 RSA-OAEP로 암호화하는 클래스입니다."""

    def __init__(self, random_source: Optional[RandomSource] = None):
        """AmE2ee 클래스를 초기화합니다."""
        self.random_source = random_source or SecureRandom()

    @staticmethod
    def create_pin_block(pin: bytes) -> bytes:
        """PIN 블록(0xC1, 길이, PIN, 0xFF 패딩)을 만듭니다."""
        block = bytearray([PIN_BLOCK_MARKER, len(pin)])
        block += pin
        while len(block) % PIN_BLOCK_SIZE != 0:
            block.append(PIN_BLOCK_PAD_BYTE)
        return bytes(block)

    @staticmethod
    def format_pin_message(pin: str, server_random: str) -> bytes:
        """포맷 버전, PIN 블록, 서버 난수를 이어 붙인 PIN 메시지를 만듭니다."""
        # bytes.fromhex() would also skip whitespace
        if not _HEX_DIGITS.issuperset(server_random):
            raise InvalidServerRandom("Server random is not a valid hex string")
        try:
            server_random_bytes = bytes.fromhex(server_random)
        except ValueError as ex:
            raise InvalidServerRandom("Server random is not a valid hex string") from ex
        pin_block = AmE2ee.create_pin_block(pin.encode("utf-8"))
        return bytes([PIN_MESSAGE_FORMAT_VERSION]) + pin_block + server_random_bytes

    @staticmethod
    def format_encryption_result(
        e2ee_sid: str, encrypted_pin: str, encrypted_change_pin: str = ""
    ) -> str:
        """세션 ID와 암호문을 쉼표로 연결합니다."""
        return str(AmEncryptionResult(e2ee_sid, encrypted_pin, encrypted_change_pin))

    @staticmethod
    def split_public_key(pub_key: str) -> tuple[str, str]:
        """'모듈러스,지수' 형식의 16진수 공개키를 나눕니다."""
        parts = (pub_key or "").split(",")
        if len(parts) < 2:
            raise InvalidPublicKey("Invalid RSA public key")
        return parts[0].strip(), parts[1].strip()

    def encrypt_pin(
        self, pub_key: str, server_random: str, pin: str, hash_algo: Optional[str] = None
    ) -> str:
        """PIN을 암호화하여 "라벨:암호문" 문자열을 반환합니다."""
        algorithm = AmHashAlgorithm.value_of(hash_algo)
        n_hex, e_hex = self.split_public_key(pub_key)
        message = self.format_pin_message(pin, server_random)
        try:
            return encrypt_and_gen_label(n_hex, e_hex, message, algorithm, self.random_source)
        except Exception:
            _LOGGER.warning("RSA-OAEP 암호화 중 오류가 발생했습니다. (hash=%s)", algorithm)
            raise

    def encrypt_pin_for_am(
        self,
        e2ee_sid: str,
        pub_key: str,
        server_random: str,
        pin: str,
        hash_algo: Optional[str] = None,
    ) -> str:
        """PIN을 암호화하여 "세션ID,라벨:암호문" 문자열을 반환합니다."""
        encrypted_pin = self.encrypt_pin(pub_key, server_random, pin, hash_algo)
        return self.format_encryption_result(e2ee_sid, encrypted_pin)

    def encrypt_pin_for_am_change(
        self,
        e2ee_sid: str,
        pub_key: str,
        server_random: str,
        pin: str,
        new_pin: str,
        hash_algo: Optional[str] = None,
    ) -> str:
        """PIN 변경용으로 기존 PIN과 새 PIN을 각각 암호화하여 연결합니다."""
        encrypted_pin = self.encrypt_pin(pub_key, server_random, pin, hash_algo)
        encrypted_new_pin = self.encrypt_pin(pub_key, server_random, new_pin, hash_algo)
        return self.format_encryption_result(e2ee_sid, encrypted_pin, encrypted_new_pin)


def encrypt_pin_for_am(
    e2ee_sid: str,
    pub_key: str,
    server_random: str,
    pin: str,
    hash_algo: Optional[str] = None,
) -> str:
    """기본 보안 난수를 사용하여 PIN을 암호화합니다."""
    return AmE2ee().encrypt_pin_for_am(e2ee_sid, pub_key, server_random, pin, hash_algo)
