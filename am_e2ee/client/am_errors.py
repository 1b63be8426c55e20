class AmE2eeError(Exception):
    """AM E2EE 예외 클래스입니다."""


class InvalidPublicKey(AmE2eeError):
    """RSA 공개키(모듈러스 또는 지수)가 없거나 올바르지 않을 때 발생하는 예외입니다."""


class UnsupportedHashAlgorithm(AmE2eeError):
    """지원하지 않는 해시 알고리즘일 때 발생하는 예외입니다."""


class MessageTooLong(AmE2eeError):
    """PIN 메시지가 OAEP 최대 길이를 넘을 때 발생하는 예외입니다."""


class RandomGenerationFailure(AmE2eeError):
    """보안 난수를 생성하지 못했을 때 발생하는 예외입니다."""


class InvalidServerRandom(AmE2eeError):
    """서버 난수가 올바른 16진수 문자열이 아닐 때 발생하는 예외입니다."""
