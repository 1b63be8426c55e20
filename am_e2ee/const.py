"""AM E2EE 상수"""

DOMAIN = "am_e2ee"

# PIN 메시지 포맷
PIN_MESSAGE_FORMAT_VERSION = 0x01
PIN_BLOCK_MARKER = 0xC1
PIN_BLOCK_PAD_BYTE = 0xFF
PIN_BLOCK_SIZE = 8
PIN_MIN_LENGTH = 4
PIN_MAX_LENGTH = 12

# OAEP 라벨 길이 (bytes)
OAEP_LABEL_LENGTH = 16

# 원격 검증 서버와의 호환을 위해 기본값은 SHA-1
DEFAULT_HASH_ALGORITHM = "SHA-1"

CONF_HOST = "host"
CONF_PORT = "port"
CONF_DEFAULT_HASH = "default_hash"
CONF_LOG_LEVEL = "log_level"

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8080
DEFAULT_LOG_LEVEL = "INFO"

ENV_PREFIX = "AM_E2EE_"

ENCRYPT_PIN_PATH = "/api/encrypt-pin"
HEALTH_PATH = "/api/health"

# RSA 공개키 최대 크기 (bits)
RSA_MAX_MODULUS_BITS = 8192
