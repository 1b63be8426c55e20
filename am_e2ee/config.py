"""AM E2EE 설정"""

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

import voluptuous as vol

from .client.am_errors import UnsupportedHashAlgorithm
from .client.am_hash import AmHashAlgorithm
from .const import (
    CONF_DEFAULT_HASH,
    CONF_HOST,
    CONF_LOG_LEVEL,
    CONF_PORT,
    DEFAULT_HASH_ALGORITHM,
    DEFAULT_HOST,
    DEFAULT_LOG_LEVEL,
    DEFAULT_PORT,
    ENV_PREFIX,
)

_LOGGER = logging.getLogger(__name__)


def _hash_algorithm(value) -> AmHashAlgorithm:
    """해시 알고리즘 이름을 검증합니다."""
    try:
        return AmHashAlgorithm.value_of(vol.Coerce(str)(value))
    except UnsupportedHashAlgorithm as ex:
        raise vol.Invalid(f"지원하지 않는 해시 알고리즘입니다: {value}") from ex


CONFIG_SCHEMA = vol.Schema(
    {
        vol.Optional(CONF_HOST, default=DEFAULT_HOST): vol.All(str, vol.Length(min=1)),
        vol.Optional(CONF_PORT, default=DEFAULT_PORT): vol.All(
            vol.Coerce(int), vol.Range(min=1, max=65535)
        ),
        vol.Optional(CONF_DEFAULT_HASH, default=DEFAULT_HASH_ALGORITHM): _hash_algorithm,
        vol.Optional(CONF_LOG_LEVEL, default=DEFAULT_LOG_LEVEL): vol.All(
            vol.Upper, vol.In(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"])
        ),
    }
)


@dataclass(frozen=True)
class AmE2eeConfig:
    """AM E2EE 설정 데이터 클래스입니다."""

    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    default_hash: AmHashAlgorithm = AmHashAlgorithm.SHA_1
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_dict(cls, data: Mapping) -> "AmE2eeConfig":
        """설정 사전을 검증하여 설정 객체를 만듭니다."""
        conf = CONFIG_SCHEMA(dict(data))
        return cls(
            host=conf[CONF_HOST],
            port=conf[CONF_PORT],
            default_hash=conf[CONF_DEFAULT_HASH],
            log_level=conf[CONF_LOG_LEVEL],
        )

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "AmE2eeConfig":
        """AM_E2EE_* 환경 변수에서 설정을 읽습니다."""
        environ = os.environ if environ is None else environ
        data = {}
        for key in (CONF_HOST, CONF_PORT, CONF_DEFAULT_HASH, CONF_LOG_LEVEL):
            value = environ.get(ENV_PREFIX + key.upper())
            if value:
                data[key] = value
        _LOGGER.debug("환경 변수 설정 항목: %s", sorted(data))
        return cls.from_dict(data)
