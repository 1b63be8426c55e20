"""AM E2EE PIN 암호화 HTTP 엔드포인트"""

import asyncio
import functools
import logging
from typing import Any, Optional

import voluptuous as vol
from aiohttp import web

from .client.am_errors import (
    AmE2eeError,
    InvalidPublicKey,
    InvalidServerRandom,
    MessageTooLong,
    UnsupportedHashAlgorithm,
)
from .client.am_hash import AmHashAlgorithm
from .client.am_pin import AmE2ee
from .client.am_random import RandomSource
from .config import AmE2eeConfig
from .const import ENCRYPT_PIN_PATH, HEALTH_PATH, PIN_MAX_LENGTH, PIN_MIN_LENGTH

_LOGGER = logging.getLogger(__name__)

CONFIG_KEY = web.AppKey("config", AmE2eeConfig)
ENGINE_KEY = web.AppKey("engine", AmE2ee)

MISSING_PARAMS_MESSAGE = "Missing required parameters: e2eeSid, pubKey, serverRandom, pin"
PIN_FORMAT_MESSAGE = (
    f"PIN must be a string between {PIN_MIN_LENGTH} and {PIN_MAX_LENGTH} characters"
)
METHOD_NOT_ALLOWED_MESSAGE = "Method not allowed. Use POST to encrypt PIN."

# 클라이언트 입력으로 인한 오류만 400으로 응답
CLIENT_ERRORS = (
    InvalidPublicKey,
    InvalidServerRandom,
    MessageTooLong,
    UnsupportedHashAlgorithm,
)

_PIN = vol.All(
    str,
    vol.Length(min=PIN_MIN_LENGTH, max=PIN_MAX_LENGTH),
    vol.Match(r"^[0-9]+\Z"),
    msg=PIN_FORMAT_MESSAGE,
)
_REQUIRED_TEXT = vol.All(str, vol.Length(min=1), msg=MISSING_PARAMS_MESSAGE)

ENCRYPT_PIN_SCHEMA = vol.Schema(
    {
        vol.Required("e2eeSid", msg=MISSING_PARAMS_MESSAGE): _REQUIRED_TEXT,
        vol.Required("pubKey", msg=MISSING_PARAMS_MESSAGE): _REQUIRED_TEXT,
        vol.Required("serverRandom", msg=MISSING_PARAMS_MESSAGE): _REQUIRED_TEXT,
        vol.Required("pin", msg=MISSING_PARAMS_MESSAGE): _PIN,
        vol.Optional("newPin"): vol.Any(None, "", _PIN, msg=PIN_FORMAT_MESSAGE),
        vol.Optional("oaepHashAlgo"): vol.Any(None, str),
    },
    extra=vol.ALLOW_EXTRA,
)


def _error(message: str, status: int, **extra: Any) -> web.Response:
    return web.json_response({"error": message, **extra}, status=status)


def _validate(body: Any) -> dict[str, Any]:
    """요청 본문을 검증합니다. 필수 항목 누락을 PIN 형식 오류보다 먼저 확인합니다."""
    if not isinstance(body, dict):
        raise vol.Invalid(MISSING_PARAMS_MESSAGE)
    for key in ("e2eeSid", "pubKey", "serverRandom", "pin"):
        if not body.get(key):
            raise vol.Invalid(MISSING_PARAMS_MESSAGE)
    return ENCRYPT_PIN_SCHEMA(body)


async def async_encrypt_pin(request: web.Request) -> web.Response:
    """PIN을 암호화합니다."""
    if request.content_type != "application/json":
        return _error("Content-Type must be application/json", 400)

    try:
        body = await request.json()
    except ValueError:
        return _error("Invalid JSON format", 400)

    try:
        data = _validate(body)
    except vol.Invalid as ex:
        return _error(ex.msg, 400)

    config = request.app[CONFIG_KEY]
    engine = request.app[ENGINE_KEY]
    try:
        algorithm = (
            AmHashAlgorithm.value_of(data["oaepHashAlgo"])
            if data.get("oaepHashAlgo")
            else config.default_hash
        )
        if data.get("newPin"):
            job = functools.partial(
                engine.encrypt_pin_for_am_change,
                data["e2eeSid"],
                data["pubKey"],
                data["serverRandom"],
                data["pin"],
                data["newPin"],
                algorithm,
            )
        else:
            job = functools.partial(
                engine.encrypt_pin_for_am,
                data["e2eeSid"],
                data["pubKey"],
                data["serverRandom"],
                data["pin"],
                algorithm,
            )
        # RSA 연산이 이벤트 루프를 막지 않도록 executor에서 실행
        encrypted = await asyncio.get_running_loop().run_in_executor(None, job)
    except CLIENT_ERRORS as ex:
        _LOGGER.info("PIN 암호화 요청이 거부되었습니다: %s", type(ex).__name__)
        return _error("Encryption failed", 400, code=type(ex).__name__)
    except AmE2eeError as ex:
        _LOGGER.error("PIN 암호화에 실패했습니다: %s", type(ex).__name__)
        return _error("Encryption failed", 500)
    except Exception:
        _LOGGER.exception("❗PIN 암호화 중 알 수 없는 오류가 발생했습니다.")
        return _error("Internal server error", 500)

    _LOGGER.info("PIN 암호화 완료 (hash=%s)", algorithm)
    return web.json_response(
        {"success": True, "encryptedPin": encrypted, "algorithm": str(algorithm)}
    )


async def async_method_not_allowed(request: web.Request) -> web.Response:
    """POST 이외의 요청을 거절합니다."""
    return _error(METHOD_NOT_ALLOWED_MESSAGE, 405)


async def async_health(request: web.Request) -> web.Response:
    """상태 확인"""
    return web.json_response({"status": "ok"})


def create_app(
    config: Optional[AmE2eeConfig] = None,
    random_source: Optional[RandomSource] = None,
) -> web.Application:
    """aiohttp 애플리케이션을 만듭니다."""
    app = web.Application()
    app[CONFIG_KEY] = config or AmE2eeConfig()
    app[ENGINE_KEY] = AmE2ee(random_source)
    app.router.add_post(ENCRYPT_PIN_PATH, async_encrypt_pin)
    app.router.add_get(ENCRYPT_PIN_PATH, async_method_not_allowed, allow_head=False)
    app.router.add_put(ENCRYPT_PIN_PATH, async_method_not_allowed)
    app.router.add_delete(ENCRYPT_PIN_PATH, async_method_not_allowed)
    app.router.add_get(HEALTH_PATH, async_health)
    return app
