"""AM E2EE PIN 암호화 서버 실행"""

import logging

from aiohttp import web

from .config import AmE2eeConfig
from .server import create_app

_LOGGER = logging.getLogger(__name__)


def main() -> None:
    """환경 변수 설정으로 서버를 실행합니다."""
    config = AmE2eeConfig.from_env()
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    _LOGGER.info(
        "서버 시작 %s:%d (기본 해시=%s)", config.host, config.port, config.default_hash
    )
    web.run_app(create_app(config), host=config.host, port=config.port, print=None)


if __name__ == "__main__":
    main()
