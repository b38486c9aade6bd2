"""이 파일은 .py 엔트리포인트로 설정을 읽고 드론의 한 번의 실행을 수행합니다."""

import logging
import sys

from drone.adapters.base import DeliveryChannel
from drone.adapters.xmpp import XmppChannel
from drone.core.config import PLUGINS_DIR, load_config, resolve_config_path
from drone.core.errors import (
    ChannelError,
    ConfigInvalidError,
    ConfigMissingError,
    DirectoryMissingError,
)
from drone.core.logging import setup_logging
from drone.core.plugin_loader import PluginLoader, PluginRegistry
from drone.services.orchestrator import Orchestrator

logger = logging.getLogger("drone")


def _close_channel(channel: DeliveryChannel) -> None:
    # 종료 단계의 오류는 기록만 하고 실행 결과(종료 코드)는 바꾸지 않는다.
    try:
        channel.close()
    except ChannelError as exc:
        logger.error("%s", exc)


def main() -> int:
    # 설정 파일이 없거나 잘못되면 메시지를 출력하고 종료한다.
    try:
        config = load_config(resolve_config_path())
    except ConfigMissingError:
        print("Configuration file is missing.")
        return 1
    except ConfigInvalidError as exc:
        print(f"Configuration file is invalid: {exc}")
        return 1

    setup_logging(config.debug_level, config.log_file)

    # 분석 플러그인은 설정 순서대로 로드하고 실패한 것만 제외한다.
    registry = PluginRegistry(PluginLoader(PLUGINS_DIR, logger=logger.getChild("plugins")))
    registry.load_all(config.analysis)

    channel = XmppChannel(config.xmpp, logger=logger.getChild("xmpp"))
    try:
        orchestrator = Orchestrator(config, channel, registry, logger=logger)
    except DirectoryMissingError as exc:
        logger.error("%s", exc)
        _close_channel(channel)
        return 1

    try:
        channel.open()
        logger.info("Starting %s Drone ...", config.plugin_name)
        summary = orchestrator.run()
    finally:
        _close_channel(channel)
    return 0 if summary.channel_active else 1


if __name__ == "__main__":
    sys.exit(main())
