"""이 파일은 .py XMPP 어댑터로 importer와의 동기식 메시지 송수신을 제공합니다."""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

import slixmpp
from slixmpp.xmlstream.xmlstream import NotConnectedError

from drone.core.config import XmppConfig
from drone.core.errors import ChannelError

from .base import DeliveryChannel

logger = logging.getLogger(__name__)

# 송신 큐가 비워질 때까지 이벤트 루프를 돌리는 시간(초)
FLUSH_DELAY = 0.05


class _ImporterClient(slixmpp.ClientXMPP):
    def __init__(self, jid: str, password: str, importer_address: str) -> None:
        super().__init__(jid, password)
        self.importer = slixmpp.JID(importer_address).bare
        self.session_ready = asyncio.Event()
        self.inbox: asyncio.Queue = asyncio.Queue()
        self.add_event_handler("session_start", self._on_session_start)
        self.add_event_handler("message", self._on_message)
        self.add_event_handler("disconnected", self._on_disconnected)

    async def _on_session_start(self, event) -> None:
        self.send_presence()
        await self.get_roster()
        self.session_ready.set()

    def _on_message(self, msg) -> None:
        # importer가 보낸 응답(chat/normal)만 수신함에 넣는다.
        if msg["type"] not in ("chat", "normal"):
            return
        if msg["from"].bare != self.importer:
            logger.debug("Ignoring message from %s", msg["from"])
            return
        self.inbox.put_nowait(str(msg["body"]))

    def _on_disconnected(self, event) -> None:
        self.session_ready.clear()


class XmppChannel(DeliveryChannel):
    """Blocking XMPP channel to the importer, opened once per run.

    The channel is never reopened; if the session drops mid-run, subsequent
    sends report failure and the affected reports stay in place.
    """

    def __init__(self, config: XmppConfig, logger: Optional[logging.Logger] = None) -> None:
        self.config = config
        self.logger = logger or logging.getLogger(__name__)
        self._loop = asyncio.new_event_loop()
        asyncio.set_event_loop(self._loop)
        self.client = _ImporterClient(config.username, config.password, config.importer_address)
        self._opened = False

    @property
    def active(self) -> bool:
        return self._opened and self.client.session_ready.is_set()

    def open(self) -> bool:
        # 세션이 시작되거나 connect_timeout이 지날 때까지 블록한다.
        self.logger.info("Connecting to XMPP server as %s", self.config.username)
        if self.config.host:
            self.client.connect((self.config.host, self.config.port))
        else:
            self.client.connect()
        try:
            self._loop.run_until_complete(
                asyncio.wait_for(self.client.session_ready.wait(), self.config.connect_timeout)
            )
        except asyncio.TimeoutError:
            self.logger.error(
                "XMPP session not established within %.1fs", self.config.connect_timeout
            )
            self.client.disconnect()
            self._flush()
            return False
        self._opened = True
        self.logger.info("XMPP session established")
        return True

    def send_msg(self, body: str) -> bool:
        if not self.active:
            self.logger.error("Cannot send message: XMPP channel is not active")
            return False
        try:
            self.client.send_message(mto=self.config.importer_address, mbody=body, mtype="chat")
            self._flush()
        except (OSError, NotConnectedError) as exc:
            self.logger.error("Failed sending message to %s: %s", self.config.importer_address, exc)
            return False
        return True

    def receive_msg(self) -> Optional[str]:
        # reply_timeout이 None이면 응답이 올 때까지 무기한 기다린다.
        try:
            return self._loop.run_until_complete(
                asyncio.wait_for(self.client.inbox.get(), self.config.reply_timeout)
            )
        except asyncio.TimeoutError:
            self.logger.warning(
                "No reply from %s within %ss", self.config.importer_address, self.config.reply_timeout
            )
            return None

    def discard_pending(self) -> int:
        # 소켓에 쌓인 스탠자를 먼저 처리한 뒤, 읽히지 않은 응답을 모두 버린다.
        if self._opened:
            self._flush()
        discarded = 0
        while not self.client.inbox.empty():
            self.client.inbox.get_nowait()
            discarded += 1
        return discarded

    def close(self) -> None:
        if self._loop.is_closed():
            return
        try:
            if self._opened:
                self.client.disconnect()
                self._flush()
        except OSError as exc:
            raise ChannelError(f"Error closing XMPP channel: {exc}") from exc
        finally:
            self._opened = False
            self._loop.close()

    def _flush(self) -> None:
        self._loop.run_until_complete(asyncio.sleep(FLUSH_DELAY))
