"""이 파일은 .py 테스트 모듈로 서버 없이 XMPP 채널의 상태, 응답 라우팅, 대기 시간을 검증합니다."""

from pathlib import Path
from typing import List

import pytest

from drone.adapters.xmpp import XmppChannel
from drone.core.config import XmppConfig
from drone.services.delivery import DeliveryService

from conftest import make_config, warning

IMPORTER = "validator@example.com"


@pytest.fixture
def xmpp() -> XmppChannel:
    config = XmppConfig(
        username="drone@example.com",
        password="secret",
        importer_address=f"{IMPORTER}/importer",
        reply_timeout=0.05,
    )
    channel = XmppChannel(config)
    yield channel
    # 실제 연결이 없으므로 disconnect 없이 루프만 닫는다.
    channel._opened = False
    channel.close()


def _deliver(channel: XmppChannel, body: str, sender: str = f"{IMPORTER}/importer", mtype: str = "chat") -> None:
    message = channel.client.make_message(mto="drone@example.com", mbody=body, mtype=mtype, mfrom=sender)
    channel.client._on_message(message)


def _start_session(channel: XmppChannel) -> List[dict]:
    sent: List[dict] = []
    channel.client.send_message = lambda **kwargs: sent.append(kwargs)
    channel.client.session_ready.set()
    channel._opened = True
    return sent


def test_unopened_channel_is_inactive_and_refuses_to_send(xmpp: XmppChannel) -> None:
    assert xmpp.active is False
    assert xmpp.send_msg("<scan/>") is False


def test_session_loss_makes_channel_inactive(xmpp: XmppChannel) -> None:
    _start_session(xmpp)
    assert xmpp.active is True

    xmpp.client._on_disconnected(None)
    assert xmpp.active is False


def test_send_msg_addresses_importer(xmpp: XmppChannel) -> None:
    sent = _start_session(xmpp)

    assert xmpp.send_msg("<scan/>") is True
    assert sent == [{"mto": f"{IMPORTER}/importer", "mbody": "<scan/>", "mtype": "chat"}]


def test_receive_msg_times_out(xmpp: XmppChannel) -> None:
    assert xmpp.receive_msg() is None


def test_only_importer_replies_are_queued(xmpp: XmppChannel) -> None:
    _deliver(xmpp, "[OK] spoofed", sender="someone@example.com/x")
    _deliver(xmpp, "[OK] headline", mtype="headline")
    _deliver(xmpp, "[OK] real", sender=f"{IMPORTER}/other-resource")

    assert xmpp.receive_msg() == "[OK] real"
    assert xmpp.receive_msg() is None


def test_discard_pending_drops_waiting_replies(xmpp: XmppChannel) -> None:
    _deliver(xmpp, "[OK] one")
    _deliver(xmpp, "[OK] two")

    assert xmpp.discard_pending() == 2
    assert xmpp.receive_msg() is None


def test_late_reply_is_not_credited_to_next_issue(xmpp: XmppChannel) -> None:
    sent = _start_session(xmpp)
    config = make_config([Path(".")], importer_address=IMPORTER)
    service = DeliveryService(xmpp, registry=_NoPlugins(), tool_name="brakeman", xmpp=config.xmpp)
    source = config.sources[0]

    # 첫 이슈는 응답 없이 시간 초과된다.
    assert service.send_issue(warning("1"), source) is False

    # 첫 이슈의 응답이 뒤늦게 도착해도 두 번째 이슈의 승인으로 쓰이지 않는다.
    _deliver(xmpp, "[OK] reply for issue 1")
    assert service.send_issue(warning("2"), source) is False

    # 제때 도착한 응답은 해당 이슈의 결과가 된다.
    xmpp.client.send_message = lambda **kwargs: (sent.append(kwargs), _deliver(xmpp, "[OK]"))
    assert service.send_issue(warning("3"), source) is True
    assert len(sent) == 3


class _NoPlugins:
    def bulk_plugins(self):
        return []

    def individual_plugins(self):
        return []
