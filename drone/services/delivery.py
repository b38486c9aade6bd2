"""이 파일은 .py 전달 서비스 모듈로 분석 플러그인 적용과 이슈 단위 전송을 담당합니다."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import List, Optional

from drone.adapters.base import DeliveryChannel
from drone.adapters.conviso import build_xml
from drone.core.config import SourceConfig, XmppConfig
from drone.core.errors import AnalysisError, ChannelError
from drone.core.plugin_loader import PluginRegistry
from drone.core.types import Issue, Report


class DeliveryService:
    def __init__(
        self,
        channel: DeliveryChannel,
        registry: PluginRegistry,
        tool_name: str,
        xmpp: XmppConfig,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.channel = channel
        self.registry = registry
        self.tool_name = tool_name
        self.validator_mode = xmpp.validator_mode
        self.acceptance_token = xmpp.acceptance_token
        self.logger = logger or logging.getLogger(__name__)

    def send_structure(self, report: Report, source: SourceConfig) -> bool:
        """Transform and send every issue of ``report``.

        Returns the AND of all per-issue results; a report without issues is
        fully delivered. Raises :class:`AnalysisError` when a bulk plugin fails,
        in which case nothing has been sent.
        """
        issues = self.apply_bulk(report.issues)

        # 각 이슈는 Individual 분석 후 바로 전송하며, 실패해도 나머지는 계속 보낸다.
        results: List[bool] = []
        for position, issue in enumerate(issues):
            try:
                issue = self.apply_individual(issue)
            except AnalysisError as exc:
                self.logger.error("Issue #%d of %s not sent: %s", position, report.source_file, exc)
                results.append(False)
                continue
            results.append(self.send_issue(issue, source))

        return all(results)

    def apply_bulk(self, issues: List[Issue]) -> List[Issue]:
        # Bulk 분석은 리포트당 한 번, 등록 순서대로 앞 결과를 이어받아 실행한다.
        current = list(issues)
        for plugin in self.registry.bulk_plugins():
            try:
                current = list(plugin.analyse(current))
            except Exception as exc:
                raise AnalysisError(f"Bulk analysis {plugin.plugin_id} failed: {exc}") from exc
            for position, issue in enumerate(current):
                if not isinstance(issue, Mapping):
                    raise AnalysisError(
                        f"Bulk analysis {plugin.plugin_id} returned {type(issue).__name__} "
                        f"at position {position} instead of an issue"
                    )
            self.logger.debug("Bulk analysis %s -> %d issues", plugin.plugin_id, len(current))
        return current

    def apply_individual(self, issue: Issue) -> Issue:
        for plugin in self.registry.individual_plugins():
            try:
                issue = plugin.analyse(issue)
            except Exception as exc:
                raise AnalysisError(f"Individual analysis {plugin.plugin_id} failed: {exc}") from exc
            # analyse가 값을 반환하지 않으면 다음 단계로 넘길 이슈가 없다.
            if not isinstance(issue, Mapping):
                raise AnalysisError(
                    f"Individual analysis {plugin.plugin_id} returned {type(issue).__name__} instead of an issue"
                )
        return issue

    def send_issue(self, issue: Issue, source: SourceConfig) -> bool:
        message = build_xml(issue, source, self.tool_name)
        if self.validator_mode:
            # 이전 이슈에 늦게 도착한 응답이 이번 이슈의 응답으로 읽히지 않게 비운다.
            stale = self.channel.discard_pending()
            if stale:
                self.logger.warning("Discarded %d late validator replies", stale)
        try:
            sent = self.channel.send_msg(message)
        except ChannelError as exc:
            self.logger.error("Failed sending issue to importer: %s", exc)
            return False

        if not self.validator_mode:
            return bool(sent)

        # validator 모드에서는 응답에 승인 토큰이 있어야만 성공으로 본다.
        reply = self.channel.receive_msg()
        if reply is not None and self.acceptance_token in reply:
            self.logger.info("VALIDATOR - THIS MESSAGE IS VALID")
            return True
        self.logger.info("VALIDATOR - THIS MESSAGE IS INVALID")
        self.logger.debug("Validator reply: %r", reply)
        return False
