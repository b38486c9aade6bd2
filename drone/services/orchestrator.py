"""이 파일은 .py 오케스트레이터 서비스 모듈로 스캔, 파싱, 전달, 보관 흐름을 제공합니다."""

import logging
from pathlib import Path
from typing import Optional

from drone.adapters.base import DeliveryChannel
from drone.adapters.brakeman import BrakemanParser
from drone.core.config import DroneConfig, SourceConfig, ensure_directories
from drone.core.errors import AnalysisError, ArchiveError, ReportParseError
from drone.core.plugin_loader import PluginRegistry
from drone.core.storage import ArchiveManager
from drone.core.types import FileOutcome, FileResult, RunSummary

from .delivery import DeliveryService
from .scanner import scan_input_directory


class Orchestrator:
    def __init__(
        self,
        config: DroneConfig,
        channel: DeliveryChannel,
        registry: PluginRegistry,
        parser: Optional[BrakemanParser] = None,
        archive: Optional[ArchiveManager] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        # 실행 전에 입력/보관 디렉터리를 검증한다. 실패는 치명적이다.
        ensure_directories(config)
        self.config = config
        self.channel = channel
        self.registry = registry
        self.logger = logger or logging.getLogger(__name__)
        self.parser = parser or BrakemanParser(logger=self.logger.getChild("parser"))
        self.archive = archive or ArchiveManager(
            config.archive_directory, logger=self.logger.getChild("archive")
        )
        self.delivery = DeliveryService(
            channel,
            registry,
            config.tool_name,
            config.xmpp,
            logger=self.logger.getChild("delivery"),
        )

    def run(self) -> RunSummary:
        # 채널 상태는 실행 시작 시 한 번만 확인한다.
        summary = RunSummary(channel_active=self.channel.active)
        if not summary.channel_active:
            self.logger.error("Delivery channel is not active; nothing will be processed.")
            return summary

        for source in self.config.sources:
            report_files = scan_input_directory(
                source, self.config.report_extension, log=self.logger.getChild("scanner")
            )
            for report_file in report_files:
                summary.results.append(self.process_file(report_file, source))

        self.logger.info(
            "Run finished: %d delivered, %d left for the next run",
            len(summary.delivered),
            len(summary.failed),
        )
        return summary

    def process_file(self, report_file: Path, source: SourceConfig) -> FileResult:
        # DISCOVERED -> PARSED
        try:
            report = self.parser.parse_file(report_file)
        except ReportParseError as exc:
            self.logger.error("Error parsing JSON file: [%s] %s", report_file, exc)
            return FileResult(report_file, FileOutcome.PARSE_ERROR)

        issue_count = len(report.issues)
        # PARSED -> BULK_TRANSFORMED -> DELIVERED | PARTIALLY_FAILED
        try:
            delivered = self.delivery.send_structure(report, source)
        except AnalysisError as exc:
            self.logger.error("Error analysing [%s]: %s", report_file, exc)
            return FileResult(report_file, FileOutcome.ANALYSIS_ERROR, issue_count)

        if not delivered:
            # 일부라도 실패하면 원본을 그대로 두어 다음 실행에서 재시도한다.
            self.logger.warning("Not all issues of [%s] were delivered; file left in place.", report_file)
            return FileResult(report_file, FileOutcome.DELIVERY_FAILED, issue_count)

        # DELIVERED -> COMPRESSED -> ARCHIVED
        try:
            artifact = self.archive.compress_file(report_file)
        except ArchiveError as exc:
            self.logger.error("%s", exc)
            return FileResult(report_file, FileOutcome.ARCHIVE_ERROR, issue_count)
        if not self.archive.relocates:
            return FileResult(report_file, FileOutcome.COMPRESSED, issue_count, artifact)

        try:
            artifact = self.archive.archive_file(artifact)
        except ArchiveError as exc:
            self.logger.error("%s", exc)
            return FileResult(report_file, FileOutcome.COMPRESSED, issue_count, artifact)
        return FileResult(report_file, FileOutcome.ARCHIVED, issue_count, artifact)
