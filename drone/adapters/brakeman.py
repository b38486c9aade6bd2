"""이 파일은 .py Brakeman 어댑터로 JSON 리포트를 이슈 목록으로 변환합니다."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from drone.core.errors import ReportParseError
from drone.core.types import Issue, Report


class BrakemanParser:
    tool = "brakeman"

    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        self.logger = logger or logging.getLogger(__name__)

    def parse_file(self, report_file: Path) -> Report:
        self.logger.info("Parsing json file [%s].", report_file)
        try:
            data = json.loads(Path(report_file).read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError) as exc:
            raise ReportParseError(f"Cannot read {report_file}: {exc}") from exc
        except json.JSONDecodeError as exc:
            raise ReportParseError(f"Malformed JSON in {report_file}: {exc}") from exc
        return self.parse(data, Path(report_file))

    def parse(self, data: Any, report_file: Path) -> Report:
        if not isinstance(data, dict):
            raise ReportParseError(f"{report_file} is not a Brakeman report object")

        warnings = data.get("warnings")
        if not isinstance(warnings, list):
            raise ReportParseError(f"{report_file} has no 'warnings' list")

        issues: List[Issue] = []
        for index, warning in enumerate(warnings):
            if not isinstance(warning, dict):
                raise ReportParseError(f"Warning #{index} in {report_file} is not an object")
            # 원본 속성은 그대로 두고 복사본만 파이프라인에 넘긴다.
            issues.append(dict(warning))

        scan_info = self._section(data, "scan_info", dict, report_file)
        errors = self._section(data, "errors", list, report_file)
        ignored = self._section(data, "ignored_warnings", list, report_file)

        metadata: Dict[str, Any] = {
            "tool": self.tool,
            "scan_info": scan_info,
            "errors": errors,
            "ignored_warnings": len(ignored),
        }
        return Report(source_file=report_file, issues=issues, metadata=metadata)

    @staticmethod
    def _section(data: Dict[str, Any], key: str, expected: type, report_file: Path) -> Any:
        # 비어 있거나 없는 섹션은 빈 값으로, 타입이 다르면 손상된 리포트로 본다.
        value = data.get(key)
        if value is None:
            return expected()
        if not isinstance(value, expected):
            raise ReportParseError(
                f"'{key}' in {report_file} must be {'an object' if expected is dict else 'a list'}"
            )
        return value
