"""이 파일은 .py Individual 분석 플러그인으로 경고의 심각도를 결정합니다."""

from typing import Dict

from pydantic import Field

from drone.core.plugin_base import IndividualAnalysis, PluginOptions
from drone.core.types import Issue


class SeverityOptions(PluginOptions):
    confidence_map: Dict[str, str] = Field(
        default_factory=lambda: {"High": "high", "Medium": "medium", "Weak": "low", "Low": "low"}
    )
    # warning_type별 지정값이 신뢰도 매핑보다 우선한다.
    overrides: Dict[str, str] = Field(default_factory=dict)
    default: str = "info"
    field: str = "severity"


class SeverityClassifier(IndividualAnalysis):
    options_model = SeverityOptions

    def analyse(self, issue: Issue) -> Issue:
        options = self.options
        warning_type = issue.get("warning_type")
        if warning_type in options.overrides:
            severity = options.overrides[warning_type]
        else:
            severity = options.confidence_map.get(str(issue.get("confidence")), options.default)
        return {**issue, options.field: severity}
