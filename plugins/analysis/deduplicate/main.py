"""이 파일은 .py Bulk 분석 플러그인으로 중복 경고를 제거합니다."""

import json
from typing import List, Set

from pydantic import Field

from drone.core.plugin_base import BulkAnalysis, PluginOptions
from drone.core.types import Issue


class DeduplicateOptions(PluginOptions):
    key_fields: List[str] = Field(default_factory=lambda: ["fingerprint"], min_length=1)


class Deduplicate(BulkAnalysis):
    options_model = DeduplicateOptions

    def analyse(self, issues: List[Issue]) -> List[Issue]:
        seen: Set[str] = set()
        unique: List[Issue] = []
        for issue in issues:
            # 키 필드가 하나도 없는 경고는 비교할 수 없으므로 그대로 둔다.
            values = [issue.get(field) for field in self.options.key_fields]
            if all(value is None for value in values):
                unique.append(issue)
                continue
            key = json.dumps(values, sort_keys=True, default=str)
            if key in seen:
                continue
            seen.add(key)
            unique.append(issue)
        return unique
