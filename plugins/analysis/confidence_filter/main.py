"""이 파일은 .py Bulk 분석 플러그인으로 신뢰도가 낮은 경고를 제외합니다."""

from typing import List, Literal

from drone.core.plugin_base import BulkAnalysis, PluginOptions
from drone.core.types import Issue

# Brakeman 신뢰도 순위 (작을수록 확실함). 구버전의 Weak와 신버전의 Low는 같은 순위이다.
CONFIDENCE_RANK = {"high": 0, "medium": 1, "weak": 2, "low": 2}


class ConfidenceFilterOptions(PluginOptions):
    min_confidence: Literal["High", "Medium", "Weak", "Low"] = "Weak"
    # 신뢰도 값이 없는 경고를 유지할지 여부
    keep_unknown: bool = True


class ConfidenceFilter(BulkAnalysis):
    options_model = ConfidenceFilterOptions

    def analyse(self, issues: List[Issue]) -> List[Issue]:
        threshold = CONFIDENCE_RANK[self.options.min_confidence.lower()]
        kept: List[Issue] = []
        for issue in issues:
            rank = CONFIDENCE_RANK.get(str(issue.get("confidence", "")).strip().lower())
            if rank is None:
                if self.options.keep_unknown:
                    kept.append(issue)
                continue
            if rank <= threshold:
                kept.append(issue)
        dropped = len(issues) - len(kept)
        if dropped:
            self.logger.info("Dropped %d warnings below %s confidence", dropped, self.options.min_confidence)
        return kept
