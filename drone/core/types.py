"""이 파일은 .py 타입 정의 모듈로 리포트/이슈와 처리 결과 모델을 제공합니다."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional

# 이슈는 분석 플러그인이 변환하는 불투명한 속성 맵이다.
Issue = Dict[str, Any]


@dataclass
class Report:
    # 입력 파일 하나를 파싱한 결과이다.
    source_file: Path
    # 이슈의 식별은 리포트 안에서의 위치로만 한다.
    issues: List[Issue] = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)


class FileOutcome(str, Enum):
    # 실패 계열은 원본 파일을 건드리지 않은 상태이다.
    PARSE_ERROR = "PARSE_ERROR"
    ANALYSIS_ERROR = "ANALYSIS_ERROR"
    DELIVERY_FAILED = "DELIVERY_FAILED"
    ARCHIVE_ERROR = "ARCHIVE_ERROR"
    # 성공 계열은 원본이 압축되고 삭제된 상태이다.
    COMPRESSED = "COMPRESSED"
    ARCHIVED = "ARCHIVED"

    @property
    def delivered(self) -> bool:
        return self in (FileOutcome.COMPRESSED, FileOutcome.ARCHIVED)


@dataclass
class FileResult:
    path: Path
    outcome: FileOutcome
    issue_count: int = 0
    artifact: Optional[Path] = None


@dataclass
class RunSummary:
    channel_active: bool
    results: List[FileResult] = field(default_factory=list)

    def count(self, outcome: FileOutcome) -> int:
        return sum(1 for result in self.results if result.outcome == outcome)

    @property
    def delivered(self) -> List[FileResult]:
        return [result for result in self.results if result.outcome.delivered]

    @property
    def failed(self) -> List[FileResult]:
        return [result for result in self.results if not result.outcome.delivered]
