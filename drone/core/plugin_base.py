"""이 파일은 .py 플러그인 베이스 모듈로 Bulk/Individual 분석 인터페이스를 제공합니다."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, ClassVar, Dict, List, Optional, Type

from pydantic import BaseModel, ConfigDict, ValidationError

from .errors import PluginConfigError
from .types import Issue


class PluginKind(str, Enum):
    # Bulk는 이슈 목록 전체에, Individual은 이슈 하나에 적용된다.
    BULK = "bulk"
    INDIVIDUAL = "individual"


class PluginOptions(BaseModel):
    # 옵션이 없는 플러그인의 기본 모델로, 알 수 없는 키는 거부한다.
    model_config = ConfigDict(extra="forbid", frozen=True)


class AnalysisPlugin(ABC):
    kind: ClassVar[PluginKind]
    options_model: ClassVar[Type[PluginOptions]] = PluginOptions

    def __init__(
        self,
        plugin_id: str,
        config: Optional[Dict[str, Any]] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.plugin_id = plugin_id
        # analysis.<plugin_id> 설정을 옵션 모델로 검증한다.
        self.options = self._validate_options(config)
        self.logger = logger or logging.getLogger(f"drone.analysis.{plugin_id}")

    def _validate_options(self, config: Optional[Dict[str, Any]]) -> PluginOptions:
        if config is not None and not isinstance(config, dict):
            raise PluginConfigError("Plugin config must be an object")
        try:
            return self.options_model.model_validate(config or {})
        except ValidationError as exc:
            raise PluginConfigError(str(exc)) from exc

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.plugin_id} ({self.kind.value})>"


class BulkAnalysis(AnalysisPlugin):
    kind = PluginKind.BULK

    @abstractmethod
    def analyse(self, issues: List[Issue]) -> List[Issue]:
        raise NotImplementedError


class IndividualAnalysis(AnalysisPlugin):
    kind = PluginKind.INDIVIDUAL

    @abstractmethod
    def analyse(self, issue: Issue) -> Issue:
        raise NotImplementedError
