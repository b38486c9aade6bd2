"""이 파일은 .py 설정 모듈로 경로 기본값과 설정 문서 스키마를 정의합니다."""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import ConfigInvalidError, ConfigMissingError, DirectoryMissingError

REPO_ROOT = Path(__file__).resolve().parents[2]
PLUGINS_DIR = REPO_ROOT / "plugins" / "analysis"
DEFAULT_CONFIG_FILE = REPO_ROOT / "config.yml"
REPORT_EXTENSION = ".json"
ARCHIVE_SUFFIX = ".zip"


class SourceConfig(BaseModel):
    # 리포트를 생성하는 하나의 소스이며 (client_id, project_id)로 목적지 프로젝트를 식별한다.
    input_directory: Path
    client_id: str
    project_id: str

    # 숫자로 적힌 ID도 문자열로 받아들인다.
    model_config = ConfigDict(frozen=True, coerce_numbers_to_str=True)


class XmppConfig(BaseModel):
    # importer로 이슈를 전달하는 XMPP 채널 설정이다.
    username: str
    password: str
    importer_address: str
    host: Optional[str] = None
    port: int = 5222
    connect_timeout: float = Field(default=10.0, gt=0)
    # None이면 validator 응답을 무기한 기다린다.
    reply_timeout: Optional[float] = Field(default=None, gt=0)
    validator_pattern: str = "validator"
    acceptance_token: str = "[OK]"

    model_config = ConfigDict(frozen=True)

    @property
    def validator_mode(self) -> bool:
        # importer 주소가 validator 패턴과 일치하면 응답 기반 검증을 수행한다.
        return re.search(self.validator_pattern, self.importer_address) is not None


class DroneConfig(BaseModel):
    sources: List[SourceConfig]
    archive_directory: Optional[Path] = None
    tool_name: str
    xmpp: XmppConfig
    # plugin_id -> 플러그인 설정. 키 순서가 곧 실행 순서이다.
    analysis: Dict[str, Optional[Dict[str, Any]]] = Field(default_factory=dict)
    debug_level: int = 0
    log_file: Optional[Path] = None
    plugin_name: str = "brakeman"
    report_extension: str = REPORT_EXTENSION

    model_config = ConfigDict(frozen=True)

    @field_validator("archive_directory", "log_file", mode="before")
    @classmethod
    def _blank_path_is_none(cls, value: Any) -> Any:
        # 빈 문자열 경로는 설정되지 않은 것으로 본다.
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("analysis", mode="before")
    @classmethod
    def _null_analysis_is_empty(cls, value: Any) -> Any:
        return value if value is not None else {}

    def plugin_config(self, plugin_id: str) -> Dict[str, Any]:
        return dict(self.analysis.get(plugin_id) or {})


def resolve_config_path() -> Path:
    # DRONE_CONFIG 환경 변수로 설정 파일 위치를 바꿀 수 있다.
    return Path(os.getenv("DRONE_CONFIG", str(DEFAULT_CONFIG_FILE)))


def load_config(path: Path) -> DroneConfig:
    # 설정 파일을 한 번 읽어 검증된 불변 설정 객체로 만든다.
    config_path = Path(path)
    if not config_path.is_file():
        raise ConfigMissingError(f"Configuration file is missing: {config_path}")

    try:
        data = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigInvalidError(f"Cannot read configuration {config_path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigInvalidError(f"Configuration {config_path} must be a mapping")

    try:
        return DroneConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigInvalidError(str(exc)) from exc


def ensure_directories(config: DroneConfig) -> None:
    # 모든 소스의 입력 디렉터리가 존재해야 한다.
    for source in config.sources:
        if not source.input_directory.is_dir():
            raise DirectoryMissingError(
                f"Input directory {source.input_directory} does not exist."
            )

    # 보관 디렉터리가 설정되었다면 반드시 존재해야 한다.
    if config.archive_directory is not None and not config.archive_directory.is_dir():
        raise DirectoryMissingError(
            f"Archive directory {config.archive_directory} does not exist."
        )
