"""이 파일은 .py 플러그인 로더 모듈로 메타데이터 탐색, 동적 임포트, 레지스트리 구성을 수행합니다."""

from __future__ import annotations

import importlib.util
import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import yaml

from .errors import PluginConfigError, PluginLoadError
from .plugin_base import AnalysisPlugin, BulkAnalysis, IndividualAnalysis, PluginKind

REQUIRED_FIELDS = ("id", "name", "version", "kind", "entry_point", "class_name")


@dataclass(frozen=True)
class PluginMeta:
    # plugin.yml에서 읽은 메타 정보를 구조화한다.
    plugin_id: str
    name: str
    version: str
    kind: PluginKind
    description: Optional[str]
    entry_point: str
    class_name: str
    plugin_dir: Path

    @property
    def module_path(self) -> Path:
        # entry_point를 플러그인 디렉토리에 결합해 실제 모듈 경로를 만든다.
        return self.plugin_dir / self.entry_point


@dataclass(frozen=True)
class PluginLoadFailure:
    plugin_id: str
    reason: str


class PluginLoader:
    def __init__(self, plugins_dir: Path, logger: Optional[logging.Logger] = None):
        self.plugins_dir = Path(plugins_dir)
        self.logger = logger or logging.getLogger(__name__)

    def discover(self) -> Dict[str, PluginMeta]:
        # plugins_dir 하위의 plugin.yml을 읽어 plugin_id -> PluginMeta 인덱스를 만든다.
        metas: Dict[str, PluginMeta] = {}
        if not self.plugins_dir.is_dir():
            self.logger.warning("Plugins directory %s does not exist", self.plugins_dir)
            return metas
        for plugin_file in sorted(self.plugins_dir.rglob("plugin.yml")):
            try:
                meta = self._load_meta(plugin_file)
            except (OSError, ValueError, yaml.YAMLError) as exc:
                # 메타데이터가 깨진 플러그인만 제외하고 나머지는 계속 탐색한다.
                self.logger.error("Invalid plugin metadata %s: %s", plugin_file, exc)
                continue
            if meta.plugin_id in metas:
                self.logger.error("Duplicate plugin id %s in %s", meta.plugin_id, plugin_file)
                continue
            metas[meta.plugin_id] = meta
        return metas

    def load_plugin(
        self, meta: PluginMeta, config: Optional[Dict[str, Any]] = None
    ) -> AnalysisPlugin:
        # entry_point를 동적으로 import하여 선언된 종류의 클래스인지 확인한다.
        module = self._import_module(meta)
        plugin_class = getattr(module, meta.class_name, None)
        if plugin_class is None:
            raise ImportError(f"Class {meta.class_name} not found in {meta.module_path}")
        expected_base = BulkAnalysis if meta.kind == PluginKind.BULK else IndividualAnalysis
        if not isinstance(plugin_class, type) or not issubclass(plugin_class, expected_base):
            raise TypeError(
                f"{meta.class_name} does not extend {expected_base.__name__} "
                f"as declared by kind '{meta.kind.value}'"
            )
        # 플러그인에 설정과 전용 로거를 주입해 반환한다.
        return plugin_class(
            meta.plugin_id,
            config,
            logger=self.logger.getChild(meta.plugin_id),
        )

    def _load_meta(self, plugin_file: Path) -> PluginMeta:
        # plugin.yml을 읽어 필수 필드를 검증한다.
        data = yaml.safe_load(plugin_file.read_text(encoding="utf-8")) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Plugin metadata must be a mapping in {plugin_file}")
        for field in REQUIRED_FIELDS:
            if field not in data:
                raise ValueError(f"Missing required field {field} in {plugin_file}")

        # kind는 플러그인이 직접 선언하며 클래스 계층에서 추론하지 않는다.
        try:
            kind = PluginKind(str(data["kind"]).strip().lower())
        except ValueError as exc:
            raise ValueError(f"Unknown plugin kind {data['kind']!r} in {plugin_file}") from exc

        return PluginMeta(
            plugin_id=str(data["id"]),
            name=str(data["name"]),
            version=str(data["version"]),
            kind=kind,
            description=data.get("description"),
            entry_point=str(data["entry_point"]),
            class_name=str(data["class_name"]),
            plugin_dir=plugin_file.parent,
        )

    def _import_module(self, meta: PluginMeta):
        # entry_point 경로가 존재하는지 확인한다.
        module_path = meta.module_path
        if not module_path.exists():
            raise FileNotFoundError(f"Entry point not found: {module_path}")

        # importlib으로 플러그인 모듈을 로드한다.
        spec = importlib.util.spec_from_file_location(
            f"drone_analysis_{meta.plugin_id}", module_path
        )
        if spec is None or spec.loader is None:
            raise ImportError(f"Cannot load module from {module_path}")

        # pydantic 옵션 모델이 타입을 해석할 수 있도록 sys.modules에 등록한 뒤 실행한다.
        module = importlib.util.module_from_spec(spec)
        sys.modules[spec.name] = module
        try:
            spec.loader.exec_module(module)
        except BaseException:
            sys.modules.pop(spec.name, None)
            raise
        return module


class PluginRegistry:
    """Loaded analysis plugins for one run, kept in registration order.

    Registration order is the key order of the ``analysis`` configuration
    section. A plugin that fails to load is recorded in :attr:`failures` and
    never takes part in bulk or individual execution.
    """

    def __init__(self, loader: PluginLoader, logger: Optional[logging.Logger] = None):
        self.loader = loader
        self.logger = logger or logging.getLogger(__name__)
        self._metas: Optional[Dict[str, PluginMeta]] = None
        self._plugins: List[AnalysisPlugin] = []
        self.failures: List[PluginLoadFailure] = []

    @property
    def metas(self) -> Dict[str, PluginMeta]:
        if self._metas is None:
            self._metas = self.loader.discover()
        return self._metas

    @property
    def plugins(self) -> List[AnalysisPlugin]:
        return list(self._plugins)

    def load(self, plugin_id: str, config: Optional[Dict[str, Any]] = None) -> AnalysisPlugin:
        meta = self.metas.get(plugin_id)
        if meta is None:
            raise PluginLoadError(plugin_id, "plugin not found")
        self.logger.info("Loading analysis module: [%s]", meta.module_path)
        try:
            plugin = self.loader.load_plugin(meta, config)
        except PluginConfigError as exc:
            raise PluginLoadError(plugin_id, f"invalid configuration: {exc}") from exc
        except Exception as exc:
            # 플러그인 코드는 임의의 예외를 던질 수 있으므로 로드 오류로 감싼다.
            raise PluginLoadError(plugin_id, f"{type(exc).__name__}: {exc}") from exc
        return self.register(plugin)

    def register(self, plugin: AnalysisPlugin) -> AnalysisPlugin:
        # 이미 생성된 플러그인을 현재 순서의 마지막에 등록한다.
        self._plugins.append(plugin)
        return plugin

    def load_all(self, analysis: Mapping[str, Optional[Dict[str, Any]]]) -> List[AnalysisPlugin]:
        # 설정 순서대로 로드하며, 실패한 플러그인만 제외하고 계속 진행한다.
        for plugin_id, config in analysis.items():
            try:
                self.load(plugin_id, config)
            except PluginLoadError as exc:
                self.logger.error("Error loading analysis module [%s]: %s", plugin_id, exc.reason)
                self.failures.append(PluginLoadFailure(plugin_id, exc.reason))
        self.logger.info(
            "%d analysis modules loaded, %d failed", len(self._plugins), len(self.failures)
        )
        return self.plugins

    def bulk_plugins(self) -> List[BulkAnalysis]:
        return [plugin for plugin in self._plugins if plugin.kind == PluginKind.BULK]

    def individual_plugins(self) -> List[IndividualAnalysis]:
        return [plugin for plugin in self._plugins if plugin.kind == PluginKind.INDIVIDUAL]
