"""이 파일은 .py 테스트 모듈로 플러그인 탐색, 등록 순서, 로딩 실패 격리를 검증합니다."""

from pathlib import Path
from textwrap import dedent

from drone.core.config import PLUGINS_DIR
from drone.core.plugin_base import PluginKind
from drone.core.plugin_loader import PluginLoader, PluginRegistry


def _write_plugin(root: Path, plugin_id: str, kind: str, body: str, class_name: str = "Plugin") -> None:
    plugin_dir = root / plugin_id
    plugin_dir.mkdir(parents=True)
    (plugin_dir / "plugin.yml").write_text(
        dedent(
            f"""
            id: {plugin_id}
            name: {plugin_id}
            version: 1.0.0
            kind: {kind}
            entry_point: main.py
            class_name: {class_name}
            """
        )
    )
    (plugin_dir / "main.py").write_text(dedent(body))


BULK_TAGGER = """
from drone.core.plugin_base import BulkAnalysis


class Plugin(BulkAnalysis):
    def analyse(self, issues):
        return [dict(issue, bulk=True) for issue in issues]
"""

INDIVIDUAL_TAGGER = """
from drone.core.plugin_base import IndividualAnalysis


class Plugin(IndividualAnalysis):
    def analyse(self, issue):
        return dict(issue, individual=True)
"""

BROKEN_IMPORT = """
raise RuntimeError("cannot import me")
"""


def test_discover_builtin_plugins() -> None:
    metas = PluginLoader(PLUGINS_DIR).discover()
    assert {"confidence_filter", "deduplicate", "severity", "relative_path"} <= set(metas)
    assert metas["deduplicate"].kind == PluginKind.BULK
    assert metas["severity"].kind == PluginKind.INDIVIDUAL


def test_registry_keeps_configuration_order() -> None:
    registry = PluginRegistry(PluginLoader(PLUGINS_DIR))
    registry.load_all(
        {
            "severity": None,
            "deduplicate": {},
            "relative_path": {"prepend": "src"},
            "confidence_filter": {"min_confidence": "High"},
        }
    )
    assert registry.failures == []
    assert [p.plugin_id for p in registry.bulk_plugins()] == ["deduplicate", "confidence_filter"]
    assert [p.plugin_id for p in registry.individual_plugins()] == ["severity", "relative_path"]


def test_failed_plugins_are_excluded_and_loading_continues(tmp_path: Path) -> None:
    _write_plugin(tmp_path, "broken", "bulk", BROKEN_IMPORT)
    _write_plugin(tmp_path, "bulk_tagger", "bulk", BULK_TAGGER)
    _write_plugin(tmp_path, "individual_tagger", "individual", INDIVIDUAL_TAGGER)

    registry = PluginRegistry(PluginLoader(tmp_path))
    registry.load_all({"broken": {}, "missing": {}, "bulk_tagger": {}, "individual_tagger": {}})

    assert [failure.plugin_id for failure in registry.failures] == ["broken", "missing"]
    assert "RuntimeError" in registry.failures[0].reason
    assert [p.plugin_id for p in registry.plugins] == ["bulk_tagger", "individual_tagger"]


def test_declared_kind_must_match_plugin_class(tmp_path: Path) -> None:
    _write_plugin(tmp_path, "liar", "individual", BULK_TAGGER)

    registry = PluginRegistry(PluginLoader(tmp_path))
    registry.load_all({"liar": {}})

    assert registry.plugins == []
    assert "IndividualAnalysis" in registry.failures[0].reason


def test_invalid_options_exclude_plugin() -> None:
    registry = PluginRegistry(PluginLoader(PLUGINS_DIR))
    registry.load_all(
        {
            "confidence_filter": {"min_confidence": "Extreme"},
            "deduplicate": {"unknown_option": 1},
            "severity": {},
        }
    )
    assert [failure.plugin_id for failure in registry.failures] == ["confidence_filter", "deduplicate"]
    assert all("invalid configuration" in failure.reason for failure in registry.failures)
    assert [p.plugin_id for p in registry.plugins] == ["severity"]


def test_invalid_metadata_is_skipped(tmp_path: Path) -> None:
    (tmp_path / "bad").mkdir()
    (tmp_path / "bad" / "plugin.yml").write_text("id: bad\nkind: sideways\n")
    _write_plugin(tmp_path, "bulk_tagger", "bulk", BULK_TAGGER)

    metas = PluginLoader(tmp_path).discover()
    assert list(metas) == ["bulk_tagger"]
