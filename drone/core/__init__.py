"""이 파일은 .py 코어 패키지 초기화 모듈로 주요 심볼을 재노출합니다."""

from .config import DroneConfig, PLUGINS_DIR, SourceConfig, XmppConfig, load_config
from .logging import setup_logging
from .plugin_base import BulkAnalysis, IndividualAnalysis, PluginKind
from .plugin_loader import PluginLoader, PluginRegistry
from .storage import ArchiveManager
from .types import FileOutcome, FileResult, Issue, Report, RunSummary

__all__ = [
    "ArchiveManager",
    "BulkAnalysis",
    "DroneConfig",
    "FileOutcome",
    "FileResult",
    "IndividualAnalysis",
    "Issue",
    "PLUGINS_DIR",
    "PluginKind",
    "PluginLoader",
    "PluginRegistry",
    "Report",
    "RunSummary",
    "SourceConfig",
    "XmppConfig",
    "load_config",
    "setup_logging",
]
