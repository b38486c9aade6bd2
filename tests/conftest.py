"""이 파일은 .py 테스트 설정 모듈로 경로와 공용 픽스처를 초기화합니다."""

import json
import sys
from pathlib import Path
from typing import Dict, List, Optional

import pytest

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from drone.adapters.base import DeliveryChannel  # noqa: E402
from drone.core.config import DroneConfig  # noqa: E402


class FakeChannel(DeliveryChannel):
    # 메모리에서 송신 메시지를 기록하고 미리 정한 결과/응답을 돌려준다.
    def __init__(self, active: bool = True) -> None:
        self._active = active
        self.sent: List[str] = []
        self.send_results: List[bool] = []
        self.replies: List[Optional[str]] = []
        self.active_checks = 0

    @property
    def active(self) -> bool:
        self.active_checks += 1
        return self._active

    def send_msg(self, body: str) -> bool:
        self.sent.append(body)
        if self.send_results:
            return self.send_results.pop(0)
        return True

    def receive_msg(self) -> Optional[str]:
        if self.replies:
            return self.replies.pop(0)
        return None


def warning(fingerprint: str, confidence: str = "High", **extra) -> Dict:
    data = {
        "warning_type": "SQL Injection",
        "warning_code": 0,
        "fingerprint": fingerprint,
        "message": "Possible SQL injection",
        "file": "app/models/user.rb",
        "line": 10,
        "confidence": confidence,
    }
    data.update(extra)
    return data


def write_report(path: Path, warnings: List[Dict]) -> Path:
    payload = {
        "scan_info": {"app_path": "/builds/app", "brakeman_version": "6.1.2"},
        "warnings": warnings,
        "ignored_warnings": [],
        "errors": [],
    }
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def make_config(
    input_dirs: List[Path],
    archive_directory: Optional[Path] = None,
    importer_address: str = "importer@example.com",
    analysis: Optional[Dict] = None,
) -> DroneConfig:
    return DroneConfig.model_validate(
        {
            "sources": [
                {"input_directory": str(path), "client_id": index + 1, "project_id": 100 + index}
                for index, path in enumerate(input_dirs)
            ],
            "archive_directory": str(archive_directory) if archive_directory else None,
            "tool_name": "brakeman",
            "xmpp": {
                "username": "drone@example.com",
                "password": "secret",
                "importer_address": importer_address,
            },
            "analysis": analysis or {},
        }
    )


@pytest.fixture
def channel() -> FakeChannel:
    return FakeChannel()
