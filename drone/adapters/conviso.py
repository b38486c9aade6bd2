"""이 파일은 .py Conviso 메시지 작성 모듈로 이슈를 importer용 XML로 직렬화합니다."""

from __future__ import annotations

import re
import xml.etree.ElementTree as ET
from typing import Any, Mapping

from drone.core.config import SourceConfig
from drone.core.types import Issue

_TAG_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_.-]*$")


def build_xml(issue: Issue, source: SourceConfig, tool_name: str) -> str:
    root = ET.Element("scan")

    # header에는 도구 이름과 목적지 (client, project)를 기록한다.
    header = ET.SubElement(root, "header")
    ET.SubElement(header, "tool").text = tool_name
    ET.SubElement(header, "client").text = source.client_id
    ET.SubElement(header, "project").text = source.project_id

    vulnerabilities = ET.SubElement(root, "vulnerabilities")
    vulnerability = ET.SubElement(vulnerabilities, "vulnerability")
    for key, value in issue.items():
        _append_value(vulnerability, str(key), value)

    return ET.tostring(root, encoding="unicode")


def _append_value(parent: ET.Element, key: str, value: Any) -> None:
    # XML 이름으로 쓸 수 없는 키는 attribute 요소의 name 속성으로 보존한다.
    if _TAG_PATTERN.match(key) and not key.lower().startswith("xml"):
        element = ET.SubElement(parent, key)
    else:
        element = ET.SubElement(parent, "attribute", name=key)

    if isinstance(value, Mapping):
        for child_key, child_value in value.items():
            _append_value(element, str(child_key), child_value)
    elif isinstance(value, (list, tuple)):
        for item in value:
            _append_value(element, "item", item)
    elif value is None:
        return
    elif isinstance(value, bool):
        element.text = "true" if value else "false"
    else:
        element.text = str(value)
