"""이 파일은 .py 디렉터리 스캔 모듈로 소스별 리포트 후보 파일을 나열합니다."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

from drone.core.config import REPORT_EXTENSION, SourceConfig

logger = logging.getLogger(__name__)


def scan_input_directory(
    source: SourceConfig,
    extension: str = REPORT_EXTENSION,
    log: Optional[logging.Logger] = None,
) -> List[Path]:
    log = log or logger
    log.info("Polling input directory [%s] ...", source.input_directory)
    # 확장자가 일치하는 일반 파일만 대상으로 한다.
    files = sorted(
        path
        for path in Path(source.input_directory).glob(f"*{extension}")
        if path.is_file()
    )
    log.info("#%d files were found.", len(files))
    return files
