"""이 파일은 .py 로깅 초기화 모듈로 기본 로그 포맷과 출력 대상을 설정합니다."""

import logging
from pathlib import Path
from typing import List, Optional

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def level_for(debug_level: int) -> int:
    # debug_level 0은 INFO, 1 이상은 DEBUG로 출력한다.
    return logging.DEBUG if debug_level >= 1 else logging.INFO


def setup_logging(debug_level: int = 0, log_file: Optional[Path] = None) -> None:
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if log_file is not None:
        # 설정에 로그 파일이 지정되면 파일에도 같은 포맷으로 기록한다.
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
    logging.basicConfig(
        level=level_for(debug_level),
        format=LOG_FORMAT,
        handlers=handlers,
        force=True,
    )
    # slixmpp의 내부 로그는 DEBUG에서만 노출한다.
    logging.getLogger("slixmpp").setLevel(
        logging.DEBUG if debug_level >= 2 else logging.WARNING
    )
