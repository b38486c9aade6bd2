"""이 파일은 .py 어댑터 패키지 초기화 모듈로 파서/채널/메시지 작성기를 노출합니다."""

from .base import DeliveryChannel
from .brakeman import BrakemanParser
from .conviso import build_xml

__all__ = [
    "BrakemanParser",
    "DeliveryChannel",
    "build_xml",
]
