"""이 파일은 .py 드론 패키지 초기화 모듈로 버전 정보를 제공합니다."""

__version__ = "0.1.0"
