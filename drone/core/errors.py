"""이 파일은 .py 공통 예외 모듈로 드론 실행 중 오류 유형을 표준화합니다."""


class DroneError(Exception):
    """드론 예외의 최상위 타입입니다."""


class ConfigMissingError(DroneError):
    """설정 파일이 없을 때 사용합니다. (치명적)"""


class ConfigInvalidError(DroneError):
    """설정 파일을 읽을 수 없거나 스키마 검증에 실패했을 때 사용합니다. (치명적)"""


class DirectoryMissingError(DroneError):
    """입력/보관 디렉터리가 존재하지 않을 때 사용합니다. (치명적)"""


class PluginConfigError(DroneError, ValueError):
    """플러그인 설정 검증 실패 시 사용합니다."""


class PluginLoadError(DroneError):
    """분석 플러그인 로딩/생성 실패 시 사용합니다."""

    def __init__(self, plugin_id: str, reason: str) -> None:
        super().__init__(f"{plugin_id}: {reason}")
        self.plugin_id = plugin_id
        self.reason = reason


class ReportParseError(DroneError):
    """리포트 파일이 손상되었거나 읽을 수 없을 때 사용합니다."""


class AnalysisError(DroneError):
    """분석 플러그인 실행 중 발생한 오류를 감싸는 예외입니다."""


class ChannelError(DroneError):
    """메시지 채널 송수신 오류에 사용합니다."""


class ArchiveError(DroneError):
    """압축/보관 처리 중 발생한 오류를 감싸는 예외입니다."""
