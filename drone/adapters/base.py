"""이 파일은 .py 전달 채널 베이스 모듈로 송수신 인터페이스를 제공합니다."""

from abc import ABC, abstractmethod
from typing import Optional


class DeliveryChannel(ABC):
    @property
    @abstractmethod
    def active(self) -> bool:
        raise NotImplementedError

    @abstractmethod
    def send_msg(self, body: str) -> bool:
        raise NotImplementedError

    @abstractmethod
    def receive_msg(self) -> Optional[str]:
        raise NotImplementedError

    def discard_pending(self) -> int:
        """Drop replies already waiting to be read and return how many there were."""
        return 0

    def close(self) -> None:
        """Release the underlying connection. Default is a no-op."""
