"""이 파일은 .py 보관 모듈로 전달 완료된 리포트의 압축과 보관 디렉터리 이동을 담당합니다."""

from __future__ import annotations

import logging
import shutil
import zipfile
from pathlib import Path
from typing import Optional

from .config import ARCHIVE_SUFFIX
from .errors import ArchiveError


def compressed_path_for(report_file: Path) -> Path:
    # name.json -> name.json.zip
    return report_file.with_name(report_file.name + ARCHIVE_SUFFIX)


class ArchiveManager:
    def __init__(
        self,
        archive_directory: Optional[Path] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.archive_directory = Path(archive_directory) if archive_directory else None
        self.logger = logger or logging.getLogger(__name__)

    @property
    def relocates(self) -> bool:
        return self.archive_directory is not None

    def compress_file(self, report_file: Path) -> Path:
        self.logger.info("Compressing json file [%s].", report_file)
        zip_path = compressed_path_for(report_file)

        # 이전 실행에서 남은 압축 파일이 있으면 먼저 삭제한다.
        try:
            if zip_path.exists():
                self.logger.debug("Removing stale archive [%s].", zip_path)
                zip_path.unlink()
        except OSError as exc:
            raise ArchiveError(f"Cannot remove stale archive {zip_path}: {exc}") from exc

        try:
            with zipfile.ZipFile(zip_path, "w", compression=zipfile.ZIP_DEFLATED) as archive:
                archive.write(report_file, arcname=report_file.name)
        except (OSError, zipfile.BadZipFile) as exc:
            # 쓰다 만 압축 파일은 지우고 원본은 그대로 둔다.
            self._discard_partial(zip_path)
            raise ArchiveError(f"Cannot compress {report_file}: {exc}") from exc

        # 압축이 끝난 뒤에만 원본을 삭제한다.
        try:
            report_file.unlink()
        except OSError as exc:
            raise ArchiveError(f"Cannot remove {report_file} after compression: {exc}") from exc
        return zip_path

    def archive_file(self, zip_path: Path) -> Path:
        if self.archive_directory is None:
            # 보관 디렉터리가 없으면 압축 파일은 원래 위치에 남는다.
            return zip_path

        self.logger.info("Archiving json file [%s].", zip_path)
        destination = self.archive_directory / zip_path.name
        try:
            # 같은 이름의 보관본이 있으면 교체해 중복을 남기지 않는다.
            if destination.exists():
                destination.unlink()
            shutil.move(str(zip_path), str(destination))
        except OSError as exc:
            raise ArchiveError(f"Cannot move {zip_path} to {self.archive_directory}: {exc}") from exc
        return destination

    def _discard_partial(self, zip_path: Path) -> None:
        try:
            if zip_path.is_file():
                zip_path.unlink()
        except OSError as exc:
            self.logger.warning("Cannot remove partial archive [%s]: %s", zip_path, exc)
