from __future__ import annotations

import logging
from pathlib import Path

from PyQt6.QtCore import QIODevice, QSaveFile

from niti.domain.errors import FileIOError
from niti.domain.interfaces import IFileService

logger = logging.getLogger(__name__)


class FileService(IFileService):
    """Source-file access for the gateway. Every failure surfaces as FileIOError."""

    def read_text(self, path: Path) -> str:
        try:
            return Path(path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise FileIOError(f"Failed to read file: {e}") from e

    def write_text_atomic(self, path: Path, text: str) -> None:
        sf = QSaveFile(str(path))
        if not sf.open(QIODevice.OpenModeFlag.WriteOnly):
            raise FileIOError(f"Failed to write file: cannot open {path}: {sf.errorString()}")
        sf.write(text.encode("utf-8"))
        if not sf.commit():
            raise FileIOError(f"Failed to write file: commit failed for {path}")
        logger.debug("wrote %d chars to %s", len(text), path)
