from __future__ import annotations

import re
import sys
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from niti.domain.interfaces import IAppConfig
from niti.services.config.ini_config_service import IniConfigService
from niti.utils.constants import (
    DEFAULT_BAUD_RATE,
    DEFAULT_BUILD_COMMAND,
    DEFAULT_CONTENT,
    DEFAULT_EXTENSION,
    DEFAULT_FONT_SIZE,
    DEFAULT_POLL_INTERVAL_MS,
    DEFAULT_READ_TIMEOUT_MS,
    DEFAULT_RUN_COMMAND,
    SOURCE_URL,
)

_VERSION_RE = re.compile(r"^v?(\d+\.\d+\.\d+)(?:[-+].*)?$", re.IGNORECASE)


def _project_root_fallback() -> Path:
    """Bundle root under PyInstaller, otherwise the repository root."""
    meipass = getattr(sys, "_MEIPASS", None)  # type: ignore[attr-defined]
    if meipass:
        return Path(meipass)
    # niti/services/config/app_config.py -> parents[3] is the repository root
    return Path(__file__).resolve().parents[3]


def _read_version_file(version_path: Path) -> str | None:
    try:
        raw = version_path.read_text(encoding="utf-8").strip()
    except OSError:
        return None
    m = _VERSION_RE.match(raw)
    return m.group(1) if m else None


@dataclass(frozen=True)
class AppConfig(IAppConfig):
    """
    Typed view over IniConfigService.

    Sections and keys:
      [app]     version, source_url
      [editor]  default_extension, default_content, font_size
      [serial]  baud_rate, read_timeout_ms, poll_interval_ms
      [build]   command       [run] command
      [logging] level

    Version precedence: <project_root>/version file, then [app] version, then "0.0.0".
    """

    ini: IniConfigService
    project_root: Path

    def get_version(self) -> str:
        v = _read_version_file(self.project_root / "version")
        if v:
            return v
        v2 = (self.ini.app_version() or "").strip()
        if v2:
            m = _VERSION_RE.match(v2)
            return m.group(1) if m else v2
        return "0.0.0"

    # ---- editor ----

    @property
    def default_extension(self) -> str:
        ext = self.ini.get("editor", "default_extension", DEFAULT_EXTENSION) or ""
        return ext.strip().lstrip(".") or DEFAULT_EXTENSION

    @property
    def default_content(self) -> str:
        raw = self.ini.get("editor", "default_content", None)
        if raw is None:
            return DEFAULT_CONTENT
        # INI values are single-line; only these two escapes are expanded.
        return raw.replace("\\n", "\n").replace("\\t", "\t")

    @property
    def font_size(self) -> int:
        return self._positive_int("editor", "font_size", DEFAULT_FONT_SIZE)

    # ---- serial ----

    @property
    def baud_rate(self) -> int:
        return self._positive_int("serial", "baud_rate", DEFAULT_BAUD_RATE)

    @property
    def read_timeout_ms(self) -> int:
        return self._positive_int("serial", "read_timeout_ms", DEFAULT_READ_TIMEOUT_MS)

    @property
    def poll_interval_ms(self) -> int:
        return self._positive_int("serial", "poll_interval_ms", DEFAULT_POLL_INTERVAL_MS)

    # ---- project ----

    @property
    def build_command(self) -> str:
        return self.ini.get("build", "command", DEFAULT_BUILD_COMMAND) or ""

    @property
    def run_command(self) -> str:
        return self.ini.get("run", "command", DEFAULT_RUN_COMMAND) or ""

    # ---- help ----

    @property
    def source_url(self) -> str:
        return (self.ini.get("app", "source_url", SOURCE_URL) or "").strip() or SOURCE_URL

    # ---- logging ----

    @property
    def log_level(self) -> str:
        return (self.ini.get("logging", "level", "INFO") or "INFO").strip().upper()

    def _positive_int(self, section: str, key: str, default: int) -> int:
        v = self.ini.get_int(section, key, default)
        return v if v is not None and v > 0 else default

    # ---- delegate IniConfigService methods ----

    def get(self, section: str, key: str, default: str | None = None) -> str | None:
        return self.ini.get(section, key, default)

    def get_int(self, section: str, key: str, default: int | None = None) -> int | None:
        return self.ini.get_int(section, key, default)

    def get_bool(self, section: str, key: str, default: bool | None = None) -> bool | None:
        return self.ini.get_bool(section, key, default)

    def as_dict(self) -> Mapping[str, Mapping[str, str]]:
        return self.ini.as_dict()

    def app_version(self) -> str:
        return self.ini.app_version()

    @property
    def loaded_from(self) -> Path | None:
        return self.ini.loaded_from


def build_app_config(
    *, explicit_ini: Path | None = None, project_root: Path | None = None
) -> AppConfig:
    root = project_root or _project_root_fallback()
    ini = IniConfigService(explicit_path=explicit_ini, project_root=root)
    return AppConfig(ini=ini, project_root=root)
