# tests/test_app_config.py
from __future__ import annotations

from pathlib import Path

import pytest

from niti.services.config.app_config import AppConfig, build_app_config
from niti.utils.constants import (
    DEFAULT_BAUD_RATE,
    DEFAULT_BUILD_COMMAND,
    DEFAULT_CONTENT,
    DEFAULT_EXTENSION,
    DEFAULT_FONT_SIZE,
    DEFAULT_POLL_INTERVAL_MS,
    DEFAULT_READ_TIMEOUT_MS,
    SOURCE_URL,
)


# ------------------------------
# Helpers
# ------------------------------
def _write(p: Path, text: str) -> None:
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(text, encoding="utf-8")


class FakeIni:
    """
    Minimal IniConfigService-like fake backed by a dict of sections.
    We only implement what AppConfig calls.
    """

    def __init__(
        self,
        *,
        version: str = "0.0.0",
        loaded_from: Path | None = None,
        values: dict[str, dict[str, str]] | None = None,
    ) -> None:
        self._version = version
        self._loaded_from = loaded_from
        self._values = values or {}

    def app_version(self) -> str:
        return self._version

    def get(self, section: str, key: str, default: str | None = None) -> str | None:
        return self._values.get(section, {}).get(key, default)

    def get_int(self, section: str, key: str, default: int | None = None) -> int | None:
        raw = self.get(section, key, None)
        if raw is None:
            return default
        try:
            return int(raw)
        except ValueError:
            return default

    def get_bool(self, section: str, key: str, default: bool | None = None) -> bool | None:
        return default

    def as_dict(self) -> dict[str, dict[str, str]]:
        return {"app": {"version": self._version}, **self._values}

    @property
    def loaded_from(self) -> Path | None:
        return self._loaded_from


# ------------------------------
# get_version()
# ------------------------------
def test_get_version_prefers_version_file_and_strips_v(tmp_path: Path):
    root = tmp_path / "proj"
    _write(root / "version", "v1.0.5\n")
    cfg = AppConfig(ini=FakeIni(version="9.9.9"), project_root=root)

    assert cfg.get_version() == "1.0.5"


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("1.2.3", "1.2.3"),
        ("v1.2.3", "1.2.3"),
        ("V1.2.3", "1.2.3"),
        ("v1.2.3+build.7", "1.2.3"),
        ("1.2.3-alpha.1", "1.2.3"),
    ],
)
def test_get_version_parses_semver_with_suffixes(tmp_path: Path, raw: str, expected: str):
    root = tmp_path / "proj"
    _write(root / "version", raw)
    cfg = AppConfig(ini=FakeIni(version="0.0.0"), project_root=root)

    assert cfg.get_version() == expected


def test_get_version_falls_back_to_ini(tmp_path: Path):
    cfg = AppConfig(ini=FakeIni(version="v2.3.4"), project_root=tmp_path / "proj")
    assert cfg.get_version() == "2.3.4"


def test_get_version_returns_0_0_0_when_nothing_set(tmp_path: Path):
    cfg = AppConfig(ini=FakeIni(version="   "), project_root=tmp_path / "proj")
    assert cfg.get_version() == "0.0.0"


def test_get_version_returns_ini_raw_if_non_semver(tmp_path: Path):
    cfg = AppConfig(ini=FakeIni(version="dev"), project_root=tmp_path / "proj")
    assert cfg.get_version() == "dev"


# ------------------------------
# typed settings
# ------------------------------
def test_defaults_when_ini_is_empty(tmp_path: Path):
    cfg = AppConfig(ini=FakeIni(), project_root=tmp_path)
    assert cfg.default_extension == DEFAULT_EXTENSION
    assert cfg.default_content == DEFAULT_CONTENT
    assert cfg.font_size == DEFAULT_FONT_SIZE
    assert cfg.baud_rate == DEFAULT_BAUD_RATE
    assert cfg.read_timeout_ms == DEFAULT_READ_TIMEOUT_MS
    assert cfg.poll_interval_ms == DEFAULT_POLL_INTERVAL_MS
    assert cfg.build_command == DEFAULT_BUILD_COMMAND
    assert cfg.log_level == "INFO"


def test_values_are_read_from_ini(tmp_path: Path):
    ini = FakeIni(
        values={
            "editor": {"default_extension": ".py", "default_content": "# hi\\n", "font_size": "18"},
            "serial": {"baud_rate": "115200", "poll_interval_ms": "250"},
            "build": {"command": "cargo build"},
            "run": {"command": "cargo run"},
            "logging": {"level": " debug "},
        }
    )
    cfg = AppConfig(ini=ini, project_root=tmp_path)
    assert cfg.default_extension == "py"
    assert cfg.default_content == "# hi\n"
    assert cfg.font_size == 18
    assert cfg.baud_rate == 115200
    assert cfg.poll_interval_ms == 250
    assert cfg.build_command == "cargo build"
    assert cfg.run_command == "cargo run"
    assert cfg.log_level == "DEBUG"


def test_default_content_keeps_non_ascii_text(tmp_path: Path):
    ini = FakeIni(values={"editor": {"default_content": "// café\\n\\tfn main() {}"}})
    cfg = AppConfig(ini=ini, project_root=tmp_path)
    assert cfg.default_content == "// café\n\tfn main() {}"


def test_default_content_non_ascii_from_ini_file(tmp_path: Path):
    ini_path = tmp_path / "custom.ini"
    _write(ini_path, "[editor]\ndefault_content = // héllo wörld\\n\n")
    cfg = build_app_config(explicit_ini=ini_path, project_root=tmp_path)
    assert cfg.default_content == "// héllo wörld\n"


def test_source_url_defaults_and_override(tmp_path: Path):
    assert AppConfig(ini=FakeIni(), project_root=tmp_path).source_url == SOURCE_URL
    ini = FakeIni(values={"app": {"source_url": " https://example.org/niti "}})
    assert AppConfig(ini=ini, project_root=tmp_path).source_url == "https://example.org/niti"


@pytest.mark.parametrize("raw", ["0", "-5", "fast"])
def test_non_positive_or_invalid_ints_fall_back(tmp_path: Path, raw: str):
    ini = FakeIni(values={"serial": {"poll_interval_ms": raw, "baud_rate": raw}})
    cfg = AppConfig(ini=ini, project_root=tmp_path)
    assert cfg.poll_interval_ms == DEFAULT_POLL_INTERVAL_MS
    assert cfg.baud_rate == DEFAULT_BAUD_RATE


# ------------------------------
# Delegation / passthrough
# ------------------------------
def test_loaded_from_delegates_to_ini(tmp_path: Path):
    ini_path = tmp_path / "config.ini"
    cfg = AppConfig(ini=FakeIni(version="1.0.0", loaded_from=ini_path), project_root=tmp_path)
    assert cfg.loaded_from == ini_path


def test_as_dict_delegates_to_ini(tmp_path: Path):
    cfg = AppConfig(ini=FakeIni(version="3.3.3"), project_root=tmp_path)
    assert cfg.as_dict()["app"]["version"] == "3.3.3"


# ------------------------------
# build_app_config()
# ------------------------------
def test_build_app_config_uses_supplied_project_root_and_reads_version_file(tmp_path: Path):
    root = tmp_path / "repo"
    _write(root / "version", "v4.5.6")

    cfg = build_app_config(project_root=root)
    assert cfg.project_root == root
    assert cfg.get_version() == "4.5.6"


def test_build_app_config_passes_explicit_ini_path(tmp_path: Path):
    root = tmp_path / "repo"
    _write(root / "version", "v1.0.0")
    explicit_ini = tmp_path / "explicit.ini"
    _write(explicit_ini, "[app]\nversion = 9.9.9\n[serial]\nbaud_rate = 57600\n")

    cfg = build_app_config(explicit_ini=explicit_ini, project_root=root)

    assert cfg.loaded_from == explicit_ini
    assert cfg.baud_rate == 57600
    # version file still wins
    assert cfg.get_version() == "1.0.0"
