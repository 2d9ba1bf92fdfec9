from __future__ import annotations

import logging
import shlex
import subprocess
from pathlib import Path

from niti.domain.errors import GatewayError
from niti.domain.interfaces import IBuildService
from niti.utils.constants import DEFAULT_BUILD_COMMAND, DEFAULT_RUN_COMMAND

logger = logging.getLogger(__name__)


class BuildService(IBuildService):
    """
    Runs the configured build and run commands for a main file.

    Command templates are split shell-style, then each argument is formatted
    with ``{path}`` (the main file), ``{output}`` (main file without suffix)
    and ``{dir}`` (its folder). Blocking; run it on a worker thread.
    """

    def __init__(
        self,
        *,
        build_command: str = DEFAULT_BUILD_COMMAND,
        run_command: str = DEFAULT_RUN_COMMAND,
        timeout_s: float = 120.0,
    ) -> None:
        self._build_command = build_command
        self._run_command = run_command
        self._timeout_s = timeout_s

    def build(self, main_file: Path) -> str:
        return self._execute("Build", self._build_command, main_file)

    def run(self, main_file: Path) -> str:
        return self._execute("Run", self._run_command, main_file)

    def _argv(self, template: str, main_file: Path) -> list[str]:
        fields = {
            "path": str(main_file),
            "output": str(main_file.with_suffix("")),
            "dir": str(main_file.parent),
        }
        return [arg.format(**fields) for arg in shlex.split(template)]

    def _execute(self, label: str, template: str, main_file: Path) -> str:
        if not template.strip():
            raise GatewayError(f"No {label.lower()} command configured")
        argv = self._argv(template, main_file)
        logger.info("%s: %s", label.lower(), argv)
        try:
            proc = subprocess.run(
                argv,
                cwd=str(main_file.parent),
                capture_output=True,
                text=True,
                timeout=self._timeout_s,
            )
        except (OSError, subprocess.TimeoutExpired) as e:
            raise GatewayError(f"{label} failed: {e}") from e
        output = (proc.stdout + proc.stderr).strip()
        if proc.returncode != 0:
            raise GatewayError(f"{label} failed (exit {proc.returncode}):\n{output}")
        return output or f"{label} finished."
