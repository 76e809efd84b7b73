"""
Automation runners: the only place pdf2key talks to another process.
"""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from typing import Protocol

from loguru import logger


@dataclass(frozen=True)
class ExitResult:
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class AutomationRunner(Protocol):
    def run(self, script: str) -> ExitResult: ...


class OsascriptRunner:
    """Runs AppleScript through ``osascript``, feeding the script on stdin."""

    def __init__(self, executable: str = "osascript") -> None:
        self.executable = executable

    def run(self, script: str) -> ExitResult:
        """
        Execute ``script`` and wait for it to finish.

        Raises OSError when the interpreter cannot be launched at all; a
        script that runs and fails is reported through the exit status.
        """
        logger.debug(f"[Keynote] Running {self.executable} ({len(script)} chars)")
        result = subprocess.run(
            [self.executable, "-"],
            input=script,
            capture_output=True,
            text=True,
            encoding="utf-8",
        )
        return ExitResult(
            returncode=result.returncode,
            stdout=result.stdout or "",
            stderr=result.stderr or "",
        )
