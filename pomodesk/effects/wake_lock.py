"""Keep the display awake while an interval is running.

Backed by a helper process that holds the OS inhibitor for as long as
it lives: ``caffeinate`` on macOS, ``systemd-inhibit`` on Linux.
"""

from __future__ import annotations

import logging
import subprocess
import sys

log = logging.getLogger(__name__)


class WakeLockUnavailable(RuntimeError):
    """No inhibitor command exists for this platform."""


def default_command(platform: str | None = None) -> list[str] | None:
    platform = platform or sys.platform
    if platform == "darwin":
        return ["caffeinate", "-d", "-i"]
    if platform.startswith("linux"):
        return [
            "systemd-inhibit",
            "--what=idle:sleep",
            "--who=Pomodesk",
            "--why=Timer running",
            "sleep", "infinity",
        ]
    return None


class WakeLock:
    def __init__(self, command: list[str] | None = None) -> None:
        self._command = command if command is not None else default_command()
        self._process: subprocess.Popen | None = None

    @property
    def held(self) -> bool:
        return self._process is not None and self._process.poll() is None

    def acquire(self) -> None:
        """Start the inhibitor.  Raises if the platform has none."""
        if self.held:
            return
        if not self._command:
            raise WakeLockUnavailable(f"no wake-lock command on {sys.platform}")
        self._process = subprocess.Popen(
            self._command,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
        )
        log.debug("wake lock acquired (pid %s)", self._process.pid)

    def release(self) -> None:
        process, self._process = self._process, None
        if process is None or process.poll() is not None:
            return
        process.terminate()
        try:
            process.wait(timeout=2)
        except subprocess.TimeoutExpired:
            process.kill()
        log.debug("wake lock released")
