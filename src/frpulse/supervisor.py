"""
Process supervisor for tunnel units.

Keeps the running tunnel process in sync with its artifact. The
systemd implementation shells out to ``systemctl`` and ``journalctl``.
"""

import subprocess
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from .core.logging import get_logger
from .errors import ProcessError


logger = get_logger(__name__)


@dataclass
class UnitStatus:
    """Snapshot of a unit's state."""
    unit: str
    active: bool
    enabled: bool
    detail: str = ""


class ProcessSupervisor(ABC):
    """Interface the lifecycle coordinator uses to restart a unit."""

    @abstractmethod
    def restart(self, unit_name: str) -> None:
        """
        Restart a unit.

        Raises:
            ProcessError: If the restart failed
        """
        pass


class SystemdSupervisor(ProcessSupervisor):
    """Process supervisor backed by systemd."""

    def __init__(
        self,
        systemctl: str = "systemctl",
        journalctl: str = "journalctl",
        timeout: Optional[int] = 30,
    ):
        self.systemctl = systemctl
        self.journalctl = journalctl
        self.timeout = timeout

    def _run(self, cmd: list[str], unit_name: str) -> subprocess.CompletedProcess:
        try:
            return subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except FileNotFoundError as e:
            raise ProcessError(f"Command not found: {cmd[0]}", unit=unit_name) from e
        except subprocess.TimeoutExpired as e:
            raise ProcessError(f"Timed out after {self.timeout}s: {' '.join(cmd)}", unit=unit_name) from e

    def restart(self, unit_name: str) -> None:
        result = self._run([self.systemctl, "restart", unit_name], unit_name)
        if result.returncode != 0:
            detail = (result.stderr or result.stdout or "").strip()
            logger.error("Failed to restart unit", unit=unit_name, returncode=result.returncode, error=detail)
            raise ProcessError(
                f"Failed to restart {unit_name}" + (f": {detail}" if detail else ""),
                unit=unit_name,
            )
        logger.info("Restarted unit", unit=unit_name)

    def status(self, unit_name: str) -> UnitStatus:
        """Query whether a unit is running and enabled."""
        active = self._run([self.systemctl, "is-active", unit_name], unit_name).stdout.strip() == "active"
        enabled = self._run([self.systemctl, "is-enabled", unit_name], unit_name).stdout.strip() == "enabled"
        detail = self._run(
            [self.systemctl, "status", unit_name, "--no-pager"],
            unit_name,
        ).stdout
        return UnitStatus(unit=unit_name, active=active, enabled=enabled, detail=detail)

    def logs(self, unit_name: str, lines: int = 50) -> str:
        """Return the last ``lines`` journal lines of a unit."""
        result = self._run(
            [self.journalctl, "-u", unit_name, f"-n{lines}", "--no-pager"],
            unit_name,
        )
        if result.returncode != 0:
            raise ProcessError(
                f"Failed to read logs of {unit_name}: {result.stderr.strip()}",
                unit=unit_name,
            )
        return result.stdout

    def follow_logs(self, unit_name: str, lines: int = 50) -> None:
        """Stream a unit's journal to the terminal until interrupted."""
        cmd = [self.journalctl, "-u", unit_name, f"-n{lines}", "--no-pager", "-f"]
        try:
            subprocess.run(cmd)
        except FileNotFoundError as e:
            raise ProcessError(f"Command not found: {cmd[0]}", unit=unit_name) from e
