"""
Artifact and unit naming for FRPulse.

Every tunnel instance is identified by a short name. The name maps to a
configuration artifact in the artifact directory and to a systemd unit:

    client "myclient" -> frpc-myclient.toml, frpulse-client-myclient
    server "myserver" -> frps-myserver.toml, frpulse-server-myserver

The directory is passed in explicitly; nothing here depends on the
working directory.
"""

import re
from pathlib import Path
from typing import Optional

from .core.config import Settings


CLIENT_ARTIFACT_PREFIX = "frpc-"
SERVER_ARTIFACT_PREFIX = "frps-"
ARTIFACT_SUFFIX = ".toml"

CLIENT_UNIT_PREFIX = "frpulse-client-"
SERVER_UNIT_PREFIX = "frpulse-server-"


def sanitize_name(raw: str) -> str:
    """
    Normalise an instance name.

    Keeps alphanumerics, underscores and hyphens and lowercases the result.
    """
    return re.sub(r"[^A-Za-z0-9_-]", "", raw).lower()


class FrpulsePaths:
    """Path manager for one artifact directory."""

    def __init__(self, config_dir: Path):
        self._config_dir = Path(config_dir)

    @classmethod
    def from_settings(cls, settings: Settings) -> "FrpulsePaths":
        return cls(settings.get_config_dir())

    @property
    def config_dir(self) -> Path:
        """Get the artifact directory path."""
        return self._config_dir

    def client_artifact(self, name: str) -> Path:
        """Get the artifact path of a client."""
        return self._config_dir / f"{CLIENT_ARTIFACT_PREFIX}{name}{ARTIFACT_SUFFIX}"

    def server_artifact(self, name: str) -> Path:
        """Get the artifact path of a server."""
        return self._config_dir / f"{SERVER_ARTIFACT_PREFIX}{name}{ARTIFACT_SUFFIX}"

    @staticmethod
    def client_unit(name: str) -> str:
        return f"{CLIENT_UNIT_PREFIX}{name}"

    @staticmethod
    def server_unit(name: str) -> str:
        return f"{SERVER_UNIT_PREFIX}{name}"

    def list_clients(self) -> list[str]:
        """List client names that have an artifact, sorted."""
        return self._list(CLIENT_ARTIFACT_PREFIX)

    def list_servers(self) -> list[str]:
        """List server names that have an artifact, sorted."""
        return self._list(SERVER_ARTIFACT_PREFIX)

    def _list(self, prefix: str) -> list[str]:
        if not self._config_dir.is_dir():
            return []
        return sorted(
            path.name[len(prefix):-len(ARTIFACT_SUFFIX)]
            for path in self._config_dir.glob(f"{prefix}*{ARTIFACT_SUFFIX}")
            if path.is_file()
        )

    @staticmethod
    def name_from_unit(unit: str) -> Optional[str]:
        """Extract the instance name from a unit name, if it is ours."""
        for prefix in (CLIENT_UNIT_PREFIX, SERVER_UNIT_PREFIX):
            if unit.startswith(prefix):
                return unit[len(prefix):]
        return None

    def __repr__(self) -> str:
        return f"FrpulsePaths(config_dir={self._config_dir})"
