"""
Local filesystem store for configuration artifacts.

Writes go to a temporary file in the target directory which is then
renamed over the artifact, so a crash never leaves a partial file.
"""

import os
import tempfile
from pathlib import Path

from ..core.logging import get_logger
from ..errors import ArtifactIOError
from .base import FileStore


logger = get_logger(__name__)


class LocalFileStore(FileStore):
    """File store backed by the local filesystem."""

    DEFAULT_MODE = 0o644

    def read(self, path: Path) -> bytes:
        try:
            data = Path(path).read_bytes()
        except OSError as e:
            logger.error("Failed to read artifact", file=str(path), error=str(e))
            raise ArtifactIOError(f"Cannot read {path}: {e.strerror or e}", path=str(path)) from e

        logger.debug("Read artifact", file=str(path), size=len(data))
        return data

    def write_atomic(self, path: Path, data: bytes) -> None:
        path = Path(path)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            mode = path.stat().st_mode & 0o777 if path.exists() else self.DEFAULT_MODE
            fd, tmp_name = tempfile.mkstemp(
                dir=str(path.parent),
                prefix=f".{path.name}.",
                suffix=".tmp",
            )
        except OSError as e:
            logger.error("Failed to prepare artifact write", file=str(path), error=str(e))
            raise ArtifactIOError(f"Cannot write {path}: {e.strerror or e}", path=str(path)) from e

        try:
            with os.fdopen(fd, "wb") as f:
                f.write(data)
                f.flush()
                os.fsync(f.fileno())
            os.chmod(tmp_name, mode)
            os.replace(tmp_name, path)
        except OSError as e:
            try:
                os.unlink(tmp_name)
            except FileNotFoundError:
                pass
            logger.error("Failed to write artifact", file=str(path), error=str(e))
            raise ArtifactIOError(f"Cannot write {path}: {e.strerror or e}", path=str(path)) from e

        logger.debug("Wrote artifact", file=str(path), size=len(data))

    def exists(self, path: Path) -> bool:
        return Path(path).is_file()
