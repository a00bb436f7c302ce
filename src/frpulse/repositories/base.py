"""
Base file store interface.
"""

from abc import ABC, abstractmethod
from pathlib import Path


class FileStore(ABC):
    """
    Abstract storage for configuration artifacts.

    Implementations must never leave a truncated artifact behind: a write
    either replaces the whole file or leaves the previous content intact.
    """

    @abstractmethod
    def read(self, path: Path) -> bytes:
        """
        Read an artifact.

        Args:
            path: Artifact path

        Returns:
            The artifact content

        Raises:
            ArtifactIOError: If the artifact cannot be read
        """
        pass

    @abstractmethod
    def write_atomic(self, path: Path, data: bytes) -> None:
        """
        Replace an artifact with new content in one step.

        Args:
            path: Artifact path
            data: New content

        Raises:
            ArtifactIOError: If the artifact cannot be written
        """
        pass

    @abstractmethod
    def exists(self, path: Path) -> bool:
        """Check if an artifact exists."""
        pass
