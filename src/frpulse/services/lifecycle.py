"""
Lifecycle coordinator: load -> mutate -> persist -> restart.

One call to ``apply_change`` is one CLI operation. The document is parsed
fresh from disk, mutated once, written back atomically and discarded.

State machine per call::

    IDLE -> LOADED -> MUTATED -> PERSISTED -> RESTARTED -> DONE
      \\________\\_________\\_____________________________-> FAILED

A restart failure does not fail the operation: the change is already on
disk, so the result is DONE with ``restart_error`` set.
"""

from pathlib import Path
from typing import Optional

from ..core.logging import get_logger
from ..document.parser import DocumentParser
from ..document.serializer import serialize_document
from ..errors import ArtifactIOError, FrpulseError, ProcessError
from ..repositories.base import FileStore
from ..schemas.operations import ProxyOperation
from ..schemas.result import ChangeResult, LifecycleState
from ..supervisor import ProcessSupervisor
from .proxy_service import apply_operation


logger = get_logger(__name__)

ENCODING = "utf-8"


class LifecycleCoordinator:
    """
    Sequences one proxy change against an artifact and its unit.

    Args:
        store: File store used to read and atomically replace the artifact
        supervisor: Process supervisor; ``None`` skips the restart step
    """

    def __init__(self, store: FileStore, supervisor: Optional[ProcessSupervisor] = None):
        self._store = store
        self._supervisor = supervisor
        self.state = LifecycleState.IDLE

    def _transition(self, state: LifecycleState, artifact: Path) -> None:
        logger.debug("Lifecycle transition", source=self.state.value, target=state.value, file=str(artifact))
        self.state = state

    def _fail(self, error: FrpulseError, artifact: Path, warnings: list[str]) -> ChangeResult:
        failed_at = self.state
        self.state = LifecycleState.FAILED
        logger.error(
            "Proxy change failed",
            file=str(artifact),
            error=error.kind,
            failed_at=failed_at.value,
            message=error.message,
        )
        return ChangeResult(
            success=False,
            state=LifecycleState.FAILED,
            message=error.message,
            error=error.kind,
            failed_at=failed_at,
            warnings=warnings,
        )

    def apply_change(
        self,
        artifact_path: Path,
        operation: ProxyOperation,
        unit_name: Optional[str] = None,
    ) -> ChangeResult:
        """
        Apply one proxy operation to an artifact and restart its unit.

        Args:
            artifact_path: Artifact to change
            operation: The add/edit/delete operation
            unit_name: Unit to restart after persisting (skipped if None)

        Returns:
            A result tagged success or failure with the error kind
        """
        artifact = Path(artifact_path)
        self.state = LifecycleState.IDLE
        warnings: list[str] = []

        # IDLE -> LOADED
        try:
            raw = self._store.read(artifact)
            text = raw.decode(ENCODING)
        except ArtifactIOError as e:
            return self._fail(e, artifact, warnings)
        except UnicodeDecodeError as e:
            return self._fail(ArtifactIOError(f"Cannot decode {artifact}: {e}", path=str(artifact)), artifact, warnings)
        self._transition(LifecycleState.LOADED, artifact)

        # LOADED -> MUTATED
        parser = DocumentParser()
        document = parser.parse(text)
        warnings = [str(w) for w in parser.warnings]
        try:
            document = apply_operation(document, operation)
        except FrpulseError as e:
            return self._fail(e, artifact, warnings)
        self._transition(LifecycleState.MUTATED, artifact)

        # MUTATED -> PERSISTED
        try:
            content = serialize_document(document, header_comment=artifact.name)
            self._store.write_atomic(artifact, content.encode(ENCODING))
        except ArtifactIOError as e:
            return self._fail(e, artifact, warnings)
        self._transition(LifecycleState.PERSISTED, artifact)

        message = f"Applied {operation.describe()} to {artifact.name}"
        restarted = False
        restart_error = None

        # PERSISTED -> RESTARTED
        if self._supervisor is not None and unit_name:
            try:
                self._supervisor.restart(unit_name)
                restarted = True
                self._transition(LifecycleState.RESTARTED, artifact)
            except ProcessError as e:
                restart_error = e.message
                logger.warning("Change persisted but restart failed", unit=unit_name, error=e.message)

        self._transition(LifecycleState.DONE, artifact)
        logger.info("Proxy change applied", file=str(artifact), operation=operation.op, restarted=restarted)

        return ChangeResult(
            success=True,
            state=LifecycleState.DONE,
            message=message,
            restarted=restarted,
            restart_error=restart_error,
            warnings=warnings,
            document=document,
        )


def load_document(store: FileStore, artifact_path: Path):
    """
    Read and parse an artifact without changing it.

    Returns:
        Tuple of (document, parse warnings)

    Raises:
        ArtifactIOError: If the artifact cannot be read or decoded
    """
    raw = store.read(Path(artifact_path))
    try:
        text = raw.decode(ENCODING)
    except UnicodeDecodeError as e:
        raise ArtifactIOError(f"Cannot decode {artifact_path}: {e}", path=str(artifact_path)) from e
    parser = DocumentParser()
    document = parser.parse(text)
    return document, parser.warnings
