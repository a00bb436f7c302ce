"""
Client service: builds and stores the artifact of a new tunnel client.
"""

from pathlib import Path

from ..core.logging import get_logger
from ..document.serializer import serialize_document
from ..document.values import encode_string
from ..errors import ArtifactIOError
from ..models.document import Document
from ..repositories.base import FileStore
from ..schemas.client import ClientCreate
from .lifecycle import ENCODING
from .proxy_service import add_proxy, next_proxy_name


logger = get_logger(__name__)

CLIENT_LOG_LEVEL = "info"
CLIENT_LOG_MAX_DAYS = 3


def build_client_document(data: ClientCreate, log_dir: str = "/var/log") -> Document:
    """
    Build the document of a new client.

    The common block holds the connection settings the tunnel client needs;
    initial proxies are added through the proxy service so they get the
    same validation and default names as later additions.

    Raises:
        ProxyValidationError: If an initial proxy is invalid
    """
    log_file = f"{log_dir.rstrip('/')}/frpc-{data.name}.log"
    document = Document(common={
        "server_addr": encode_string(data.server_addr),
        "server_port": str(data.server_port),
        "token": encode_string(data.token),
        "tls_enable": "true" if data.tls_enable else "false",
        "log_file": encode_string(log_file),
        "log_level": encode_string(CLIENT_LOG_LEVEL),
        "log_max_days": str(CLIENT_LOG_MAX_DAYS),
    })

    for proxy in data.proxies:
        name = proxy.name or next_proxy_name(document, proxy.protocol_type, data.name)
        document = add_proxy(document, proxy.to_entry(name))

    return document


def create_client_artifact(
    store: FileStore,
    artifact_path: Path,
    data: ClientCreate,
    log_dir: str = "/var/log",
    overwrite: bool = False,
) -> Document:
    """
    Write the artifact of a new client.

    Raises:
        ArtifactIOError: If the artifact exists (and ``overwrite`` is off)
            or cannot be written
        ProxyValidationError: If an initial proxy is invalid
    """
    artifact = Path(artifact_path)
    if store.exists(artifact) and not overwrite:
        raise ArtifactIOError(f"Artifact already exists: {artifact}", path=str(artifact))

    document = build_client_document(data, log_dir=log_dir)
    content = serialize_document(document, header_comment=artifact.name)
    store.write_atomic(artifact, content.encode(ENCODING))

    logger.info("Created client artifact", client=data.name, file=str(artifact), proxies=len(document.proxies))
    return document
