"""
Proxy domain models with strong typing using Pydantic.

A proxy entry is one forwarded port definition of a tunnel client.
Range and protocol consistency checks are applied by the mutation
service, not here, so a hand-edited artifact can still be loaded.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


DEFAULT_LOCAL_ADDRESS = "127.0.0.1"

MIN_PORT = 1
MAX_PORT = 65535


class ProtocolType(str, Enum):
    """Proxy protocol types supported by the tunnel client."""
    TCP = "tcp"
    UDP = "udp"
    HTTP = "http"
    HTTPS = "https"

    @property
    def uses_local_address(self) -> bool:
        """Whether entries of this type carry a ``local_ip``."""
        return self in (ProtocolType.TCP, ProtocolType.UDP)

    @property
    def supports_custom_domains(self) -> bool:
        """Whether entries of this type may carry ``custom_domains``."""
        return self in (ProtocolType.HTTP, ProtocolType.HTTPS)


class ProxyEntry(BaseModel):
    """One named forwarded-port definition."""

    model_config = ConfigDict(
        from_attributes=True,
        str_strip_whitespace=True,
    )

    name: str = Field(
        ...,
        min_length=1,
        description="Unique proxy name, conventionally {protocol}_{client}_{n}"
    )
    protocol_type: ProtocolType = Field(
        default=ProtocolType.TCP,
        description="Proxy protocol"
    )
    local_address: Optional[str] = Field(
        default=None,
        description="Local address to forward to (tcp/udp only)"
    )
    local_port: int = Field(
        ...,
        description="Local port"
    )
    remote_port: int = Field(
        ...,
        description="Port exposed on the tunnel server"
    )
    custom_domains: list[str] = Field(
        default_factory=list,
        description="Host names routed to this proxy (http/https only)"
    )
    extra: dict[str, str] = Field(
        default_factory=dict,
        description="Unrecognised keys, kept verbatim as raw values"
    )

    def summary(self) -> str:
        """Short human readable description of the forwarding."""
        local = f"{self.local_address}:{self.local_port}" if self.local_address else str(self.local_port)
        text = f"{self.protocol_type.value} {local} -> :{self.remote_port}"
        if self.custom_domains:
            text += f" ({', '.join(self.custom_domains)})"
        return text
