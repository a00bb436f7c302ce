"""
Client schemas for creating a new tunnel client artifact.
"""

import ipaddress
import re

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..paths import sanitize_name
from .proxy import ProxyCreate


_DOMAIN = re.compile(
    r"^(?=.{1,253}$)([A-Za-z0-9]([A-Za-z0-9-]{0,61}[A-Za-z0-9])?\.)+[A-Za-z]{2,63}$"
)


def is_valid_host(host: str) -> bool:
    """Accept IPv4, IPv6 or a domain name."""
    try:
        ipaddress.ip_address(host.strip("[]"))
        return True
    except ValueError:
        return bool(_DOMAIN.match(host))


class ClientCreate(BaseModel):
    """Schema for creating a tunnel client artifact."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(
        ...,
        description="Client name (alphanumeric, underscore, hyphen; lowercased)",
        examples=["myclient"]
    )
    server_addr: str = Field(
        ...,
        description="Tunnel server address (IPv4, IPv6 or domain)"
    )
    server_port: int = Field(
        default=7000,
        ge=1,
        le=65535,
        description="Tunnel server port"
    )
    token: str = Field(
        ...,
        min_length=1,
        description="Authentication token"
    )
    tls_enable: bool = Field(
        default=True,
        description="Whether the server uses TLS"
    )
    proxies: list[ProxyCreate] = Field(
        default_factory=list,
        description="Initial proxies"
    )

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Sanitise the client name and require something left over."""
        name = sanitize_name(v)
        if not name:
            raise ValueError("Client name cannot be empty")
        return name

    @field_validator('server_addr')
    @classmethod
    def validate_server_addr(cls, v: str) -> str:
        """Validate the server address format."""
        if not is_valid_host(v):
            raise ValueError(f"Invalid server address: {v}")
        return v
