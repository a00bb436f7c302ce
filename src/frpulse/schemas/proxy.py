"""
Proxy schemas for add and edit requests.

These schemas describe what a caller asks for. Range and consistency
checks happen in the proxy service so they surface as typed errors.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from ..models.proxy import ProtocolType, ProxyEntry


class ProxyCreate(BaseModel):
    """Schema for adding a proxy; the name is generated when omitted."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: Optional[str] = Field(
        default=None,
        description="Proxy name (generated as {protocol}_{client}_{n} if omitted)",
        examples=["tcp_myclient_1"]
    )
    protocol_type: ProtocolType = Field(
        default=ProtocolType.TCP,
        description="Proxy protocol"
    )
    local_address: Optional[str] = Field(
        default=None,
        description="Local address (tcp/udp only, defaults to loopback)"
    )
    local_port: int = Field(
        ...,
        description="Local port"
    )
    remote_port: int = Field(
        ...,
        description="Remote port"
    )
    custom_domains: list[str] = Field(
        default_factory=list,
        description="Custom domains (http/https only)"
    )

    def to_entry(self, name: str) -> ProxyEntry:
        """Build the proxy entry under the given name."""
        return ProxyEntry(
            name=name,
            protocol_type=self.protocol_type,
            local_address=self.local_address,
            local_port=self.local_port,
            remote_port=self.remote_port,
            custom_domains=list(self.custom_domains),
        )


class ProxyChanges(BaseModel):
    """
    Schema for editing a proxy.

    Only fields that were explicitly set are applied
    (``model_dump(exclude_unset=True)``).
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    protocol_type: Optional[ProtocolType] = Field(
        default=None,
        description="New protocol"
    )
    local_address: Optional[str] = Field(
        default=None,
        description="New local address"
    )
    local_port: Optional[int] = Field(
        default=None,
        description="New local port"
    )
    remote_port: Optional[int] = Field(
        default=None,
        description="New remote port"
    )
    custom_domains: Optional[list[str]] = Field(
        default=None,
        description="Replacement custom domains (empty list clears them)"
    )

    def changed_fields(self) -> dict:
        """Fields explicitly set by the caller, with ``None`` values dropped."""
        return {k: v for k, v in self.model_dump(exclude_unset=True).items() if v is not None}
