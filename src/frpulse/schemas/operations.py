"""
Proxy operations a caller can submit to the lifecycle coordinator.
"""

from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field

from .proxy import ProxyChanges, ProxyCreate


class AddProxy(BaseModel):
    """Append a new proxy."""
    op: Literal["add"] = "add"
    proxy: ProxyCreate
    client_name: Optional[str] = Field(
        default=None,
        description="Client name used to generate a default proxy name"
    )

    def describe(self) -> str:
        return f"add {self.proxy.name or self.proxy.protocol_type.value + ' proxy'}"


class EditProxy(BaseModel):
    """Change fields of an existing proxy."""
    op: Literal["edit"] = "edit"
    name: str
    changes: ProxyChanges = Field(default_factory=ProxyChanges)

    def describe(self) -> str:
        return f"edit {self.name}"


class DeleteProxy(BaseModel):
    """Remove a proxy."""
    op: Literal["delete"] = "delete"
    name: str

    def describe(self) -> str:
        return f"delete {self.name}"


ProxyOperation = Annotated[
    Union[AddProxy, EditProxy, DeleteProxy],
    Field(discriminator="op"),
]
