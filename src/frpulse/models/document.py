"""
Document model: one parsed tunnel configuration artifact.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from .proxy import ProxyEntry


class Document(BaseModel):
    """
    A common block plus an ordered list of named proxy blocks.

    ``common`` maps keys to their raw TOML value text (quotes included),
    so connection settings survive a load/save cycle untouched.
    """

    model_config = ConfigDict(from_attributes=True)

    common: dict[str, str] = Field(
        default_factory=dict,
        description="Connection-level settings, raw value text"
    )
    proxies: list[ProxyEntry] = Field(
        default_factory=list,
        description="Proxy entries in file order"
    )

    def get_proxy(self, name: str) -> Optional[ProxyEntry]:
        """Return the first proxy called ``name``, if any."""
        for proxy in self.proxies:
            if proxy.name == name:
                return proxy
        return None

    def index_of(self, name: str) -> Optional[int]:
        """Return the position of the first proxy called ``name``."""
        for index, proxy in enumerate(self.proxies):
            if proxy.name == name:
                return index
        return None

    def proxy_names(self) -> list[str]:
        return [proxy.name for proxy in self.proxies]
