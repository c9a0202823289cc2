"""Proxy descriptors shared by every task that can run through a proxy."""

from enum import Enum
from ipaddress import IPv4Address, IPv6Address
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_serializer


class ProxyKind(str, Enum):
    """Proxy protocols accepted by the solving service."""

    HTTP = "http"
    SOCKS4 = "socks4"
    SOCKS5 = "socks5"


class Proxy(BaseModel):
    """A proxy the workers should route the challenge through.

    ``address`` is kept as an ``IPv4Address``/``IPv6Address`` when it parses as
    one and as a plain hostname string otherwise. The port travels as a string
    on the wire.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    kind: ProxyKind = Field(alias="proxyType")
    address: Union[IPv4Address, IPv6Address, str] = Field(
        alias="proxyAddress", union_mode="left_to_right"
    )
    port: int = Field(alias="proxyPort", ge=0, le=65535)
    login: Optional[str] = Field(default=None, alias="proxyLogin")
    password: Optional[str] = Field(default=None, alias="proxyPassword")

    @field_serializer("port")
    def _port_as_string(self, port: int) -> str:
        return str(port)

    def to_wire(self) -> Dict[str, Any]:
        """Render the flattened ``proxy*`` fields merged into a task object."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    def __repr__(self) -> str:
        # Credentials stay out of reprs and log lines
        return f"Proxy(kind={self.kind.value!r}, address={str(self.address)!r}, port={self.port})"


class WithProxy(BaseModel):
    """Proxy-axis state: the task is solved through ``proxy``."""

    model_config = ConfigDict(frozen=True)

    proxy: Proxy


class ProxyLess(BaseModel):
    """Proxy-axis state: the service uses its own network."""

    model_config = ConfigDict(frozen=True)


ProxyTask = Union[WithProxy, ProxyLess]
