"""
Data models for PAC resolution and dispatch.
"""
import asyncio
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Union
from urllib.parse import urlsplit

DEFAULT_PORTS = {"http": 80, "https": 443}


class ProxyType(str, Enum):
    DIRECT = "DIRECT"
    SOCKS = "SOCKS"
    PROXY = "PROXY"
    HTTPS = "HTTPS"


# URL scheme each proxy type is reached with
PROXY_SCHEMES = {
    ProxyType.SOCKS: "socks5",
    ProxyType.PROXY: "http",
    ProxyType.HTTPS: "https",
}


class DispatchState(str, Enum):
    RESOLVING_URL = "resolving_url"
    AWAITING_RESOLVER = "awaiting_resolver"
    EVALUATING_PAC = "evaluating_pac"
    PARSING_DIRECTIVE = "parsing_directive"
    CONNECTING = "connecting"
    CONNECTED = "connected"
    FAILED = "failed"


@dataclass(frozen=True)
class PendingRequest:
    """Transport-level metadata of an outbound request."""
    host: str
    port: int
    path: str = "/"
    secure: bool = False

    @classmethod
    def from_url(cls, url: str) -> "PendingRequest":
        """Build request metadata from an absolute http(s) URL."""
        parts = urlsplit(url)
        scheme = parts.scheme.lower()
        if scheme not in DEFAULT_PORTS or not parts.hostname:
            raise ValueError(f"Not an absolute http(s) URL: {url!r}")
        path = parts.path or "/"
        if parts.query:
            path = f"{path}?{parts.query}"
        return cls(
            host=parts.hostname,
            port=parts.port or DEFAULT_PORTS[scheme],
            path=path,
            secure=scheme == "https",
        )

    @classmethod
    def from_httpx_request(cls, request: Any) -> "PendingRequest":
        """Build request metadata from an ``httpx.Request``."""
        url = request.url
        secure = url.scheme == "https"
        return cls(
            host=url.host,
            port=url.port or DEFAULT_PORTS[url.scheme],
            path=url.raw_path.decode("ascii"),
            secure=secure,
        )


@dataclass(frozen=True)
class ProxyDirective:
    """A single parsed PAC directive."""
    type: ProxyType
    host: Optional[str] = None
    port: Optional[int] = None

    @property
    def is_direct(self) -> bool:
        return self.type is ProxyType.DIRECT

    @property
    def endpoint(self) -> Optional[str]:
        if self.host is None:
            return None
        host = f"[{self.host}]" if ":" in self.host else self.host
        return f"{host}:{self.port}"

    @property
    def proxy_url(self) -> Optional[str]:
        """URL of the proxy endpoint, or None for DIRECT."""
        if self.is_direct:
            return None
        return f"{PROXY_SCHEMES[self.type]}://{self.endpoint}"

    def __str__(self) -> str:
        if self.is_direct:
            return self.type.value
        return f"{self.type.value} {self.endpoint}"


DIRECT = ProxyDirective(ProxyType.DIRECT)


@dataclass
class FetchResult:
    """Outcome of a source fetch. ``content`` is None when unchanged."""
    content: Optional[bytes]
    token: Any = None

    @property
    def unchanged(self) -> bool:
        return self.content is None


@dataclass
class DirectConnection:
    """An open stream to the destination, TLS wrapped when it is secure."""
    directive: ProxyDirective
    reader: asyncio.StreamReader
    writer: asyncio.StreamWriter

    async def close(self) -> None:
        self.writer.close()
        await self.writer.wait_closed()


@dataclass
class ProxyHandoff:
    """A proxy sub-agent the request is delegated to."""
    directive: ProxyDirective
    proxy_url: str
    tunnel: bool
    transport: Any  # httpx.AsyncBaseTransport
    settings: Dict[str, Any] = field(default_factory=dict)

    async def close(self) -> None:
        await self.transport.aclose()


ConnectResult = Union[DirectConnection, ProxyHandoff]
