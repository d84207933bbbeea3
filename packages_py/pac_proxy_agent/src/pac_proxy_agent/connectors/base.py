"""
Abstract base connector, one per PAC directive type.
"""
from abc import ABC, abstractmethod
from typing import Any
from ..models import ConnectResult, PendingRequest, ProxyDirective, ProxyType
from ..types import PacProxyAgentOptions


class BaseConnector(ABC):
    """Abstract interface for establishing a connection for one directive type."""

    @property
    @abstractmethod
    def proxy_type(self) -> ProxyType:
        """Directive type handled by the connector."""
        pass

    @abstractmethod
    def build_transport(self, directive: ProxyDirective, options: PacProxyAgentOptions) -> Any:
        """Create an ``httpx.AsyncBaseTransport`` that routes through ``directive``."""
        pass

    @abstractmethod
    async def connect(
        self,
        request: PendingRequest,
        directive: ProxyDirective,
        options: PacProxyAgentOptions,
    ) -> ConnectResult:
        """Open the connection or produce the proxy hand-off for ``request``."""
        pass
