"""
httpx transport that routes every request according to a PAC script.
"""
import logging
from typing import Dict
import httpx

from .agent import PacProxyAgent
from .connectors import get_connector
from .models import PendingRequest, ProxyDirective

logger = logging.getLogger(__name__)


class PacProxyTransport(httpx.AsyncBaseTransport):
    """Resolves a directive per request and forwards to a pooled transport for it.

    One underlying transport is kept per distinct directive so connection
    pools are reused; the directive itself is evaluated for every request.
    The pool is bounded by the number of distinct proxies the script can
    return and lives until ``aclose()``.
    """

    def __init__(self, agent: PacProxyAgent):
        self.agent = agent
        self._transports: Dict[ProxyDirective, httpx.AsyncBaseTransport] = {}

    def get_transport(self, directive: ProxyDirective) -> httpx.AsyncBaseTransport:
        """Get or create the transport for ``directive``."""
        transport = self._transports.get(directive)
        if transport is None:
            connector = get_connector(directive.type, self.agent.connectors)
            transport = connector.build_transport(directive, self.agent.options)
            self._transports[directive] = transport
        return transport

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        pending = PendingRequest.from_httpx_request(request)
        directive = await self.agent.resolve(pending)
        transport = self.get_transport(directive)
        return await transport.handle_async_request(request)

    async def aclose(self) -> None:
        transports = list(self._transports.values())
        self._transports.clear()
        for transport in transports:
            await transport.aclose()
