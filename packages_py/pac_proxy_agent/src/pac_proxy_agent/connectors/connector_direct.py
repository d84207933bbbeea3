"""
Connector for DIRECT directives.
"""
import asyncio
import logging
import httpx
from .base import BaseConnector
from ..errors import ConnectorError
from ..models import DirectConnection, PendingRequest, ProxyDirective, ProxyType
from ..types import PacProxyAgentOptions

logger = logging.getLogger(__name__)


class DirectConnector(BaseConnector):
    """Connects straight to the destination, over TLS when it is secure."""

    @property
    def proxy_type(self) -> ProxyType:
        return ProxyType.DIRECT

    def build_transport(self, directive: ProxyDirective, options: PacProxyAgentOptions) -> httpx.AsyncHTTPTransport:
        logger.debug("Creating direct httpx.AsyncHTTPTransport")
        return httpx.AsyncHTTPTransport(
            verify=options.create_ssl_context(),
            trust_env=options.trust_env,
        )

    async def connect(
        self,
        request: PendingRequest,
        directive: ProxyDirective,
        options: PacProxyAgentOptions,
    ) -> DirectConnection:
        logger.debug(f"Opening direct connection to {request.host}:{request.port} (tls={request.secure})")
        try:
            context = options.create_ssl_context() if request.secure else None
            reader, writer = await asyncio.wait_for(
                asyncio.open_connection(
                    request.host,
                    request.port,
                    ssl=context,
                    server_hostname=request.host if context else None,
                ),
                timeout=options.timeout,
            )
        except (OSError, asyncio.TimeoutError) as e:
            logger.error(f"Direct connection to {request.host}:{request.port} failed: {e}")
            raise ConnectorError(directive, e) from e
        return DirectConnection(directive=directive, reader=reader, writer=writer)
