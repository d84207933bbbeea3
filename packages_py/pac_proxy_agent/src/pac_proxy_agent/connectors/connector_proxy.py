"""
Connectors for PROXY, HTTPS and SOCKS directives, built on httpx transports.
"""
import logging
from typing import Any, Dict
import httpx
from .base import BaseConnector
from ..models import PendingRequest, ProxyDirective, ProxyHandoff, ProxyType
from ..types import PacProxyAgentOptions

logger = logging.getLogger(__name__)


class ProxyConnector(BaseConnector):
    """Hands the request off to a proxy endpoint parsed from the PAC result."""

    def get_settings(self, directive: ProxyDirective, options: PacProxyAgentOptions) -> Dict[str, Any]:
        """Endpoint parameters merged with the agent's explicit settings.

        Explicit agent settings win over endpoint parameters.
        """
        endpoint = {
            "proxy_url": directive.proxy_url,
            "host": directive.host,
            "port": directive.port,
        }
        return {**endpoint, **options.explicit_settings()}

    def get_transport_kwargs(self, directive: ProxyDirective, options: PacProxyAgentOptions) -> Dict[str, Any]:
        """Build kwargs for httpx.AsyncHTTPTransport."""
        return {
            "proxy": httpx.Proxy(directive.proxy_url),
            "verify": options.create_ssl_context(),
            "trust_env": options.trust_env,
        }

    def build_transport(self, directive: ProxyDirective, options: PacProxyAgentOptions) -> httpx.AsyncHTTPTransport:
        kwargs = self.get_transport_kwargs(directive, options)
        logger.debug(f"Creating httpx.AsyncHTTPTransport via {directive.proxy_url}")
        return httpx.AsyncHTTPTransport(**kwargs)

    async def connect(
        self,
        request: PendingRequest,
        directive: ProxyDirective,
        options: PacProxyAgentOptions,
    ) -> ProxyHandoff:
        return ProxyHandoff(
            directive=directive,
            proxy_url=directive.proxy_url,
            tunnel=request.secure,
            transport=self.build_transport(directive, options),
            settings=self.get_settings(directive, options),
        )


class HttpProxyConnector(ProxyConnector):
    """Plain HTTP proxy: forwards http requests, CONNECT tunnels for https."""

    @property
    def proxy_type(self) -> ProxyType:
        return ProxyType.PROXY


class HttpsProxyConnector(ProxyConnector):
    """HTTP proxy reached over TLS, independent of the destination's scheme."""

    @property
    def proxy_type(self) -> ProxyType:
        return ProxyType.HTTPS

    def get_transport_kwargs(self, directive: ProxyDirective, options: PacProxyAgentOptions) -> Dict[str, Any]:
        kwargs = super().get_transport_kwargs(directive, options)
        kwargs["proxy"] = httpx.Proxy(directive.proxy_url, ssl_context=options.create_ssl_context())
        return kwargs


class SocksProxyConnector(ProxyConnector):
    """SOCKS5 proxy; TLS to a secure destination runs inside the tunnel."""

    @property
    def proxy_type(self) -> ProxyType:
        return ProxyType.SOCKS
