"""
Convenience functions for the PAC proxy agent.
"""
from typing import Any, Dict, Optional, Union
import httpx
from .agent import PacProxyAgent
from .models import ConnectResult, PendingRequest, ProxyDirective
from .transport import PacProxyTransport
from .types import PacProxyAgentOptions


def create_pac_proxy_agent(
    uri: Optional[str] = None,
    options: Optional[Union[PacProxyAgentOptions, Dict[str, Any]]] = None,
    **kwargs: Any,
) -> PacProxyAgent:
    """Create a new PacProxyAgent; ``uri`` defaults to the PAC_URL env var."""
    return PacProxyAgent(uri, options, **kwargs)


def create_pac_client(
    uri: Optional[str] = None,
    options: Optional[Union[PacProxyAgentOptions, Dict[str, Any]]] = None,
    agent: Optional[PacProxyAgent] = None,
    **client_kwargs: Any,
) -> httpx.AsyncClient:
    """Get an async httpx client whose requests are routed by the PAC script."""
    agent = agent or create_pac_proxy_agent(uri, options)
    client_kwargs.setdefault("timeout", agent.options.timeout)
    client_kwargs.setdefault("trust_env", agent.options.trust_env)
    return httpx.AsyncClient(transport=PacProxyTransport(agent), **client_kwargs)


async def find_proxy_for_url(agent: PacProxyAgent, url: str) -> ProxyDirective:
    """Resolve the directive for an absolute URL."""
    return await agent.resolve(PendingRequest.from_url(url))


async def connect_url(agent: PacProxyAgent, url: str) -> ConnectResult:
    """Resolve and establish the connection for an absolute URL."""
    return await agent.connect(PendingRequest.from_url(url))
