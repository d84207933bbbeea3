"""
Connector registry.
"""
import logging
from typing import Dict, Optional, Type
from .base import BaseConnector
from .connector_direct import DirectConnector
from .connector_proxy import HttpProxyConnector, HttpsProxyConnector, ProxyConnector, SocksProxyConnector
from ..models import ProxyType

logger = logging.getLogger(__name__)

_connectors: Dict[ProxyType, Type[BaseConnector]] = {}


def register_connector(connector_cls: Type[BaseConnector]) -> None:
    """Register a connector class for the directive type it handles."""
    proxy_type = connector_cls().proxy_type
    _connectors[proxy_type] = connector_cls
    logger.debug(f"Registered connector: {proxy_type.value}")


def get_connector(
    proxy_type: ProxyType,
    connectors: Optional[Dict[ProxyType, BaseConnector]] = None,
) -> BaseConnector:
    """Get a connector instance for ``proxy_type``.

    ``connectors`` maps directive types to connector instances and takes
    precedence over the registry.
    """
    if connectors and proxy_type in connectors:
        return connectors[proxy_type]
    if proxy_type not in _connectors:
        raise KeyError(f"Connector '{proxy_type.value}' not found. Available: {[t.value for t in _connectors]}")
    return _connectors[proxy_type]()


# Register default connectors
register_connector(DirectConnector)
register_connector(SocksProxyConnector)
register_connector(HttpProxyConnector)
register_connector(HttpsProxyConnector)

__all__ = [
    "BaseConnector",
    "DirectConnector",
    "HttpProxyConnector",
    "HttpsProxyConnector",
    "ProxyConnector",
    "SocksProxyConnector",
    "get_connector",
    "register_connector",
]
