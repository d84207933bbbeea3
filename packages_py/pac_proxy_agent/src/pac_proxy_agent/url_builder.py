"""
Rebuild the absolute URL a PAC script receives for a pending request.
"""
from typing import Optional
from urllib.parse import urlunsplit

from .models import DEFAULT_PORTS, PendingRequest


def build_url(request: PendingRequest, secure: Optional[bool] = None) -> str:
    """Return the URL passed to ``FindProxyForURL``.

    The host and port come from the destination metadata. The port is left
    out when it is the scheme default, and the path and query are kept
    verbatim.
    """
    if secure is None:
        secure = request.secure
    scheme = "https" if secure else "http"

    host = request.host
    if ":" in host and not host.startswith("["):
        host = f"[{host}]"
    netloc = host if request.port == DEFAULT_PORTS[scheme] else f"{host}:{request.port}"

    path, _, query = (request.path or "/").partition("?")
    if not path.startswith("/"):
        path = f"/{path}"

    return urlunsplit((scheme, netloc, path, query, ""))
