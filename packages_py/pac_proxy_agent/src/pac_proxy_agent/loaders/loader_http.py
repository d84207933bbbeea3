"""
Loader for PAC files served over HTTP(S), using httpx.
"""
import logging
from typing import Any, Dict, Optional, Tuple
import httpx

from .base import BaseLoader
from ..errors import SourceUnavailableError
from ..models import FetchResult
from ..types import PacProxyAgentOptions

logger = logging.getLogger(__name__)


class HttpLoader(BaseLoader):
    """Fetches PAC files with conditional GET (ETag / Last-Modified)."""

    @property
    def schemes(self) -> Tuple[str, ...]:
        return ("http", "https")

    def get_client_kwargs(self, options: PacProxyAgentOptions) -> Dict[str, Any]:
        """Build kwargs for the httpx client used to fetch the PAC file."""
        return {
            "timeout": options.timeout,
            "verify": options.create_ssl_context(),
            "trust_env": options.trust_env,
            "follow_redirects": True,
        }

    async def fetch(
        self,
        uri: str,
        token: Optional[Any],
        options: PacProxyAgentOptions,
    ) -> FetchResult:
        headers: Dict[str, str] = {}
        if token:
            if token.get("etag"):
                headers["If-None-Match"] = token["etag"]
            if token.get("last_modified"):
                headers["If-Modified-Since"] = token["last_modified"]

        try:
            client_kwargs = self.get_client_kwargs(options)
            async with httpx.AsyncClient(**client_kwargs) as client:
                response = await client.get(uri, headers=headers)
        except (httpx.HTTPError, OSError) as e:
            logger.error(f"Failed to fetch PAC url {uri}: {e}")
            raise SourceUnavailableError(uri, e) from e

        if response.status_code == 304 and token:
            logger.debug(f"PAC url {uri} not modified")
            return FetchResult(content=None, token=token)

        if response.status_code >= 400:
            logger.error(f"Failed to access PAC url {uri}: HTTP {response.status_code}")
            raise SourceUnavailableError(uri, RuntimeError(f"HTTP {response.status_code}"))

        validators = {
            "etag": response.headers.get("etag"),
            "last_modified": response.headers.get("last-modified"),
        }
        logger.debug(f"Fetched {len(response.content)} byte PAC file from {uri}")
        return FetchResult(content=response.content, token=validators)
