"""
Loader for inline ``data:`` URIs.
"""
import base64
import binascii
import hashlib
import logging
from typing import Any, Optional, Tuple
from urllib.parse import unquote_to_bytes

from .base import BaseLoader
from ..errors import SourceUnavailableError
from ..models import FetchResult
from ..types import PacProxyAgentOptions

logger = logging.getLogger(__name__)


def decode_data_uri(uri: str) -> bytes:
    """Decode the payload of an RFC 2397 ``data:`` URI."""
    if not uri.lower().startswith("data:"):
        raise ValueError("not a data: URI")
    meta, sep, payload = uri[5:].partition(",")
    if not sep:
        raise ValueError("data: URI is missing the ',' separator")
    if meta.lower().endswith(";base64"):
        return base64.b64decode(unquote_to_bytes(payload), validate=True)
    return unquote_to_bytes(payload)


class DataLoader(BaseLoader):
    """Decodes inline scripts. The URI digest serves as the cache token."""

    @property
    def schemes(self) -> Tuple[str, ...]:
        return ("data",)

    async def fetch(
        self,
        uri: str,
        token: Optional[Any],
        options: PacProxyAgentOptions,
    ) -> FetchResult:
        digest = hashlib.sha256(uri.encode("utf-8")).hexdigest()
        if token == digest:
            return FetchResult(content=None, token=digest)

        try:
            content = decode_data_uri(uri)
        except (ValueError, binascii.Error) as e:
            raise SourceUnavailableError(uri[:64], e) from e

        logger.debug(f"Decoded {len(content)} byte PAC script from data: URI")
        return FetchResult(content=content, token=digest)
