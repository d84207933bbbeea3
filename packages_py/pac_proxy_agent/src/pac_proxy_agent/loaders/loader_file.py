"""
Loader for local PAC files.
"""
import asyncio
import logging
import os
from typing import Any, Optional, Tuple
from urllib.parse import urlsplit
from urllib.request import url2pathname

from .base import BaseLoader
from ..errors import SourceUnavailableError
from ..models import FetchResult
from ..types import PacProxyAgentOptions

logger = logging.getLogger(__name__)


def file_uri_to_path(uri: str) -> str:
    """Convert a ``file:`` URI, or a bare path, to a filesystem path."""
    if not uri.lower().startswith("file:"):
        return uri
    parts = urlsplit(uri)
    path = url2pathname(parts.path)
    if parts.netloc and parts.netloc != "localhost":
        # UNC share, file://server/share/pac.js
        path = f"//{parts.netloc}{path}"
    return path


class FileLoader(BaseLoader):
    """Reads PAC files from disk, skipping the read when mtime and size match."""

    @property
    def schemes(self) -> Tuple[str, ...]:
        return ("file",)

    async def fetch(
        self,
        uri: str,
        token: Optional[Any],
        options: PacProxyAgentOptions,
    ) -> FetchResult:
        path = file_uri_to_path(uri)
        try:
            return await asyncio.to_thread(self._read, path, token)
        except OSError as e:
            logger.error(f"Failed to read PAC file {path}: {e}")
            raise SourceUnavailableError(uri, e) from e

    def _read(self, path: str, token: Optional[Any]) -> FetchResult:
        stat = os.stat(path)
        current = (stat.st_mtime_ns, stat.st_size)
        if token == current:
            logger.debug(f"PAC file {path} not modified")
            return FetchResult(content=None, token=current)

        with open(path, "rb") as f:
            content = f.read()
        logger.debug(f"Read {len(content)} byte PAC file from {path}")
        return FetchResult(content=content, token=current)
