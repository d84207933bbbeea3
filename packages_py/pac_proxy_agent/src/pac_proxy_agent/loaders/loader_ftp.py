"""
Loader for PAC files on FTP servers.
"""
import asyncio
import ftplib
import io
import logging
from typing import Any, Optional, Tuple
from urllib.parse import unquote, urlsplit

from .base import BaseLoader
from ..errors import SourceUnavailableError
from ..models import FetchResult
from ..types import PacProxyAgentOptions

logger = logging.getLogger(__name__)


class FtpLoader(BaseLoader):
    """Retrieves PAC files over FTP, using MDTM as the change marker when available."""

    @property
    def schemes(self) -> Tuple[str, ...]:
        return ("ftp",)

    async def fetch(
        self,
        uri: str,
        token: Optional[Any],
        options: PacProxyAgentOptions,
    ) -> FetchResult:
        try:
            return await asyncio.to_thread(self._retrieve, uri, token, options.timeout)
        except ftplib.all_errors as e:
            logger.error(f"Failed to fetch PAC file {uri}: {e}")
            raise SourceUnavailableError(uri, e) from e

    def _retrieve(self, uri: str, token: Optional[Any], timeout: float) -> FetchResult:
        parts = urlsplit(uri)
        path = unquote(parts.path)

        ftp = ftplib.FTP(timeout=timeout)
        try:
            ftp.connect(parts.hostname or "localhost", parts.port or 21)
            ftp.login(unquote(parts.username or "anonymous"), unquote(parts.password or "anonymous@"))

            modified = None
            try:
                modified = ftp.sendcmd(f"MDTM {path}").split(None, 1)[1]
            except ftplib.error_perm:
                logger.debug(f"FTP server does not support MDTM for {path}")

            if modified is not None and token == modified:
                logger.debug(f"PAC file {uri} not modified")
                return FetchResult(content=None, token=modified)

            buf = io.BytesIO()
            ftp.retrbinary(f"RETR {path}", buf.write)
        finally:
            ftp.close()

        content = buf.getvalue()
        logger.debug(f"Retrieved {len(content)} byte PAC file from {uri}")
        return FetchResult(content=content, token=modified)
