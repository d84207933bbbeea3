"""
Loader registry.
"""
import logging
import re
from typing import Dict, Optional, Type
from .base import BaseLoader
from .loader_data import DataLoader
from .loader_file import FileLoader
from .loader_ftp import FtpLoader
from .loader_http import HttpLoader
from ..errors import SourceUnavailableError

logger = logging.getLogger(__name__)

_loaders: Dict[str, Type[BaseLoader]] = {}

_PAC_PREFIX = re.compile(r"^pac\+", re.IGNORECASE)
_SCHEME = re.compile(r"^([a-zA-Z][a-zA-Z0-9+.-]*):")


def strip_pac_prefix(uri: str) -> str:
    """Strip the "pac+" marker, e.g. ``pac+https://host/proxy.pac``."""
    return _PAC_PREFIX.sub("", uri)


def uri_scheme(uri: str) -> str:
    """Scheme of ``uri``; bare paths (including Windows drive paths) are 'file'."""
    match = _SCHEME.match(uri)
    if not match or len(match.group(1)) == 1:
        return "file"
    return match.group(1).lower()


def register_loader(loader_cls: Type[BaseLoader]) -> None:
    """Register a loader class for each scheme it handles."""
    for scheme in loader_cls().schemes:
        _loaders[scheme] = loader_cls
        logger.debug(f"Registered loader for scheme: {scheme}")


def get_loader(uri: str, loaders: Optional[Dict[str, BaseLoader]] = None) -> BaseLoader:
    """Get a loader instance for the scheme of ``uri``.

    ``loaders`` maps schemes to loader instances and takes precedence over
    the registry.
    """
    scheme = uri_scheme(uri)
    if loaders and scheme in loaders:
        return loaders[scheme]
    if scheme not in _loaders:
        raise SourceUnavailableError(
            uri,
            KeyError(f"No loader for scheme '{scheme}'. Available: {sorted(_loaders)}"),
        )
    return _loaders[scheme]()


# Register default loaders
register_loader(FileLoader)
register_loader(DataLoader)
register_loader(HttpLoader)
register_loader(FtpLoader)

__all__ = [
    "BaseLoader",
    "DataLoader",
    "FileLoader",
    "FtpLoader",
    "HttpLoader",
    "get_loader",
    "register_loader",
    "strip_pac_prefix",
    "uri_scheme",
]
