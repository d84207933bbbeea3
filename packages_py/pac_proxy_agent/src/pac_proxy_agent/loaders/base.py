"""
Abstract base loader for PAC sources.
"""
from abc import ABC, abstractmethod
from typing import Any, Optional, Tuple
from ..models import FetchResult
from ..types import PacProxyAgentOptions


class BaseLoader(ABC):
    """Abstract interface for PAC source backends, one per URI scheme family."""

    @property
    @abstractmethod
    def schemes(self) -> Tuple[str, ...]:
        """URI schemes handled by the loader (e.g., 'http', 'https')."""
        pass

    @abstractmethod
    async def fetch(
        self,
        uri: str,
        token: Optional[Any],
        options: PacProxyAgentOptions,
    ) -> FetchResult:
        """Fetch the script at ``uri``.

        ``token`` is the value returned by the previous fetch of the same
        source, or None. Returns a result with ``content=None`` when the
        backend can tell the source has not changed since ``token``.
        Raises SourceUnavailableError on any failure.
        """
        pass
