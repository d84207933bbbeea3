"""
Compiled resolver cache for one PAC source.
"""
import asyncio
import hashlib
import inspect
import logging
from typing import Any, Dict, Optional

from .errors import PacProxyAgentError, ScriptCompileError, SourceUnavailableError
from .evaluator import CompiledResolver, ScriptEvaluator
from .loaders import BaseLoader, get_loader
from .models import FetchResult
from .types import PacProxyAgentOptions

logger = logging.getLogger(__name__)


def fingerprint(content: bytes) -> str:
    """Content digest used to detect an unchanged script."""
    return hashlib.sha256(content).hexdigest()


class ResolverCache:
    """Holds the compiled resolver for a PAC source and refreshes it on demand.

    Every ``ensure_resolver()`` call asks the loader for the script again,
    passing the token from the last successful load. The compiled resolver
    is reused when the loader reports the source unchanged, or when the
    refetched bytes have the same fingerprint. Concurrent callers share a
    single in-flight load.
    """

    def __init__(
        self,
        uri: str,
        evaluator: ScriptEvaluator,
        options: PacProxyAgentOptions,
        loaders: Optional[Dict[str, BaseLoader]] = None,
    ):
        self.uri = uri
        self.evaluator = evaluator
        self.options = options
        self.loaders = loaders
        self.compile_count = 0

        self._token: Optional[Any] = None
        self._fingerprint: Optional[str] = None
        self._resolver: Optional[CompiledResolver] = None
        self._inflight: Optional["asyncio.Task[CompiledResolver]"] = None

    @property
    def fingerprint(self) -> Optional[str]:
        return self._fingerprint

    @property
    def resolver(self) -> Optional[CompiledResolver]:
        return self._resolver

    def reset(self) -> None:
        """Drop the cached resolver so the next call reloads from scratch."""
        self._token = None
        self._fingerprint = None
        self._resolver = None

    async def ensure_resolver(self) -> CompiledResolver:
        """Return a resolver for the current script content."""
        if self._inflight is None:
            task = asyncio.ensure_future(self._load())
            task.add_done_callback(self._load_done)
            self._inflight = task
        else:
            logger.debug(f"Joining in-flight PAC load for {self.uri}")

        # A cancelled waiter must not cancel the load other waiters share
        return await asyncio.shield(self._inflight)

    def _load_done(self, task: "asyncio.Task[CompiledResolver]") -> None:
        if self._inflight is task:
            self._inflight = None
        # Mark the exception retrieved in case every waiter was cancelled
        if not task.cancelled():
            task.exception()

    async def _load(self) -> CompiledResolver:
        loader = get_loader(self.uri, self.loaders)
        logger.debug(f"Loading PAC file: {self.uri}")
        result = await self._fetch(loader, self._token)

        if result.unchanged:
            if self._resolver is not None:
                logger.debug("Source reported unchanged, reusing previous proxy resolver")
                self._token = result.token
                return self._resolver
            logger.debug("Source reported unchanged but no resolver is cached, refetching")
            result = await self._fetch(loader, None)

        return await self._compile(result)

    async def _fetch(self, loader: BaseLoader, token: Optional[Any]) -> FetchResult:
        try:
            return await loader.fetch(self.uri, token, self.options)
        except PacProxyAgentError:
            raise
        except Exception as e:
            logger.error(f"Failed to load PAC file {self.uri}: {e}")
            raise SourceUnavailableError(self.uri, e) from e

    async def _compile(self, result: FetchResult) -> CompiledResolver:
        content = result.content or b""
        digest = fingerprint(content)
        if self._resolver is not None and digest == self._fingerprint:
            logger.debug("Same hash for code - contents have not changed, reusing previous proxy resolver")
            self._token = result.token
            return self._resolver

        try:
            script = content.decode(self.options.pac_encoding)
        except UnicodeDecodeError as e:
            logger.error(f"PAC file not encoded in {self.options.pac_encoding}")
            raise ScriptCompileError(self.options.filename or self.uri, e) from e

        logger.debug("Creating new proxy resolver instance")
        try:
            resolver = self.evaluator.create_resolver(script, self.options)
            if inspect.isawaitable(resolver):
                resolver = await resolver
        except ScriptCompileError:
            raise
        except Exception as e:
            logger.error(f"Script evaluator rejected {self.uri}: {e}")
            raise ScriptCompileError(self.options.filename or self.uri, e) from e
        self.compile_count += 1

        self._resolver = resolver
        self._fingerprint = digest
        self._token = result.token
        return resolver
