"""
PAC proxy agent: resolves a proxy directive per request and dispatches it.
"""
import logging
from typing import Any, Callable, Dict, Optional, Union
from urllib.parse import quote

from .cache import ResolverCache
from .config import get_pac_url
from .connectors import BaseConnector, get_connector
from .directive import parse_directive
from .errors import ConnectorError, PacProxyAgentError, ScriptEvaluationError
from .evaluator import CompiledResolver, ScriptEvaluator, get_default_evaluator
from .loaders import BaseLoader, strip_pac_prefix
from .models import ConnectResult, DispatchState, PendingRequest, ProxyDirective, ProxyType
from .types import PacProxyAgentOptions
from .url_builder import build_url

logger = logging.getLogger(__name__)

StateCallback = Callable[[DispatchState], None]


class PacProxyAgent:
    """Routes outbound connections according to a PAC script.

    Supported source forms (the "pac+" prefix is optional):

      - "pac+data", "data" - an embedded "data:" URI
      - "pac+file", "file" - a local file, or a bare path
      - "pac+ftp", "ftp" - a file on an FTP server
      - "pac+http", "http" - an HTTP endpoint
      - "pac+https", "https" - an HTTPS endpoint

    The script is refetched for every request, but only recompiled when its
    content changes. Proxy decisions themselves are never cached.
    """

    def __init__(
        self,
        uri: Optional[str] = None,
        options: Optional[Union[PacProxyAgentOptions, Dict[str, Any]]] = None,
        *,
        evaluator: Optional[ScriptEvaluator] = None,
        loaders: Optional[Dict[str, BaseLoader]] = None,
        connectors: Optional[Dict[ProxyType, BaseConnector]] = None,
    ):
        source = uri or get_pac_url()
        if not source:
            raise ValueError("A PAC file location must be specified")

        if isinstance(options, dict):
            options = PacProxyAgentOptions(**options)
        options = options or PacProxyAgentOptions()
        if options.filename is None:
            options = options.model_copy(update={"filename": source})

        self.uri = strip_pac_prefix(source)
        self.options = options
        self.evaluator = evaluator or get_default_evaluator()
        self.connectors = connectors
        self.cache = ResolverCache(self.uri, self.evaluator, self.options, loaders)

        logger.debug(f"PacProxyAgent initialized with URI '{self.uri}'")

    @classmethod
    def from_script(
        cls,
        code: str,
        options: Optional[Union[PacProxyAgentOptions, Dict[str, Any]]] = None,
        **kwargs: Any,
    ) -> "PacProxyAgent":
        """Create an agent from literal PAC source."""
        if isinstance(options, dict):
            options = PacProxyAgentOptions(**options)
        options = options or PacProxyAgentOptions()
        if options.filename is None:
            options = options.model_copy(update={"filename": "<inline>"})
        return cls("data:," + quote(code), options, **kwargs)

    async def get_resolver(self) -> CompiledResolver:
        """Get the compiled ``FindProxyForURL`` for the current script."""
        return await self.cache.ensure_resolver()

    async def resolve(
        self,
        request: PendingRequest,
        on_state: Optional[StateCallback] = None,
    ) -> ProxyDirective:
        """Evaluate the PAC script for ``request`` and return the directive to use."""
        notify = self._notifier(on_state)
        try:
            notify(DispatchState.RESOLVING_URL)
            url = build_url(request, request.secure)

            notify(DispatchState.AWAITING_RESOLVER)
            resolver = await self.cache.ensure_resolver()

            notify(DispatchState.EVALUATING_PAC)
            logger.debug(f"url: {url}, host: {request.host}")
            raw = await self._evaluate(resolver, url, request.host)

            notify(DispatchState.PARSING_DIRECTIVE)
            directive = parse_directive(raw)
        except Exception as e:
            notify(DispatchState.FAILED)
            logger.debug(f"Resolution failed for {request.host}:{request.port}: {e}")
            raise

        logger.debug(f"Using proxy: {directive}")
        return directive

    async def connect(
        self,
        request: PendingRequest,
        on_state: Optional[StateCallback] = None,
    ) -> ConnectResult:
        """Resolve the directive for ``request`` and establish it.

        Returns a DirectConnection for DIRECT, or a ProxyHandoff carrying the
        proxy sub-agent for SOCKS, PROXY and HTTPS.
        """
        notify = self._notifier(on_state)
        directive = await self.resolve(request, on_state)

        notify(DispatchState.CONNECTING)
        try:
            connector = get_connector(directive.type, self.connectors)
            result = await connector.connect(request, directive, self.options)
        except PacProxyAgentError:
            notify(DispatchState.FAILED)
            raise
        except Exception as e:
            notify(DispatchState.FAILED)
            logger.error(f"Connector for {directive} failed: {e}")
            raise ConnectorError(directive, e) from e

        notify(DispatchState.CONNECTED)
        return result

    async def _evaluate(self, resolver: CompiledResolver, url: str, host: str) -> Any:
        try:
            return await resolver(url, host)
        except PacProxyAgentError:
            raise
        except Exception as e:
            raise ScriptEvaluationError(url, e) from e

    @staticmethod
    def _notifier(on_state: Optional[StateCallback]) -> StateCallback:
        def notify(state: DispatchState) -> None:
            logger.debug(f"Dispatch state: {state.value}")
            if on_state is not None:
                on_state(state)
        return notify
