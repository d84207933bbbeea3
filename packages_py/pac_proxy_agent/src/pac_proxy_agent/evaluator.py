"""
PAC script evaluators.

An evaluator turns PAC source text into a compiled resolver: an async
callable ``resolver(url, host)`` returning the raw ``FindProxyForURL``
result. The default implementation runs the script in QuickJS.
"""
import asyncio
import logging
import socket
from abc import ABC, abstractmethod
from typing import Any, Awaitable, Callable, Union

from .errors import ScriptCompileError, ScriptEvaluationError
from .pac_utils import PAC_ENTRY_CHECK, PAC_UTILS
from .types import PacProxyAgentOptions

logger = logging.getLogger(__name__)

CompiledResolver = Callable[[str, str], Awaitable[Any]]


class ScriptEvaluator(ABC):
    """Abstract interface for sandboxed PAC script execution."""

    @abstractmethod
    def create_resolver(
        self,
        script: str,
        options: PacProxyAgentOptions,
    ) -> Union[CompiledResolver, Awaitable[CompiledResolver]]:
        """Compile ``script``. Raises ScriptCompileError if it is rejected."""
        pass


def dns_resolve(host: str) -> str:
    """Resolve host to IP, empty string when it does not resolve."""
    try:
        return socket.gethostbyname(host)
    except (socket.gaierror, UnicodeError):
        return ""


def my_ip_address() -> str:
    """Address of the interface used for outbound traffic."""
    try:
        with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as s:
            # No packets are sent for a UDP connect
            s.connect(("192.0.2.1", 80))
            return s.getsockname()[0]
    except OSError:
        return "127.0.0.1"


class QuickJsResolver:
    """Compiled ``FindProxyForURL`` bound to one script."""

    def __init__(self, function: Any, filename: str):
        self._function = function
        self.filename = filename

    async def __call__(self, url: str, host: str) -> Any:
        import quickjs

        try:
            # quickjs.Function runs on its own worker thread and blocks until done
            return await asyncio.to_thread(self._function, url, host)
        except quickjs.JSException as e:
            logger.error(f"FindProxyForURL failed in {self.filename}: {e}")
            raise ScriptEvaluationError(url, e) from e


class QuickJsEvaluator(ScriptEvaluator):
    """Evaluates PAC scripts with the ``quickjs`` library."""

    async def create_resolver(
        self,
        script: str,
        options: PacProxyAgentOptions,
    ) -> QuickJsResolver:
        filename = options.filename or "<pac>"
        return await asyncio.to_thread(self._compile, script, filename)

    def _compile(self, script: str, filename: str) -> QuickJsResolver:
        import quickjs

        code = "\n\n".join([PAC_UTILS, script, PAC_ENTRY_CHECK])
        try:
            function = quickjs.Function("FindProxyForURL", code)
        except quickjs.JSException as e:
            logger.error(f"PAC file parsing error in {filename}: {e}")
            raise ScriptCompileError(filename, e) from e

        function.add_callable("dnsResolve", dns_resolve)
        function.add_callable("myIpAddress", my_ip_address)
        function.add_callable("alert", self._alert(filename))

        logger.debug(f"Loaded PAC script {filename}")
        return QuickJsResolver(function, filename)

    @staticmethod
    def _alert(filename: str) -> Callable[[Any], None]:
        def alert(message: Any) -> None:
            logger.info(f"[{filename}] alert: {message}")
        return alert


def get_default_evaluator() -> ScriptEvaluator:
    """Get the QuickJS evaluator."""
    return QuickJsEvaluator()
