"""
Shared fakes for the PAC proxy agent tests.
"""
import asyncio
from typing import Any, List, Optional, Tuple

import pytest

from pac_proxy_agent import PacProxyAgent, PacProxyAgentOptions
from pac_proxy_agent.connectors import BaseConnector
from pac_proxy_agent.errors import ScriptCompileError
from pac_proxy_agent.evaluator import ScriptEvaluator
from pac_proxy_agent.loaders import BaseLoader
from pac_proxy_agent.models import FetchResult, ProxyType


class FakeLoader(BaseLoader):
    """Serves queued results; the last one repeats."""

    def __init__(self, *results: Any):
        self.results = list(results)
        self.calls: List[Tuple[str, Any]] = []
        self.gate: Optional[asyncio.Event] = None

    @property
    def schemes(self) -> Tuple[str, ...]:
        return ("fake",)

    async def fetch(self, uri, token, options):
        self.calls.append((uri, token))
        if self.gate is not None:
            await self.gate.wait()
        item = self.results.pop(0) if len(self.results) > 1 else self.results[0]
        if isinstance(item, BaseException):
            raise item
        return item


class FakeEvaluator(ScriptEvaluator):
    """The script text is the FindProxyForURL result."""

    def __init__(self):
        self.compiled: List[str] = []
        self.calls: List[Tuple[str, str]] = []

    def create_resolver(self, script, options):
        if "syntax error" in script:
            raise ScriptCompileError(options.filename, SyntaxError(script))
        self.compiled.append(script)

        async def resolver(url, host):
            self.calls.append((url, host))
            if script.startswith("throw"):
                raise RuntimeError(script)
            return script

        return resolver


class RecordingConnector(BaseConnector):
    """Records connect() calls instead of opening connections."""

    def __init__(self, proxy_type: ProxyType = ProxyType.DIRECT):
        self._proxy_type = proxy_type
        self.calls: List[Any] = []

    @property
    def proxy_type(self) -> ProxyType:
        return self._proxy_type

    def build_transport(self, directive, options):
        raise NotImplementedError

    async def connect(self, request, directive, options):
        self.calls.append((request, directive))
        return directive


def script(text: str, token: Any = None) -> FetchResult:
    return FetchResult(content=text.encode("utf-8"), token=token)


def unchanged(token: Any = None) -> FetchResult:
    return FetchResult(content=None, token=token)


@pytest.fixture
def evaluator():
    return FakeEvaluator()


@pytest.fixture
def make_agent(evaluator):
    def factory(loader: FakeLoader, options: Optional[PacProxyAgentOptions] = None, **kwargs) -> PacProxyAgent:
        return PacProxyAgent(
            "pac+fake://proxy.pac",
            options,
            evaluator=evaluator,
            loaders={"fake": loader},
            **kwargs,
        )
    return factory
