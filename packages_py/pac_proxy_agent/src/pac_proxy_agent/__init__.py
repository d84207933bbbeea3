"""
PAC proxy agent package.
"""
from .models import (
    ConnectResult,
    DirectConnection,
    DispatchState,
    FetchResult,
    PendingRequest,
    ProxyDirective,
    ProxyHandoff,
    ProxyType,
)
from .types import PacProxyAgentOptions
from .errors import (
    PacProxyAgentError,
    SourceUnavailableError,
    ScriptCompileError,
    ScriptEvaluationError,
    UnknownProxyTypeError,
    InvalidDirectiveError,
    ConnectorError,
)
from .config import get_pac_url, get_pac_timeout, is_ssl_verify_disabled_by_env
from .url_builder import build_url
from .directive import parse_directive, parse_proxy_list
from .evaluator import ScriptEvaluator, QuickJsEvaluator
from .cache import ResolverCache
from .agent import PacProxyAgent
from .transport import PacProxyTransport
from .dispatcher import (
    create_pac_proxy_agent,
    create_pac_client,
    find_proxy_for_url,
    connect_url,
)
from .loaders import register_loader, BaseLoader
from .connectors import register_connector, BaseConnector

__all__ = [
    "ConnectResult",
    "DirectConnection",
    "DispatchState",
    "FetchResult",
    "PendingRequest",
    "ProxyDirective",
    "ProxyHandoff",
    "ProxyType",
    "PacProxyAgentOptions",
    "PacProxyAgentError",
    "SourceUnavailableError",
    "ScriptCompileError",
    "ScriptEvaluationError",
    "UnknownProxyTypeError",
    "InvalidDirectiveError",
    "ConnectorError",
    "get_pac_url",
    "get_pac_timeout",
    "is_ssl_verify_disabled_by_env",
    "build_url",
    "parse_directive",
    "parse_proxy_list",
    "ScriptEvaluator",
    "QuickJsEvaluator",
    "ResolverCache",
    "PacProxyAgent",
    "PacProxyTransport",
    "create_pac_proxy_agent",
    "create_pac_client",
    "find_proxy_for_url",
    "connect_url",
    "register_loader",
    "BaseLoader",
    "register_connector",
    "BaseConnector",
]
