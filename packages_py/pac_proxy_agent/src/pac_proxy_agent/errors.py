"""
Exceptions raised while resolving and dispatching a PAC decision.
"""
from typing import Any, Optional


class PacProxyAgentError(Exception):
    """Base exception for PAC resolution and dispatch errors."""
    pass


class SourceUnavailableError(PacProxyAgentError):
    def __init__(self, uri: str, cause: Optional[BaseException] = None):
        msg = f"Unable to load PAC file from '{uri}'"
        if cause is not None:
            msg = f"{msg}: {cause}"
        super().__init__(msg)
        self.uri = uri
        self.cause = cause


class ScriptCompileError(PacProxyAgentError):
    def __init__(self, filename: str, cause: Optional[BaseException] = None):
        msg = f"Failed to compile PAC script '{filename}'"
        if cause is not None:
            msg = f"{msg}: {cause}"
        super().__init__(msg)
        self.filename = filename
        self.cause = cause


class ScriptEvaluationError(PacProxyAgentError):
    def __init__(self, url: str, cause: Optional[BaseException] = None):
        msg = f"FindProxyForURL failed for '{url}'"
        if cause is not None:
            msg = f"{msg}: {cause}"
        super().__init__(msg)
        self.url = url
        self.cause = cause


class UnknownProxyTypeError(PacProxyAgentError):
    def __init__(self, proxy_type: str, directive: str):
        msg = f"Unknown proxy type '{proxy_type}' in PAC directive '{directive}'"
        super().__init__(msg)
        self.proxy_type = proxy_type
        self.directive = directive


class InvalidDirectiveError(PacProxyAgentError):
    def __init__(self, directive: str, reason: str):
        msg = f"Invalid PAC directive '{directive}': {reason}"
        super().__init__(msg)
        self.directive = directive
        self.reason = reason


class ConnectorError(PacProxyAgentError):
    def __init__(self, directive: Any, cause: BaseException):
        msg = f"Connection via '{directive}' failed: {cause}"
        super().__init__(msg)
        self.directive = directive
        self.cause = cause
