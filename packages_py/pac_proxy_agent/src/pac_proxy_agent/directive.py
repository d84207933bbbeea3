"""
Parse the string returned by ``FindProxyForURL`` into a proxy directive.
"""
import logging
import re
from typing import Any, List, Tuple

from .errors import InvalidDirectiveError, UnknownProxyTypeError
from .models import DIRECT, ProxyDirective, ProxyType

logger = logging.getLogger(__name__)

_SEPARATOR = re.compile(r"\s*;\s*")

DEFAULT_PROXY_PORTS = {
    ProxyType.SOCKS: 1080,
    ProxyType.PROXY: 80,
    ProxyType.HTTPS: 443,
}


def parse_proxy_list(raw: Any) -> List[str]:
    """Split a PAC result into its ordered, non-empty directive strings."""
    if not raw or not str(raw).strip():
        raw = "DIRECT"
    return [candidate for candidate in _SEPARATOR.split(str(raw).strip()) if candidate]


def parse_directive(raw: Any) -> ProxyDirective:
    """Parse a PAC result and return the directive to act on.

    Only the first directive is used; later entries are not tried as
    fallbacks.
    """
    candidates = parse_proxy_list(raw)
    if not candidates:
        raise InvalidDirectiveError(str(raw), "no proxy directives in result")

    first = candidates[0]
    if len(candidates) > 1:
        logger.debug(f"Using first of {len(candidates)} PAC directives: {first!r}")

    parts = first.split()
    type_token = parts[0]
    try:
        proxy_type = ProxyType(type_token)
    except ValueError:
        raise UnknownProxyTypeError(type_token, first) from None

    if proxy_type is ProxyType.DIRECT:
        return DIRECT

    if len(parts) < 2:
        raise InvalidDirectiveError(first, f"{proxy_type.value} requires a host:port argument")

    host, port = _split_endpoint(parts[1], DEFAULT_PROXY_PORTS[proxy_type], first)
    return ProxyDirective(proxy_type, host, port)


def _split_endpoint(argument: str, default_port: int, directive: str) -> Tuple[str, int]:
    if argument.startswith("["):
        host, sep, rest = argument[1:].partition("]")
        if not sep or (rest and not rest.startswith(":")):
            raise InvalidDirectiveError(directive, f"malformed IPv6 endpoint '{argument}'")
        port_text = rest[1:]
    elif argument.count(":") == 1:
        host, port_text = argument.split(":")
    else:
        host, port_text = argument, ""

    if not host:
        raise InvalidDirectiveError(directive, "missing proxy host")
    if not port_text:
        return host, default_port
    if not port_text.isdigit() or not 0 < int(port_text) < 65536:
        raise InvalidDirectiveError(directive, f"invalid port '{port_text}'")
    return host, int(port_text)
