"""
Environment detection functions.
"""
import os
import logging
from typing import Optional

logger = logging.getLogger(__name__)

DEFAULT_FETCH_TIMEOUT = 30.0


def get_pac_url(default: Optional[str] = None) -> Optional[str]:
    """Get the PAC file location from the environment."""
    url = os.getenv("PAC_URL", default)
    logger.debug(f"Resolved PAC_URL: {url}")
    return url


def get_pac_timeout(default: float = DEFAULT_FETCH_TIMEOUT) -> float:
    """Get the PAC fetch timeout in seconds."""
    raw = os.getenv("PAC_FETCH_TIMEOUT")
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning(f"Ignoring invalid PAC_FETCH_TIMEOUT value: {raw!r}")
        return default


def is_ssl_verify_disabled_by_env() -> bool:
    """Check if SSL verification is disabled by environment variables."""
    # Node.js compatibility
    if os.getenv("NODE_TLS_REJECT_UNAUTHORIZED") == "0":
        return True

    # Python convention
    if os.getenv("SSL_CERT_VERIFY") == "0":
        return True

    return False
