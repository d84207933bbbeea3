"""
Configuration models for the PAC proxy agent.
"""
import ssl
from typing import Any, Dict, Optional, Tuple, Union
from pydantic import BaseModel, Field

from .config import get_pac_timeout, is_ssl_verify_disabled_by_env


class PacProxyAgentOptions(BaseModel):
    """Options bag passed through to the script evaluator and the connectors.

    Only fields that were set explicitly are treated as baseline settings
    when a proxy connector is built, so defaults never mask endpoint values
    and explicit values are never overwritten by them.
    """
    filename: Optional[str] = Field(default=None, description="Label for the PAC script used in diagnostics")
    verify_ssl: Optional[bool] = Field(default=None, description="TLS verification override for PAC fetches and HTTPS proxies")
    ca_bundle: Optional[str] = Field(default=None, description="Path to CA bundle file")
    cert: Optional[Union[str, Tuple[str, str]]] = Field(default=None, description="Client certificate, or (certificate, key) pair")
    timeout: float = Field(default_factory=get_pac_timeout, description="Timeout in seconds for PAC fetches and proxy connections")
    pac_encoding: str = Field(default="utf-8", description="Text encoding of the PAC script")
    trust_env: bool = Field(default=False, description="Whether httpx may read proxy settings from the environment")

    def resolve_verify_ssl(self) -> bool:
        """Precedence: explicit verify_ssl > environment override > True."""
        if self.verify_ssl is not None:
            return self.verify_ssl
        if is_ssl_verify_disabled_by_env():
            return False
        return True

    def explicit_settings(self) -> Dict[str, Any]:
        """Settings the caller set explicitly."""
        return self.model_dump(exclude_unset=True)

    def create_ssl_context(self) -> ssl.SSLContext:
        """Build the TLS context used for PAC fetches and TLS connections."""
        context = ssl.create_default_context(cafile=self.ca_bundle)
        if not self.resolve_verify_ssl():
            context.check_hostname = False
            context.verify_mode = ssl.CERT_NONE
        if self.cert:
            if isinstance(self.cert, tuple):
                context.load_cert_chain(*self.cert)
            else:
                context.load_cert_chain(self.cert)
        return context
