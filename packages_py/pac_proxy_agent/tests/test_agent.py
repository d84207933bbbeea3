"""
Tests for PacProxyAgent resolution and dispatch.
"""
import ssl
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from conftest import FakeLoader, RecordingConnector, script, unchanged
from pac_proxy_agent import (
    ConnectorError,
    DirectConnection,
    DispatchState,
    PacProxyAgent,
    PacProxyAgentOptions,
    PendingRequest,
    ProxyDirective,
    ProxyHandoff,
    ProxyType,
    ScriptEvaluationError,
    SourceUnavailableError,
    UnknownProxyTypeError,
    connect_url,
    create_pac_proxy_agent,
    find_proxy_for_url,
)

PLAIN = PendingRequest(host="example.com", port=80, path="/index.html", secure=False)
SECURE = PendingRequest(host="example.com", port=443, path="/", secure=True)


def recording_connectors():
    return {proxy_type: RecordingConnector(proxy_type) for proxy_type in ProxyType}


class TestConstruction:
    def test_strips_pac_prefix(self, evaluator):
        """The pac+ marker is removed; the original URI labels the script."""
        agent = PacProxyAgent("pac+https://wpad.example.com/proxy.pac", evaluator=evaluator)
        assert agent.uri == "https://wpad.example.com/proxy.pac"
        assert agent.options.filename == "pac+https://wpad.example.com/proxy.pac"

    def test_explicit_filename_kept(self, evaluator):
        agent = PacProxyAgent("https://wpad/proxy.pac", {"filename": "corp.pac"}, evaluator=evaluator)
        assert agent.options.filename == "corp.pac"

    def test_uri_from_env(self, monkeypatch, evaluator):
        """PAC_URL is used when no URI is given."""
        monkeypatch.setenv("PAC_URL", "pac+file:///etc/proxy.pac")
        agent = create_pac_proxy_agent(evaluator=evaluator)
        assert agent.uri == "file:///etc/proxy.pac"

    def test_uri_required(self, monkeypatch, evaluator):
        monkeypatch.delenv("PAC_URL", raising=False)
        with pytest.raises(ValueError):
            PacProxyAgent(evaluator=evaluator)

    @pytest.mark.asyncio
    async def test_from_script(self, evaluator):
        """Literal PAC source is served from a data: URI."""
        agent = PacProxyAgent.from_script("PROXY 10.0.0.1:3128; DIRECT", evaluator=evaluator)
        assert agent.uri.startswith("data:,")
        assert agent.options.filename == "<inline>"

        directive = await agent.resolve(PLAIN)
        assert directive == ProxyDirective(ProxyType.PROXY, "10.0.0.1", 3128)


class TestResolve:
    @pytest.mark.asyncio
    async def test_url_and_host_passed_to_resolver(self, make_agent, evaluator):
        """The resolver receives the rebuilt URL and the destination host."""
        agent = make_agent(FakeLoader(script("DIRECT")))
        request = PendingRequest(host="example.com", port=8080, path="/a?b=1")

        await agent.resolve(request)

        assert evaluator.calls == [("http://example.com:8080/a?b=1", "example.com")]

    @pytest.mark.asyncio
    async def test_idempotent(self, make_agent, evaluator):
        """Same content and URL give the same directive and compile once."""
        agent = make_agent(FakeLoader(script("PROXY 1.2.3.4:8080")))

        first = await agent.resolve(PLAIN)
        second = await agent.resolve(PLAIN)

        assert first == second
        assert agent.cache.compile_count == 1
        # Decisions are not cached: the resolver runs for every request
        assert len(evaluator.calls) == 2

    @pytest.mark.asyncio
    async def test_unchanged_source_reuses_resolver(self, make_agent, evaluator):
        """An unchanged source still yields a directive without recompiling."""
        agent = make_agent(FakeLoader(script("SOCKS 127.0.0.1:9001", "v1"), unchanged("v1")))

        await agent.resolve(PLAIN)
        directive = await agent.resolve(PLAIN)

        assert directive.type is ProxyType.SOCKS
        assert evaluator.compiled == ["SOCKS 127.0.0.1:9001"]

    @pytest.mark.asyncio
    async def test_resolver_failure(self, make_agent):
        """Resolver exceptions surface as ScriptEvaluationError."""
        agent = make_agent(FakeLoader(script("throw")))
        with pytest.raises(ScriptEvaluationError):
            await agent.resolve(PLAIN)

    @pytest.mark.asyncio
    async def test_find_proxy_for_url(self, make_agent):
        agent = make_agent(FakeLoader(script("HTTPS secure.example.com:8443")))
        directive = await find_proxy_for_url(agent, "https://example.com/")
        assert directive.proxy_url == "https://secure.example.com:8443"


class TestConnect:
    @pytest.mark.asyncio
    async def test_http_proxy_scenario(self, make_agent):
        """PROXY on a plaintext request hands off to the HTTP proxy connector."""
        agent = make_agent(FakeLoader(script("PROXY 127.0.0.1:9000;")))

        result = await agent.connect(PLAIN)

        assert isinstance(result, ProxyHandoff)
        assert result.directive.type is ProxyType.PROXY
        assert result.proxy_url == "http://127.0.0.1:9000"
        assert result.tunnel is False
        assert isinstance(result.transport, httpx.AsyncHTTPTransport)
        await result.close()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("request_meta", [PLAIN, SECURE])
    async def test_socks_scenario(self, make_agent, request_meta):
        """SOCKS hands off regardless of the destination's security."""
        agent = make_agent(FakeLoader(script("SOCKS 127.0.0.1:9001;")))

        result = await agent.connect(request_meta)

        assert isinstance(result, ProxyHandoff)
        assert result.directive.type is ProxyType.SOCKS
        assert result.proxy_url == "socks5://127.0.0.1:9001"
        await result.close()

    @pytest.mark.asyncio
    async def test_https_proxy_tunnels_secure_request(self, make_agent):
        agent = make_agent(FakeLoader(script("HTTPS 127.0.0.1:9443")))

        result = await agent.connect(SECURE)

        assert result.proxy_url == "https://127.0.0.1:9443"
        assert result.tunnel is True
        await result.close()

    @pytest.mark.asyncio
    async def test_only_first_directive_used(self, make_agent):
        """The second directive is never acted on."""
        connectors = recording_connectors()
        agent = make_agent(FakeLoader(script("PROXY 1.2.3.4:8080; SOCKS 5.6.7.8:1080")), connectors=connectors)

        await agent.connect(PLAIN)

        assert len(connectors[ProxyType.PROXY].calls) == 1
        assert connectors[ProxyType.SOCKS].calls == []

    @pytest.mark.asyncio
    async def test_baseline_settings_merged(self, make_agent):
        """Explicit agent settings survive the merge with the proxy endpoint."""
        options = PacProxyAgentOptions(verify_ssl=False, timeout=5.0)
        agent = make_agent(FakeLoader(script("HTTPS 127.0.0.1:9443")), options)

        result = await agent.connect(SECURE)

        assert result.settings["verify_ssl"] is False
        assert result.settings["timeout"] == 5.0
        assert result.settings["proxy_url"] == "https://127.0.0.1:9443"
        assert result.settings["port"] == 9443
        await result.close()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("raw", ["", "DIRECT"])
    async def test_empty_result_is_direct(self, make_agent, raw):
        """Empty results dispatch exactly like DIRECT."""
        connectors = recording_connectors()
        agent = make_agent(FakeLoader(script(raw)), connectors=connectors)

        result = await agent.connect(PLAIN)

        assert result.is_direct
        assert connectors[ProxyType.DIRECT].calls == [(PLAIN, result)]

    @pytest.mark.asyncio
    async def test_unknown_type_fails_closed(self, make_agent):
        """BOGUS fails and no connector is invoked."""
        connectors = recording_connectors()
        agent = make_agent(FakeLoader(script("BOGUS 1.2.3.4:80")), connectors=connectors)
        states = []

        with pytest.raises(UnknownProxyTypeError):
            await agent.connect(PLAIN, on_state=states.append)

        assert all(c.calls == [] for c in connectors.values())
        assert DispatchState.CONNECTING not in states
        assert states[-1] is DispatchState.FAILED

    @pytest.mark.asyncio
    async def test_source_failure_fails_closed(self, make_agent):
        connectors = recording_connectors()
        error = SourceUnavailableError("fake://proxy.pac", OSError("down"))
        agent = make_agent(FakeLoader(error), connectors=connectors)

        with pytest.raises(SourceUnavailableError):
            await agent.connect(PLAIN)

        assert all(c.calls == [] for c in connectors.values())

    @pytest.mark.asyncio
    async def test_loader_crash_fails_closed(self, make_agent):
        """Unexpected loader exceptions end in FAILED as SourceUnavailableError."""
        agent = make_agent(FakeLoader(PermissionError("denied")), connectors=recording_connectors())
        states = []

        with pytest.raises(SourceUnavailableError):
            await agent.connect(PLAIN, on_state=states.append)

        assert states[-1] is DispatchState.FAILED

    @pytest.mark.asyncio
    async def test_proxy_connector_failure_ends_failed(self, make_agent):
        """A proxy transport that cannot be built fails with ConnectorError."""
        options = PacProxyAgentOptions(ca_bundle="/nonexistent/ca.pem")
        agent = make_agent(FakeLoader(script("PROXY 127.0.0.1:9000")), options)
        states = []

        with pytest.raises(ConnectorError) as exc_info:
            await agent.connect(PLAIN, on_state=states.append)

        assert exc_info.value.directive == ProxyDirective(ProxyType.PROXY, "127.0.0.1", 9000)
        assert isinstance(exc_info.value.cause, OSError)
        assert states[-2:] == [DispatchState.CONNECTING, DispatchState.FAILED]

    @pytest.mark.asyncio
    async def test_state_sequence(self, make_agent):
        agent = make_agent(FakeLoader(script("DIRECT")), connectors=recording_connectors())
        states = []

        await agent.connect(PLAIN, on_state=states.append)

        assert states == [
            DispatchState.RESOLVING_URL,
            DispatchState.AWAITING_RESOLVER,
            DispatchState.EVALUATING_PAC,
            DispatchState.PARSING_DIRECTIVE,
            DispatchState.CONNECTING,
            DispatchState.CONNECTED,
        ]


class TestDirectConnector:
    @pytest.mark.asyncio
    async def test_plaintext(self, make_agent):
        """DIRECT opens a plain TCP connection for insecure requests."""
        reader, writer = MagicMock(), MagicMock()
        agent = make_agent(FakeLoader(script("DIRECT")))

        with patch("asyncio.open_connection", AsyncMock(return_value=(reader, writer))) as open_connection:
            result = await agent.connect(PLAIN)

        assert isinstance(result, DirectConnection)
        assert result.reader is reader
        args, kwargs = open_connection.call_args
        assert args == ("example.com", 80)
        assert kwargs["ssl"] is None

    @pytest.mark.asyncio
    async def test_tls(self, make_agent):
        """DIRECT wraps the connection in TLS for secure requests."""
        agent = make_agent(FakeLoader(script("DIRECT")))

        with patch("asyncio.open_connection", AsyncMock(return_value=(MagicMock(), MagicMock()))) as open_connection:
            await connect_url(agent, "https://example.com/")

        _, kwargs = open_connection.call_args
        assert isinstance(kwargs["ssl"], ssl.SSLContext)
        assert kwargs["server_hostname"] == "example.com"

    @pytest.mark.asyncio
    async def test_failure(self, make_agent):
        """Socket errors surface as ConnectorError."""
        agent = make_agent(FakeLoader(script("DIRECT")))

        with patch("asyncio.open_connection", AsyncMock(side_effect=ConnectionRefusedError("refused"))):
            with pytest.raises(ConnectorError) as exc_info:
                await agent.connect(PLAIN)

        assert isinstance(exc_info.value.cause, ConnectionRefusedError)

    @pytest.mark.asyncio
    async def test_bad_tls_settings(self, make_agent):
        """TLS setup errors for a secure request surface as ConnectorError."""
        options = PacProxyAgentOptions(ca_bundle="/nonexistent/ca.pem")
        agent = make_agent(FakeLoader(script("DIRECT")), options)
        states = []

        with patch("asyncio.open_connection", AsyncMock()) as open_connection:
            with pytest.raises(ConnectorError):
                await agent.connect(SECURE, on_state=states.append)

        open_connection.assert_not_called()
        assert states[-1] is DispatchState.FAILED
