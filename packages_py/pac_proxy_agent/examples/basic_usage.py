"""
Basic usage examples for pac_proxy_agent package.

This package routes outbound connections through the proxy chosen by a PAC script.
"""
import asyncio
from pac_proxy_agent import (
    PacProxyAgent,
    PacProxyAgentOptions,
    PendingRequest,
    ProxyHandoff,
    create_pac_client,
    find_proxy_for_url,
)

PAC_SCRIPT = """
function FindProxyForURL(url, host) {
    if (isPlainHostName(host) || dnsDomainIs(host, ".corp.example")) {
        return "DIRECT";
    }
    if (shExpMatch(host, "*.socks.example")) {
        return "SOCKS 127.0.0.1:1080";
    }
    return "PROXY 127.0.0.1:3128; DIRECT";
}
"""


# =============================================================================
# Example 1: Resolve directives for a few URLs
# =============================================================================
async def example1_resolve() -> None:
    """
    >>> agent = PacProxyAgent("pac+https://wpad.corp.example/proxy.pac")
    >>> directive = await find_proxy_for_url(agent, "https://api.example.com/")
    """
    agent = PacProxyAgent.from_script(PAC_SCRIPT)

    print("Example 1 - Resolve directives:")
    for url in ["http://intranet/", "https://www.socks.example/", "https://api.example.com/v1"]:
        directive = await find_proxy_for_url(agent, url)
        print(f"  {url} -> {directive}")
    print(f"  compiled {agent.cache.compile_count} time(s)")


# =============================================================================
# Example 2: Dispatch a request to a proxy sub-agent
# =============================================================================
async def example2_connect() -> None:
    agent = PacProxyAgent.from_script(PAC_SCRIPT, PacProxyAgentOptions(timeout=10.0))

    result = await agent.connect(PendingRequest(host="api.example.com", port=443, secure=True))

    print("\nExample 2 - Connect:")
    if isinstance(result, ProxyHandoff):
        print(f"  proxy_url: {result.proxy_url}")
        print(f"  tunnel: {result.tunnel}")
    await result.close()


# =============================================================================
# Example 3: httpx client routed by the PAC script
# =============================================================================
async def example3_httpx_client() -> None:
    """
    >>> async with create_pac_client("pac+file:///etc/proxy.pac") as client:
    ...     response = await client.get("https://api.example.com")
    """
    agent = PacProxyAgent.from_script(PAC_SCRIPT)
    client = create_pac_client(agent=agent)

    print("\nExample 3 - httpx client:")
    print(f"  transport: {type(client._transport).__name__}")

    # Uncomment to make actual request:
    # async with client:
    #     response = await client.get("https://httpbin.org/get")
    #     print(f"  status: {response.status_code}")
    await client.aclose()


# =============================================================================
# Run all examples
# =============================================================================
async def main() -> None:
    print("=== pac_proxy_agent Examples ===\n")

    await example1_resolve()
    await example2_connect()
    await example3_httpx_client()

    print("\n=== Examples Complete ===")


if __name__ == "__main__":
    asyncio.run(main())
