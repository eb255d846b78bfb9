"""Search the public MCP server registry for a server's repository.

Used by ``--lookup`` when an MCP install link names a server that the
static reference table does not know. A failed lookup is logged and
yields no entries, so the rewrite falls back to plain instructions.

httpx is an optional dependency (``pip install ideswitch[registry]``).

Usage::

    entries = fetch_mcp_servers("huggingface")
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

MCP_REGISTRY_SEARCH: str = "https://registry.modelcontextprotocol.io/v0/servers"

# Seconds before a registry search is abandoned.
DEFAULT_TIMEOUT: float = 10.0

# Servers requested per search; a name search rarely matches more.
SEARCH_LIMIT: int = 10

USER_AGENT: str = "ideswitch/0.1"


def _load_httpx() -> Any:  # noqa: ANN401
    try:
        import httpx
    except ImportError:
        raise SystemExit(
            "--lookup needs httpx to query the MCP registry.\n"
            "Install it with: pip install ideswitch[registry]"
        ) from None
    return httpx


# ---------------------------------------------------------------------------
# Registry search
# ---------------------------------------------------------------------------


async def search_servers(
    server_name: str,
    *,
    endpoint: str = MCP_REGISTRY_SEARCH,
    limit: int = SEARCH_LIMIT,
    timeout: float = DEFAULT_TIMEOUT,
) -> list[dict[str, Any]]:
    """Query the registry for servers matching *server_name*.

    Args:
        server_name: Name taken from an ``mcp/by-name/`` or registry link.
        endpoint: Registry search URL.
        limit: Maximum number of servers to request.
        timeout: Request timeout in seconds.

    Returns:
        Server objects, unwrapped from the ``{"servers": [...]}`` envelope
        and from any per-entry ``server`` key. Empty on any failure.
    """
    httpx = _load_httpx()
    params = {"search": server_name, "limit": str(limit)}
    try:
        async with httpx.AsyncClient(
            timeout=timeout,
            headers={"User-Agent": USER_AGENT},
            follow_redirects=True,
        ) as client:
            resp = await client.get(endpoint, params=params)
            resp.raise_for_status()
            payload = resp.json()
    except httpx.HTTPStatusError as exc:
        logger.warning(
            "MCP registry returned HTTP %d for %r", exc.response.status_code, server_name
        )
        return []
    except (httpx.HTTPError, ValueError) as exc:
        logger.warning("MCP registry search for %r failed: %s", server_name, exc)
        return []

    servers = _server_entries(payload, limit)
    logger.debug("MCP registry: %d result(s) for %r", len(servers), server_name)
    return servers


def _server_entries(payload: Any, limit: int) -> list[dict[str, Any]]:
    if isinstance(payload, dict):
        payload = payload.get("servers", [])
    if not isinstance(payload, list):
        return []

    servers: list[dict[str, Any]] = []
    for item in payload[:limit]:
        if isinstance(item, dict) and isinstance(item.get("server"), dict):
            item = item["server"]
        if isinstance(item, dict):
            servers.append(item)
    return servers


def fetch_mcp_servers(server_name: str) -> list[dict[str, Any]]:
    """Blocking registry search, usable as ``McpReferenceResolver``'s fetcher."""
    return asyncio.run(search_servers(server_name))
