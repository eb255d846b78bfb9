"""Reference locations for MCP servers the target IDE cannot install by URL.

When the target IDE has no handler for ``{scheme}:mcp/...`` links the
user is shown manual installation instructions and then sent to a
reference location (usually the server's source repository). The static
table covers the servers that are linked most often; anything else can
be looked up in the public MCP server registry on request.
"""

from __future__ import annotations

import logging
from typing import Any, Callable

logger = logging.getLogger(__name__)

MCP_REFERENCE_LOCATIONS: dict[str, str] = {
    "huggingface": "https://github.com/huggingface/hf-mcp-server",
    "hf-mcp-server": "https://github.com/huggingface/hf-mcp-server",
}

# Fetches the registry listing for a name; returns parsed JSON.
RegistryFetcher = Callable[[str], Any]


class McpReferenceResolver:
    """Resolve an MCP server name to a reference location.

    Args:
        table: Static name -> location mapping. Defaults to
            ``MCP_REFERENCE_LOCATIONS``.
        fetcher: Optional registry lookup used for names missing from the
            table. ``None`` keeps resolution purely static.
    """

    def __init__(
        self,
        table: dict[str, str] | None = None,
        fetcher: RegistryFetcher | None = None,
    ) -> None:
        self._table = dict(MCP_REFERENCE_LOCATIONS if table is None else table)
        self._fetcher = fetcher

    def resolve(self, server_name: str) -> str | None:
        """Return the reference location for *server_name*, if any."""
        location = self._table.get(server_name)
        if location or self._fetcher is None:
            return location

        try:
            payload = self._fetcher(server_name)
        except Exception:
            logger.warning("MCP registry lookup failed: %s", server_name, exc_info=True)
            return None

        location = _repository_from_payload(payload, server_name)
        if location:
            self._table[server_name] = location
        return location


def _repository_from_payload(payload: Any, server_name: str) -> str | None:
    """Pick the repository URL of *server_name* out of a registry listing.

    Accepts either a bare list of server objects or a ``{"servers": [...]}``
    envelope. Entries may nest the server under a ``server`` key.
    """
    if isinstance(payload, dict):
        payload = payload.get("servers", [])
    if not isinstance(payload, list):
        return None

    wanted = server_name.lower()
    for item in payload:
        if isinstance(item, dict) and isinstance(item.get("server"), dict):
            item = item["server"]
        if not isinstance(item, dict):
            continue
        name = str(item.get("name", "")).lower()
        if name != wanted and not name.endswith(f"/{wanted}"):
            continue
        repository = item.get("repository", item.get("url"))
        if isinstance(repository, dict):
            repository = repository.get("url")
        if repository:
            return str(repository)
    return None
