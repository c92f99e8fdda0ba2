"""Custom server filters not supported by the Steam protocol, plus ordering."""

from typing import Iterable, List, Set

from steamweb.retrieval.filters import ServerListFilter
from steamweb.retrieval.models import Server
from steamweb.utils.logging import get_logger

logger = get_logger(__name__)

HIDDEN_TAG = "hidden"


def _collect_removed_addrs(
    servers: List[Server],
    server_filter: ServerListFilter,
    default_server_names: Iterable[str],
) -> Set[str]:
    """
    Collect addresses of servers rejected by the custom filters.

    A server is rejected when its gametype contains "hidden" (no_hidden) or
    when its name equals one of the default names (no_default_servers).
    """
    default_names = set(default_server_names)
    removed: Set[str] = set()

    for server in servers:
        if server_filter.no_hidden and HIDDEN_TAG in server.game_type:
            removed.add(server.addr)
            continue
        if server_filter.no_default_servers and server.name in default_names:
            removed.add(server.addr)

    return removed


def remove_filtered_servers(servers: List[Server], addrs: Set[str]) -> List[Server]:
    """Drop every server whose address is in ``addrs``, keeping order."""
    return [server for server in servers if server.addr not in addrs]


def filter_servers(
    servers: List[Server],
    server_filter: ServerListFilter,
    default_server_names: Iterable[str] = (),
) -> List[Server]:
    """
    Apply custom filters, then sort by player count.

    Args:
        servers: Decoded servers in API order
        server_filter: Filter carrying the no_hidden / no_default_servers flags
        default_server_names: Names treated as "not renamed by the owner"

    Returns:
        New list sorted by players descending. The sort is stable, so servers
        with equal player counts keep their relative order.
    """
    result = list(servers)

    if server_filter.no_hidden or server_filter.no_default_servers:
        removed = _collect_removed_addrs(result, server_filter, default_server_names)
        if removed:
            logger.debug(f"Custom filters removed {len(removed)} server addresses")
        result = remove_filtered_servers(result, removed)

    result.sort(key=lambda server: server.players, reverse=True)
    return result
