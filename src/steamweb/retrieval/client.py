"""HTTP client for the Steam Web API (ISteamUser, IGameServersService)."""

import json
import socket
import threading
import time
from pathlib import Path
from typing import Any, List, Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.connection import HTTPConnection
from urllib3.util import Timeout

from steamweb.config.loader import DEFAULT_LIMIT, ClientConfig, load_client_config
from steamweb.errors import EmptyResponseError, WrongStatusCodeError
from steamweb.retrieval.filters import ServerListFilter, encode_filter
from steamweb.retrieval.models import GetPlayerBansResponse, GetServerListResponse, PlayerBans, Server
from steamweb.retrieval.postprocess import filter_servers
from steamweb.utils.logging import get_logger, mask_key

logger = get_logger(__name__)

GET_PLAYER_BANS_URL = "/ISteamUser/GetPlayerBans/v1?key={key}&steamids={steam_ids}"
GET_SERVER_LIST_URL = "/IGameServersService/GetServerList/v1?key={key}&limit={limit}&filter={filter}"

READ_CHUNK_SIZE = 64 * 1024


class KeepAliveAdapter(HTTPAdapter):
    """HTTPAdapter that turns on TCP keep-alive for pooled connections."""

    def __init__(self, keep_alive: float = 0.0, **kwargs: Any):
        self.keep_alive = keep_alive
        super().__init__(**kwargs)

    def _socket_options(self) -> List[tuple]:
        options = list(HTTPConnection.default_socket_options)
        if self.keep_alive <= 0:
            return options

        interval = max(1, int(self.keep_alive))
        options.append((socket.SOL_SOCKET, socket.SO_KEEPALIVE, 1))
        # Per-socket tuning is platform specific
        if hasattr(socket, "TCP_KEEPIDLE"):
            options.append((socket.IPPROTO_TCP, socket.TCP_KEEPIDLE, interval))
        if hasattr(socket, "TCP_KEEPINTVL"):
            options.append((socket.IPPROTO_TCP, socket.TCP_KEEPINTVL, interval))
        return options

    def init_poolmanager(self, *args: Any, **kwargs: Any) -> None:
        kwargs.setdefault("socket_options", self._socket_options())
        super().init_poolmanager(*args, **kwargs)


def build_session(config: ClientConfig) -> requests.Session:
    """Create the shared session used for every request of a client."""
    session = requests.Session()
    adapter = KeepAliveAdapter(keep_alive=config.transport.dialer.keep_alive, max_retries=0)
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    session.headers.update({"Accept": "application/json"})
    return session


class SteamWebClient:
    """Client for Steam Web API player ban and server list requests."""

    def __init__(self, config: ClientConfig, session: Optional[requests.Session] = None):
        """
        Initialize client.

        Args:
            config: Client configuration. Defaults are applied once, here.
            session: Optional requests session to use instead of a new one.

        Raises:
            ConfigUndefinedParamError: If an enabled config has no key
        """
        self.config = config.with_defaults()
        self.config.validate_params()

        self._owns_session = session is None
        if session is None and not self.config.disabled:
            session = build_session(self.config)
        self.session = session

        if self.config.disabled:
            logger.debug("Steam Web API client is disabled, requests will return empty results")

    @classmethod
    def from_config_file(cls, path: Optional[Path] = None) -> "SteamWebClient":
        """Build a client from a YAML config file."""
        return cls(load_client_config(path))

    def __enter__(self) -> "SteamWebClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def close(self) -> None:
        """Close the session if this client created it."""
        if self._owns_session and self.session is not None:
            self.session.close()

    @property
    def connect_timeout(self) -> float:
        """Time allowed for TCP connect plus TLS handshake, capped by the overall timeout."""
        transport = self.config.transport
        return min(transport.dialer.timeout + transport.tls_handshake_timeout, self.config.timeout)

    def get_player_bans(self, *steam_ids: str) -> List[PlayerBans]:
        """
        Get Community, VAC and economy ban statuses for the given players.

        Example URL:
            https://api.steampowered.com/ISteamUser/GetPlayerBans/v1?key=XXXX&steamids=XXXX,YYYY

        Args:
            steam_ids: 64-bit Steam IDs

        Returns:
            List of PlayerBans (empty for a disabled client)
        """
        if self.config.disabled:
            return []

        uri = self.config.url + GET_PLAYER_BANS_URL.format(
            key=self.config.key,
            steam_ids=",".join(steam_ids),
        )

        data = self._send_request(uri)
        response = GetPlayerBansResponse.model_validate(data or {})
        logger.info(f"Fetched ban status for {len(response.players)} players")
        return response.players

    def get_server_list(self, server_filter: ServerListFilter) -> List[Server]:
        """
        Get game servers matching a filter.

        Example URL:
            https://api.steampowered.com/IGameServersService/GetServerList/v1?key=XXXX&limit=X&filter=F

        Custom filters (no_hidden, no_default_servers) are applied after the
        fetch and the result is sorted by players descending.

        Args:
            server_filter: Filter with at least app_id set

        Returns:
            List of Server (empty for a disabled client)

        Raises:
            RequiredParamError: If the filter has no app_id (before any request)
        """
        if self.config.disabled:
            return []

        encoded = encode_filter(server_filter)
        limit = server_filter.effective_limit(DEFAULT_LIMIT)

        uri = self.config.url + GET_SERVER_LIST_URL.format(
            key=self.config.key,
            limit=limit,
            filter=encoded,
        )

        data = self._send_request(uri)
        response = GetServerListResponse.model_validate(data or {})
        servers = filter_servers(
            response.response.servers,
            server_filter,
            self.config.default_server_names,
        )
        logger.info(
            f"Fetched {len(response.response.servers)} servers for appid {server_filter.app_id}, "
            f"{len(servers)} after custom filters"
        )
        return servers

    def _send_request(self, uri: str) -> Any:
        """
        Issue a single GET and decode the JSON body.

        The configured timeout bounds the whole call. urllib3 charges connect
        and header wait against one total budget; the body read is cut off by
        a watchdog that shuts the socket down when the deadline passes.

        Raises:
            EmptyResponseError: If the transport returned no response
            WrongStatusCodeError: If the status is not 2xx
            requests.exceptions.ReadTimeout: If the deadline passes mid-call
            requests.RequestException: Transport errors, unchanged
            json.JSONDecodeError: Malformed body, unchanged
        """
        masked = mask_key(uri, self.config.key)
        logger.debug(f"GET {masked}")

        deadline = time.monotonic() + self.config.timeout
        response = self.session.get(
            uri,
            timeout=Timeout(total=self.config.timeout, connect=self.connect_timeout),
            stream=True,
        )
        if response is None:
            raise EmptyResponseError(masked)

        try:
            if not 200 <= response.status_code < 300:
                logger.error(f"Steam Web API returned {response.status_code} {response.reason} for {masked}")
                raise WrongStatusCodeError(response.status_code, response.reason or "")
            body = self._read_body(response, deadline)
        finally:
            response.close()

        return json.loads(body)

    def _read_body(self, response: requests.Response, deadline: float) -> bytes:
        remaining = deadline - time.monotonic()
        if remaining <= 0:
            raise self._deadline_error()

        expired = threading.Event()

        def _expire() -> None:
            expired.set()
            # Wakes a recv blocked in another thread, unlike close()
            response.raw.shutdown()

        watchdog = threading.Timer(remaining, _expire)
        watchdog.daemon = True
        watchdog.start()

        chunks = []
        try:
            for chunk in response.iter_content(chunk_size=READ_CHUNK_SIZE):
                chunks.append(chunk)
        except (requests.RequestException, OSError) as e:
            if expired.is_set():
                raise self._deadline_error() from e
            raise
        finally:
            watchdog.cancel()

        # A shut-down socket may look like a clean EOF with a truncated body
        if expired.is_set():
            raise self._deadline_error()
        return b"".join(chunks)

    def _deadline_error(self) -> requests.exceptions.ReadTimeout:
        return requests.exceptions.ReadTimeout(
            f"Request exceeded timeout of {self.config.timeout}s"
        )
