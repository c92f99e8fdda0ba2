"""Pytest configuration and fixtures."""

import json
import socket
import threading
import time
from types import SimpleNamespace

import pytest

from steamweb.config.loader import ClientConfig

TEST_KEY = "R1jamSsz17LHA9WgDW099YGfCs4fn0m0"

PLAYER_BANS_BODY = {
    "players": [
        {
            "SteamId": "7656119",
            "CommunityBanned": False,
            "VACBanned": True,
            "NumberOfVACBans": 1,
            "DaysSinceLastBan": 1530,
            "NumberOfGameBans": 0,
            "EconomyBan": "none",
        }
    ]
}

SERVER_LIST_BODY = {
    "response": {
        "servers": [
            {"addr": "127.0.0.1:16261", "gameport": 16261, "steamid": "90268762852129810", "name": "My PZ Server", "appid": 108600, "gamedir": "zomboid", "version": "1.0.0.0", "product": "zomboid", "region": -1, "players": 2, "max_players": 32, "bots": 0, "secure": True, "dedicated": True, "os": "w", "gametype": "hidden;hosted"},
            {"addr": "127.0.0.2:16267", "gameport": 16267, "steamid": "90268762793969688", "name": "Super Server", "appid": 108600, "gamedir": "zomboid", "version": "1.0.0.0", "product": "zomboid", "region": -1, "players": 0, "max_players": 10, "bots": 0, "map": "vehicle_interior;SecretZ_v4;InG", "secure": False, "dedicated": True, "os": "w"},
            {"addr": "127.0.0.3:16260", "gameport": 16260, "steamid": "90268200350011416", "name": "Best Server", "appid": 108600, "gamedir": "zomboid", "version": "1.0.0.0", "product": "zomboid", "region": -1, "players": 9, "max_players": 30, "bots": 0, "map": "Muldraugh, KY", "secure": True, "dedicated": True, "os": "l"},
            {"addr": "127.0.0.4:16261", "gameport": 16261, "steamid": "90268799310246930", "name": "My PZ Server", "appid": 108600, "gamedir": "zomboid", "version": "1.0.0.0", "product": "zomboid", "region": -1, "players": 13, "max_players": 32, "bots": 0, "map": "Muldraugh, KY", "secure": True, "dedicated": True, "os": "w", "gametype": "hidden;hosted"},
            {"addr": "127.0.0.5:16261", "gameport": 16261, "steamid": "90268762155669518", "name": "My PZ Server", "appid": 108600, "gamedir": "zomboid", "version": "1.0.0.0", "product": "zomboid", "region": -1, "players": 2, "max_players": 2, "bots": 0, "map": "Muldraugh, KY", "secure": True, "dedicated": True, "os": "w", "gametype": "hidden;hosted"},
        ]
    }
}


class FakeResponse:
    """Minimal stand-in for a streamed requests.Response."""

    def __init__(self, body=b"", status_code=200, reason="OK"):
        if isinstance(body, (dict, list)):
            body = json.dumps(body).encode("utf-8")
        elif isinstance(body, str):
            body = body.encode("utf-8")
        self.body = body
        self.status_code = status_code
        self.reason = reason
        self.closed = False
        self.raw = SimpleNamespace(shutdown=lambda: None)

    def iter_content(self, chunk_size=1):
        for start in range(0, len(self.body), chunk_size):
            yield self.body[start:start + chunk_size]

    def close(self):
        self.closed = True


class FakeSession:
    """Records GET calls and returns a canned response (or raises)."""

    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []
        self.closed = False

    def get(self, uri, **kwargs):
        self.calls.append((uri, kwargs))
        if self.error is not None:
            raise self.error
        return self.response

    def close(self):
        self.closed = True


class UnreachableSession:
    """Session that fails the test if anything tries to use it."""

    def get(self, *args, **kwargs):
        pytest.fail("network must not be contacted")

    def close(self):
        pass


@pytest.fixture
def config():
    """Enabled config pointing at a fake host."""
    return ClientConfig(
        key=TEST_KEY,
        url="http://steam.test",
        default_server_names=["My PZ Server"],
    )


@pytest.fixture
def server_list_session():
    return FakeSession(FakeResponse(SERVER_LIST_BODY))


@pytest.fixture
def player_bans_session():
    return FakeSession(FakeResponse(PLAYER_BANS_BODY))


class TrickleServer:
    """One-shot HTTP server on a real socket that sends its body slowly."""

    def __init__(self, body, byte_delay=0.0, header_delay=0.0):
        self.body = body.encode("utf-8") if isinstance(body, str) else body
        self.byte_delay = byte_delay
        self.header_delay = header_delay
        self.listener = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        self.listener.bind(("127.0.0.1", 0))
        self.listener.listen(1)
        self.url = f"http://127.0.0.1:{self.listener.getsockname()[1]}"
        self.thread = threading.Thread(target=self._serve, daemon=True)
        self.thread.start()

    def _serve(self):
        try:
            conn, _ = self.listener.accept()
        except OSError:
            return
        with conn:
            try:
                request = b""
                while b"\r\n\r\n" not in request:
                    chunk = conn.recv(4096)
                    if not chunk:
                        return
                    request += chunk
                time.sleep(self.header_delay)
                conn.sendall(
                    b"HTTP/1.1 200 OK\r\n"
                    b"Content-Type: application/json\r\n"
                    + f"Content-Length: {len(self.body)}\r\n\r\n".encode("ascii")
                )
                for i in range(len(self.body)):
                    conn.sendall(self.body[i:i + 1])
                    if self.byte_delay:
                        time.sleep(self.byte_delay)
            except OSError:
                return

    def close(self):
        self.listener.close()


@pytest.fixture
def trickle_server():
    """Factory for TrickleServer instances, closed after the test."""
    servers = []

    def _make(body, byte_delay=0.0, header_delay=0.0):
        server = TrickleServer(body, byte_delay=byte_delay, header_delay=header_delay)
        servers.append(server)
        return server

    yield _make
    for server in servers:
        server.close()
