"""Steam Web API client: player bans and game server listing."""

from steamweb.config.loader import ClientConfig, DialerConfig, TransportConfig, load_client_config
from steamweb.errors import (
    ConfigUndefinedParamError,
    EmptyResponseError,
    RequiredParamError,
    SteamWebError,
    WrongStatusCodeError,
)
from steamweb.retrieval.client import SteamWebClient
from steamweb.retrieval.filters import ServerListFilter
from steamweb.retrieval.models import PlayerBans, Server

__version__ = "0.1.0"

__all__ = [
    "ClientConfig",
    "ConfigUndefinedParamError",
    "DialerConfig",
    "EmptyResponseError",
    "PlayerBans",
    "RequiredParamError",
    "Server",
    "ServerListFilter",
    "SteamWebClient",
    "SteamWebError",
    "TransportConfig",
    "WrongStatusCodeError",
    "load_client_config",
]
