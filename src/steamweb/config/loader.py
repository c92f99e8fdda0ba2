import re
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml
from pydantic import BaseModel, Field, field_validator

from steamweb.errors import ConfigUndefinedParamError

DEFAULT_CONFIG_PATH = Path("config/steamweb.yaml")

DEFAULT_STEAM_URL = "https://api.steampowered.com"
DEFAULT_TIMEOUT = 10.0
DEFAULT_TLS_HANDSHAKE_TIMEOUT = 5.0
DEFAULT_DIALER_TIMEOUT = 5.0
DEFAULT_LIMIT = 50000

_DURATION_UNITS = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "μs": 1e-6,
    "ms": 0.001,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}

# Longer units first so "ms" is not read as "m"
_DURATION_PART = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|μs|ms|s|m|h)")
_DURATION_FULL = re.compile(rf"(?:{_DURATION_PART.pattern})+")


def parse_duration(value: Union[str, int, float, None]) -> float:
    """
    Parse a duration into seconds.

    Accepts plain numbers (seconds) or Go-style duration strings made of one
    or more ``<number><unit>`` groups, e.g. "500ms", "5s", "1m30s", "2h45m".
    Units: ns, us (or µs), ms, s, m, h.

    Args:
        value: Duration value from config

    Returns:
        Number of seconds (0.0 when value is empty)

    Raises:
        ValueError: If the string cannot be parsed
    """
    if value is None or value == "":
        return 0.0
    if isinstance(value, bool):
        raise ValueError(f"Invalid duration: {value!r}")
    if isinstance(value, (int, float)):
        return float(value)

    text = str(value).strip().lower()
    try:
        return float(text)
    except ValueError:
        pass

    if not _DURATION_FULL.fullmatch(text):
        raise ValueError(f"Invalid duration: {value!r}")
    return sum(float(number) * _DURATION_UNITS[unit] for number, unit in _DURATION_PART.findall(text))


class DialerConfig(BaseModel):
    """Options for opening connections to the API host (all in seconds)."""

    timeout: float = 0.0  # connect timeout
    fallback_delay: float = 0.0  # delay before a fallback connection attempt
    keep_alive: float = 0.0  # TCP keep-alive interval, 0 disables

    @field_validator("timeout", "fallback_delay", "keep_alive", mode="before")
    @classmethod
    def _parse_duration(cls, value: Any) -> float:
        return parse_duration(value)


class TransportConfig(BaseModel):
    """Low-level transport settings."""

    dialer: DialerConfig = Field(default_factory=DialerConfig)
    tls_handshake_timeout: float = 0.0

    @field_validator("tls_handshake_timeout", mode="before")
    @classmethod
    def _parse_duration(cls, value: Any) -> float:
        return parse_duration(value)


class ClientConfig(BaseModel):
    """Configuration for SteamWebClient."""

    disabled: bool = False
    key: str = ""  # Steam Web API access key
    url: str = ""  # Steam Web API base URL
    timeout: float = 0.0  # bounds the whole request, seconds
    transport: TransportConfig = Field(default_factory=TransportConfig)
    limit: int = 0
    default_server_names: List[str] = Field(default_factory=list)

    @field_validator("timeout", mode="before")
    @classmethod
    def _parse_duration(cls, value: Any) -> float:
        return parse_duration(value)

    @field_validator("default_server_names", mode="before")
    @classmethod
    def _none_to_list(cls, value: Any) -> Any:
        return [] if value is None else value

    def validate_params(self) -> None:
        """
        Check that an enabled client has everything it needs.

        A disabled config is never validated.

        Raises:
            ConfigUndefinedParamError: If key or url is empty
        """
        if self.disabled:
            return
        if not self.key:
            raise ConfigUndefinedParamError("key")
        if not self.url:
            raise ConfigUndefinedParamError("url")

    def with_defaults(self) -> "ClientConfig":
        """
        Return a copy with documented defaults filled in.

        Only fields still at their zero value are replaced:
        - url: https://api.steampowered.com
        - timeout: 10s
        - transport.tls_handshake_timeout: 5s
        - transport.dialer.timeout: 5s
        - limit: 50000
        """
        cfg = self.model_copy(deep=True)

        if not cfg.url:
            cfg.url = DEFAULT_STEAM_URL
        if not cfg.timeout:
            cfg.timeout = DEFAULT_TIMEOUT
        if not cfg.transport.tls_handshake_timeout:
            cfg.transport.tls_handshake_timeout = DEFAULT_TLS_HANDSHAKE_TIMEOUT
        if not cfg.transport.dialer.timeout:
            cfg.transport.dialer.timeout = DEFAULT_DIALER_TIMEOUT
        if not cfg.limit:
            cfg.limit = DEFAULT_LIMIT

        return cfg


def load_client_config(path: Optional[Path] = None) -> ClientConfig:
    """
    Load client configuration from a YAML file.

    The mapping may sit at the top level or under a ``steamweb`` key, so the
    client section can live inside a larger application config.

    Args:
        path: Optional path to the YAML file. Defaults to config/steamweb.yaml

    Returns:
        ClientConfig (defaults are not applied here)

    Raises:
        FileNotFoundError: If the config file doesn't exist
        ValueError: If the config structure is invalid
    """
    cfg_path = path or DEFAULT_CONFIG_PATH
    if not cfg_path.exists():
        raise FileNotFoundError(f"Steam Web API config file not found: {cfg_path}")
    with cfg_path.open("r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    if not isinstance(raw, dict):
        raise ValueError("Steam Web API config must be a dictionary")

    section: Dict[str, Any] = raw.get("steamweb", raw)
    if not isinstance(section, dict):
        raise ValueError("Steam Web API config 'steamweb' section must be a dictionary")

    names = section.get("default_server_names")
    if names is not None and not isinstance(names, list):
        raise ValueError("Steam Web API config 'default_server_names' must be a list")

    return ClientConfig.model_validate(section)
