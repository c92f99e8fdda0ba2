"""Server list filter and its query micro-format encoder.

The Steam server browser takes filters as ``\\key\\value`` segments glued
together without separators, e.g. ``\\appid\\108600\\dedicated\\1``.
See https://developer.valvesoftware.com/wiki/Master_Server_Query_Protocol
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from steamweb.errors import RequiredParamError


class ServerListFilter(BaseModel):
    """Filter parameters for an IGameServersService/GetServerList query."""

    app_id: int = Field(default=0, description="Servers running game [appid]. Usage: \\appid\\[appid]")
    dedicated: bool = Field(default=False, description="Servers running dedicated. Usage: \\dedicated\\1")
    secure: bool = Field(default=False, description="Servers using anti-cheat (VAC). Usage: \\secure\\1")
    game_dir: str = Field(default="", description="Servers running the given mod. Usage: \\gamedir\\[mod]")
    map: str = Field(default="", description="Servers running the given map. Usage: \\map\\[map]")
    linux: bool = Field(default=False, description="Servers on a Linux platform. Usage: \\linux\\1")
    no_password: bool = Field(default=False, description="Servers without a password. Usage: \\password\\0")
    not_empty: bool = Field(default=False, description="Servers that are not empty. Usage: \\empty\\1")
    not_full: bool = Field(default=False, description="Servers that are not full. Usage: \\full\\1")
    proxy: bool = Field(default=False, description="Spectator proxies. Usage: \\proxy\\1")
    not_app_id: int = Field(default=0, description="Servers NOT running game [appid]. Usage: \\napp\\[appid]")
    no_players: bool = Field(default=False, description="Servers that are empty. Usage: \\noplayers\\1")
    whitelisted: bool = Field(default=False, description="Whitelisted servers. Usage: \\white\\1")
    game_type_tags: List[str] = Field(default_factory=list, description="All tags in sv_tags. Usage: \\gametype\\[tag;...]")
    game_data_tags: List[str] = Field(default_factory=list, description="All hidden tags (L4D2). Usage: \\gamedata\\[tag,...]")
    game_data_or_tags: List[str] = Field(default_factory=list, description="Any hidden tag (L4D2). Usage: \\gamedataor\\[tag,...]")
    name_match: str = Field(default="", description="Hostname contains [hostname]. Usage: \\name_match\\*[hostname]*")
    version_match: str = Field(default="", description="Running version [version], * wildcard. Usage: \\version_match\\[version]")
    collapse_addr_hash: bool = Field(default=False, description="One server per unique IP. Usage: \\collapse_addr_hash\\1")
    game_addr: str = Field(default="", description="Servers on the given IP[:port]. Usage: \\gameaddr\\[ip]")

    # Custom filters, applied after fetching. Not part of the Steam protocol.
    no_hidden: bool = Field(default=False, description="Drop servers tagged 'hidden'")
    no_default_servers: bool = Field(default=False, description="Drop servers still using a default name")
    limit: int = Field(default=0, description="Max servers to request, 0 uses the library default")

    def validate_params(self) -> None:
        """
        Check mandatory parameters before a request is built.

        Raises:
            RequiredParamError: If app_id is not set
        """
        if self.app_id == 0:
            raise RequiredParamError("appid")

    def effective_limit(self, default: int) -> int:
        """Return the filter's own limit, or ``default`` when unset."""
        return self.limit or default

    def encode(self) -> str:
        """
        Render the filter in the server browser micro-format.

        Segment order is fixed by the protocol and must not change.
        """
        query = f"\\appid\\{self.app_id}"

        if self.dedicated:
            query += "\\dedicated\\1"
        if self.secure:
            query += "\\secure\\1"
        if self.game_dir:
            query += f"\\gamedir\\{self.game_dir}"
        if self.map:
            query += f"\\map\\{self.map}"
        if self.linux:
            query += "\\linux\\1"
        if self.no_password:
            query += "\\password\\0"
        if self.not_empty:
            query += "\\empty\\1"
        if self.not_full:
            query += "\\full\\1"
        if self.proxy:
            query += "\\proxy\\1"
        if self.not_app_id != 0:
            query += f"\\napp\\{self.not_app_id}"
        if self.no_players:
            query += "\\noplayers\\1"
        if self.whitelisted:
            query += "\\white\\1"
        # gametype is ';'-joined, gamedata and gamedataor are ','-joined
        if self.game_type_tags:
            query += "\\gametype\\" + ";".join(self.game_type_tags)
        if self.game_data_tags:
            query += "\\gamedata\\" + ",".join(self.game_data_tags)
        if self.game_data_or_tags:
            query += "\\gamedataor\\" + ",".join(self.game_data_or_tags)
        if self.name_match:
            query += f"\\name_match\\*{self.name_match}*"
        if self.version_match:
            query += f"\\version_match\\{self.version_match}"
        if self.collapse_addr_hash:
            query += "\\collapse_addr_hash\\1"
        if self.game_addr:
            query += f"\\gameaddr\\{self.game_addr}"

        return query

    def __str__(self) -> str:
        return self.encode()


def encode_filter(server_filter: Optional[ServerListFilter]) -> str:
    """
    Validate and encode a filter.

    Raises:
        RequiredParamError: If the filter is missing or has no app_id
    """
    if server_filter is None:
        raise RequiredParamError("appid")
    server_filter.validate_params()
    return server_filter.encode()
