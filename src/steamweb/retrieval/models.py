"""Pydantic models for Steam Web API responses."""

from typing import Any, List

from pydantic import BaseModel, ConfigDict, Field, field_validator


class PlayerBans(BaseModel):
    """Community, VAC and economy ban status for one 64-bit Steam ID."""

    model_config = ConfigDict(populate_by_name=True)

    steam_id: str = Field(default="", alias="SteamId")
    community_banned: bool = Field(default=False, alias="CommunityBanned")
    vac_banned: bool = Field(default=False, alias="VACBanned")
    number_of_vac_bans: int = Field(default=0, alias="NumberOfVACBans")
    days_since_last_ban: int = Field(default=0, alias="DaysSinceLastBan")
    number_of_game_bans: int = Field(default=0, alias="NumberOfGameBans")
    # "none" when the player has no bans on record, "probation", etc.
    economy_ban: str = Field(default="", alias="EconomyBan")


class GetPlayerBansResponse(BaseModel):
    """Envelope of ISteamUser/GetPlayerBans."""

    players: List[PlayerBans] = Field(default_factory=list)

    @field_validator("players", mode="before")
    @classmethod
    def _none_to_list(cls, value: Any) -> Any:
        return [] if value is None else value


class Server(BaseModel):
    """One game server entry from IGameServersService/GetServerList."""

    model_config = ConfigDict(populate_by_name=True)

    addr: str = ""
    game_port: int = Field(default=0, alias="gameport")
    steam_id: str = Field(default="", alias="steamid")
    name: str = ""
    app_id: int = Field(default=0, alias="appid")
    game_dir: str = Field(default="", alias="gamedir")
    version: str = ""
    product: str = ""
    region: int = 0
    players: int = 0
    max_players: int = 0
    bots: int = 0
    map: str = ""
    secure: bool = False
    dedicated: bool = False
    os: str = ""
    game_type: str = Field(default="", alias="gametype")  # ';'-delimited tags

    @property
    def tags(self) -> List[str]:
        """Split the gametype tag string."""
        return [tag for tag in self.game_type.split(";") if tag]


class ServerListBody(BaseModel):
    servers: List[Server] = Field(default_factory=list)

    @field_validator("servers", mode="before")
    @classmethod
    def _none_to_list(cls, value: Any) -> Any:
        return [] if value is None else value


class GetServerListResponse(BaseModel):
    """Envelope of IGameServersService/GetServerList."""

    response: ServerListBody = Field(default_factory=ServerListBody)

    @field_validator("response", mode="before")
    @classmethod
    def _none_to_body(cls, value: Any) -> Any:
        return {} if value is None else value
