from typing import Final, final

import attr

__all__ = (
    "GUILD",
    "GUILD_MEMBER",
    "GUILD_MEMBER_ROLE",
    "USER_GUILDS",
    "Endpoints",
    "ENDPOINTS",
)

GUILD: Final[str] = "/guilds/{guild_id}"
GUILD_MEMBER: Final[str] = "/guilds/{guild_id}/members/{user_id}"
GUILD_MEMBER_ROLE: Final[
    str
] = "/guilds/{guild_id}/members/{user_id}/roles/{role_id}"
USER_GUILDS: Final[str] = "/users/{user_id}/guilds"


@final
@attr.define(frozen=True)
class Endpoints:
    """The table of paths the client knows about, one method per
    endpoint. Pass your own to `dwebapi.Discord` if you need to
    point it somewhere else.
    """

    guild_path: str = attr.field(default=GUILD)
    guild_member_path: str = attr.field(default=GUILD_MEMBER)
    guild_member_role_path: str = attr.field(default=GUILD_MEMBER_ROLE)
    user_guilds_path: str = attr.field(default=USER_GUILDS)

    def guild(self, guild_id: str) -> str:
        return self.guild_path.format(guild_id=guild_id)

    def guild_member(self, guild_id: str, user_id: str) -> str:
        return self.guild_member_path.format(guild_id=guild_id, user_id=user_id)

    def guild_member_role(self, guild_id: str, user_id: str, role_id: str) -> str:
        return self.guild_member_role_path.format(
            guild_id=guild_id, user_id=user_id, role_id=role_id
        )

    def user_guilds(self, user_id: str) -> str:
        return self.user_guilds_path.format(user_id=user_id)


ENDPOINTS: Final[Endpoints] = Endpoints()
