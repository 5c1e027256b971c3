from __future__ import annotations

import logging
from typing import Any, Final, List, Mapping, Optional, Protocol, Sequence, Union

import aiohttp
import attr

from .cache import GuildCache
from .config import ClientOptions
from .rest.builders import ParamsBuilder
from .rest.client import RESTClient
from .rest.endpoints import ENDPOINTS, Endpoints
from .rest.request import JSON_CONTENT_TYPE, Auth, RequestOptions

__all__ = ("Discord", "Requester", "AUTHORIZE_URL")

log = logging.getLogger(__name__)

AUTHORIZE_URL: Final[str] = "https://discord.com/api/oauth2/authorize"


class Requester(Protocol):
    """Anything that can make a request to discord on our behalf,
    usually a `dwebapi.rest.RESTClient`.
    """

    async def request(
        self,
        method: str,
        path: str,
        body: Optional[Mapping[str, Any]] = None,
        options: Optional[RequestOptions] = None,
    ) -> Any:
        ...


def _bot(token: str) -> RequestOptions:
    return RequestOptions(auth=Auth("Bot", token), content_type=JSON_CONTENT_TYPE)


@attr.define(kw_only=True)
class Discord:
    """Makes requests to discord's guild endpoints, caching guilds
    for a short while, and helps with OAuth2 urls.

    Use `Discord.from_session` to get one talking to discord through
    a `dwebapi.rest.RESTClient`.
    """

    rest: Requester = attr.field()
    """ Where the requests actually go """

    endpoints: Endpoints = attr.field(default=ENDPOINTS)
    """ The paths of the endpoints used """

    cache: GuildCache = attr.field(factory=GuildCache)
    """ Guilds fetched through `get_guild` or `get_all_guilds` """

    client_id: Optional[str] = attr.field(default=None)
    client_secret: Optional[str] = attr.field(default=None, repr=False)
    redirect_uri: Optional[str] = attr.field(default=None)

    @classmethod
    def from_session(
        cls,
        session: aiohttp.ClientSession,
        options: Optional[ClientOptions] = None,
        **kwargs: Any,
    ) -> Discord:
        """Creates a client with a `RESTClient` on top of `session`.

        Parameters
        ----------
        session : aiohttp.ClientSession
            The session used for every request, it is not closed by
            the client.
        options : typing.Optional[dwebapi.config.ClientOptions]
            The options, defaults are used if not given.
        **kwargs : typing.Any
            Passed on to the `Discord` constructor (e.g. `cache`).
        """

        if options is None:
            options = ClientOptions()

        rest = RESTClient(
            session=session,
            version=options.version,
            request_timeout=options.request_timeout,
            latency_threshold=options.latency_threshold,
            ratelimiter_offset=options.ratelimiter_offset,
        )
        return cls(
            rest=rest,
            client_id=options.client_id,
            client_secret=options.client_secret,
            redirect_uri=options.redirect_uri,
            **kwargs,
        )

    async def get_guild_member(
        self, *, guild_id: str, user_id: str, bot_token: str
    ) -> Any:
        """Fetches a member of a guild.

        Raises
        ------
        dwebapi.rest.errors.HTTPException
            Discord refused, e.g. the user is not in the guild.
        """

        return await self.rest.request(
            "GET",
            self.endpoints.guild_member(guild_id, user_id),
            {},
            _bot(bot_token),
        )

    async def get_guild_member_role(
        self, *, guild_id: str, user_id: str, role_id: str, bot_token: str
    ) -> Any:
        """Fetches a role of a guild member, the request fails with a
        `dwebapi.rest.errors.HTTPException` when discord does.
        """

        return await self.rest.request(
            "GET",
            self.endpoints.guild_member_role(guild_id, user_id, role_id),
            {},
            _bot(bot_token),
        )

    async def _get_guild(self, *, guild_id: str, bot_token: str) -> Any:
        return await self.rest.request(
            "GET",
            self.endpoints.guild(guild_id),
            {},
            _bot(bot_token),
        )

    async def get_guild(self, *, guild_id: str, bot_token: str) -> Any:
        """Fetches a guild, a guild that was fetched less than
        `cache.timeout` milliseconds ago is returned from the cache
        instead.

        Raises
        ------
        dwebapi.rest.errors.HTTPException
            The live fetch failed, the cache is left as it was.
        """

        cached = self.cache.get(guild_id)
        if cached is not None:
            return cached

        guild = await self._get_guild(guild_id=guild_id, bot_token=bot_token)
        self.cache.put(guild_id, guild)
        return guild

    async def get_all_guilds(self, *, bot_token: str) -> List[Any]:
        """Fetches every guild the bot is in, every one of them
        replaces whatever the cache held for it.
        """

        guilds = await self.rest.request(
            "GET",
            self.endpoints.user_guilds("@me"),
            {},
            _bot(bot_token),
        )

        for guild in guilds:
            self.cache.put(guild["id"], guild)

        log.debug("cached %d guilds", len(guilds))
        return guilds

    def generate_auth_url(
        self,
        *,
        scope: Union[str, Sequence[str]],
        state: Optional[str] = None,
        prompt: Optional[str] = None,
        permissions: Optional[int] = None,
        guild_id: Optional[str] = None,
        disable_guild_select: Optional[bool] = None,
        response_type: str = "code",
    ) -> str:
        """Builds the url users visit to authorize your application.
        Parameters that are not set (or falsy, such as a `0`
        permission integer) are left out of the url.

        Parameters
        ----------
        scope : typing.Union[builtins.str, typing.Sequence[builtins.str]]
            The scopes, either space separated or as a sequence.
        state : typing.Optional[builtins.str]
            Opaque value discord sends back with the redirect.
        prompt : typing.Optional[builtins.str]
            `consent` or `none`.
        permissions : typing.Optional[builtins.int]
            Permissions requested for the `bot` scope.
        guild_id : typing.Optional[builtins.str]
            Guild preselected in the dialog.
        disable_guild_select : typing.Optional[builtins.bool]
            Whether the user may pick another guild.
        response_type : builtins.str
            `code` (the default) or `token`.

        Returns
        -------
        builtins.str
            The authorization url.
        """

        if not isinstance(scope, str):
            scope = " ".join(scope)

        params = (
            ParamsBuilder()
            .add("client_id", self.client_id)
            .add("redirect_uri", self.redirect_uri)
            .add("response_type", response_type)
            .add("scope", scope)
            .add("permissions", permissions)
            .add("guild_id", guild_id)
            .add("disable_guild_select", disable_guild_select)
            .add("prompt", prompt)
            .add("state", state)
        )
        return f"{AUTHORIZE_URL}?{params.encode()}"
