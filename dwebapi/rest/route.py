import re
from typing import Final, Pattern, final

import attr

__all__ = ("Route", "BASE_URL")

BASE_URL: Final[str] = "https://discord.com/api"

# ids after these segments are major parameters and get their own bucket
_MINOR_ID: Final[Pattern[str]] = re.compile(
    r"(?<!channels/)(?<!guilds/)(?<!webhooks/)(?<=/)\d{16,20}"
)


@final
@attr.define(frozen=True)
class Route:
    """Container class for a single request target, the path is
    expected to be interpolated already (see `dwebapi.rest.endpoints`).
    """

    method: str = attr.field()
    """ HTTP method the request will take """

    path: str = attr.field()
    """ The interpolated path of the route, e.g. `/guilds/1234` """

    version: str = attr.field(default="v7")
    """ The version of the API the route belongs to """

    @property
    def url(self) -> str:
        """The full URL of the route"""
        return f"{BASE_URL}/{self.version}{self.path}"

    @property
    def bucket(self) -> str:
        """The ratelimit bucket that the route would fall into, as per the
        discord api docs (https://discord.com/developers/docs/topics/rate-limits),
        only the major parameters are kept, other ids are collapsed.
        """
        return self.method + ":" + _MINOR_ID.sub(":id", self.path)
