import os
from typing import Any, Mapping, Optional, final

import attr

__all__ = ("ClientOptions", "ConfigurationError")


class ConfigurationError(ValueError):
    """Raised when options cannot be turned into a `ClientOptions`"""


def _or_default(default: Any):
    # unset, empty and zero values all mean "use the default"
    return lambda value: value or default


@final
@attr.define(frozen=True, kw_only=True)
class ClientOptions:
    """Options for `dwebapi.Discord`. The first four are handed to
    the REST client as is, the OAuth2 ones stay on the client.
    """

    version: str = attr.field(default="v7", converter=_or_default("v7"))
    """ The version of the discord API to use """

    request_timeout: int = attr.field(default=15000, converter=_or_default(15000))
    """ Milliseconds before a request is considered timed out """

    latency_threshold: int = attr.field(default=30000, converter=_or_default(30000))
    """ Average request latency (ms) at which latency warnings start """

    ratelimiter_offset: int = attr.field(default=0, converter=_or_default(0))
    """ Milliseconds added to ratelimit waits """

    client_id: Optional[str] = attr.field(default=None)
    """ Your application's client id """

    client_secret: Optional[str] = attr.field(default=None, repr=False)
    """ Your application's client secret """

    redirect_uri: Optional[str] = attr.field(default=None)
    """ Where discord sends users after authorizing """

    @classmethod
    def from_env(
        cls, environ: Optional[Mapping[str, str]] = None, prefix: str = "DISCORD_"
    ) -> "ClientOptions":
        """Reads the options from environment variables, e.g.
        `DISCORD_API_VERSION` or `DISCORD_REQUEST_TIMEOUT`. Missing
        variables fall back to the defaults.

        Raises
        ------
        dwebapi.config.ConfigurationError
            One of the timing variables is not an integer.
        """

        if environ is None:
            environ = os.environ

        def integer(name: str) -> Optional[int]:
            raw = environ.get(prefix + name)
            if not raw:
                return None
            try:
                return int(raw)
            except ValueError:
                raise ConfigurationError(
                    f"{prefix}{name} must be an integer, not {raw!r}"
                ) from None

        return cls(
            version=environ.get(prefix + "API_VERSION"),
            request_timeout=integer("REQUEST_TIMEOUT"),
            latency_threshold=integer("LATENCY_THRESHOLD"),
            ratelimiter_offset=integer("RATELIMITER_OFFSET"),
            client_id=environ.get(prefix + "CLIENT_ID"),
            client_secret=environ.get(prefix + "CLIENT_SECRET"),
            redirect_uri=environ.get(prefix + "REDIRECT_URI"),
        )
