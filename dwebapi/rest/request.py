from typing import Final, Optional, final

import attr

__all__ = ("Auth", "RequestOptions", "JSON_CONTENT_TYPE", "FORM_CONTENT_TYPE")

JSON_CONTENT_TYPE: Final[str] = "application/json"
FORM_CONTENT_TYPE: Final[str] = "application/x-www-form-urlencoded"


@final
@attr.define(frozen=True)
class Auth:
    """Credentials attached to a single request."""

    type: str = attr.field()
    """ The scheme of the credentials, `Bot` or `Bearer` """

    creds: str = attr.field(repr=False)
    """ The token itself, kept out of the repr so it doesn't end
    up in logs by accident.
    """

    def header(self) -> str:
        return f"{self.type} {self.creds}"


@final
@attr.define(frozen=True)
class RequestOptions:
    """Per request options that the REST client should honour"""

    auth: Optional[Auth] = attr.field(default=None)
    """ Credentials for the `Authorization` header, if any """

    content_type: str = attr.field(default=JSON_CONTENT_TYPE)
    """ How the body of the request is encoded """
