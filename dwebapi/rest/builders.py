from __future__ import annotations

from typing import Any, Mapping, MutableMapping
from urllib import parse

import attr

__all__ = ("ParamsBuilder", "encode")

# the characters encodeURIComponent leaves alone
_SAFE = "-_.!~*'()"


def _stringify(value: Any) -> str:
    if value is True:
        return "true"
    return str(value)


def encode(params: Mapping[str, Any]) -> str:
    """Encodes a flat mapping into a query string.

    Every key whose value is falsy is left out, that is `None` and
    `False` but also `""`, `0` and empty containers. Optional OAuth2
    parameters rely on this to not be sent at all.

    Parameters
    ----------
    params : typing.Mapping[builtins.str, typing.Any]
        The parameters, in the order they should appear.

    Returns
    -------
    builtins.str
        The encoded parameters, e.g. `a=1&d=x`.
    """

    return "&".join(
        f"{parse.quote(str(key), safe=_SAFE)}={parse.quote(_stringify(value), safe=_SAFE)}"
        for key, value in params.items()
        if value
    )


@attr.define(init=False)
class ParamsBuilder:
    """Represents the parameters of the query string"""

    inner: MutableMapping[str, Any] = attr.field(init=False)
    """ The inner representation of the parameters """

    def __init__(self, **kwargs: Any):
        self.inner = dict(kwargs)

    def add(self, key: str, value: Any) -> ParamsBuilder:
        """Add a parameter to the parameters

        Parameters
        ----------
        key : builtins.str
            The key.
        value : typing.Any
            The value that the key represents, dropped on `build`
            if falsy.

        Returns
        -------
        dwebapi.rest.builders.ParamsBuilder
            The builder object, can be used for chaining.
        """

        self.inner[key] = value
        return self

    def build(self) -> Mapping[str, str]:
        """Build the parameters into a mapping, without the falsy ones.

        Returns
        -------
        typing.Mapping[builtins.str, builtins.str]
            The mapping referring to the parameters.
        """

        return {key: _stringify(value) for key, value in self.inner.items() if value}

    def encode(self) -> str:
        """Shortcut for `dwebapi.rest.builders.encode` on the parameters"""

        return encode(self.inner)
