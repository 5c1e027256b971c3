from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple, Union

import attr

__all__ = ("ClientException", "HTTPException", "RequestTimeout", "TooManyRetries")


def _walk(
    node: Any, path: str = ""
) -> Iterator[Tuple[str, Mapping[str, Any]]]:
    # discord nests errors by field name and list index, with the
    # actual messages living under `_errors` at the leaves
    if isinstance(node, list):
        children = ((str(n), item) for n, item in enumerate(node))
    elif isinstance(node, dict):
        children = iter(node.items())
    else:
        return

    for key, value in children:
        if key == "_errors":
            for item in value:
                yield path, item
        else:
            yield from _walk(value, f"{path}.{key}" if path else key)


def flatten(errors: Mapping[str, Any]) -> List[Tuple[str, Tuple[str, str]]]:
    """Flattens discord's nested error object into
    `(field.path, (message, code))` pairs.
    """

    return [
        (path, (item.get("message", ""), item.get("code", "")))
        for path, item in _walk(errors)
    ]


class ClientException(Exception):
    """Base class for HTTP client exceptions"""


@attr.define(init=False, repr=False)
class HTTPException(ClientException):
    """Raised for any response outside the 2xx range. The status code
    and response data is included.
    """

    code: int = attr.field()
    """ The HTTP status code """

    data: Union[str, Dict[str, Any]] = attr.field()
    """ The body of the response, parsed if it was JSON """

    def __init__(self, code: int, data: Union[str, Dict[str, Any]]):
        self.code = code
        self.data = data

        super().__init__(repr(self))

    @property
    def message(self) -> Optional[str]:
        """Error message sent by discord"""

        if isinstance(self.data, dict):
            return self.data.get("message")
        return None

    @property
    def errno(self) -> Optional[int]:
        """The JSON error code discord sent, not the HTTP status"""

        if isinstance(self.data, dict):
            return self.data.get("code")
        return None

    @property
    def errors(self) -> Optional[str]:
        """Returns the prettified error messages, one per line."""

        if not isinstance(self.data, dict):
            return self.data or None

        if "errors" not in self.data:
            return None

        return "\n".join(
            f"{item} ({code}): {message}"
            for item, (message, code) in flatten(self.data["errors"])
        ).strip()

    def __repr__(self) -> str:
        text = f"{self.code}: {self.message} ({self.errno})"
        if self.errors:
            text += f"\n{self.errors}"
        return text


class RequestTimeout(ClientException):
    """Raised when discord takes longer than `request_timeout` to answer"""


class TooManyRetries(ClientException):
    """Raised when the maximum retry depth (5) is reached"""
