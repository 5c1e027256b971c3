import json as jsonlib
from typing import Any, Union, final

import attr

__all__ = ("Response",)


@final
@attr.define
class Response:
    """The object that represents the response that discord
    sends back after a HTTP request.
    """

    code: int = attr.field()
    """ The status code of the response """

    data: str = attr.field()
    """ The raw data of the response, probably should not be used
    directly, rather call a helper method to get the parsed data.
    """

    content_type: str = attr.field()
    """ The content-type of the response of the request, most
    likely application/json but could be something else.
    """

    @property
    def is_json(self) -> bool:
        # strip parameters such as `; charset=utf-8`
        return self.content_type.split(";", 1)[0].strip() == "application/json"

    def json(self) -> Any:
        """Returns the parsed JSON data of the response, will
        raise a `ValueError` if the content type is incorrect.
        """

        if self.is_json:
            return jsonlib.loads(self.data)
        else:
            raise ValueError(
                f"content-type must be `application/json` not `{self.content_type}`"
            )

    def body(self) -> Union[Any, str]:
        """The parsed JSON if discord sent JSON back, otherwise the
        raw text (empty for a `204 No Content`).
        """

        if self.is_json and self.data:
            return self.json()
        return self.data
