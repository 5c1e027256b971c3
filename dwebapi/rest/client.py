import asyncio
import collections
import json as jsonlib
import logging
import time
from typing import Any, Deque, Final, Mapping, MutableMapping, Optional, Union

import aiohttp
import attr

from .. import __version__
from .builders import encode
from .errors import HTTPException, RequestTimeout, TooManyRetries
from .request import FORM_CONTENT_TYPE, RequestOptions
from .response import Response
from .route import Route

__all__ = ("RESTClient",)

log = logging.getLogger(__name__)

USER_AGENT: Final[str] = f"DiscordBot (dwebapi, {__version__})"

MAX_RETRIES: Final[int] = 5
LATENCY_SAMPLES: Final[int] = 10

# versions that still report `retry_after` in milliseconds
_LEGACY_VERSIONS: Final = frozenset({"v6", "v7"})
_BODYLESS_METHODS: Final = frozenset({"GET", "DELETE"})


def _loads(text: str) -> Union[str, Any]:
    try:
        return jsonlib.loads(text)
    except jsonlib.JSONDecodeError:
        return text


@attr.define(kw_only=True)
class RESTClient:
    """Client that handles HTTP request to discord's REST API,
    this does not create a session itself and needs one passed to
    it. Every duration it takes is in milliseconds.
    """

    session: aiohttp.ClientSession = attr.field()
    """ The actual session that the client uses for its HTTP
    requests, try not to use directly as that may mess up the
    ratelimit handling :)
    """

    version: str = attr.field(default="v7")
    """ The version of discord's API to talk to """

    request_timeout: int = attr.field(default=15000)
    """ How long a single request may take before `RequestTimeout` """

    latency_threshold: int = attr.field(default=30000)
    """ Average latency above which a warning is logged """

    ratelimiter_offset: int = attr.field(default=0)
    """ Added to every ratelimit wait, useful when the local clock
    is not quite in sync with discord's.
    """

    user_agent: str = attr.field(default=USER_AGENT)
    """ The user agent that you want to use for your HTTP client
    (recommended to use this format `DiscordBot ($url, $versionNumber)`)
    """

    buckets: MutableMapping[str, asyncio.Lock] = attr.field(init=False)
    global_ratelimit: asyncio.Event = attr.field(init=False)
    latencies: Deque[float] = attr.field(init=False)

    def __attrs_post_init__(self):
        self.buckets = {}
        self.latencies = collections.deque(maxlen=LATENCY_SAMPLES)

        # set means "not globally ratelimited"
        self.global_ratelimit = asyncio.Event()
        self.global_ratelimit.set()

    @property
    def average_latency(self) -> float:
        """Average latency of the last few requests, in milliseconds"""

        if not self.latencies:
            return 0.0
        return sum(self.latencies) / len(self.latencies)

    def _record_latency(self, route: Route, elapsed: float) -> None:
        self.latencies.append(elapsed)

        average = self.average_latency
        if average > self.latency_threshold:
            log.warning(
                "average request latency is %.0fms (threshold %dms), "
                "last request %s %s took %.0fms",
                average,
                self.latency_threshold,
                route.method,
                route.path,
                elapsed,
            )

    def _retry_after(self, data: Mapping[str, Any]) -> float:
        retry_after = float(data.get("retry_after", 0))
        if self.version in _LEGACY_VERSIONS:
            retry_after /= 1000
        return retry_after + self.ratelimiter_offset / 1000

    async def request(
        self,
        method: str,
        path: str,
        body: Optional[Mapping[str, Any]] = None,
        options: Optional[RequestOptions] = None,
    ) -> Any:
        """Makes a HTTP request to the provided path.

        Parameters
        ----------
        method : builtins.str
            The HTTP method, e.g. `GET`.
        path : builtins.str
            The interpolated path, relative to the API base.
        body : typing.Optional[typing.Mapping[builtins.str, typing.Any]]
            The body of the request, not sent for `GET` and `DELETE`
            or when empty.
        options : typing.Optional[dwebapi.rest.request.RequestOptions]
            Credentials and content-type of the request.

        Raises
        ------
        dwebapi.rest.errors.HTTPException
            Discord answered with something outside the 2xx range.
        dwebapi.rest.errors.RequestTimeout
            Discord took longer than `request_timeout` to answer.
        dwebapi.rest.errors.TooManyRetries
            The maximum retry limit (5) has been reached.

        Returns
        -------
        typing.Any
            The parsed JSON body, or the raw text for anything that
            is not JSON.
        """

        if options is None:
            options = RequestOptions()

        route = Route(method.upper(), path, self.version)

        headers = {"User-Agent": self.user_agent}
        if options.auth is not None:
            headers["Authorization"] = options.auth.header()

        kwargs: MutableMapping[str, Any] = {
            "headers": headers,
            "timeout": aiohttp.ClientTimeout(total=self.request_timeout / 1000),
        }

        if body and route.method not in _BODYLESS_METHODS:
            headers["Content-Type"] = options.content_type
            if options.content_type == FORM_CONTENT_TYPE:
                kwargs["data"] = encode(body)
            else:
                kwargs["data"] = jsonlib.dumps(body)

        if route.bucket not in self.buckets:
            self.buckets[route.bucket] = asyncio.Lock()

        lock = self.buckets[route.bucket]
        await lock.acquire()
        release_later = False

        try:
            for attempt in range(MAX_RETRIES):
                await self.global_ratelimit.wait()

                started = time.monotonic()
                try:
                    async with self.session.request(
                        route.method, route.url, **kwargs
                    ) as response:
                        status = response.status
                        response_headers = response.headers
                        text = await response.text(encoding="utf-8")
                except asyncio.TimeoutError as exc:
                    raise RequestTimeout(
                        f"{route.method} {route.path} timed out "
                        f"after {self.request_timeout}ms"
                    ) from exc

                self._record_latency(route, (time.monotonic() - started) * 1000)
                log.debug("%s %s => %d", route.method, route.path, status)

                if status == 429:
                    data = _loads(text)
                    if not isinstance(data, dict):
                        raise HTTPException(status, text)

                    retry_after = self._retry_after(data)
                    is_global = data.get("global", False)
                    log.warning(
                        "ratelimited on %s, retrying in %.2fs (global: %s)",
                        route.bucket,
                        retry_after,
                        is_global,
                    )

                    if is_global:
                        self.global_ratelimit.clear()
                    try:
                        await asyncio.sleep(retry_after)
                    finally:
                        if is_global:
                            self.global_ratelimit.set()
                    continue

                if status == 502:
                    delay = 1 + attempt * 2
                    log.warning(
                        "%s %s got a 502, retrying in %ds",
                        route.method,
                        route.path,
                        delay,
                    )
                    await asyncio.sleep(delay)
                    continue

                if response_headers.get("X-RateLimit-Remaining") == "0":
                    reset_after = (
                        float(response_headers.get("X-RateLimit-Reset-After", 0))
                        + self.ratelimiter_offset / 1000
                    )
                    asyncio.get_running_loop().call_later(
                        max(reset_after, 0), lock.release
                    )
                    release_later = True

                if 200 <= status < 300:
                    return Response(
                        status,
                        data=text,
                        content_type=response_headers.get("Content-Type", ""),
                    ).body()

                raise HTTPException(code=status, data=_loads(text))

            raise TooManyRetries("maximum retry limit reached")
        finally:
            if not release_later:
                lock.release()
