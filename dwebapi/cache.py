import logging
import time
from typing import Any, Callable, Final, Iterator, MutableMapping, Optional

import attr

__all__ = ("CacheEntry", "GuildCache", "GUILD_CACHE_TIMEOUT")

log = logging.getLogger(__name__)

GUILD_CACHE_TIMEOUT: Final[int] = 10000
""" How long (in milliseconds) a cached guild is served before it
is fetched again.
"""


def _now() -> float:
    return time.time() * 1000


@attr.define(frozen=True)
class CacheEntry:
    """A guild as discord last sent it, and when that was."""

    guild: Any = attr.field()
    """ The guild object, stored and returned as is """

    last_updated: float = attr.field()
    """ Time of the fetch, in milliseconds since the epoch """


@attr.define
class GuildCache:
    """Guilds by id, each served for `timeout` milliseconds after
    it was last fetched. Entries are only ever overwritten, failed
    fetches never make it in here.
    """

    timeout: int = attr.field(default=GUILD_CACHE_TIMEOUT)
    clock: Callable[[], float] = attr.field(default=_now, repr=False)
    entries: MutableMapping[str, CacheEntry] = attr.field(factory=dict, repr=False)

    def entry(self, guild_id: str) -> Optional[CacheEntry]:
        return self.entries.get(str(guild_id))

    def get(self, guild_id: str) -> Optional[Any]:
        """Returns the cached guild while it is still fresh, `None`
        if it is missing or older than `timeout`.
        """

        entry = self.entry(guild_id)
        if entry is None:
            log.debug("guild %s is not cached", guild_id)
            return None

        # still fresh: serve the cached copy
        if self.clock() - entry.last_updated <= self.timeout:
            log.debug("guild %s served from cache", guild_id)
            return entry.guild

        log.debug("guild %s is stale", guild_id)
        return None

    def put(self, guild_id: str, guild: Any) -> CacheEntry:
        entry = CacheEntry(guild, self.clock())
        self.entries[str(guild_id)] = entry
        return entry

    def __contains__(self, guild_id: object) -> bool:
        return str(guild_id) in self.entries

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self.entries)
