import pytest

from dwebapi import Discord, GuildCache
from dwebapi.rest import HTTPException

from .fakes import FakeClock, FakeRequester


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def requester():
    return FakeRequester(
        {
            "/guilds/42": {"id": "42", "name": "G"},
            "/guilds/7": HTTPException(404, {"message": "Unknown Guild", "code": 10004}),
            "/users/@me/guilds": [
                {"id": "42", "name": "G (listed)"},
                {"id": "43", "name": "H"},
            ],
            "/guilds/42/members/100": {"user": {"id": "100"}, "roles": ["5"]},
            "/guilds/42/members/100/roles/5": "",
        }
    )


@pytest.fixture
def client(requester, clock):
    return Discord(rest=requester, cache=GuildCache(clock=clock))
