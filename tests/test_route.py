from dwebapi.rest.endpoints import ENDPOINTS, Endpoints
from dwebapi.rest.route import Route

GUILD = "123456789012345678"
USER = "223456789012345678"
ROLE = "323456789012345678"


def test_url_uses_version():
    assert Route("GET", "/guilds/1", "v10").url == "https://discord.com/api/v10/guilds/1"
    assert Route("GET", "/guilds/1").url == "https://discord.com/api/v7/guilds/1"


def test_bucket_keeps_major_parameters():
    route = Route("GET", ENDPOINTS.guild_member(GUILD, USER))
    assert route.bucket == f"GET:/guilds/{GUILD}/members/:id"


def test_bucket_collapses_minor_ids():
    route = Route("GET", ENDPOINTS.guild_member_role(GUILD, USER, ROLE))
    assert route.bucket == f"GET:/guilds/{GUILD}/members/:id/roles/:id"

    other = Route("GET", ENDPOINTS.guild_member_role(GUILD, ROLE, USER))
    assert other.bucket == route.bucket


def test_bucket_depends_on_method():
    assert Route("GET", "/users/@me/guilds").bucket != Route("POST", "/users/@me/guilds").bucket


def test_endpoint_paths():
    assert ENDPOINTS.guild("1") == "/guilds/1"
    assert ENDPOINTS.guild_member("1", "2") == "/guilds/1/members/2"
    assert ENDPOINTS.guild_member_role("1", "2", "3") == "/guilds/1/members/2/roles/3"
    assert ENDPOINTS.user_guilds("@me") == "/users/@me/guilds"


def test_endpoints_are_injectable_values():
    custom = Endpoints(user_guilds_path="/v2/users/{user_id}/guilds")
    assert custom.user_guilds("@me") == "/v2/users/@me/guilds"
    assert custom.guild("1") == ENDPOINTS.guild("1")
