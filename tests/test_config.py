import pytest

from dwebapi.config import ClientOptions, ConfigurationError


def test_defaults():
    options = ClientOptions()

    assert options.version == "v7"
    assert options.request_timeout == 15000
    assert options.latency_threshold == 30000
    assert options.ratelimiter_offset == 0
    assert options.client_id is None


def test_falsy_values_fall_back_to_defaults():
    options = ClientOptions(version="", request_timeout=0, latency_threshold=None)

    assert options.version == "v7"
    assert options.request_timeout == 15000
    assert options.latency_threshold == 30000


def test_secret_not_in_repr():
    assert "hunter2" not in repr(ClientOptions(client_secret="hunter2"))


def test_from_env():
    options = ClientOptions.from_env(
        {
            "DISCORD_API_VERSION": "v10",
            "DISCORD_REQUEST_TIMEOUT": "5000",
            "DISCORD_RATELIMITER_OFFSET": "100",
            "DISCORD_CLIENT_ID": "123",
            "DISCORD_CLIENT_SECRET": "secret",
            "DISCORD_REDIRECT_URI": "https://example.com/cb",
        }
    )

    assert options == ClientOptions(
        version="v10",
        request_timeout=5000,
        ratelimiter_offset=100,
        client_id="123",
        client_secret="secret",
        redirect_uri="https://example.com/cb",
    )


def test_from_env_prefix():
    options = ClientOptions.from_env({"BOT_API_VERSION": "v9"}, prefix="BOT_")
    assert options.version == "v9"


def test_from_env_empty():
    assert ClientOptions.from_env({}) == ClientOptions()


def test_from_env_rejects_non_integers():
    with pytest.raises(ConfigurationError, match="DISCORD_REQUEST_TIMEOUT"):
        ClientOptions.from_env({"DISCORD_REQUEST_TIMEOUT": "soon"})
