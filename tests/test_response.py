import pytest

from dwebapi.rest.response import Response


def test_json_with_charset():
    response = Response(200, '{"id": "1"}', "application/json; charset=utf-8")
    assert response.json() == {"id": "1"}
    assert response.body() == {"id": "1"}


def test_text_body():
    response = Response(200, "hello", "text/plain")
    assert response.body() == "hello"
    with pytest.raises(ValueError):
        response.json()


def test_empty_json_body():
    assert Response(204, "", "application/json").body() == ""
