import json

import pytest
from starlette.requests import Request

from onekit_todos.errors import ApiError, hello


def _request(path="/"):
    scope = {
        "type": "http",
        "http_version": "1.1",
        "method": "GET",
        "scheme": "http",
        "server": ("testserver", 80),
        "root_path": "",
        "path": path,
        "query_string": b"",
        "headers": [],
    }
    return Request(scope)


def test_from_exception_is_internal_error():
    err = ApiError.from_exception(ValueError("boom"))
    assert err.status_code == 500
    assert "boom" in err.body["error"]
    assert "ValueError" in err.body["error"]


def test_from_key_error_response_is_internal_error():
    response = ApiError.from_exception(KeyError("k")).to_response()
    assert response.status_code == 500
    assert "KeyError" in json.loads(response.body)["error"]


def test_to_response_carries_status_and_body():
    err = ApiError(404, {"error": "missing"})
    response = err.to_response()
    assert response.status_code == 404
    assert json.loads(response.body) == {"error": "missing"}


def test_from_exception_response_body_matches():
    err = ApiError.from_exception(RuntimeError("bad"))
    assert json.loads(err.to_response().body) == err.body


@pytest.mark.asyncio
async def test_hello_endpoint():
    response = await hello(_request("/hello"))
    assert response.status_code == 200
    assert json.loads(response.body) == {"message": "Hello, World!"}