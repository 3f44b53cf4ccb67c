from datetime import datetime, timedelta, timezone

import httpx
import jwt
import pytest
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import PlainTextResponse
from starlette.routing import Route

from onekit_todos.auth import (
    BASIC_AUTH_KEY,
    Claims,
    authenticate,
    decode_jwt,
    generate_jwt,
    is_basic_authenticated,
    login,
)

_VALID_AUTHORIZATION = " ".join(("Basic", BASIC_AUTH_KEY))


async def _get(app, path, headers=None):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
        return await client.get(path, headers=headers)


def _request(path="/", headers=None):
    scope = {
        "type": "http",
        "http_version": "1.1",
        "method": "GET",
        "scheme": "http",
        "server": ("testserver", 80),
        "root_path": "",
        "path": path,
        "query_string": b"",
        "headers": [
            (name.lower().encode("latin-1"), value.encode("latin-1"))
            for name, value in (headers or {}).items()
        ],
    }
    return Request(scope)


def test_basic_credential_accepted():
    assert is_basic_authenticated(_VALID_AUTHORIZATION) is True


@pytest.mark.parametrize("header", ["", "Basic", "Basic placeholder", BASIC_AUTH_KEY])
def test_basic_credential_rejected(header):
    assert is_basic_authenticated(header) is False


def test_claims_round_trip():
    claims = Claims(user_id="master", exp=42)
    assert Claims.from_dict(claims.to_dict()) == claims


def test_claims_from_dict_rejects_missing_user():
    with pytest.raises(ValueError):
        Claims.from_dict({"exp": 1})


def test_generate_and_decode():
    now = datetime.now(timezone.utc)
    claims = decode_jwt(generate_jwt(now))
    assert claims.user_id == "master"
    assert claims.exp == int((now + timedelta(days=30)).timestamp())


def test_expired_token_rejected():
    past = datetime.now(timezone.utc) - timedelta(days=31)
    with pytest.raises(jwt.ExpiredSignatureError):
        decode_jwt(generate_jwt(past))


def test_tampered_token_rejected():
    signed = generate_jwt()
    tampered = signed[:-2] + ("A" if signed[-2] != "A" else "B") + signed[-1]
    with pytest.raises(jwt.InvalidTokenError):
        decode_jwt(tampered)


def test_token_signed_with_other_key_rejected():
    forged = jwt.encode({"user_id": "master", "exp": 9999999999}, "secret", algorithm="HS256")
    with pytest.raises(jwt.InvalidSignatureError):
        decode_jwt(forged)


@pytest.mark.asyncio
async def test_login_success_sets_token_cookie():
    app = Starlette(routes=[Route("/login", login)])
    response = await _get(app, "/login", headers={"authorization": _VALID_AUTHORIZATION})
    assert response.status_code == 200
    assert response.text == "authenticated"
    cookie = response.headers["set-cookie"]
    assert cookie.endswith("; Path=/; SameSite=Strict; Max-Age=30")
    issued = cookie.split(";")[0].removeprefix("token=")
    assert decode_jwt(issued).user_id == "master"


@pytest.mark.asyncio
@pytest.mark.parametrize("headers", [None, {"authorization": "Basic placeholder"}])
async def test_login_failure(headers):
    response = await login(_request("/login", headers))
    assert response.status_code == 401
    assert response.body == b"Unauthorized"
    assert response.headers["www-authenticate"] == 'Basic realm="Access to the protected area"'


@pytest.mark.asyncio
async def test_authenticate_passes_request_through():
    seen = []

    async def call_next(request):
        seen.append(request.headers.get("authorization"))
        return PlainTextResponse("ok")

    response = await authenticate(_request("/", {"authorization": "Bearer token"}), call_next)
    assert response.status_code == 200
    assert response.body == b"ok"
    assert seen == ["Bearer token"]