import asyncio

import pytest
from starlette.testclient import TestClient

from onekit_todos import handlers
from onekit_todos.adapters import MailRepositoryForMemory, TodoRepositoryForMemory
from onekit_todos.app import create_app, main
from onekit_todos.request_id import ONE_KIT_REQUEST_ID
from onekit_todos.state import AppState, Modules
from onekit_todos.usecases import MailUseCase, TodoUseCase


@pytest.fixture
def queue():
    return asyncio.Queue()


@pytest.fixture
def client(queue):
    modules = Modules(
        TodoUseCase(TodoRepositoryForMemory()),
        MailUseCase(MailRepositoryForMemory()),
    )
    app = create_app(modules, AppState(queue))
    with TestClient(app) as test_client:
        yield test_client


def test_login_without_credentials_is_unauthorized(client):
    response = client.get("/auth/login")
    assert response.status_code == 401
    assert response.text == "Unauthorized"
    assert response.headers["www-authenticate"] == 'Basic realm="Access to the protected area"'


def test_login_with_credentials_sets_token_cookie(client):
    response = client.get("/auth/login", headers={"Authorization": "Basic secret"})
    assert response.status_code == 200
    assert response.text == "authenticated"
    cookies = response.headers.get_list("set-cookie")
    assert any(c.startswith("token=") and "Max-Age=30" in c for c in cookies)


def test_user_route_behaves_like_login(client):
    response = client.get("/auth/user", headers={"Authorization": "Basic wrong"})
    assert response.status_code == 401


def test_cookie_endpoint_decodes_login_token(client):
    client.get("/auth/login", headers={"Authorization": "Basic secret"})
    response = client.get("/api/cookie")
    assert response.status_code == 200
    assert response.text.startswith("Decoded claims: Claims(user_id='master'")


def test_request_id_is_generated(client):
    response = client.get("/api/one-kit")
    request_id = response.headers[ONE_KIT_REQUEST_ID]
    assert len(request_id) == 36
    assert request_id.count("-") == 4


def test_request_id_is_propagated(client):
    response = client.get("/api/one-kit", headers={ONE_KIT_REQUEST_ID: "abc-123"})
    assert response.headers[ONE_KIT_REQUEST_ID] == "abc-123"


def test_all_todo_is_ok(client):
    assert client.get("/api/one-kit").status_code == 200


def test_handler_sets_cookie_and_session(client):
    response = client.get("/api/handler")
    assert response.status_code == 200
    assert response.text == "クッキーが設定されました"
    cookies = response.headers.get_list("set-cookie")
    assert any(c.startswith("key=value2") for c in cookies)
    assert any(c.startswith("id=") for c in cookies)


def test_get_state_sends_to_channel(client, queue):
    response = client.get("/api/get-state")
    assert response.status_code == 200
    assert queue.get_nowait() == "test"


def test_health_check(client, monkeypatch):
    monkeypatch.setattr(handlers, "HEALTH_CHECK_DELAY", 0)
    assert client.get("/api/health").status_code == 200


def test_unknown_route_is_not_found(client):
    assert client.get("/api/missing").status_code == 404


def test_main_help_exits_cleanly():
    with pytest.raises(SystemExit) as info:
        main(["--help"])
    assert info.value.code == 0


def test_main_rejects_bad_port():
    with pytest.raises(SystemExit) as info:
        main(["--port", "not-a-number"])
    assert info.value.code == 2