# onekit_todos

A small todo web service built in layers on Starlette.

- `onekit_todos.models`: `Todo`, `RequestMail` and `ResultMail`, data classes
  with `to_dict()` and `from_dict()`. `from_dict` raises `ValueError` for a
  missing field or a field of the wrong type; a `Todo` id must fit in 32 bits.
  `RequestMail` keeps the sender in `from_` and writes it as `"from"`.
- `onekit_todos.repository`: the abstract `TodoRepository` (`all()`) and
  `MailRepository` (`mail_send(mail)`), plus `RepositoryNotFoundError` and
  `MailRepositoryNotFoundError`.
- `onekit_todos.adapters`:
  - `TodoRepositoryForMemory` returns one fixed todo.
  - `TodoRepositoryForRedis` returns two fixed todos; before returning them it
    stores the list as JSON under the key `REDIS_TEST_KEY` and reads it back
    (`redis_test(todos)`). It connects to `redis://127.0.0.1/` unless given a
    `client` or a `url`.
  - `MailRepositoryForMemory` prints the mail content and reports success.
- `onekit_todos.usecases`: `TodoUseCase` and `MailUseCase`, thin async services
  over a repository.
- `onekit_todos.state`: `AppState` (a counter and the worker queue, with
  `send(message)`) and `Modules` (the todo and mail use cases; by default the
  Redis todo repository and the in-memory mail repository).
- `onekit_todos.auth`, `onekit_todos.sessions`, `onekit_todos.request_id`,
  `onekit_todos.middleware`, `onekit_todos.handlers`, `onekit_todos.worker`
  and `onekit_todos.errors`: the web layer described below.
- `onekit_todos.app`: `create_app`, `serve`, `run` and the `main` command.

## Installing

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Running the server

```
onekit-todos [--host HOST] [--port PORT]
```

The server listens on `127.0.0.1:8080` by default and runs under uvicorn until
it is stopped. `/api/one-kit` reads the todos through Redis, so a Redis server
should be running locally for that endpoint.

On start-up `run()` creates a queue of capacity 64 and a one-shot future and
starts the workers with `worker_start(queue, oneshot)`: one worker prints every
message it takes from the queue (`Received: ...`) and then waits 60 seconds;
the other prints `got = "test2"` once the one-shot value is set, or
`the sender dropped` if the future is cancelled.

## Endpoints

| Path             | What it does |
|------------------|--------------|
| `/auth/login`    | Reads the `Authorization` header. If the word after the scheme is `secret` (for example `Authorization: Basic secret`), answers `authenticated` and sets a `token` cookie (`Max-Age=30`) holding an HS256 JWT for user `master` that expires in 30 days. Otherwise answers 401 with `WWW-Authenticate: Basic realm="Access to the protected area"`. |
| `/auth/user`     | Same as `/auth/login`. |
| `/api/health`    | Waits 5 seconds, then answers 200. |
| `/api/cookie`    | Decodes the JWT in the `token` cookie and answers `Decoded claims: ...` or `Failed to decode token: ...`. With no `Cookie` header it answers 400; with cookies but no `token`, a "cookie not found" message. |
| `/api/one-kit`   | Loads the todos and sends a default `RequestMail`; mail failures are ignored. Answers 200. |
| `/api/handler`   | Increments a visit counter kept in the session and sets the cookie `key=value2`. |
| `/api/get-state` | Puts the message `test` on the worker queue. Answers 200. |

Every response carries a `one-kit-request-id` header: the one the client sent,
or a fresh UUID. Requests are logged with their method, path and duration, and
the `Authorization` header is logged (at debug level) without being enforced.

Sessions are kept in memory (`MemoryStore`) and identified by the `id` cookie;
a session expires after 10 seconds without a request.

## Using it from Python

```python
import asyncio

from onekit_todos.app import create_app
from onekit_todos.state import AppState, Modules

app = create_app(Modules(), AppState(asyncio.Queue()))
```

`create_app(modules, app_state)` returns a Starlette application that any ASGI
server can serve. `serve(modules, app_state, host, port)` serves it with
uvicorn, and `run(host, port)` sets up the queue, workers, state and modules
and then serves, which is what `onekit-todos` does.

`onekit_todos.errors` provides `ApiError`, whose `from_exception(error)` wraps
any exception as a 500 JSON body `{"error": ...}` and `to_response()` turns it
into a response, and a `hello` endpoint returning `{"message": "Hello, World!"}`;
neither is mounted by `create_app`.

## What it does not do

- Mail is never delivered: the only mail repository prints the content and
  reports success.
- There is no RPC service; the HTTP application is the only server.
- Todos cannot be created, changed or deleted; the repositories return fixed
  lists.
- Sessions and the worker queue live in process memory and are lost on restart.