[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "onekit_todos"
version = "0.1.0"
description = "A small layered todo web service with basic-auth login, JWT cookies, sessions and a background worker"
requires-python = ">=3.10"
keywords = ["todo", "starlette", "asgi", "jwt", "redis", "sessions", "web service"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Framework :: AsyncIO",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
]
dependencies = [
    "starlette",
    "uvicorn",
    "pyjwt",
    "redis",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pytest-asyncio",
    "httpx",
]

[project.scripts]
onekit-todos = "onekit_todos.app:main"

[tool.hatch.build.targets.wheel]
packages = ["onekit_todos"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
