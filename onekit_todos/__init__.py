"""A layered todo web service with basic-auth login, JWT cookies, sessions and a worker queue."""

__version__ = "0.1.0"