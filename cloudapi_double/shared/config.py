"""Configuration helpers — read from environment variables."""

from __future__ import annotations

import os


def get_env(name: str, default: str | None = None) -> str:
    """Get an environment variable, raising if missing and no default."""
    value = os.environ.get(name, default)
    if value is None:
        raise RuntimeError(f"Missing required environment variable: {name}")
    return value


ACCOUNT = lambda: get_env("CLOUDAPI_DOUBLE_ACCOUNT", "tester")
HOST = lambda: get_env("CLOUDAPI_DOUBLE_HOST", "127.0.0.1")
PORT = lambda: int(get_env("CLOUDAPI_DOUBLE_PORT", "0"))
LOG_LEVEL = lambda: get_env("CLOUDAPI_DOUBLE_LOG_LEVEL", "INFO")
