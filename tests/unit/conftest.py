"""Shared fixtures for unit tests — in-memory store, no sockets needed."""

import json
import os
import sys

import pytest

# Add project root to path so cloudapi_double is importable
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", ".."))

from cloudapi_double.backends.mock.store import InMemoryCloudStore
from cloudapi_double.core.request import Request
from cloudapi_double.core.routing import build_router


ACCOUNT = "tester"


@pytest.fixture
def store():
    return InMemoryCloudStore.with_defaults()


@pytest.fixture
def router(store):
    return build_router(ACCOUNT, store)


@pytest.fixture
def call(router):
    """Dispatch a request through the router; dict/list bodies are JSON-encoded."""

    def _call(method, path, query="", body=b""):
        if isinstance(body, (dict, list)):
            body = json.dumps(body).encode("utf-8")
        return router.dispatch(Request(method, f"/{ACCOUNT}{path}", query, body))

    return _call
