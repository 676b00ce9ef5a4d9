"""E2E test fixtures — the CloudAPI double served over real HTTP."""

from __future__ import annotations

import os
import sys

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", ".."))

from cloudapi_double.backends.http.server import CloudAPIDoubleServer, wait_until_ready
from cloudapi_double.backends.mock.store import InMemoryCloudStore
from cloudapi_double.core.routing import build_router

ACCOUNT = "e2e-tester"


@pytest.fixture(scope="session")
def cloudapi_store():
    return InMemoryCloudStore.with_defaults()


@pytest.fixture(scope="session")
def cloudapi_double(cloudapi_store):
    """Start the double on a random port with a seeded store."""
    server = CloudAPIDoubleServer(build_router(ACCOUNT, cloudapi_store))
    server.start()
    if not wait_until_ready(server.url, ACCOUNT):
        server.stop()
        pytest.fail("CloudAPI double did not become ready")
    yield server
    server.stop()


@pytest.fixture
def base_url(cloudapi_double):
    return f"{cloudapi_double.url}/{ACCOUNT}"
