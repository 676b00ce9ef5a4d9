"""Path router for the CloudAPI double.

Routes are resolved against the account once, when the router is built.
Lookup follows the usual mux convention: an exact registered path wins,
otherwise the longest registered path ending in ``/`` that prefixes the
request path. Each resource family is registered both with and without a
trailing slash, but a request path that itself ends in ``/`` is answered
with 404 by the resource handlers.
"""

from __future__ import annotations

import logging
from typing import Callable

from cloudapi_double.core import handlers, machines
from cloudapi_double.core.interfaces import CloudStore
from cloudapi_double.core.request import Request
from cloudapi_double.core.responses import BAD_REQUEST, NOT_FOUND, Response, internal_error

logger = logging.getLogger(__name__)

Handler = Callable[[Request], Response]
ResourceHandler = Callable[[Request, CloudStore, str], Response]

RESOURCE_FAMILIES: dict[str, ResourceHandler] = {
    "keys": handlers.handle_keys,
    "images": handlers.handle_images,
    "packages": handlers.handle_packages,
    "machines": machines.handle_machines,
    "fwrules": handlers.handle_firewall_rules,
    "networks": handlers.handle_networks,
}


def respond_with(response: Response) -> Handler:
    """Handler that always answers with a fixed response."""

    def handler(request: Request) -> Response:
        return response

    return handler


def resource_route(family: ResourceHandler, store: CloudStore, collection: str) -> Handler:
    """Wrap a family handler with trailing-slash rejection and error rendering."""

    def handler(request: Request) -> Response:
        if request.path.endswith("/") and request.path != "/":
            return NOT_FOUND
        try:
            return family(request, store, collection)
        except Exception as exc:
            logger.warning("%s %s failed: %s", request.method, request.path, exc)
            return internal_error(exc)

    return handler


class Router:
    def __init__(self):
        self._routes: dict[str, Handler] = {}

    def register(self, path: str, handler: Handler) -> None:
        """Register ``path``; paths without a trailing slash also get the slashed form."""
        self._routes[path] = handler
        if not path.endswith("/"):
            self._routes[path + "/"] = handler

    @property
    def paths(self) -> list[str]:
        return sorted(self._routes)

    def match(self, path: str) -> Handler | None:
        handler = self._routes.get(path)
        if handler is not None:
            return handler

        best = None
        for pattern, candidate in self._routes.items():
            if pattern.endswith("/") and path.startswith(pattern):
                if best is None or len(pattern) > len(best[0]):
                    best = (pattern, candidate)
        return best[1] if best else None

    def dispatch(self, request: Request) -> Response:
        handler = self.match(request.path)
        if handler is None:
            return NOT_FOUND
        return handler(request)


def build_router(account: str, store: CloudStore) -> Router:
    """Build the route table for one account."""
    router = Router()
    router.register("/", respond_with(NOT_FOUND))
    router.register(f"/{account}/", respond_with(BAD_REQUEST))
    for name, family in RESOURCE_FAMILIES.items():
        collection = f"/{account}/{name}"
        router.register(collection, resource_route(family, store, collection))
    return router
