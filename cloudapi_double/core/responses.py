"""Response values produced by the dispatch layer.

Every handler returns a single `Response` shape. Failures that the API
renders with their own status (405, 404, 400) are shared constants; any
other error raised by a handler becomes a 500 via `internal_error`.
"""

from __future__ import annotations

import json
from dataclasses import dataclass

TEXT_PLAIN = "text/plain; charset=UTF-8"
APPLICATION_JSON = "application/json"

INTERNAL_ERROR_BODY = json.dumps(
    {"internalServerError": {"message": "Unknown Error", "code": 500}}
).encode("utf-8")


class DispatchError(Exception):
    """Raised when a handler has no branch for the request's method."""

    def __init__(self, method: str, path: str):
        super().__init__(f'unknown request method "{method}" for {path}')
        self.method = method
        self.path = path


@dataclass(frozen=True)
class Response:
    status: int
    body: bytes = b""
    content_type: str = ""
    headers: tuple[tuple[str, str], ...] = ()
    error_text: str = ""

    def header_items(self) -> list[tuple[str, str]]:
        """Headers to write, in order, ending with the computed Content-Length."""
        items = []
        if self.content_type:
            items.append(("Content-Type", self.content_type))
        items.extend(self.headers)
        items.append(("Content-Length", str(len(self.body))))
        return items

    def json(self):
        """Decode the body as JSON (test convenience)."""
        return json.loads(self.body)


NOT_ALLOWED = Response(405, b"Method is not allowed", TEXT_PLAIN, error_text="MethodNotAllowedError")
NOT_FOUND = Response(404, b"Resource Not Found", TEXT_PLAIN, error_text="NotFoundError")
BAD_REQUEST = Response(400, b"Malformed request url", TEXT_PLAIN, error_text="BadRequestError")


def internal_error(exc: BaseException) -> Response:
    """Wrap an arbitrary error in the generic 500 envelope."""
    return Response(500, INTERNAL_ERROR_BODY, APPLICATION_JSON, error_text=str(exc))


def json_response(status: int, value) -> Response:
    """Encode a plain value as a JSON response.

    None renders as an empty body (used for 202 and 204). Encoding failures
    raise TypeError and surface as 500s through the dispatcher.
    """
    if value is None:
        return Response(status)
    body = json.dumps(value).encode("utf-8")
    return Response(status, body, APPLICATION_JSON)
