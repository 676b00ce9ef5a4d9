"""Threaded HTTP server exposing the CloudAPI double.

Runs as a background thread, handing every request to a Router:
- GET/HEAD/POST/PUT/DELETE on /<account>/<family>[/...]  -> resource handlers
- anything under /<account>/ that is not a family        -> 400
- anything else                                          -> 404
"""

from __future__ import annotations

import logging
import threading
import time
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from urllib.parse import unquote, urlsplit

import requests

from cloudapi_double.core.request import Request
from cloudapi_double.core.responses import Response, internal_error
from cloudapi_double.core.routing import Router

logger = logging.getLogger(__name__)


class CloudAPIRequestHandler(BaseHTTPRequestHandler):
    protocol_version = "HTTP/1.1"

    def do_GET(self):
        self._dispatch()

    def do_HEAD(self):
        self._dispatch()

    def do_POST(self):
        self._dispatch()

    def do_PUT(self):
        self._dispatch()

    def do_DELETE(self):
        self._dispatch()

    def do_PATCH(self):
        self._dispatch()

    def do_OPTIONS(self):
        self._dispatch()

    def _read_body(self) -> bytes:
        length = int(self.headers.get("Content-Length") or 0)
        return self.rfile.read(length) if length > 0 else b""

    def _dispatch(self):
        url = urlsplit(self.path)
        try:
            body = self._read_body()
        except (OSError, ValueError) as exc:
            logger.warning("Failed to read body for %s %s: %s", self.command, url.path, exc)
            self._write(internal_error(exc))
            return

        request = Request(
            method=self.command,
            path=unquote(url.path),
            raw_query=url.query,
            body=body,
        )
        self._write(self.server.router.dispatch(request))

    def _write(self, response: Response):
        self.send_response(response.status)
        for name, value in response.header_items():
            self.send_header(name, value)
        self.end_headers()
        if response.body and self.command != "HEAD":
            self.wfile.write(response.body)

    def log_message(self, format, *args):
        logger.debug("%s - %s", self.address_string(), format % args)


class _RoutingHTTPServer(ThreadingHTTPServer):
    daemon_threads = True

    def __init__(self, address, router: Router):
        super().__init__(address, CloudAPIRequestHandler)
        self.router = router


class CloudAPIDoubleServer:
    def __init__(self, router: Router, host: str = "127.0.0.1", port: int = 0):
        self.server = _RoutingHTTPServer((host, port), router)
        self.host = host
        self.port = self.server.server_address[1]  # actual port (0 = auto-assign)
        self._thread: threading.Thread | None = None

    @property
    def url(self) -> str:
        return f"http://{self.host}:{self.port}"

    def serve_forever(self):
        logger.info("CloudAPI double listening on %s", self.url)
        self.server.serve_forever()

    def start(self):
        self._thread = threading.Thread(target=self.serve_forever, daemon=True)
        self._thread.start()

    def stop(self):
        self.server.shutdown()
        self.server.server_close()
        if self._thread:
            self._thread.join(timeout=5)


def wait_until_ready(base_url: str, account: str, timeout: float = 10, interval: float = 0.1) -> bool:
    """Poll the double's key listing until it answers 200 or the timeout passes."""
    url = f"{base_url}/{account}/keys"
    deadline = time.time() + timeout

    while time.time() < deadline:
        try:
            resp = requests.get(url, timeout=2)
            if resp.status_code == 200:
                return True
            logger.debug("wait_until_ready got %s from %s", resp.status_code, url)
        except requests.RequestException:
            pass
        time.sleep(interval)

    return False
