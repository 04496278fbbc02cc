import json
import socket
import threading
import time
from collections.abc import Generator
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from urllib.parse import parse_qs, urlsplit

import pytest
from loguru import logger

STANDARD = {"success": True, "content": {"id": 1}}
NON_STANDARD = {"hasError": False, "content": {"id": 1}}


class OrderHandler(BaseHTTPRequestHandler):
    """Serves the fixed responses the integration tests expect."""

    def log_message(self, format: str, *args) -> None:  # noqa: A002
        logger.trace(format % args)

    def _send(self, status: int, body: str, content_type: str = "application/json") -> None:
        encoded = body.encode("utf-8")
        self.send_response(status)
        self.send_header("Content-Type", content_type)
        self.send_header("Content-Length", str(len(encoded)))
        self.end_headers()
        self.wfile.write(encoded)

    def _route(self) -> None:
        parsed = urlsplit(self.path)
        path = parsed.path
        if path == "/api/order-create":
            self._send(200, json.dumps(STANDARD))
        elif path == "/api/order-create-non-standard":
            self._send(200, json.dumps(NON_STANDARD))
        elif path == "/api/echo":
            length = int(self.headers.get("Content-Length") or 0)
            body = json.loads(self.rfile.read(length) or b"{}")
            self._send(200, json.dumps({"success": True, "content": body}))
        elif path == "/api/order-create.jsonp":
            query = parse_qs(parsed.query)
            callback = (query.get("cb") or query.get("callback") or ["missing"])[0]
            self._send(200, f"{callback}({json.dumps(STANDARD)});", "application/javascript")
        elif path == "/api/timeout":
            time.sleep(1)
            self._send(200, json.dumps(STANDARD))
        elif path == "/api/500":
            self._send(500, "")
        else:
            self._send(404, "")

    def do_GET(self) -> None:  # noqa: N802
        self._route()

    def do_POST(self) -> None:  # noqa: N802
        self._route()


@pytest.fixture(scope="session")
def api_url() -> Generator[str, None, None]:
    """Start a local HTTP server and return its base URL."""
    server = ThreadingHTTPServer(("127.0.0.1", 0), OrderHandler)
    server.daemon_threads = True
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    url = f"http://127.0.0.1:{server.server_address[1]}/"
    logger.info(f"Test API server ready at {url}")
    try:
        yield url
    finally:
        server.shutdown()
        server.server_close()


@pytest.fixture
def closed_url() -> str:
    """Base URL of a port nothing listens on."""
    with socket.socket() as sock:
        sock.bind(("127.0.0.1", 0))
        port = sock.getsockname()[1]
    return f"http://127.0.0.1:{port}/"
