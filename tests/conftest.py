from __future__ import annotations

import socket
import threading
import time
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from pathlib import Path

import pytest

from sitewatch.services.log_store import LogStore


class _Handler(BaseHTTPRequestHandler):
    def log_message(self, format: str, *args) -> None:  # noqa: A002
        return

    def _send(self, status: int, body: str = "") -> None:
        body_bytes = body.encode("utf-8")
        self.send_response(status)
        self.send_header("Content-Type", "text/plain; charset=utf-8")
        self.send_header("Content-Length", str(len(body_bytes)))
        self.end_headers()
        self.wfile.write(body_bytes)

    def _redirect(self, location: str) -> None:
        self.send_response(302)
        self.send_header("Location", location)
        self.send_header("Content-Length", "0")
        self.end_headers()

    def do_GET(self) -> None:  # noqa: N802
        if self.path == "/ok":
            self._send(200, "fine")
        elif self.path == "/no_content":
            self._send(204)
        elif self.path == "/redirect":
            self._redirect("/ok")
        elif self.path == "/redirect_to_error":
            self._redirect("/error")
        elif self.path == "/loop":
            self._redirect("/loop")
        elif self.path == "/error":
            self._send(500, "Internal Server Error")
        elif self.path == "/unavailable":
            self._send(503, "Service Unavailable")
        elif self.path == "/slow":
            time.sleep(2)
            self._send(200, "late")
        else:
            self._send(404, "Not Found")


@pytest.fixture(scope="module")
def local_server_base_url() -> str:
    httpd = ThreadingHTTPServer(("127.0.0.1", 0), _Handler)
    httpd.daemon_threads = True
    httpd.block_on_close = False
    host, port = httpd.server_address
    thread = threading.Thread(target=httpd.serve_forever, daemon=True)
    thread.start()
    try:
        yield f"http://{host}:{port}"
    finally:
        httpd.shutdown()
        httpd.server_close()


@pytest.fixture
def closed_port() -> int:
    """A local port with nothing listening on it."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.bind(("127.0.0.1", 0))
    port = sock.getsockname()[1]
    sock.close()
    return port


@pytest.fixture
def log_root(tmp_path: Path) -> Path:
    root = tmp_path / "logs"
    root.mkdir()
    return root


@pytest.fixture
def log_store(log_root: Path) -> LogStore:
    return LogStore(log_root)


@pytest.fixture
def read_log_lines(log_root: Path):
    """Every line written for a monitor, in file order."""

    def _read(monitor_name: str) -> list[str]:
        lines: list[str] = []
        for path in sorted((log_root / monitor_name).rglob("*.log")):
            lines.extend(path.read_text(encoding="utf-8").splitlines())
        return lines

    return _read
