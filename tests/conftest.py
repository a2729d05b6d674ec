import threading
import time
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

import pytest


class StubMirror:
    """A local HTTP server answering HEAD and GET for registered paths."""

    def __init__(self) -> None:
        self.files: dict[str, tuple[bytes, bool]] = {}
        self.requests: list[tuple[str, str]] = []
        self.delay = 0.0
        self.base_url = ""
        self._lock = threading.Lock()

    def add(self, path: str, body: bytes = b"installer", advertise_length: bool = True) -> str:
        self.files[path] = (body, advertise_length)
        return self.base_url + path

    def record(self, method: str, path: str) -> None:
        with self._lock:
            self.requests.append((method, path))


def _make_handler(mirror: StubMirror) -> type[BaseHTTPRequestHandler]:
    class Handler(BaseHTTPRequestHandler):
        def _respond(self, send_body: bool) -> None:
            mirror.record(self.command, self.path)
            if mirror.delay:
                time.sleep(mirror.delay)
            entry = mirror.files.get(self.path)
            if entry is None:
                self.send_response(404)
                self.send_header("Content-Length", "0")
                self.end_headers()
                return
            body, advertise_length = entry
            self.send_response(200)
            self.send_header("Content-Type", "application/octet-stream")
            if advertise_length:
                self.send_header("Content-Length", str(len(body)))
            self.end_headers()
            if send_body:
                self.wfile.write(body)

        def do_HEAD(self) -> None:
            self._respond(send_body=False)

        def do_GET(self) -> None:
            self._respond(send_body=True)

        def log_message(self, format: str, *args) -> None:
            pass

    return Handler


@pytest.fixture
def stub_mirror():
    mirror = StubMirror()
    server = ThreadingHTTPServer(("127.0.0.1", 0), _make_handler(mirror))
    mirror.base_url = f"http://127.0.0.1:{server.server_address[1]}"
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    yield mirror
    server.shutdown()
    server.server_close()
