import io
import logging
import socket
import threading
import pytest
from typing import Callable, Generator

from oneshot_tcp.network.server import OneShotServer

TIMEOUT = 5.0

class ServerThread(threading.Thread):
    """Runs OneShotServer.run() so a test can drive the client side."""

    def __init__(self, server: OneShotServer):
        super().__init__(daemon=True)
        self.server = server
        self.exit_code = None

    def run(self):
        self.exit_code = self.server.run()

@pytest.fixture(autouse=True)
def restore_root_logging() -> Generator[None, None, None]:
    """Keep handlers added by setup_logging from leaking between tests."""
    root = logging.getLogger()
    level = root.level
    yield
    for handler in list(root.handlers):
        if getattr(handler, "_oneshot_tcp_handler", False):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)

@pytest.fixture
def server() -> Generator[OneShotServer, None, None]:
    """A server already listening on an OS-assigned loopback port."""
    server = OneShotServer(0, host="127.0.0.1", out=io.StringIO())
    server.listen()
    yield server
    server.cleanup()

@pytest.fixture
def start_server() -> Generator[Callable[[OneShotServer], ServerThread], None, None]:
    threads = []

    def _start(server: OneShotServer) -> ServerThread:
        thread = ServerThread(server)
        thread.start()
        threads.append(thread)
        return thread

    yield _start
    for thread in threads:
        thread.join(timeout=TIMEOUT)

@pytest.fixture
def listener() -> Generator[socket.socket, None, None]:
    """A plain listening socket standing in for the server."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
    sock.bind(("127.0.0.1", 0))
    sock.listen(1)
    sock.settimeout(TIMEOUT)
    yield sock
    sock.close()

@pytest.fixture
def serve_once() -> Generator[Callable, None, None]:
    """Accept one connection on a listener and hand it to a handler in a thread."""
    threads = []

    def _serve(listener: socket.socket, handler: Callable[[socket.socket], None]) -> threading.Thread:
        def _run():
            conn, _ = listener.accept()
            with conn:
                conn.settimeout(TIMEOUT)
                handler(conn)
        thread = threading.Thread(target=_run, daemon=True)
        thread.start()
        threads.append(thread)
        return thread

    yield _serve
    for thread in threads:
        thread.join(timeout=TIMEOUT)

@pytest.fixture
def free_port() -> int:
    """A loopback port with nothing listening on it."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.bind(("127.0.0.1", 0))
    port = sock.getsockname()[1]
    sock.close()
    return port
