"""
pytest configuration and fixtures.
"""

import threading
from datetime import datetime, timedelta, timezone
from typing import Generator
import pytest

# Add src to path for imports
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from httpdemo import ServerConfig, UserServer, UserStore
from httpdemo.http import Router
from httpdemo.users import build_router


FIXED_NOW = datetime(2026, 10, 18, 14, 3, 12, tzinfo=timezone(timedelta(hours=2)))


@pytest.fixture
def sample_get_request() -> bytes:
    """Sample HTTP GET request."""
    return (
        b"GET /api/users/1 HTTP/1.1\r\n"
        b"Host: localhost:3000\r\n"
        b"User-Agent: pytest\r\n"
        b"Accept: application/json\r\n"
        b"\r\n"
    )


@pytest.fixture
def sample_post_request() -> bytes:
    """Sample HTTP POST request with JSON body."""
    body = '{"name": "Zoë", "email": "zoe@example.com"}'.encode("utf-8")
    return (
        b"POST /api/users HTTP/1.1\r\n"
        b"Host: localhost:3000\r\n"
        b"Content-Type: application/json\r\n"
        + f"Content-Length: {len(body)}\r\n".encode()
        + b"\r\n"
    ) + body


@pytest.fixture
def fixed_now() -> datetime:
    """The instant every test store stamps on created users."""
    return FIXED_NOW


@pytest.fixture
def store(fixed_now: datetime) -> UserStore:
    """Seeded store whose clock always reads fixed_now."""
    return UserStore(clock=lambda: fixed_now)


@pytest.fixture
def router(store: UserStore) -> Router:
    """The users route table over the fixed-clock store."""
    return build_router(store)


class RunningServer:
    """A UserServer running its accept loop on a background thread."""

    def __init__(self, server: UserServer):
        self.server = server
        self._thread: threading.Thread = None

    @property
    def port(self) -> int:
        return self.server.address[1]

    @property
    def base_url(self) -> str:
        return f"http://127.0.0.1:{self.port}"

    def start(self):
        self._thread = threading.Thread(
            target=self.server.run,
            kwargs={"setup_logging": False},
            daemon=True,
        )
        self._thread.start()

        if not self.server.wait_until_ready(timeout=5.0):
            raise RuntimeError("Server failed to start")

    def stop(self):
        self.server.shutdown()
        if self._thread and self._thread.is_alive():
            self._thread.join(timeout=5.0)


@pytest.fixture
def server_config() -> ServerConfig:
    """Test server configuration on an OS-assigned port."""
    return ServerConfig(
        host="127.0.0.1",
        port=0,
        timeout=1.0,
        log_level="WARNING",
    )


@pytest.fixture
def running_server(server_config: ServerConfig, store: UserStore) -> Generator[RunningServer, None, None]:
    """A live server for socket-level tests, torn down afterwards."""
    test_srv = RunningServer(UserServer(server_config, store=store))
    test_srv.start()

    yield test_srv

    test_srv.stop()
