"""
=============================================================================
USER SERVER
=============================================================================

Ties the pieces together into the toy HTTP server for the users API.

=============================================================================
ARCHITECTURE OVERVIEW
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                                                                      │
    │                        ┌─────────────────┐                          │
    │                        │   UserServer    │                          │
    │                        │ (Orchestrator)  │                          │
    │                        └────────┬────────┘                          │
    │                                 │                                    │
    │            ┌────────────────────┼────────────────────┐              │
    │            ▼                    ▼                    ▼              │
    │    ┌──────────────┐    ┌──────────────┐    ┌──────────────┐        │
    │    │ SocketServer │    │RequestParser │    │    Router    │        │
    │    │ (Networking) │    │  (Parsing)   │    │ (Dispatching)│        │
    │    └──────┬───────┘    └──────────────┘    └──────┬───────┘        │
    │           ▼                                       ▼                 │
    │    ┌──────────────┐                        ┌──────────────┐        │
    │    │  Connection  │                        │ UserHandler  │        │
    │    └──────────────┘                        │  + UserStore │        │
    │                                            └──────────────┘        │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
ONE CONNECTION, START TO FINISH
=============================================================================

    1. SocketServer accepts, wraps the socket in a Connection
    2. RequestParser reads request line, headers, body from conn.rfile
    3. Router picks the handler; the handler reads/writes the UserStore
    4. The response is serialized and sendall()'d
    5. The connection is closed (every response is Connection: close)

Anything that goes wrong stays inside that one connection:

    ┌───────────────────────────┬─────────────────────────────────────────┐
    │ What happened             │ What the client gets                    │
    ├───────────────────────────┼─────────────────────────────────────────┤
    │ Peer sent nothing         │ Nothing, connection closed              │
    │ Request unparseable       │ 400 / 413 / 431 {"error": reason}       │
    │ Read timed out            │ 408 {"error": "Request timeout"}        │
    │ Handler raised            │ 500 {"error": "Internal Server Error"}   │
    │ Socket error              │ Nothing (it's gone), logged             │
    └───────────────────────────┴─────────────────────────────────────────┘

The accept loop carries on to the next connection in every case.

=============================================================================
"""

import logging
import socket
from typing import Optional, Tuple

from .config import ServerConfig
from .core import SocketServer, Connection
from .http import (
    HTTPParseError,
    HTTPResponse,
    RequestParser,
    Router,
    error_response,
    internal_error,
    request_timeout,
)
from .users import UserStore, build_router


logger = logging.getLogger(__name__)


class UserServer:
    """
    The toy users API server.

    Usage:
        server = UserServer(ServerConfig(port=3000))
        server.run()  # blocks until Ctrl+C

    The store is created here (or passed in) and owned by this object, so
    two servers never share users.
    """

    def __init__(
        self,
        config: Optional[ServerConfig] = None,
        store: Optional[UserStore] = None,
    ):
        self.config = config or ServerConfig()
        self.config.validate()

        self.store = store if store is not None else UserStore()
        self.router: Router = build_router(self.store)
        self._parser = RequestParser(
            max_line_size=self.config.max_line_size,
            max_headers=self.config.max_headers,
            max_body_size=self.config.max_body_size,
        )
        self._socket_server = SocketServer(self.config)

    @property
    def address(self) -> Tuple[str, int]:
        """Bound (host, port) once running. Resolves port 0 to the real port."""
        return self._socket_server.address

    @property
    def is_running(self) -> bool:
        return self._socket_server.is_running

    def wait_until_ready(self, timeout: Optional[float] = None) -> bool:
        """Block until the socket is listening (for servers run on a thread)."""
        return self._socket_server.ready.wait(timeout)

    # =========================================================================
    # SERVER LIFECYCLE
    # =========================================================================

    def run(self, setup_logging: bool = True):
        """
        Start the server (blocking).

        Args:
            setup_logging: Configure the root logger from config.log_level.
                           Tests turn this off and let pytest own logging.
        """
        if setup_logging:
            self._setup_logging()

        try:
            self._socket_server.start(
                self._handle_connection,
                on_listen=self.print_startup_banner,
            )
        except KeyboardInterrupt:
            logger.info("Interrupted, stopping")

        print("\n\n👋 Server shutting down...")

    def shutdown(self):
        """Stop accepting; run() returns within about a second."""
        self._socket_server.shutdown()

    def print_startup_banner(self):
        host, port = self.address
        base = f"http://{host}:{port}"

        print(f"\n🚀 Server started on {base}")
        print("Try these commands in another terminal:")
        print(f"  curl {base}/api/users")
        print(f"  curl {base}/api/users/1")
        print(
            f"  curl -X POST {base}/api/users -H 'Content-Type: application/json' "
            "-d '{\"name\":\"New User\",\"email\":\"new@example.com\"}'"
        )
        print(f"  curl -X DELETE {base}/api/users/2")
        print("\nPress Ctrl+C to stop the server\n")

        if logger.isEnabledFor(logging.DEBUG):
            self.router.print_routes()

    def _setup_logging(self):
        level = getattr(logging, self.config.log_level.upper(), logging.INFO)

        logging.basicConfig(
            level=level,
            format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

        logging.getLogger("httpdemo").setLevel(level)

    # =========================================================================
    # REQUEST HANDLING
    # =========================================================================

    def _handle_connection(self, conn: Connection):
        """
        Serve exactly one request on ``conn``, then close it.

        Called by SocketServer on the accept thread. Never raises: a
        failure here must not take the accept loop down with it.
        """
        with conn:
            try:
                response = self._process(conn)
                if response is not None:
                    conn.send_response(response.to_bytes())
            except Exception as e:
                logger.exception(f"[{conn.id}] Connection error: {e}")

    def _process(self, conn: Connection) -> Optional[HTTPResponse]:
        """
        Read, parse and route one request.

        Returns:
            The response to send, or None when there is nothing to answer
            (peer sent nothing, or the socket broke while reading).
        """
        # ─────────────────────────────────────────────────────────────────
        # READ + PARSE
        # ─────────────────────────────────────────────────────────────────
        try:
            request = self._parser.parse_stream(conn.rfile, conn.address)
        except HTTPParseError as e:
            logger.warning(f"[{conn.id}] Bad request from {conn.client_ip}: {e}")
            return error_response(e.status_code, str(e))
        except socket.timeout:
            logger.warning(f"[{conn.id}] Read timed out after {conn.timeout}s")
            return request_timeout()
        except OSError as e:
            logger.warning(f"[{conn.id}] Read failed: {e}")
            return None

        if request is None:
            logger.debug(f"[{conn.id}] Client closed without sending a request")
            return None

        # ─────────────────────────────────────────────────────────────────
        # ROUTE
        # ─────────────────────────────────────────────────────────────────
        try:
            response = self.router.handle(request)
        except Exception as e:
            logger.exception(f"[{conn.id}] Handler error: {e}")
            response = internal_error()

        log = logger.warning if response.status.is_server_error else logger.info
        log(f"{request.method} {request.path} -> {response.status}")
        return response
