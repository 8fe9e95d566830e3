"""
=============================================================================
TCP SOCKET SERVER
=============================================================================

The listening socket and the accept loop. Knows nothing about HTTP: it
hands each accepted client to a callback as a Connection and waits for
the callback to return before accepting the next one.

=============================================================================
SOCKET LIFECYCLE (Server Side)
=============================================================================

    1. socket()    Create a TCP socket
    2. bind()      Associate it with IP:PORT
    3. listen()    Let the OS queue incoming connections (backlog)
    4. accept()    Take the next queued connection → new client socket
    5. close()     Release the listening socket on shutdown

=============================================================================
ONE CONNECTION AT A TIME
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                                                                      │
    │   while running:                                                    │
    │       accept()        ← waits at most 1 second                      │
    │       handler(conn)   ← runs to completion, nothing else accepted   │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

A slow client delays every client queued behind it. That is the price of
not needing any locking around the user store.

=============================================================================
GRACEFUL SHUTDOWN
=============================================================================

accept() is given a one second timeout. On each timeout the loop checks
the running flag, so shutdown() from another thread takes effect within
a second.

A signal has to be faster than that. A connection in progress may be
blocked in recv() for up to the read timeout (forever with timeout=None),
and a recv() interrupted by a signal is simply restarted once the handler
returns. So SIGINT (Ctrl+C) and SIGTERM stop the loop *and* raise
KeyboardInterrupt, which unwinds out of whatever the main thread is
blocked in:

    signal ──► shutdown() ──► raise KeyboardInterrupt
                                   │
                                   ├── connection closed (with conn:)
                                   ├── listening socket closed (finally)
                                   └── caught by UserServer.run()

Python only allows installing signal handlers on the main thread. A
server started from a test thread skips that step and is stopped by
calling shutdown() directly.

=============================================================================
"""

import socket
import signal
import logging
import threading
from typing import Optional, Callable, Tuple

from ..config import ServerConfig
from .connection import Connection


logger = logging.getLogger(__name__)


ACCEPT_POLL_INTERVAL = 1.0


class SocketServer:
    """
    Low-level TCP socket server.

    Usage:
        def handle_connection(conn: Connection):
            with conn:
                ...

        server = SocketServer(config)
        server.start(handle_connection)  # Blocks until shutdown
    """

    def __init__(self, config: ServerConfig):
        """
        Args:
            config: host, port, backlog and the per-connection timeout.

        The socket is not created until start().
        """
        self.config = config

        self._socket: Optional[socket.socket] = None
        self._running = False

        # Set once the socket is listening, so another thread can wait for
        # it before connecting (and read the real port when port=0).
        self.ready = threading.Event()

        self._original_handlers: dict = {}

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def address(self) -> Tuple[str, int]:
        """The bound (host, port); the configured one before start()."""
        if self._socket is not None:
            host, port = self._socket.getsockname()[:2]
            return (host, port)
        return (self.config.host, self.config.port)

    def _create_socket(self) -> socket.socket:
        sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)

        # SO_REUSEADDR: restart on the same port without waiting out
        # TIME_WAIT from the previous run.
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)

        # TCP_NODELAY: send small responses immediately.
        sock.setsockopt(socket.IPPROTO_TCP, socket.TCP_NODELAY, 1)

        sock.settimeout(ACCEPT_POLL_INTERVAL)
        return sock

    def _setup_signals(self):
        """
        Route SIGTERM and SIGINT to shutdown() plus KeyboardInterrupt.

        SIGTERM (15): kill <pid>, docker stop, systemd stop
        SIGINT  (2):  Ctrl+C in the terminal
        """
        if threading.current_thread() is not threading.main_thread():
            logger.debug("Not on the main thread, leaving signal handlers alone")
            return

        def shutdown_handler(signum, frame):
            signal_name = signal.Signals(signum).name
            logger.info(f"Received {signal_name}, initiating shutdown...")
            self.shutdown()
            raise KeyboardInterrupt

        self._original_handlers[signal.SIGTERM] = signal.signal(signal.SIGTERM, shutdown_handler)
        self._original_handlers[signal.SIGINT] = signal.signal(signal.SIGINT, shutdown_handler)

    def _restore_signals(self):
        for sig, handler in self._original_handlers.items():
            signal.signal(sig, handler)
        self._original_handlers.clear()

    def start(
        self,
        connection_handler: Callable[[Connection], None],
        on_listen: Optional[Callable[[], None]] = None,
    ):
        """
        Bind, listen and run the accept loop. Blocks until shutdown().

        Args:
            connection_handler: Called with each accepted Connection, on
                                this thread. It owns closing it.
            on_listen: Called once the socket is listening, before the
                       first accept (the startup banner goes here).

        Raises:
            OSError: The address could not be bound (port in use,
                     privileged port, unknown host).
        """
        self._socket = self._create_socket()

        try:
            self._socket.bind((self.config.host, self.config.port))
        except OSError as e:
            logger.error(f"Failed to bind to {self.config.host}:{self.config.port}: {e}")
            self._socket.close()
            self._socket = None
            raise

        self._socket.listen(self.config.backlog)

        self._running = True
        self._setup_signals()

        host, port = self.address
        logger.info(f"Server listening on {host}:{port}")

        try:
            if on_listen is not None:
                on_listen()
            self.ready.set()
            self._accept_loop(connection_handler)
        finally:
            self._cleanup()

    def _accept_loop(self, connection_handler: Callable[[Connection], None]):
        while self._running:
            try:
                client_socket, client_address = self._socket.accept()
            except socket.timeout:
                # Normal: gives us a chance to look at self._running.
                continue
            except OSError as e:
                if self._running:
                    logger.error(f"Accept error: {e}")
                break

            logger.debug(f"Accepted connection from {client_address[0]}:{client_address[1]}")

            conn = Connection(
                socket=client_socket,
                address=client_address,
                timeout=self.config.timeout,
            )
            connection_handler(conn)

    def shutdown(self):
        """
        Stop the accept loop (within ACCEPT_POLL_INTERVAL).

        Safe to call from a signal handler, from another thread, and more
        than once.
        """
        if self._running:
            logger.info("Shutting down socket server...")
        self._running = False

    def _cleanup(self):
        self._restore_signals()

        if self._socket:
            self._socket.close()
            self._socket = None

        self._running = False
        self.ready.clear()
        logger.info("Socket server stopped")
