"""
=============================================================================
CLIENT CONNECTION
=============================================================================

One accepted TCP connection, carrying exactly one request and one
response.

=============================================================================
ONE REQUEST PER CONNECTION
=============================================================================

Every response says ``Connection: close``, so the lifecycle is short:

    ┌─────────────────────────────────────────────────────────────────────┐
    │                                                                      │
    │   accept() ──► rfile ──► parse ──► route ──► sendall() ──► close()  │
    │                  │                                                   │
    │                  └── socket.makefile("rb"), a buffered stream the   │
    │                      parser can readline() from                     │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

No keep-alive, no pipelining: whatever the client sends after the first
request is drained and discarded at close time.

=============================================================================
TIMEOUTS
=============================================================================

The read timeout is set on the socket itself, so it applies to every
readline() and read() the parser makes. When it fires, the stream raises
``socket.timeout`` (a subclass of TimeoutError) and the server answers 408.

=============================================================================
"""

import socket
import time
import logging
from dataclasses import dataclass, field
from typing import BinaryIO, Optional
import uuid


logger = logging.getLogger(__name__)


@dataclass
class Connection:
    """
    A client socket plus a buffered reader over it.

    Attributes:
        socket: The client socket returned by accept().
        address: Client's (ip, port) tuple.
        timeout: Read timeout in seconds, None to block forever.
        id: Short random id used to correlate log lines.
        created_at: When the connection was accepted.
    """

    socket: socket.socket
    address: tuple
    timeout: Optional[float] = 30.0

    id: str = field(default_factory=lambda: str(uuid.uuid4())[:8])
    created_at: float = field(default_factory=time.time)

    _rfile: Optional[BinaryIO] = field(default=None, repr=False)
    _closed: bool = field(default=False, repr=False)

    def __post_init__(self):
        # The listening socket polls with a 1s timeout; accepted sockets
        # must not inherit that.
        self.socket.settimeout(self.timeout)

    @property
    def client_ip(self) -> str:
        return self.address[0]

    @property
    def age(self) -> float:
        """Seconds since accept()."""
        return time.time() - self.created_at

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def rfile(self) -> BinaryIO:
        """Buffered binary reader over the socket, created on first use."""
        if self._rfile is None:
            self._rfile = self.socket.makefile("rb")
        return self._rfile

    def send_response(self, data: bytes) -> bool:
        """
        Write the whole response.

        sendall() keeps calling send() until every byte is out; a bare
        send() may stop halfway when the kernel buffer is full.

        Returns:
            True if sent, False if the client had already gone away.
        """
        try:
            self.socket.sendall(data)
            return True
        except OSError as e:
            logger.warning(f"[{self.id}] Send failed: {e}")
            return False

    def close(self):
        """
        Close the connection.

            1. shutdown(SHUT_WR)   send FIN: "no more data from us"
            2. drain               discard anything the client still sends
            3. close()             release the file descriptor

        Safe to call more than once.
        """
        if self._closed:
            return
        self._closed = True

        try:
            self.socket.shutdown(socket.SHUT_WR)
        except OSError:
            pass  # peer already gone

        try:
            self.socket.settimeout(0.5)
            while self.socket.recv(1024):
                pass
        except OSError:
            pass  # includes socket.timeout

        if self._rfile is not None:
            self._rfile.close()

        self.socket.close()
        logger.debug(f"[{self.id}] Connection closed after {self.age:.3f}s")

    def __enter__(self):
        """
        Context manager entry.

            with conn:
                request = parser.parse_stream(conn.rfile)
                conn.send_response(response.to_bytes())
            # closed here, even if parsing raised
        """
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
