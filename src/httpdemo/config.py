"""
=============================================================================
CONFIGURATION
=============================================================================

Settings for both halves of the demo: the toy server and the client
examples.

=============================================================================
CONFIGURATION SOURCES
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                    CONFIGURATION HIERARCHY                          │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   Priority (highest to lowest):                                     │
    │                                                                      │
    │   1. Command-line arguments                                         │
    │      └── python -m httpdemo serve --port 4000                       │
    │                                                                      │
    │   2. Environment variables                                          │
    │      └── HTTP_PORT=4000 python -m httpdemo serve                    │
    │                                                                      │
    │   3. Default values (in these dataclasses)                          │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

The CLI starts from ``from_env()`` and overwrites only the flags the user
actually passed, which gives exactly that order.

=============================================================================
"""

import os
from dataclasses import dataclass
from typing import Optional


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _optional_timeout(raw: str) -> Optional[float]:
    """"none" (any case) or "0" disables the timeout."""
    if raw.strip().lower() in ("none", "0", "0.0"):
        return None
    return float(raw)


@dataclass
class ServerConfig:
    """
    Configuration for the toy user server.

    =========================================================================
    CONFIGURATION GROUPS
    =========================================================================

    NETWORK SETTINGS
    - host, port, backlog, timeout

    REQUEST LIMITS
    - max_line_size, max_headers, max_body_size

    LOGGING
    - log_level

    =========================================================================
    """

    # ─────────────────────────────────────────────────────────────────────
    # NETWORK SETTINGS
    # ─────────────────────────────────────────────────────────────────────

    host: str = "127.0.0.1"
    """
    The IP address to bind to.
    - "127.0.0.1" - Localhost only
    - "0.0.0.0" - All network interfaces
    """

    port: int = 3000
    """
    The port number to listen on. 0 asks the OS for any free port
    (the tests do this); the bound port is then on SocketServer.address.
    """

    backlog: int = 128
    """
    Maximum number of queued connections. Connections wait here while
    the server is busy with the current one.
    """

    timeout: Optional[float] = 30.0
    """
    Read timeout in seconds for an accepted connection.
    A client that hasn't finished its request by then gets a 408.
    None = wait forever.
    """

    # ─────────────────────────────────────────────────────────────────────
    # REQUEST LIMITS
    # ─────────────────────────────────────────────────────────────────────

    max_line_size: int = 8192
    """Longest request line or header line accepted, in bytes (else 400)."""

    max_headers: int = 100
    """Most header lines accepted per request (else 431)."""

    max_body_size: int = 10 * 1024 * 1024  # 10 MB
    """Largest Content-Length accepted (else 413)."""

    # ─────────────────────────────────────────────────────────────────────
    # LOGGING
    # ─────────────────────────────────────────────────────────────────────

    log_level: str = "INFO"
    """
    Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
    DEBUG adds one line per accepted and closed connection.
    """

    @classmethod
    def from_env(cls) -> "ServerConfig":
        """
        Create configuration from environment variables.

        =====================================================================
        ENVIRONMENT VARIABLES
        =====================================================================

        HTTP_HOST       Server host (default: 127.0.0.1)
        HTTP_PORT       Server port (default: 3000)
        HTTP_TIMEOUT    Read timeout in seconds, "none" to disable (default: 30)
        HTTP_LOG_LEVEL  Logging level (default: INFO)

        =====================================================================
        """
        return cls(
            host=os.getenv("HTTP_HOST", "127.0.0.1"),
            port=int(os.getenv("HTTP_PORT", "3000")),
            timeout=_optional_timeout(os.getenv("HTTP_TIMEOUT", "30")),
            log_level=os.getenv("HTTP_LOG_LEVEL", "INFO"),
        )

    def validate(self) -> None:
        """
        Validate configuration values.

        Called once at startup so a typo in HTTP_PORT fails immediately
        instead of at bind time with a less helpful error.
        """
        if not 0 <= self.port < 65536:
            raise ValueError(f"Invalid port: {self.port}. Must be 0-65535.")

        if self.backlog < 1:
            raise ValueError("backlog must be >= 1")

        if self.timeout is not None and self.timeout <= 0:
            raise ValueError("timeout must be > 0")

        if self.max_line_size < 64:
            raise ValueError("max_line_size must be >= 64")

        if self.max_headers < 1:
            raise ValueError("max_headers must be >= 1")

        if self.max_body_size < 0:
            raise ValueError("max_body_size must be >= 0")

        if self.log_level.upper() not in LOG_LEVELS:
            raise ValueError(f"Invalid log level: {self.log_level}")


@dataclass
class ClientConfig:
    """Configuration for the client examples."""

    base_url: str = "https://jsonplaceholder.typicode.com"
    """
    Root of the JSON API the examples talk to. The examples append
    "/users" and "/users/1". Point it at the toy server with
    "http://127.0.0.1:3000/api".
    """

    timeout: float = 10.0
    """Per-request timeout in seconds, passed straight to requests."""

    user_agent: str = "Python HTTP Client"
    """Sent as User-Agent by the GET example."""

    @classmethod
    def from_env(cls) -> "ClientConfig":
        """
        HTTP_CLIENT_BASE_URL  API root (default: https://jsonplaceholder.typicode.com)
        HTTP_CLIENT_TIMEOUT   Request timeout in seconds (default: 10)
        """
        return cls(
            base_url=os.getenv("HTTP_CLIENT_BASE_URL", cls.base_url),
            timeout=float(os.getenv("HTTP_CLIENT_TIMEOUT", "10")),
        )

    def validate(self) -> None:
        if not self.base_url.startswith(("http://", "https://")):
            raise ValueError(f"base_url must start with http:// or https://: {self.base_url}")

        if self.timeout <= 0:
            raise ValueError("timeout must be > 0")

    def url(self, path: str) -> str:
        """Join ``path`` onto base_url without doubling the slash."""
        return self.base_url.rstrip("/") + "/" + path.lstrip("/")
