"""
=============================================================================
CORE SERVER COMPONENTS
=============================================================================

The networking plumbing underneath the HTTP layer:

    ┌─────────────────────────────────────────────────────────────────────┐
    │                         SOCKET SERVER                               │
    │  • Creates, binds and listens on the TCP socket                     │
    │  • Runs the accept() loop on the calling thread                     │
    │  • Shuts down on SIGTERM / SIGINT                                   │
    └─────────────────────────────────────────────────────────────────────┘
                                    │
                                    │ one connection at a time
                                    ▼
    ┌─────────────────────────────────────────────────────────────────────┐
    │                          CONNECTION                                 │
    │  • Wraps the client socket with a buffered reader                   │
    │  • Applies the read timeout                                         │
    │  • Sends the response and closes                                    │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
"""

from .socket_server import SocketServer
from .connection import Connection

__all__ = [
    "SocketServer",     # TCP listener and accept loop
    "Connection",       # Client socket wrapper
]
