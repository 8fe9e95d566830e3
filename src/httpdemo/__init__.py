"""
=============================================================================
HTTPDEMO - HTTP Fundamentals, Both Sides of the Wire
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                                                                      │
    │   PART 1: CLIENT                      PART 2: SERVER                │
    │   ───────────────                     ───────────────                │
    │   GET / POST / PUT / DELETE           A toy HTTP/1.1 server on raw  │
    │   against a JSON REST API,            sockets serving an in-memory  │
    │   printing what goes out and          users resource, one request   │
    │   what comes back (requests)          per connection                │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
PACKAGE STRUCTURE
=============================================================================

    httpdemo/
    ├── __init__.py          # This file - package exports
    ├── __main__.py          # CLI entry point (python -m httpdemo)
    ├── config.py            # ServerConfig / ClientConfig dataclasses
    ├── server.py            # UserServer: wires everything together
    ├── client/
    │   └── examples.py      # The four request examples
    ├── core/
    │   ├── socket_server.py # Listening socket + accept loop
    │   └── connection.py    # Client socket wrapper
    ├── http/
    │   ├── request.py       # Request parsing
    │   ├── response.py      # Response building
    │   ├── router.py        # Route table with typed parameters
    │   └── status_codes.py  # HTTPStatus enum
    └── users/
        ├── store.py         # In-memory UserStore
        ├── handlers.py      # The five route handlers
        └── routes.py        # build_router()

=============================================================================
QUICK START
=============================================================================

    from httpdemo import UserServer, ServerConfig

    UserServer(ServerConfig(port=3000)).run()

Or from a shell:

    python -m httpdemo serve --port 3000
    python -m httpdemo client --base-url http://127.0.0.1:3000/api

=============================================================================
"""

__version__ = "1.0.0"

from .config import ServerConfig, ClientConfig
from .server import UserServer
from .users import User, UserStore
from .client import run_client_examples

__all__ = [
    "ServerConfig",
    "ClientConfig",
    "UserServer",
    "User",
    "UserStore",
    "run_client_examples",
    "__version__",
]
