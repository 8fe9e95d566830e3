"""
The users resource: an in-memory store, its route handlers and the route
table that binds them.
"""

from .store import User, UserStore, SEED_USERS, DEFAULT_ROLE
from .handlers import UserHandler
from .routes import build_router

__all__ = [
    "User",
    "UserStore",
    "SEED_USERS",
    "DEFAULT_ROLE",
    "UserHandler",
    "build_router",
]
