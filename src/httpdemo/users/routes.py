"""
Route table for the users API.

Order matters only in principle (first match wins); the id routes and the
collection routes can't both match the same path.
"""

from ..http.router import Router
from .handlers import UserHandler
from .store import UserStore


def build_router(store: UserStore) -> Router:
    """
    Wire a UserHandler for ``store`` into a fresh Router.

        GET     /api/users/:id<int>   → get_user
        DELETE  /api/users/:id<int>   → delete_user
        GET     /api/users            → list_users
        POST    /api/users            → create_user
        *       *                     → endpoint_not_found (404)
    """
    handler = UserHandler(store)
    router = Router(fallback=handler.endpoint_not_found)

    router.get("/api/users/:id<int>", name="get_user")(handler.get_user)
    router.delete("/api/users/:id<int>", name="delete_user")(handler.delete_user)
    router.get("/api/users", name="list_users")(handler.list_users)
    router.post("/api/users", name="create_user")(handler.create_user)

    return router
