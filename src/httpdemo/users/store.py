"""
=============================================================================
IN-MEMORY USER STORE
=============================================================================

The users resource the toy server serves. It lives exactly as long as the
server object that owns it; nothing is ever written to disk.

    ┌─────────────────────────────────────────────────────────────────────┐
    │                         UserStore                                   │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   _users (insertion ordered)            next_id                     │
    │   ┌────┬──────────────────────────┐     ┌───┐                       │
    │   │ 1  │ Kat Perreira, engineer   │     │ 3 │  only ever goes up    │
    │   │ 2  │ Jane Doe, designer       │     └───┘                       │
    │   └────┴──────────────────────────┘                                 │
    │                                                                      │
    │   create()  →  id = next_id; next_id += 1                           │
    │   delete()  →  removes the entry, next_id untouched                 │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

Deleted ids are never handed out again: create, delete, create gives
ids 3 and 4, not 3 and 3.

=============================================================================
"""

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional
import logging


logger = logging.getLogger(__name__)


DEFAULT_ROLE = "user"


def local_now() -> datetime:
    """Current local time, timezone-aware so isoformat() carries the offset."""
    return datetime.now().astimezone()


@dataclass
class User:
    """
    One user record.

    Attributes:
        id:         Assigned by the store, never reused.
        name:       As submitted; None when the client left it out.
        email:      As submitted; None when the client left it out.
        role:       Defaults to "user" on creation.
        created_at: ISO-8601 with UTC offset, e.g. "2026-10-18T14:03:12+02:00".
                    Seed records have none.
    """

    id: int
    name: Optional[str]
    email: Optional[str]
    role: str = DEFAULT_ROLE
    created_at: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """JSON shape of the record. created_at is omitted, not null, when unset."""
        data = {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "role": self.role,
        }
        if self.created_at is not None:
            data["created_at"] = self.created_at
        return data


SEED_USERS = (
    User(id=1, name="Kat Perreira", email="kat@example.com", role="engineer"),
    User(id=2, name="Jane Doe", email="jane@example.com", role="designer"),
)


class UserStore:
    """
    Mapping of id → User plus the next id to hand out.

    Usage:
        store = UserStore()
        user = store.create("Zoë", "zoe@example.com")
        store.get(user.id)
        store.delete(user.id)

    Not thread-safe. The server handles one connection at a time, so
    nothing ever touches the store concurrently.
    """

    def __init__(
        self,
        seed: bool = True,
        clock: Callable[[], datetime] = local_now,
    ):
        """
        Args:
            seed: Start with the two seed users (ids 1 and 2).
            clock: Returns the creation timestamp; tests pin it.
        """
        self._users: Dict[int, User] = {}
        self._clock = clock
        self.next_id = 1

        if seed:
            for user in SEED_USERS:
                self._users[user.id] = replace(user)
            self.next_id = max(self._users) + 1

    def __len__(self) -> int:
        return len(self._users)

    def __contains__(self, user_id: int) -> bool:
        return user_id in self._users

    def all(self) -> List[User]:
        """Every user, in insertion order."""
        return list(self._users.values())

    def get(self, user_id: int) -> Optional[User]:
        return self._users.get(user_id)

    def create(
        self,
        name: Optional[str],
        email: Optional[str],
        role: Optional[str] = None,
    ) -> User:
        """
        Add a user under the next id.

        A role of None (left out, or sent as null) or False becomes "user".
        Any other value, "" and 0 included, is kept as given.
        Nothing else is validated: name and email are stored as given.
        """
        user = User(
            id=self.next_id,
            name=name,
            email=email,
            role=DEFAULT_ROLE if role is None or role is False else role,
            created_at=self._clock().isoformat(timespec="seconds"),
        )
        self._users[user.id] = user
        self.next_id += 1

        logger.debug(f"Created user {user.id}")
        return user

    def delete(self, user_id: int) -> bool:
        """Remove a user. False if there was no such id."""
        if self._users.pop(user_id, None) is None:
            return False

        logger.debug(f"Deleted user {user_id}")
        return True
