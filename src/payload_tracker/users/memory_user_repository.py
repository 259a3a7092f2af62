from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import Role
from ..database.memory_store import MemoryStore
from ..database.schema_map import USERS, model_attrs
from .model import User
from .repository import UserRepository


class InMemoryUserRepository(UserRepository):
    def __init__(self, store: MemoryStore):
        self._store = store

    def get_by_username(self, username: str) -> Optional[User]:
        row = self._store.select_one(USERS.table, username=username)
        return User(**USERS.from_row(row)) if row else None

    def create_user(self, user: User) -> None:
        self._store.insert(USERS.table, USERS.to_row(model_attrs(user)))

    def list_by_role(self, role: Role) -> Sequence[User]:
        rows = self._store.select(USERS.table, role=role.value)
        return [User(**USERS.from_row(r)) for r in rows]
