from __future__ import annotations

from typing import Optional, Sequence

import mysql.connector

from ..core.enums import Role
from ..core.exceptions import DuplicateUsernameError, StorageError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from ..database.schema_map import USERS, model_attrs
from .model import User
from .repository import UserRepository


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_username(self, username: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {USERS.select_list()} FROM users WHERE username=%s LIMIT 1",
                (username,),
            )
            row = fetchone(cur)
            if not row:
                return None
            return User(**USERS.from_row(row))

    def create_user(self, user: User) -> None:
        row = USERS.to_row(model_attrs(user))
        columns = ", ".join(f"`{c}`" for c in row)
        placeholders = ", ".join(["%s"] * len(row))
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    f"INSERT INTO users({columns}) VALUES({placeholders})",
                    tuple(row.values()),
                )
        except StorageError as exc:
            # Lost a race with another registration for the same username.
            if isinstance(exc.__cause__, mysql.connector.IntegrityError):
                raise DuplicateUsernameError("Usuário já existe.") from exc
            raise

    def list_by_role(self, role: Role) -> Sequence[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {USERS.select_list()} FROM users WHERE role=%s ORDER BY created_at",
                (role.value,),
            )
            return [User(**USERS.from_row(r)) for r in fetchall(cur)]
