from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Mapping, Optional

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.datetime_utils import now_millis
from ..common.ids import new_id
from ..common.validators import require_non_empty
from ..core.constants import ADMIN_NAME, ADMIN_PASSWORD, ADMIN_USERNAME
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, DuplicateUsernameError, StorageError, ValidationError
from .model import User
from .repository import UserRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionUser:
    """What we store into the Flask session after login.

    Handlers receive it explicitly from the route guards instead of reading
    global state.
    """

    user_id: str
    name: str
    username: str
    role: Role

    @classmethod
    def from_user(cls, user: User) -> "SessionUser":
        return cls(user_id=user.user_id, name=user.name, username=user.username, role=user.role)

    @classmethod
    def from_session(cls, data: Optional[Mapping]) -> Optional["SessionUser"]:
        if not data or "user_id" not in data:
            return None
        try:
            role = Role(data.get("role"))
        except ValueError:
            return None
        return cls(user_id=data["user_id"], name=data.get("name", ""), username=data.get("username", ""), role=role)

    def to_session(self) -> dict:
        return {"user_id": self.user_id, "name": self.name, "username": self.username, "role": self.role.value}


class AuthService:
    """Use cases: login, self-registration and the startup admin seed."""

    def __init__(
        self,
        users: UserRepository,
        *,
        id_factory: Callable[[], str] = new_id,
        clock: Callable[[], int] = now_millis,
    ):
        self._users = users
        self._new_id = id_factory
        self._clock = clock

    def authenticate(self, username: str, password: str, role: Role) -> Optional[User]:
        """Return the user matching username, password and role, else ``None``."""
        user = self._users.get_by_username((username or "").strip())
        if not user or user.role != role:
            return None

        try:
            ok = check_password_hash(user.password_hash, password or "")
        except ValueError:
            # e.g. hashes written by hand into the table
            ok = False

        return user if ok else None

    def login(self, username: str, password: str, role: Role) -> SessionUser:
        user = self.authenticate(username, password, role)
        if not user:
            raise AuthenticationError("Credenciais inválidas.")
        logger.info("User %s logged in as %s", user.username, user.role.value)
        return SessionUser.from_user(user)

    def register_user(self, name: str, username: str, password: str) -> User:
        name = require_non_empty(name, "Preencha todos os campos")
        username = require_non_empty(username, "Preencha todos os campos")
        if not password:
            raise ValidationError("Preencha todos os campos")

        if self._users.get_by_username(username):
            raise DuplicateUsernameError("Usuário já existe.")

        user = User(
            user_id=self._new_id(),
            name=name,
            username=username,
            password_hash=generate_password_hash(password),
            role=Role.DRIVER,
            created_at=self._clock(),
        )
        self._users.create_user(user)
        logger.info("Registered driver %s", username)
        return user

    def initialize_storage(self) -> None:
        """Create the seed admin once. Never raises.

        The app must stay usable while the store is unreachable or its tables
        have not been provisioned yet, so every failure is only logged.
        """
        try:
            if self._users.get_by_username(ADMIN_USERNAME):
                return
            self._users.create_user(
                User(
                    user_id=self._new_id(),
                    name=ADMIN_NAME,
                    username=ADMIN_USERNAME,
                    password_hash=generate_password_hash(ADMIN_PASSWORD),
                    role=Role.ADMIN,
                    created_at=self._clock(),
                )
            )
            logger.info("Seed admin user created")
        except Exception:
            logger.exception("Storage initialization failed; continuing without seed admin")


class UserService:
    """Use cases: admin views over drivers."""

    def __init__(self, users: UserRepository):
        self._users = users

    def get_all_drivers(self) -> list[User]:
        try:
            return list(self._users.list_by_role(Role.DRIVER))
        except StorageError:
            logger.exception("Could not load drivers")
            return []

    def search_drivers(self, term: Optional[str] = None) -> list[User]:
        drivers = self.get_all_drivers()
        term = (term or "").strip().lower()
        if not term:
            return drivers
        return [d for d in drivers if term in d.name.lower() or term in d.username.lower()]
