from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: User.

    Note: Plain data object (no DB access code). ``created_at`` is epoch milliseconds.
    """

    user_id: str
    name: str
    username: str
    password_hash: str
    role: Role
    created_at: int
