from __future__ import annotations

import uuid


def new_id() -> str:
    """Random UUID4 string used as primary key for users and records."""
    return str(uuid.uuid4())
