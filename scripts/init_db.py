from __future__ import annotations

import importlib

from payload_tracker.config import get_settings_module
from payload_tracker.container import build_container
from payload_tracker.database.bootstrap import apply_schema, list_tables


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    apply_schema(db_config)
    container = build_container(backend="mysql", db_config=db_config)
    container.auth_service.initialize_storage()

    tables = list_tables(db_config)
    print(
        "OK: schema ready -> "
        f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')} "
        f"(tables={len(tables)})"
    )


if __name__ == "__main__":
    main()
