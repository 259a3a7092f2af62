from __future__ import annotations

import importlib
import logging
import logging.config
from concurrent.futures import ThreadPoolExecutor, TimeoutError as FutureTimeout
from typing import Optional

import mysql.connector
from dotenv import load_dotenv
from flask import Flask

from .config import get_settings_module
from .container import Container, build_container
from .core.constants import DEFAULT_INIT_TIMEOUT_SECONDS
from .core.exceptions import StorageError
from .database.bootstrap import apply_schema, list_tables
from .records.controller import register as register_records
from .reporting.controller import register as register_reporting
from .users.controller import register as register_users

logger = logging.getLogger(__name__)


def initialize_with_timeout(container: Container, timeout: float) -> bool:
    """Seed the admin user, giving up waiting after ``timeout`` seconds.

    The seed keeps running in its worker thread when the wait times out; its
    result is simply ignored. Returns True when it finished in time.
    """
    executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="storage-init")
    try:
        future = executor.submit(container.auth_service.initialize_storage)
        try:
            future.result(timeout=timeout)
            return True
        except FutureTimeout:
            logger.warning("Storage initialization still running after %.1fs; starting anyway", timeout)
            return False
    finally:
        executor.shutdown(wait=False)


def create_app(settings_module: Optional[str] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    logging.config.dictConfig(getattr(settings, "LOGGING"))

    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    backend = str(getattr(settings, "STORAGE_BACKEND", "mysql")).lower()
    db_config = getattr(settings, "DB_CONFIG", {})
    max_photo_bytes = int(getattr(settings, "MAX_PHOTO_BYTES", 0)) or None
    if max_photo_bytes:
        # Room for several photos plus the form fields in one request.
        app.config["MAX_CONTENT_LENGTH"] = max_photo_bytes * 10

    logger.info(
        "settings=%s backend=%s db=%s@%s:%s/%s",
        settings_module,
        backend,
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
    )

    if backend == "mysql" and bool(getattr(settings, "AUTO_INIT_DB", False)):
        try:
            apply_schema(db_config)
            logger.debug("schema ready (tables=%d)", len(list_tables(db_config)))
        except (mysql.connector.Error, StorageError):
            logger.exception("Could not apply schema; the record store may be unprovisioned")

    container = build_container(backend=backend, db_config=db_config, max_photo_bytes=max_photo_bytes)
    initialize_with_timeout(
        container,
        float(getattr(settings, "INIT_TIMEOUT_SECONDS", DEFAULT_INIT_TIMEOUT_SECONDS)),
    )

    app.extensions["payload_tracker"] = container

    register_users(app, container)
    register_records(app, container)
    register_reporting(app, container)

    return app
