from __future__ import annotations

import logging

from .connection import DBConfig, DatabaseConnection
from .mysql_base import db_cursor

logger = logging.getLogger(__name__)

SCHEMA_STATEMENTS = (
    """
    CREATE TABLE IF NOT EXISTS users (
        id CHAR(36) NOT NULL PRIMARY KEY,
        name VARCHAR(120) NOT NULL,
        username VARCHAR(60) NOT NULL,
        password_hash VARCHAR(255) NOT NULL,
        role VARCHAR(16) NOT NULL,
        created_at BIGINT NOT NULL,
        UNIQUE KEY uq_users_username (username)
    ) ENGINE=InnoDB DEFAULT CHARSET=utf8mb4
    """,
    """
    CREATE TABLE IF NOT EXISTS work_records (
        id CHAR(36) NOT NULL PRIMARY KEY,
        user_id CHAR(36) NOT NULL,
        `date` DATE NOT NULL,
        mode VARCHAR(16) NOT NULL,
        `type` VARCHAR(16) NOT NULL,
        quantity INT NOT NULL,
        `value` DECIMAL(10, 2) NOT NULL,
        route_names VARCHAR(255) NULL,
        is_two_ids TINYINT(1) NOT NULL DEFAULT 0,
        photos LONGTEXT NOT NULL,
        `timestamp` BIGINT NOT NULL,
        KEY idx_work_records_user_date (user_id, `date`),
        CONSTRAINT fk_work_records_user FOREIGN KEY (user_id) REFERENCES users (id)
    ) ENGINE=InnoDB DEFAULT CHARSET=utf8mb4
    """,
)


def ensure_database_exists(config: DBConfig) -> None:
    factory = DatabaseConnection(config)
    conn = factory.connect(with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{config.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict) -> None:
    """Create the database and tables if missing (idempotent)."""
    config = DBConfig.from_dict(db_config)
    ensure_database_exists(config)
    with db_cursor(DatabaseConnection(config), dictionary=False) as (_, cur):
        for stmt in SCHEMA_STATEMENTS:
            cur.execute(stmt)
    logger.info("Schema ready on %s@%s:%s/%s", config.user, config.host, config.port, config.database)


def list_tables(db_config: dict) -> list[str]:
    config = DBConfig.from_dict(db_config)
    with db_cursor(DatabaseConnection(config), dictionary=False) as (_, cur):
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
