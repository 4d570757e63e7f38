import logging
import os
from datetime import datetime, timezone
from typing import Optional

from dotenv import load_dotenv
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine

from spendwise.infrastructure.storage.kv import KeyValueStore

load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_DATABASE_URL = "sqlite:///spendwise.db"


def init_db(database_url: Optional[str] = None) -> Engine:
    """Create the engine and make sure the kv_store table exists."""
    database_url = database_url or os.getenv("DATABASE_URL", DEFAULT_DATABASE_URL)

    if database_url.startswith("sqlite"):
        engine = create_engine(database_url)
    else:
        engine = create_engine(
            database_url,
            pool_size=5,
            max_overflow=10,
            pool_timeout=30,
            pool_recycle=1800,
        )

    with engine.begin() as conn:
        conn.execute(text("""
            CREATE TABLE IF NOT EXISTS kv_store (
                key VARCHAR(255) PRIMARY KEY,
                value TEXT NOT NULL,
                updated_at TIMESTAMP NOT NULL
            )
        """))

    logger.debug("kv_store ready on %s", engine.url.render_as_string(hide_password=True))
    return engine


class SqlKeyValueStore(KeyValueStore):
    """
    KeyValueStore over a single SQL table. Whole-value overwrite semantics.
    """

    def __init__(self, engine: Optional[Engine] = None):
        self.engine = engine or init_db()

    def get(self, key: str) -> Optional[str]:
        with self.engine.connect() as conn:
            row = conn.execute(
                text("SELECT value FROM kv_store WHERE key = :key"),
                {"key": key},
            ).mappings().first()

        if not row:
            return None
        return row["value"]

    def set(self, key: str, value: str) -> None:
        params = {
            "key": key,
            "value": value,
            "updated_at": datetime.now(timezone.utc),
        }

        with self.engine.begin() as conn:
            result = conn.execute(
                text("""
                UPDATE kv_store
                SET value = :value,
                    updated_at = :updated_at
                WHERE key = :key
                """),
                params,
            )
            if result.rowcount == 0:
                conn.execute(
                    text("""
                    INSERT INTO kv_store (key, value, updated_at)
                    VALUES (:key, :value, :updated_at)
                    """),
                    params,
                )

    def remove(self, key: str) -> None:
        with self.engine.begin() as conn:
            conn.execute(
                text("DELETE FROM kv_store WHERE key = :key"),
                {"key": key},
            )
