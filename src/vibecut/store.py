"""License and project persistence on a SQLAlchemy engine.

The engine owns the connection pool. Every method checks out its own
connection, so a single EditStore can be shared by concurrent edits:
license lookups are plain reads and project records are append-only.
"""

import logging

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from .errors import PersistenceError
from .models import ProjectRecord

logger = logging.getLogger(__name__)


SCHEMA = (
    """
    CREATE TABLE IF NOT EXISTS licenses (
        license_key TEXT PRIMARY KEY,
        valid INTEGER NOT NULL DEFAULT 1
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS projects (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        input_path TEXT NOT NULL,
        output_path TEXT NOT NULL,
        prompt TEXT NOT NULL,
        created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
    )
    """,
)

_LICENSE_QUERY = text(
    "SELECT license_key FROM licenses "
    "WHERE license_key = :key AND valid = 1 LIMIT 1"
)
_INSERT_PROJECT = text(
    "INSERT INTO projects (input_path, output_path, prompt) "
    "VALUES (:input_path, :output_path, :prompt)"
)
_UPSERT_LICENSE = text(
    "INSERT INTO licenses (license_key, valid) VALUES (:key, :valid) "
    "ON CONFLICT(license_key) DO UPDATE SET valid = excluded.valid"
)


class EditStore:
    def __init__(self, engine: Engine):
        self.engine = engine

    @classmethod
    def from_url(cls, url: str) -> "EditStore":
        return cls(create_engine(url))

    def init_schema(self) -> None:
        """Create the licenses and projects tables if missing."""
        try:
            with self.engine.begin() as conn:
                for statement in SCHEMA:
                    conn.execute(text(statement))
        except SQLAlchemyError as e:
            raise PersistenceError(f"Could not initialize database: {e}") from e

    def has_valid_license(self, key: str) -> bool:
        try:
            with self.engine.connect() as conn:
                row = conn.execute(_LICENSE_QUERY, {"key": key}).first()
        except SQLAlchemyError as e:
            raise PersistenceError(f"License lookup failed: {e}") from e
        return row is not None

    def set_license(self, key: str, valid: bool = True) -> None:
        """Insert a license key, or flip the valid flag of an existing one."""
        try:
            with self.engine.begin() as conn:
                conn.execute(_UPSERT_LICENSE, {"key": key, "valid": int(valid)})
        except SQLAlchemyError as e:
            raise PersistenceError(f"Could not store license: {e}") from e

    def add_project(self, record: ProjectRecord) -> None:
        try:
            with self.engine.begin() as conn:
                conn.execute(_INSERT_PROJECT, {
                    "input_path": record.input_path,
                    "output_path": record.output_path,
                    "prompt": record.prompt,
                })
        except SQLAlchemyError as e:
            raise PersistenceError(f"Could not record project: {e}") from e
        logger.debug("recorded project %s -> %s", record.input_path, record.output_path)

    def projects(self) -> list[ProjectRecord]:
        """All project records, oldest first."""
        try:
            with self.engine.connect() as conn:
                rows = conn.execute(text(
                    "SELECT input_path, output_path, prompt FROM projects ORDER BY id"
                )).all()
        except SQLAlchemyError as e:
            raise PersistenceError(f"Could not read projects: {e}") from e
        return [ProjectRecord(*row) for row in rows]
