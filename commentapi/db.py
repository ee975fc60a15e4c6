"""SQL storage for comments."""

from __future__ import annotations

import logging
import os
import sqlite3
import threading
import uuid
from collections.abc import Mapping
from dataclasses import replace
from typing import Any

from .comment import Comment

_log = logging.getLogger(__name__)

_SCHEMA = """
CREATE TABLE IF NOT EXISTS comments (
    id TEXT PRIMARY KEY,
    slug TEXT,
    author TEXT,
    body TEXT
);
"""


class DatabaseError(Exception):
    """Raised when a database operation fails."""


def connect(environ: Mapping[str, str] | None = None) -> "Database":
    """Open the comment database whose file is named by DB_TABLE."""
    env = os.environ if environ is None else environ
    path = env.get("DB_TABLE") or ":memory:"
    try:
        connection = sqlite3.connect(path, check_same_thread=False)
    except sqlite3.Error as exc:
        raise DatabaseError(f"could not connect to the database: {exc}") from exc
    return Database(connection)


def _row_to_comment(row: tuple[Any, ...]) -> Comment:
    comment_id, slug, body, author = row
    return Comment(id=comment_id, slug=slug or "", body=body or "", author=author or "")


class Database:
    """Comment store backed by a DB-API connection."""

    def __init__(self, connection: sqlite3.Connection) -> None:
        self.connection = connection
        self._lock = threading.Lock()

    def ping(self) -> None:
        with self._lock:
            try:
                self.connection.execute("SELECT 1").fetchone()
            except sqlite3.Error as exc:
                raise DatabaseError(f"database is unreachable: {exc}") from exc

    def migrate(self) -> None:
        _log.info("migrating database ....")
        with self._lock:
            try:
                self.connection.executescript(_SCHEMA)
            except sqlite3.Error as exc:
                raise DatabaseError(f"could not run up migrations: {exc}") from exc
        _log.info("successfully migrated the database")

    def _write(self, sql: str, params: Mapping[str, Any] | tuple[Any, ...], failure: str) -> None:
        with self._lock:
            try:
                with self.connection:
                    self.connection.execute(sql, params)
            except sqlite3.Error as exc:
                raise DatabaseError(f"{failure}: {exc}") from exc

    def get_comment(self, comment_id: str) -> Comment:
        failure = f"error fetching the comment by uuid: {comment_id}"
        with self._lock:
            try:
                row = self.connection.execute(
                    "SELECT id, slug, body, author FROM comments WHERE id = ?",
                    (comment_id,),
                ).fetchone()
            except sqlite3.Error as exc:
                raise DatabaseError(failure) from exc
        if row is None:
            raise DatabaseError(failure)
        return _row_to_comment(row)

    def post_comment(self, cmt: Comment) -> Comment:
        created = replace(cmt, id=str(uuid.uuid4()))
        self._write(
            "INSERT INTO comments (id, slug, author, body) VALUES (:id, :slug, :author, :body)",
            {"id": created.id, "slug": created.slug, "author": created.author, "body": created.body},
            "failed to insert comment",
        )
        _log.info("Inserted new comment with id: %s", created.id)
        return created

    def update_comment(self, comment_id: str, cmt: Comment) -> Comment:
        updated = replace(cmt, id=comment_id)
        self._write(
            "UPDATE comments SET slug = :slug, author = :author, body = :body WHERE id = :id",
            {"id": updated.id, "slug": updated.slug, "author": updated.author, "body": updated.body},
            "failed to update comment",
        )
        return updated

    def delete_comment(self, comment_id: str) -> None:
        self._write(
            "DELETE FROM comments WHERE id = ?",
            (comment_id,),
            "failed to delete comment from database",
        )

    def close(self) -> None:
        self.connection.close()