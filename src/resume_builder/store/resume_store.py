"""SQLite-backed store for resume records, scoped to the owning user."""

from __future__ import annotations

import logging
import sqlite3
import uuid
from datetime import datetime, timezone
from pathlib import Path

from resume_builder.models.record import ResumeRecord
from resume_builder.models.resume import ResumeDocument

logger = logging.getLogger(__name__)

DEFAULT_DB_PATH = Path.home() / ".resume-builder" / "resumes.db"
DEFAULT_TITLE = "Untitled Resume"


class StoreError(Exception):
    """Raised when a resume record cannot be read or written."""


class ResumeStore:
    """Lists, creates and saves resume records with WAL mode."""

    def __init__(self, db_path: str | Path = DEFAULT_DB_PATH):
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_db()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self.db_path))
        conn.execute("PRAGMA journal_mode=WAL")
        return conn

    def _init_db(self) -> None:
        with self._connect() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS resumes (
                    id TEXT PRIMARY KEY,
                    user_id TEXT NOT NULL,
                    title TEXT NOT NULL,
                    document_json TEXT NOT NULL,
                    created_at TEXT NOT NULL,
                    updated_at TEXT
                )
            """)
            conn.execute(
                "CREATE INDEX IF NOT EXISTS idx_resumes_user ON resumes (user_id, created_at)"
            )

    def list_resumes(self, user_id: str) -> list[ResumeRecord]:
        """Return the user's resumes, newest first."""
        with self._connect() as conn:
            rows = conn.execute(
                "SELECT * FROM resumes WHERE user_id = ? ORDER BY created_at DESC",
                (user_id,),
            ).fetchall()
        return [self._row_to_record(row) for row in rows]

    def create_resume(
        self,
        user_id: str,
        title: str = DEFAULT_TITLE,
        document: ResumeDocument | None = None,
    ) -> ResumeRecord:
        record = ResumeRecord(
            id=str(uuid.uuid4()),
            user_id=user_id,
            title=title.strip() or DEFAULT_TITLE,
            created_at=datetime.now(timezone.utc),
            document=document if document is not None else ResumeDocument(),
        )
        with self._connect() as conn:
            conn.execute(
                """INSERT INTO resumes (id, user_id, title, document_json, created_at, updated_at)
                   VALUES (?, ?, ?, ?, ?, ?)""",
                (
                    record.id,
                    record.user_id,
                    record.title,
                    record.document.to_json(),
                    record.created_at.isoformat(),
                    None,
                ),
            )
        logger.info("Created resume %s for user %s", record.id, user_id)
        return record

    def get_resume(self, resume_id: str, user_id: str) -> ResumeRecord | None:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT * FROM resumes WHERE id = ? AND user_id = ?",
                (resume_id, user_id),
            ).fetchone()
        return self._row_to_record(row) if row else None

    def save_resume(
        self,
        resume_id: str,
        user_id: str,
        document: ResumeDocument,
        title: str | None = None,
    ) -> ResumeRecord:
        """Overwrite a record's document (and optionally its title)."""
        existing = self.get_resume(resume_id, user_id)
        if existing is None:
            raise StoreError(f"Resume not found: {resume_id}")
        updated_at = datetime.now(timezone.utc)
        new_title = (title.strip() if title else "") or existing.title
        with self._connect() as conn:
            conn.execute(
                """UPDATE resumes SET title = ?, document_json = ?, updated_at = ?
                   WHERE id = ? AND user_id = ?""",
                (new_title, document.to_json(), updated_at.isoformat(), resume_id, user_id),
            )
        return existing.model_copy(
            update={"title": new_title, "document": document, "updated_at": updated_at}
        )

    def delete_resume(self, resume_id: str, user_id: str) -> bool:
        with self._connect() as conn:
            cursor = conn.execute(
                "DELETE FROM resumes WHERE id = ? AND user_id = ?", (resume_id, user_id)
            )
            return cursor.rowcount > 0

    @staticmethod
    def _row_to_record(row: tuple) -> ResumeRecord:
        return ResumeRecord(
            id=row[0],
            user_id=row[1],
            title=row[2],
            document=ResumeDocument.from_json(row[3]),
            created_at=datetime.fromisoformat(row[4]),
            updated_at=datetime.fromisoformat(row[5]) if row[5] else None,
        )
