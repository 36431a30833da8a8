"""SQLite storage for named genogram documents."""

from datetime import datetime, timezone
import json
import logging
from pathlib import Path
import sqlite3

from genogram.errors import DocumentNotFoundError, StoreError

logger = logging.getLogger(__name__)


class DocumentStore:
    """
    Key -> JSON document store backed by SQLite.

    Documents are grouped by namespace (e.g. "genogram", "template",
    "house_plan") so several editors can share one database file.
    Call initialize() once before use; it is safe to call repeatedly.
    """

    def __init__(self, db_path: Path, namespace: str = "genogram"):
        self.db_path = Path(db_path)
        self.namespace = namespace

    def _connect(self) -> sqlite3.Connection:
        return sqlite3.connect(self.db_path)

    def initialize(self) -> None:
        """Create the database file and document table if they do not exist."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        conn = self._connect()
        try:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS document (
                    namespace TEXT NOT NULL,
                    name TEXT NOT NULL,
                    body TEXT NOT NULL,
                    updated_at TEXT NOT NULL,
                    PRIMARY KEY (namespace, name)
                )
            """)
            conn.commit()
        finally:
            conn.close()

    @staticmethod
    def _check_name(name: str) -> str:
        if not name or not name.strip():
            raise StoreError("Document name is required")
        if "/" in name or "\\" in name:
            raise StoreError(f"Document name may not contain path separators: {name!r}")
        return name.strip()

    def save(self, name: str, doc) -> None:
        """Insert or replace the document stored under `name`."""
        name = self._check_name(name)
        try:
            body = json.dumps(doc, ensure_ascii=False)
        except (TypeError, ValueError) as e:
            raise StoreError(f"Document {name!r} is not JSON serializable: {e}") from e

        conn = self._connect()
        try:
            conn.execute(
                """
                INSERT OR REPLACE INTO document (namespace, name, body, updated_at)
                VALUES (?, ?, ?, ?)
                """,
                (self.namespace, name, body, datetime.now(timezone.utc).isoformat()),
            )
            conn.commit()
        except sqlite3.Error as e:
            raise StoreError(f"Failed to save {name!r}: {e}") from e
        finally:
            conn.close()
        logger.info("Saved %s/%s", self.namespace, name)

    def list(self) -> list[str]:
        """Return stored document names, sorted."""
        conn = self._connect()
        try:
            rows = conn.execute(
                "SELECT name FROM document WHERE namespace = ? ORDER BY name",
                (self.namespace,),
            ).fetchall()
        except sqlite3.Error as e:
            raise StoreError(f"Failed to list documents: {e}") from e
        finally:
            conn.close()
        return [row[0] for row in rows]

    def load(self, name: str):
        name = self._check_name(name)
        conn = self._connect()
        try:
            row = conn.execute(
                "SELECT body FROM document WHERE namespace = ? AND name = ?",
                (self.namespace, name),
            ).fetchone()
        except sqlite3.Error as e:
            raise StoreError(f"Failed to load {name!r}: {e}") from e
        finally:
            conn.close()

        if row is None:
            raise DocumentNotFoundError(name)
        return json.loads(row[0])

    def delete(self, name: str) -> None:
        """Remove a document. Deleting a missing name is not an error."""
        name = self._check_name(name)
        conn = self._connect()
        try:
            conn.execute(
                "DELETE FROM document WHERE namespace = ? AND name = ?",
                (self.namespace, name),
            )
            conn.commit()
        except sqlite3.Error as e:
            raise StoreError(f"Failed to delete {name!r}: {e}") from e
        finally:
            conn.close()
