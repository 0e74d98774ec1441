"""
Database manager for Blockpad.

This module persists workspace files and page documents using DuckDB. The
editor hands every block change to its host; the host saves it here.
"""

import duckdb
import json
import logging
from typing import List, Optional
from datetime import datetime

from ..editor.factory import generate_id
from ..models import Block, WorkspaceFile, PageDocument, dump_blocks


class DatabaseManager:
    """
    Manages the DuckDB database holding pages and their metadata.
    """

    def __init__(self, db_path: str = "blockpad.db"):
        """
        Initialize the database manager.

        Args:
            db_path: Path to the DuckDB database file
        """
        self.db_path = db_path
        self.connection = None

    def connect(self):
        """Establish connection to the database."""
        self.connection = duckdb.connect(self.db_path)

    def disconnect(self):
        """Close the database connection."""
        if self.connection:
            self.connection.close()
            self.connection = None

    def __enter__(self):
        """Context manager entry."""
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.disconnect()

    def _require_connection(self):
        if not self.connection:
            raise RuntimeError("Database connection not established")
        return self.connection

    def initialize_database(self):
        """
        Create all necessary tables if they don't exist.
        """
        connection = self._require_connection()

        connection.execute("""
            CREATE TABLE IF NOT EXISTS files (
                id VARCHAR PRIMARY KEY,
                title VARCHAR NOT NULL,
                author VARCHAR NOT NULL,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                cover_image_url VARCHAR,
                tags TEXT
            )
        """)

        # Blocks are stored as one JSON array per page
        connection.execute("""
            CREATE TABLE IF NOT EXISTS pages (
                id VARCHAR PRIMARY KEY,
                blocks TEXT NOT NULL
            )
        """)

        connection.execute("""
            CREATE TABLE IF NOT EXISTS meta (
                key VARCHAR PRIMARY KEY,
                value VARCHAR
            )
        """)

    def create_page(
        self,
        title: str = "Untitled",
        author: str = "You",
        blocks: Optional[List[Block]] = None,
        cover_image_url: Optional[str] = None,
        tags: Optional[List[str]] = None
    ) -> Optional[str]:
        """
        Create a new page and its file record.

        Args:
            title: Page title
            author: Display name of the author
            blocks: Initial blocks (empty by default)
            cover_image_url: Optional cover image
            tags: Optional tags

        Returns:
            The new page's id, or None if the id is already taken
        """
        connection = self._require_connection()

        page_id = generate_id()
        now = datetime.now()
        connection.begin()
        try:
            connection.execute("""
                INSERT INTO files (id, title, author, created_at, updated_at, cover_image_url, tags)
                VALUES (?, ?, ?, ?, ?, ?, ?)
            """, [page_id, title, author, now, now, cover_image_url, json.dumps(tags or [])])
            connection.execute("""
                INSERT INTO pages (id, blocks) VALUES (?, ?)
            """, [page_id, self._serialize_blocks(blocks or [])])
            connection.commit()
        except duckdb.IntegrityError:
            # Page id already exists
            connection.rollback()
            logging.warning(f"Page id {page_id} already exists, page not created")
            return None

        logging.info(f"Created page {page_id}: {title}")
        return page_id

    def get_page(self, page_id: str) -> Optional[PageDocument]:
        """
        Load a page's blocks.

        Args:
            page_id: The page id

        Returns:
            The page document if found, None otherwise
        """
        connection = self._require_connection()

        result = connection.execute("""
            SELECT id, blocks FROM pages WHERE id = ?
        """, [page_id]).fetchone()

        if result:
            return PageDocument(id=result[0], blocks=json.loads(result[1]))
        return None

    def update_page(self, page_id: str, blocks: List[Block]) -> bool:
        """
        Replace a page's blocks and touch its file's update time.

        Args:
            page_id: The page id
            blocks: The complete new block list

        Returns:
            True if the page exists and was updated
        """
        connection = self._require_connection()

        if not self._page_exists(page_id):
            logging.warning(f"update_page: page '{page_id}' does not exist")
            return False

        connection.execute("""
            UPDATE pages SET blocks = ? WHERE id = ?
        """, [self._serialize_blocks(blocks), page_id])
        connection.execute("""
            UPDATE files SET updated_at = ? WHERE id = ?
        """, [datetime.now(), page_id])
        return True

    def get_file(self, file_id: str) -> Optional[WorkspaceFile]:
        """
        Retrieve a file record by id.

        Args:
            file_id: The file id

        Returns:
            The file if found, None otherwise
        """
        connection = self._require_connection()

        result = connection.execute("""
            SELECT id, title, author, created_at, updated_at, cover_image_url, tags
            FROM files
            WHERE id = ?
        """, [file_id]).fetchone()

        return self._row_to_file(result) if result else None

    def list_files(self) -> List[WorkspaceFile]:
        """
        List all files, most recently updated first.

        Returns:
            List of files
        """
        connection = self._require_connection()

        results = connection.execute("""
            SELECT id, title, author, created_at, updated_at, cover_image_url, tags
            FROM files
            ORDER BY updated_at DESC
        """).fetchall()

        return [self._row_to_file(row) for row in results]

    def update_file(
        self,
        file_id: str,
        title: Optional[str] = None,
        cover_image_url: Optional[str] = None,
        tags: Optional[List[str]] = None
    ) -> bool:
        """
        Update a file's metadata; fields left as None are unchanged.

        Returns:
            True if the file exists and was updated
        """
        connection = self._require_connection()

        existing = self.get_file(file_id)
        if existing is None:
            return False

        connection.execute("""
            UPDATE files
            SET title = ?, cover_image_url = ?, tags = ?, updated_at = ?
            WHERE id = ?
        """, [
            title if title is not None else existing.title,
            cover_image_url if cover_image_url is not None else existing.cover_image_url,
            json.dumps(tags if tags is not None else existing.tags),
            datetime.now(),
            file_id
        ])
        return True

    def delete_file(self, file_id: str) -> bool:
        """
        Delete a file and its page document.

        Returns:
            True if the file existed
        """
        connection = self._require_connection()

        if self.get_file(file_id) is None:
            return False

        connection.execute("DELETE FROM pages WHERE id = ?", [file_id])
        connection.execute("DELETE FROM files WHERE id = ?", [file_id])
        logging.info(f"Deleted file {file_id}")
        return True

    def is_seeded(self) -> bool:
        """Return True once the workspace has been seeded."""
        connection = self._require_connection()

        result = connection.execute("""
            SELECT value FROM meta WHERE key = 'seeded'
        """).fetchone()
        return bool(result) and result[0] == "true"

    def mark_seeded(self) -> None:
        """Record that the workspace has been seeded."""
        connection = self._require_connection()

        connection.execute("""
            INSERT OR REPLACE INTO meta (key, value) VALUES ('seeded', 'true')
        """)

    def _page_exists(self, page_id: str) -> bool:
        result = self.connection.execute(
            "SELECT 1 FROM pages WHERE id = ? LIMIT 1",
            [page_id]
        ).fetchone()
        return result is not None

    @staticmethod
    def _serialize_blocks(blocks: List[Block]) -> str:
        return json.dumps(dump_blocks(blocks), ensure_ascii=False)

    @staticmethod
    def _row_to_file(row) -> WorkspaceFile:
        return WorkspaceFile(
            id=row[0],
            title=row[1],
            author=row[2],
            created_at=row[3],
            updated_at=row[4],
            cover_image_url=row[5],
            tags=json.loads(row[6]) if row[6] else []
        )
