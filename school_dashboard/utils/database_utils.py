"""
Database Utilities Module

Database path management and connection utilities for the dashboard's
sqlite record store.
"""

import sqlite3
import logging
from pathlib import Path
from typing import Optional, Union
from contextlib import contextmanager

from ..config import config

logger = logging.getLogger(__name__)


class DatabaseError(Exception):
    """Raised when the record store cannot be opened or a statement fails."""
    pass


class DatabaseManager:
    """
    Owns the location of the sqlite database and hands out connections.

    Each call to get_connection() opens a short-lived connection, so a manager
    can be shared between request threads.
    """

    def __init__(self, database_path: Optional[Union[str, Path]] = None):
        """
        Initialize the database manager.

        Args:
            database_path: Optional explicit database file. Defaults to config.DATABASE_PATH.
        """
        self._database_path = Path(database_path or config.DATABASE_PATH)
        logger.info(f"Database manager initialized with database: {self._database_path}")

    @property
    def database_path(self) -> Path:
        return self._database_path

    @contextmanager
    def get_connection(self, **kwargs):
        """
        Get a database connection with automatic cleanup.
        Creates the database file and its directory if they don't exist.

        Commits when the block succeeds and rolls back when it raises. sqlite
        errors are re-raised as DatabaseError; other exceptions propagate unchanged.

        Yields:
            sqlite3.Connection object with rows returned as sqlite3.Row

        Example:
            with db_manager.get_connection() as conn:
                conn.execute("SELECT COUNT(*) FROM monthly_records")
        """
        db_path = self._database_path
        conn = None

        try:
            db_path.parent.mkdir(parents=True, exist_ok=True)
            if not db_path.exists():
                logger.info(f"Creating new database at {db_path}")

            conn = sqlite3.connect(
                str(db_path),
                timeout=30,
                check_same_thread=False,
                **kwargs
            )
            conn.row_factory = sqlite3.Row
            conn.execute("PRAGMA foreign_keys = ON")

            yield conn
            conn.commit()
        except sqlite3.Error as e:
            if conn:
                conn.rollback()
            raise DatabaseError(f"Database error for {db_path}: {e}") from e
        except OSError as e:
            raise DatabaseError(f"Cannot open database at {db_path}: {e}") from e
        except Exception:
            if conn:
                conn.rollback()
            raise
        finally:
            if conn:
                conn.close()


# Global database manager instance
_db_manager: Optional[DatabaseManager] = None


def get_database_manager() -> DatabaseManager:
    """
    Get the global database manager instance.

    Returns:
        DatabaseManager instance (singleton) for config.DATABASE_PATH
    """
    global _db_manager
    if _db_manager is None:
        _db_manager = DatabaseManager()
    return _db_manager
