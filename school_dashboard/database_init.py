#!/usr/bin/env python3
"""
Database initialization
Creates the record store structure when the database doesn't exist and seeds
the admin account from configuration.
"""

import sys
import logging
from typing import Optional

from werkzeug.security import generate_password_hash

from .config import config
from .utils.database_utils import DatabaseManager, DatabaseError, get_database_manager

logger = logging.getLogger(__name__)

# Money columns are TEXT so Decimal amounts round-trip exactly
SCHEMA = """
CREATE TABLE IF NOT EXISTS accounts (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    username TEXT NOT NULL UNIQUE,
    email TEXT,
    school_name TEXT,
    password_hash TEXT NOT NULL,
    is_admin BOOLEAN NOT NULL DEFAULT FALSE,
    created_at DATETIME NOT NULL
);

CREATE TABLE IF NOT EXISTS monthly_records (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    account_id INTEGER NOT NULL,
    month TEXT NOT NULL,
    year INTEGER NOT NULL,
    leads INTEGER NOT NULL DEFAULT 0,
    appointments INTEGER NOT NULL DEFAULT 0,
    showed INTEGER NOT NULL DEFAULT 0,
    enrollments INTEGER NOT NULL DEFAULT 0,
    pif TEXT NOT NULL DEFAULT '0',
    down_payments TEXT NOT NULL DEFAULT '0',
    event_revenue TEXT NOT NULL DEFAULT '0',
    pro_shop_sales TEXT NOT NULL DEFAULT '0',
    mrr TEXT NOT NULL DEFAULT '0',
    students_start INTEGER NOT NULL DEFAULT 0,
    students_end INTEGER NOT NULL DEFAULT 0,
    created_at DATETIME NOT NULL,
    updated_at DATETIME NOT NULL,
    UNIQUE (account_id, month, year),
    FOREIGN KEY (account_id) REFERENCES accounts(id) ON DELETE CASCADE
);

CREATE TABLE IF NOT EXISTS goals (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    account_id INTEGER NOT NULL,
    month TEXT NOT NULL,
    year INTEGER NOT NULL,
    target_leads INTEGER NOT NULL DEFAULT 0,
    target_enrollments INTEGER NOT NULL DEFAULT 0,
    target_revenue TEXT NOT NULL DEFAULT '0',
    created_at DATETIME NOT NULL,
    updated_at DATETIME NOT NULL,
    UNIQUE (account_id, month, year),
    FOREIGN KEY (account_id) REFERENCES accounts(id) ON DELETE CASCADE
);

CREATE INDEX IF NOT EXISTS idx_monthly_records_account ON monthly_records (account_id, year);
CREATE INDEX IF NOT EXISTS idx_goals_account ON goals (account_id, year);
"""

REQUIRED_TABLES = ('accounts', 'monthly_records', 'goals')


def initialize_database(db_manager: Optional[DatabaseManager] = None) -> bool:
    """Create all tables and indexes if they are missing."""
    db_manager = db_manager or get_database_manager()

    try:
        with db_manager.get_connection() as conn:
            conn.executescript(SCHEMA)
        logger.info(f"Database structure ready at {db_manager.database_path}")
        return True
    except DatabaseError as e:
        logger.error(f"Failed to create database structure: {e}")
        return False


def seed_admin_account(db_manager: Optional[DatabaseManager] = None) -> bool:
    """
    Create the configured admin account unless an account with that
    username already exists.

    Returns:
        True if an account was created
    """
    from .dashboard.services.record_repository import RecordRepository

    repository = RecordRepository(db_manager or get_database_manager())
    if repository.get_account_by_username(config.ADMIN_USERNAME):
        return False

    repository.create_account(
        username=config.ADMIN_USERNAME,
        password_hash=generate_password_hash(config.ADMIN_PASSWORD),
        email=config.ADMIN_EMAIL,
        school_name='Administrator',
        is_admin=True
    )
    logger.info(f"Seeded admin account '{config.ADMIN_USERNAME}'")
    return True


def check_database_health(db_manager: Optional[DatabaseManager] = None) -> bool:
    """Check that the database is reachable and has the required tables."""
    db_manager = db_manager or get_database_manager()

    try:
        with db_manager.get_connection() as conn:
            rows = conn.execute(
                "SELECT name FROM sqlite_master WHERE type='table' AND name IN (?, ?, ?)",
                REQUIRED_TABLES
            ).fetchall()
        tables = sorted(row['name'] for row in rows)

        if len(tables) == len(REQUIRED_TABLES):
            logger.info(f"Database health check passed. Found tables: {tables}")
            return True
        logger.warning(f"Database health check failed. Only found tables: {tables}")
        return False
    except DatabaseError as e:
        logger.error(f"Database health check failed: {e}")
        return False


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    if initialize_database() and check_database_health():
        seed_admin_account()
        print("✅ Database initialization completed successfully")
        sys.exit(0)

    print("❌ Database initialization failed")
    sys.exit(1)
