# Record Repository
#
# The only place that reads and writes monthly records, goals and accounts.
# Every record and goal is keyed by (account_id, month, year).

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal
from typing import Dict, List, Any, Optional

from ...utils.database_utils import DatabaseManager, get_database_manager
from ..calculators import MonthlyRecord, GoalTarget, RevenueCalculators, BaseCalculator, month_index
from ..calculators.base_calculators import COUNT_FIELDS, MONEY_FIELDS

logger = logging.getLogger(__name__)

RECORD_COLUMNS = ('month', 'year') + COUNT_FIELDS + MONEY_FIELDS


@dataclass(frozen=True)
class Account:
    """A school (tenant) or admin login"""
    id: int
    username: str
    email: Optional[str]
    school_name: Optional[str]
    password_hash: str
    is_admin: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'username': self.username,
            'email': self.email,
            'school_name': self.school_name,
            'is_admin': self.is_admin,
        }


@dataclass(frozen=True)
class SchoolSummary:
    """Per-school aggregate shown on the admin dashboard"""
    id: int
    school_name: str
    email: Optional[str]
    months_tracked: int
    total_leads: int
    total_appointments: int
    total_enrollments: int
    total_revenue: Decimal
    last_entry_date: Optional[str]

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'school_name': self.school_name,
            'email': self.email,
            'months_tracked': self.months_tracked,
            'total_leads': self.total_leads,
            'total_appointments': self.total_appointments,
            'total_enrollments': self.total_enrollments,
            'total_revenue': BaseCalculator.format_money(self.total_revenue),
            'last_entry_date': self.last_entry_date,
        }


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _chronological_key(item):
    return (item.year, month_index(item.month))


class RecordRepository:
    """sqlite-backed store for monthly records, goals and accounts"""

    def __init__(self, db_manager: Optional[DatabaseManager] = None):
        self.db_manager = db_manager or get_database_manager()

    # === MONTHLY RECORDS ===

    def get_record(self, account_id: int, month: str, year: int) -> Optional[MonthlyRecord]:
        with self.db_manager.get_connection() as conn:
            row = conn.execute(
                "SELECT * FROM monthly_records WHERE account_id = ? AND month = ? AND year = ?",
                (account_id, month, year)
            ).fetchone()
        return self._row_to_record(row) if row else None

    def put_record(self, account_id: int, record: MonthlyRecord) -> int:
        """
        Insert or replace the record for (account_id, month, year).

        Returns:
            Surrogate id of the stored row (stable across updates)
        """
        values = self._record_values(record)
        now = _utc_now()
        columns = ', '.join(RECORD_COLUMNS)
        placeholders = ', '.join('?' for _ in RECORD_COLUMNS)
        updates = ', '.join(f"{column} = excluded.{column}" for column in RECORD_COLUMNS[2:])

        with self.db_manager.get_connection() as conn:
            conn.execute(
                f"""
                INSERT INTO monthly_records (account_id, {columns}, created_at, updated_at)
                VALUES (?, {placeholders}, ?, ?)
                ON CONFLICT (account_id, month, year)
                DO UPDATE SET {updates}, updated_at = excluded.updated_at
                """,
                (account_id, *values, now, now)
            )
            row = conn.execute(
                "SELECT id FROM monthly_records WHERE account_id = ? AND month = ? AND year = ?",
                (account_id, record.month, record.year)
            ).fetchone()

        logger.info(f"Saved record {record.period_key} for account {account_id}")
        return row['id']

    def list_records(self, account_id: int, year: Optional[int] = None) -> List[MonthlyRecord]:
        """All records of an account in chronological order, optionally for one year"""
        query = "SELECT * FROM monthly_records WHERE account_id = ?"
        params: List[Any] = [account_id]
        if year is not None:
            query += " AND year = ?"
            params.append(year)

        with self.db_manager.get_connection() as conn:
            rows = conn.execute(query, params).fetchall()

        return sorted((self._row_to_record(row) for row in rows), key=_chronological_key)

    def delete_record(self, account_id: int, month: str, year: int) -> bool:
        with self.db_manager.get_connection() as conn:
            cursor = conn.execute(
                "DELETE FROM monthly_records WHERE account_id = ? AND month = ? AND year = ?",
                (account_id, month, year)
            )
        return cursor.rowcount > 0

    # === GOALS ===

    def get_goal(self, account_id: int, month: str, year: int) -> Optional[GoalTarget]:
        with self.db_manager.get_connection() as conn:
            row = conn.execute(
                "SELECT * FROM goals WHERE account_id = ? AND month = ? AND year = ?",
                (account_id, month, year)
            ).fetchone()
        return self._row_to_goal(row) if row else None

    def put_goal(self, account_id: int, goal: GoalTarget) -> int:
        """Insert or replace the goal for (account_id, month, year)"""
        now = _utc_now()

        with self.db_manager.get_connection() as conn:
            conn.execute(
                """
                INSERT INTO goals (account_id, month, year, target_leads, target_enrollments,
                                   target_revenue, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                ON CONFLICT (account_id, month, year)
                DO UPDATE SET target_leads = excluded.target_leads,
                              target_enrollments = excluded.target_enrollments,
                              target_revenue = excluded.target_revenue,
                              updated_at = excluded.updated_at
                """,
                (account_id, goal.month, goal.year, goal.target_leads, goal.target_enrollments,
                 str(goal.target_revenue), now, now)
            )
            row = conn.execute(
                "SELECT id FROM goals WHERE account_id = ? AND month = ? AND year = ?",
                (account_id, goal.month, goal.year)
            ).fetchone()

        logger.info(f"Saved goal {goal.period_key} for account {account_id}")
        return row['id']

    def delete_goal(self, account_id: int, month: str, year: int) -> bool:
        with self.db_manager.get_connection() as conn:
            cursor = conn.execute(
                "DELETE FROM goals WHERE account_id = ? AND month = ? AND year = ?",
                (account_id, month, year)
            )
        return cursor.rowcount > 0

    def list_goals(self, account_id: int) -> List[GoalTarget]:
        """All goals of an account, newest period first"""
        with self.db_manager.get_connection() as conn:
            rows = conn.execute("SELECT * FROM goals WHERE account_id = ?", (account_id,)).fetchall()
        return sorted((self._row_to_goal(row) for row in rows), key=_chronological_key, reverse=True)

    # === ACCOUNTS ===

    def create_account(self, username: str, password_hash: str, email: Optional[str] = None,
                       school_name: Optional[str] = None, is_admin: bool = False) -> int:
        with self.db_manager.get_connection() as conn:
            cursor = conn.execute(
                """
                INSERT INTO accounts (username, email, school_name, password_hash, is_admin, created_at)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                (username, email, school_name, password_hash, is_admin, _utc_now())
            )
        logger.info(f"Created {'admin' if is_admin else 'school'} account '{username}'")
        return cursor.lastrowid

    def get_account_by_username(self, username: str) -> Optional[Account]:
        with self.db_manager.get_connection() as conn:
            row = conn.execute("SELECT * FROM accounts WHERE username = ?", (username,)).fetchone()
        if not row:
            return None
        return Account(
            id=row['id'],
            username=row['username'],
            email=row['email'],
            school_name=row['school_name'],
            password_hash=row['password_hash'],
            is_admin=bool(row['is_admin'])
        )

    def get_school_summaries(self) -> List[SchoolSummary]:
        """
        One summary per school account ordered by school name.

        Revenue is summed in Python so the Decimal amounts stay exact.
        """
        with self.db_manager.get_connection() as conn:
            accounts = conn.execute(
                "SELECT id, username, email, school_name FROM accounts WHERE NOT is_admin"
            ).fetchall()
            rows = conn.execute(
                """
                SELECT r.* FROM monthly_records r
                JOIN accounts a ON a.id = r.account_id
                WHERE NOT a.is_admin
                """
            ).fetchall()

        records_by_account: Dict[int, list] = {account['id']: [] for account in accounts}
        for row in rows:
            records_by_account[row['account_id']].append(row)

        summaries = []
        for account in accounts:
            account_rows = records_by_account[account['id']]
            last_update = max((row['updated_at'] for row in account_rows), default=None)
            summaries.append(SchoolSummary(
                id=account['id'],
                school_name=account['school_name'] or account['username'],
                email=account['email'],
                months_tracked=len(account_rows),
                total_leads=sum(row['leads'] for row in account_rows),
                total_appointments=sum(row['appointments'] for row in account_rows),
                total_enrollments=sum(row['enrollments'] for row in account_rows),
                total_revenue=sum(
                    (RevenueCalculators.calculate_total_revenue(self._row_to_record(row)) for row in account_rows),
                    Decimal('0')
                ),
                last_entry_date=last_update[:10] if last_update else None
            ))

        return sorted(summaries, key=lambda summary: summary.school_name.lower())

    # === ROW MAPPING ===

    @staticmethod
    def _record_values(record: MonthlyRecord) -> tuple:
        values = []
        for column in RECORD_COLUMNS:
            value = getattr(record, column)
            values.append(str(value) if column in MONEY_FIELDS else value)
        return tuple(values)

    @staticmethod
    def _row_to_record(row) -> MonthlyRecord:
        return MonthlyRecord.from_dict({key: row[key] for key in ('id',) + RECORD_COLUMNS})

    @staticmethod
    def _row_to_goal(row) -> GoalTarget:
        return GoalTarget.from_dict({
            key: row[key]
            for key in ('id', 'month', 'year', 'target_leads', 'target_enrollments', 'target_revenue')
        })
