"""SQLite data store for Trade Tracker."""

import logging
import sqlite3
from pathlib import Path

from pydantic import ValidationError

from tradetracker.exceptions import TrackerError
from tradetracker.models import (
    Cashflow,
    DayEntry,
    Settings,
    TrackerData,
    WithdrawalSettings,
)

logger = logging.getLogger(__name__)


class DataStore:
    """SQLite-based store for the tracker snapshot.

    The snapshot is read and written as a whole; day order is kept in the
    ``position`` column because it is the trading-day sequence.
    """

    REQUIRED_TABLES = [
        "settings",
        "withdrawal_settings",
        "days",
        "cashflows",
    ]

    def __init__(self, db_path: Path):
        """Initialize the data store.

        Args:
            db_path: Path to the SQLite database file.
        """
        self.db_path = db_path
        self._ensure_db_dir()
        try:
            self._init_schema()
        except sqlite3.DatabaseError as e:
            logger.warning("Database %s is unusable: %s", self.db_path, e)

    def _ensure_db_dir(self) -> None:
        """Ensure the database directory exists."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

    def _get_connection(self) -> sqlite3.Connection:
        """Get a database connection."""
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _init_schema(self) -> None:
        """Initialize database schema on first run."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()

            # Single-row tables
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS settings (
                    id INTEGER PRIMARY KEY CHECK (id = 1),
                    starting_capital REAL NOT NULL,
                    daily_target_pct REAL NOT NULL,
                    start_date TEXT NOT NULL,
                    target_goal REAL NOT NULL
                )
            """)

            cursor.execute("""
                CREATE TABLE IF NOT EXISTS withdrawal_settings (
                    id INTEGER PRIMARY KEY CHECK (id = 1),
                    rule TEXT NOT NULL,
                    rate REAL NOT NULL,
                    buffer REAL NOT NULL
                )
            """)

            # Days table
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS days (
                    id TEXT NOT NULL,
                    position INTEGER NOT NULL,
                    date TEXT NOT NULL,
                    actual_close REAL,
                    no_trade INTEGER NOT NULL DEFAULT 0
                )
            """)

            # Cashflows table
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS cashflows (
                    id TEXT NOT NULL,
                    position INTEGER NOT NULL,
                    date TEXT NOT NULL,
                    amount REAL NOT NULL,
                    type TEXT NOT NULL,
                    note TEXT
                )
            """)

            conn.commit()
        finally:
            conn.close()

    def get_tables(self) -> list[str]:
        """Get list of all tables in the database."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                "SELECT name FROM sqlite_master WHERE type='table' AND name NOT LIKE 'sqlite_%'"
            )
            return [row["name"] for row in cursor.fetchall()]
        finally:
            conn.close()

    # ==================== Snapshot ====================

    def load_snapshot(self) -> TrackerData:
        """Load the whole tracker document.

        An empty, unreadable or inconsistent database yields the empty
        snapshot instead of an error.

        Returns:
            The stored TrackerData.
        """
        try:
            return self._read_snapshot()
        except (sqlite3.DatabaseError, ValidationError) as e:
            logger.warning("Could not load tracker data from %s: %s", self.db_path, e)
            return TrackerData.empty()

    def _read_snapshot(self) -> TrackerData:
        conn = self._get_connection()
        try:
            cursor = conn.cursor()

            cursor.execute(
                """
                SELECT starting_capital, daily_target_pct, start_date, target_goal
                FROM settings WHERE id = 1
                """
            )
            row = cursor.fetchone()
            settings = None
            if row:
                settings = Settings(
                    starting_capital=row["starting_capital"],
                    daily_target_pct=row["daily_target_pct"],
                    start_date=row["start_date"],
                    target_goal=row["target_goal"],
                )

            cursor.execute("SELECT rule, rate, buffer FROM withdrawal_settings WHERE id = 1")
            row = cursor.fetchone()
            withdrawal = WithdrawalSettings()
            if row:
                withdrawal = WithdrawalSettings(
                    rule=row["rule"],
                    rate=row["rate"],
                    buffer=row["buffer"],
                )

            cursor.execute(
                """
                SELECT id, date, actual_close, no_trade
                FROM days
                ORDER BY position
                """
            )
            days = [
                DayEntry(
                    id=row["id"],
                    date=row["date"],
                    actual_close=row["actual_close"],
                    no_trade=bool(row["no_trade"]),
                )
                for row in cursor.fetchall()
            ]

            cursor.execute(
                """
                SELECT id, date, amount, type, note
                FROM cashflows
                ORDER BY position
                """
            )
            cashflows = [
                Cashflow(
                    id=row["id"],
                    date=row["date"],
                    amount=row["amount"],
                    type=row["type"],
                    note=row["note"],
                )
                for row in cursor.fetchall()
            ]

            return TrackerData(
                settings=settings,
                days=days,
                cashflows=cashflows,
                withdrawal=withdrawal,
            )
        finally:
            conn.close()

    def save_snapshot(self, data: TrackerData) -> None:
        """Replace the stored document with a snapshot.

        Args:
            data: Snapshot to store.

        Raises:
            TrackerError: If the database cannot be written.
        """
        try:
            self._write_snapshot(data)
        except sqlite3.DatabaseError as e:
            raise TrackerError(f"Could not save tracker data to {self.db_path}: {e}") from e
        logger.debug(
            "Saved snapshot: %d days, %d cashflows", len(data.days), len(data.cashflows)
        )

    def _write_snapshot(self, data: TrackerData) -> None:
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            for table in self.REQUIRED_TABLES:
                cursor.execute(f"DELETE FROM {table}")

            if data.settings is not None:
                cursor.execute(
                    """
                    INSERT INTO settings
                    (id, starting_capital, daily_target_pct, start_date, target_goal)
                    VALUES (1, ?, ?, ?, ?)
                    """,
                    (
                        data.settings.starting_capital,
                        data.settings.daily_target_pct,
                        data.settings.start_date,
                        data.settings.target_goal,
                    ),
                )

            cursor.execute(
                "INSERT INTO withdrawal_settings (id, rule, rate, buffer) VALUES (1, ?, ?, ?)",
                (data.withdrawal.rule, data.withdrawal.rate, data.withdrawal.buffer),
            )

            cursor.executemany(
                """
                INSERT INTO days (id, position, date, actual_close, no_trade)
                VALUES (?, ?, ?, ?, ?)
                """,
                [
                    (day.id, position, day.date, day.actual_close, 1 if day.no_trade else 0)
                    for position, day in enumerate(data.days)
                ],
            )

            cursor.executemany(
                """
                INSERT INTO cashflows (id, position, date, amount, type, note)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                [
                    (flow.id, position, flow.date, flow.amount, flow.type, flow.note)
                    for position, flow in enumerate(data.cashflows)
                ],
            )

            conn.commit()
        except sqlite3.DatabaseError:
            conn.rollback()
            raise
        finally:
            conn.close()

    def clear(self) -> None:
        """Remove all stored data."""
        self.save_snapshot(TrackerData.empty())

    # ==================== Stats ====================

    def get_stats(self) -> dict:
        """Get database statistics.

        Returns:
            Dictionary with table record counts.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            stats = {}
            for table in self.REQUIRED_TABLES:
                cursor.execute(f"SELECT COUNT(*) as count FROM {table}")
                stats[table] = cursor.fetchone()["count"]
            return stats
        finally:
            conn.close()
