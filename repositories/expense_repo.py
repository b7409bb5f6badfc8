"""
repositories/expense_repo.py
-----------------------------
Data access layer for expenses.
All SQL queries related to the `expenses` table live here.
"""

import time
from typing import Callable, Optional

from config import SEED_ON_EMPTY
from db.connection import Database
from db.init_db import create_tables, seed_if_empty
from models.expense import Expense, validate_expense
from utils.logger import get_logger

logger = get_logger(__name__)

_COLUMNS = "id, title, amount, category, paid, created_at"


def now_ms() -> int:
    """Current time in milliseconds since the epoch."""
    return int(time.time() * 1000)


class ExpenseRepository:
    """
    Repository for CRUD operations on the expenses table.

    Args:
        db: Open database handle, owned by the caller.
        clock: Returns the current time in ms; used for created_at stamps.
        seed_on_empty: Seed example rows in initialize() when the table is empty.
    """

    def __init__(self, db: Database, clock: Callable[[], int] = now_ms,
                 seed_on_empty: bool = SEED_ON_EMPTY):
        self.db = db
        self.clock = clock
        self.seed_on_empty = seed_on_empty

    # ── SCHEMA ────────────────────────────────────────────

    def initialize(self) -> int:
        """
        Ensure the table exists and seed it if it holds no rows.

        Returns:
            Number of example rows seeded (0 if the table had data or
            seeding is disabled).
        """
        create_tables(self.db)
        if not self.seed_on_empty:
            return 0
        return seed_if_empty(self.db, self.clock())

    # ── CREATE ────────────────────────────────────────────

    def add(self, title: str, amount: float, category: Optional[str] = None,
            paid: int = 1) -> Expense:
        """
        Insert a new expense.

        Args:
            title: Non-blank title, stored as given.
            amount: Finite number greater than zero.
            category: Optional category (None when absent).
            paid: 1 (default) or 0.

        Returns:
            The stored Expense with its `id` and `created_at` populated.

        Raises:
            ValidationError: If title or amount break the rules; nothing is written.
        """
        validate_expense(title, amount)
        created_at = self.clock()
        paid = 1 if paid else 0
        sql = """
            INSERT INTO expenses (title, amount, category, paid, created_at)
            VALUES (%s, %s, %s, %s, %s);
        """
        try:
            with self.db.transaction():
                new_id = self.db.insert(sql, (title, float(amount), category, paid, created_at))
        except Exception as e:
            logger.error(f"Failed to add expense '{title}': {e}")
            raise
        expense = Expense(id=new_id, title=title, amount=float(amount), category=category,
                          paid=paid, created_at=created_at)
        logger.info(f"Added expense {expense}")
        return expense

    # ── READ ──────────────────────────────────────────────

    def list_all(self) -> list[Expense]:
        """
        Fetch every expense, newest first.

        Rows sharing a created_at come back in descending id order.
        """
        rows = self.db.fetchall(
            f"SELECT {_COLUMNS} FROM expenses ORDER BY created_at DESC, id DESC;"
        )
        return [self._row_to_expense(r) for r in rows]

    def get_by_id(self, expense_id: int) -> Optional[Expense]:
        """Fetch a single expense, or None if the id is unknown."""
        row = self.db.fetchone(f"SELECT {_COLUMNS} FROM expenses WHERE id = %s;", (expense_id,))
        return self._row_to_expense(row) if row else None

    def count(self) -> int:
        (total,) = self.db.fetchone("SELECT COUNT(*) FROM expenses;")
        return int(total)

    # ── UPDATE ────────────────────────────────────────────

    def update(self, expense_id: int, title: str, amount: float,
               category: Optional[str] = None) -> bool:
        """
        Overwrite title, amount and category of an existing expense.
        `paid` and `created_at` are left untouched.

        Returns:
            True if a row was updated, False if the id is unknown.

        Raises:
            ValidationError: Same rules as add(); nothing is written.
        """
        validate_expense(title, amount)
        sql = "UPDATE expenses SET title = %s, amount = %s, category = %s WHERE id = %s;"
        try:
            with self.db.transaction():
                updated = self.db.execute(sql, (title, float(amount), category, expense_id)) > 0
        except Exception as e:
            logger.error(f"Failed to update expense #{expense_id}: {e}")
            raise
        if updated:
            logger.info(f"Updated expense #{expense_id}")
        return updated

    def toggle_paid(self, expense_id: int) -> Optional[int]:
        """
        Flip the paid flag (1 -> 0, 0 -> 1).

        Returns:
            The new paid value, or None if the id is unknown.
        """
        try:
            with self.db.transaction():
                row = self.db.fetchone("SELECT paid FROM expenses WHERE id = %s;", (expense_id,))
                if row is None:
                    return None
                # NULL reads as paid, see _row_to_expense
                current = 1 if row[0] is None else int(row[0])
                new_paid = 0 if current == 1 else 1
                self.db.execute("UPDATE expenses SET paid = %s WHERE id = %s;", (new_paid, expense_id))
        except Exception as e:
            logger.error(f"Failed to toggle paid for expense #{expense_id}: {e}")
            raise
        logger.info(f"Expense #{expense_id} marked {'paid' if new_paid else 'unpaid'}")
        return new_paid

    # ── DELETE ────────────────────────────────────────────

    def delete(self, expense_id: int) -> bool:
        """
        Delete an expense by ID.

        Returns:
            True if a row was deleted, False otherwise.
        """
        try:
            with self.db.transaction():
                deleted = self.db.execute("DELETE FROM expenses WHERE id = %s;", (expense_id,)) > 0
        except Exception as e:
            logger.error(f"Failed to delete expense #{expense_id}: {e}")
            raise
        if deleted:
            logger.info(f"Deleted expense #{expense_id}")
        return deleted

    # ── HELPERS ───────────────────────────────────────────

    @staticmethod
    def _row_to_expense(row: tuple) -> Expense:
        """Convert a database row tuple to an Expense domain object."""
        return Expense(
            id=row[0],
            title=row[1],
            amount=float(row[2]),
            category=row[3],
            paid=1 if row[4] is None else int(row[4]),
            created_at=int(row[5]) if row[5] is not None else 0,
        )
