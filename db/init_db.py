"""
db/init_db.py
-------------
Creates the expenses table if it does not already exist and seeds it
with a couple of example rows when it is empty.
Run this module directly to initialize the configured database:
    python -m db.init_db
"""

from db.connection import POSTGRESQL, Database
from utils.logger import get_logger

logger = get_logger(__name__)

SCHEMA_SQL = {
    "sqlite": [
        """
        CREATE TABLE IF NOT EXISTS expenses (
            id          INTEGER PRIMARY KEY AUTOINCREMENT,
            title       TEXT NOT NULL,
            amount      REAL NOT NULL,
            category    TEXT,
            paid        INTEGER DEFAULT 1,
            created_at  INTEGER
        );
        """,
        "CREATE INDEX IF NOT EXISTS idx_expenses_created_at ON expenses(created_at);",
    ],
    POSTGRESQL: [
        """
        CREATE TABLE IF NOT EXISTS expenses (
            id          SERIAL PRIMARY KEY,
            title       TEXT NOT NULL,
            amount      DOUBLE PRECISION NOT NULL,
            category    TEXT,
            paid        INTEGER DEFAULT 1,
            created_at  BIGINT
        );
        """,
        "CREATE INDEX IF NOT EXISTS idx_expenses_created_at ON expenses(created_at);",
    ],
}

# (title, amount, category) inserted with paid = 1
SEED_EXPENSES = [
    ("Cà phê", 30000.0, "Đồ uống"),
    ("Ăn trưa", 50000.0, "Ăn uống"),
]


def create_tables(db: Database) -> None:
    """
    Execute the schema SQL for the handle's dialect.
    Safe to call multiple times (uses IF NOT EXISTS).
    """
    try:
        with db.transaction():
            for statement in SCHEMA_SQL[db.dialect]:
                db.execute(statement)
        logger.info("Database schema initialized successfully.")
    except Exception as e:
        logger.error(f"Failed to initialize schema: {e}")
        raise


def seed_if_empty(db: Database, now_ms: int) -> int:
    """
    Insert SEED_EXPENSES when the table holds no rows.

    An emptied table cannot be told apart from a fresh one, so deleting
    every expense leads to a re-seed on the next start.

    Returns:
        The number of rows inserted (0 when the table already had data).
    """
    with db.transaction():
        (count,) = db.fetchone("SELECT COUNT(*) FROM expenses;")
        if count:
            return 0
        for title, amount, category in SEED_EXPENSES:
            db.insert(
                "INSERT INTO expenses (title, amount, category, paid, created_at) "
                "VALUES (%s, %s, %s, %s, %s);",
                (title, amount, category, 1, now_ms),
            )
    logger.info(f"Seeded {len(SEED_EXPENSES)} example expenses.")
    return len(SEED_EXPENSES)


if __name__ == "__main__":
    from db.connection import connect
    from repositories.expense_repo import ExpenseRepository

    database = connect()
    seeded = ExpenseRepository(database).initialize()
    database.close()
    print(f"✅ Database schema ready ({seeded} example rows seeded).")
