"""
Shared fixtures: an in-memory SQLite database and a controllable clock.
No network and no Telegram in tests.
"""

import pytest

from db.connection import connect
from repositories.expense_repo import ExpenseRepository
from services.expense_service import ExpenseService
from services.import_service import ImportService


class FakeClock:
    """Returns 1_700_000_000_000, then +1000 ms on every call."""

    def __init__(self, start: int = 1_700_000_000_000, step: int = 1000):
        self.now = start - step
        self.step = step

    def __call__(self) -> int:
        self.now += self.step
        return self.now


@pytest.fixture
def db():
    database = connect("sqlite:///:memory:")
    yield database
    database.close()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def repo(db, clock):
    """Initialized repository over an empty (unseeded) table."""
    repository = ExpenseRepository(db, clock=clock, seed_on_empty=False)
    repository.initialize()
    return repository


@pytest.fixture
def expense_service(repo):
    return ExpenseService(repo)


@pytest.fixture
def import_service(repo):
    return ImportService(repo, default_url="https://api.example.test/expenses", timeout=None)
