"""Shared pytest fixtures for moneysaver tests."""

import tempfile
import os
from datetime import datetime, timedelta, UTC
from decimal import Decimal
import pytest

from moneysaver.database.factories import create_sqlite_database
from moneysaver.domain.queries import LedgerQueries
from moneysaver.domain.settings import SettingsService
from moneysaver.domain.store import LedgerStore


class FakeClock:
    """Callable clock that advances one minute per call."""

    def __init__(self, start: datetime):
        self.current = start

    def __call__(self) -> datetime:
        value = self.current
        self.current = self.current + timedelta(minutes=1)
        return value


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    # Create database
    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def clock():
    """Deterministic clock starting at 2024-01-15 09:00 UTC."""
    return FakeClock(datetime(2024, 1, 15, 9, 0, tzinfo=UTC))


@pytest.fixture
def store(temp_db, clock):
    """Create a LedgerStore loaded from a temporary database."""
    ledger_store = LedgerStore(temp_db, clock=clock)
    ledger_store.load()
    return ledger_store


@pytest.fixture
def queries(store):
    """Create LedgerQueries over the store."""
    return LedgerQueries(store)


@pytest.fixture
def settings_service(store):
    """Create a SettingsService over the store."""
    return SettingsService(store)


@pytest.fixture
def wallet(store):
    """Create a cash account with balance 100."""
    return store.create_account(name="Wallet", balance=Decimal("100"), type="cash")


@pytest.fixture
def savings(store):
    """Create a bank account with balance 50."""
    return store.create_account(name="Savings", balance=Decimal("50"), type="bank")


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture
def cli_args(temp_db):
    """Leading CLI arguments pointing at the temporary database."""
    return ["--db-path", temp_db.database_path]
