"""Shared pytest fixtures for sakledger tests."""

import tempfile
import os
from datetime import date
import pytest

from sakledger.database.factories import create_sqlite_store
from sakledger.database.memory import InMemoryStore
from sakledger.domain.chart_of_accounts import ChartOfAccountsService
from sakledger.domain.journal import JournalService
from sakledger.domain.statements import FinancialStatementService
from sakledger.domain.tax import TaxService
from sakledger.domain.trial_balance import TrialBalanceService
from sakledger.logging_config import reset_logging


@pytest.fixture(autouse=True)
def _reset_logging():
    """Undo logging configuration done by CLI invocations."""
    yield
    reset_logging()


@pytest.fixture
def temp_store():
    """Create a temporary SQLite store for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    store = create_sqlite_store(database_path=db_path)
    # Store the path for tests that need it
    store.database_path = db_path
    store.connect()
    store.initialize_schema()

    yield store

    store.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def memory_store():
    """Create an in-memory store."""
    return InMemoryStore()


@pytest.fixture
def chart_service(temp_store):
    """Create a ChartOfAccountsService with a seeded chart."""
    service = ChartOfAccountsService(temp_store)
    service.initialize()
    return service


@pytest.fixture
def journal_service(temp_store, chart_service):
    """Create a JournalService over the seeded chart."""
    return JournalService(temp_store)


@pytest.fixture
def trial_balance_service(temp_store, chart_service):
    """Create a TrialBalanceService over the seeded chart."""
    return TrialBalanceService(temp_store)


@pytest.fixture
def statement_service(temp_store, chart_service):
    """Create a FinancialStatementService over the seeded chart."""
    return FinancialStatementService(temp_store)


@pytest.fixture
def tax_service(temp_store):
    """Create a TaxService with the default rates seeded."""
    service = TaxService(temp_store)
    service.initialize()
    return service


@pytest.fixture
def post_entry(journal_service):
    """Return a helper that creates and posts a two-line entry."""

    def _post(debit_account, credit_account, amount, entry_date=date(2024, 1, 15), **kwargs):
        entry = journal_service.create_entry(
            date=entry_date,
            lines=[
                {"account_id": debit_account, "debit": amount, "credit": 0},
                {"account_id": credit_account, "debit": 0, "credit": amount},
            ],
            **kwargs,
        )
        return journal_service.post(entry.id)

    return _post


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
