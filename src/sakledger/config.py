"""Runtime configuration for sakledger services."""

import os
from dataclasses import dataclass
from decimal import Decimal
from pathlib import Path
from typing import Optional

DB_PATH_ENV_VAR = "SAKLEDGER_DB_PATH"


@dataclass(frozen=True)
class LedgerConfig:
    """Storage keys and numeric tolerances shared by all services.

    Every service receives one of these at construction instead of reading
    module-level constants, so two ledgers can live in the same store under
    different keys.
    """

    accounts_key: str = "sak_etap_accounts"
    journals_key: str = "sak_etap_journals"
    tax_rates_key: str = "indonesian_tax_configs"
    balance_tolerance: Decimal = Decimal("0.01")

    def storage_keys(self) -> tuple[str, ...]:
        """Return every key this configuration writes to."""
        return (self.accounts_key, self.journals_key, self.tax_rates_key)


DEFAULT_CONFIG = LedgerConfig()


def resolve_database_path(database_path: Optional[str] = None) -> str:
    """Resolve the SQLite database path.

    Args:
        database_path: Explicit path. If None, checks SAKLEDGER_DB_PATH
            environment variable, then defaults to ~/.sakledger/sakledger.db

    Returns:
        Filesystem path to the database file
    """
    if database_path is None:
        database_path = os.environ.get(DB_PATH_ENV_VAR)

    if database_path is None:
        db_dir = Path.home() / ".sakledger"
        db_dir.mkdir(exist_ok=True)
        database_path = str(db_dir / "sakledger.db")

    return database_path
